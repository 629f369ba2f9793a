import logging

from django.core.exceptions import PermissionDenied
from django.http import Http404
from rest_framework import exceptions, status
from rest_framework.response import Response
from rest_framework.views import exception_handler, set_rollback

logger = logging.getLogger(__name__)


class PayrollDeskError(exceptions.APIException):
    """Base for domain errors. Carries a stable ``code`` and field-level ``details``."""
    status_code = status.HTTP_400_BAD_REQUEST
    default_code = "ERROR"
    default_detail = "Request could not be processed."

    def __init__(self, detail=None, details=None, code=None):
        super().__init__(detail=detail, code=code)
        self.code = code or self.default_code
        self.details = details or {}


class ValidationFailed(PayrollDeskError):
    default_code = "VALIDATION_ERROR"
    default_detail = "Invalid data."


class InvalidMonth(PayrollDeskError):
    default_code = "INVALID_MONTH"
    default_detail = "Month must be between 1 and 12."


class InvalidYear(PayrollDeskError):
    default_code = "INVALID_YEAR"
    default_detail = "Year must be between 2000 and 2100."


class InvalidParams(PayrollDeskError):
    default_code = "INVALID_PARAMS"
    default_detail = "Month and year parameters are required."


class ResourceNotFound(PayrollDeskError):
    status_code = status.HTTP_404_NOT_FOUND
    default_code = "NOT_FOUND"
    default_detail = "Resource not found."


class PayrollEntryNotFound(ResourceNotFound):
    default_code = "PAYROLL_NOT_FOUND"
    default_detail = "Payroll entry not found."


class OvertimeEntryNotFound(ResourceNotFound):
    default_code = "OVERTIME_NOT_FOUND"
    default_detail = "Overtime entry not found."


class TrafficFineNotFound(ResourceNotFound):
    default_code = "TRAFFIC_FINE_NOT_FOUND"
    default_detail = "Traffic fine not found."


class EmployeeNotFound(ResourceNotFound):
    default_code = "EMPLOYEE_NOT_FOUND"
    default_detail = "Employee not found."


class StaleEntry(PayrollDeskError):
    status_code = status.HTTP_409_CONFLICT
    default_code = "CONFLICT"
    default_detail = "The entry was modified by someone else. Reload and try again."


class InvalidCredentials(PayrollDeskError):
    status_code = status.HTTP_401_UNAUTHORIZED
    default_code = "INVALID_CREDENTIALS"
    default_detail = "Invalid username or password."


def flatten_errors(detail, prefix=""):
    """Collapse nested serializer errors into ``{"items.0.month": [...]}``."""
    if isinstance(detail, dict):
        flat = {}
        for key, value in detail.items():
            flat.update(flatten_errors(value, f"{prefix}.{key}" if prefix else str(key)))
        return flat
    if isinstance(detail, list):
        if all(not isinstance(item, (dict, list)) for item in detail):
            return {prefix or "non_field_errors": [str(item) for item in detail]}
        flat = {}
        for index, item in enumerate(detail):
            flat.update(flatten_errors(item, f"{prefix}.{index}" if prefix else str(index)))
        return flat
    return {prefix or "non_field_errors": [str(detail)]}


def _body(status_code, code, message, details=None):
    return {
        "status": status_code,
        "code": code,
        "message": message,
        "details": details or {},
    }


def api_exception_handler(exc, context):
    """Render every API error as ``{status, code, message, details}``."""
    response = exception_handler(exc, context)

    if response is None:
        view = context.get("view")
        logger.error(
            "Unhandled error in %s",
            view.__class__.__name__ if view else "unknown view",
            exc_info=(type(exc), exc, exc.__traceback__),
        )
        set_rollback()
        return Response(
            _body(500, "INTERNAL_ERROR", "Internal server error."),
            status=status.HTTP_500_INTERNAL_SERVER_ERROR,
        )

    if isinstance(exc, PayrollDeskError):
        response.data = _body(exc.status_code, exc.code, str(exc.detail), exc.details)
    elif isinstance(exc, exceptions.ValidationError):
        response.data = _body(
            response.status_code, "VALIDATION_ERROR", "Invalid data.", flatten_errors(exc.detail)
        )
    elif isinstance(exc, Http404):
        response.data = _body(response.status_code, "NOT_FOUND", "Resource not found.")
    elif isinstance(exc, PermissionDenied):
        response.data = _body(response.status_code, "PERMISSION_DENIED", "You do not have permission to perform this action.")
    else:
        detail = getattr(exc, "detail", "")
        code = getattr(exc, "default_code", "error")
        response.data = _body(response.status_code, str(code).upper(), str(detail))

    return response
