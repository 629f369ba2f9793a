from drf_spectacular.utils import OpenApiParameter, extend_schema, extend_schema_view
from rest_framework import status, viewsets
from rest_framework.decorators import action
from rest_framework.permissions import IsAuthenticated
from rest_framework.response import Response

from payroll_desk.audit.models import AuditLog
from payroll_desk.audit.services import record_change, snapshot
from payroll_desk.common.exceptions import InvalidParams
from payroll_desk.payroll.api.serializers import (
    OvertimeEntrySerializer,
    PayrollBatchItemSerializer,
    PayrollEntrySerializer,
    PayrollEntryUpdateSerializer,
)
from payroll_desk.payroll.services import overtime, reconciliation
from payroll_desk.users.permissions import IsAdminOrClerk

PERIOD_PARAMETERS = [
    OpenApiParameter("month", int, OpenApiParameter.QUERY, required=True, description="1-12"),
    OpenApiParameter("year", int, OpenApiParameter.QUERY, required=True, description="2000-2100"),
]


def parse_period(query_params):
    try:
        return int(query_params["month"]), int(query_params["year"])
    except (KeyError, TypeError, ValueError):
        raise InvalidParams(details={"month": ["Required integer."], "year": ["Required integer."]})


def entry_label(entry):
    return f"{entry.employee.full_name} - Payroll {entry.month:02d}/{entry.year}"


@extend_schema_view(
    list=extend_schema(
        tags=["Payroll"],
        summary="Payroll sheet for a period",
        description=(
            "Returns one entry per employee active in the period, ordered by sort order and name. "
            "Missing entries are created on first view with days worked set to the employee's working days."
        ),
        parameters=PERIOD_PARAMETERS,
        responses=PayrollEntrySerializer(many=True),
    ),
    retrieve=extend_schema(
        tags=["Payroll"],
        summary="Retrieve a payroll entry",
        responses=PayrollEntrySerializer,
    ),
    update=extend_schema(
        tags=["Payroll"],
        summary="Update a payroll entry",
        description=(
            "Merges the given fields, recomputes the official/cash split and clamps both advances "
            "to their channel base. Send `version` to reject the write if someone else changed the entry."
        ),
        request=PayrollEntryUpdateSerializer,
        responses=PayrollEntrySerializer,
    ),
    partial_update=extend_schema(
        tags=["Payroll"],
        summary="Partially update a payroll entry",
        request=PayrollEntryUpdateSerializer,
        responses=PayrollEntrySerializer,
    ),
)
class PayrollEntryViewSet(viewsets.ViewSet):
    permission_classes = [IsAuthenticated, IsAdminOrClerk]

    def list(self, request):
        month, year = parse_period(request.query_params)
        entries = reconciliation.get_period_entries(month, year)
        return Response(PayrollEntrySerializer(entries, many=True).data)

    def retrieve(self, request, pk=None):
        entry = reconciliation.get_entry(pk)
        return Response(PayrollEntrySerializer(entry).data)

    def update(self, request, pk=None):
        serializer = PayrollEntryUpdateSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        changes = dict(serializer.validated_data)
        version = changes.pop("version", None)

        before, entry = reconciliation.update_entry(pk, changes, expected_version=version)
        record_change(
            request.user,
            AuditLog.UPDATE,
            AuditLog.PAYROLL,
            entry.pk,
            entry_label(entry),
            old_data=before,
            new_data=snapshot(entry),
        )
        return Response(PayrollEntrySerializer(entry).data)

    def partial_update(self, request, pk=None):
        return self.update(request, pk=pk)

    @extend_schema(
        tags=["Payroll"],
        summary="Batch update payroll entries",
        description=(
            "Upserts each (employee, month, year) slot. All items are validated and every employee "
            "resolved before anything is written; one failure rejects the whole batch."
        ),
        request=PayrollBatchItemSerializer(many=True),
        responses=PayrollEntrySerializer(many=True),
    )
    @action(detail=False, methods=["post"])
    def batch(self, request):
        serializer = PayrollBatchItemSerializer(data=request.data, many=True, allow_empty=False)
        serializer.is_valid(raise_exception=True)
        items = [dict(item) for item in serializer.validated_data]

        entries = reconciliation.batch_update(items)

        first = items[0]
        fields_updated = sorted({
            field for item in items for field in item
            if field not in ("employee_id", "month", "year")
        })
        record_change(
            request.user,
            AuditLog.UPDATE,
            AuditLog.PAYROLL,
            f"BATCH_{first['year']}_{first['month']}",
            f"Payroll - {first['month']:02d}/{first['year']} (batch)",
            new_data={
                "month": first["month"],
                "year": first["year"],
                "updated_count": len(items),
                "fields_updated": fields_updated,
            },
        )
        return Response(PayrollEntrySerializer(entries, many=True).data)


@extend_schema_view(
    list=extend_schema(
        tags=["Payroll - Overtime"],
        summary="List overtime entries for a period",
        parameters=[
            *PERIOD_PARAMETERS,
            OpenApiParameter("employee_id", str, OpenApiParameter.QUERY, required=False),
        ],
        responses=OvertimeEntrySerializer(many=True),
    ),
    create=extend_schema(
        tags=["Payroll - Overtime"],
        summary="Record overtime",
        description=(
            "Stores the entry and adds its amount to the matching overtime field of the period's "
            "payroll entry (created if missing) in one transaction."
        ),
        request=OvertimeEntrySerializer,
        responses={201: OvertimeEntrySerializer},
    ),
    destroy=extend_schema(
        tags=["Payroll - Overtime"],
        summary="Delete an overtime entry",
        description="Removes the entry and subtracts its amount from the payroll entry, never below zero.",
        responses={204: None},
    ),
)
class OvertimeEntryViewSet(viewsets.ViewSet):
    permission_classes = [IsAuthenticated, IsAdminOrClerk]

    def list(self, request):
        month, year = parse_period(request.query_params)
        entries = overtime.list_overtime_entries(
            month, year, employee_id=request.query_params.get("employee_id") or None
        )
        return Response(OvertimeEntrySerializer(entries, many=True).data)

    def create(self, request):
        serializer = OvertimeEntrySerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        entry = overtime.create_overtime_entry(**serializer.validated_data)

        record_change(
            request.user,
            AuditLog.UPDATE,
            AuditLog.PAYROLL,
            entry.pk,
            f"{entry.employee.full_name} - Overtime",
            new_data=snapshot(entry),
        )
        return Response(OvertimeEntrySerializer(entry).data, status=status.HTTP_201_CREATED)

    def destroy(self, request, pk=None):
        entry = overtime.delete_overtime_entry(pk)

        record_change(
            request.user,
            AuditLog.DELETE,
            AuditLog.PAYROLL,
            pk,
            f"{entry.employee.full_name} - Overtime",
            old_data=snapshot(entry),
        )
        return Response(status=status.HTTP_204_NO_CONTENT)
