import logging
import uuid
from decimal import Decimal, InvalidOperation

from django.core.exceptions import ValidationError as DjangoValidationError
from django.db import transaction

from payroll_desk.common.exceptions import EmployeeNotFound, OvertimeEntryNotFound, ValidationFailed
from payroll_desk.employees.models import Employee
from payroll_desk.payroll.models import OvertimeEntry, PayrollEntry
from payroll_desk.payroll.selectors import payroll_queries
from payroll_desk.payroll.services.calculation import MONEY_LIMIT, ZERO, money, to_decimal
from payroll_desk.payroll.services.reconciliation import apply_split, ensure_storable, validate_period

logger = logging.getLogger(__name__)

DESCRIPTION_MAX_LENGTH = 100
# Exclusive upper bounds matching the OvertimeEntry decimal columns.
UPPER_BOUNDS = {
    "multiplier": (Decimal("1000"), 3),
    "hours": (Decimal("10000"), 4),
    "amount": (MONEY_LIMIT, 10),
}


def list_overtime_entries(month, year, employee_id=None):
    validate_period(month, year)
    if employee_id:
        try:
            employee_id = uuid.UUID(str(employee_id))
        except ValueError:
            raise ValidationFailed(details={"employee_id": ["Must be a valid UUID."]})
    return payroll_queries.get_overtime_entries(month, year, employee_id)


def _validate_overtime(overtime_type, multiplier, hours, amount, description):
    errors = {}
    if overtime_type not in OvertimeEntry.PAYROLL_FIELD:
        errors["overtime_type"] = ["Must be OVERTIME_50 or OVERTIME_100."]
    for field, value in (("multiplier", multiplier), ("hours", hours), ("amount", amount)):
        try:
            number = None if value is None else to_decimal(value)
            positive = number is not None and number > 0
        except InvalidOperation:
            positive = False
        if not positive:
            errors[field] = ["Ensure this value is greater than 0."]
            continue
        limit, digits = UPPER_BOUNDS[field]
        if not number.is_finite() or number >= limit:
            errors[field] = [f"Ensure that there are no more than {digits} digits before the decimal point."]
    if description and len(description) > DESCRIPTION_MAX_LENGTH:
        errors["description"] = [f"Ensure this field has no more than {DESCRIPTION_MAX_LENGTH} characters."]
    if errors:
        raise ValidationFailed(details=errors)


def create_overtime_entry(employee_id, entry_date, month, year, overtime_type, multiplier, hours, amount, description=None):
    """
    Record overtime and add its amount to the period's payroll entry.

    The amount is taken as given; it is priced by the caller from the hourly
    wage. Both writes happen in one transaction.
    """
    validate_period(month, year)
    _validate_overtime(overtime_type, multiplier, hours, amount, description)

    try:
        employee = Employee.objects.get(pk=employee_id)
    except (Employee.DoesNotExist, DjangoValidationError, ValueError):
        raise EmployeeNotFound(details={"employee_id": [str(employee_id)]})

    amount = money(amount)
    with transaction.atomic():
        entry = OvertimeEntry.objects.create(
            employee=employee,
            entry_date=entry_date,
            month=month,
            year=year,
            overtime_type=overtime_type,
            multiplier=to_decimal(multiplier),
            hours=to_decimal(hours),
            amount=amount,
            description=description or None,
        )

        payroll, created = PayrollEntry.objects.select_for_update(of=("self",)).get_or_create(
            employee=employee,
            month=month,
            year=year,
            defaults={"days_worked": employee.working_days},
        )
        field = entry.payroll_field
        setattr(payroll, field, money(getattr(payroll, field) + amount))
        apply_split(payroll, employee)
        ensure_storable(payroll, employee, ["amount"])
        if not created:
            payroll.version += 1
        payroll.save()

    logger.info(
        "Overtime %s of %s added for %s in %02d/%d",
        overtime_type, amount, employee, month, year,
    )
    return entry


def delete_overtime_entry(entry_id):
    """
    Delete an overtime entry and take its amount back off the payroll entry.

    The payroll field never goes below zero. Hitting the floor means the entry
    was edited out of band and is logged as drift.
    """
    with transaction.atomic():
        try:
            entry = (
                OvertimeEntry.objects.select_for_update(of=("self",))
                .select_related("employee")
                .get(pk=entry_id)
            )
        except (OvertimeEntry.DoesNotExist, DjangoValidationError, ValueError):
            raise OvertimeEntryNotFound()

        payroll = (
            PayrollEntry.objects.select_for_update(of=("self",))
            .filter(employee_id=entry.employee_id, month=entry.month, year=entry.year)
            .order_by()
            .first()
        )
        if payroll is not None:
            field = entry.payroll_field
            remaining = getattr(payroll, field) - entry.amount
            if remaining < ZERO:
                logger.warning(
                    "Overtime drift on payroll entry %s: %s would drop to %s, clamping to 0",
                    payroll.pk, field, remaining,
                )
                remaining = ZERO
            setattr(payroll, field, money(remaining))
            apply_split(payroll, entry.employee)
            payroll.version += 1
            payroll.save()

        entry.delete()

    logger.info("Overtime entry %s deleted", entry_id)
    return entry
