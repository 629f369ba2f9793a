"""
Payroll entry reconciliation.

Keeps exactly one PayrollEntry per (employee, month, year), creates missing
rows when a period is opened, and re-runs the split engine on every write so
the stored official/cash payments and clamped advances never go stale.
"""
import logging
import uuid
from decimal import Decimal, InvalidOperation

from django.core.exceptions import ValidationError as DjangoValidationError
from django.db import transaction

from payroll_desk.audit.services import snapshot
from payroll_desk.common.exceptions import (
    EmployeeNotFound,
    InvalidMonth,
    InvalidYear,
    PayrollEntryNotFound,
    StaleEntry,
    ValidationFailed,
)
from payroll_desk.employees.models import Employee
from payroll_desk.payroll.models import PayrollEntry
from payroll_desk.payroll.selectors import payroll_queries
from payroll_desk.payroll.services.calculation import MONEY_LIMIT, calculate_payroll, money
from payroll_desk.payroll.services.split import compute_bases, compute_split, split_for

logger = logging.getLogger(__name__)

MONEY_FIELDS = ("advance", "official_advance", "overtime50", "overtime100")
INTEGER_BOUNDS = {
    "days_worked": (0, 31),
    "sort_order": (0, None),
}
EDITABLE_FIELDS = ("days_worked", "sort_order", *MONEY_FIELDS)
# Fields whose change invalidates the cached split.
SPLIT_DRIVERS = ("days_worked", "advance", "official_advance", "overtime50", "overtime100")
STORED_MONEY_FIELDS = (*MONEY_FIELDS, "official_payment", "cash_payment")
WHOLE_DIGITS_MESSAGE = "Ensure that there are no more than 10 digits before the decimal point."


def validate_period(month, year):
    if isinstance(month, bool) or not isinstance(month, int) or not 1 <= month <= 12:
        raise InvalidMonth(details={"month": ["Month must be between 1 and 12."]})
    if isinstance(year, bool) or not isinstance(year, int) or not 2000 <= year <= 2100:
        raise InvalidYear(details={"year": ["Year must be between 2000 and 2100."]})


def clean_changes(changes, prefix=""):
    """Validate and normalise the editable fields present in ``changes``."""
    cleaned = {}
    errors = {}

    for field, (low, high) in INTEGER_BOUNDS.items():
        if field not in changes:
            continue
        key = f"{prefix}{field}"
        try:
            number = Decimal(str(changes[field]))
        except InvalidOperation:
            errors[key] = ["A valid integer is required."]
            continue
        if not number.is_finite() or number != number.to_integral_value():
            errors[key] = ["A valid integer is required."]
            continue
        number = int(number)
        if number < low or (high is not None and number > high):
            if high is None:
                errors[key] = [f"Ensure this value is greater than or equal to {low}."]
            else:
                errors[key] = [f"Ensure this value is between {low} and {high}."]
            continue
        cleaned[field] = number

    for field in MONEY_FIELDS:
        if field not in changes:
            continue
        key = f"{prefix}{field}"
        try:
            value = Decimal(str(changes[field]))
        except InvalidOperation:
            errors[key] = ["A valid number is required."]
            continue
        if not value.is_finite():
            errors[key] = ["A valid number is required."]
            continue
        if value < 0:
            errors[key] = ["Ensure this value is greater than or equal to 0."]
            continue
        try:
            value = money(value)
        except InvalidOperation:
            errors[key] = ["A valid number is required."]
            continue
        if value >= MONEY_LIMIT:
            errors[key] = [WHOLE_DIGITS_MESSAGE]
            continue
        cleaned[field] = value

    if errors:
        raise ValidationFailed(details=errors)
    return cleaned


def with_calculations(entry):
    """Attach derived figures and recompute the cached split for display."""
    employee = entry.employee
    result = calculate_payroll(
        employee.salary,
        employee.working_days,
        entry.days_worked,
        advance=entry.advance,
        official_advance=entry.official_advance,
        overtime50=entry.overtime50,
        overtime100=entry.overtime100,
    )
    bases = compute_bases(
        employee.is_insured,
        employee.salary,
        employee.working_days,
        entry.days_worked,
        entry.overtime50,
        entry.overtime100,
    )
    split = compute_split(bases, entry.advance, entry.official_advance, employee.is_insured)

    entry.daily_wage = money(result["daily_wage"])
    entry.earned_salary = money(result["earned_salary"])
    entry.total_receivable = money(result["total_receivable"])
    entry.official_payment = split.official_payment
    entry.cash_payment = split.cash_payment
    return entry


def apply_split(entry, employee):
    """Clamp the entry's advances against fresh bases and store the new split."""
    result = split_for(
        employee,
        entry.days_worked,
        entry.overtime50,
        entry.overtime100,
        entry.advance,
        entry.official_advance,
    )
    entry.advance = result.advance
    entry.official_advance = result.official_advance
    entry.official_payment = result.official_payment
    entry.cash_payment = result.cash_payment
    return entry


def ensure_storable(entry, employee, fields):
    """
    Reject an entry whose stored or displayed amounts overflow the money columns.

    Runs after ``apply_split`` and before the save; ``fields`` are the input
    keys named in the error.
    """
    result = calculate_payroll(
        employee.salary,
        employee.working_days,
        entry.days_worked,
        advance=entry.advance,
        official_advance=entry.official_advance,
        overtime50=entry.overtime50,
        overtime100=entry.overtime100,
    )
    amounts = [getattr(entry, field) for field in STORED_MONEY_FIELDS]
    amounts += [result["earned_salary"], result["total_receivable"]]
    if any(money(amount) >= MONEY_LIMIT for amount in amounts):
        message = f"Ensure the period totals stay below {MONEY_LIMIT}."
        raise ValidationFailed(details={field: [message] for field in fields})


def _lookup_entry(queryset, entry_id):
    try:
        return queryset.get(pk=entry_id)
    except (PayrollEntry.DoesNotExist, DjangoValidationError, ValueError):
        raise PayrollEntryNotFound()


def get_period_entries(month, year):
    validate_period(month, year)

    active = list(payroll_queries.get_active_employees(month, year))
    existing = set(
        PayrollEntry.objects.filter(month=month, year=year).values_list("employee_id", flat=True)
    )

    missing = []
    for employee in active:
        if employee.id in existing:
            continue
        entry = PayrollEntry(
            employee=employee,
            month=month,
            year=year,
            days_worked=employee.working_days,
            sort_order=0,
        )
        missing.append(apply_split(entry, employee))

    if missing:
        # A concurrent fetch may have created some of these already.
        PayrollEntry.objects.bulk_create(missing, ignore_conflicts=True)
        logger.info("Opened %d payroll entries for %02d/%d", len(missing), month, year)

    entries = payroll_queries.get_period_entries(month, year, [employee.id for employee in active])
    return [with_calculations(entry) for entry in entries]


def get_entry(entry_id):
    entry = _lookup_entry(PayrollEntry.objects.select_related("employee"), entry_id)
    return with_calculations(entry)


def update_entry(entry_id, changes, expected_version=None):
    """
    Merge ``changes`` into an entry under a row lock.

    Returns ``(before, entry)`` where ``before`` is the pre-update snapshot for
    the audit trail. Raises StaleEntry when ``expected_version`` is given and no
    longer matches.
    """
    cleaned = clean_changes(changes)

    with transaction.atomic():
        entry = _lookup_entry(
            PayrollEntry.objects.select_for_update(of=("self",)).select_related("employee"), entry_id
        )
        if expected_version is not None and int(expected_version) != entry.version:
            raise StaleEntry(details={"version": [f"Current version is {entry.version}."]})

        before = snapshot(entry)
        for field, value in cleaned.items():
            setattr(entry, field, value)
        apply_split(entry, entry.employee)
        drivers = [field for field in SPLIT_DRIVERS if field in cleaned]
        ensure_storable(entry, entry.employee, drivers or ["days_worked"])
        entry.version += 1
        entry.save()

    logger.info(
        "Payroll entry %s updated (%s), version %d",
        entry.pk,
        ", ".join(sorted(cleaned)) or "no fields",
        entry.version,
    )
    return before, with_calculations(entry)


def _employee_key(value, index):
    try:
        return uuid.UUID(str(value))
    except (TypeError, ValueError):
        raise ValidationFailed(details={f"{index}.employee_id": ["Must be a valid UUID."]})


def batch_update(items):
    """
    Upsert many (employee, month, year) slots in one transaction.

    All-or-nothing: every item is validated and every employee resolved before
    the first write.
    """
    prepared = []
    for index, item in enumerate(items):
        month, year = item.get("month"), item.get("year")
        try:
            validate_period(month, year)
        except (InvalidMonth, InvalidYear) as exc:
            exc.details = {f"{index}.{field}": messages for field, messages in exc.details.items()}
            raise
        prepared.append((
            _employee_key(item.get("employee_id"), index),
            month,
            year,
            clean_changes(item, prefix=f"{index}."),
        ))

    employees = Employee.objects.in_bulk([employee_id for employee_id, *_ in prepared])
    missing = [str(employee_id) for employee_id, *_ in prepared if employee_id not in employees]
    if missing:
        raise EmployeeNotFound(
            f"Employee {missing[0]} not found.",
            details={"employee_id": sorted(set(missing))},
        )

    results = []
    with transaction.atomic():
        for index, (employee_id, month, year, changes) in enumerate(prepared):
            employee = employees[employee_id]
            entry, created = PayrollEntry.objects.select_for_update(of=("self",)).get_or_create(
                employee=employee,
                month=month,
                year=year,
                defaults={"days_worked": 0},
            )
            for field, value in changes.items():
                setattr(entry, field, value)
            drivers = [field for field in SPLIT_DRIVERS if field in changes]
            if drivers:
                apply_split(entry, employee)
                ensure_storable(entry, employee, [f"{index}.{field}" for field in drivers])
            if not created:
                entry.version += 1
            entry.save()
            entry.employee = employee
            results.append(entry)

    logger.info("Batch updated %d payroll entries", len(results))
    return [with_calculations(entry) for entry in results]
