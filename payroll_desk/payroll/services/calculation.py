from decimal import Decimal, ROUND_HALF_UP

from payroll_desk.common.exceptions import ValidationFailed

ZERO = Decimal("0")
CENT = Decimal("0.01")
# Exclusive upper bound of a DecimalField(max_digits=12, decimal_places=2).
MONEY_LIMIT = Decimal("10000000000")


def to_decimal(value) -> Decimal:
    if isinstance(value, Decimal):
        return value
    if value is None:
        return ZERO
    return Decimal(str(value))


def money(value) -> Decimal:
    return to_decimal(value).quantize(CENT, rounding=ROUND_HALF_UP)


def ensure_non_negative(field: str, value) -> Decimal:
    value = to_decimal(value)
    if value < 0:
        raise ValidationFailed(
            f"{field} cannot be negative.",
            details={field: ["Ensure this value is greater than or equal to 0."]},
        )
    return value


def calculate_daily_wage(salary, working_days_base) -> Decimal:
    """
    Daily wage = salary / working days base.
    Not rounded; callers round at the point they store or display money.
    """
    if working_days_base is None or int(working_days_base) <= 0:
        raise ValidationFailed(
            "Working days base must be greater than zero.",
            details={"working_days": ["Ensure this value is greater than 0."]},
        )
    salary = ensure_non_negative("salary", salary)
    return salary / Decimal(int(working_days_base))


def calculate_earned_salary(daily_wage, days_worked) -> Decimal:
    daily_wage = ensure_non_negative("daily_wage", daily_wage)
    days_worked = ensure_non_negative("days_worked", days_worked)
    return daily_wage * days_worked


def calculate_total_receivable(earned_salary, overtime50, overtime100, advance) -> Decimal:
    """
    earned + overtime50 + overtime100 - advance.

    ``advance`` is the sum of the cash and official advances. The official/cash
    payments are allocations of this figure and are never subtracted from it.
    """
    overtime50 = ensure_non_negative("overtime50", overtime50)
    overtime100 = ensure_non_negative("overtime100", overtime100)
    advance = ensure_non_negative("advance", advance)
    return to_decimal(earned_salary) + overtime50 + overtime100 - advance


def calculate_payroll(
    salary,
    working_days_base,
    days_worked,
    advance=ZERO,
    official_advance=ZERO,
    overtime50=ZERO,
    overtime100=ZERO,
) -> dict:
    # Reject every negative input before doing any arithmetic.
    for field, value in (
        ("salary", salary),
        ("days_worked", days_worked),
        ("advance", advance),
        ("official_advance", official_advance),
        ("overtime50", overtime50),
        ("overtime100", overtime100),
    ):
        ensure_non_negative(field, value)

    daily_wage = calculate_daily_wage(salary, working_days_base)
    earned_salary = calculate_earned_salary(daily_wage, days_worked)
    total_receivable = calculate_total_receivable(
        earned_salary,
        overtime50,
        overtime100,
        to_decimal(advance) + to_decimal(official_advance),
    )
    return {
        "daily_wage": daily_wage,
        "earned_salary": earned_salary,
        "total_receivable": total_receivable,
    }
