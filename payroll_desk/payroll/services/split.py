"""
Official/cash split.

Pay is divided into an official (declared, insured) channel capped at a fixed
daily rate, and a cash channel carrying the remainder plus all overtime.
Advances are drawn per channel and can never exceed the channel's base.
"""
from dataclasses import dataclass
from decimal import Decimal

from django.conf import settings

from payroll_desk.payroll.services.calculation import (
    ZERO,
    calculate_daily_wage,
    calculate_earned_salary,
    money,
    to_decimal,
)


@dataclass(frozen=True)
class ChannelBases:
    earned: Decimal
    official_base: Decimal
    cash_base: Decimal


@dataclass(frozen=True)
class PaymentSplit:
    official_payment: Decimal
    cash_payment: Decimal


@dataclass(frozen=True)
class SplitResult:
    advance: Decimal
    official_advance: Decimal
    official_payment: Decimal
    cash_payment: Decimal
    bases: ChannelBases


def official_cap_for(days_worked) -> Decimal:
    monthly_cap = to_decimal(settings.PAYROLL_OFFICIAL_MONTHLY_CAP)
    base_days = int(settings.PAYROLL_OFFICIAL_BASE_DAYS)
    return money(max(ZERO, monthly_cap * to_decimal(days_worked) / Decimal(base_days)))


def compute_bases(is_insured, salary, working_days_base, days_worked, overtime50, overtime100) -> ChannelBases:
    daily_wage = calculate_daily_wage(salary, working_days_base)
    earned = money(max(ZERO, calculate_earned_salary(daily_wage, days_worked)))

    if is_insured:
        official_base = min(earned, official_cap_for(days_worked))
    else:
        official_base = ZERO

    cash_base = (
        max(ZERO, earned - official_base)
        + max(ZERO, to_decimal(overtime50))
        + max(ZERO, to_decimal(overtime100))
    )
    return ChannelBases(earned=earned, official_base=money(official_base), cash_base=money(cash_base))


def compute_split(bases: ChannelBases, advance, official_advance, is_insured) -> PaymentSplit:
    advance = to_decimal(advance)
    official_advance = to_decimal(official_advance)

    if is_insured:
        official_payment = max(ZERO, bases.official_base - min(bases.official_base, official_advance))
    else:
        official_payment = ZERO
    cash_payment = max(ZERO, bases.cash_base - min(bases.cash_base, advance))

    return PaymentSplit(official_payment=money(official_payment), cash_payment=money(cash_payment))


def clamp_advances(bases: ChannelBases, advance, official_advance, is_insured) -> tuple:
    """Clamp both advances into ``[0, base]`` of their channel."""
    advance = min(max(ZERO, to_decimal(advance)), bases.cash_base)
    if is_insured:
        official_advance = min(max(ZERO, to_decimal(official_advance)), bases.official_base)
    else:
        official_advance = ZERO
    return money(advance), money(official_advance)


def split_for(employee, days_worked, overtime50, overtime100, advance, official_advance) -> SplitResult:
    """Recompute bases for ``employee`` and return clamped advances with the split."""
    bases = compute_bases(
        employee.is_insured,
        employee.salary,
        employee.working_days,
        days_worked,
        overtime50,
        overtime100,
    )
    advance, official_advance = clamp_advances(bases, advance, official_advance, employee.is_insured)
    split = compute_split(bases, advance, official_advance, employee.is_insured)
    return SplitResult(
        advance=advance,
        official_advance=official_advance,
        official_payment=split.official_payment,
        cash_payment=split.cash_payment,
        bases=bases,
    )
