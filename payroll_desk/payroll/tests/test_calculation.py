from decimal import Decimal

from django.test import SimpleTestCase

from payroll_desk.common.exceptions import ValidationFailed
from payroll_desk.payroll.services.calculation import (
    calculate_daily_wage,
    calculate_earned_salary,
    calculate_payroll,
    calculate_total_receivable,
)


class WageFormulaTests(SimpleTestCase):
    def test_daily_wage_and_earned_salary(self):
        for salary, base, days in [
            (Decimal("30000"), 30, 30),
            (Decimal("17500.50"), 26, 13),
            (Decimal("1"), 31, 0),
            (Decimal("99999.99"), 1, 31),
        ]:
            daily = calculate_daily_wage(salary, base)
            self.assertEqual(daily, salary / Decimal(base))
            earned = calculate_earned_salary(daily, days)
            self.assertLess(abs(earned - daily * days), Decimal("1e-9"))

    def test_zero_or_negative_base_is_rejected(self):
        for base in (0, -5):
            with self.assertRaises(ValidationFailed) as ctx:
                calculate_daily_wage(Decimal("1000"), base)
            self.assertIn("working_days", ctx.exception.details)

    def test_negative_salary_is_rejected(self):
        with self.assertRaises(ValidationFailed) as ctx:
            calculate_daily_wage(Decimal("-1"), 30)
        self.assertIn("salary", ctx.exception.details)

    def test_negative_days_worked_is_rejected(self):
        with self.assertRaises(ValidationFailed):
            calculate_earned_salary(Decimal("100"), -1)


class TotalReceivableTests(SimpleTestCase):
    def test_overtime_added_and_advance_subtracted(self):
        total = calculate_total_receivable(Decimal("30000"), Decimal("500"), Decimal("250"), Decimal("1000"))
        self.assertEqual(total, Decimal("29750"))

    def test_both_advances_are_deducted_once(self):
        result = calculate_payroll(
            Decimal("30000"), 30, 30,
            advance=Decimal("1000"),
            official_advance=Decimal("10000"),
        )
        # Channel payments are allocations; only the advances come off the total.
        self.assertEqual(result["total_receivable"], Decimal("19000"))
        self.assertEqual(result["earned_salary"], Decimal("30000"))
        self.assertEqual(result["daily_wage"], Decimal("1000"))

    def test_every_negative_input_names_its_field(self):
        base = dict(
            salary=Decimal("30000"),
            working_days_base=30,
            days_worked=30,
            advance=Decimal("0"),
            official_advance=Decimal("0"),
            overtime50=Decimal("0"),
            overtime100=Decimal("0"),
        )
        for field in ("salary", "days_worked", "advance", "official_advance", "overtime50", "overtime100"):
            kwargs = {**base, field: Decimal("-1")}
            with self.assertRaises(ValidationFailed) as ctx:
                calculate_payroll(**kwargs)
            self.assertEqual(list(ctx.exception.details), [field])
            self.assertEqual(ctx.exception.code, "VALIDATION_ERROR")
