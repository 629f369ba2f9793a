from __future__ import annotations
from decimal import Decimal

import bleach
from rest_framework import serializers

from payroll_desk.payroll.models import OvertimeEntry, PayrollEntry

MONEY_KWARGS = dict(max_digits=12, decimal_places=2, min_value=Decimal("0"), required=False)


class PayrollEntrySerializer(serializers.ModelSerializer):
    employee_name = serializers.CharField(source="employee.full_name", read_only=True)
    work_area = serializers.CharField(source="employee.work_area", read_only=True)
    is_insured = serializers.BooleanField(source="employee.is_insured", read_only=True)
    salary = serializers.DecimalField(source="employee.salary", max_digits=12, decimal_places=2, read_only=True)
    working_days = serializers.IntegerField(source="employee.working_days", read_only=True)
    daily_wage = serializers.DecimalField(max_digits=12, decimal_places=2, read_only=True)
    earned_salary = serializers.DecimalField(max_digits=12, decimal_places=2, read_only=True)
    total_receivable = serializers.DecimalField(max_digits=12, decimal_places=2, read_only=True)

    class Meta:
        model = PayrollEntry
        fields = [
            "id",
            "employee",
            "employee_name",
            "work_area",
            "is_insured",
            "salary",
            "working_days",
            "month",
            "year",
            "sort_order",
            "days_worked",
            "advance",
            "official_advance",
            "overtime50",
            "overtime100",
            "official_payment",
            "cash_payment",
            "daily_wage",
            "earned_salary",
            "total_receivable",
            "version",
            "created_at",
            "updated_at",
        ]
        read_only_fields = fields


class PayrollEntryUpdateSerializer(serializers.Serializer):
    """Editable fields of a payroll entry. Payments are never accepted as input."""
    days_worked = serializers.IntegerField(min_value=0, max_value=31, required=False)
    sort_order = serializers.IntegerField(min_value=0, required=False)
    advance = serializers.DecimalField(**MONEY_KWARGS)
    official_advance = serializers.DecimalField(**MONEY_KWARGS)
    overtime50 = serializers.DecimalField(**MONEY_KWARGS)
    overtime100 = serializers.DecimalField(**MONEY_KWARGS)
    version = serializers.IntegerField(
        min_value=1,
        required=False,
        help_text="Version the client last read. A stale value is rejected with 409.",
    )


class PayrollBatchItemSerializer(serializers.Serializer):
    employee_id = serializers.UUIDField()
    month = serializers.IntegerField(min_value=1, max_value=12)
    year = serializers.IntegerField(min_value=2000, max_value=2100)
    days_worked = serializers.IntegerField(min_value=0, max_value=31, required=False)
    sort_order = serializers.IntegerField(min_value=0, required=False)
    advance = serializers.DecimalField(**MONEY_KWARGS)
    official_advance = serializers.DecimalField(**MONEY_KWARGS)
    overtime50 = serializers.DecimalField(**MONEY_KWARGS)
    overtime100 = serializers.DecimalField(**MONEY_KWARGS)


class OvertimeEntrySerializer(serializers.ModelSerializer):
    employee_id = serializers.UUIDField()
    employee_name = serializers.CharField(source="employee.full_name", read_only=True)
    month = serializers.IntegerField(min_value=1, max_value=12)
    year = serializers.IntegerField(min_value=2000, max_value=2100)

    class Meta:
        model = OvertimeEntry
        fields = [
            "id",
            "employee_id",
            "employee_name",
            "entry_date",
            "month",
            "year",
            "overtime_type",
            "multiplier",
            "hours",
            "amount",
            "description",
            "created_at",
        ]
        read_only_fields = ["id", "employee_name", "created_at"]

    def _positive(self, value: Decimal, label: str) -> Decimal:
        if value <= 0:
            raise serializers.ValidationError(f"{label} must be greater than zero.")
        return value

    def validate_multiplier(self, value: Decimal) -> Decimal:
        return self._positive(value, "Multiplier")

    def validate_hours(self, value: Decimal) -> Decimal:
        return self._positive(value, "Hours")

    def validate_amount(self, value: Decimal) -> Decimal:
        return self._positive(value, "Amount")

    def validate_description(self, value: str | None) -> str | None:
        if not value:
            return None
        return bleach.clean(value, tags=[], strip=True).strip() or None
