from __future__ import annotations
from decimal import Decimal

import bleach
from rest_framework import serializers

from payroll_desk.employees.models import Employee


class EmployeeSerializer(serializers.ModelSerializer):
    class Meta:
        model = Employee
        fields = [
            "id",
            "full_name",
            "work_area",
            "is_insured",
            "start_date",
            "end_date",
            "salary",
            "working_days",
            "created_at",
            "updated_at",
        ]
        read_only_fields = ["id", "created_at", "updated_at"]

    def validate_full_name(self, value: str) -> str:
        value = bleach.clean(value, tags=[], strip=True).strip()
        if not value:
            raise serializers.ValidationError("Full name is required.")
        return value

    def validate_salary(self, value: Decimal) -> Decimal:
        if value <= 0:
            raise serializers.ValidationError("Salary must be greater than zero.")
        return value

    def validate(self, data):
        start = data.get("start_date", getattr(self.instance, "start_date", None))
        end = data.get("end_date", getattr(self.instance, "end_date", None))
        if start and end and end < start:
            raise serializers.ValidationError({"end_date": "End date cannot be before start date."})
        return data
