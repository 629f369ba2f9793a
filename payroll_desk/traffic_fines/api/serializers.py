from __future__ import annotations
from decimal import Decimal

import bleach
from rest_framework import serializers

from payroll_desk.traffic_fines.models import TrafficFine, TrafficFinePayment


class TrafficFinePaymentSerializer(serializers.ModelSerializer):
    class Meta:
        model = TrafficFinePayment
        fields = ["id", "traffic_fine", "payment_date", "amount", "created_at"]
        read_only_fields = ["id", "traffic_fine", "created_at"]

    def validate_amount(self, value: Decimal) -> Decimal:
        if value <= 0:
            raise serializers.ValidationError("Amount must be greater than zero.")
        return value


class TrafficFineSerializer(serializers.ModelSerializer):
    employee_id = serializers.UUIDField()
    employee_name = serializers.CharField(source="employee.full_name", read_only=True)
    payments = TrafficFinePaymentSerializer(many=True, read_only=True)
    paid_total = serializers.DecimalField(max_digits=12, decimal_places=2, read_only=True)
    remaining = serializers.DecimalField(max_digits=12, decimal_places=2, read_only=True)

    class Meta:
        model = TrafficFine
        fields = [
            "id",
            "employee_id",
            "employee_name",
            "fine_date",
            "amount",
            "description",
            "payments",
            "paid_total",
            "remaining",
            "created_at",
            "updated_at",
        ]
        read_only_fields = ["id", "employee_name", "payments", "paid_total", "remaining", "created_at", "updated_at"]

    def validate_amount(self, value: Decimal) -> Decimal:
        if value <= 0:
            raise serializers.ValidationError("Amount must be greater than zero.")
        return value

    def validate_description(self, value: str | None) -> str | None:
        if not value:
            return None
        return bleach.clean(value, tags=[], strip=True).strip() or None
