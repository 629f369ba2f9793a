import uuid
from decimal import Decimal

from django.core.validators import MinValueValidator
from django.db import models

from payroll_desk.employees.models import Employee


class TrafficFine(models.Model):
    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    employee = models.ForeignKey(Employee, on_delete=models.CASCADE, related_name="traffic_fines")
    fine_date = models.DateField()
    amount = models.DecimalField(max_digits=12, decimal_places=2, validators=[MinValueValidator(Decimal("0.01"))])
    description = models.CharField(max_length=500, blank=True, null=True)
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        ordering = ["-fine_date", "-created_at"]
        indexes = [
            models.Index(fields=["employee"], name="idx_traffic_fine_employee"),
        ]

    def __str__(self):
        return f"{self.employee} - {self.fine_date} ({self.amount})"


class TrafficFinePayment(models.Model):
    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    traffic_fine = models.ForeignKey(TrafficFine, on_delete=models.CASCADE, related_name="payments")
    payment_date = models.DateField()
    amount = models.DecimalField(max_digits=12, decimal_places=2, validators=[MinValueValidator(Decimal("0.01"))])
    created_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        ordering = ["-payment_date", "-created_at"]

    def __str__(self):
        return f"{self.traffic_fine_id} paid {self.amount} on {self.payment_date}"
