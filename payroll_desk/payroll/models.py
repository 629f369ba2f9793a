import uuid
from decimal import Decimal

from django.core.validators import MaxValueValidator, MinValueValidator
from django.db import models

from payroll_desk.employees.models import Employee

MONEY = dict(max_digits=12, decimal_places=2, default=Decimal("0.00"))


class PayrollEntry(models.Model):
    """One timesheet row per employee and period."""
    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    employee = models.ForeignKey(Employee, on_delete=models.CASCADE, related_name="payroll_entries")
    month = models.PositiveSmallIntegerField(validators=[MinValueValidator(1), MaxValueValidator(12)])
    year = models.PositiveSmallIntegerField(validators=[MinValueValidator(2000), MaxValueValidator(2100)])
    sort_order = models.PositiveIntegerField(default=0)
    days_worked = models.PositiveSmallIntegerField(default=0, validators=[MaxValueValidator(31)])

    advance = models.DecimalField(**MONEY)
    official_advance = models.DecimalField(**MONEY)
    overtime50 = models.DecimalField(**MONEY)
    overtime100 = models.DecimalField(**MONEY)

    # Outputs of the split engine, cached on every write that touches a driver.
    official_payment = models.DecimalField(**MONEY)
    cash_payment = models.DecimalField(**MONEY)

    version = models.PositiveIntegerField(default=1)
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        ordering = ["sort_order", "employee__full_name"]
        constraints = [
            models.UniqueConstraint(
                fields=["employee", "month", "year"],
                name="unique_payroll_entry_per_period"
            )
        ]
        indexes = [
            models.Index(fields=["year", "month"], name="idx_payroll_period"),
        ]
        verbose_name_plural = "payroll entries"

    def __str__(self):
        return f"{self.employee} {self.month:02d}/{self.year}"


class OvertimeEntry(models.Model):
    OVERTIME_50 = "OVERTIME_50"
    OVERTIME_100 = "OVERTIME_100"

    OVERTIME_TYPE_CHOICES = [
        (OVERTIME_50, "Overtime (1.5x)"),
        (OVERTIME_100, "Overtime (2.0x)"),
    ]

    # Payroll entry field fed by each overtime type.
    PAYROLL_FIELD = {
        OVERTIME_50: "overtime50",
        OVERTIME_100: "overtime100",
    }

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    employee = models.ForeignKey(Employee, on_delete=models.CASCADE, related_name="overtime_entries")
    entry_date = models.DateField()
    month = models.PositiveSmallIntegerField(validators=[MinValueValidator(1), MaxValueValidator(12)])
    year = models.PositiveSmallIntegerField(validators=[MinValueValidator(2000), MaxValueValidator(2100)])
    overtime_type = models.CharField(max_length=12, choices=OVERTIME_TYPE_CHOICES)
    multiplier = models.DecimalField(max_digits=5, decimal_places=2)
    hours = models.DecimalField(max_digits=6, decimal_places=2)
    amount = models.DecimalField(max_digits=12, decimal_places=2)
    description = models.CharField(max_length=100, blank=True, null=True)
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        ordering = ["-entry_date", "-created_at"]
        indexes = [
            models.Index(fields=["year", "month"], name="idx_overtime_period"),
            models.Index(fields=["employee", "year", "month"], name="idx_overtime_employee_period"),
        ]
        verbose_name_plural = "overtime entries"

    def __str__(self):
        return f"{self.employee} {self.overtime_type} {self.entry_date}"

    @property
    def payroll_field(self):
        return self.PAYROLL_FIELD[self.overtime_type]
