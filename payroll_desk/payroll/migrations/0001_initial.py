import uuid
from decimal import Decimal

import django.core.validators
import django.db.models.deletion
from django.db import migrations, models


class Migration(migrations.Migration):

    initial = True

    dependencies = [
        ("employees", "0001_initial"),
    ]

    operations = [
        migrations.CreateModel(
            name="PayrollEntry",
            fields=[
                ("id", models.UUIDField(default=uuid.uuid4, editable=False, primary_key=True, serialize=False)),
                (
                    "month",
                    models.PositiveSmallIntegerField(
                        validators=[
                            django.core.validators.MinValueValidator(1),
                            django.core.validators.MaxValueValidator(12),
                        ]
                    ),
                ),
                (
                    "year",
                    models.PositiveSmallIntegerField(
                        validators=[
                            django.core.validators.MinValueValidator(2000),
                            django.core.validators.MaxValueValidator(2100),
                        ]
                    ),
                ),
                ("sort_order", models.PositiveIntegerField(default=0)),
                (
                    "days_worked",
                    models.PositiveSmallIntegerField(
                        default=0, validators=[django.core.validators.MaxValueValidator(31)]
                    ),
                ),
                ("advance", models.DecimalField(decimal_places=2, default=Decimal("0.00"), max_digits=12)),
                ("official_advance", models.DecimalField(decimal_places=2, default=Decimal("0.00"), max_digits=12)),
                ("overtime50", models.DecimalField(decimal_places=2, default=Decimal("0.00"), max_digits=12)),
                ("overtime100", models.DecimalField(decimal_places=2, default=Decimal("0.00"), max_digits=12)),
                ("official_payment", models.DecimalField(decimal_places=2, default=Decimal("0.00"), max_digits=12)),
                ("cash_payment", models.DecimalField(decimal_places=2, default=Decimal("0.00"), max_digits=12)),
                ("version", models.PositiveIntegerField(default=1)),
                ("created_at", models.DateTimeField(auto_now_add=True)),
                ("updated_at", models.DateTimeField(auto_now=True)),
                (
                    "employee",
                    models.ForeignKey(
                        on_delete=django.db.models.deletion.CASCADE,
                        related_name="payroll_entries",
                        to="employees.employee",
                    ),
                ),
            ],
            options={
                "verbose_name_plural": "payroll entries",
                "ordering": ["sort_order", "employee__full_name"],
                "indexes": [models.Index(fields=["year", "month"], name="idx_payroll_period")],
                "constraints": [
                    models.UniqueConstraint(
                        fields=("employee", "month", "year"), name="unique_payroll_entry_per_period"
                    )
                ],
            },
        ),
        migrations.CreateModel(
            name="OvertimeEntry",
            fields=[
                ("id", models.UUIDField(default=uuid.uuid4, editable=False, primary_key=True, serialize=False)),
                ("entry_date", models.DateField()),
                (
                    "month",
                    models.PositiveSmallIntegerField(
                        validators=[
                            django.core.validators.MinValueValidator(1),
                            django.core.validators.MaxValueValidator(12),
                        ]
                    ),
                ),
                (
                    "year",
                    models.PositiveSmallIntegerField(
                        validators=[
                            django.core.validators.MinValueValidator(2000),
                            django.core.validators.MaxValueValidator(2100),
                        ]
                    ),
                ),
                (
                    "overtime_type",
                    models.CharField(
                        choices=[("OVERTIME_50", "Overtime (1.5x)"), ("OVERTIME_100", "Overtime (2.0x)")],
                        max_length=12,
                    ),
                ),
                ("multiplier", models.DecimalField(decimal_places=2, max_digits=5)),
                ("hours", models.DecimalField(decimal_places=2, max_digits=6)),
                ("amount", models.DecimalField(decimal_places=2, max_digits=12)),
                ("description", models.CharField(blank=True, max_length=100, null=True)),
                ("created_at", models.DateTimeField(auto_now_add=True)),
                ("updated_at", models.DateTimeField(auto_now=True)),
                (
                    "employee",
                    models.ForeignKey(
                        on_delete=django.db.models.deletion.CASCADE,
                        related_name="overtime_entries",
                        to="employees.employee",
                    ),
                ),
            ],
            options={
                "verbose_name_plural": "overtime entries",
                "ordering": ["-entry_date", "-created_at"],
                "indexes": [
                    models.Index(fields=["year", "month"], name="idx_overtime_period"),
                    models.Index(fields=["employee", "year", "month"], name="idx_overtime_employee_period"),
                ],
            },
        ),
    ]
