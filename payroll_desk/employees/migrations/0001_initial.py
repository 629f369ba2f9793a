import uuid
from decimal import Decimal

import django.core.validators
from django.db import migrations, models


class Migration(migrations.Migration):

    initial = True

    dependencies = []

    operations = [
        migrations.CreateModel(
            name="Employee",
            fields=[
                ("id", models.UUIDField(default=uuid.uuid4, editable=False, primary_key=True, serialize=False)),
                ("full_name", models.CharField(max_length=255)),
                (
                    "work_area",
                    models.CharField(
                        choices=[
                            ("DEPO", "Depo"),
                            ("URETIM", "Üretim"),
                            ("OFIS", "Ofis"),
                            ("SAHA_ELEMANI", "Saha Elemanı"),
                            ("KAYSERI_YATAS", "Kayseri Yataş"),
                            ("ANKARA_YATAS", "Ankara Yataş"),
                            ("ISTANBUL_YATAS", "İstanbul Yataş"),
                            ("DIGER", "Diğer"),
                        ],
                        max_length=20,
                    ),
                ),
                ("is_insured", models.BooleanField(default=False)),
                ("start_date", models.DateField()),
                ("end_date", models.DateField(blank=True, null=True)),
                (
                    "salary",
                    models.DecimalField(
                        decimal_places=2,
                        max_digits=12,
                        validators=[django.core.validators.MinValueValidator(Decimal("0.01"))],
                    ),
                ),
                (
                    "working_days",
                    models.PositiveSmallIntegerField(
                        default=30,
                        help_text="Divisor used to derive the daily wage from the monthly salary.",
                        validators=[
                            django.core.validators.MinValueValidator(1),
                            django.core.validators.MaxValueValidator(31),
                        ],
                    ),
                ),
                ("created_at", models.DateTimeField(auto_now_add=True)),
                ("updated_at", models.DateTimeField(auto_now=True)),
            ],
            options={
                "ordering": ["full_name"],
                "indexes": [models.Index(fields=["end_date"], name="idx_employee_end_date")],
            },
        ),
    ]
