import uuid
from decimal import Decimal

from django.core.validators import MaxValueValidator, MinValueValidator
from django.db import models


class Employee(models.Model):
    DEPO = "DEPO"
    URETIM = "URETIM"
    OFIS = "OFIS"
    SAHA_ELEMANI = "SAHA_ELEMANI"
    KAYSERI_YATAS = "KAYSERI_YATAS"
    ANKARA_YATAS = "ANKARA_YATAS"
    ISTANBUL_YATAS = "ISTANBUL_YATAS"
    DIGER = "DIGER"

    WORK_AREA_CHOICES = [
        (DEPO, "Depo"),
        (URETIM, "Üretim"),
        (OFIS, "Ofis"),
        (SAHA_ELEMANI, "Saha Elemanı"),
        (KAYSERI_YATAS, "Kayseri Yataş"),
        (ANKARA_YATAS, "Ankara Yataş"),
        (ISTANBUL_YATAS, "İstanbul Yataş"),
        (DIGER, "Diğer"),
    ]

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    full_name = models.CharField(max_length=255)
    work_area = models.CharField(max_length=20, choices=WORK_AREA_CHOICES)
    is_insured = models.BooleanField(default=False)
    start_date = models.DateField()
    end_date = models.DateField(null=True, blank=True)
    salary = models.DecimalField(
        max_digits=12,
        decimal_places=2,
        validators=[MinValueValidator(Decimal("0.01"))],
    )
    working_days = models.PositiveSmallIntegerField(
        default=30,
        validators=[MinValueValidator(1), MaxValueValidator(31)],
        help_text="Divisor used to derive the daily wage from the monthly salary.",
    )
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        ordering = ["full_name"]
        indexes = [
            models.Index(fields=["end_date"], name="idx_employee_end_date"),
        ]

    def __str__(self):
        return self.full_name
