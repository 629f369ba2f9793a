from decimal import Decimal

from django.db.models import DecimalField, ExpressionWrapper, F, Prefetch, Sum, Value
from django.db.models.functions import Coalesce

from payroll_desk.traffic_fines.models import TrafficFine, TrafficFinePayment

MONEY_FIELD = DecimalField(max_digits=12, decimal_places=2)


def fines_with_balance():
    """Traffic fines annotated with ``paid_total`` and ``remaining``."""
    return (
        TrafficFine.objects.select_related("employee")
        .prefetch_related(
            Prefetch("payments", queryset=TrafficFinePayment.objects.order_by("-payment_date", "-created_at"))
        )
        .annotate(
            paid_total=Coalesce(Sum("payments__amount"), Value(Decimal("0.00")), output_field=MONEY_FIELD),
        )
        .annotate(
            remaining=ExpressionWrapper(F("amount") - F("paid_total"), output_field=MONEY_FIELD),
        )
        .order_by("-fine_date", "-created_at")
    )
