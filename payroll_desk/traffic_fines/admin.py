from django.contrib import admin

from payroll_desk.traffic_fines.models import TrafficFine, TrafficFinePayment


class TrafficFinePaymentInline(admin.TabularInline):
    model = TrafficFinePayment
    extra = 0
    fields = ("payment_date", "amount", "created_at")
    readonly_fields = ("created_at",)


@admin.register(TrafficFine)
class TrafficFineAdmin(admin.ModelAdmin):
    list_display = ("employee", "fine_date", "amount", "description")
    list_filter = ("fine_date",)
    search_fields = ("employee__full_name", "description")
    inlines = [TrafficFinePaymentInline]
