from django.contrib import admin

from payroll_desk.payroll.models import OvertimeEntry, PayrollEntry


@admin.register(PayrollEntry)
class PayrollEntryAdmin(admin.ModelAdmin):
    list_display = (
        "employee",
        "month",
        "year",
        "days_worked",
        "advance",
        "official_advance",
        "overtime50",
        "overtime100",
        "official_payment",
        "cash_payment",
    )
    list_filter = ("year", "month")
    search_fields = ("employee__full_name",)
    # Payments are outputs of the split engine.
    readonly_fields = ("official_payment", "cash_payment", "version", "created_at", "updated_at")


@admin.register(OvertimeEntry)
class OvertimeEntryAdmin(admin.ModelAdmin):
    list_display = (
        "employee",
        "entry_date",
        "overtime_type",
        "hours",
        "amount",
        "created_at",
    )
    list_filter = ("overtime_type", "year", "month")
    search_fields = ("employee__full_name",)

    def has_change_permission(self, request, obj=None):
        # Edits would bypass the payroll entry totals.
        return False
