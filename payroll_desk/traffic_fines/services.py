import logging

from django.core.exceptions import ValidationError as DjangoValidationError
from django.db import transaction

from payroll_desk.audit.models import AuditLog
from payroll_desk.audit.services import record_change, snapshot
from payroll_desk.common.exceptions import EmployeeNotFound, TrafficFineNotFound
from payroll_desk.employees.models import Employee
from payroll_desk.traffic_fines.models import TrafficFine, TrafficFinePayment
from payroll_desk.traffic_fines.selectors import fines_with_balance

logger = logging.getLogger(__name__)


def fine_label(fine):
    return f"{fine.employee.full_name} - Traffic fine"


def get_fine(fine_id):
    try:
        return fines_with_balance().get(pk=fine_id)
    except (TrafficFine.DoesNotExist, DjangoValidationError, ValueError):
        raise TrafficFineNotFound()


@transaction.atomic
def create_fine(user, employee_id, fine_date, amount, description=None):
    try:
        employee = Employee.objects.get(pk=employee_id)
    except (Employee.DoesNotExist, DjangoValidationError, ValueError):
        raise EmployeeNotFound(details={"employee_id": [str(employee_id)]})

    fine = TrafficFine.objects.create(
        employee=employee,
        fine_date=fine_date,
        amount=amount,
        description=description or None,
    )
    record_change(
        user, AuditLog.CREATE, AuditLog.TRAFFIC_FINE, fine.pk, fine_label(fine),
        new_data={
            "employee_id": fine.employee_id,
            "fine_date": fine.fine_date,
            "amount": fine.amount,
            "description": fine.description,
        },
    )
    logger.info("Traffic fine %s of %s recorded for %s", fine.pk, amount, employee)
    return get_fine(fine.pk)


@transaction.atomic
def add_payment(user, fine_id, payment_date, amount):
    fine = get_fine(fine_id)
    payment = TrafficFinePayment.objects.create(
        traffic_fine_id=fine.pk,
        payment_date=payment_date,
        amount=amount,
    )
    record_change(
        user, AuditLog.UPDATE, AuditLog.TRAFFIC_FINE, fine.pk, fine_label(fine),
        new_data={"payment_date": payment.payment_date, "amount": payment.amount},
    )
    return payment


@transaction.atomic
def delete_fine(user, fine_id):
    fine = get_fine(fine_id)
    before = snapshot(fine)
    label = fine_label(fine)
    fine.delete()
    record_change(
        user, AuditLog.DELETE, AuditLog.TRAFFIC_FINE, fine_id, label, old_data=before,
    )
