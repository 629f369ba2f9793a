import logging

from django.db import transaction

from payroll_desk.audit.models import AuditLog
from payroll_desk.audit.services import record_change, snapshot
from payroll_desk.employees.models import Employee

logger = logging.getLogger(__name__)


class EmployeeService:
    """Employee writes, each paired with its audit entry."""

    @staticmethod
    @transaction.atomic
    def create_employee(user, validated_data):
        employee = Employee.objects.create(**validated_data)
        record_change(
            user, AuditLog.CREATE, AuditLog.EMPLOYEE, employee.pk, employee.full_name,
            new_data=snapshot(employee),
        )
        logger.info("Employee %s created by %s", employee.pk, user)
        return employee

    @staticmethod
    @transaction.atomic
    def update_employee(user, employee, validated_data):
        before = snapshot(employee)
        for field, value in validated_data.items():
            setattr(employee, field, value)
        employee.save()
        record_change(
            user, AuditLog.UPDATE, AuditLog.EMPLOYEE, employee.pk, employee.full_name,
            old_data=before, new_data=snapshot(employee),
        )
        return employee

    @staticmethod
    @transaction.atomic
    def delete_employee(user, employee):
        """Deleting an employee cascades to payroll, overtime and traffic fines."""
        before = snapshot(employee)
        employee_id = employee.pk
        employee.delete()
        record_change(
            user, AuditLog.DELETE, AuditLog.EMPLOYEE, employee_id, before["full_name"],
            old_data=before,
        )
        logger.info("Employee %s deleted by %s", employee_id, user)
