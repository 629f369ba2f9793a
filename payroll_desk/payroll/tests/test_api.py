import uuid
from decimal import Decimal
from unittest.mock import patch

from django.db import DatabaseError
from django.urls import reverse
from rest_framework import status
from rest_framework.test import APITestCase

from payroll_desk.audit.models import AuditLog
from payroll_desk.employees.tests.factories import create_clerk, create_employee
from payroll_desk.payroll.models import OvertimeEntry, PayrollEntry

PAYROLL_LIST = reverse("payroll-entry-list")
PAYROLL_BATCH = reverse("payroll-entry-batch")
OVERTIME_LIST = reverse("overtime-entry-list")


def payroll_detail(pk):
    return reverse("payroll-entry-detail", kwargs={"pk": pk})


class PayrollApiTestCase(APITestCase):
    def setUp(self):
        self.clerk = create_clerk()
        self.client.force_authenticate(user=self.clerk)
        self.employee = create_employee("Ali Veli", salary="30000", is_insured=True)

    def open_period(self, month=3, year=2024):
        response = self.client.get(PAYROLL_LIST, {"month": month, "year": year})
        self.assertEqual(response.status_code, status.HTTP_200_OK)
        return response.json()


class PayrollSheetTests(PayrollApiTestCase):
    def test_list_opens_period_with_split(self):
        rows = self.open_period()

        self.assertEqual(len(rows), 1)
        row = rows[0]
        self.assertEqual(row["employee_name"], "Ali Veli")
        self.assertEqual(row["days_worked"], 30)
        self.assertEqual(row["official_payment"], 28075.0)
        self.assertEqual(row["cash_payment"], 1925.0)
        self.assertEqual(row["total_receivable"], 30000.0)
        self.assertEqual(row["version"], 1)

    def test_missing_period_params(self):
        response = self.client.get(PAYROLL_LIST, {"month": 3})
        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)
        self.assertEqual(response.json()["code"], "INVALID_PARAMS")

        response = self.client.get(PAYROLL_LIST, {"month": "march", "year": 2024})
        self.assertEqual(response.json()["code"], "INVALID_PARAMS")

    def test_out_of_range_period(self):
        response = self.client.get(PAYROLL_LIST, {"month": 13, "year": 2024})
        body = response.json()
        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)
        self.assertEqual(body["status"], 400)
        self.assertEqual(body["code"], "INVALID_MONTH")
        self.assertIn("month", body["details"])

        response = self.client.get(PAYROLL_LIST, {"month": 1, "year": 1990})
        self.assertEqual(response.json()["code"], "INVALID_YEAR")

    def test_requires_authentication(self):
        self.client.force_authenticate(user=None)
        response = self.client.get(PAYROLL_LIST, {"month": 3, "year": 2024})
        self.assertEqual(response.status_code, status.HTTP_401_UNAUTHORIZED)
        self.assertEqual(response.json()["code"], "NOT_AUTHENTICATED")

    def test_unknown_entry(self):
        response = self.client.get(payroll_detail(uuid.uuid4()))
        self.assertEqual(response.status_code, status.HTTP_404_NOT_FOUND)
        self.assertEqual(response.json()["code"], "PAYROLL_NOT_FOUND")


class PayrollUpdateApiTests(PayrollApiTestCase):
    def setUp(self):
        super().setUp()
        self.entry_id = self.open_period()[0]["id"]

    def test_patch_clamps_and_audits(self):
        response = self.client.patch(
            payroll_detail(self.entry_id), {"days_worked": 20, "advance": "5000"}, format="json"
        )

        self.assertEqual(response.status_code, status.HTTP_200_OK)
        body = response.json()
        # earned 20000, official base min(20000, 18716.67)
        self.assertEqual(body["official_payment"], 18716.67)
        self.assertEqual(body["advance"], 1283.33)
        self.assertEqual(body["cash_payment"], 0.0)
        self.assertEqual(body["version"], 2)

        log = AuditLog.objects.get(entity_type=AuditLog.PAYROLL)
        self.assertEqual(log.action, AuditLog.UPDATE)
        self.assertEqual(log.entity_id, self.entry_id)
        self.assertEqual(log.username, "clerk")
        self.assertEqual(log.entity_name, "Ali Veli - Payroll 03/2024")
        changed = {change["field"]: change for change in log.changes}
        self.assertEqual(changed["days_worked"]["old_value"], "30")
        self.assertEqual(changed["days_worked"]["new_value"], "20")
        self.assertNotIn("updated_at", changed)

    def test_payments_are_not_writable(self):
        response = self.client.patch(
            payroll_detail(self.entry_id), {"cash_payment": "99999"}, format="json"
        )
        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertEqual(response.json()["cash_payment"], 1925.0)

    def test_invalid_field_is_reported(self):
        response = self.client.patch(payroll_detail(self.entry_id), {"days_worked": 40}, format="json")
        body = response.json()
        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)
        self.assertEqual(body["code"], "VALIDATION_ERROR")
        self.assertIn("days_worked", body["details"])
        self.assertFalse(AuditLog.objects.exists())

    def test_stale_version_conflicts(self):
        url = payroll_detail(self.entry_id)
        first = self.client.patch(url, {"days_worked": 25, "version": 1}, format="json")
        self.assertEqual(first.status_code, status.HTTP_200_OK)

        second = self.client.patch(url, {"days_worked": 10, "version": 1}, format="json")
        self.assertEqual(second.status_code, status.HTTP_409_CONFLICT)
        self.assertEqual(second.json()["code"], "CONFLICT")
        self.assertEqual(PayrollEntry.objects.get(pk=self.entry_id).days_worked, 25)

    def test_audit_failure_does_not_block_update(self):
        with patch.object(AuditLog.objects, "create", side_effect=DatabaseError("audit table gone")):
            with self.assertLogs("payroll_desk.audit.services", level="ERROR"):
                response = self.client.patch(
                    payroll_detail(self.entry_id), {"days_worked": 10}, format="json"
                )

        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertEqual(PayrollEntry.objects.get(pk=self.entry_id).days_worked, 10)
        self.assertFalse(AuditLog.objects.exists())


class PayrollBatchApiTests(PayrollApiTestCase):
    def test_batch_upserts_and_writes_one_audit_entry(self):
        other = create_employee("Zeynep Kaya", salary="20000", is_insured=False)
        payload = [
            {"employee_id": str(self.employee.id), "month": 3, "year": 2024, "days_worked": 30},
            {"employee_id": str(other.id), "month": 3, "year": 2024, "days_worked": 15, "overtime50": "500"},
        ]

        response = self.client.post(PAYROLL_BATCH, payload, format="json")

        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertEqual([row["cash_payment"] for row in response.json()], [1925.0, 10500.0])

        log = AuditLog.objects.get()
        self.assertEqual(log.entity_id, "BATCH_2024_3")
        changed = {change["field"]: change["new_value"] for change in log.changes}
        self.assertEqual(changed["updated_count"], "2")
        self.assertIn("days_worked", changed["fields_updated"])
        self.assertIn("overtime50", changed["fields_updated"])

    def test_unknown_employee_rejects_batch(self):
        missing = str(uuid.uuid4())
        payload = [
            {"employee_id": str(self.employee.id), "month": 3, "year": 2024, "days_worked": 12},
            {"employee_id": missing, "month": 3, "year": 2024, "days_worked": 12},
        ]

        response = self.client.post(PAYROLL_BATCH, payload, format="json")

        body = response.json()
        self.assertEqual(response.status_code, status.HTTP_404_NOT_FOUND)
        self.assertEqual(body["code"], "EMPLOYEE_NOT_FOUND")
        self.assertEqual(body["details"]["employee_id"], [missing])
        self.assertFalse(PayrollEntry.objects.exists())
        self.assertFalse(AuditLog.objects.exists())

    def test_item_errors_are_keyed_by_index(self):
        payload = [
            {"employee_id": str(self.employee.id), "month": 3, "year": 2024},
            {"employee_id": str(self.employee.id), "month": 13, "year": 2024},
        ]
        response = self.client.post(PAYROLL_BATCH, payload, format="json")
        body = response.json()
        self.assertEqual(body["code"], "VALIDATION_ERROR")
        self.assertIn("1.month", body["details"])

    def test_empty_batch_is_rejected(self):
        response = self.client.post(PAYROLL_BATCH, [], format="json")
        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)
        self.assertEqual(response.json()["code"], "VALIDATION_ERROR")


class OvertimeApiTests(PayrollApiTestCase):
    def overtime_payload(self, **overrides):
        payload = {
            "employee_id": str(self.employee.id),
            "entry_date": "2024-03-12",
            "month": 3,
            "year": 2024,
            "overtime_type": OvertimeEntry.OVERTIME_100,
            "multiplier": "2.00",
            "hours": "3",
            "amount": "750",
            "description": "<b>Stock</b> count",
        }
        payload.update(overrides)
        return payload

    def test_create_updates_payroll_and_audits(self):
        response = self.client.post(OVERTIME_LIST, self.overtime_payload(), format="json")

        self.assertEqual(response.status_code, status.HTTP_201_CREATED)
        body = response.json()
        self.assertEqual(body["description"], "Stock count")
        self.assertEqual(body["employee_name"], "Ali Veli")

        payroll = PayrollEntry.objects.get(employee=self.employee, month=3, year=2024)
        self.assertEqual(payroll.overtime100, Decimal("750.00"))
        self.assertEqual(payroll.cash_payment, Decimal("2675.00"))
        self.assertTrue(AuditLog.objects.filter(entity_id=body["id"], action=AuditLog.UPDATE).exists())

    def test_list_and_delete(self):
        created = self.client.post(OVERTIME_LIST, self.overtime_payload(), format="json").json()

        listed = self.client.get(OVERTIME_LIST, {"month": 3, "year": 2024, "employee_id": str(self.employee.id)})
        self.assertEqual([row["id"] for row in listed.json()], [created["id"]])

        response = self.client.delete(reverse("overtime-entry-detail", kwargs={"pk": created["id"]}))
        self.assertEqual(response.status_code, status.HTTP_204_NO_CONTENT)
        payroll = PayrollEntry.objects.get(employee=self.employee, month=3, year=2024)
        self.assertEqual(payroll.overtime100, Decimal("0"))
        self.assertTrue(AuditLog.objects.filter(entity_id=created["id"], action=AuditLog.DELETE).exists())

    def test_non_positive_values_are_rejected(self):
        response = self.client.post(
            OVERTIME_LIST, self.overtime_payload(hours="0", amount="-5"), format="json"
        )
        body = response.json()
        self.assertEqual(body["code"], "VALIDATION_ERROR")
        self.assertIn("hours", body["details"])
        self.assertIn("amount", body["details"])
        self.assertFalse(OvertimeEntry.objects.exists())

    def test_amount_overflowing_the_period_is_rejected(self):
        self.open_period()
        response = self.client.post(
            OVERTIME_LIST, self.overtime_payload(amount="9999999999.99"), format="json"
        )

        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)
        body = response.json()
        self.assertEqual(body["code"], "VALIDATION_ERROR")
        self.assertIn("amount", body["details"])
        self.assertFalse(OvertimeEntry.objects.exists())

        row = self.open_period()[0]
        self.assertEqual(row["overtime100"], 0.0)
        self.assertEqual(row["cash_payment"], 1925.0)

    def test_delete_unknown(self):
        response = self.client.delete(reverse("overtime-entry-detail", kwargs={"pk": uuid.uuid4()}))
        self.assertEqual(response.status_code, status.HTTP_404_NOT_FOUND)
        self.assertEqual(response.json()["code"], "OVERTIME_NOT_FOUND")
