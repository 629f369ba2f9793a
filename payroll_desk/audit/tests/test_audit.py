from datetime import date
from decimal import Decimal

from django.test import SimpleTestCase
from django.urls import reverse
from rest_framework import status
from rest_framework.test import APITestCase

from payroll_desk.audit.models import AuditLog
from payroll_desk.audit.selectors import get_logs_page
from payroll_desk.audit.services import compute_changes, format_value, record_change
from payroll_desk.employees.tests.factories import create_clerk

AUDIT_LIST = reverse("audit-log-list")


class ComputeChangesTests(SimpleTestCase):
    def test_create_lists_every_field(self):
        changes = compute_changes(None, {"id": 1, "full_name": "Ali", "salary": Decimal("100.00")})
        self.assertEqual(changes, [
            {"field": "full_name", "old_value": None, "new_value": "Ali"},
            {"field": "salary", "old_value": None, "new_value": "100.00"},
        ])

    def test_delete_lists_every_field(self):
        changes = compute_changes({"full_name": "Ali", "updated_at": "x"}, None)
        self.assertEqual(changes, [{"field": "full_name", "old_value": "Ali", "new_value": None}])

    def test_update_lists_only_differences(self):
        old = {"full_name": "Ali", "salary": Decimal("100.00"), "end_date": None}
        new = {"full_name": "Ali", "salary": Decimal("120.00"), "end_date": date(2024, 5, 31)}
        self.assertEqual(compute_changes(old, new), [
            {"field": "salary", "old_value": "100.00", "new_value": "120.00"},
            {"field": "end_date", "old_value": None, "new_value": "2024-05-31"},
        ])

    def test_nothing_to_compare(self):
        self.assertEqual(compute_changes(None, None), [])
        self.assertEqual(compute_changes({"a": 1}, {"a": 1}), [])

    def test_format_value(self):
        self.assertIsNone(format_value(None))
        self.assertEqual(format_value(True), "True")
        self.assertEqual(format_value(["a", 1]), '["a", 1]')


class AuditLogApiTests(APITestCase):
    def setUp(self):
        self.clerk = create_clerk()
        self.client.force_authenticate(user=self.clerk)

    def record(self, entity_id, name="Ali Veli"):
        return record_change(
            self.clerk, AuditLog.UPDATE, AuditLog.EMPLOYEE, entity_id, name,
            old_data={"salary": "1"}, new_data={"salary": "2"},
        )

    def test_record_change_stores_user(self):
        log = self.record("abc")
        self.assertEqual(log.user, self.clerk)
        self.assertEqual(log.username, "clerk")
        self.assertEqual(log.changes, [{"field": "salary", "old_value": "1", "new_value": "2"}])

    def test_anonymous_user_is_not_linked(self):
        log = record_change(None, AuditLog.DELETE, AuditLog.PAYROLL, "x", "X", old_data={"a": 1})
        self.assertIsNone(log.user)
        self.assertEqual(log.username, "")

    def test_pagination(self):
        for index in range(25):
            self.record(f"entity-{index}")

        page = get_logs_page(2, 10)
        self.assertEqual(page["total"], 25)
        self.assertEqual(page["total_pages"], 3)
        self.assertEqual(len(page["logs"]), 10)

        self.assertEqual(get_logs_page("bad", 500)["page_size"], 100)
        self.assertEqual(get_logs_page(0, 0)["page"], 1)
        self.assertEqual(get_logs_page(9, 10)["logs"], [])

        body = self.client.get(AUDIT_LIST, {"page": 3, "page_size": 10}).json()
        self.assertEqual(body["page"], 3)
        self.assertEqual(body["total"], 25)
        self.assertEqual(len(body["logs"]), 5)

    def test_default_page(self):
        self.record("only")
        body = self.client.get(AUDIT_LIST).json()
        self.assertEqual(body["page"], 1)
        self.assertEqual(body["page_size"], 20)
        self.assertEqual(body["total_pages"], 1)
        self.assertEqual(body["logs"][0]["entity_name"], "Ali Veli")

    def test_entity_history(self):
        self.record("BATCH_2024_3", name="first")
        self.record("BATCH_2024_3", name="second")
        self.record("other")

        response = self.client.get(reverse("audit-log-detail", kwargs={"entity_id": "BATCH_2024_3"}))

        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertEqual({row["entity_name"] for row in response.json()}, {"first", "second"})

    def test_requires_authentication(self):
        self.client.force_authenticate(user=None)
        self.assertEqual(self.client.get(AUDIT_LIST).status_code, status.HTTP_401_UNAUTHORIZED)
