import uuid

from django.conf import settings
from django.db import models


class AuditLog(models.Model):
    CREATE = "CREATE"
    UPDATE = "UPDATE"
    DELETE = "DELETE"

    ACTION_CHOICES = [
        (CREATE, "Create"),
        (UPDATE, "Update"),
        (DELETE, "Delete"),
    ]

    EMPLOYEE = "EMPLOYEE"
    PAYROLL = "PAYROLL"
    TRAFFIC_FINE = "TRAFFIC_FINE"

    ENTITY_TYPE_CHOICES = [
        (EMPLOYEE, "Employee"),
        (PAYROLL, "Payroll"),
        (TRAFFIC_FINE, "Traffic fine"),
    ]

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    user = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.SET_NULL,
        null=True,
        blank=True,
        related_name="audit_logs",
    )
    # Kept so the trail still reads correctly after a user is removed.
    username = models.CharField(max_length=150, blank=True)
    action = models.CharField(max_length=10, choices=ACTION_CHOICES)
    entity_type = models.CharField(max_length=20, choices=ENTITY_TYPE_CHOICES)
    entity_id = models.CharField(max_length=64)
    entity_name = models.CharField(max_length=255, blank=True)
    changes = models.JSONField(default=list, blank=True)
    timestamp = models.DateTimeField(auto_now_add=True)

    class Meta:
        ordering = ["-timestamp"]
        indexes = [
            models.Index(fields=["entity_id"], name="idx_audit_entity"),
            models.Index(fields=["-timestamp"], name="idx_audit_timestamp"),
        ]

    def __str__(self):
        return f"{self.action} {self.entity_type} {self.entity_id} by {self.username}"
