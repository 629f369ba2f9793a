import uuid

import django.db.models.deletion
from django.conf import settings
from django.db import migrations, models


class Migration(migrations.Migration):

    initial = True

    dependencies = [
        migrations.swappable_dependency(settings.AUTH_USER_MODEL),
    ]

    operations = [
        migrations.CreateModel(
            name="AuditLog",
            fields=[
                ("id", models.UUIDField(default=uuid.uuid4, editable=False, primary_key=True, serialize=False)),
                ("username", models.CharField(blank=True, max_length=150)),
                (
                    "action",
                    models.CharField(
                        choices=[("CREATE", "Create"), ("UPDATE", "Update"), ("DELETE", "Delete")],
                        max_length=10,
                    ),
                ),
                (
                    "entity_type",
                    models.CharField(
                        choices=[("EMPLOYEE", "Employee"), ("PAYROLL", "Payroll"), ("TRAFFIC_FINE", "Traffic fine")],
                        max_length=20,
                    ),
                ),
                ("entity_id", models.CharField(max_length=64)),
                ("entity_name", models.CharField(blank=True, max_length=255)),
                ("changes", models.JSONField(blank=True, default=list)),
                ("timestamp", models.DateTimeField(auto_now_add=True)),
                (
                    "user",
                    models.ForeignKey(
                        blank=True,
                        null=True,
                        on_delete=django.db.models.deletion.SET_NULL,
                        related_name="audit_logs",
                        to=settings.AUTH_USER_MODEL,
                    ),
                ),
            ],
            options={
                "ordering": ["-timestamp"],
                "indexes": [
                    models.Index(fields=["entity_id"], name="idx_audit_entity"),
                    models.Index(fields=["-timestamp"], name="idx_audit_timestamp"),
                ],
            },
        ),
    ]
