import json
import logging
from datetime import date, datetime

from django.db import transaction

from payroll_desk.audit.models import AuditLog

logger = logging.getLogger(__name__)

SKIPPED_FIELDS = {"id", "created_at", "updated_at"}


def snapshot(instance, exclude=()):
    """Plain dict of a model's concrete column values, keyed by attname."""
    return {
        field.attname: getattr(instance, field.attname)
        for field in instance._meta.concrete_fields
        if field.attname not in exclude
    }


def format_value(value):
    if value is None:
        return None
    if isinstance(value, (datetime, date)):
        return value.isoformat()
    if isinstance(value, (dict, list, tuple)):
        return json.dumps(value, default=str)
    return str(value)


def compute_changes(old_data=None, new_data=None):
    """
    Field-level diff between two snapshots.

    CREATE (no old data) lists every new field, DELETE (no new data) every old
    field, UPDATE only the fields whose values differ.
    """
    changes = []

    if old_data is None and new_data is not None:
        for field, value in new_data.items():
            if field in SKIPPED_FIELDS:
                continue
            changes.append({"field": field, "old_value": None, "new_value": format_value(value)})
        return changes

    if old_data is not None and new_data is None:
        for field, value in old_data.items():
            if field in SKIPPED_FIELDS:
                continue
            changes.append({"field": field, "old_value": format_value(value), "new_value": None})
        return changes

    if old_data is None or new_data is None:
        return changes

    fields = list(old_data)
    fields.extend(field for field in new_data if field not in old_data)
    for field in fields:
        if field in SKIPPED_FIELDS:
            continue
        old_value = old_data.get(field)
        new_value = new_data.get(field)
        if old_value == new_value:
            continue
        changes.append({
            "field": field,
            "old_value": format_value(old_value),
            "new_value": format_value(new_value),
        })
    return changes


def record_change(user, action, entity_type, entity_id, entity_name, old_data=None, new_data=None):
    """
    Persist an audit entry.

    Never raises: a failure to write the trail is logged and the caller's
    mutation goes through. Runs in its own savepoint so a failed insert does not
    poison the surrounding transaction.
    """
    try:
        with transaction.atomic():
            return AuditLog.objects.create(
                user=user if user is not None and user.is_authenticated else None,
                username=getattr(user, "username", "") or "",
                action=action,
                entity_type=entity_type,
                entity_id=str(entity_id),
                entity_name=entity_name or "",
                changes=compute_changes(old_data, new_data),
            )
    except Exception:
        logger.exception(
            "Failed to record audit log for %s %s %s", action, entity_type, entity_id
        )
        return None
