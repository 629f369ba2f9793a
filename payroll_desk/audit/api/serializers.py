from rest_framework import serializers

from payroll_desk.audit.models import AuditLog


class FieldChangeSerializer(serializers.Serializer):
    field = serializers.CharField()
    old_value = serializers.CharField(allow_null=True)
    new_value = serializers.CharField(allow_null=True)


class AuditLogSerializer(serializers.ModelSerializer):
    changes = FieldChangeSerializer(many=True, read_only=True)

    class Meta:
        model = AuditLog
        fields = [
            "id",
            "user",
            "username",
            "action",
            "entity_type",
            "entity_id",
            "entity_name",
            "changes",
            "timestamp",
        ]
        read_only_fields = fields


class AuditLogPageSerializer(serializers.Serializer):
    logs = AuditLogSerializer(many=True)
    total = serializers.IntegerField()
    page = serializers.IntegerField()
    page_size = serializers.IntegerField()
    total_pages = serializers.IntegerField()
