from drf_spectacular.utils import OpenApiParameter, extend_schema, extend_schema_view
from rest_framework import viewsets
from rest_framework.permissions import IsAuthenticated
from rest_framework.response import Response

from payroll_desk.audit.api.serializers import AuditLogPageSerializer, AuditLogSerializer
from payroll_desk.audit.selectors import get_logs_for_entity, get_logs_page
from payroll_desk.users.permissions import IsAdminOrClerk


@extend_schema_view(
    list=extend_schema(
        tags=["Audit Log"],
        summary="List audit log entries",
        description="Newest first. `page` defaults to 1, `page_size` to 20 (max 100).",
        parameters=[
            OpenApiParameter("page", int, OpenApiParameter.QUERY),
            OpenApiParameter("page_size", int, OpenApiParameter.QUERY),
        ],
        responses=AuditLogPageSerializer,
    ),
    retrieve=extend_schema(
        tags=["Audit Log"],
        summary="History of one entity",
        description="All audit entries recorded for the given entity id, newest first.",
        responses=AuditLogSerializer(many=True),
    ),
)
class AuditLogViewSet(viewsets.ViewSet):
    permission_classes = [IsAuthenticated, IsAdminOrClerk]
    lookup_field = "entity_id"
    lookup_value_regex = "[^/]+"

    def list(self, request):
        result = get_logs_page(
            request.query_params.get("page", 1),
            request.query_params.get("page_size", 20),
        )
        return Response(AuditLogPageSerializer(result).data)

    def retrieve(self, request, entity_id=None):
        logs = get_logs_for_entity(entity_id)
        return Response(AuditLogSerializer(logs, many=True).data)
