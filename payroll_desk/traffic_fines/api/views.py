from drf_spectacular.utils import extend_schema, extend_schema_view
from rest_framework import mixins, status, viewsets
from rest_framework.decorators import action
from rest_framework.permissions import IsAuthenticated
from rest_framework.response import Response

from payroll_desk.traffic_fines import services
from payroll_desk.traffic_fines.api.serializers import TrafficFinePaymentSerializer, TrafficFineSerializer
from payroll_desk.traffic_fines.filters import TrafficFineFilter
from payroll_desk.traffic_fines.selectors import fines_with_balance
from payroll_desk.users.permissions import IsAdminOrClerk


@extend_schema_view(
    list=extend_schema(
        tags=["Traffic Fines"],
        summary="List traffic fines",
        description="Newest fine first, each with its payments, paid total and remaining balance.",
    ),
    retrieve=extend_schema(
        tags=["Traffic Fines"],
        summary="Retrieve a traffic fine",
    ),
    create=extend_schema(
        tags=["Traffic Fines"],
        summary="Record a traffic fine",
    ),
    destroy=extend_schema(
        tags=["Traffic Fines"],
        summary="Delete a traffic fine",
        description="Removes the fine together with its payments.",
    ),
)
class TrafficFineViewSet(
    mixins.ListModelMixin,
    mixins.RetrieveModelMixin,
    mixins.CreateModelMixin,
    mixins.DestroyModelMixin,
    viewsets.GenericViewSet,
):
    serializer_class = TrafficFineSerializer
    permission_classes = [IsAuthenticated, IsAdminOrClerk]
    filterset_class = TrafficFineFilter

    def get_queryset(self):
        return fines_with_balance()

    def retrieve(self, request, *args, **kwargs):
        fine = services.get_fine(kwargs["pk"])
        return Response(self.get_serializer(fine).data)

    def create(self, request, *args, **kwargs):
        serializer = self.get_serializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        fine = services.create_fine(request.user, **serializer.validated_data)
        return Response(self.get_serializer(fine).data, status=status.HTTP_201_CREATED)

    def destroy(self, request, *args, **kwargs):
        services.delete_fine(request.user, kwargs["pk"])
        return Response(status=status.HTTP_204_NO_CONTENT)

    @extend_schema(
        tags=["Traffic Fines"],
        summary="Add a payment to a traffic fine",
        request=TrafficFinePaymentSerializer,
        responses={201: TrafficFinePaymentSerializer},
    )
    @action(detail=True, methods=["post"])
    def payments(self, request, pk=None):
        serializer = TrafficFinePaymentSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        payment = services.add_payment(request.user, pk, **serializer.validated_data)
        return Response(TrafficFinePaymentSerializer(payment).data, status=status.HTTP_201_CREATED)
