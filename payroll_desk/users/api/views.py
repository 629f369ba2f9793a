import logging

from drf_spectacular.utils import extend_schema
from rest_framework import status
from rest_framework.permissions import AllowAny, IsAuthenticated
from rest_framework.response import Response
from rest_framework.views import APIView
from rest_framework_simplejwt.views import TokenRefreshView

from payroll_desk.users.api.serializers import (
    LoginResponseSerializer,
    LoginSerializer,
    LogoutSerializer,
    UserCreateSerializer,
    UserSerializer,
)
from payroll_desk.users.models import User
from payroll_desk.users.permissions import IsAdmin
from payroll_desk.users.services.user_service import UserService

logger = logging.getLogger(__name__)


class LoginView(APIView):
    authentication_classes = []
    permission_classes = [AllowAny]

    @extend_schema(
        tags=["Authentication"],
        summary="Log in",
        description="Exchange username and password for an access token (24h) and a refresh token.",
        request=LoginSerializer,
        responses={200: LoginResponseSerializer},
    )
    def post(self, request):
        serializer = LoginSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        user, tokens = UserService.login(request, **serializer.validated_data)
        return Response({**tokens, "user": UserSerializer(user).data})


class LogoutView(APIView):
    permission_classes = [IsAuthenticated]

    @extend_schema(
        tags=["Authentication"],
        summary="Log out",
        description="Blacklists the given refresh token. The access token stays valid until it expires.",
        request=LogoutSerializer,
        responses={200: dict},
    )
    def post(self, request):
        serializer = LogoutSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        UserService.logout(serializer.validated_data.get("refresh"))
        logger.info("User %s logged out", request.user.username)
        return Response({"message": "Logged out successfully."})


class MeView(APIView):
    permission_classes = [IsAuthenticated]

    @extend_schema(
        tags=["Authentication"],
        summary="Current user",
        responses={200: UserSerializer},
    )
    def get(self, request):
        return Response(UserSerializer(request.user).data)


@extend_schema(tags=["Authentication"], summary="Refresh the access token")
class RefreshView(TokenRefreshView):
    pass


class UserListCreateView(APIView):
    """Desk accounts. Admin only."""
    permission_classes = [IsAuthenticated, IsAdmin]

    @extend_schema(
        tags=["Authentication"],
        summary="List users",
        responses={200: UserSerializer(many=True)},
    )
    def get(self, request):
        users = User.objects.order_by("username")
        return Response(UserSerializer(users, many=True).data)

    @extend_schema(
        tags=["Authentication"],
        summary="Create a user",
        request=UserCreateSerializer,
        responses={201: UserSerializer},
    )
    def post(self, request):
        serializer = UserCreateSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        user = UserService.create_user(**serializer.validated_data)
        logger.info("User %s created by %s", user.username, request.user.username)
        return Response(UserSerializer(user).data, status=status.HTTP_201_CREATED)
