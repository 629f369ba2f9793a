import logging

from django.contrib.auth import authenticate, get_user_model
from django.db import transaction
from rest_framework_simplejwt.exceptions import TokenError
from rest_framework_simplejwt.tokens import RefreshToken

from payroll_desk.common.exceptions import InvalidCredentials, PayrollDeskError, ValidationFailed

User = get_user_model()
logger = logging.getLogger(__name__)


class UserExists(PayrollDeskError):
    status_code = 409
    default_code = "USER_EXISTS"
    default_detail = "A user with this username already exists."


class UserService:

    @staticmethod
    def issue_tokens(user):
        """Refresh/access pair carrying the username and role claims."""
        refresh = RefreshToken.for_user(user)
        refresh["username"] = user.username
        refresh["role"] = user.role
        return {
            "token": str(refresh.access_token),
            "refresh": str(refresh),
        }

    @staticmethod
    def login(request, username, password):
        user = authenticate(request, username=username, password=password)
        if user is None or not user.is_active:
            logger.warning("Failed login attempt for %s", username)
            raise InvalidCredentials()
        logger.info("User %s logged in", user.username)
        return user, UserService.issue_tokens(user)

    @staticmethod
    def logout(refresh_token=None):
        """Blacklist the refresh token if one is given; access tokens simply expire."""
        if not refresh_token:
            return
        try:
            RefreshToken(refresh_token).blacklist()
        except TokenError as e:
            raise ValidationFailed(details={"refresh": [str(e)]})

    @staticmethod
    @transaction.atomic
    def create_user(username, password, role=User.USER):
        if User.objects.filter(username=username).exists():
            raise UserExists()
        user = User.objects.create_user(
            username=username,
            password=password,
            role=role,
            is_staff=role == User.ADMIN,
        )
        logger.info("Created user %s with role %s", username, role)
        return user
