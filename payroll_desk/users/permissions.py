from rest_framework.permissions import BasePermission
from rolepermissions.checkers import has_permission, has_role


class IsAdmin(BasePermission):
    def has_permission(self, request, view):
        return request.user.is_authenticated and has_role(request.user, 'admin')


class IsAdminOrClerk(BasePermission):
    def has_permission(self, request, view):
        return (
            request.user.is_authenticated and
            has_role(request.user, ['admin', 'clerk'])
        )


class CanDeleteEmployees(BasePermission):
    def has_permission(self, request, view):
        return (
            request.user.is_authenticated and
            has_permission(request.user, 'delete_employees')
        )
