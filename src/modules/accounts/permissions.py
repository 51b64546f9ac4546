from rest_framework.permissions import SAFE_METHODS, BasePermission


class CanManageUsers(BasePermission):
    """Reads for any authenticated user; writes for superadmins and admins."""

    message = "Only administrators can modify user accounts."

    def has_permission(self, request, view) -> bool:
        user = request.user
        if not (user and user.is_authenticated):
            return False
        if request.method in SAFE_METHODS:
            return True
        return bool(getattr(user, "can_manage_users", False))
