"""Permission classes based on user roles."""

from __future__ import annotations

from rest_framework import permissions  # type: ignore


def is_elevated(user) -> bool:
    """True for authenticated users holding an elevated role."""
    if not user or not user.is_authenticated:
        return False
    return hasattr(user, "is_elevated") and user.is_elevated()


class IsElevatedRole(permissions.BasePermission):
    """
    Only admins, super admins, main admins, superVera and storage
    managers pass.
    """

    message = "Only administrators can perform this action."

    def has_permission(self, request, view) -> bool:  # type: ignore
        return is_elevated(request.user)

