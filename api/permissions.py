"""
Custom DRF permission classes for API views.
"""
from rest_framework.permissions import BasePermission, SAFE_METHODS


class IsStaffOrReadOnly(BasePermission):
    """
    Anyone may read; only staff users may create, edit or delete posts.
    """
    message = "Staff access required."

    def has_permission(self, request, view):
        if request.method in SAFE_METHODS:
            return True
        return bool(request.user and request.user.is_authenticated and request.user.is_staff)
