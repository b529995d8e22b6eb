from rest_framework import permissions


class IsHospitalStaff(permissions.BasePermission):
    message = 'Access denied. Hospital staff only.'

    def has_permission(self, request, view):
        user = request.user
        return bool(user and user.is_authenticated and user.is_hospital)


class IsAdminRole(permissions.BasePermission):
    message = 'Access denied. Admins only.'

    def has_permission(self, request, view):
        user = request.user
        return bool(user and user.is_authenticated and user.is_admin)
