import logging

from django.contrib.auth import get_user_model
from django.db.models import Count, F, Sum
from django.shortcuts import get_object_or_404
from rest_framework import generics, status, permissions, serializers
from rest_framework.views import APIView
from rest_framework_simplejwt.views import TokenObtainPairView
from rest_framework_simplejwt.serializers import TokenObtainPairSerializer

from bloodrequests.models import BloodRequest
from inventory.models import BloodInventory
from reminders.models import Notification
from .models import ROLES
from .permissions import IsAdminRole
from .serializers import RegisterSerializer, ProfileSerializer, UserSummarySerializer, RoleUpdateSerializer
from .utils import success_response, error_response

logger = logging.getLogger(__name__)

User = get_user_model()


class RegisterView(generics.CreateAPIView):
    serializer_class = RegisterSerializer
    permission_classes = (permissions.AllowAny,)

    def create(self, request, *args, **kwargs):
        serializer = self.get_serializer(data=request.data)
        if not serializer.is_valid():
            return error_response(
                'Unable to register',
                errors=serializer.errors,
                status_code=status.HTTP_400_BAD_REQUEST
            )

        user = serializer.save()
        logger.info("Registered %s user %s", user.role, user.email)
        data = {"id": user.id, "name": user.name, "email": user.email, "role": user.role}
        return success_response(
            'Register successful',
            data=data,
            status_code=status.HTTP_201_CREATED
        )


class CustomTokenObtainPairSerializer(TokenObtainPairSerializer):
    def validate(self, attrs):
        # usernames are stored as the lower-cased email
        attrs[self.username_field] = attrs[self.username_field].strip().lower()
        data = super().validate(attrs)
        data['user'] = {
            'id': self.user.id,
            'name': self.user.display_name,
            'email': self.user.email,
            'role': self.user.role,
        }
        return data


class CustomTokenObtainPairView(TokenObtainPairView):
    serializer_class = CustomTokenObtainPairSerializer

    def post(self, request, *args, **kwargs):
        serializer = self.get_serializer(data=request.data)
        try:
            serializer.is_valid(raise_exception=True)
        except serializers.ValidationError as exc:
            return error_response(
                'Unable to login',
                errors=exc.detail,
                status_code=status.HTTP_400_BAD_REQUEST
            )

        return success_response(
            'Login successful',
            data=serializer.validated_data,
            status_code=status.HTTP_200_OK
        )


class LogoutView(APIView):
    permission_classes = (permissions.IsAuthenticated,)

    def post(self, request):
        # Stateless logout - client should discard tokens
        return success_response('Logout successful')


class ProfileView(generics.RetrieveUpdateAPIView):
    serializer_class = ProfileSerializer
    permission_classes = (permissions.IsAuthenticated,)

    def get_object(self):
        return self.request.user

    def retrieve(self, request, *args, **kwargs):
        serializer = self.get_serializer(self.get_object())
        return success_response('Profile retrieved', serializer.data)

    def update(self, request, *args, **kwargs):
        partial = kwargs.pop('partial', False)
        serializer = self.get_serializer(self.get_object(), data=request.data, partial=partial)
        if not serializer.is_valid():
            return error_response('Unable to update profile', serializer.errors)
        serializer.save()
        return success_response('Profile updated', serializer.data)


class AdminUserListView(generics.ListAPIView):
    """List users, optionally filtered by role (admin only)"""
    serializer_class = UserSummarySerializer
    permission_classes = [IsAdminRole]

    def get_queryset(self):
        queryset = User.objects.all()
        role = self.request.query_params.get('role')
        if role:
            queryset = queryset.filter(role=role)
        return queryset.order_by('-date_joined')

    def list(self, request, *args, **kwargs):
        serializer = self.get_serializer(self.get_queryset(), many=True)
        return success_response(
            "Users retrieved successfully",
            data={'users': serializer.data},
            count=len(serializer.data)
        )


class AdminUserRoleView(APIView):
    permission_classes = [IsAdminRole]

    def put(self, request, pk):
        serializer = RoleUpdateSerializer(data=request.data)
        if not serializer.is_valid():
            return error_response('Invalid role', errors=serializer.errors)

        user = get_object_or_404(User, pk=pk)
        user.role = serializer.validated_data['role']
        user.save(update_fields=['role'])
        logger.info("Admin %s changed role of %s to %s", request.user.email, user.email, user.role)
        return success_response('User role updated successfully', data=UserSummarySerializer(user).data)


class AdminUserDeleteView(APIView):
    permission_classes = [IsAdminRole]

    def delete(self, request, pk):
        user = get_object_or_404(User, pk=pk)
        if user.pk == request.user.pk:
            return error_response('You cannot delete your own account')
        logger.info("Admin %s deleted user %s", request.user.email, user.email)
        user.delete()
        return success_response('User deleted successfully')


class AdminStatsView(APIView):
    """Counts by role, stock held across hospitals, blood requests and reminders sent"""
    permission_classes = [IsAdminRole]

    def get(self, request):
        by_role = dict(User.objects.values_list('role').annotate(total=Count('id')))
        users = {role: by_role.get(role, 0) for role in ROLES}
        users['total'] = sum(users.values())

        inventory = BloodInventory.objects.aggregate(total_units=Sum('units_available'))
        low_stock_rows = BloodInventory.objects.filter(units_available__lte=F('min_threshold')).count()

        by_status = dict(BloodRequest.objects.order_by().values_list('status').annotate(total=Count('id')))
        requests = {value: by_status.get(value, 0) for value, _ in BloodRequest.STATUS_CHOICES}
        requests['total'] = sum(requests.values())
        requests['by_blood_group'] = dict(
            BloodRequest.objects.order_by().values_list('blood_group').annotate(total=Count('id'))
        )

        data = {
            'users': users,
            'inventory': {
                'total_units': inventory['total_units'] or 0,
                'low_stock_rows': low_stock_rows,
            },
            'requests': requests,
            'reminders': {
                'sent': Notification.objects.filter(type='donation_reminder', status='sent').count(),
            },
        }
        return success_response("Stats retrieved successfully", data=data)
