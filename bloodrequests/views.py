import logging

from rest_framework import generics, status, permissions
from rest_framework.exceptions import PermissionDenied
from rest_framework.views import APIView

from accounts.utils import success_response, error_response
from .models import BloodRequest
from .serializers import BloodRequestSerializer, BloodRequestStatusSerializer

logger = logging.getLogger(__name__)

REQUESTER_ROLES = ('seeker', 'hospital')


class BloodRequestListCreateView(generics.ListCreateAPIView):
    """Seekers and hospitals see their own requests, everyone else sees all of them"""
    serializer_class = BloodRequestSerializer
    permission_classes = [permissions.IsAuthenticated]

    def get_queryset(self):
        queryset = BloodRequest.objects.select_related('approved_by')
        if self.request.user.role in REQUESTER_ROLES:
            queryset = queryset.filter(requester=self.request.user)

        # Filter by status if provided
        request_status = self.request.query_params.get('status')
        if request_status:
            queryset = queryset.filter(status=request_status)
        return queryset

    def list(self, request, *args, **kwargs):
        serializer = self.get_serializer(self.get_queryset(), many=True)
        return success_response(
            data={'requests': serializer.data},
            count=len(serializer.data)
        )

    def create(self, request, *args, **kwargs):
        if request.user.role not in REQUESTER_ROLES:
            raise PermissionDenied("Access denied. Only seekers and hospitals can request blood.")

        serializer = self.get_serializer(data=request.data)
        if not serializer.is_valid():
            return error_response(
                "Unable to create blood request",
                errors=serializer.errors,
                status_code=status.HTTP_400_BAD_REQUEST
            )

        blood_request = serializer.save()
        logger.info("%s %s requested %d units of %s (%s)", blood_request.requester_type,
                    request.user.email, blood_request.units_requested,
                    blood_request.blood_group, blood_request.urgency)
        return success_response(
            "Blood request created successfully",
            data={'request': serializer.data},
            status_code=status.HTTP_201_CREATED
        )


class BloodRequestDetailView(APIView):
    """Owner or admin can read and delete; only admins change the status"""
    permission_classes = [permissions.IsAuthenticated]

    def get_object(self, pk):
        return BloodRequest.objects.select_related('approved_by').filter(pk=pk).first()

    def get(self, request, pk):
        blood_request = self.get_object(pk)
        if blood_request is None:
            return error_response("Blood request not found", status_code=status.HTTP_404_NOT_FOUND)
        if not blood_request.is_visible_to(request.user):
            raise PermissionDenied("Not authorized to view this request")
        return success_response(data={'request': BloodRequestSerializer(blood_request).data})

    def put(self, request, pk):
        if not request.user.is_admin:
            raise PermissionDenied("Access denied. Admins only.")

        blood_request = self.get_object(pk)
        if blood_request is None:
            return error_response("Blood request not found", status_code=status.HTTP_404_NOT_FOUND)

        serializer = BloodRequestStatusSerializer(data=request.data)
        if not serializer.is_valid():
            return error_response("Invalid data provided", errors=serializer.errors)

        new_status = serializer.validated_data.get('status')
        notes = serializer.validated_data.get('notes', '')
        if new_status:
            try:
                blood_request.update_status(new_status, request.user, notes=notes)
            except ValueError as e:
                return error_response(str(e), status_code=status.HTTP_400_BAD_REQUEST)
            logger.info("Admin %s marked blood request %s as %s", request.user.email, pk, new_status)
        else:
            blood_request.notes = notes
            blood_request.save(update_fields=['notes', 'updated_at'])

        return success_response(
            "Request updated successfully",
            data={'request': BloodRequestSerializer(blood_request).data}
        )

    def delete(self, request, pk):
        blood_request = self.get_object(pk)
        if blood_request is None:
            return error_response("Blood request not found", status_code=status.HTTP_404_NOT_FOUND)
        if not blood_request.is_visible_to(request.user):
            raise PermissionDenied("Not authorized to delete this request")

        blood_request.delete()
        logger.info("User %s deleted blood request %s", request.user.email, pk)
        return success_response("Request deleted successfully")
