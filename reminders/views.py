from rest_framework import generics, permissions, status
from rest_framework.views import APIView

from accounts.permissions import IsHospitalStaff
from accounts.utils import success_response, error_response
from raktsetu.exceptions import RaktSetuError
from .models import Notification
from .serializers import EligibleDonorSerializer, SendSingleReminderSerializer, NotificationSerializer
from .services import ReminderScheduler


class EligibleDonorListView(APIView):
    """Donors eligible for a reminder from the logged-in hospital"""
    permission_classes = [IsHospitalStaff]

    def get(self, request):
        entries = ReminderScheduler.list_eligible_donors(request.user)
        donors = EligibleDonorSerializer(entries, many=True).data
        return success_response(
            data={
                'donors': donors,
                'pending_reminders': sum(1 for entry in entries if not entry['already_reminded']),
            },
            count=len(donors)
        )


class SendAllRemindersView(APIView):
    permission_classes = [IsHospitalStaff]

    def post(self, request):
        summary = ReminderScheduler.send_all_reminders(request.user)
        message = (
            f"Reminders sent to {summary['sent_count']} eligible donors. "
            f"{summary['skipped_count']} already reminded recently."
        )
        if summary['failed_count']:
            message += f" {summary['failed_count']} could not be sent."
        return success_response(message, data=summary)


class SendSingleReminderView(APIView):
    permission_classes = [IsHospitalStaff]

    def post(self, request):
        serializer = SendSingleReminderSerializer(data=request.data)
        if not serializer.is_valid():
            return error_response(
                "Donor ID is required",
                errors=serializer.errors,
                status_code=status.HTTP_400_BAD_REQUEST
            )

        try:
            notification = ReminderScheduler.send_single_reminder(
                request.user, serializer.validated_data['donor_id']
            )
        except RaktSetuError as e:
            return error_response(e.message, status_code=e.status_code)

        donor = notification.donor
        return success_response(
            f"Reminder sent to {donor.display_name}",
            data={'donor_name': donor.display_name, 'email': donor.email, 'notification_id': notification.id}
        )


class MyNotificationListView(generics.ListAPIView):
    """Recent notifications of the logged-in user"""
    serializer_class = NotificationSerializer
    permission_classes = [permissions.IsAuthenticated]

    def get_queryset(self):
        limit = self.request.query_params.get('limit', '10')
        limit = int(limit) if limit.isdigit() else 10
        return Notification.objects.for_donor(self.request.user, limit=limit)

    def list(self, request, *args, **kwargs):
        serializer = self.get_serializer(self.get_queryset(), many=True)
        return success_response(
            data={'notifications': serializer.data},
            count=len(serializer.data)
        )
