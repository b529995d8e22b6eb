from rest_framework import serializers

from .models import Notification


class EligibleDonorSerializer(serializers.Serializer):
    """Flattens a ReminderScheduler.list_eligible_donors entry"""
    id = serializers.IntegerField(source='donor.pk')
    name = serializers.CharField(source='donor.display_name')
    email = serializers.EmailField(source='donor.email')
    phone = serializers.CharField(source='donor.phone')
    blood_group = serializers.SerializerMethodField()
    last_donation = serializers.DateTimeField(source='donor.last_donation_date', allow_null=True)
    eligible_from = serializers.DateTimeField()
    reminder_sent = serializers.BooleanField(source='already_reminded')

    def get_blood_group(self, entry):
        return entry['donor'].blood_group or 'Unknown'


class SendSingleReminderSerializer(serializers.Serializer):
    donor_id = serializers.IntegerField()


class NotificationSerializer(serializers.ModelSerializer):
    hospital_name = serializers.CharField(source='hospital.display_name', read_only=True)

    class Meta:
        model = Notification
        fields = ['id', 'hospital', 'hospital_name', 'type', 'message', 'delivery_method',
                  'status', 'sent_at', 'is_read', 'created_at']
        read_only_fields = fields
