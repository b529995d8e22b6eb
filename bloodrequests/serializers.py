from rest_framework import serializers

from .models import BloodRequest


class BloodRequestSerializer(serializers.ModelSerializer):
    approved_by_name = serializers.SerializerMethodField()

    class Meta:
        model = BloodRequest
        fields = ['id', 'requester', 'requester_name', 'requester_type', 'blood_group',
                  'units_requested', 'urgency', 'reason', 'status', 'approved_by',
                  'approved_by_name', 'fulfilled_at', 'notes', 'location', 'contact_phone',
                  'created_at', 'updated_at']
        read_only_fields = ['requester', 'requester_name', 'requester_type', 'status',
                            'approved_by', 'fulfilled_at', 'notes', 'created_at', 'updated_at']
        extra_kwargs = {
            'units_requested': {'error_messages': {'min_value': 'At least 1 unit must be requested'}},
            'reason': {'error_messages': {'max_length': 'Reason cannot exceed 500 characters'}},
        }

    def get_approved_by_name(self, obj):
        return obj.approved_by.display_name if obj.approved_by else None

    def create(self, validated_data):
        user = self.context['request'].user
        validated_data['requester'] = user
        validated_data['requester_name'] = user.display_name
        validated_data['requester_type'] = 'hospital' if user.is_hospital else 'seeker'
        if not validated_data.get('contact_phone'):
            validated_data['contact_phone'] = user.phone
        return super().create(validated_data)


class BloodRequestStatusSerializer(serializers.Serializer):
    """Admin review of a request: a new status, notes, or both"""
    status = serializers.ChoiceField(choices=BloodRequest.STATUS_CHOICES, required=False)
    notes = serializers.CharField(required=False, allow_blank=True)

    def validate(self, data):
        if not data.get('status') and not data.get('notes'):
            raise serializers.ValidationError("Provide a status or notes to update")
        return data
