from rest_framework import serializers

from .models import Hospital


class HospitalSerializer(serializers.ModelSerializer):
    coordinates = serializers.ListField(child=serializers.FloatField(), read_only=True, allow_null=True)

    class Meta:
        model = Hospital
        fields = ['id', 'name', 'address', 'city', 'state', 'pincode', 'phone', 'email', 'website',
                  'type', 'has_blood_bank', 'available_blood_groups', 'is_24x7', 'coordinates']
        read_only_fields = fields


class NearbyQuerySerializer(serializers.Serializer):
    lat = serializers.FloatField(min_value=-90, max_value=90)
    lng = serializers.FloatField(min_value=-180, max_value=180)
    radius = serializers.FloatField(min_value=0, default=10)
