from rest_framework import serializers

from .models import BloodInventory


class InventorySerializer(serializers.ModelSerializer):
    is_low_stock = serializers.BooleanField(read_only=True)

    class Meta:
        model = BloodInventory
        fields = ['id', 'blood_group', 'units_available', 'last_updated', 'is_low_stock', 'min_threshold']
        read_only_fields = fields


class InventoryChangeSerializer(serializers.Serializer):
    """Body of the add/update/reduce endpoints.

    Only presence is checked here. Values go to the ledger untouched so that
    bad blood groups and quantities get its error messages.
    """
    blood_group = serializers.CharField()
    units = serializers.JSONField()
