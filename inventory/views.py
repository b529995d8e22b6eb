from rest_framework import generics, status
from rest_framework.views import APIView

from accounts.permissions import IsHospitalStaff
from accounts.utils import success_response, error_response
from raktsetu.exceptions import RaktSetuError
from .serializers import InventorySerializer, InventoryChangeSerializer
from .services import InventoryLedger


class InventoryListView(generics.ListAPIView):
    """Blood inventory of the logged-in hospital"""
    serializer_class = InventorySerializer
    permission_classes = [IsHospitalStaff]

    def list(self, request, *args, **kwargs):
        records = InventoryLedger.get_inventory(request.user)
        serializer = self.get_serializer(records, many=True)
        return success_response(
            data={'inventory': serializer.data},
            count=len(serializer.data)
        )


class InventoryChangeView(APIView):
    """Shared body handling for the add/update/reduce endpoints.

    Subclasses name the InventoryLedger method to call and the success message.
    """
    permission_classes = [IsHospitalStaff]
    operation = None
    message = None

    def post(self, request):
        serializer = InventoryChangeSerializer(data=request.data)
        if not serializer.is_valid():
            return error_response(
                "Blood group and units are required",
                errors=serializer.errors,
                status_code=status.HTTP_400_BAD_REQUEST
            )

        blood_group = serializer.validated_data['blood_group']
        units = serializer.validated_data['units']
        try:
            record = getattr(InventoryLedger, self.operation)(request.user, blood_group, units)
        except RaktSetuError as e:
            return error_response(e.message, status_code=e.status_code)

        return success_response(
            self.message.format(units=int(units), blood_group=record.blood_group, total=record.units_available),
            data={
                'blood_group': record.blood_group,
                'units_available': record.units_available,
                'last_updated': record.last_updated,
                'is_low_stock': record.is_low_stock,
            }
        )


class InventoryAddView(InventoryChangeView):
    operation = 'add_units'
    message = "Added {units} units of {blood_group}. Total: {total}"


class InventoryUpdateView(InventoryChangeView):
    operation = 'set_units'
    message = "Updated {blood_group} to {units} units"


class InventoryReduceView(InventoryChangeView):
    operation = 'reduce_units'
    message = "Reduced {units} units of {blood_group}. Remaining: {total}"
