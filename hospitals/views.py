from django.shortcuts import get_object_or_404
from rest_framework import permissions, status
from rest_framework.views import APIView

from accounts.utils import success_response, error_response
from . import services
from .models import Hospital
from .serializers import HospitalSerializer, NearbyQuerySerializer


class HospitalListView(APIView):
    permission_classes = [permissions.AllowAny]

    def get(self, request):
        limit = request.query_params.get('limit', '50')
        limit = int(limit) if limit.isdigit() else 50
        hospitals = services.list_hospitals(city=request.query_params.get('city'), limit=limit)
        data = HospitalSerializer(hospitals, many=True).data
        return success_response(data={'hospitals': data}, count=len(data))


class HospitalSearchView(APIView):
    """Search hospitals by city, area or address"""
    permission_classes = [permissions.AllowAny]

    def get(self, request):
        location = request.query_params.get('location', '').strip()
        if not location:
            return error_response(
                'Please provide a location to search',
                status_code=status.HTTP_400_BAD_REQUEST
            )

        hospitals = services.search_by_location(location)
        data = HospitalSerializer(hospitals, many=True).data
        return success_response(
            f'Found {len(data)} hospitals in or near "{location}"',
            data={'hospitals': data},
            searched_location=location,
            count=len(data)
        )


class HospitalNearbyView(APIView):
    permission_classes = [permissions.AllowAny]

    def get(self, request):
        query = NearbyQuerySerializer(data=request.query_params)
        if not query.is_valid():
            return error_response(
                'Please provide latitude (lat) and longitude (lng)',
                errors=query.errors,
                status_code=status.HTTP_400_BAD_REQUEST
            )

        lat, lng, radius = (query.validated_data[k] for k in ('lat', 'lng', 'radius'))
        nearby = services.find_nearby(lat, lng, radius)
        hospitals = []
        for hospital, distance in nearby:
            item = HospitalSerializer(hospital).data
            item['distance_km'] = distance
            hospitals.append(item)

        return success_response(
            f'Found {len(hospitals)} hospitals within {radius:g}km',
            data={'hospitals': hospitals},
            searched_location={'latitude': lat, 'longitude': lng, 'radius_km': radius},
            count=len(hospitals)
        )


class CityListView(APIView):
    permission_classes = [permissions.AllowAny]

    def get(self, request):
        cities = services.list_cities()
        return success_response(data={'cities': cities}, count=len(cities))


class HospitalDetailView(APIView):
    permission_classes = [permissions.AllowAny]

    def get(self, request, pk):
        hospital = get_object_or_404(Hospital, pk=pk)
        return success_response(data={'hospital': HospitalSerializer(hospital).data})
