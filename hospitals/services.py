import logging

from django.db.models import Q
from geopy.distance import geodesic

from .models import Hospital

logger = logging.getLogger(__name__)


def search_by_location(term):
    """Exact city match first; if nothing matches, a substring match on city, address or state."""
    normalized = term.strip().lower()
    active = Hospital.objects.filter(is_active=True)

    hospitals = list(active.filter(city=normalized).order_by('name'))
    if not hospitals:
        hospitals = list(
            active.filter(
                Q(city__icontains=normalized) | Q(address__icontains=normalized) | Q(state__icontains=normalized)
            ).order_by('name')
        )

    logger.info('Found %d hospitals for location "%s"', len(hospitals), term)
    return hospitals


def find_nearby(latitude, longitude, radius_km=10):
    """Active hospitals within radius_km of the point, nearest first, as (hospital, distance_km) pairs."""
    origin = (latitude, longitude)
    nearby = []
    candidates = Hospital.objects.filter(is_active=True, latitude__isnull=False, longitude__isnull=False)
    for hospital in candidates:
        distance = geodesic(origin, (hospital.latitude, hospital.longitude)).km
        if distance <= radius_km:
            nearby.append((hospital, round(distance, 2)))
    nearby.sort(key=lambda pair: pair[1])
    return nearby


def list_hospitals(city=None, limit=50):
    queryset = Hospital.objects.filter(is_active=True)
    if city:
        queryset = queryset.filter(city__icontains=city.strip().lower())
    return list(queryset.order_by('name')[:limit])


def list_cities():
    cities = (
        Hospital.objects.filter(is_active=True)
        .order_by('city')
        .values_list('city', flat=True)
        .distinct()
    )
    return [{'value': city, 'label': city[:1].upper() + city[1:]} for city in cities]
