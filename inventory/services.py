import logging
import re

from django.db import transaction
from django.db.models import F
from django.utils import timezone

from accounts.models import BLOOD_GROUPS
from .exceptions import InvalidQuantity, InvalidBloodGroup, InsufficientStock, NotFound
from .models import BloodInventory

logger = logging.getLogger(__name__)

INTEGER_RE = re.compile(r"-?[0-9]+")


def _clean_blood_group(blood_group):
    if blood_group not in BLOOD_GROUPS:
        raise InvalidBloodGroup(f"Invalid blood group {blood_group!r}. Must be one of: {', '.join(BLOOD_GROUPS)}")
    return blood_group


def _clean_units(units, allow_zero=False):
    """Accept ints and integer strings; reject everything else."""
    if isinstance(units, bool):
        raise InvalidQuantity()
    if isinstance(units, str):
        units = units.strip()
        if not INTEGER_RE.fullmatch(units):
            raise InvalidQuantity()
        units = int(units)
    if not isinstance(units, int):
        raise InvalidQuantity()
    if allow_zero and units < 0:
        raise InvalidQuantity('Units cannot be negative')
    if not allow_zero and units <= 0:
        raise InvalidQuantity()
    return units


class InventoryLedger:
    """Per-hospital, per-blood-group stock counts.

    Counts never go below zero. add_units and reduce_units are each a single
    UPDATE with an F() expression so that concurrent staff actions on the
    same row cannot lose updates.
    """

    @classmethod
    def ensure_initialized(cls, hospital):
        """Seed a zero row for every blood group the hospital does not have yet."""
        existing = set(
            BloodInventory.objects.filter(hospital=hospital).values_list('blood_group', flat=True)
        )
        missing = [group for group in BLOOD_GROUPS if group not in existing]
        if not missing:
            return
        logger.info("Creating default inventory entries for hospital %s: %s", hospital.pk, ', '.join(missing))
        BloodInventory.objects.bulk_create(
            [BloodInventory(hospital=hospital, blood_group=group, units_available=0) for group in missing],
            ignore_conflicts=True,
        )

    @classmethod
    def get_inventory(cls, hospital):
        """Return the hospital's rows ordered by blood group.

        This is a read-modify-write: a hospital with no rows at all gets the
        full set of eight zero rows created before the read.
        """
        queryset = BloodInventory.objects.filter(hospital=hospital).order_by('blood_group')
        if not queryset.exists():
            cls.ensure_initialized(hospital)
        return list(queryset.all())

    @classmethod
    def set_units(cls, hospital, blood_group, units, now=None):
        blood_group = _clean_blood_group(blood_group)
        units = _clean_units(units, allow_zero=True)
        now = now or timezone.now()

        record, _ = BloodInventory.objects.update_or_create(
            hospital=hospital,
            blood_group=blood_group,
            defaults={'units_available': units, 'last_updated': now},
        )
        logger.info("Hospital %s set %s to %d units", hospital.pk, blood_group, units)
        return record

    @classmethod
    def add_units(cls, hospital, blood_group, units, now=None):
        blood_group = _clean_blood_group(blood_group)
        units = _clean_units(units)
        now = now or timezone.now()

        with transaction.atomic():
            record, created = BloodInventory.objects.get_or_create(
                hospital=hospital,
                blood_group=blood_group,
                defaults={'units_available': units, 'last_updated': now},
            )
            if not created:
                BloodInventory.objects.filter(pk=record.pk).update(
                    units_available=F('units_available') + units,
                    last_updated=now,
                )
                record.refresh_from_db()

        logger.info("Hospital %s added %d units of %s, total %d",
                    hospital.pk, units, blood_group, record.units_available)
        return record

    @classmethod
    def reduce_units(cls, hospital, blood_group, units, now=None):
        blood_group = _clean_blood_group(blood_group)
        units = _clean_units(units)
        now = now or timezone.now()

        with transaction.atomic():
            rows = BloodInventory.objects.filter(hospital=hospital, blood_group=blood_group)
            # Conditional decrement: only matches while enough stock remains
            updated = rows.filter(units_available__gte=units).update(
                units_available=F('units_available') - units,
                last_updated=now,
            )
            record = rows.first()
            if record is None:
                raise NotFound(f"No inventory found for blood group {blood_group}")
            if not updated:
                raise InsufficientStock(
                    f"Insufficient stock. Only {record.units_available} units available."
                )

        logger.info("Hospital %s reduced %d units of %s, remaining %d",
                    hospital.pk, units, blood_group, record.units_available)
        return record

    @staticmethod
    def is_low_stock(record):
        return record.units_available <= record.min_threshold
