from django.conf import settings
from django.db import models
from django.utils import timezone

from accounts.models import BLOOD_GROUP_CHOICES


def default_min_threshold():
    return settings.RAKTSETU_LOW_STOCK_THRESHOLD


class BloodInventory(models.Model):
    """Units of blood held by one hospital for one blood group"""
    hospital = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.CASCADE,
        related_name='inventory',
        limit_choices_to={'role': 'hospital'},
    )
    blood_group = models.CharField(max_length=3, choices=BLOOD_GROUP_CHOICES)
    units_available = models.PositiveIntegerField(default=0)
    min_threshold = models.PositiveIntegerField(default=default_min_threshold)
    last_updated = models.DateTimeField(default=timezone.now)
    created_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        verbose_name_plural = "Blood inventory"
        ordering = ['hospital', 'blood_group']
        constraints = [
            models.UniqueConstraint(fields=['hospital', 'blood_group'], name='unique_hospital_blood_group'),
            models.CheckConstraint(condition=models.Q(units_available__gte=0), name='units_available_non_negative'),
        ]

    def __str__(self):
        return f"{self.hospital.display_name} {self.blood_group}: {self.units_available} units"

    @property
    def is_low_stock(self):
        # Zero and exactly-at-threshold both count as low
        return self.units_available <= self.min_threshold
