from django.db import models

from accounts.models import BLOOD_GROUPS


class Hospital(models.Model):
    """A hospital seekers can find by location"""
    TYPE_CHOICES = [
        ('government', 'Government'),
        ('private', 'Private'),
        ('trust', 'Trust'),
        ('clinic', 'Clinic'),
    ]

    name = models.CharField(max_length=200)
    email = models.EmailField(blank=True)
    phone = models.CharField(max_length=30)
    website = models.URLField(blank=True)

    address = models.CharField(max_length=300)
    city = models.CharField(max_length=100, db_index=True)  # stored lower-cased
    state = models.CharField(max_length=100, blank=True)
    pincode = models.CharField(max_length=10, blank=True)
    latitude = models.FloatField(null=True, blank=True)
    longitude = models.FloatField(null=True, blank=True)

    type = models.CharField(max_length=20, choices=TYPE_CHOICES, default='private')
    has_blood_bank = models.BooleanField(default=True)
    blood_bank_license = models.CharField(max_length=100, blank=True)
    available_blood_groups = models.JSONField(default=list, blank=True)

    opens_at = models.TimeField(null=True, blank=True)
    closes_at = models.TimeField(null=True, blank=True)
    is_24x7 = models.BooleanField(default=True)

    is_active = models.BooleanField(default=True)
    verified = models.BooleanField(default=False)
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        ordering = ['name']

    def __str__(self):
        return f"{self.name} ({self.city})"

    def save(self, *args, **kwargs):
        self.city = self.city.strip().lower()
        self.available_blood_groups = [g for g in BLOOD_GROUPS if g in (self.available_blood_groups or [])]
        super().save(*args, **kwargs)

    @property
    def coordinates(self):
        if self.latitude is None or self.longitude is None:
            return None
        return [self.longitude, self.latitude]
