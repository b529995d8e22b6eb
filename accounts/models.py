from django.contrib.auth.models import AbstractUser
from django.db import models


BLOOD_GROUPS = ['A+', 'A-', 'B+', 'B-', 'AB+', 'AB-', 'O+', 'O-']

BLOOD_GROUP_CHOICES = [(group, group) for group in BLOOD_GROUPS]

ROLE_CHOICES = [
    ('admin', 'Admin'),
    ('donor', 'Donor'),
    ('seeker', 'Seeker'),
    ('hospital', 'Hospital'),
]

ROLES = [value for value, _ in ROLE_CHOICES]


class User(AbstractUser):
    """Every actor lives in this table; role tells donors, seekers, hospitals and admins apart."""
    name = models.CharField(max_length=100, blank=True)
    email = models.EmailField(unique=True)
    phone = models.CharField(max_length=20, blank=True)
    location = models.CharField(max_length=200, blank=True)
    role = models.CharField(max_length=10, choices=ROLE_CHOICES, default='seeker')
    verified = models.BooleanField(default=False)

    # Donor profile
    blood_group = models.CharField(max_length=3, choices=BLOOD_GROUP_CHOICES, null=True, blank=True)
    last_donation_date = models.DateTimeField(null=True, blank=True)
    total_donations = models.PositiveIntegerField(default=0)

    # Hospital profile
    hospital_name = models.CharField(max_length=200, blank=True)
    license = models.CharField(max_length=100, blank=True)

    def __str__(self):
        return f"{self.display_name} ({self.role})"

    @property
    def is_admin(self):
        return self.role == 'admin'

    @property
    def is_donor(self):
        return self.role == 'donor'

    @property
    def is_hospital(self):
        return self.role == 'hospital'

    @property
    def display_name(self):
        if self.is_hospital and self.hospital_name:
            return self.hospital_name
        return self.name or self.get_full_name() or self.username
