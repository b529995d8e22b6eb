from django.conf import settings
from django.core.validators import MinValueValidator
from django.db import models
from django.utils import timezone

from accounts.models import BLOOD_GROUP_CHOICES


class BloodRequest(models.Model):
    """Blood request raised by a seeker or a hospital and reviewed by an admin"""
    REQUESTER_TYPE_CHOICES = [
        ('hospital', 'Hospital'),
        ('seeker', 'Seeker'),
    ]
    URGENCY_CHOICES = [
        ('low', 'Low'),
        ('medium', 'Medium'),
        ('high', 'High'),
        ('critical', 'Critical'),
    ]
    STATUS_CHOICES = [
        ('pending', 'Pending'),
        ('approved', 'Approved'),
        ('fulfilled', 'Fulfilled'),
        ('rejected', 'Rejected'),
    ]
    # status -> statuses an admin may move it to
    TRANSITIONS = {
        'pending': ('approved', 'fulfilled', 'rejected'),
        'approved': ('fulfilled', 'rejected'),
        'fulfilled': (),
        'rejected': (),
    }

    requester = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.CASCADE,
        related_name='blood_requests'
    )
    requester_name = models.CharField(max_length=200)
    requester_type = models.CharField(max_length=10, choices=REQUESTER_TYPE_CHOICES)
    blood_group = models.CharField(max_length=3, choices=BLOOD_GROUP_CHOICES)
    units_requested = models.PositiveIntegerField(validators=[MinValueValidator(1)])
    urgency = models.CharField(max_length=10, choices=URGENCY_CHOICES, default='medium')
    reason = models.CharField(max_length=500)
    status = models.CharField(max_length=10, choices=STATUS_CHOICES, default='pending')
    approved_by = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.SET_NULL,
        null=True,
        blank=True,
        related_name='reviewed_blood_requests'
    )
    fulfilled_at = models.DateTimeField(null=True, blank=True)
    notes = models.TextField(blank=True)
    location = models.CharField(max_length=200, blank=True)
    contact_phone = models.CharField(max_length=20, blank=True)
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        ordering = ['-created_at', '-id']
        indexes = [
            models.Index(fields=['status', 'blood_group'], name='bloodreq_status_group'),
            models.Index(fields=['requester'], name='bloodreq_requester'),
        ]

    def __str__(self):
        return f"Request for {self.units_requested} units of {self.blood_group} ({self.status})"

    def is_visible_to(self, user):
        return user.is_admin or self.requester_id == user.pk

    def update_status(self, status, reviewer, notes='', now=None):
        """Move the request along its review flow and record who did it"""
        if status not in self.TRANSITIONS.get(self.status, ()):
            raise ValueError(f"Cannot change a {self.status} request to {status}")

        self.status = status
        if status in ('approved', 'rejected'):
            self.approved_by = reviewer
        if status == 'fulfilled':
            self.fulfilled_at = now or timezone.now()
        if notes:
            self.notes = notes
        self.save()
