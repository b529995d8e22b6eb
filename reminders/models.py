from datetime import timedelta

from django.conf import settings
from django.db import models
from django.utils import timezone


class NotificationQuerySet(models.QuerySet):
    def reminders(self):
        return self.filter(type='donation_reminder')

    def was_reminder_sent_recently(self, donor, hospital, days=None, now=None):
        """True if this hospital sent this donor a donation reminder within the last `days` days."""
        if days is None:
            days = settings.RAKTSETU_REMINDER_COOLDOWN_DAYS
        now = now or timezone.now()
        return self.reminders().filter(
            donor=donor,
            hospital=hospital,
            sent_at__gte=now - timedelta(days=days),
        ).exists()

    def for_donor(self, donor, limit=10):
        return self.filter(donor=donor).select_related('hospital').order_by('-created_at')[:limit]


class Notification(models.Model):
    """Reminders and other messages sent from a hospital to a donor"""
    TYPE_CHOICES = [
        ('donation_reminder', 'Donation Reminder'),
        ('blood_request', 'Blood Request'),
        ('thank_you', 'Thank You'),
        ('general', 'General'),
    ]
    DELIVERY_CHOICES = [
        ('email', 'Email'),
        ('sms', 'SMS'),
        ('app', 'App'),
        ('console', 'Console'),
    ]
    STATUS_CHOICES = [
        ('pending', 'Pending'),
        ('sent', 'Sent'),
        ('delivered', 'Delivered'),
        ('failed', 'Failed'),
    ]

    donor = models.ForeignKey(settings.AUTH_USER_MODEL, on_delete=models.CASCADE, related_name='notifications')
    hospital = models.ForeignKey(settings.AUTH_USER_MODEL, on_delete=models.CASCADE, related_name='sent_notifications')
    type = models.CharField(max_length=20, choices=TYPE_CHOICES, default='donation_reminder')
    message = models.CharField(max_length=500)
    delivery_method = models.CharField(max_length=10, choices=DELIVERY_CHOICES, default='console')
    status = models.CharField(max_length=10, choices=STATUS_CHOICES, default='pending')
    sent_at = models.DateTimeField(null=True, blank=True)
    is_read = models.BooleanField(default=False)
    created_at = models.DateTimeField(auto_now_add=True)

    objects = NotificationQuerySet.as_manager()

    class Meta:
        ordering = ['-created_at']
        indexes = [
            models.Index(fields=['donor', 'hospital', 'type'], name='notif_donor_hospital_type'),
            models.Index(fields=['status'], name='notif_status'),
        ]

    def __str__(self):
        return f"{self.get_type_display()} to {self.donor.display_name} ({self.status})"

    def mark_as_sent(self, now=None):
        if self.status != 'pending':
            raise ValueError("Can only mark pending notifications as sent")
        self.status = 'sent'
        self.sent_at = now or timezone.now()
        self.save(update_fields=['status', 'sent_at'])
