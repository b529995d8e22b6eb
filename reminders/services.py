import logging

from django.conf import settings
from django.contrib.auth import get_user_model
from django.db import DatabaseError, transaction
from django.utils import timezone

from raktsetu.exceptions import NotFound
from .delivery import DeliveryError, deliver
from .eligibility import eligible_from, is_eligible
from .models import Notification

logger = logging.getLogger(__name__)

User = get_user_model()

MESSAGE_MAX_LENGTH = 500


def build_reminder_message(donor, hospital, include_blood_group=True):
    message = (
        f"Hello {donor.display_name}! You're eligible to donate blood again. "
        f"Please visit {hospital.display_name} to save a life."
    )
    if include_blood_group:
        message += f" Your blood type {donor.blood_group or ''} is needed!"
    return message[:MESSAGE_MAX_LENGTH]


class ReminderScheduler:
    """Works out which donors a hospital may remind and sends the reminders.

    Runs only when a hospital asks for it. There is no background job. The
    bulk path skips donors this hospital reminded within the cooldown window;
    the single-donor path is an explicit override and never checks it.

    The cooldown check is a plain read, so two bulk sends running at the same
    time can both remind the same donor. Each call on its own reminds a donor
    at most once.
    """

    @classmethod
    def list_eligible_donors(cls, hospital, now=None):
        """Eligible donors in id order, each flagged with whether this hospital reminded them recently."""
        now = now or timezone.now()
        cooldown = settings.RAKTSETU_REMINDER_COOLDOWN_DAYS

        eligible = []
        for donor in User.objects.filter(role='donor').order_by('pk'):
            if not is_eligible(donor.last_donation_date, now):
                continue
            eligible.append({
                'donor': donor,
                'eligible_from': eligible_from(donor.last_donation_date, now),
                'already_reminded': Notification.objects.was_reminder_sent_recently(
                    donor, hospital, days=cooldown, now=now
                ),
            })
        return eligible

    @classmethod
    def send_all_reminders(cls, hospital, now=None):
        """Remind every eligible donor not reminded within the cooldown.

        Best effort: each donor is recorded and delivered in its own
        transaction. A failure for one donor rolls back only that donor's
        notification and is reported with status "failed", so the counts
        always match the rows written.
        """
        now = now or timezone.now()
        logger.info("Sending reminders from hospital: %s", hospital.display_name)

        sent_count = 0
        skipped_count = 0
        failed_count = 0
        results = []

        for entry in cls.list_eligible_donors(hospital, now):
            donor = entry['donor']
            if entry['already_reminded']:
                skipped_count += 1
                continue

            message = build_reminder_message(donor, hospital)
            try:
                cls._send(donor, hospital, message, now)
            except (DatabaseError, DeliveryError):
                logger.exception("Failed to send reminder to donor %s", donor.pk)
                failed_count += 1
                results.append({'donor_name': donor.display_name, 'email': donor.email, 'status': 'failed'})
                continue

            sent_count += 1
            results.append({'donor_name': donor.display_name, 'email': donor.email, 'status': 'sent'})

        logger.info("Sent %d reminders, skipped %d (already reminded), %d failed",
                    sent_count, skipped_count, failed_count)
        return {
            'sent_count': sent_count,
            'skipped_count': skipped_count,
            'failed_count': failed_count,
            'results': results,
        }

    @classmethod
    def send_single_reminder(cls, hospital, donor_id, now=None):
        try:
            donor = User.objects.filter(pk=donor_id, role='donor').first()
        except (TypeError, ValueError):
            donor = None
        if donor is None:
            raise NotFound('Donor not found')

        message = build_reminder_message(donor, hospital, include_blood_group=False)
        return cls._send(donor, hospital, message, now or timezone.now())

    @staticmethod
    def _send(donor, hospital, message, now):
        with transaction.atomic():
            notification = Notification.objects.create(
                donor=donor,
                hospital=hospital,
                type='donation_reminder',
                message=message,
                delivery_method=settings.RAKTSETU_REMINDER_DELIVERY_METHOD,
            )
            notification.mark_as_sent(now)
            deliver(notification)
        return notification
