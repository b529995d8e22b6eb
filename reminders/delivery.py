import logging
from smtplib import SMTPException

from django.conf import settings
from django.core.mail import send_mail
from rest_framework import status

from raktsetu.exceptions import RaktSetuError

# Console delivery writes reminders here instead of contacting the donor
console_logger = logging.getLogger('reminders.delivery')


class DeliveryError(RaktSetuError):
    status_code = status.HTTP_502_BAD_GATEWAY
    default_message = 'Reminder could not be delivered'


def deliver(notification):
    method = notification.delivery_method
    donor = notification.donor

    if method == 'console':
        console_logger.info("REMINDER SENT to %s (%s): %s", donor.display_name, donor.email, notification.message)
    elif method == 'email':
        try:
            send_mail(
                'Time to donate blood again',
                notification.message,
                settings.DEFAULT_FROM_EMAIL,
                [donor.email],
            )
        except (SMTPException, OSError) as exc:
            raise DeliveryError(f"Could not email {donor.email}") from exc
    else:
        raise DeliveryError(f"Delivery method '{method}' is not configured")
