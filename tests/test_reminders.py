from datetime import datetime, timedelta, timezone as dt_timezone

import pytest
from django.core import mail
from django.db import DatabaseError
from django.utils import timezone

from raktsetu.exceptions import NotFound
from reminders import services
from reminders.delivery import DeliveryError
from reminders.models import Notification
from reminders.services import ReminderScheduler

pytestmark = pytest.mark.django_db

NOW = datetime(2024, 6, 1, 12, 0, tzinfo=dt_timezone.utc)


@pytest.fixture
def donors(make_user):
    """One donor who never donated, one past the window, one still inside it."""
    return {
        'fresh': make_user('donor', name='Fresh Donor', blood_group='A+'),
        'due': make_user('donor', name='Due Donor', blood_group='O-',
                         last_donation_date=NOW - timedelta(days=120)),
        'recent': make_user('donor', name='Recent Donor', blood_group='B+',
                            last_donation_date=NOW - timedelta(days=20)),
    }


class TestListEligibleDonors:
    def test_only_eligible_donors_in_id_order(self, hospital, donors, make_user):
        make_user('seeker')
        entries = ReminderScheduler.list_eligible_donors(hospital, now=NOW)

        assert [e['donor'] for e in entries] == [donors['fresh'], donors['due']]
        assert all(e['already_reminded'] is False for e in entries)

    def test_eligible_from(self, hospital, donors):
        entries = {e['donor'].pk: e for e in ReminderScheduler.list_eligible_donors(hospital, now=NOW)}

        assert entries[donors['fresh'].pk]['eligible_from'] == NOW
        due = donors['due'].last_donation_date
        assert entries[donors['due'].pk]['eligible_from'] > due + timedelta(days=88)

    def test_flags_donors_reminded_by_this_hospital(self, hospital, donors):
        ReminderScheduler.send_single_reminder(hospital, donors['due'].pk, now=NOW - timedelta(days=3))

        entries = {e['donor'].pk: e for e in ReminderScheduler.list_eligible_donors(hospital, now=NOW)}
        assert entries[donors['due'].pk]['already_reminded'] is True
        assert entries[donors['fresh'].pk]['already_reminded'] is False


class TestSendAllReminders:
    def test_sends_to_every_eligible_donor(self, hospital, donors):
        summary = ReminderScheduler.send_all_reminders(hospital, now=NOW)

        assert summary['sent_count'] == 2
        assert summary['skipped_count'] == 0
        assert summary['failed_count'] == 0
        assert summary['results'] == [
            {'donor_name': 'Fresh Donor', 'email': donors['fresh'].email, 'status': 'sent'},
            {'donor_name': 'Due Donor', 'email': donors['due'].email, 'status': 'sent'},
        ]

        notification = Notification.objects.get(donor=donors['due'])
        assert notification.hospital == hospital
        assert notification.type == 'donation_reminder'
        assert notification.status == 'sent'
        assert notification.sent_at == NOW
        assert notification.delivery_method == 'console'
        assert 'Due Donor' in notification.message
        assert 'Lifeline Hospital' in notification.message
        assert 'O-' in notification.message

    def test_second_run_within_cooldown_skips_everyone(self, hospital, donors):
        ReminderScheduler.send_all_reminders(hospital, now=NOW)
        summary = ReminderScheduler.send_all_reminders(hospital, now=NOW + timedelta(days=10))

        assert summary['sent_count'] == 0
        assert summary['skipped_count'] == 2
        assert summary['results'] == []
        assert Notification.objects.count() == 2

    def test_donor_is_reminded_again_after_cooldown(self, hospital, donors):
        ReminderScheduler.send_all_reminders(hospital, now=NOW)
        summary = ReminderScheduler.send_all_reminders(hospital, now=NOW + timedelta(days=31))

        assert summary['sent_count'] == 2
        assert summary['skipped_count'] == 0
        assert Notification.objects.filter(donor=donors['fresh']).count() == 2

    def test_cooldown_is_per_hospital(self, hospital, donors, make_user):
        other = make_user('hospital')
        ReminderScheduler.send_all_reminders(hospital, now=NOW)

        summary = ReminderScheduler.send_all_reminders(other, now=NOW + timedelta(days=1))
        assert summary['sent_count'] == 2

    def test_only_counted_reminders_suppress(self, hospital, donors):
        Notification.objects.create(donor=donors['fresh'], hospital=hospital, type='thank_you',
                                    message='Thanks!', status='sent', sent_at=NOW)
        Notification.objects.create(donor=donors['due'], hospital=hospital,
                                    message='Drafted', status='pending')

        summary = ReminderScheduler.send_all_reminders(hospital, now=NOW)
        assert summary['sent_count'] == 2

    def test_failure_for_one_donor_does_not_stop_the_rest(self, hospital, donors, monkeypatch):
        real_deliver = services.deliver

        def flaky_deliver(notification):
            if notification.donor == donors['fresh']:
                raise DeliveryError('gateway down')
            real_deliver(notification)

        monkeypatch.setattr(services, 'deliver', flaky_deliver)
        summary = ReminderScheduler.send_all_reminders(hospital, now=NOW)

        assert summary['sent_count'] == 1
        assert summary['failed_count'] == 1
        assert summary['results'][0]['status'] == 'failed'
        assert summary['results'][1]['status'] == 'sent'
        # The failed donor's notification was rolled back
        assert not Notification.objects.filter(donor=donors['fresh']).exists()
        assert Notification.objects.filter(donor=donors['due']).count() == 1

    def test_database_error_is_isolated(self, hospital, donors, monkeypatch):
        def broken_deliver(notification):
            raise DatabaseError('write failed')

        monkeypatch.setattr(services, 'deliver', broken_deliver)
        summary = ReminderScheduler.send_all_reminders(hospital, now=NOW)

        assert summary['sent_count'] == 0
        assert summary['failed_count'] == 2
        assert Notification.objects.count() == 0

    def test_email_delivery(self, hospital, donors, settings):
        settings.RAKTSETU_REMINDER_DELIVERY_METHOD = 'email'
        settings.EMAIL_BACKEND = 'django.core.mail.backends.locmem.EmailBackend'

        ReminderScheduler.send_all_reminders(hospital, now=NOW)

        assert len(mail.outbox) == 2
        assert mail.outbox[0].to == [donors['fresh'].email]
        assert Notification.objects.filter(delivery_method='email').count() == 2


class TestSendSingleReminder:
    def test_ignores_cooldown(self, hospital, donor):
        first = ReminderScheduler.send_single_reminder(hospital, donor.pk, now=NOW)
        second = ReminderScheduler.send_single_reminder(hospital, donor.pk, now=NOW + timedelta(seconds=30))

        assert first.pk != second.pk
        assert Notification.objects.filter(donor=donor, hospital=hospital).count() == 2

    def test_sends_even_when_not_eligible(self, hospital, make_user):
        donor = make_user('donor', last_donation_date=NOW - timedelta(days=5))
        notification = ReminderScheduler.send_single_reminder(hospital, donor.pk, now=NOW)
        assert notification.status == 'sent'
        assert notification.sent_at == NOW

    def test_unknown_donor(self, hospital):
        with pytest.raises(NotFound):
            ReminderScheduler.send_single_reminder(hospital, 999999)

    def test_non_donor_user_is_not_found(self, hospital, make_user):
        seeker = make_user('seeker')
        with pytest.raises(NotFound):
            ReminderScheduler.send_single_reminder(hospital, seeker.pk)

    def test_malformed_id_is_not_found(self, hospital):
        with pytest.raises(NotFound):
            ReminderScheduler.send_single_reminder(hospital, 'not-an-id')


class TestNotificationModel:
    def test_mark_as_sent(self, hospital, donor):
        notification = Notification.objects.create(donor=donor, hospital=hospital, message='Hi')
        assert notification.status == 'pending'

        notification.mark_as_sent(NOW)
        notification.refresh_from_db()
        assert notification.status == 'sent'
        assert notification.sent_at == NOW

    def test_mark_as_sent_only_from_pending(self, hospital, donor):
        notification = Notification.objects.create(donor=donor, hospital=hospital, message='Hi', status='sent')
        with pytest.raises(ValueError):
            notification.mark_as_sent()

    def test_was_reminder_sent_recently_window(self, hospital, donor):
        Notification.objects.create(donor=donor, hospital=hospital, message='Hi', status='sent', sent_at=NOW)

        assert Notification.objects.was_reminder_sent_recently(donor, hospital, days=30, now=NOW + timedelta(days=29))
        assert not Notification.objects.was_reminder_sent_recently(donor, hospital, days=30, now=NOW + timedelta(days=31))


@pytest.fixture
def live_donors(make_user):
    now = timezone.now()
    return {
        'fresh': make_user('donor', name='Fresh Donor', blood_group='A+'),
        'due': make_user('donor', name='Due Donor', blood_group='O-',
                         last_donation_date=now - timedelta(days=120)),
        'recent': make_user('donor', name='Recent Donor', blood_group='B+',
                            last_donation_date=now - timedelta(days=20)),
    }


class TestRemindersApi:
    def test_list(self, client_for, hospital, live_donors):
        response = client_for(hospital).get('/api/hospital/reminders/')

        assert response.status_code == 200
        body = response.json()
        assert body['success'] is True
        assert body['count'] == 2
        assert body['data']['pending_reminders'] == 2
        names = [d['name'] for d in body['data']['donors']]
        assert names == ['Fresh Donor', 'Due Donor']
        assert body['data']['donors'][0]['reminder_sent'] is False

    def test_send_all(self, client_for, hospital, live_donors):
        client = client_for(hospital)
        response = client.post('/api/hospital/reminders/send/')

        body = response.json()
        assert response.status_code == 200
        assert body['data']['sent_count'] == 2
        assert body['message'] == 'Reminders sent to 2 eligible donors. 0 already reminded recently.'

        body = client.post('/api/hospital/reminders/send/').json()
        assert body['data']['skipped_count'] == 2

        listing = client.get('/api/hospital/reminders/').json()
        assert listing['data']['pending_reminders'] == 0

    def test_send_single(self, client_for, hospital, donor):
        response = client_for(hospital).post(
            '/api/hospital/reminders/send-single/', {'donor_id': donor.pk}, format='json'
        )
        assert response.status_code == 200
        assert response.json()['message'] == 'Reminder sent to Asha Rao'

    def test_send_single_requires_donor_id(self, client_for, hospital):
        response = client_for(hospital).post('/api/hospital/reminders/send-single/', {}, format='json')
        assert response.status_code == 400
        assert response.json()['message'] == 'Donor ID is required'

    def test_send_single_unknown_donor(self, client_for, hospital):
        response = client_for(hospital).post(
            '/api/hospital/reminders/send-single/', {'donor_id': 424242}, format='json'
        )
        assert response.status_code == 404
        assert response.json() == {'success': False, 'message': 'Donor not found'}

    def test_donor_sees_own_notifications(self, client_for, hospital, donor):
        ReminderScheduler.send_single_reminder(hospital, donor.pk)

        response = client_for(donor).get('/api/notifications/')
        body = response.json()
        assert body['count'] == 1
        assert body['data']['notifications'][0]['hospital_name'] == 'Lifeline Hospital'

    def test_donors_cannot_send_reminders(self, client_for, donor):
        response = client_for(donor).post('/api/hospital/reminders/send/')
        assert response.status_code == 403
