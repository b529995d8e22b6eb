import logging

from django.conf import settings
from django.contrib.auth import get_user_model
from django.core.management.base import BaseCommand, CommandError

logger = logging.getLogger(__name__)


class Command(BaseCommand):
    help = "Create the RaktSetu admin account once. Running it again leaves an existing admin untouched."

    def add_arguments(self, parser):
        parser.add_argument('--email', default=None, help='Defaults to RAKTSETU_ADMIN_EMAIL')
        parser.add_argument('--password', default=None, help='Defaults to RAKTSETU_ADMIN_PASSWORD')
        parser.add_argument('--name', default=None, help='Defaults to RAKTSETU_ADMIN_NAME')

    def handle(self, *args, **options):
        email = options['email'] or settings.RAKTSETU_ADMIN_EMAIL
        password = options['password'] or settings.RAKTSETU_ADMIN_PASSWORD
        name = options['name'] or settings.RAKTSETU_ADMIN_NAME

        if not email or not password:
            raise CommandError('Admin email and password are required (flags or RAKTSETU_ADMIN_* env vars)')

        User = get_user_model()
        email = email.strip().lower()
        user, created = User.objects.get_or_create(
            email=email,
            defaults={
                'username': email,
                'name': name,
                'role': 'admin',
                'verified': True,
                'is_staff': True,
                'is_superuser': True,
            },
        )

        if not created:
            if not user.is_admin:
                raise CommandError(f'{email} already exists with role "{user.role}"')
            self.stdout.write(f'Admin {email} already provisioned')
            return

        user.set_password(password)
        user.save(update_fields=['password'])
        logger.info("Provisioned admin account %s", email)
        self.stdout.write(self.style.SUCCESS(f'Admin {email} created'))
