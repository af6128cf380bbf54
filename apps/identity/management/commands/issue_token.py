from django.conf import settings
from django.core.management.base import BaseCommand, CommandError

from apps.identity.jwt_auth import create_access_token


class Command(BaseCommand):
    help = 'Prints a token signed with JWT_SECRET for calling the task API'

    def add_arguments(self, parser):
        parser.add_argument(
            '--subject',
            default='student@example.com',
            help='Identifying string stored in the token',
        )
        parser.add_argument(
            '--expires-minutes',
            type=int,
            default=None,
            help='Token lifetime; omit for a token without expiry',
        )

    def handle(self, *args, **options):
        if not settings.JWT_SECRET:
            raise CommandError('JWT_SECRET is not configured')

        expires = options['expires_minutes']
        if expires is not None and expires <= 0:
            raise CommandError('--expires-minutes must be positive')

        token = create_access_token(
            {'sub': options['subject']},
            settings.JWT_SECRET,
            expires_minutes=expires,
        )
        # Token goes to stdout alone so it can be captured by scripts.
        self.stdout.write(token)
