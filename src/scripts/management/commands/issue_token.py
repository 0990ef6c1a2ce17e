"""Print a bearer token for an existing identity."""

from datetime import timedelta

from django.contrib.auth import get_user_model
from django.core.management.base import BaseCommand, CommandError

from authentication.services import TokenService


class Command(BaseCommand):
    help = "Issue an access token for USERNAME, for local testing of the API."

    def add_arguments(self, parser):
        parser.add_argument("username")
        parser.add_argument(
            "--minutes",
            type=int,
            default=None,
            help="Token lifetime in minutes (defaults to ACCESS_TOKEN_TTL_MINUTES).",
        )

    def handle(self, *args, **options):
        User = get_user_model()
        try:
            user = User.objects.get(username=options["username"])
        except User.DoesNotExist as exc:
            raise CommandError(f"No user named '{options['username']}'.") from exc
        if not user.is_active:
            raise CommandError(f"User '{user.username}' is inactive.")

        ttl = timedelta(minutes=options["minutes"]) if options["minutes"] else None
        self.stdout.write(TokenService.issue_access_token(user, ttl=ttl))
