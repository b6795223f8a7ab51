# deployment/management/commands/showprofile.py

from collections.abc import Mapping
from pprint import pformat

# Import BaseCommand and CommandError because custom management commands are based on them.
from django.core.management.base import BaseCommand, CommandError

from deployment.exceptions import ConfigurationError
from deployment.profiles import settings_resolver

REDACTED = '********'
SENSITIVE_WORDS = ('SECRET', 'PASSWORD', 'KEY')


def redact(value, key=None):
    if isinstance(value, Mapping):
        return {name: redact(item, name) for name, item in value.items()}
    if isinstance(value, (list, tuple)):
        return type(value)(redact(item, key) for item in value)
    if key and isinstance(value, str) and value and any(
        word in str(key).upper() for word in SENSITIVE_WORDS
    ):
        return REDACTED
    return value


"""
Author:
This command prints what a profile resolves to (for example
'python manage.py showprofile production'), so an operator can
see the final settings before deploying. Secrets are masked.
With --overrides it only prints what the profile changes
compared to the base layer.
"""
class Command(BaseCommand):
    help = 'Prints the resolved settings of a configuration profile with secrets masked.'

    def add_arguments(self, parser):
        parser.add_argument('profile', help='Profile name, e.g. local or production.')
        parser.add_argument(
            '--overrides',
            action='store_true',
            help='Only show settings the profile adds or changes over the base layer.',
        )

    def handle(self, *args, **options):
        resolver = settings_resolver()
        try:
            if options['overrides']:
                resolved = resolver.overrides(options['profile'])
            else:
                resolved = resolver.resolve(options['profile'])
        except ConfigurationError as exc:
            raise CommandError(str(exc)) from exc

        for key in sorted(resolved):
            self.stdout.write(f"{key} = {pformat(redact(resolved[key], key))}")
