# deployment/management/commands/render_config.py

# Import Path from pathlib because --output may point into a directory that does not exist yet.
from pathlib import Path

# Import settings from django.conf because without --profile the active settings are rendered.
from django.conf import settings
# Import BaseCommand and CommandError because this is a manage.py command.
from django.core.management.base import BaseCommand, CommandError

# Import ConfigurationError because every deployment error becomes a CommandError here.
from deployment.exceptions import ConfigurationError
# Import settings_module and settings_resolver because --profile renders another profile than the active one.
from deployment.profiles import settings_module, settings_resolver
# Import ARTIFACTS and render_artifact because they list and build the files this command writes.
from deployment.rendering import ARTIFACTS, render_artifact


"""
Author:
This command writes one deployment file, the uWSGI ini, the
NGINX site or the PostgreSQL setup script, for the active
settings or for the profile named with --profile. It prints to
the screen unless --output gives a file to write.
"""
class Command(BaseCommand):
    help = 'Renders the uWSGI ini, the NGINX site or the PostgreSQL setup script for a profile.'

    def add_arguments(self, parser):
        parser.add_argument('artifact', choices=ARTIFACTS)
        parser.add_argument(
            '--profile',
            help='Render from this profile instead of the active settings.',
        )
        parser.add_argument('-o', '--output', help='Write to this file instead of stdout.')

    def handle(self, *args, **options):
        profile = options['profile']
        try:
            if profile:
                source = settings_resolver().resolve(profile)
                module = settings_module(profile)
            else:
                source = settings
                module = settings.SETTINGS_MODULE
            content = render_artifact(options['artifact'], source, module)
        except ConfigurationError as exc:
            raise CommandError(str(exc)) from exc

        if not options['output']:
            self.stdout.write(content, ending='')
            return

        output = Path(options['output'])
        output.parent.mkdir(parents=True, exist_ok=True)
        output.write_text(content)
        self.stdout.write(self.style.SUCCESS(f"Wrote {options['artifact']} configuration to {output}"))
