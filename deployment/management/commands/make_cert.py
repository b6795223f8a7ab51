# deployment/management/commands/make_cert.py

import shlex

from django.conf import settings
from django.core.management.base import BaseCommand, CommandError

from deployment.certificates import generate_self_signed, openssl_command
from deployment.conf import DeploymentConfig
from deployment.exceptions import CertificateError, ConfigurationError

"""
Author:
This command creates the private key and self-signed certificate
that the NGINX site points at. The file paths come from
DEPLOYMENT['SSL_CERTIFICATE'] and DEPLOYMENT['SSL_CERTIFICATE_KEY'].
The actual work is done by openssl; --dry-run only prints the
openssl command it would run.
"""
class Command(BaseCommand):
    help = 'Generates a self-signed certificate and key at the paths configured in DEPLOYMENT.'

    def add_arguments(self, parser):
        parser.add_argument('--common-name', help='Certificate CN; defaults to the first server name.')
        parser.add_argument('--days', type=int, default=365)
        parser.add_argument('--bits', type=int, default=2048)
        parser.add_argument('--overwrite', action='store_true', help='Replace existing files.')
        parser.add_argument('--dry-run', action='store_true', help='Print the openssl command only.')

    def handle(self, *args, **options):
        try:
            config = DeploymentConfig.from_settings(settings)
        except ConfigurationError as exc:
            raise CommandError(str(exc)) from exc

        if not config.use_ssl:
            raise CommandError(
                "DEPLOYMENT['SSL_CERTIFICATE'] and DEPLOYMENT['SSL_CERTIFICATE_KEY'] are not set."
            )

        common_name = options['common_name'] or config.server_names[0]
        try:
            if options['dry_run']:
                command = openssl_command(
                    config.ssl_certificate_key, config.ssl_certificate, common_name,
                    days=options['days'], bits=options['bits'],
                )
                self.stdout.write(shlex.join(command))
                return

            key_path, cert_path = generate_self_signed(
                config.ssl_certificate_key, config.ssl_certificate, common_name,
                days=options['days'], bits=options['bits'], overwrite=options['overwrite'],
            )
        except CertificateError as exc:
            raise CommandError(str(exc)) from exc

        self.stdout.write(self.style.SUCCESS(f"Wrote key to {key_path}"))
        self.stdout.write(self.style.SUCCESS(f"Wrote certificate to {cert_path}"))
