# deployment/checks.py

# Import settings from django.conf because the registered check needs to know the active PROFILE.
from django.conf import settings
# Import checks from django.core because warnings are reported through Django's system check framework.
from django.core import checks

from .exceptions import ConfigurationError
from .profiles import settings_resolver

PRODUCTION = 'production'

# Settings each profile must set itself; base.py defines neither.
PER_PROFILE_SETTINGS = ('DEBUG', 'ALLOWED_HOSTS')

INSECURE_SECRET_KEY_PREFIX = 'django-insecure'


"""
Author:
This function looks at one resolved profile and lists everything
that would be unsafe to run with. Every profile has to set DEBUG
and ALLOWED_HOSTS itself. The production profile also has to keep
DEBUG off, name its hosts explicitly (no '*') and use a real
secret key rather than the development fallback.
"""
def lint_settings(mapping, profile):
    messages = []

    for key in PER_PROFILE_SETTINGS:
        if key not in mapping:
            messages.append(checks.Warning(
                f"Profile '{profile}' does not set {key}.",
                hint=f"Set {key} in config/settings/{profile}.py; the base layer leaves it out.",
                id='deployment.W005',
            ))

    if profile != PRODUCTION:
        return messages

    if mapping.get('DEBUG') is not False:
        messages.append(checks.Warning(
            'DEBUG is not disabled in the production profile.',
            hint='Set DEBUG = False in config/settings/production.py.',
            id='deployment.W001',
        ))

    hosts = list(mapping.get('ALLOWED_HOSTS') or [])
    if not hosts:
        messages.append(checks.Warning(
            'ALLOWED_HOSTS is empty in the production profile.',
            hint='Set the ALLOWED_HOSTS environment variable to a comma separated list of domains.',
            id='deployment.W002',
        ))
    elif any('*' in host for host in hosts):
        messages.append(checks.Warning(
            'ALLOWED_HOSTS contains a wildcard in the production profile.',
            hint='List every domain explicitly so spoofed Host headers are rejected.',
            id='deployment.W003',
        ))

    secret_key = mapping.get('SECRET_KEY') or ''
    if not secret_key or str(secret_key).startswith(INSECURE_SECRET_KEY_PREFIX):
        messages.append(checks.Warning(
            'SECRET_KEY is missing or still the development fallback.',
            hint='Inject SECRET_KEY through the environment; never commit it.',
            id='deployment.W004',
        ))

    return messages


@checks.register(checks.Tags.security)
def check_active_profile(app_configs=None, **kwargs):
    profile = getattr(settings, 'PROFILE', None)
    if not profile:
        return [checks.Warning(
            'The active settings module does not declare PROFILE.',
            hint="Add PROFILE = '<name>' to the settings module.",
            id='deployment.W006',
        )]

    try:
        mapping = settings_resolver().resolve(profile)
    except ConfigurationError as exc:
        return [checks.Error(str(exc), id='deployment.E001')]

    return lint_settings(mapping, profile)
