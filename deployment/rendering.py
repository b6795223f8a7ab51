# deployment/rendering.py

# Import logging because each rendered artifact is reported on the 'deployment' logger.
import logging
# Import re because database names and roles are checked before they go into SQL.
import re

# Import render_to_string from django.template.loader because every artifact is a Django template.
from django.template.loader import render_to_string

# Import DeploymentConfig and setting from .conf because templates read validated values only.
from .conf import DeploymentConfig, setting
# Import InvalidSettingError from .exceptions because bad static, media or database values are reported with it.
from .exceptions import InvalidSettingError

logger = logging.getLogger(__name__)

ARTIFACTS = ('uwsgi', 'nginx', 'postgres')

_IDENTIFIER = re.compile(r'^[A-Za-z_][A-Za-z0-9_$]*$')


def _render(template_name, context):
    return render_to_string(template_name, context).strip() + '\n'


def render_uwsgi_ini(config, settings_module):
    logger.info("Rendering uWSGI configuration for %s", config.project_name)
    return _render('deployment/uwsgi.ini', {
        'config': config,
        'settings_module': settings_module,
    })


def _location(key, url):
    if not url or '://' in str(url):
        raise InvalidSettingError(key, f"'{url}' must be a path such as /static/.")
    return '/' + str(url).strip('/') + '/'


def _directory(key, root):
    if not root:
        raise InvalidSettingError(key, 'must be set so NGINX can serve the files.')
    return str(root).rstrip('/') + '/'


"""
Author:
This function writes the NGINX site for a profile. NGINX hands
every request to the uWSGI socket, except static and media paths,
which it reads straight from disk. When the profile has a
certificate, plain HTTP only redirects to HTTPS.
"""
def render_nginx_conf(config, static_url, static_root, media_url, media_root):
    logger.info(
        "Rendering NGINX configuration for %s (ssl=%s)", config.project_name, config.use_ssl
    )
    return _render('deployment/nginx.conf', {
        'config': config,
        'server_names': ' '.join(config.server_names),
        'static_url': _location('STATIC_URL', static_url),
        'static_root': _directory('STATIC_ROOT', static_root),
        'media_url': _location('MEDIA_URL', media_url),
        'media_root': _directory('MEDIA_ROOT', media_root),
    })


def render_postgres_sql(database, time_zone='UTC'):
    engine = database.get('ENGINE', '')
    if 'postgresql' not in engine and 'postgis' not in engine:
        raise InvalidSettingError(
            "DATABASES['default']['ENGINE']", f"'{engine}' is not a PostgreSQL backend."
        )
    for key in ('NAME', 'USER'):
        value = str(database.get(key) or '')
        if not _IDENTIFIER.match(value):
            raise InvalidSettingError(
                f"DATABASES['default'][{key!r}]", f"'{value}' is not a plain SQL identifier."
            )

    logger.info("Rendering PostgreSQL setup for database %s", database['NAME'])
    return _render('deployment/postgres.sql', {
        'name': database['NAME'],
        'user': database['USER'],
        'time_zone': time_zone or 'UTC',
    })


def render_artifact(kind, source, settings_module):
    """Render one of ``ARTIFACTS`` from settings or a resolved profile mapping."""
    if kind == 'uwsgi':
        return render_uwsgi_ini(DeploymentConfig.from_settings(source), settings_module)
    if kind == 'nginx':
        return render_nginx_conf(
            DeploymentConfig.from_settings(source),
            static_url=setting(source, 'STATIC_URL'),
            static_root=setting(source, 'STATIC_ROOT'),
            media_url=setting(source, 'MEDIA_URL'),
            media_root=setting(source, 'MEDIA_ROOT'),
        )
    if kind == 'postgres':
        databases = setting(source, 'DATABASES') or {}
        return render_postgres_sql(databases.get('default') or {}, setting(source, 'TIME_ZONE'))
    raise ValueError(f"Unknown artifact '{kind}'. Expected one of: {', '.join(ARTIFACTS)}.")
