# deployment/conf.py

# Import re because the socket mode and the body size are checked against patterns.
import re
# Import Mapping from collections.abc because DEPLOYMENT may be any mapping, not only a dict.
from collections.abc import Mapping
# Import dataclass from dataclasses because the deployment values are one frozen record.
from dataclasses import dataclass

# Import InvalidSettingError from .exceptions because it names the DEPLOYMENT key that is wrong.
from .exceptions import InvalidSettingError

_OCTAL_MODE = re.compile(r'^[0-7]{3}$')
_BODY_SIZE = re.compile(r'^\d+[kKmMgG]?$')


"""
Author:
This class holds the values the uWSGI, NGINX and certificate
steps need from a profile. It is built from the DEPLOYMENT
setting. Nothing is checked when the settings module loads;
from_settings does the checking the first time a command
actually needs the values.
"""
@dataclass(frozen=True)
class DeploymentConfig:
    project_name: str
    base_dir: str
    virtualenv: str
    socket: str
    socket_chmod: str = '664'
    processes: int = 4
    server_names: tuple = ('localhost',)
    http_port: int = 80
    https_port: int = 443
    ssl_certificate: str = ''
    ssl_certificate_key: str = ''
    client_max_body_size: str = '75M'
    wsgi_module: str = 'config.wsgi:application'

    @property
    def use_ssl(self):
        return bool(self.ssl_certificate)

    @classmethod
    def from_settings(cls, source):
        raw = setting(source, 'DEPLOYMENT')
        if not isinstance(raw, Mapping):
            raise InvalidSettingError('DEPLOYMENT', 'must be a dict of deployment values.')

        def value(key, default=None):
            return raw.get(key, default)

        for key in ('PROJECT_NAME', 'BASE_DIR', 'VIRTUALENV', 'SOCKET'):
            if not value(key):
                raise InvalidSettingError(f'DEPLOYMENT[{key!r}]', 'is required.')

        chmod = str(value('SOCKET_CHMOD', cls.socket_chmod))
        if not _OCTAL_MODE.match(chmod):
            raise InvalidSettingError(
                "DEPLOYMENT['SOCKET_CHMOD']", f"'{chmod}' is not a three digit octal mode."
            )

        server_names = value('SERVER_NAMES', cls.server_names)
        if isinstance(server_names, str) or not server_names or not all(
            isinstance(name, str) and name for name in server_names
        ):
            raise InvalidSettingError(
                "DEPLOYMENT['SERVER_NAMES']", 'must be a non-empty list of host names.'
            )

        certificate = value('SSL_CERTIFICATE') or ''
        certificate_key = value('SSL_CERTIFICATE_KEY') or ''
        if bool(certificate) != bool(certificate_key):
            raise InvalidSettingError(
                "DEPLOYMENT['SSL_CERTIFICATE']",
                'SSL_CERTIFICATE and SSL_CERTIFICATE_KEY must be set together.',
            )

        body_size = str(value('CLIENT_MAX_BODY_SIZE', cls.client_max_body_size))
        if not _BODY_SIZE.match(body_size):
            raise InvalidSettingError(
                "DEPLOYMENT['CLIENT_MAX_BODY_SIZE']", f"'{body_size}' is not an NGINX size."
            )

        return cls(
            project_name=str(value('PROJECT_NAME')),
            base_dir=str(value('BASE_DIR')),
            virtualenv=str(value('VIRTUALENV')),
            socket=str(value('SOCKET')),
            socket_chmod=chmod,
            processes=_positive_int('PROCESSES', value('PROCESSES', cls.processes)),
            server_names=tuple(server_names),
            http_port=_positive_int('HTTP_PORT', value('HTTP_PORT', cls.http_port)),
            https_port=_positive_int('HTTPS_PORT', value('HTTPS_PORT', cls.https_port)),
            ssl_certificate=str(certificate),
            ssl_certificate_key=str(certificate_key),
            client_max_body_size=body_size,
            wsgi_module=str(value('WSGI_MODULE', cls.wsgi_module)),
        )


def setting(source, key, default=None):
    # Works on both django.conf.settings and a resolved profile mapping
    if isinstance(source, Mapping):
        return source.get(key, default)
    return getattr(source, key, default)


def _positive_int(key, raw):
    try:
        number = int(raw)
    except (TypeError, ValueError):
        raise InvalidSettingError(f'DEPLOYMENT[{key!r}]', f"'{raw}' is not an integer.") from None
    if isinstance(raw, bool) or number <= 0:
        raise InvalidSettingError(f'DEPLOYMENT[{key!r}]', 'must be a positive integer.')
    return number
