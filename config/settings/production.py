# config/settings/production.py

import os
from pathlib import Path

import dj_database_url

from .base import *  # noqa: F401,F403
from .base import BASE_DIR, PROJECT_NAME

"""
Author:
The production layer: the site runs under uWSGI behind NGINX, with
PostgreSQL as its database. Every secret (SECRET_KEY, the
credentials inside DATABASE_URL, the certificate key) comes in
through the environment. Nothing secret is written in this file.
"""

PROFILE = 'production'

# =============================================================================
# CORE SETTINGS
# =============================================================================
DEBUG = False

# No fallback; Django refuses an empty SECRET_KEY on first use
SECRET_KEY = os.getenv('SECRET_KEY')

ALLOWED_HOSTS = [
    host.strip() for host in os.getenv('ALLOWED_HOSTS', '').split(',') if host.strip()
]

# =============================================================================
# DATABASE - PostgreSQL from DATABASE_URL
# =============================================================================
DATABASES = {
    'default': dj_database_url.config(
        conn_max_age=600,
        ssl_require=os.getenv('DATABASE_SSL_REQUIRE', '0') == '1',
    )
}

# =============================================================================
# STATIC AND MEDIA FILES - served by NGINX from these directories
# =============================================================================
STATIC_URL = '/static/'
STATIC_ROOT = os.getenv('STATIC_ROOT', f'/var/www/{PROJECT_NAME}/static')

MEDIA_URL = '/media/'
MEDIA_ROOT = os.getenv('MEDIA_ROOT', f'/var/www/{PROJECT_NAME}/media')

STORAGES = {
    "default": {
        "BACKEND": "django.core.files.storage.FileSystemStorage",
    },
    "staticfiles": {
        "BACKEND": "whitenoise.storage.CompressedManifestStaticFilesStorage",
    },
}

# =============================================================================
# SECURITY SETTINGS
# =============================================================================
# NGINX terminates TLS and forwards the original scheme
SECURE_PROXY_SSL_HEADER = ('HTTP_X_FORWARDED_PROTO', 'https')
SECURE_SSL_REDIRECT = True

SECURE_HSTS_SECONDS = 31536000  # 1 year
SECURE_HSTS_INCLUDE_SUBDOMAINS = True
SECURE_HSTS_PRELOAD = True

SESSION_COOKIE_SECURE = True
CSRF_COOKIE_SECURE = True

SECURE_CONTENT_TYPE_NOSNIFF = True
X_FRAME_OPTIONS = 'DENY'

# =============================================================================
# LOGGING
# =============================================================================
# The rotating handlers cannot open files in a missing directory
LOG_DIR = Path(os.getenv('LOG_DIR', BASE_DIR / 'logs'))
LOG_DIR.mkdir(parents=True, exist_ok=True)
LOG_LEVEL = os.getenv('LOG_LEVEL', 'INFO')

LOGGING = {
    'version': 1,
    'disable_existing_loggers': False,
    'formatters': {
        'verbose': {
            'format': '{levelname} {asctime} {name} {process:d} {message}',
            'style': '{',
        },
    },
    'handlers': {
        'console': {
            'class': 'logging.StreamHandler',
            'formatter': 'verbose',
        },
        'file': {
            'level': 'ERROR',
            'class': 'logging.handlers.RotatingFileHandler',
            'filename': LOG_DIR / 'django_error.log',
            'maxBytes': 10 * 1024 * 1024,  # 10 MB
            'backupCount': 5,
            'formatter': 'verbose',
        },
        'deployment_file': {
            'class': 'logging.handlers.RotatingFileHandler',
            'filename': LOG_DIR / 'deployment.log',
            'maxBytes': 10 * 1024 * 1024,
            'backupCount': 5,
            'formatter': 'verbose',
        },
    },
    'root': {
        'handlers': ['console'],
        'level': 'WARNING',
    },
    'loggers': {
        'django': {
            'handlers': ['file'],
            'level': 'ERROR',
            'propagate': True,
        },
        'deployment': {
            'handlers': ['console', 'deployment_file'],
            'level': LOG_LEVEL,
            'propagate': False,
        },
    },
}

# =============================================================================
# EMAIL
# =============================================================================
EMAIL_BACKEND = 'django.core.mail.backends.smtp.EmailBackend'
EMAIL_HOST = os.getenv('EMAIL_HOST', 'localhost')
EMAIL_PORT = int(os.getenv('EMAIL_PORT', '587'))
EMAIL_USE_TLS = os.getenv('EMAIL_USE_TLS', '1') == '1'
EMAIL_HOST_USER = os.getenv('EMAIL_HOST_USER', '')
EMAIL_HOST_PASSWORD = os.getenv('EMAIL_HOST_PASSWORD', '')

# =============================================================================
# DEPLOYMENT - uWSGI socket, NGINX server block, certificate paths
# =============================================================================
DEPLOYMENT = {
    'PROJECT_NAME': PROJECT_NAME,
    'BASE_DIR': os.getenv('DEPLOY_BASE_DIR', f'/srv/{PROJECT_NAME}'),
    'VIRTUALENV': os.getenv('DEPLOY_VIRTUALENV', f'/srv/{PROJECT_NAME}/.venv'),
    'SOCKET': os.getenv('UWSGI_SOCKET', f'/run/uwsgi/{PROJECT_NAME}.sock'),
    'SOCKET_CHMOD': os.getenv('UWSGI_SOCKET_CHMOD', '664'),
    'PROCESSES': os.getenv('UWSGI_PROCESSES', '4'),
    'SERVER_NAMES': ALLOWED_HOSTS,
    'HTTP_PORT': 80,
    'HTTPS_PORT': 443,
    'SSL_CERTIFICATE': os.getenv('SSL_CERTIFICATE', f'/etc/nginx/ssl/{PROJECT_NAME}.crt'),
    'SSL_CERTIFICATE_KEY': os.getenv('SSL_CERTIFICATE_KEY', f'/etc/nginx/ssl/{PROJECT_NAME}.key'),
    'CLIENT_MAX_BODY_SIZE': os.getenv('CLIENT_MAX_BODY_SIZE', '75M'),
    'WSGI_MODULE': 'config.wsgi:application',
}
