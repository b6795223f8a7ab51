# config/settings/base.py

import os
from pathlib import Path
import dj_database_url
from dotenv import load_dotenv

"""
Author:
The base layer. Every profile (local, production, test) starts
from these values and replaces what it needs. DEBUG and
ALLOWED_HOSTS are left out on purpose: each profile has to set
them itself (see deployment/checks.py).
"""

# Build paths inside the project
BASE_DIR = Path(__file__).resolve().parent.parent.parent

# Loads environment variables from .env file
load_dotenv(BASE_DIR / '.env')

PROJECT_NAME = os.getenv('PROJECT_NAME', 'mysite')

# Development fallback only; production reads SECRET_KEY with no default
SECRET_KEY = os.getenv('SECRET_KEY', 'django-insecure-development-key')

# Application definition
INSTALLED_APPS = [
    'django.contrib.admin',
    'django.contrib.auth',
    'django.contrib.contenttypes',
    'django.contrib.sessions',
    'django.contrib.messages',
    'django.contrib.staticfiles',

    # Local apps
    'deployment',
]

MIDDLEWARE = [
    'django.middleware.security.SecurityMiddleware',
    'whitenoise.middleware.WhiteNoiseMiddleware',
    'django.contrib.sessions.middleware.SessionMiddleware',
    'django.middleware.common.CommonMiddleware',
    'django.middleware.csrf.CsrfViewMiddleware',
    'django.contrib.auth.middleware.AuthenticationMiddleware',
    'django.contrib.messages.middleware.MessageMiddleware',
    'django.middleware.clickjacking.XFrameOptionsMiddleware',
]

ROOT_URLCONF = 'config.urls'

TEMPLATES = [
    {
        'BACKEND': 'django.template.backends.django.DjangoTemplates',
        'DIRS': [],
        'APP_DIRS': True,
        'OPTIONS': {
            'context_processors': [
                'django.template.context_processors.debug',
                'django.template.context_processors.request',
                'django.contrib.auth.context_processors.auth',
                'django.contrib.messages.context_processors.messages',
            ],
        },
    },
]

WSGI_APPLICATION = 'config.wsgi.application'

# Database
DATABASES = {
    'default': dj_database_url.config(default=f'sqlite:///{BASE_DIR / "db.sqlite3"}')
}

# Password validation
AUTH_PASSWORD_VALIDATORS = [
    {'NAME': 'django.contrib.auth.password_validation.UserAttributeSimilarityValidator'},
    {'NAME': 'django.contrib.auth.password_validation.MinimumLengthValidator'},
    {'NAME': 'django.contrib.auth.password_validation.CommonPasswordValidator'},
    {'NAME': 'django.contrib.auth.password_validation.NumericPasswordValidator'},
]

# Internationalization
LANGUAGE_CODE = 'en-us'
TIME_ZONE = 'UTC'
USE_I18N = True
USE_TZ = True

# Static files (CSS, JavaScript, Images)
STATIC_URL = 'static/'
STATIC_ROOT = BASE_DIR / 'staticfiles'

# Media files (User Uploads)
MEDIA_URL = '/media/'
MEDIA_ROOT = BASE_DIR / 'media'

STORAGES = {
    "default": {
        "BACKEND": "django.core.files.storage.FileSystemStorage",
    },
    "staticfiles": {
        "BACKEND": "django.contrib.staticfiles.storage.StaticFilesStorage",
    },
}

# Default primary key field type
DEFAULT_AUTO_FIELD = 'django.db.models.BigAutoField'

# Email Configuration
EMAIL_BACKEND = os.getenv('EMAIL_BACKEND', 'django.core.mail.backends.console.EmailBackend')
DEFAULT_FROM_EMAIL = os.getenv('DEFAULT_FROM_EMAIL', f'noreply@{PROJECT_NAME}.local')

# Logging
LOG_LEVEL = os.getenv('LOG_LEVEL', 'INFO')

LOGGING = {
    'version': 1,
    'disable_existing_loggers': False,
    'formatters': {
        'simple': {
            'format': '{levelname} {name} {message}',
            'style': '{',
        },
    },
    'handlers': {
        'console': {
            'class': 'logging.StreamHandler',
            'formatter': 'simple',
        },
    },
    'root': {
        'handlers': ['console'],
        'level': 'WARNING',
    },
    'loggers': {
        'deployment': {
            'handlers': ['console'],
            'level': LOG_LEVEL,
            'propagate': False,
        },
    },
}

# Deployment (uWSGI / NGINX / certificates), read by deployment.conf.DeploymentConfig.
# Profiles replace this dict as a whole.
DEPLOYMENT = {
    'PROJECT_NAME': PROJECT_NAME,
    'BASE_DIR': str(BASE_DIR),
    'VIRTUALENV': os.getenv('VIRTUAL_ENV', str(BASE_DIR / '.venv')),
    'SOCKET': str(BASE_DIR / f'{PROJECT_NAME}.sock'),
    'SOCKET_CHMOD': '664',
    'PROCESSES': 2,
    'SERVER_NAMES': ['localhost', '127.0.0.1'],
    'HTTP_PORT': 8000,
    'HTTPS_PORT': 8443,
    'SSL_CERTIFICATE': '',
    'SSL_CERTIFICATE_KEY': '',
    'CLIENT_MAX_BODY_SIZE': '75M',
    'WSGI_MODULE': 'config.wsgi:application',
}
