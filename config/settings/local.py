# config/settings/local.py

from .base import *  # noqa: F401,F403

PROFILE = 'local'

DEBUG = True

ALLOWED_HOSTS = ['localhost', '127.0.0.1', '[::1]']
