# config/wsgi.py

# Import get_wsgi_application from django.core.wsgi because 'application' needs it.
from django.core.wsgi import get_wsgi_application
# Import activate from deployment.profiles because the settings profile must be chosen before Django starts.
from deployment.profiles import activate

"""
Author:
This file is the entry-point uWSGI loads ("module =
config.wsgi:application" in the generated uwsgi.ini). The uwsgi.ini
passes the profile in through its "env" line. If no profile was
given, startup fails here and no settings are guessed.
"""
activate()

application = get_wsgi_application()
