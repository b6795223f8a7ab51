# deployment/apps.py

# Import AppConfig from django.apps because it's the base class for a Django app configuration.
from django.apps import AppConfig

"""
Author:
This class tells Django how to treat the "deployment" app. Its
"ready" function imports "checks.py" so the profile safety checks
are registered and run with "manage.py check".
"""
class DeploymentAppConfig(AppConfig):
    default_auto_field = 'django.db.models.BigAutoField'
    name = 'deployment'
    verbose_name = 'Deployment'

    def ready(self):
        import deployment.checks
