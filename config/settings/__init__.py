"""
Settings package.

One module per configuration layer:
- base.py: shared settings every profile starts from
- local.py: a developer machine (DEBUG on, SQLite unless DATABASE_URL is set)
- production.py: behind NGINX + uWSGI with PostgreSQL
- test.py: the pytest suite

There is no default profile. Pick one explicitly before starting Django:
    export DJANGO_ENV=production
or
    export DJANGO_SETTINGS_MODULE=config.settings.production
or
    python manage.py <command> --settings=config.settings.production
"""
