#!/usr/bin/env python
"""Django's command-line utility for administrative tasks."""
import sys


def main():
    """Run administrative tasks."""
    try:
        # Import lazily so missing Django raises a clear error below.
        from django.core.management import execute_from_command_line
    except ImportError as exc:
        raise ImportError(
            "Couldn't import Django. Are you sure it's installed and "
            "available on your PYTHONPATH environment variable? Did you "
            "forget to activate a virtual environment?"
        ) from exc
    from deployment.exceptions import ConfigurationError
    from deployment.profiles import activate

    # A profile must be chosen explicitly; there is no default settings module.
    try:
        activate(argv=sys.argv)
    except ConfigurationError as exc:
        sys.exit(f"manage.py: {exc}")
    execute_from_command_line(sys.argv)


if __name__ == '__main__':
    main()
