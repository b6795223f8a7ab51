# deployment/exceptions.py

# Import ImproperlyConfigured from django.core.exceptions because Django already reports it as a settings fault.
from django.core.exceptions import ImproperlyConfigured

"""
Author:
These are the errors raised while picking, loading and reading a
configuration profile. They all extend Django's own
ImproperlyConfigured, so anything that already catches Django
settings problems also catches these.
"""


class ConfigurationError(ImproperlyConfigured):
    pass


class ProfileNotSelectedError(ConfigurationError):
    pass


class UnknownProfileError(ConfigurationError):
    def __init__(self, name, known):
        self.name = name
        self.known = tuple(sorted(known))
        super().__init__(
            f"Unknown profile '{name}'. Expected one of: {', '.join(self.known)}."
        )


class MissingLayerError(ConfigurationError):
    def __init__(self, layer, reason=''):
        self.layer = layer
        message = f"Configuration layer '{layer}' could not be loaded."
        if reason:
            message = f"{message} {reason}"
        super().__init__(message)


class InvalidSettingError(ConfigurationError):
    def __init__(self, key, message):
        self.key = key
        super().__init__(f"{key}: {message}")


class CertificateError(ImproperlyConfigured):
    pass
