# deployment/profiles.py

# Import copy because every resolved value is a deep copy the caller cannot change.
import copy
# Import importlib because the settings layers are loaded as modules by name.
import importlib
# Import logging because profile selection is reported on the 'deployment' logger.
import logging
# Import os because the profile is chosen from environment variables.
import os
# Import MappingProxyType from types because a resolved profile is read-only.
from types import MappingProxyType

# Import the errors from .exceptions because a bad profile name or a missing layer stops startup.
from .exceptions import (
    ConfigurationError,
    MissingLayerError,
    ProfileNotSelectedError,
    UnknownProfileError,
)

logger = logging.getLogger(__name__)

# Settings modules live at config.settings.<layer>
SETTINGS_PACKAGE = 'config.settings'
BASE_LAYER = 'base'
PROFILES = ('local', 'production', 'test')

# The two environment variables that may select a profile.
ENV_VARIABLE = 'DJANGO_ENV'
SETTINGS_VARIABLE = 'DJANGO_SETTINGS_MODULE'


"""
Author:
This class builds the final settings for one environment. It
starts from the shared base layer and then lets the chosen
environment layer replace any setting it defines. A replaced
setting is replaced completely: lists and dicts are never merged.
Only the environment names it was built with are accepted, so a
typo fails instead of quietly running on the base settings.
"""
class LayeredResolver:

    def __init__(self, base, layers):
        # A layer is either a mapping or a callable that returns one
        self._base = base
        self._layers = dict(layers)

    @property
    def names(self):
        return frozenset(self._layers)

    def resolve(self, name):
        if name not in self._layers:
            raise UnknownProfileError(name, self._layers)

        base = self._load(BASE_LAYER, self._base)
        override = self._load(name, self._layers[name])

        resolved = {key: copy.deepcopy(value) for key, value in base.items()}
        for key, value in override.items():
            resolved[key] = copy.deepcopy(value)

        logger.debug(
            "Resolved profile '%s': %d settings, %d from the profile layer.",
            name, len(resolved), len(override),
        )
        return MappingProxyType(resolved)

    def overrides(self, name):
        """Settings of ``name`` that are new or differ from the base layer."""
        resolved = self.resolve(name)
        base = self._load(BASE_LAYER, self._base)
        return MappingProxyType({
            key: value for key, value in resolved.items()
            if key not in base or base[key] != value
        })

    def _load(self, label, layer):
        if callable(layer):
            layer = layer()
        if layer is None:
            raise MissingLayerError(label)
        return layer


def module_layer(path):
    # Loads the UPPERCASE names of a settings module, the same rule django.conf uses.
    def load():
        try:
            module = importlib.import_module(path)
        except ImportError as exc:
            raise MissingLayerError(path, str(exc)) from exc
        return {name: getattr(module, name) for name in dir(module) if name.isupper()}
    return load


def settings_resolver(package=SETTINGS_PACKAGE, profiles=PROFILES):
    return LayeredResolver(
        module_layer(f'{package}.{BASE_LAYER}'),
        {name: module_layer(f'{package}.{name}') for name in profiles},
    )


def settings_module(name):
    if name not in PROFILES:
        raise UnknownProfileError(name, PROFILES)
    return f'{SETTINGS_PACKAGE}.{name}'


def profile_name(module):
    prefix = f'{SETTINGS_PACKAGE}.'
    name = module[len(prefix):] if module.startswith(prefix) else None
    if name not in PROFILES:
        raise UnknownProfileError(module, [settings_module(known) for known in PROFILES])
    return name


def _settings_flag(argv):
    for index, arg in enumerate(argv):
        if arg.startswith('--settings='):
            return arg.split('=', 1)[1]
        if arg == '--settings' and index + 1 < len(argv):
            return argv[index + 1]
    return None


"""
Author:
This function runs before Django reads any settings (from
manage.py and from the WSGI entry-point). It works out which
profile the operator asked for and points DJANGO_SETTINGS_MODULE
at it. Django's own --settings flag wins, then DJANGO_SETTINGS_MODULE,
then DJANGO_ENV. If nothing was asked for, startup stops here
instead of guessing a profile.
"""
def activate(environ=None, argv=None):
    environ = os.environ if environ is None else environ

    flagged = _settings_flag(argv or [])
    if flagged:
        profile_name(flagged)
        logger.debug("Profile selected by --settings: %s", flagged)
        return flagged

    selected = environ.get(SETTINGS_VARIABLE)
    requested = environ.get(ENV_VARIABLE)

    if selected:
        name = profile_name(selected)
        if requested and requested != name:
            raise ConfigurationError(
                f"{SETTINGS_VARIABLE}={selected} and {ENV_VARIABLE}={requested} "
                f"select different profiles."
            )
        logger.debug("Profile selected by %s: %s", SETTINGS_VARIABLE, selected)
        return selected

    if requested:
        module = settings_module(requested)
        environ[SETTINGS_VARIABLE] = module
        logger.debug("Profile selected by %s: %s", ENV_VARIABLE, module)
        return module

    raise ProfileNotSelectedError(
        f"No configuration profile selected. Set {ENV_VARIABLE} to one of "
        f"{', '.join(PROFILES)} (or {SETTINGS_VARIABLE}, or pass --settings)."
    )
