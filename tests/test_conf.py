"""Tests for DeploymentConfig built from profile settings."""

from types import SimpleNamespace

import pytest

from deployment.conf import DeploymentConfig
from deployment.exceptions import InvalidSettingError


def build(values):
    return DeploymentConfig.from_settings({"DEPLOYMENT": values})


class TestDeploymentConfig:
    """Reading valid deployment values."""

    def test_reads_values(self, deployment_config):
        assert deployment_config.project_name == "mysite"
        assert deployment_config.socket == "/run/uwsgi/mysite.sock"
        assert deployment_config.server_names == ("example.com", "www.example.com")
        assert deployment_config.wsgi_module == "config.wsgi:application"
        assert deployment_config.use_ssl is False

    def test_numeric_strings_are_accepted(self, deployment_values):
        """Values injected from the environment arrive as strings."""
        deployment_values["PROCESSES"] = "8"

        assert build(deployment_values).processes == 8

    def test_ssl_enabled_with_both_paths(self, ssl_deployment_config):
        assert ssl_deployment_config.use_ssl is True

    def test_reads_from_settings_object(self, deployment_values):
        """Attribute-style sources such as django.conf.settings also work."""
        config = DeploymentConfig.from_settings(SimpleNamespace(DEPLOYMENT=deployment_values))

        assert config.base_dir == "/srv/mysite"

    def test_is_frozen(self, deployment_config):
        with pytest.raises(AttributeError):
            deployment_config.processes = 1

    def test_real_production_profile(self, production):
        config = DeploymentConfig.from_settings(production)

        assert config.server_names == ("example.com", "www.example.com")
        assert config.processes == 4
        assert config.use_ssl is True

    def test_active_test_settings(self, settings):
        config = DeploymentConfig.from_settings(settings)

        assert config.http_port == 8000


class TestDeploymentConfigValidation:
    """Malformed values are reported when first read."""

    def test_missing_deployment_setting(self):
        with pytest.raises(InvalidSettingError) as excinfo:
            DeploymentConfig.from_settings({})

        assert excinfo.value.key == "DEPLOYMENT"

    @pytest.mark.parametrize("key", ["PROJECT_NAME", "BASE_DIR", "VIRTUALENV", "SOCKET"])
    def test_required_keys(self, deployment_values, key):
        deployment_values[key] = ""

        with pytest.raises(InvalidSettingError) as excinfo:
            build(deployment_values)

        assert excinfo.value.key == f"DEPLOYMENT[{key!r}]"

    @pytest.mark.parametrize("chmod", ["666 ", "66", "888", "rw-"])
    def test_socket_chmod_must_be_octal(self, deployment_values, chmod):
        deployment_values["SOCKET_CHMOD"] = chmod

        with pytest.raises(InvalidSettingError):
            build(deployment_values)

    @pytest.mark.parametrize("processes", [0, -1, "many", None, True])
    def test_processes_must_be_positive_integer(self, deployment_values, processes):
        deployment_values["PROCESSES"] = processes

        with pytest.raises(InvalidSettingError):
            build(deployment_values)

    @pytest.mark.parametrize("names", [[], "example.com", [""], [None]])
    def test_server_names_must_be_non_empty_list(self, deployment_values, names):
        deployment_values["SERVER_NAMES"] = names

        with pytest.raises(InvalidSettingError):
            build(deployment_values)

    def test_certificate_without_key(self, deployment_values):
        deployment_values["SSL_CERTIFICATE"] = "/etc/nginx/ssl/mysite.crt"

        with pytest.raises(InvalidSettingError):
            build(deployment_values)

    def test_body_size_must_be_nginx_size(self, deployment_values):
        deployment_values["CLIENT_MAX_BODY_SIZE"] = "75 megabytes"

        with pytest.raises(InvalidSettingError):
            build(deployment_values)
