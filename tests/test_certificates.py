"""Tests for the OpenSSL certificate invocation."""

import os
import stat
import subprocess

import pytest

from deployment.certificates import (
    CERT_FILE_MODE,
    KEY_FILE_MODE,
    generate_self_signed,
    openssl_command,
)
from deployment.exceptions import CertificateError


@pytest.fixture
def fake_openssl(mocker):
    """Pretend openssl exists and writes both files when run.

    Records the umask and the mode each file had as openssl left it.
    """
    mocker.patch("deployment.certificates.shutil.which", return_value="/usr/bin/openssl")
    seen = {}

    def run(command, **kwargs):
        current = os.umask(0)
        os.umask(current)
        seen["umask"] = current

        key = command[command.index("-keyout") + 1]
        cert = command[command.index("-out") + 1]
        with open(key, "w") as handle:
            handle.write("KEY")
        with open(cert, "w") as handle:
            handle.write("CERT")
        seen["key_mode"] = stat.S_IMODE(os.stat(key).st_mode)
        return subprocess.CompletedProcess(command, 0, "", "")

    fake = mocker.patch("deployment.certificates.subprocess.run", side_effect=run)
    fake.seen = seen
    return fake


class TestOpensslCommand:
    """Building the openssl argument list."""

    def test_builds_self_signed_request(self):
        command = openssl_command("/ssl/site.key", "/ssl/site.crt", "example.com")

        assert command == [
            "openssl", "req", "-x509", "-nodes",
            "-newkey", "rsa:2048",
            "-days", "365",
            "-keyout", "/ssl/site.key",
            "-out", "/ssl/site.crt",
            "-subj", "/CN=example.com",
        ]

    def test_custom_days_and_bits(self):
        command = openssl_command("k", "c", "example.com", days=30, bits=4096)

        assert "rsa:4096" in command
        assert command[command.index("-days") + 1] == "30"

    @pytest.mark.parametrize("days, bits", [(0, 2048), (365, 0), (-1, 2048)])
    def test_rejects_non_positive_values(self, days, bits):
        with pytest.raises(CertificateError):
            openssl_command("k", "c", "example.com", days=days, bits=bits)

    def test_requires_common_name(self):
        with pytest.raises(CertificateError):
            openssl_command("k", "c", "")


class TestGenerateSelfSigned:
    """Running openssl and securing the key."""

    def test_runs_openssl_and_restricts_key(self, fake_openssl, tmp_path):
        key, cert = tmp_path / "ssl" / "site.key", tmp_path / "ssl" / "site.crt"

        generate_self_signed(key, cert, "example.com")

        command = fake_openssl.call_args[0][0]
        assert command[0] == "/usr/bin/openssl"
        assert fake_openssl.call_args[1]["check"] is True
        assert cert.read_text() == "CERT"
        assert stat.S_IMODE(key.stat().st_mode) == KEY_FILE_MODE

    def test_refuses_to_overwrite(self, fake_openssl, tmp_path):
        key, cert = tmp_path / "site.key", tmp_path / "site.crt"
        key.write_text("existing")

        with pytest.raises(CertificateError, match="Refusing to overwrite"):
            generate_self_signed(key, cert, "example.com")

        fake_openssl.assert_not_called()
        assert key.read_text() == "existing"

    def test_overwrite_replaces_files(self, fake_openssl, tmp_path):
        key, cert = tmp_path / "site.key", tmp_path / "site.crt"
        key.write_text("existing")

        generate_self_signed(key, cert, "example.com", overwrite=True)

        assert key.read_text() == "KEY"

    def test_openssl_runs_with_private_umask(self, fake_openssl, tmp_path):
        """openssl never creates a key others can read, even briefly."""
        before = os.umask(0o022)
        try:
            generate_self_signed(tmp_path / "site.key", tmp_path / "site.crt", "example.com")
            after = os.umask(0o022)
        finally:
            os.umask(before)

        assert fake_openssl.seen["umask"] == 0o077
        assert fake_openssl.seen["key_mode"] & 0o077 == 0
        assert after == 0o022

    def test_umask_restored_when_openssl_fails(self, mocker, tmp_path):
        mocker.patch("deployment.certificates.shutil.which", return_value="/usr/bin/openssl")
        mocker.patch(
            "deployment.certificates.subprocess.run",
            side_effect=subprocess.CalledProcessError(1, ["openssl"], stderr="bad subject"),
        )
        before = os.umask(0o022)
        try:
            with pytest.raises(CertificateError):
                generate_self_signed(tmp_path / "k", tmp_path / "c", "example.com")
            after = os.umask(0o022)
        finally:
            os.umask(before)

        assert after == 0o022

    def test_certificate_is_world_readable(self, fake_openssl, tmp_path):
        key, cert = tmp_path / "site.key", tmp_path / "site.crt"

        generate_self_signed(key, cert, "example.com")

        assert stat.S_IMODE(cert.stat().st_mode) == CERT_FILE_MODE

    def test_overwrite_does_not_keep_readable_key_mode(self, fake_openssl, tmp_path):
        key, cert = tmp_path / "site.key", tmp_path / "site.crt"
        key.write_text("existing")
        key.chmod(0o644)

        generate_self_signed(key, cert, "example.com", overwrite=True)

        assert fake_openssl.seen["key_mode"] & 0o077 == 0
        assert stat.S_IMODE(key.stat().st_mode) == KEY_FILE_MODE

    def test_missing_openssl(self, mocker, tmp_path):
        mocker.patch("deployment.certificates.shutil.which", return_value=None)

        with pytest.raises(CertificateError, match="not found"):
            generate_self_signed(tmp_path / "k", tmp_path / "c", "example.com")

    def test_openssl_failure(self, mocker, tmp_path):
        mocker.patch("deployment.certificates.shutil.which", return_value="/usr/bin/openssl")
        mocker.patch(
            "deployment.certificates.subprocess.run",
            side_effect=subprocess.CalledProcessError(1, ["openssl"], stderr="bad subject"),
        )

        with pytest.raises(CertificateError, match="bad subject"):
            generate_self_signed(tmp_path / "k", tmp_path / "c", "example.com")
