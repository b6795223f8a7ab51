# deployment/certificates.py

# Import logging because key generation is reported on the 'deployment' logger.
import logging
# Import os because the umask and the key file mode are set through it.
import os
# Import shutil because 'generate_self_signed' needs to find openssl on PATH.
import shutil
# Import subprocess because openssl runs as an external program.
import subprocess
# Import Path from pathlib because the key and certificate locations are handled as paths.
from pathlib import Path

# Import CertificateError from .exceptions because every failure here is reported with it.
from .exceptions import CertificateError

logger = logging.getLogger(__name__)

KEY_FILE_MODE = 0o600
CERT_FILE_MODE = 0o644
# Files openssl creates are private to the owner until their modes are set below.
OPENSSL_UMASK = 0o077


def openssl_command(key_path, cert_path, common_name, days=365, bits=2048, openssl='openssl'):
    if int(days) <= 0 or int(bits) <= 0:
        raise CertificateError('Certificate days and key bits must be positive.')
    if not common_name:
        raise CertificateError('A common name is required for the certificate subject.')
    return [
        openssl, 'req', '-x509', '-nodes',
        '-newkey', f'rsa:{int(bits)}',
        '-days', str(int(days)),
        '-keyout', str(key_path),
        '-out', str(cert_path),
        '-subj', f'/CN={common_name}',
    ]


"""
Author:
This function makes a self-signed key and certificate for NGINX
by running the system's openssl. It does not do any cryptography
itself. It refuses to replace existing files unless asked to, and
once openssl has finished it locks the private key down so only
its owner can read it.
"""
def generate_self_signed(key_path, cert_path, common_name, days=365, bits=2048, overwrite=False):
    key_path = Path(key_path)
    cert_path = Path(cert_path)

    openssl = shutil.which('openssl')
    if openssl is None:
        raise CertificateError('openssl was not found on PATH.')

    existing = [str(path) for path in (key_path, cert_path) if path.exists()]
    if existing and not overwrite:
        raise CertificateError(
            f"Refusing to overwrite {', '.join(existing)}; pass overwrite to replace them."
        )

    command = openssl_command(key_path, cert_path, common_name, days, bits, openssl=openssl)
    for path in (key_path, cert_path):
        path.parent.mkdir(parents=True, exist_ok=True)
        # A reused file would keep its old, possibly readable, mode
        path.unlink(missing_ok=True)

    logger.info("Generating self-signed certificate for %s", common_name)
    previous_umask = os.umask(OPENSSL_UMASK)
    try:
        subprocess.run(command, check=True, capture_output=True, text=True)
    except subprocess.CalledProcessError as exc:
        raise CertificateError(
            f"openssl exited with status {exc.returncode}: {(exc.stderr or '').strip()}"
        ) from exc
    finally:
        os.umask(previous_umask)

    os.chmod(key_path, KEY_FILE_MODE)
    os.chmod(cert_path, CERT_FILE_MODE)
    logger.info("Wrote %s and %s", key_path, cert_path)
    return key_path, cert_path
