"""Settings shared by every httpx client ``ApiClient`` creates for itself."""

import os
import ssl
from typing import Any, Dict, Optional

from .constants import DEFAULT_TIMEOUT

CA_FILE_VARS = ("SSL_CERT_FILE", "REQUESTS_CA_BUNDLE")
CA_DIR_VAR = "SSL_CERT_DIR"


def _env_path(name: str) -> Optional[str]:
    value = os.environ.get(name)
    if not value:
        return None
    return os.path.expanduser(os.path.expandvars(value))


def create_ssl_context() -> ssl.SSLContext:
    """Verify against the OS trust store, or certifi when truststore is absent.

    The certifi bundle can be replaced through ``SSL_CERT_FILE`` or
    ``REQUESTS_CA_BUNDLE`` and extended with ``SSL_CERT_DIR``.
    """
    try:
        import truststore

        return truststore.SSLContext(ssl.PROTOCOL_TLS_CLIENT)
    except ImportError:
        import certifi

        ca_file = next(
            (path for path in map(_env_path, CA_FILE_VARS) if path), certifi.where()
        )
        return ssl.create_default_context(cafile=ca_file, capath=_env_path(CA_DIR_VAR))


def get_httpx_client_kwargs(timeout: Optional[float] = None) -> Dict[str, Any]:
    """Keyword arguments for ``httpx.AsyncClient``.

    ``timeout`` comes from ``Config.timeout``; ``None`` falls back to the
    package default.
    """
    return {
        "verify": create_ssl_context(),
        "follow_redirects": True,
        "timeout": DEFAULT_TIMEOUT if timeout is None else timeout,
    }
