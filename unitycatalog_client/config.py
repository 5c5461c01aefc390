"""
Unity Catalog Client - Connection Settings

Resolves the server URL, token and TLS flag for a client.

Resolution priority:
1. Explicit host/token parameters
2. UNITY_CATALOG_HOST, UNITY_CATALOG_TOKEN and UNITY_CATALOG_INSECURE env vars
3. Profile from ~/.unitycatalogcfg (profile parameter or UNITY_CATALOG_PROFILE env var)
"""
import configparser
import logging
import os
from dataclasses import dataclass
from pathlib import Path
from typing import Optional

from .errors import ConfigurationError

logger = logging.getLogger(__name__)

HOST_ENV = "UNITY_CATALOG_HOST"
TOKEN_ENV = "UNITY_CATALOG_TOKEN"
INSECURE_ENV = "UNITY_CATALOG_INSECURE"
PROFILE_ENV = "UNITY_CATALOG_PROFILE"
CONFIG_FILE_ENV = "UNITY_CATALOG_CONFIG_FILE"

_TRUTHY = ("1", "true", "yes", "on")


@dataclass(frozen=True)
class ConnectionSettings:
    """Resolved connection settings for a Unity Catalog server."""

    host: str
    token: Optional[str] = None
    insecure_skip_verify: bool = False


def _is_truthy(value: Optional[str]) -> bool:
    return bool(value) and value.strip().lower() in _TRUTHY


def default_config_path() -> Path:
    """Return the profile file path, honoring UNITY_CATALOG_CONFIG_FILE."""
    override = os.getenv(CONFIG_FILE_ENV)
    if override:
        return Path(override).expanduser()
    return Path.home() / ".unitycatalogcfg"


def load_profile(profile_name: str, config_path: Optional[Path] = None) -> ConnectionSettings:
    """
    Load connection settings from a profile file section.

    Args:
        profile_name: Section name in the profile file (e.g., "local")
        config_path: Profile file to read (default: ~/.unitycatalogcfg)

    Returns:
        ConnectionSettings built from the section's host, token and insecure keys

    Raises:
        ConfigurationError: If the file or profile is missing, or has no host
    """
    config_path = config_path or default_config_path()
    if not config_path.exists():
        raise ConfigurationError(f"Unity Catalog config file not found: {config_path}")

    config = configparser.ConfigParser()
    config.read(config_path)

    if profile_name not in config:
        available = ", ".join(config.sections())
        raise ConfigurationError(
            f"Profile '{profile_name}' not found in {config_path}\n"
            f"Available profiles: {available}"
        )

    section = config[profile_name]
    host = section.get("host", "").strip()
    if not host:
        raise ConfigurationError(f"Profile '{profile_name}' is missing 'host' field")

    token = section.get("token", "").strip() or None
    return ConnectionSettings(
        host=host.rstrip("/"),
        token=token,
        insecure_skip_verify=_is_truthy(section.get("insecure")),
    )


def resolve_settings(
    host: Optional[str] = None,
    token: Optional[str] = None,
    profile: Optional[str] = None,
    insecure_skip_verify: Optional[bool] = None,
) -> ConnectionSettings:
    """
    Resolve connection settings from arguments, environment and profile file.

    Args:
        host: Unity Catalog server URL (e.g., http://localhost:8080)
        token: Optional bearer token
        profile: Profile name from the profile file
        insecure_skip_verify: Disable TLS certificate validation when True

    Returns:
        ConnectionSettings with a host and no trailing slash

    Raises:
        ConfigurationError: If no host can be resolved
    """
    host = host or os.getenv(HOST_ENV, "")
    token = token or os.getenv(TOKEN_ENV) or None
    if insecure_skip_verify is None and os.getenv(INSECURE_ENV) is not None:
        insecure_skip_verify = _is_truthy(os.getenv(INSECURE_ENV))

    profile_name = profile or os.getenv(PROFILE_ENV)
    if profile_name and (not host or not token or insecure_skip_verify is None):
        logger.debug(f"Loading Unity Catalog profile '{profile_name}'")
        from_profile = load_profile(profile_name)
        host = host or from_profile.host
        token = token or from_profile.token
        if insecure_skip_verify is None:
            insecure_skip_verify = from_profile.insecure_skip_verify

    if not host:
        raise ConfigurationError(
            "Unity Catalog host must be provided via:\n"
            "  1. Constructor parameter (host)\n"
            f"  2. Environment variable ({HOST_ENV})\n"
            f"  3. Config profile (profile parameter or {PROFILE_ENV} env var)"
        )

    return ConnectionSettings(
        host=host.rstrip("/"),
        token=token,
        insecure_skip_verify=bool(insecure_skip_verify),
    )
