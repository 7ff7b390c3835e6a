"""Configuration loading for the Octane SDK.

Settings come from ``.octane/config.yaml`` in the working directory, with
``OCTANE_*`` environment variables taking precedence (useful for tests and
CI)::

    server:
      url: https://octane.example.com
      shared_space: 1001
      workspace: 1002
      client_id: api_key_id
      client_secret: api_key_secret
      timeout: 30
"""

import os
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Optional

import yaml

from .auth import Authentication, ClientAuthentication, UserAuthentication

CONFIG_DIR = '.octane'
CONFIG_FILE = 'config.yaml'
DEFAULT_TIMEOUT = 30

ENV_OVERRIDES = {
    'url': 'OCTANE_SERVER_URL',
    'shared_space': 'OCTANE_SHARED_SPACE',
    'workspace': 'OCTANE_WORKSPACE',
    'client_id': 'OCTANE_CLIENT_ID',
    'client_secret': 'OCTANE_CLIENT_SECRET',
    'user': 'OCTANE_USER',
    'password': 'OCTANE_PASSWORD',
    'timeout': 'OCTANE_TIMEOUT',
}


@dataclass
class OctaneSettings:
    """Resolved connection settings."""
    url: str
    shared_space: Optional[str] = None
    workspace: Optional[int] = None
    client_id: Optional[str] = None
    client_secret: Optional[str] = None
    user: Optional[str] = None
    password: Optional[str] = None
    timeout: int = DEFAULT_TIMEOUT

    def authentication(self) -> Authentication:
        """API access keys win over user/password.

        Raises:
            RuntimeError: If neither pair is configured
        """
        if self.client_id and self.client_secret:
            return ClientAuthentication(self.client_id, self.client_secret)
        if self.user and self.password:
            return UserAuthentication(self.user, self.password)
        raise RuntimeError(
            "No Octane credentials configured. Set client_id/client_secret or "
            "user/password in .octane/config.yaml or OCTANE_* env vars"
        )


def get_config_path() -> Path:
    """Path to .octane/config.yaml under the current directory"""
    return Path.cwd() / CONFIG_DIR / CONFIG_FILE


def _read_server_section(path: Path) -> dict[str, Any]:
    if not path.exists():
        return {}
    with open(path) as f:
        config = yaml.safe_load(f) or {}
    server = config.get('server') or {}
    if not isinstance(server, dict):
        raise RuntimeError(f"'server' in {path} must be a mapping")
    return server


def load_settings(path: Path | None = None) -> OctaneSettings:
    """Load settings from config.yaml and the environment.

    Raises:
        RuntimeError: If no server URL is configured
    """
    config_path = path or get_config_path()
    values = _read_server_section(config_path)

    for key, env_var in ENV_OVERRIDES.items():
        env_value = os.environ.get(env_var)
        if env_value:
            values[key] = env_value

    url = values.get('url')
    if not url:
        raise RuntimeError(
            f"Octane server URL not configured. Set server.url in {config_path} "
            "or OCTANE_SERVER_URL"
        )

    workspace = values.get('workspace')
    shared_space = values.get('shared_space')
    return OctaneSettings(
        url=str(url),
        shared_space=None if shared_space in (None, '') else str(shared_space),
        workspace=None if workspace in (None, '') else int(workspace),
        client_id=values.get('client_id'),
        client_secret=values.get('client_secret'),
        user=values.get('user'),
        password=values.get('password'),
        timeout=int(values.get('timeout') or DEFAULT_TIMEOUT),
    )
