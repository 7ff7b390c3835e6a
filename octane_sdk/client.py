"""
Octane SDK Client
Signs in once and hands out contexts that share the signed-in session
"""

import logging
import uuid
from typing import Any, Optional, Union

from .auth import Authentication
from .class_factory import DEFAULT_FACTORY, get_factory
from .config import OctaneSettings, load_settings
from .context import Builder, Octane, OctaneConfiguration
from .http_client import OctaneHttpClient

logger = logging.getLogger(__name__)


def parse_shared_space_id(value: Union[str, int, uuid.UUID]) -> Union[int, uuid.UUID]:
    """Shared space ids are numeric on-premise and UUIDs on SaaS."""
    if isinstance(value, (int, uuid.UUID)):
        return value
    text = str(value).strip()
    if text.lstrip('-').isdigit():
        return int(text)
    try:
        return uuid.UUID(text)
    except ValueError:
        raise ValueError(f'Invalid shared space id: {value!r}')


class OctaneClient:
    """
    Main Octane SDK client

    Usage:
        with OctaneClient(
            server_url='https://octane.example.com',
            authentication=ClientAuthentication('key', 'secret'),
        ) as client:
            octane = client.context(shared_space=1001, workspace=1002)
            defects = octane.entity_list('defects').get(limit=10)
    """

    def __init__(
        self,
        server_url: str,
        authentication: Authentication,
        timeout: int = 30,
        entity_list_factory: Any = DEFAULT_FACTORY,
        http_client: Optional[OctaneHttpClient] = None,
    ):
        self.server_url = server_url.rstrip('/')
        # fail on a bad factory before signing in
        get_factory(entity_list_factory)
        owns_client = http_client is None
        self.http_client = http_client or OctaneHttpClient(self.server_url, timeout=timeout)
        try:
            self.http_client.authenticate(authentication)
        except Exception:
            if owns_client:
                self.http_client.close()
            raise
        self.configuration = OctaneConfiguration(self.http_client, entity_list_factory)

    @classmethod
    def from_settings(cls, settings: Optional[OctaneSettings] = None, **kwargs: Any) -> 'OctaneClient':
        """Create a client from .octane/config.yaml and OCTANE_* env vars"""
        settings = settings or load_settings()
        return cls(
            server_url=settings.url,
            authentication=settings.authentication(),
            timeout=settings.timeout,
            **kwargs,
        )

    def builder(self) -> Builder:
        return Builder(self.configuration, self.server_url)

    def context(
        self,
        shared_space: Optional[Union[str, int, uuid.UUID]] = None,
        workspace: Optional[int] = None,
    ) -> Octane:
        """Build a context in one call

        Args:
            shared_space: Shared space id (None for the space admin context)
            workspace: Workspace id, or NO_WORKSPACE_ID for the workspace list
        """
        builder = self.builder()
        if shared_space is not None and shared_space != '':
            builder.shared_space(parse_shared_space_id(shared_space))
        if workspace is not None:
            builder.work_space(workspace)
        return builder.build()

    def sign_out(self) -> None:
        self.http_client.sign_out()

    def close(self):
        """Sign out and close the session"""
        try:
            self.http_client.sign_out()
        finally:
            self.http_client.close()

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        self.close()
