"""The Octane context and its builder.

A context fixes the REST scope every entity, metadata and attachment call
is made under::

    {server}/api/shared_spaces                                   space admin
    {server}/api/shared_spaces/{sharedspace_id}/                 one shared space
    {server}/api/shared_spaces/{sharedspace_id}/workspaces       workspace admin
    {server}/api/shared_spaces/{sharedspace_id}/workspaces/{id}  one workspace

Contexts are created with ``Builder`` and cannot be changed afterwards. One
signed-in configuration can back any number of contexts.
"""

import logging
import uuid
from dataclasses import dataclass, field
from typing import Any, Optional, Type, Union

from .attachments import AttachmentList
from .class_factory import DEFAULT_FACTORY, build_typed, get_factory
from .entities import EntityList, TypedEntityList, join_url
from .manual_tests import ManualTests
from .metadata import Metadata

logger = logging.getLogger(__name__)

SHARED_SPACES_DOMAIN_FORMAT = '{}/api/shared_spaces'

# Workspace id meaning "list the workspaces of the shared space"
NO_WORKSPACE_ID = -(2 ** 63)
# Workspace id meaning "shared space only"; the builder default
ONLY_SHARED_SPACE_WORKSPACE_ID = 0
# Entity name addressing the context collection itself (spaces or workspaces)
NO_ENTITY = ''


@dataclass(frozen=True)
class OctaneConfiguration:
    """What every context built from one sign-in shares."""
    http_client: Any
    entity_list_factory: Any = DEFAULT_FACTORY


@dataclass(frozen=True)
class Octane:
    """
    Main Octane context

    Usage:
        octane = Builder(configuration, 'https://octane.example.com') \\
            .shared_space(1001) \\
            .work_space(1002) \\
            .build()

        defects = octane.entity_list('defects').get(limit=10)
    """

    configuration: OctaneConfiguration
    domain: str
    shared_space_id: Optional[str] = None
    workspace_id: int = ONLY_SHARED_SPACE_WORKSPACE_ID
    base_url: str = field(init=False)

    def __post_init__(self):
        object.__setattr__(self, 'base_url', self._base_domain())
        logger.info(
            'Setting context to: domain=%s; spaceid=%s; workspaceid=%s',
            self.domain, self.shared_space_id, self.workspace_id,
        )

    def _base_domain(self) -> str:
        base = SHARED_SPACES_DOMAIN_FORMAT.format(self.domain)
        if not self.shared_space_id:
            return base

        base = f'{base}/{self.shared_space_id}'
        if self.workspace_id == NO_WORKSPACE_ID:
            return f'{base}/workspaces'
        if self.workspace_id != ONLY_SHARED_SPACE_WORKSPACE_ID:
            return f'{base}/workspaces/{self.workspace_id}'
        return f'{base}/'

    @property
    def http_client(self) -> Any:
        return self.configuration.http_client

    def url(self, *segments: Any) -> str:
        """Base URL with extra path segments appended"""
        return join_url(self.base_url, *segments)

    def entity_list(self, entity: Union[str, Type[TypedEntityList]]) -> EntityList:
        """New entity-list context for a collection name such as 'defects'.

        Pass ``NO_ENTITY`` for the list of shared spaces or workspaces, or a
        ``TypedEntityList`` subclass to get an instance of it.
        """
        if isinstance(entity, str):
            factory = get_factory(self.configuration.entity_list_factory)
            return factory(self.http_client, self.base_url, entity)
        return build_typed(entity, self.http_client, self.base_url)

    def metadata(self) -> Metadata:
        return Metadata(self.http_client, self.base_url)

    def attachment_list(self) -> AttachmentList:
        return AttachmentList(self.http_client, self.base_url)

    def manual_tests(self) -> ManualTests:
        return ManualTests(self.http_client, self.base_url)

    def sign_out(self) -> None:
        """Sign out of the server. Cookies held by the shared client are dropped."""
        self.http_client.sign_out()


class Builder:
    """
    Builds an ``Octane`` context

    Call ``shared_space`` and ``work_space`` at most once each, then
    ``build``. Without a shared space the context is the space admin; with a
    shared space but no workspace it is that shared space.
    """

    def __init__(self, configuration: OctaneConfiguration, url_domain: str):
        self.configuration = configuration
        self.url_domain = url_domain
        self.shared_space_id: Optional[str] = None
        self.workspace_id: int = ONLY_SHARED_SPACE_WORKSPACE_ID

    def shared_space(self, shared_space_id: Union[uuid.UUID, int]) -> 'Builder':
        """Set the shared space id, a UUID or an integer

        Raises:
            TypeError: If the id is None or of another type
        """
        if shared_space_id is None:
            raise TypeError('shared space id cannot be None')
        if isinstance(shared_space_id, bool) or not isinstance(shared_space_id, (uuid.UUID, int)):
            raise TypeError(f'shared space id must be a UUID or int, not {type(shared_space_id).__name__}')
        self.shared_space_id = str(shared_space_id)
        return self

    def work_space(self, workspace_id: int) -> 'Builder':
        """Set the workspace id

        ``NO_WORKSPACE_ID`` makes the context the workspace admin of the shared
        space (list of workspaces).
        """
        if workspace_id is None:
            raise TypeError('workspace id cannot be None')
        self.workspace_id = int(workspace_id)
        return self

    def build(self) -> Octane:
        logger.info('Building Octane context using %s', self)
        if self.shared_space_id is None:
            return Octane(self.configuration, self.url_domain)
        return Octane(self.configuration, self.url_domain, self.shared_space_id, self.workspace_id)

    def __str__(self) -> str:
        return f'Server: {self.url_domain} SharedSpace: {self.shared_space_id} Workspace: {self.workspace_id}'
