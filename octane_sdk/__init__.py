"""
Octane SDK for Python

Client for the Octane REST API: shared spaces, workspaces, entities,
metadata, attachments and manual test scripts.

Example:
    >>> from octane_sdk import OctaneClient, ClientAuthentication, Query
    >>>
    >>> client = OctaneClient(
    ...     server_url='https://octane.example.com',
    ...     authentication=ClientAuthentication('key-id', 'key-secret'),
    ... )
    >>> octane = client.context(shared_space=1001, workspace=1002)
    >>>
    >>> # List open defects
    >>> defects = octane.entity_list('defects').get(
    ...     query=Query.statement('phase', 'EQ', Query.statement('id', 'EQ', 'phase.defect.new')),
    ...     fields=['name', 'severity'],
    ... )
    >>>
    >>> # Walk every test page by page
    >>> for test in octane.entity_list('tests').iter_all(page_size=200):
    ...     print(test.name)
"""

from .attachments import AttachmentList
from .auth import Authentication, ClientAuthentication, UserAuthentication
from .client import OctaneClient
from .context import (
    NO_ENTITY,
    NO_WORKSPACE_ID,
    ONLY_SHARED_SPACE_WORKSPACE_ID,
    Builder,
    Octane,
    OctaneConfiguration,
)
from .entities import EntityCollection, EntityList, EntityModel, MultiReference, TypedEntityList
from .exceptions import (
    OctaneError,
    OctaneAPIError,
    OctaneNotFoundError,
    OctaneAuthenticationError,
    OctanePartialError,
)
from .features import Feature
from .manual_tests import CallStep, TestScript, TestStep, ValidationStep
from .metadata import Metadata
from .query import Query

__version__ = "1.0.0"
__all__ = [
    "OctaneClient",
    "Octane",
    "Builder",
    "OctaneConfiguration",
    "NO_ENTITY",
    "NO_WORKSPACE_ID",
    "ONLY_SHARED_SPACE_WORKSPACE_ID",
    "Authentication",
    "ClientAuthentication",
    "UserAuthentication",
    "EntityCollection",
    "EntityList",
    "EntityModel",
    "MultiReference",
    "TypedEntityList",
    "AttachmentList",
    "Metadata",
    "Feature",
    "Query",
    "TestStep",
    "ValidationStep",
    "CallStep",
    "TestScript",
    "OctaneError",
    "OctaneAPIError",
    "OctaneNotFoundError",
    "OctaneAuthenticationError",
    "OctanePartialError",
]
