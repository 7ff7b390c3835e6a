"""
Attachment-list context: ``{base}/attachments``
"""

import json
import logging
from typing import Any, Optional, Sequence, Union

from .entities import EntityCollection, EntityList, EntityModel, join_url
from .query import Query

logger = logging.getLogger(__name__)

ATTACHMENTS = 'attachments'


class AttachmentAt:
    """A single attachment by id"""

    def __init__(self, http_client: Any, url: str):
        self.http_client = http_client
        self.url = url

    def get(self, fields: Optional[Sequence[str]] = None) -> EntityModel:
        """Get the attachment's entity fields (name, size, owner ...)"""
        params = {'fields': ','.join(fields)} if fields else None
        return EntityModel.from_json(self.http_client.request('GET', self.url, params=params))

    def content(self) -> bytes:
        """Download the attachment body"""
        return self.http_client.request(
            'GET',
            self.url,
            headers={'Accept': 'application/octet-stream'},
            raw=True,
        )

    def delete(self) -> None:
        self.http_client.request('DELETE', self.url)


class AttachmentList:
    """
    Attachments context

    Usage:
        attachments = octane.attachment_list()
        created = attachments.create('log.txt', 'defect', 1001, b'...', 'text/plain')
        data = attachments.at(created.id).content()
    """

    def __init__(self, http_client: Any, base_url: str):
        self.http_client = http_client
        self.base_url = base_url
        self.url = join_url(base_url, ATTACHMENTS)
        self._entities = EntityList(http_client, base_url, ATTACHMENTS)

    def get(
        self,
        query: Optional[Union[Query, str]] = None,
        fields: Optional[Sequence[str]] = None,
        limit: Optional[int] = None,
        offset: Optional[int] = None,
    ) -> EntityCollection:
        return self._entities.get(query=query, fields=fields, limit=limit, offset=offset)

    def at(self, attachment_id: Union[str, int]) -> AttachmentAt:
        return AttachmentAt(self.http_client, join_url(self.url, attachment_id))

    def create(
        self,
        name: str,
        owner_type: str,
        owner_id: Union[str, int],
        content: bytes,
        content_type: str = 'application/octet-stream',
    ) -> EntityModel:
        """Upload an attachment and link it to its owner entity

        Args:
            name: File name shown in Octane
            owner_type: Owner entity type, e.g. 'defect' (stored as owner_<type>)
            owner_id: Owner entity id
            content: File body
            content_type: MIME type of the body

        Returns:
            The created attachment entity
        """
        entity = {
            'name': name,
            f'owner_{owner_type}': {'type': owner_type, 'id': str(owner_id)},
        }
        files = {
            'entity': (None, json.dumps(entity), 'application/json'),
            'content': (name, content, content_type),
        }
        logger.info('Uploading attachment %s to %s %s', name, owner_type, owner_id)
        response = self.http_client.request('POST', self.url, files=files)
        collection = EntityCollection.from_response(response)
        if collection:
            return collection[0]
        return EntityModel.from_json(response or {})
