"""
Entity models and entity-list contexts

An ``EntityList`` addresses one collection (``defects``, ``tests``,
``releases`` ...) under a context base URL and translates CRUD calls into
requests on the shared ``OctaneHttpClient``.
"""

import logging
from typing import Any, Dict, Iterable, Iterator, List, Optional, Sequence, Union

from .exceptions import OctanePartialError
from .query import Query, to_param

logger = logging.getLogger(__name__)

DEFAULT_PAGE_SIZE = 100


def join_url(base: str, *segments: Any) -> str:
    """Append path segments to a base URL without doubling slashes."""
    url = base.rstrip('/')
    for segment in segments:
        text = str(segment).strip('/')
        if text:
            url = f'{url}/{text}'
    return url


class EntityModel:
    """A single Octane entity as a mutable field map.

    Reference fields hold nested ``EntityModel`` instances (or a
    ``MultiReference`` list of them) and serialise as ``{"type": ..., "id": ...}``
    plus whatever other fields were set on them.
    """

    def __init__(self, fields: Optional[Dict[str, Any]] = None, **kwargs: Any):
        self._fields: Dict[str, Any] = {}
        for name, value in {**(fields or {}), **kwargs}.items():
            self.set_value(name, value)

    @classmethod
    def reference(cls, entity_type: str, entity_id: Union[str, int]) -> 'EntityModel':
        return cls(type=entity_type, id=str(entity_id))

    @classmethod
    def from_json(cls, data: Dict[str, Any]) -> 'EntityModel':
        return cls(data)

    @property
    def id(self) -> Optional[str]:
        value = self._fields.get('id')
        return None if value is None else str(value)

    @property
    def type(self) -> Optional[str]:
        return self._fields.get('type')

    @property
    def name(self) -> Optional[str]:
        return self._fields.get('name')

    def get_value(self, field: str, default: Any = None) -> Any:
        return self._fields.get(field, default)

    def set_value(self, field: str, value: Any) -> 'EntityModel':
        self._fields[field] = _wrap(value)
        return self

    def remove_value(self, field: str) -> None:
        self._fields.pop(field, None)

    def fields(self) -> List[str]:
        return list(self._fields)

    def to_json(self) -> Dict[str, Any]:
        return {name: _unwrap(value) for name, value in self._fields.items()}

    def __contains__(self, field: str) -> bool:
        return field in self._fields

    def __getitem__(self, field: str) -> Any:
        return self._fields[field]

    def __setitem__(self, field: str, value: Any) -> None:
        self.set_value(field, value)

    def __eq__(self, other: object) -> bool:
        return isinstance(other, EntityModel) and other.to_json() == self.to_json()

    def __repr__(self) -> str:
        return f'EntityModel(type={self.type!r}, id={self.id!r})'


class MultiReference(list):
    """Value of a multi-reference field; serialises as ``{"data": [...]}`` even when empty."""


def _wrap(value: Any) -> Any:
    # {"type": ..., "id": ...} dicts are references; {"data": [...]} is a multi-reference
    if isinstance(value, MultiReference):
        return value
    if isinstance(value, dict):
        if 'data' in value and isinstance(value['data'], list):
            return MultiReference(_wrap(item) for item in value['data'])
        if 'type' in value:
            return EntityModel(value)
    return value


def _unwrap(value: Any) -> Any:
    if isinstance(value, EntityModel):
        return value.to_json()
    if isinstance(value, MultiReference) or (
        isinstance(value, list) and value and all(isinstance(v, EntityModel) for v in value)
    ):
        return {'data': [_unwrap(v) for v in value]}
    return value


class EntityCollection(list):
    """A page of entities with the server-side totals."""

    def __init__(
        self,
        entities: Iterable[EntityModel] = (),
        total_count: Optional[int] = None,
        exceeds_total_count: bool = False,
    ):
        super().__init__(entities)
        # False when the server left total_count out of the response
        self.total_count_known = total_count is not None
        self.total_count = len(self) if total_count is None else total_count
        self.exceeds_total_count = exceeds_total_count

    @classmethod
    def from_response(cls, response: Any) -> 'EntityCollection':
        if response is None:
            return cls()
        if isinstance(response, list):
            return cls(EntityModel.from_json(item) for item in response)
        data = response.get('data', [])
        return cls(
            (EntityModel.from_json(item) for item in data),
            total_count=response.get('total_count'),
            exceeds_total_count=bool(response.get('exceeds_total_count', False)),
        )


def _payload(models: Union[EntityModel, Sequence[EntityModel]]) -> Dict[str, Any]:
    if isinstance(models, EntityModel):
        models = [models]
    return {'data': [model.to_json() for model in models]}


def _check_partial(response: Any, operation: str) -> EntityCollection:
    collection = EntityCollection.from_response(response)
    errors = response.get('errors') if isinstance(response, dict) else None
    if errors:
        raise OctanePartialError(
            f'{operation} failed for {len(errors)} entities',
            entities=response.get('data', []),
            errors=errors,
        )
    return collection


class EntityAt:
    """A single entity addressed by id: ``{collection}/{id}``"""

    def __init__(self, entity_list: 'EntityList', entity_id: Union[str, int]):
        self.entity_list = entity_list
        self.entity_id = str(entity_id)
        self.url = join_url(entity_list.url, self.entity_id)

    def get(self, fields: Optional[Sequence[str]] = None) -> EntityModel:
        params = {}
        if fields:
            params['fields'] = ','.join(fields)
        response = self.entity_list.http_client.request('GET', self.url, params=params or None)
        return EntityModel.from_json(response)

    def update(self, model: EntityModel) -> EntityModel:
        response = self.entity_list.http_client.request('PUT', self.url, json=model.to_json())
        return EntityModel.from_json(response)

    def delete(self) -> None:
        self.entity_list.http_client.request('DELETE', self.url)


class EntityList:
    """
    Entity-list context for one collection

    Usage:
        defects = octane.entity_list('defects')
        page = defects.get(query=Query.statement('name', 'EQ', 'crash'), fields=['name'])
        for defect in defects.iter_all(page_size=200):
            ...
    """

    def __init__(self, http_client: Any, base_url: str, entity_name: str):
        self.http_client = http_client
        self.base_url = base_url
        self.entity_name = entity_name
        self.url = join_url(base_url, entity_name)

    def get(
        self,
        query: Optional[Union[Query, str]] = None,
        fields: Optional[Sequence[str]] = None,
        order_by: Optional[Union[str, Sequence[str]]] = None,
        limit: Optional[int] = None,
        offset: Optional[int] = None,
    ) -> EntityCollection:
        """Get one page of entities

        Args:
            query: Filter expression (``Query`` or raw string)
            fields: Field names to return
            order_by: Field name(s); prefix with ``-`` for descending
            limit: Page size
            offset: Index of the first entity

        Returns:
            EntityCollection with ``total_count`` from the server
        """
        params: Dict[str, Any] = {}
        query_param = to_param(query)
        if query_param:
            params['query'] = query_param
        if fields:
            params['fields'] = ','.join(fields)
        if order_by:
            params['order_by'] = order_by if isinstance(order_by, str) else ','.join(order_by)
        if limit is not None:
            params['limit'] = limit
        if offset is not None:
            params['offset'] = offset

        response = self.http_client.request('GET', self.url, params=params or None)
        return EntityCollection.from_response(response)

    def iter_all(
        self,
        query: Optional[Union[Query, str]] = None,
        fields: Optional[Sequence[str]] = None,
        order_by: Optional[Union[str, Sequence[str]]] = None,
        page_size: int = DEFAULT_PAGE_SIZE,
    ) -> Iterator[EntityModel]:
        """Yield every matching entity, fetching pages with ``offset``."""
        if page_size <= 0:
            raise ValueError('page_size must be positive')
        offset = 0
        while True:
            page = self.get(query=query, fields=fields, order_by=order_by, limit=page_size, offset=offset)
            if not page:
                return
            yield from page
            offset += len(page)
            logger.debug('Fetched %d/%d %s', offset, page.total_count, self.entity_name)
            if page.total_count_known:
                if offset >= page.total_count:
                    return
            elif len(page) < page_size:
                return

    def at(self, entity_id: Union[str, int]) -> EntityAt:
        return EntityAt(self, entity_id)

    def create(self, models: Union[EntityModel, Sequence[EntityModel]]) -> EntityCollection:
        """Create entities in one request

        Raises:
            OctanePartialError: If only some of the entities were created
        """
        response = self.http_client.request('POST', self.url, json=_payload(models))
        return _check_partial(response, 'create')

    def update(
        self,
        models: Union[EntityModel, Sequence[EntityModel]],
        query: Optional[Union[Query, str]] = None,
    ) -> EntityCollection:
        """Update entities by id, or every entity matching ``query``"""
        params = None
        query_param = to_param(query)
        if query_param:
            params = {'query': query_param}
        response = self.http_client.request('PUT', self.url, params=params, json=_payload(models))
        return _check_partial(response, 'update')

    def delete(self, query: Union[Query, str]) -> None:
        """Delete every entity matching ``query``"""
        query_param = to_param(query)
        if not query_param:
            raise ValueError('delete() requires a query')
        self.http_client.request('DELETE', self.url, params={'query': query_param})

    def __repr__(self) -> str:
        return f'{type(self).__name__}({self.url!r})'


class TypedEntityList(EntityList):
    """EntityList bound to a fixed collection name.

    Subclasses set ``entity_name``::

        class Defects(TypedEntityList):
            entity_name = 'defects'
    """

    entity_name: str = ''

    def __init__(self, http_client: Any, base_url: str, entity_name: Optional[str] = None):
        name = entity_name or type(self).entity_name
        if not name:
            raise ValueError(f'{type(self).__name__} does not define entity_name')
        super().__init__(http_client, base_url, name)
