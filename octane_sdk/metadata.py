"""
Metadata context: ``{base}/metadata/entities`` and ``{base}/metadata/fields``
"""

from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional

from .entities import join_url
from .features import Feature, parse_feature
from .query import Query


@dataclass
class EntityMetadata:
    """Description of one entity type."""
    name: str
    label: str = ''
    can_modify_label: bool = False
    features: List[Feature] = field(default_factory=list)

    @classmethod
    def from_json(cls, data: Dict[str, Any]) -> 'EntityMetadata':
        return cls(
            name=data.get('name', ''),
            label=data.get('label', ''),
            can_modify_label=bool(data.get('can_modify_label', False)),
            features=[parse_feature(f) for f in data.get('features') or []],
        )

    def feature(self, name: str) -> Optional[Feature]:
        for feature in self.features:
            if feature.name == name:
                return feature
        return None


@dataclass
class FieldMetadata:
    """Description of one field of an entity type."""
    name: str
    entity_name: str
    label: str = ''
    field_type: str = ''
    required: bool = False
    editable: bool = False
    sortable: bool = False
    final: bool = False
    max_length: Optional[int] = None
    field_type_data: Dict[str, Any] = field(default_factory=dict)

    @classmethod
    def from_json(cls, data: Dict[str, Any]) -> 'FieldMetadata':
        return cls(
            name=data.get('name', ''),
            entity_name=data.get('entity_name', ''),
            label=data.get('label', ''),
            field_type=data.get('field_type', ''),
            required=bool(data.get('required', False)),
            editable=bool(data.get('editable', False)),
            sortable=bool(data.get('sortable', False)),
            final=bool(data.get('final', False)),
            max_length=data.get('max_length'),
            field_type_data=data.get('field_type_data') or {},
        )

    @property
    def is_reference(self) -> bool:
        return self.field_type == 'reference'


class Metadata:
    """
    Metadata context

    Usage:
        meta = octane.metadata()
        defect = meta.entities('defect')[0]
        fields = meta.fields('defect', 'story')
    """

    def __init__(self, http_client: Any, base_url: str):
        self.http_client = http_client
        self.base_url = base_url
        self.url = join_url(base_url, 'metadata')

    def entities(self, *entity_names: str) -> List[EntityMetadata]:
        """Get entity metadata, optionally only for the named entities"""
        params = None
        if entity_names:
            params = {'query': Query.in_('name', entity_names).as_param()}
        response = self.http_client.request('GET', join_url(self.url, 'entities'), params=params)
        return [EntityMetadata.from_json(item) for item in _data(response)]

    def fields(self, *entity_names: str) -> List[FieldMetadata]:
        """Get field metadata, optionally only for fields of the named entities"""
        params = None
        if entity_names:
            params = {'query': Query.in_('entity_name', entity_names).as_param()}
        response = self.http_client.request('GET', join_url(self.url, 'fields'), params=params)
        return [FieldMetadata.from_json(item) for item in _data(response)]


def _data(response: Any) -> List[Dict[str, Any]]:
    if isinstance(response, dict):
        return response.get('data', [])
    return response if isinstance(response, list) else []
