"""Entity metadata features.

``/metadata/entities`` describes each entity type with a list of features
such as ``{"name": "rest", "url": "defects", "methods": ["GET", "POST"]}``.
Each known feature name maps to a class here; unknown names become a plain
``Feature``.
"""

from typing import Any, Callable, Dict, List, Optional, Type

FEATURE_REGISTRY: Dict[str, Type['Feature']] = {}


def register_feature(name: str) -> Callable:
    """Decorator to register a feature class under its server name."""
    def decorator(cls: Type['Feature']) -> Type['Feature']:
        FEATURE_REGISTRY[name] = cls
        return cls
    return decorator


class Feature:
    """Base class of all features: just a name."""

    def __init__(self, name: str = ''):
        self._name = name

    @property
    def name(self) -> str:
        return self._name

    @name.setter
    def name(self, new_name: str) -> None:
        self._name = new_name

    def get_name(self) -> str:
        return self._name

    def set_name(self, new_name: str) -> None:
        self._name = new_name

    @classmethod
    def from_json(cls, data: Dict[str, Any]) -> 'Feature':
        return cls(data.get('name', ''))

    def __repr__(self) -> str:
        return f'{type(self).__name__}(name={self._name!r})'


def parse_feature(data: Dict[str, Any]) -> Feature:
    cls = FEATURE_REGISTRY.get(data.get('name', ''), Feature)
    return cls.from_json(data)


@register_feature('rest')
class RestFeature(Feature):
    def __init__(self, name: str = 'rest', url: str = '', methods: Optional[List[str]] = None):
        super().__init__(name)
        self.url = url
        self.methods = methods or []

    @classmethod
    def from_json(cls, data: Dict[str, Any]) -> 'RestFeature':
        return cls(data.get('name', 'rest'), data.get('url', ''), list(data.get('methods') or []))

    def supports(self, method: str) -> bool:
        return method.upper() in self.methods


@register_feature('mailing')
class MailingFeature(Feature):
    def __init__(self, name: str = 'mailing'):
        super().__init__(name)


@register_feature('has_attachments')
class HasAttachmentsFeature(Feature):
    def __init__(self, name: str = 'has_attachments'):
        super().__init__(name)


@register_feature('attachments')
class AttachmentsFeature(Feature):
    def __init__(self, name: str = 'attachments'):
        super().__init__(name)


@register_feature('comments')
class CommentsFeature(Feature):
    def __init__(self, name: str = 'comments'):
        super().__init__(name)


@register_feature('business_rules')
class BusinessRulesFeature(Feature):
    def __init__(self, name: str = 'business_rules'):
        super().__init__(name)


@register_feature('user_defined_fields')
class UdfFeature(Feature):
    def __init__(self, name: str = 'user_defined_fields'):
        super().__init__(name)


@register_feature('ordering')
class OrderingFeature(Feature):
    def __init__(self, name: str = 'ordering'):
        super().__init__(name)


@register_feature('phases')
class PhasesFeature(Feature):
    def __init__(self, name: str = 'phases'):
        super().__init__(name)


@register_feature('auditing')
class AuditingFeature(Feature):
    def __init__(self, name: str = 'auditing'):
        super().__init__(name)


@register_feature('subtypes')
class SubTypesFeature(Feature):
    """Entity is abstract; ``types`` lists its concrete subtypes."""

    def __init__(self, name: str = 'subtypes', types: Optional[List[str]] = None):
        super().__init__(name)
        self.types = types or []

    @classmethod
    def from_json(cls, data: Dict[str, Any]) -> 'SubTypesFeature':
        return cls(data.get('name', 'subtypes'), list(data.get('types') or []))


@register_feature('subtype_of')
class SubTypeOfFeature(Feature):
    def __init__(self, name: str = 'subtype_of', type: str = ''):
        super().__init__(name)
        self.type = type

    @classmethod
    def from_json(cls, data: Dict[str, Any]) -> 'SubTypeOfFeature':
        return cls(data.get('name', 'subtype_of'), data.get('type', ''))


@register_feature('hierarchy')
class HierarchyFeature(Feature):
    def __init__(
        self,
        name: str = 'hierarchy',
        root: Optional[Dict[str, Any]] = None,
        child_types: Optional[List[str]] = None,
        parent_types: Optional[List[str]] = None,
    ):
        super().__init__(name)
        self.root = root
        self.child_types = child_types or []
        self.parent_types = parent_types or []

    @classmethod
    def from_json(cls, data: Dict[str, Any]) -> 'HierarchyFeature':
        return cls(
            data.get('name', 'hierarchy'),
            data.get('root'),
            list(data.get('child_types') or []),
            list(data.get('parent_types') or []),
        )
