"""Factory registry for entity-list contexts.

A context asks the configured factory for every ``EntityList`` it hands
out, so applications can substitute their own subclass. Factories are
looked up by registered name or by a ``module:attribute`` path.
"""

import importlib
from typing import Any, Callable, Dict, Type, Union

from .entities import EntityList, TypedEntityList

EntityListFactory = Callable[[Any, str, str], EntityList]

FACTORY_REGISTRY: Dict[str, EntityListFactory] = {}

DEFAULT_FACTORY = 'default'


def register_factory(name: str) -> Callable:
    """Decorator to register an entity-list factory."""
    def decorator(fn: EntityListFactory) -> EntityListFactory:
        FACTORY_REGISTRY[name] = fn
        return fn
    return decorator


@register_factory(DEFAULT_FACTORY)
def default_factory(http_client: Any, base_url: str, entity_name: str) -> EntityList:
    return EntityList(http_client, base_url, entity_name)


def get_factory(factory: Union[str, EntityListFactory, None]) -> EntityListFactory:
    """Resolve a factory name, dotted path or callable.

    Raises:
        ValueError: If the name is neither registered nor importable
    """
    if factory is None:
        return FACTORY_REGISTRY[DEFAULT_FACTORY]
    if callable(factory):
        return factory
    if factory in FACTORY_REGISTRY:
        return FACTORY_REGISTRY[factory]
    if ':' in factory:
        module_name, _, attr = factory.partition(':')
        try:
            module = importlib.import_module(module_name)
            resolved = getattr(module, attr)
        except (ImportError, AttributeError) as e:
            raise ValueError(f'Cannot load entity list factory {factory}: {e}') from e
        if not callable(resolved):
            raise ValueError(f'Entity list factory {factory} is not callable')
        return resolved
    raise ValueError(f'Unknown entity list factory: {factory}')


def build_typed(entity_list_class: Type[TypedEntityList], http_client: Any, base_url: str) -> TypedEntityList:
    if not (isinstance(entity_list_class, type) and issubclass(entity_list_class, TypedEntityList)):
        raise TypeError(f'{entity_list_class!r} is not a TypedEntityList subclass')
    return entity_list_class(http_client, base_url)
