"""Filter registry.

The API and BaseFilter.from_dict() look filters up by id here.
"""

import importlib

from .base import BaseFilter

# Same dict as BaseFilter._registry
filter_registry: dict[str, type[BaseFilter]] = BaseFilter._registry

_BUILTIN_MODULES = ('blur',)


def register_filter(filter_id: str):
    """Class decorator registering a filter under ``filter_id``.

    Also sets ``filter_type`` on the class so serialization uses the id.
    """

    def decorator(cls: type[BaseFilter]) -> type[BaseFilter]:
        cls.filter_type = filter_id  # type: ignore[attr-defined]
        filter_registry[filter_id] = cls
        return cls

    return decorator


def load_builtin_filters() -> None:
    """Import all built-in filter modules to trigger registration."""
    for module in _BUILTIN_MODULES:
        importlib.import_module(f'{__package__}.{module}')
