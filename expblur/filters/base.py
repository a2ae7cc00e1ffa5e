"""Base filter class using Pydantic BaseModel."""

import uuid
from abc import ABC, abstractmethod
from typing import Any, ClassVar

import numpy as np
from pydantic import BaseModel, ConfigDict, Field
from pydantic.fields import FieldInfo


class BaseFilter(BaseModel, ABC):
    """Base class for pixel buffer filters.

    Parameters are Pydantic fields, so construction validates them and the
    parameter schema served by the API is generated from the field
    constraints. Class metadata lives in ClassVars and is not serialized.
    """

    model_config = ConfigDict(
        populate_by_name=True,
        validate_assignment=True,
        extra='ignore',
    )

    filter_type: ClassVar[str] = "base"
    name: ClassVar[str] = "Base Filter"
    description: ClassVar[str] = "Base filter description"
    category: ClassVar[str] = "uncategorized"
    VERSION: ClassVar[int] = 1

    # Registry of filter classes by filter_type
    _registry: ClassVar[dict[str, type['BaseFilter']]] = {}

    id: str = Field(default_factory=lambda: str(uuid.uuid4()))
    enabled: bool = Field(default=True)

    def __init_subclass__(cls, **kwargs):
        """Register filter subclass in registry."""
        super().__init_subclass__(**kwargs)
        if cls.__dict__.get('filter_type', 'base') != "base":
            BaseFilter._registry[cls.filter_type] = cls

    @abstractmethod
    def apply(self, image: np.ndarray) -> np.ndarray:
        """Apply the filter to an image.

        Args:
            image: RGBA numpy array, shape (height, width, 4), dtype uint8

        Returns:
            Filtered RGBA numpy array, same shape and dtype
        """
        pass

    # Fields that are base infrastructure, not algorithm params
    _BASE_FIELDS: ClassVar[frozenset[str]] = frozenset({'id', 'enabled'})

    def params(self) -> dict[str, Any]:
        """Algorithm parameters as a plain dict."""
        return {
            field_name: getattr(self, field_name)
            for field_name in type(self).model_fields
            if field_name not in self._BASE_FIELDS
        }

    def to_dict(self) -> dict[str, Any]:
        """Serialize to ``{'id', 'filterId', 'name', 'enabled', 'params', '_version'}``."""
        return {
            'id': self.id,
            'filterId': self.filter_type,
            'name': self.name,
            'enabled': self.enabled,
            'params': self.params(),
            '_version': self.VERSION,
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> 'BaseFilter':
        """Deserialize from :meth:`to_dict` output."""
        filter_type = data.get('filterId') or data.get('type', 'base')
        filter_cls = cls._registry.get(filter_type)
        if filter_cls is None:
            raise ValueError(f"Unknown filter type: {filter_type}")
        params = data.get('params', {})
        return filter_cls(
            id=data.get('id', str(uuid.uuid4())),
            enabled=data.get('enabled', True),
            **params,
        )

    @classmethod
    def get_params_schema(cls) -> list[dict[str, Any]]:
        """Auto-generate param schema from model_fields for the REST API."""
        schema = []
        for field_name, field_info in cls.model_fields.items():
            if field_name in cls._BASE_FIELDS:
                continue
            param = _field_to_param_schema(field_name, field_info)
            if param:
                schema.append(param)
        return schema


def _field_to_param_schema(field_name: str, field_info: FieldInfo) -> dict[str, Any] | None:
    """Map a Pydantic FieldInfo to the REST API schema dict format."""
    extra = field_info.json_schema_extra or {}

    annotation = field_info.annotation
    if annotation is None:
        return None

    if annotation is bool:
        schema_type = 'checkbox'
    elif annotation is int:
        schema_type = 'int'
    elif annotation is float:
        schema_type = 'range'
    else:
        schema_type = 'text'

    param: dict[str, Any] = {
        'id': field_name,
        'name': extra.get('display_name', field_name.replace('_', ' ').title()),
        'type': schema_type,
        'default': field_info.default,
    }

    # Range constraints from Field(ge=, le=)
    for meta in (field_info.metadata or []):
        if getattr(meta, 'ge', None) is not None:
            param['min'] = meta.ge
        if getattr(meta, 'le', None) is not None:
            param['max'] = meta.le

    for key in ('step', 'suffix'):
        if key in extra:
            param[key] = extra[key]

    if field_info.description:
        param['description'] = field_info.description

    return param
