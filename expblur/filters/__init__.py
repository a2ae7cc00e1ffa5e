"""Filters package."""

from .base import BaseFilter
from .registry import filter_registry, register_filter, load_builtin_filters

__all__ = ['BaseFilter', 'filter_registry', 'register_filter', 'load_builtin_filters']
