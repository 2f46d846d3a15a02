"""Loaders for declarative configuration (JSON, YAML, etc.)."""

from .json_loader import (
    load_catalog_from_json,
    parse_catalog_dict,
    validate_catalog_dict,
    validate_catalog_file,
)

__all__ = [
    "load_catalog_from_json",
    "parse_catalog_dict",
    "validate_catalog_dict",
    "validate_catalog_file",
]
