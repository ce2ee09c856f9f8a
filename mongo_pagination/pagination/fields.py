"""Lookup of record fields by their external (stored) name.

Records are either raw documents, keyed by stored name, or pydantic models
whose field aliases declare the stored name (``id`` aliased to ``_id``).
"""

from collections.abc import Mapping
from typing import Any, Optional


def find_field_name_by_alias(model_cls: Optional[type], alias: str) -> Optional[str]:
    """Return the attribute name of the field stored as ``alias``.

    A field is stored under the name documents are validated from: a string
    validation alias, then its alias, then the attribute name itself. The
    serialization alias is accepted too. Matching is case-sensitive.

    Args:
        model_cls: A pydantic model class
        alias: Stored field name to look for

    Returns:
        Attribute name, or None if the class is missing or has no such field
    """
    if model_cls is None or not alias:
        return None

    model_fields = getattr(model_cls, "model_fields", None)
    if not model_fields:
        return None

    for name, info in model_fields.items():
        validation_alias = info.validation_alias if isinstance(info.validation_alias, str) else None
        stored_name = validation_alias or info.alias or name
        if alias in (stored_name, info.serialization_alias):
            return name

    return None


def get_field_value(record: Any, alias: str) -> Any:
    """Read the value stored as ``alias`` off a document or model instance.

    Raises:
        KeyError: If the record has no field stored under that name
    """
    if isinstance(record, Mapping):
        return record[alias]

    name = find_field_name_by_alias(type(record), alias)
    if name is None:
        raise KeyError(alias)
    return getattr(record, name)
