"""Read-only mapping fields for frozen models.

``@dataclass(frozen=True)`` stops attribute assignment but not mutation of a
dict held in a field. Models wrap their mapping fields with
``freeze_mapping`` in ``__post_init__`` so callers can read but never edit.
"""

from types import MappingProxyType
from typing import Any, Mapping, Optional


def freeze_mapping(mapping: Optional[Mapping] = None) -> Mapping:
    """Copy a mapping into a read-only view.

    The copy detaches the view from the caller's dict, so later edits to the
    original do not leak into the model.
    """
    return MappingProxyType(dict(mapping or {}))


def freeze_field(instance: Any, name: str) -> None:
    """Replace a mapping field of a frozen dataclass with a read-only copy."""
    object.__setattr__(instance, name, freeze_mapping(getattr(instance, name)))
