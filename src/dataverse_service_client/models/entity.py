# Copyright (c) Microsoft Corporation.
# Licensed under the MIT license.

"""
Entity capabilities understood by the client.

The client is not tied to a base class. Any type that provides the methods below
can be written or read:

- :class:`WriteEntity`: ``encode()`` to a JSON-ready dict and ``reference()``.
- :class:`ReadEntity`: ``columns()`` naming the projected fields and ``decode()``.

Example::

    @dataclass
    class Contact:
        contactid: uuid.UUID
        firstname: str
        lastname: str

        def reference(self) -> Reference:
            return Reference("contacts", self.contactid)

        def encode(self) -> dict:
            return {"firstname": self.firstname, "lastname": self.lastname}

        @classmethod
        def columns(cls):
            return ("contactid", "firstname", "lastname")

        @classmethod
        def decode(cls, payload):
            return cls(uuid.UUID(payload["contactid"]), payload["firstname"], payload["lastname"])

Projection is mandatory: there is no way to ask for every column.
"""

from __future__ import annotations

from typing import Any, Dict, Protocol, Sequence, Tuple, TypeVar, runtime_checkable

from ..core._error_codes import VALIDATION_EMPTY_COLUMNS
from ..core.errors import ValidationError
from .reference import Reference

E = TypeVar("E")


@runtime_checkable
class Referenceable(Protocol):
    def reference(self) -> Reference: ...


@runtime_checkable
class WriteEntity(Protocol):
    """An entity that can be serialized and knows its own identity."""

    def encode(self) -> Dict[str, Any]: ...

    def reference(self) -> Reference: ...


@runtime_checkable
class ReadEntity(Protocol):
    """An entity type that declares its projection and can be built from a payload."""

    @classmethod
    def columns(cls) -> Sequence[str]: ...

    @classmethod
    def decode(cls, payload: Dict[str, Any]) -> Any: ...


def columns_of(entity_type: Any) -> Tuple[str, ...]:
    """
    Return the declared projection of ``entity_type`` as a tuple.

    :raises ValidationError: If the type declares no columns.
    """
    columns = tuple(entity_type.columns())
    if not columns:
        raise ValidationError(
            f"{getattr(entity_type, '__name__', entity_type)} declares no columns to select",
            subcode=VALIDATION_EMPTY_COLUMNS,
        )
    return columns


def reference_of(target: Referenceable) -> Reference:
    """Return the :class:`Reference` of a reference or of anything exposing ``reference()``."""
    if isinstance(target, Reference):
        return target
    return target.reference()


__all__ = ["WriteEntity", "ReadEntity", "Referenceable", "columns_of", "reference_of"]
