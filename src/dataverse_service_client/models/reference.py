# Copyright (c) Microsoft Corporation.
# Licensed under the MIT license.

"""Minimal record identity: a collection name and a record id."""

from __future__ import annotations

import uuid
from dataclasses import dataclass
from typing import Union

__all__ = ["Reference"]


@dataclass(frozen=True)
class Reference:
    """
    Identity of one Dataverse record.

    :param collection: Entity set (plural logical) name, e.g. ``"contacts"``. Not validated.
    :type collection: str
    :param id: Record GUID.
    :type id: uuid.UUID

    Example::

        ref = Reference("contacts", uuid.UUID("12345678-1234-1234-1234-123456789012"))
        client.delete(ref)
    """

    collection: str
    id: uuid.UUID

    @classmethod
    def parse(cls, collection: str, record_id: Union[str, uuid.UUID]) -> "Reference":
        """
        Build a reference from a GUID string (braces and upper case are accepted).

        :raises ValueError: If ``record_id`` is not a valid GUID.
        """
        if isinstance(record_id, uuid.UUID):
            return cls(collection, record_id)
        return cls(collection, uuid.UUID(record_id))

    def reference(self) -> "Reference":
        """A reference is its own reference, so it can be passed wherever an entity is."""
        return self
