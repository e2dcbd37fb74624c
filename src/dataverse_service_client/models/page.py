# Copyright (c) Microsoft Corporation.
# Licensed under the MIT license.

"""
One page of a multi-record query.

Pages are produced by :meth:`~dataverse_service_client.client.DataverseClient.retrieve_multiple`
and :meth:`~dataverse_service_client.client.DataverseClient.retrieve_next_page`. The
continuation cursor is the service's ``@odata.nextLink`` kept verbatim; it is never
rebuilt from the original query.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Generic, Iterator, List, Optional, Tuple, TypeVar

E = TypeVar("E")

__all__ = ["Page"]


@dataclass(frozen=True)
class Page(Generic[E]):
    """
    Immutable page of decoded entities plus an optional continuation cursor.

    A cursor is present exactly when the service had more records at response time.

    Example::

        page = client.retrieve_multiple(Contact, Query("contacts"))
        while True:
            for contact in page:
                print(contact.firstname)
            if not page.is_incomplete():
                break
            page = client.retrieve_next_page(page)
    """

    entities: Tuple[E, ...]
    next_link: Optional[str] = None
    entity_type: Any = field(default=None, compare=False, repr=False)

    def is_incomplete(self) -> bool:
        """True if more records can be fetched with ``retrieve_next_page``."""
        return self.next_link is not None

    def into_inner(self) -> List[E]:
        return list(self.entities)

    def __iter__(self) -> Iterator[E]:
        return iter(self.entities)

    def __len__(self) -> int:
        return len(self.entities)

    def __getitem__(self, index: int) -> E:
        return self.entities[index]
