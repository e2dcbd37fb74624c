# Copyright (c) Microsoft Corporation.
# Licensed under the MIT license.

"""URL shapes used by the Dataverse Web API operations."""

from __future__ import annotations

import uuid
from typing import TYPE_CHECKING, Sequence

from ..common.constants import VERSION

if TYPE_CHECKING:
    from ..models.query import Query


class _UrlBuilder:
    """
    Builds the four URL shapes the client needs from a fixed base URL.

    :param base_url: Environment URL, e.g. ``"https://org.crm.dynamics.com"``.
        A trailing slash is removed.
    :type base_url: str
    """

    def __init__(self, base_url: str) -> None:
        self.base_url = (base_url or "").rstrip("/")
        self.api = f"{self.base_url}/api/data/v{VERSION}"

    def simple(self, collection: str) -> str:
        """``{base}/api/data/v9.2/{collection}``"""
        return f"{self.api}/{collection}"

    def targeted(self, collection: str, record_id: uuid.UUID) -> str:
        """``{base}/api/data/v9.2/{collection}({id})`` with the id in hyphenated form."""
        return f"{self.simple(collection)}({record_id})"

    def retrieve(self, collection: str, record_id: uuid.UUID, columns: Sequence[str]) -> str:
        """Targeted URL plus ``?$select=`` of ``columns`` in the given order, duplicates kept."""
        return f"{self.targeted(collection, record_id)}?$select={','.join(columns)}"

    def query(self, columns: Sequence[str], query: "Query") -> str:
        """Rendered query fragment plus ``&$select=`` of ``columns``."""
        return f"{self.api}/{query}&$select={','.join(columns)}"
