# Copyright (c) Microsoft Corporation.
# Licensed under the MIT license.

"""
Fluent query object rendering the collection path plus filter, order and limit operators.

The rendered fragment never contains ``$select``: projection is appended by the
client from the entity type's declared columns.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, List, Optional
from urllib.parse import quote

from ..core._error_codes import VALIDATION_INVALID_LIMIT
from ..core.errors import ValidationError

# Characters left readable in rendered filter and order expressions
_SAFE_CHARS = "'(),/:"


@dataclass
class Query:
    """
    Fluent interface for building OData queries against one collection.

    :param table: Entity set (plural logical) name, e.g. ``"contacts"``.
    :type table: str

    Example::

        query = (Query("contacts")
                 .filter_eq("lastname", "McTestface")
                 .order_by("createdon", descending=True)
                 .limit(3))
        page = client.retrieve_multiple(Contact, query)

    ``str(query)`` renders ``contacts?$filter=...&$orderby=...&$top=3``. When no
    limit is set the service returns up to its own default page size (5000).
    """

    table: str
    _filter: List[str] = field(default_factory=list)
    _orderby: List[str] = field(default_factory=list)
    _top: Optional[int] = None

    def filter_eq(self, column: str, value: Any) -> "Query":
        """Add equality filter (column eq value)."""
        return self._compare(column, "eq", value)

    def filter_ne(self, column: str, value: Any) -> "Query":
        """Add not-equal filter (column ne value)."""
        return self._compare(column, "ne", value)

    def filter_gt(self, column: str, value: Any) -> "Query":
        return self._compare(column, "gt", value)

    def filter_ge(self, column: str, value: Any) -> "Query":
        return self._compare(column, "ge", value)

    def filter_lt(self, column: str, value: Any) -> "Query":
        return self._compare(column, "lt", value)

    def filter_le(self, column: str, value: Any) -> "Query":
        return self._compare(column, "le", value)

    def filter_contains(self, column: str, value: str) -> "Query":
        """Add contains filter (contains(column, value))."""
        self._filter.append(f"contains({column}, {self._format_value(value)})")
        return self

    def filter_startswith(self, column: str, value: str) -> "Query":
        self._filter.append(f"startswith({column}, {self._format_value(value)})")
        return self

    def filter_endswith(self, column: str, value: str) -> "Query":
        self._filter.append(f"endswith({column}, {self._format_value(value)})")
        return self

    def filter_null(self, column: str) -> "Query":
        self._filter.append(f"{column} eq null")
        return self

    def filter_not_null(self, column: str) -> "Query":
        self._filter.append(f"{column} ne null")
        return self

    def filter_raw(self, filter_string: str) -> "Query":
        """
        Add a raw OData filter expression.

        The expression is not validated or escaped, but like every filter it is
        percent-encoded when the query is rendered.

        Example::

            query = Query("accounts").filter_raw("(statecode eq 0 or statecode eq 1)")
        """
        self._filter.append(filter_string)
        return self

    def order_by(self, column: str, descending: bool = False) -> "Query":
        """
        Add sorting order. Can be called multiple times for multi-column sorting.
        """
        self._orderby.append(f"{column} desc" if descending else column)
        return self

    def limit(self, count: int) -> "Query":
        """
        Limit the total number of results (``$top``).

        :raises ValidationError: If ``count`` is less than 1.
        """
        if count < 1:
            raise ValidationError("limit must be at least 1", subcode=VALIDATION_INVALID_LIMIT)
        self._top = count
        return self

    def _compare(self, column: str, operator: str, value: Any) -> "Query":
        self._filter.append(f"{column} {operator} {self._format_value(value)}")
        return self

    @staticmethod
    def _format_value(value: Any) -> str:
        """
        Format a value for OData query syntax.

        Strings are quoted with embedded single quotes doubled; booleans are
        lowercased; GUIDs and numbers are rendered bare.
        """
        if value is None:
            return "null"
        if isinstance(value, str):
            escaped = value.replace("'", "''")
            return f"'{escaped}'"
        if isinstance(value, bool):
            return str(value).lower()
        return str(value)

    def __str__(self) -> str:
        operators = []
        if self._filter:
            operators.append("$filter=" + quote(" and ".join(self._filter), safe=_SAFE_CHARS))
        if self._orderby:
            operators.append("$orderby=" + quote(",".join(self._orderby), safe=_SAFE_CHARS))
        if self._top is not None:
            operators.append(f"$top={self._top}")
        return f"{self.table}?" + "&".join(operators)


__all__ = ["Query"]
