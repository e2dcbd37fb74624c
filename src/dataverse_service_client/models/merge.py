# Copyright (c) Microsoft Corporation.
# Licensed under the MIT license.

"""Request body of the ``Merge`` action."""

from __future__ import annotations

import uuid
from dataclasses import dataclass
from typing import Any, Dict

__all__ = ["MergeRequest"]


@dataclass(frozen=True)
class MergeRequest:
    """
    Merge ``subordinate`` into ``target`` and deactivate the subordinate record.

    The service supports merging only for ``account``, ``contact``, ``lead`` and
    ``incident``. The client does not check ``entity_name``.

    :param entity_name: Logical (singular) name, e.g. ``"account"``.
    :type entity_name: str
    :param target: Record that survives the merge.
    :type target: uuid.UUID
    :param subordinate: Record folded into the target and deactivated.
    :type subordinate: uuid.UUID
    :param cascade: Sent as ``PerformParentingChecks``.
    :type cascade: bool
    """

    entity_name: str
    target: uuid.UUID
    subordinate: uuid.UUID
    cascade: bool = False

    def _entity_ref(self, record_id: uuid.UUID) -> Dict[str, Any]:
        return {
            "@odata.type": f"Microsoft.Dynamics.CRM.{self.entity_name}",
            f"{self.entity_name}id": str(record_id),
        }

    def to_payload(self) -> Dict[str, Any]:
        return {
            "Target": self._entity_ref(self.target),
            "Subordinate": self._entity_ref(self.subordinate),
            "PerformParentingChecks": self.cascade,
        }
