# Copyright (c) Microsoft Corporation.
# Licensed under the MIT license.

"""
Data models for the Dataverse service client.

Provides the record identity, entity capabilities, query, page, batch and merge
types used by :class:`~dataverse_service_client.client.DataverseClient`.
"""

from .reference import Reference
from .entity import ReadEntity, WriteEntity
from .page import Page
from .query import Query
from .batch import Batch
from .merge import MergeRequest

__all__ = [
    "Reference",
    "ReadEntity",
    "WriteEntity",
    "Page",
    "Query",
    "Batch",
    "MergeRequest",
]
