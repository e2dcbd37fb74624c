# Copyright (c) Microsoft Corporation.
# Licensed under the MIT license.

"""
Data access layer for the Dataverse service client.

Internal: URL construction, response classification and the request pipeline.
"""

__all__ = []
