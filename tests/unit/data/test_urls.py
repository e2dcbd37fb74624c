# Copyright (c) Microsoft Corporation.
# Licensed under the MIT license.

import uuid

from dataverse_service_client.data._urls import _UrlBuilder
from dataverse_service_client.models.query import Query

RID = uuid.UUID("12345678-1234-1234-1234-123456789012")


def test_simple():
    urls = _UrlBuilder("https://org.example.com")
    assert urls.simple("contacts") == "https://org.example.com/api/data/v9.2/contacts"


def test_trailing_slash_trimmed():
    assert _UrlBuilder("https://org.example.com/").api == "https://org.example.com/api/data/v9.2"


def test_targeted_uses_hyphenated_lowercase_id():
    urls = _UrlBuilder("https://org.example.com")
    upper = uuid.UUID("ABCDEF12-1234-1234-1234-123456789012")
    assert urls.targeted("accounts", upper) == (
        "https://org.example.com/api/data/v9.2/accounts(abcdef12-1234-1234-1234-123456789012)"
    )


def test_retrieve_keeps_column_order_and_duplicates():
    urls = _UrlBuilder("https://org.example.com")
    url = urls.retrieve("contacts", RID, ["lastname", "contactid", "lastname"])
    assert url == (
        "https://org.example.com/api/data/v9.2/contacts(12345678-1234-1234-1234-123456789012)"
        "?$select=lastname,contactid,lastname"
    )


def test_query_appends_select_after_operators():
    urls = _UrlBuilder("https://org.example.com")
    query = Query("contacts").filter_eq("statecode", 0).limit(10)
    assert urls.query(("contactid",), query) == (
        "https://org.example.com/api/data/v9.2/contacts?$filter=statecode%20eq%200&$top=10&$select=contactid"
    )


def test_query_without_operators_still_well_formed():
    urls = _UrlBuilder("https://org.example.com")
    assert urls.query(("contactid", "lastname"), Query("contacts")) == (
        "https://org.example.com/api/data/v9.2/contacts?&$select=contactid,lastname"
    )
