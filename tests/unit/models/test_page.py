# Copyright (c) Microsoft Corporation.
# Licensed under the MIT license.

"""Unit tests for Page and Reference."""

import dataclasses
import unittest
import uuid

from dataverse_service_client.core.errors import ValidationError
from dataverse_service_client.models.entity import ReadEntity, WriteEntity, columns_of, reference_of
from dataverse_service_client.models.page import Page
from dataverse_service_client.models.reference import Reference

from tests.fixtures.test_data import Contact, ContactLastName, Unselectable, make_contact


class TestPage(unittest.TestCase):
    def test_last_page(self):
        page = Page((1, 2, 3))
        self.assertFalse(page.is_incomplete())
        self.assertEqual(page.into_inner(), [1, 2, 3])
        self.assertEqual(list(page), [1, 2, 3])
        self.assertEqual(len(page), 3)
        self.assertEqual(page[1], 2)

    def test_incomplete_page(self):
        self.assertTrue(Page((), "https://next").is_incomplete())

    def test_empty_page_may_still_have_cursor(self):
        page = Page((), "https://next")
        self.assertEqual(len(page), 0)
        self.assertTrue(page.is_incomplete())

    def test_immutable(self):
        page = Page((1,))
        with self.assertRaises(dataclasses.FrozenInstanceError):
            page.next_link = "x"

    def test_equality_ignores_entity_type(self):
        self.assertEqual(Page((1,), None, Contact), Page((1,), None, ContactLastName))


class TestReference(unittest.TestCase):
    GUID = "12345678-1234-1234-1234-123456789012"

    def test_parse_string(self):
        ref = Reference.parse("contacts", self.GUID)
        self.assertEqual(ref, Reference("contacts", uuid.UUID(self.GUID)))

    def test_parse_braced_upper_case(self):
        ref = Reference.parse("contacts", "{" + self.GUID.upper() + "}")
        self.assertEqual(ref.id, uuid.UUID(self.GUID))

    def test_parse_invalid(self):
        with self.assertRaises(ValueError):
            Reference.parse("contacts", "not-a-guid")

    def test_reference_is_its_own_reference(self):
        ref = Reference.parse("contacts", self.GUID)
        self.assertIs(ref.reference(), ref)
        self.assertIs(reference_of(ref), ref)

    def test_hashable(self):
        self.assertEqual(len({Reference.parse("contacts", self.GUID), Reference.parse("contacts", self.GUID)}), 1)


class TestEntityCapabilities(unittest.TestCase):
    def test_protocol_checks(self):
        contact = make_contact()
        self.assertIsInstance(contact, WriteEntity)
        self.assertIsInstance(contact, ReadEntity)
        self.assertEqual(reference_of(contact), Reference("contacts", contact.contactid))

    def test_columns_of(self):
        self.assertEqual(columns_of(ContactLastName), ("contactid", "lastname"))

    def test_columns_of_empty(self):
        with self.assertRaises(ValidationError):
            columns_of(Unselectable)


if __name__ == "__main__":
    unittest.main()
