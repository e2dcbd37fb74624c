# Copyright (c) Microsoft Corporation.
# Licensed under the MIT license.

import unittest
import uuid

from dataverse_service_client.models.merge import MergeRequest

TARGET = uuid.UUID("11111111-1111-1111-1111-111111111111")
SUBORDINATE = uuid.UUID("22222222-2222-2222-2222-222222222222")


class TestMergeRequest(unittest.TestCase):
    def test_payload_shape(self):
        payload = MergeRequest("contact", TARGET, SUBORDINATE).to_payload()
        self.assertEqual(
            payload,
            {
                "Target": {"@odata.type": "Microsoft.Dynamics.CRM.contact", "contactid": str(TARGET)},
                "Subordinate": {"@odata.type": "Microsoft.Dynamics.CRM.contact", "contactid": str(SUBORDINATE)},
                "PerformParentingChecks": False,
            },
        )

    def test_cascade_flag(self):
        payload = MergeRequest("lead", TARGET, SUBORDINATE, cascade=True).to_payload()
        self.assertIs(payload["PerformParentingChecks"], True)

    def test_entity_name_not_validated(self):
        payload = MergeRequest("opportunity", TARGET, SUBORDINATE).to_payload()
        self.assertEqual(payload["Target"]["opportunityid"], str(TARGET))


if __name__ == "__main__":
    unittest.main()
