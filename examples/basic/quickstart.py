# Copyright (c) Microsoft Corporation.
# Licensed under the MIT license.

import sys
import uuid
from dataclasses import dataclass
from pathlib import Path

# Add src to PYTHONPATH for local runs
sys.path.append(str(Path(__file__).resolve().parents[2] / "src"))

from azure.identity import InteractiveBrowserCredential

from dataverse_service_client import (
    Batch,
    DataverseClient,
    DataverseError,
    Query,
    Reference,
    ServerError,
)


@dataclass
class Contact:
    contactid: uuid.UUID
    firstname: str
    lastname: str

    def reference(self) -> Reference:
        return Reference("contacts", self.contactid)

    def encode(self) -> dict:
        return {"contactid": self.contactid, "firstname": self.firstname, "lastname": self.lastname}

    @classmethod
    def columns(cls):
        return ("contactid", "firstname", "lastname")

    @classmethod
    def decode(cls, payload):
        return cls(uuid.UUID(payload["contactid"]), payload["firstname"], payload["lastname"])


@dataclass
class ContactFirstName:
    contactid: uuid.UUID
    firstname: str

    def reference(self) -> Reference:
        return Reference("contacts", self.contactid)

    def encode(self) -> dict:
        return {"firstname": self.firstname}


entered = input("Enter Dataverse org URL (e.g. https://yourorg.crm.dynamics.com): ").strip()
if not entered:
	print("No URL entered; exiting.")
	sys.exit(1)

base_url = entered.rstrip('/')
pause_choice = input("Pause between steps? (y/N): ").strip() or "n"
pause_between_steps = (str(pause_choice).lower() in ("y", "yes", "true", "1"))


def log_call(call: str) -> None:
	print({"call": call})


def pause(next_step: str) -> None:
	if pause_between_steps:
		try:
			input(f"\nNext: {next_step}. Press Enter to continue...")
		except EOFError:
			pass


client = DataverseClient.with_credential(base_url, InteractiveBrowserCredential())
created = []

try:
	testy = Contact(uuid.uuid4(), "Testy", "McTestface")
	log_call("client.create(testy)")
	created.append(client.create(testy))
	print({"created": str(created[-1])})

	pause("retrieve")
	log_call("client.retrieve(Contact, testy)")
	print(client.retrieve(Contact, testy))

	pause("partial update")
	log_call("client.update(ContactFirstName(...))")
	client.update(ContactFirstName(testy.contactid, "Renamed"))
	print(client.retrieve(Contact, testy))

	pause("batch create")
	batch = Batch(base_url)
	for i in range(3):
		contact = Contact(uuid.uuid4(), f"Batch{i}", "McTestface")
		batch.create(contact)
		created.append(contact.contactid)
	log_call(f"client.execute(batch) with {len(batch)} operations")
	client.execute(batch)

	pause("query with paging")
	query = Query("contacts").filter_eq("lastname", "McTestface").order_by("firstname").limit(10)
	log_call(f"client.iter_pages(Contact, {query})")
	for page in client.iter_pages(Contact, query):
		for contact in page:
			print({"contactid": str(contact.contactid), "firstname": contact.firstname})

	pause("merge")
	log_call("client.merge('contact', target, subordinate)")
	client.merge("contact", created[0], created[1])
except ServerError as ex:
	print({"status": ex.status_code, "details": ex.details, "message": ex.message})
except DataverseError as ex:
	print({"error": ex.code, "message": ex.message})
finally:
	pause("cleanup")
	for record_id in created:
		try:
			log_call(f"client.delete(contacts({record_id}))")
			client.delete(Reference("contacts", record_id))
		except DataverseError as ex:
			print(f"Cleanup of {record_id} failed: {ex}")
	client.close()
