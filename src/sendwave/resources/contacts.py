"""Contact list and contact operations.

Endpoints::

    GET    /api/contacts/lists                       list_lists()
    POST   /api/contacts/lists                       create_list(name)
    DELETE /api/contacts/lists/{id}                  delete_list(id)
    GET    /api/contacts/lists/{list_id}/contacts    list_contacts(list_id)
    POST   /api/contacts/lists/{list_id}/contacts    add_contact(list_id, name, phone)
    POST   /api/contacts/lists/{list_id}/import      import_contacts(list_id, contacts)
    DELETE /api/contacts/{id}                        delete_contact(id)
"""

from __future__ import annotations

from typing import Iterable, Union

from sendwave.models import Contact, ContactList, ImportResult, NewContact
from sendwave.resources.base import Resource, validate_as, validate_list


class ContactsResource(Resource):
    """Manage contact lists and the contacts inside them."""

    async def list_lists(self) -> list[ContactList]:
        async with self._track("Failed to fetch contact lists"):
            data = await self._client.send_json("/api/contacts/lists")
            return validate_list(ContactList, data)

    async def create_list(self, name: str) -> ContactList:
        async with self._track("Failed to create contact list"):
            data = await self._client.send_json(
                "/api/contacts/lists", method="POST", body={"name": name}
            )
            return validate_as(ContactList, data)

    async def delete_list(self, list_id: str) -> None:
        async with self._track("Failed to delete contact list"):
            await self._client.send(f"/api/contacts/lists/{list_id}", method="DELETE")

    async def list_contacts(self, list_id: str) -> list[Contact]:
        async with self._track("Failed to fetch contacts"):
            data = await self._client.send_json(f"/api/contacts/lists/{list_id}/contacts")
            return validate_list(Contact, data)

    async def add_contact(self, list_id: str, name: str, phone: str) -> Contact:
        async with self._track("Failed to add contact"):
            data = await self._client.send_json(
                f"/api/contacts/lists/{list_id}/contacts",
                method="POST",
                body={"name": name, "phone": phone},
            )
            return validate_as(Contact, data)

    async def import_contacts(
        self, list_id: str, contacts: Iterable[Union[NewContact, dict]]
    ) -> int:
        """Bulk-add *contacts* to a list.

        Returns:
            The number of contacts the server reports as imported.
        """
        payload = [
            c.model_dump() if isinstance(c, NewContact) else NewContact.model_validate(c).model_dump()
            for c in contacts
        ]
        async with self._track("Failed to import contacts"):
            data = await self._client.send_json(
                f"/api/contacts/lists/{list_id}/import",
                method="POST",
                body={"contacts": payload},
            )
            return validate_as(ImportResult, data).imported

    async def delete_contact(self, contact_id: str) -> None:
        async with self._track("Failed to delete contact"):
            await self._client.send(f"/api/contacts/{contact_id}", method="DELETE")
