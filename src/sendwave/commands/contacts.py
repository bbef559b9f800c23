"""Contact commands -- the ``sendwave contacts`` sub-command group.

``import`` accepts either a CSV file with ``name`` and ``phone`` columns or
a JSON array of ``{"name": ..., "phone": ...}`` objects::

    sendwave contacts import 9b1c customers.csv
"""

from __future__ import annotations

import csv
import json
from operator import attrgetter
from pathlib import Path

import typer
from pydantic import ValidationError

from sendwave.client.request_client import RequestClient
from sendwave.commands._common import run_api
from sendwave.exceptions import InvalidUsageError
from sendwave.models import Contact, ContactList, NewContact
from sendwave.output import Column, error, get_output, info, success
from sendwave.resources.contacts import ContactsResource


contacts_app = typer.Typer(no_args_is_help=True)


LIST_COLUMNS = [
    Column("ID", attrgetter("id")),
    Column("NAME", attrgetter("name")),
    Column("CONTACTS", attrgetter("contact_count")),
]

CONTACT_COLUMNS = [
    Column("ID", attrgetter("id")),
    Column("NAME", attrgetter("name")),
    Column("PHONE", attrgetter("phone")),
]


@contacts_app.command("lists")
def contacts_lists(ctx: typer.Context) -> None:
    """List contact lists."""

    async def _lists(client: RequestClient) -> list[ContactList]:
        return await ContactsResource(client).list_lists()

    lists = run_api(ctx, _lists)
    get_output().print_table(
        LIST_COLUMNS, lists, title="Contact lists", empty="No contact lists."
    )


@contacts_app.command("create-list")
def contacts_create_list(
    ctx: typer.Context,
    name: str = typer.Argument(help="List name."),
) -> None:
    """Create an empty contact list."""

    async def _create(client: RequestClient) -> ContactList:
        return await ContactsResource(client).create_list(name)

    contact_list = run_api(ctx, _create)
    success(f'List "{contact_list.name}" created ({contact_list.id}).')


@contacts_app.command("delete-list")
def contacts_delete_list(
    ctx: typer.Context,
    list_id: str = typer.Argument(help="Contact list id."),
    yes: bool = typer.Option(False, "--yes", "-y", help="Skip the confirmation prompt."),
) -> None:
    """Delete a contact list and its contacts."""
    if not yes:
        typer.confirm(f"Delete list {list_id} and all of its contacts?", abort=True)

    async def _delete(client: RequestClient) -> None:
        await ContactsResource(client).delete_list(list_id)

    run_api(ctx, _delete)
    success(f"List {list_id} deleted.")


@contacts_app.command("list")
def contacts_list(
    ctx: typer.Context,
    list_id: str = typer.Argument(help="Contact list id."),
) -> None:
    """List the contacts of a list."""

    async def _contacts(client: RequestClient) -> list[Contact]:
        return await ContactsResource(client).list_contacts(list_id)

    contacts = run_api(ctx, _contacts)
    get_output().print_table(CONTACT_COLUMNS, contacts, empty="No contacts in this list.")


@contacts_app.command("add")
def contacts_add(
    ctx: typer.Context,
    list_id: str = typer.Argument(help="Contact list id."),
    name: str = typer.Option(..., "--name", help="Contact name."),
    phone: str = typer.Option(..., "--phone", help="Phone number with country code."),
) -> None:
    """Add one contact to a list."""

    async def _add(client: RequestClient) -> Contact:
        return await ContactsResource(client).add_contact(list_id, name, phone)

    contact = run_api(ctx, _add)
    success(f"Added {contact.name} ({contact.phone}).")


@contacts_app.command("import")
def contacts_import(
    ctx: typer.Context,
    list_id: str = typer.Argument(help="Contact list id."),
    path: Path = typer.Argument(help="CSV or JSON file.", exists=True, dir_okay=False),
) -> None:
    """Bulk-import contacts from a file."""
    try:
        contacts = read_contacts_file(path)
    except InvalidUsageError as exc:
        error(str(exc))
        raise typer.Exit(code=exc.exit_code) from None

    if not contacts:
        info(f"No contacts found in {path}.")
        return

    async def _import(client: RequestClient) -> int:
        return await ContactsResource(client).import_contacts(list_id, contacts)

    imported = run_api(ctx, _import)
    success(f"Imported {imported} of {len(contacts)} contacts.")


@contacts_app.command("delete")
def contacts_delete(
    ctx: typer.Context,
    contact_id: str = typer.Argument(help="Contact id."),
) -> None:
    """Delete one contact."""

    async def _delete(client: RequestClient) -> None:
        await ContactsResource(client).delete_contact(contact_id)

    run_api(ctx, _delete)
    success(f"Contact {contact_id} deleted.")


def read_contacts_file(path: Path) -> list[NewContact]:
    """Read contacts from a ``.json`` array or a CSV file with a header row.

    CSV column names are matched case-insensitively; extra columns are
    ignored and rows with an empty name or phone are skipped.

    Raises:
        InvalidUsageError: The file cannot be read or has the wrong shape.
    """
    try:
        text = path.read_text(encoding="utf-8-sig")
    except (OSError, UnicodeDecodeError) as exc:
        raise InvalidUsageError(f"Cannot read {path}: {exc}") from exc

    if path.suffix.lower() == ".json":
        try:
            data = json.loads(text)
        except json.JSONDecodeError as exc:
            raise InvalidUsageError(f"Invalid JSON in {path}: {exc}") from exc
        if not isinstance(data, list):
            raise InvalidUsageError(f"{path} must contain a JSON array of contacts")
        try:
            return [NewContact.model_validate(item) for item in data]
        except ValidationError as exc:
            raise InvalidUsageError(f"Invalid contact in {path}: {exc}") from exc

    reader = csv.DictReader(text.splitlines())
    fields = {name.strip().lower(): name for name in reader.fieldnames or []}
    if "name" not in fields or "phone" not in fields:
        raise InvalidUsageError(f"{path} needs 'name' and 'phone' columns")

    contacts: list[NewContact] = []
    for row in reader:
        name = (row.get(fields["name"]) or "").strip()
        phone = (row.get(fields["phone"]) or "").strip()
        if name and phone:
            contacts.append(NewContact(name=name, phone=phone))
    return contacts
