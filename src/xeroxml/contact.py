"""Minimal contact representation used by invoices."""

from __future__ import annotations

from dataclasses import dataclass, field

from lxml import etree

from .utils import add_text, is_guid, iter_children, optional_text

_FIELD_TAGS = {
    "ContactID": "contact_id",
    "ContactNumber": "contact_number",
    "Name": "name",
    "FirstName": "first_name",
    "LastName": "last_name",
    "EmailAddress": "email_address",
}


@dataclass
class Contact:
    """Contact attached to an invoice."""

    contact_id: str | None = None
    contact_number: str | None = None
    name: str | None = None
    first_name: str | None = None
    last_name: str | None = None
    email_address: str | None = None
    errors: list[tuple[str, str]] = field(default_factory=list, compare=False, repr=False)

    def valid(self) -> bool:
        """Check the contact and rebuild :attr:`errors`."""

        self.errors = []
        if self.contact_id and not is_guid(self.contact_id):
            self.errors.append(("contact_id", "must be blank or a valid Xero GUID"))
        if not self.name:
            self.errors.append(("name", "can't be blank"))
        return not self.errors

    def to_xml(self, parent: etree._Element | None = None) -> etree._Element:
        """Serialise the contact, appending it to ``parent`` when given."""

        if parent is None:
            element = etree.Element("Contact")
        else:
            element = etree.SubElement(parent, "Contact")
        for tag, attribute in _FIELD_TAGS.items():
            value = getattr(self, attribute)
            if value is not None:
                add_text(element, tag, value)
        return element

    @classmethod
    def from_xml(cls, element: etree._Element) -> "Contact":
        contact = cls()
        for name, child in iter_children(element):
            attribute = _FIELD_TAGS.get(name)
            if attribute is not None:
                setattr(contact, attribute, optional_text(child))
        return contact


__all__ = ["Contact"]
