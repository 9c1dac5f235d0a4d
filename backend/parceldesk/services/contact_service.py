"""
Contact service: address book of frequent senders.
"""

from typing import List, Optional

from parceldesk.core.exceptions import NotFoundError
from parceldesk.domain.entities import Contact
from parceldesk.domain.interfaces import IContactRepository


class ContactService:
    """Application service for contact-related use-cases."""

    def __init__(self, contact_repo: IContactRepository) -> None:
        self.contact_repo = contact_repo

    def find_by_id(self, contact_id: str) -> Optional[Contact]:
        return self.contact_repo.get_by_id(contact_id)

    def get_contact(self, contact_id: str) -> Contact:
        contact = self.contact_repo.get_by_id(contact_id)
        if not contact:
            raise NotFoundError.for_entity("Contact", contact_id)
        return contact

    def find_all(self) -> List[Contact]:
        return self.contact_repo.get_all()

    def find_by_business_name(self, business_name: str) -> Optional[Contact]:
        return self.contact_repo.get_by_business_name(business_name)

    def create_contact(
        self, business_name: str, phone: str, address: str, note: Optional[str] = None
    ) -> Contact:
        contact = Contact(
            business_name=business_name, phone=phone, address=address, note=note
        )
        return self.contact_repo.create(contact)

    def update_contact(
        self,
        contact_id: str,
        business_name: str,
        phone: str,
        address: str,
        note: Optional[str] = None,
    ) -> Contact:
        self.get_contact(contact_id)

        updated = Contact(
            id=contact_id,
            business_name=business_name,
            phone=phone,
            address=address,
            note=note,
        )
        return self.contact_repo.update(updated)

    def delete_contact(self, contact_id: str) -> None:
        self.get_contact(contact_id)
        self.contact_repo.delete(contact_id)

    def find_or_create_contact(
        self, business_name: str, phone: str, address: str, note: Optional[str] = None
    ) -> Contact:
        """Return the contact with this exact business name, creating it if missing.

        An existing contact is returned unchanged: the supplied phone,
        address and note are not merged into it and nothing is written.
        """
        existing = self.contact_repo.get_by_business_name(business_name)
        if existing:
            return existing
        return self.create_contact(business_name, phone, address, note)
