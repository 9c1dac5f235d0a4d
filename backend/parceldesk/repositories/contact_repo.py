from typing import List, Optional

from parceldesk.core.exceptions import NotFoundError
from parceldesk.db.base import Contact as DbContact
from parceldesk.domain.entities import Contact as DomainContact
from parceldesk.domain.interfaces import IContactRepository

from .base import SqlAlchemyRepository, new_id


class ContactRepository(SqlAlchemyRepository, IContactRepository):
    """Repository for Contact persistence operations."""

    def get_by_id(self, contact_id: str) -> Optional[DomainContact]:
        db_contact = self.db.get(DbContact, contact_id)
        return self._to_domain(db_contact) if db_contact else None

    def get_by_business_name(self, business_name: str) -> Optional[DomainContact]:
        db_contact = (
            self.db.query(DbContact).filter_by(business_name=business_name).first()
        )
        return self._to_domain(db_contact) if db_contact else None

    def get_all(self) -> List[DomainContact]:
        db_contacts = self.db.query(DbContact).order_by(DbContact.business_name).all()
        return [self._to_domain(c) for c in db_contacts]

    def create(self, contact: DomainContact) -> DomainContact:
        db_contact = DbContact(
            id=contact.id or new_id(),
            business_name=contact.business_name,
            phone=contact.phone,
            address=contact.address,
            note=contact.note,
        )
        self._save(db_contact)
        return self._to_domain(db_contact)

    def update(self, contact: DomainContact) -> DomainContact:
        if not contact.id:
            raise ValueError("Contact ID is required for update")

        db_contact = self.db.get(DbContact, contact.id)
        if not db_contact:
            raise NotFoundError.for_entity("Contact", contact.id)

        db_contact.business_name = contact.business_name
        db_contact.phone = contact.phone
        db_contact.address = contact.address
        db_contact.note = contact.note
        self._save(db_contact)
        return self._to_domain(db_contact)

    def delete(self, contact_id: str) -> bool:
        db_contact = self.db.get(DbContact, contact_id)
        if not db_contact:
            return False
        self.db.delete(db_contact)
        self._save()
        return True

    def _to_domain(self, db_contact: DbContact) -> DomainContact:
        return DomainContact(
            id=db_contact.id,
            business_name=db_contact.business_name,
            phone=db_contact.phone,
            address=db_contact.address,
            note=db_contact.note,
        )
