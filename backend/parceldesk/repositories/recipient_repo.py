"""Recipient repository implementation following SOLID principles.

Maps Recipient domain entities (with their embedded Address value) to the
flat recipients table and back.
"""

from typing import List, Optional

from sqlalchemy import or_

from parceldesk.core.exceptions import NotFoundError
from parceldesk.db.base import Recipient as DbRecipient
from parceldesk.domain.entities import Address
from parceldesk.domain.entities import Recipient as DomainRecipient
from parceldesk.domain.interfaces import IRecipientRepository

from .base import SqlAlchemyRepository, new_id


class RecipientRepository(SqlAlchemyRepository, IRecipientRepository):
    """Repository for Recipient persistence operations."""

    def get_by_id(self, recipient_id: str) -> Optional[DomainRecipient]:
        db_recipient = self.db.get(DbRecipient, recipient_id)
        return self.to_domain(db_recipient) if db_recipient else None

    def search(self, query: str, limit: int) -> List[DomainRecipient]:
        # No ordering: the first `limit` matches in storage order
        db_recipients = (
            self.db.query(DbRecipient)
            .filter(
                or_(
                    DbRecipient.address.contains(query, autoescape=True),
                    DbRecipient.phone.contains(query, autoescape=True),
                )
            )
            .limit(limit)
            .all()
        )
        return [self.to_domain(r) for r in db_recipients]

    def create(self, recipient: DomainRecipient) -> DomainRecipient:
        db_recipient = DbRecipient(id=recipient.id or new_id())
        self._apply(db_recipient, recipient)
        self._save(db_recipient)
        return self.to_domain(db_recipient)

    def update(self, recipient: DomainRecipient) -> DomainRecipient:
        if not recipient.id:
            raise ValueError("Recipient ID is required for update")

        db_recipient = self.db.get(DbRecipient, recipient.id)
        if not db_recipient:
            raise NotFoundError.for_entity("Recipient", recipient.id)

        self._apply(db_recipient, recipient)
        self._save(db_recipient)
        return self.to_domain(db_recipient)

    def delete(self, recipient_id: str) -> bool:
        db_recipient = self.db.get(DbRecipient, recipient_id)
        if not db_recipient:
            return False
        self.db.delete(db_recipient)
        self._save()
        return True

    @staticmethod
    def _apply(db_recipient: DbRecipient, recipient: DomainRecipient) -> None:
        address = recipient.address
        db_recipient.name = recipient.name
        db_recipient.phone = recipient.phone
        db_recipient.address = address.full if address else ""
        db_recipient.lat = address.lat if address else None
        db_recipient.lng = address.lng if address else None
        db_recipient.memo = recipient.memo

    @staticmethod
    def to_domain(db_recipient: DbRecipient) -> DomainRecipient:
        """Convert DB model to domain entity, rebuilding the Address value."""
        return DomainRecipient(
            id=db_recipient.id,
            name=db_recipient.name,
            phone=db_recipient.phone,
            address=Address(
                full=db_recipient.address,
                lat=db_recipient.lat,
                lng=db_recipient.lng,
            ),
            memo=db_recipient.memo,
        )
