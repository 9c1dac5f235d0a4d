"""
Recipient service for business logic following SOLID principles.

This service:
- Keeps business rules separate from controllers and repositories (Single Responsibility)
- Depends on abstractions (IRecipientRepository) not concrete implementations (Dependency Inversion)
- Works with domain entities, not database models
"""

from typing import List, Optional

from parceldesk.core.config import SEARCH_RESULT_LIMIT
from parceldesk.core.exceptions import NotFoundError
from parceldesk.domain.entities import Address, Recipient
from parceldesk.domain.interfaces import IRecipientRepository


class RecipientService:
    """Application service for recipient-related use-cases."""

    def __init__(
        self, recipient_repo: IRecipientRepository, search_limit: int = SEARCH_RESULT_LIMIT
    ) -> None:
        self.recipient_repo = recipient_repo
        self.search_limit = search_limit

    def find_by_id(self, recipient_id: str) -> Optional[Recipient]:
        return self.recipient_repo.get_by_id(recipient_id)

    def get_recipient(self, recipient_id: str) -> Recipient:
        """Get a specific recipient by ID, raising NotFoundError when absent."""
        recipient = self.recipient_repo.get_by_id(recipient_id)
        if not recipient:
            raise NotFoundError.for_entity("Recipient", recipient_id)
        return recipient

    def search(self, query: str) -> List[Recipient]:
        """Substring search over address and phone, capped at search_limit rows."""
        return self.recipient_repo.search(query or "", self.search_limit)

    def create_recipient(
        self,
        phone: str,
        address: str,
        name: Optional[str] = None,
        memo: Optional[str] = None,
        lat: Optional[float] = None,
        lng: Optional[float] = None,
    ) -> Recipient:
        recipient = Recipient(
            name=name,
            phone=phone,
            address=Address(address, lat, lng),
            memo=memo,
        )
        return self.recipient_repo.create(recipient)

    def update_recipient(
        self,
        recipient_id: str,
        phone: str,
        address: str,
        name: Optional[str] = None,
        memo: Optional[str] = None,
        lat: Optional[float] = None,
        lng: Optional[float] = None,
    ) -> Recipient:
        """Replace every field of an existing recipient.

        Business Rules:
        - The recipient must exist; nothing is written otherwise
        - Fields not supplied are cleared, not merged
        """
        self.get_recipient(recipient_id)

        updated = Recipient(
            id=recipient_id,
            name=name,
            phone=phone,
            address=Address(address, lat, lng),
            memo=memo,
        )
        return self.recipient_repo.update(updated)

    def delete_recipient(self, recipient_id: str) -> None:
        self.get_recipient(recipient_id)
        self.recipient_repo.delete(recipient_id)
