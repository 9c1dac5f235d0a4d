"""
Abstract interfaces for repositories following Interface Segregation Principle.

These interfaces define contracts without implementation details,
enabling dependency injection and easier testing.
"""

from abc import ABC, abstractmethod
from datetime import date
from typing import List, Optional

from .entities import Contact, Delivery, PeriodStats, Recipient
from .lifecycle import DeliveryStatus


class IRecipientReader(ABC):
    """Interface for recipient read operations - Interface Segregation Principle."""

    @abstractmethod
    def get_by_id(self, recipient_id: str) -> Optional[Recipient]:
        """Get recipient by ID."""
        pass

    @abstractmethod
    def search(self, query: str, limit: int) -> List[Recipient]:
        """Get up to `limit` recipients whose address or phone contains `query`."""
        pass


class IRecipientWriter(ABC):
    """Interface for recipient write operations - Interface Segregation Principle."""

    @abstractmethod
    def create(self, recipient: Recipient) -> Recipient:
        """Create a new recipient, assigning an ID when missing."""
        pass

    @abstractmethod
    def update(self, recipient: Recipient) -> Recipient:
        """Replace every field of an existing recipient."""
        pass

    @abstractmethod
    def delete(self, recipient_id: str) -> bool:
        """Delete a recipient. Returns False when nothing was deleted."""
        pass


class IRecipientRepository(IRecipientReader, IRecipientWriter):
    """Complete recipient repository interface combining read/write operations."""

    pass


class IDeliveryReader(ABC):
    """Interface for delivery read operations."""

    @abstractmethod
    def get_by_id(self, delivery_id: str) -> Optional[Delivery]:
        """Get delivery by ID with its recipient."""
        pass

    @abstractmethod
    def get_all(self) -> List[Delivery]:
        """Get every delivery with its recipient."""
        pass

    @abstractmethod
    def daily_stats(self, start: date, end: date) -> List[PeriodStats]:
        """Per-day rollup over the inclusive range, newest day first."""
        pass

    @abstractmethod
    def monthly_stats(self, year: int, month: int) -> List[PeriodStats]:
        """Rollup for one calendar month."""
        pass


class IDeliveryWriter(ABC):
    """Interface for delivery write operations."""

    @abstractmethod
    def create(self, delivery: Delivery) -> Delivery:
        """Create a new delivery, assigning an ID when missing."""
        pass

    @abstractmethod
    def update_status(self, delivery_id: str, status: DeliveryStatus) -> bool:
        """Store a new status and refresh the update timestamp."""
        pass


class IDeliveryRepository(IDeliveryReader, IDeliveryWriter):
    """Complete delivery repository interface."""

    pass


class IContactReader(ABC):
    """Interface for contact read operations."""

    @abstractmethod
    def get_by_id(self, contact_id: str) -> Optional[Contact]:
        """Get contact by ID."""
        pass

    @abstractmethod
    def get_by_business_name(self, business_name: str) -> Optional[Contact]:
        """Get the first contact with exactly this business name."""
        pass

    @abstractmethod
    def get_all(self) -> List[Contact]:
        """Get all contacts."""
        pass


class IContactWriter(ABC):
    """Interface for contact write operations."""

    @abstractmethod
    def create(self, contact: Contact) -> Contact:
        """Create a new contact, assigning an ID when missing."""
        pass

    @abstractmethod
    def update(self, contact: Contact) -> Contact:
        """Replace every field of an existing contact."""
        pass

    @abstractmethod
    def delete(self, contact_id: str) -> bool:
        """Delete a contact."""
        pass


class IContactRepository(IContactReader, IContactWriter):
    """Complete contact repository interface."""

    pass
