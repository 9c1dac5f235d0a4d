"""
Domain entities - Pure business logic, no framework dependencies.

Following SOLID principles:
- Single Responsibility: Each entity represents one business concept
- Open/Closed: Entities can be extended without modification
"""

from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Optional

from parceldesk.core.exceptions import BadRequestError

from .lifecycle import (
    INITIAL_STATUS,
    DeliveryStatus,
    SettlementMethod,
    ensure_transition,
)

# Largest value an integer column holds (signed 64-bit)
MAX_STORED_INT = 2**63 - 1


@dataclass(frozen=True)
class Address:
    """Value object: free-text address with optional coordinates."""

    full: str
    lat: Optional[float] = None
    lng: Optional[float] = None


@dataclass
class Recipient:
    """Domain entity representing a delivery destination.

    This is the pure business representation, independent of:
    - Database implementation (SQLAlchemy)
    - HTTP frameworks (Flask)
    """

    id: Optional[str] = None
    name: Optional[str] = None
    phone: str = ""
    address: Optional[Address] = None
    memo: Optional[str] = None

    def __post_init__(self):
        """Validate domain rules."""
        if not self.phone:
            raise BadRequestError("Phone is required")
        if self.address is None or not self.address.full:
            raise BadRequestError("Address is required")


@dataclass
class Contact:
    """Domain entity for the address book of frequent senders."""

    id: Optional[str] = None
    business_name: str = ""
    phone: str = ""
    address: str = ""
    note: Optional[str] = None

    def __post_init__(self):
        if not self.business_name:
            raise BadRequestError("Business name is required")


@dataclass(frozen=True)
class DeliveryStatusChanged:
    """Emitted after every successful status transition. Never persisted."""

    delivery_id: str
    old_status: DeliveryStatus
    new_status: DeliveryStatus
    timestamp: datetime = field(default_factory=lambda: datetime.now(timezone.utc))


@dataclass
class Delivery:
    """Aggregate root for a shipment record.

    Status only moves forward through deliver() and settle(); both go
    through the shared lifecycle guard.
    """

    id: Optional[str] = None
    recipient: Optional[Recipient] = None
    pickup_place: str = ""
    box_count: int = 0
    settlement: SettlementMethod = SettlementMethod.PREPAID
    fee: Optional[int] = None
    note: Optional[str] = None
    status: DeliveryStatus = INITIAL_STATUS
    updated_at: Optional[datetime] = None

    def __post_init__(self):
        """Validate business rules."""
        if self.recipient is None:
            raise BadRequestError("Recipient is required")
        if not self.pickup_place:
            raise BadRequestError("Pickup place is required")
        if isinstance(self.box_count, bool) or not isinstance(self.box_count, int):
            raise BadRequestError("Box count must be an integer")
        if self.box_count <= 0:
            raise BadRequestError("Box count must be positive")
        if self.box_count > MAX_STORED_INT:
            raise BadRequestError("Box count is too large")
        if self.fee is not None and (
            isinstance(self.fee, bool)
            or not isinstance(self.fee, int)
            or abs(self.fee) > MAX_STORED_INT
        ):
            raise BadRequestError("Fee must be an integer within range")
        try:
            self.settlement = SettlementMethod(self.settlement)
        except ValueError:
            raise BadRequestError(f"Invalid settlement method: {self.settlement!r}") from None
        self.status = DeliveryStatus(self.status)

    def transition_to(self, target) -> DeliveryStatusChanged:
        """Apply a status change and return the event describing it."""
        new_status = ensure_transition(self.status, target)
        old_status = self.status
        self.status = new_status
        return DeliveryStatusChanged(
            delivery_id=self.id or "",
            old_status=old_status,
            new_status=new_status,
        )

    def deliver(self) -> DeliveryStatusChanged:
        return self.transition_to(DeliveryStatus.DELIVERED)

    def settle(self) -> DeliveryStatusChanged:
        return self.transition_to(DeliveryStatus.SETTLED)


@dataclass(frozen=True)
class PeriodStats:
    """One row of a daily or monthly rollup."""

    period: str
    deliveries: int
    boxes: int
    fees: int
    settled: int
