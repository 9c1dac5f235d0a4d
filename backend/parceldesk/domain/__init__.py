"""
Domain package - Pure business logic layer.

This package contains:
- entities.py: Domain entities with business logic
- lifecycle.py: Delivery status rules shared by entities and services
- interfaces.py: Repository contracts
"""

from .entities import (
    Address,
    Contact,
    Delivery,
    DeliveryStatusChanged,
    PeriodStats,
    Recipient,
)
from .interfaces import (
    IContactReader,
    IContactRepository,
    IContactWriter,
    IDeliveryReader,
    IDeliveryRepository,
    IDeliveryWriter,
    IRecipientReader,
    IRecipientRepository,
    IRecipientWriter,
)
from .lifecycle import DeliveryStatus, SettlementMethod, ensure_transition

__all__ = [
    # Domain entities
    "Address",
    "Recipient",
    "Contact",
    "Delivery",
    "DeliveryStatusChanged",
    "PeriodStats",
    # Lifecycle
    "DeliveryStatus",
    "SettlementMethod",
    "ensure_transition",
    # Repository interfaces
    "IRecipientRepository",
    "IDeliveryRepository",
    "IContactRepository",
    # Segregated interfaces
    "IRecipientReader",
    "IRecipientWriter",
    "IDeliveryReader",
    "IDeliveryWriter",
    "IContactReader",
    "IContactWriter",
]
