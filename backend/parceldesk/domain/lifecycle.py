"""
Delivery lifecycle rules.

PICKED_UP -> DELIVERED -> SETTLED. SETTLED is terminal and no transition
moves a delivery backwards or skips DELIVERED. Both the Delivery entity and
DeliveryService validate through ensure_transition() so the two layers can
never disagree.
"""

from enum import Enum
from typing import Dict, Union

from parceldesk.core.exceptions import InvalidTransitionError


class DeliveryStatus(str, Enum):
    PICKED_UP = "PICKED_UP"
    DELIVERED = "DELIVERED"
    SETTLED = "SETTLED"


class SettlementMethod(str, Enum):
    """How a delivery's fee is collected."""

    PREPAID = "PREPAID"
    COLLECT = "COLLECT"
    OFFICE = "OFFICE"
    RECEIPT_REQUIRED = "RECEIPT_REQUIRED"


INITIAL_STATUS = DeliveryStatus.PICKED_UP

# target status -> the only status it may be reached from
REQUIRED_PREDECESSOR: Dict[DeliveryStatus, DeliveryStatus] = {
    DeliveryStatus.DELIVERED: DeliveryStatus.PICKED_UP,
    DeliveryStatus.SETTLED: DeliveryStatus.DELIVERED,
}

_REJECTIONS: Dict[DeliveryStatus, str] = {
    DeliveryStatus.DELIVERED: "cannot deliver: delivery is not in PICKED_UP status",
    DeliveryStatus.SETTLED: "cannot settle: delivery is not in DELIVERED status",
}


def parse_status(value: Union[str, DeliveryStatus]) -> DeliveryStatus:
    """Convert a raw status value into DeliveryStatus or raise InvalidTransitionError."""
    try:
        return DeliveryStatus(value)
    except ValueError:
        raise InvalidTransitionError(f"unknown delivery status: {value!r}") from None


def ensure_transition(
    current: Union[str, DeliveryStatus], target: Union[str, DeliveryStatus]
) -> DeliveryStatus:
    """Validate a status change and return the target as a DeliveryStatus.

    Raises:
        InvalidTransitionError: if target is unknown, is the initial status,
            or current is not the required predecessor of target.
    """
    current_status = parse_status(current)
    target_status = parse_status(target)

    predecessor = REQUIRED_PREDECESSOR.get(target_status)
    if predecessor is None:
        raise InvalidTransitionError(
            f"cannot move delivery back to {target_status.value} status"
        )
    if current_status is not predecessor:
        raise InvalidTransitionError(_REJECTIONS[target_status])
    return target_status
