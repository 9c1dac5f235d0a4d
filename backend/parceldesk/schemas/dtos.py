"""
Data Transfer Objects (DTOs) and validation schemas.

Request DTOs parse camelCase JSON bodies and check required fields,
raising BadRequestError. Response DTOs turn domain entities into the
camelCase JSON shapes returned by the API.
"""

from dataclasses import asdict, dataclass
from datetime import datetime
from typing import Any, Dict, Optional

from parceldesk.core.exceptions import BadRequestError
from parceldesk.domain.entities import (
    MAX_STORED_INT,
    Contact,
    Delivery,
    PeriodStats,
    Recipient,
)
from parceldesk.domain.lifecycle import SettlementMethod


def _require_object(data: Any) -> Dict[str, Any]:
    if not isinstance(data, dict):
        raise BadRequestError("Request body must be a JSON object")
    return data


def _require_text(value: Any, label: str) -> str:
    if not isinstance(value, str) or not value.strip():
        raise BadRequestError(f"{label} is required")
    return value


def _optional_text(value: Any, label: str) -> Optional[str]:
    if value is None:
        return None
    if not isinstance(value, str):
        raise BadRequestError(f"{label} must be a string")
    return value


def _optional_number(value: Any, label: str) -> Optional[float]:
    if value is None:
        return None
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        raise BadRequestError(f"{label} must be a number")
    return float(value)


@dataclass
class RecipientRequest:
    """DTO for recipient create/update requests."""

    phone: str
    address: str
    name: Optional[str] = None
    memo: Optional[str] = None
    lat: Optional[float] = None
    lng: Optional[float] = None

    @classmethod
    def from_json(cls, data: Any) -> "RecipientRequest":
        data = _require_object(data)
        return cls(
            phone=_require_text(data.get("phone"), "phone"),
            address=_require_text(data.get("address"), "address"),
            name=_optional_text(data.get("name"), "name"),
            memo=_optional_text(data.get("memo"), "memo"),
            lat=_optional_number(data.get("lat"), "lat"),
            lng=_optional_number(data.get("lng"), "lng"),
        )

    def as_kwargs(self) -> Dict[str, Any]:
        return asdict(self)


@dataclass
class ContactRequest:
    """DTO for contact create/update/find-or-create requests."""

    business_name: str
    phone: str
    address: str
    note: Optional[str] = None

    @classmethod
    def from_json(cls, data: Any) -> "ContactRequest":
        data = _require_object(data)
        return cls(
            business_name=_require_text(data.get("businessName"), "businessName"),
            phone=_require_text(data.get("phone"), "phone"),
            address=_require_text(data.get("address"), "address"),
            note=_optional_text(data.get("note"), "note"),
        )

    def as_kwargs(self) -> Dict[str, Any]:
        return asdict(self)


@dataclass
class DeliveryRegistrationRequest:
    """DTO for POST /api/deliveries.

    Exactly one of recipient_id / recipient is used; recipient_id wins when
    both are present. Any status in the body is ignored.
    """

    pickup_place: str
    box_count: int
    settlement: SettlementMethod
    fee: Optional[int] = None
    note: Optional[str] = None
    recipient_id: Optional[str] = None
    recipient: Optional[RecipientRequest] = None
    business_name: Optional[str] = None

    @classmethod
    def from_json(cls, data: Any) -> "DeliveryRegistrationRequest":
        data = _require_object(data)

        recipient_id = _optional_text(data.get("recipientId"), "recipientId") or None
        recipient = None
        if not recipient_id:
            if not data.get("recipient"):
                raise BadRequestError(
                    "Either recipientId or recipient object is required"
                )
            recipient = RecipientRequest.from_json(data["recipient"])

        box_count = data.get("boxCount")
        if isinstance(box_count, bool) or not isinstance(box_count, int) or box_count <= 0:
            raise BadRequestError("boxCount must be a positive integer")
        if box_count > MAX_STORED_INT:
            raise BadRequestError("boxCount is too large")

        try:
            settlement = SettlementMethod(data.get("settlement"))
        except ValueError:
            allowed = ", ".join(m.value for m in SettlementMethod)
            raise BadRequestError(f"settlement must be one of: {allowed}") from None

        fee = data.get("fee")
        if fee is not None and (isinstance(fee, bool) or not isinstance(fee, int)):
            raise BadRequestError("fee must be an integer or null")
        if fee is not None and abs(fee) > MAX_STORED_INT:
            raise BadRequestError("fee is out of range")

        return cls(
            pickup_place=_require_text(data.get("pickupPlace"), "pickupPlace"),
            box_count=box_count,
            settlement=settlement,
            fee=fee,
            note=_optional_text(data.get("note"), "note"),
            recipient_id=recipient_id,
            recipient=recipient,
            business_name=_optional_text(data.get("businessName"), "businessName") or None,
        )


@dataclass
class AddressResponse:
    full: str
    lat: Optional[float]
    lng: Optional[float]


@dataclass
class RecipientResponse:
    """DTO for recipient API responses."""

    id: str
    name: Optional[str]
    phone: str
    address: AddressResponse
    memo: Optional[str]

    @classmethod
    def from_domain(cls, recipient: Recipient) -> "RecipientResponse":
        address = recipient.address
        return cls(
            id=recipient.id,
            name=recipient.name,
            phone=recipient.phone,
            address=AddressResponse(full=address.full, lat=address.lat, lng=address.lng),
            memo=recipient.memo,
        )

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)


@dataclass
class ContactResponse:
    """DTO for contact API responses."""

    id: str
    business_name: str
    phone: str
    address: str
    note: Optional[str]

    @classmethod
    def from_domain(cls, contact: Contact) -> "ContactResponse":
        return cls(
            id=contact.id,
            business_name=contact.business_name,
            phone=contact.phone,
            address=contact.address,
            note=contact.note,
        )

    def to_dict(self) -> Dict[str, Any]:
        return {
            "id": self.id,
            "businessName": self.business_name,
            "phone": self.phone,
            "address": self.address,
            "note": self.note,
        }


@dataclass
class DeliveryResponse:
    """DTO for delivery API responses."""

    id: str
    recipient: RecipientResponse
    pickup_place: str
    box_count: int
    settlement: str
    fee: Optional[int]
    note: Optional[str]
    status: str
    updated_at: Optional[datetime]

    @classmethod
    def from_domain(cls, delivery: Delivery) -> "DeliveryResponse":
        return cls(
            id=delivery.id,
            recipient=RecipientResponse.from_domain(delivery.recipient),
            pickup_place=delivery.pickup_place,
            box_count=delivery.box_count,
            settlement=delivery.settlement.value,
            fee=delivery.fee,
            note=delivery.note,
            status=delivery.status.value,
            updated_at=delivery.updated_at,
        )

    def to_dict(self) -> Dict[str, Any]:
        return {
            "id": self.id,
            "recipient": self.recipient.to_dict(),
            "pickupPlace": self.pickup_place,
            "boxCount": self.box_count,
            "settlement": self.settlement,
            "fee": self.fee,
            "note": self.note,
            "status": self.status,
            "updatedAt": self.updated_at.isoformat() if self.updated_at else None,
        }


def stats_to_dict(stats: PeriodStats, period_key: str) -> Dict[str, Any]:
    """Render one rollup row keyed by "day" or "month"."""
    return {
        period_key: stats.period,
        "deliveries": stats.deliveries,
        "boxes": stats.boxes,
        "fees": stats.fees,
        "settled": stats.settled,
    }
