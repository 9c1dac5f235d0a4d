"""
Delivery controller: registration, listing and status transitions.
"""

import logging

from flask import Blueprint, jsonify, request

from parceldesk.core.exceptions import DomainError
from parceldesk.core.limiter_config import limiter
from parceldesk.db.session import SessionLocal
from parceldesk.repositories.contact_repo import ContactRepository
from parceldesk.repositories.delivery_repo import DeliveryRepository
from parceldesk.repositories.recipient_repo import RecipientRepository
from parceldesk.schemas.dtos import DeliveryRegistrationRequest, DeliveryResponse
from parceldesk.services.contact_service import ContactService
from parceldesk.services.delivery_service import DeliveryService
from parceldesk.services.recipient_service import RecipientService
from parceldesk.services.registration_service import DeliveryRegistrationService

logger = logging.getLogger(__name__)

delivery_bp = Blueprint("deliveries", __name__, url_prefix="/api/deliveries")


@delivery_bp.route("", methods=["GET"])
def list_deliveries():
    """List every delivery with its recipient."""
    db = SessionLocal()
    try:
        deliveries = DeliveryService(DeliveryRepository(db)).find_all()
        return jsonify([DeliveryResponse.from_domain(d).to_dict() for d in deliveries])
    finally:
        db.close()


@delivery_bp.route("/<delivery_id>", methods=["GET"])
def get_delivery(delivery_id):
    db = SessionLocal()
    try:
        delivery = DeliveryService(DeliveryRepository(db)).get_delivery(delivery_id)
        return jsonify(DeliveryResponse.from_domain(delivery).to_dict())
    finally:
        db.close()


@delivery_bp.route("", methods=["POST"])
@limiter.limit("30 per minute")
def register_delivery():
    """Register a delivery for `recipientId` or an inline `recipient`.

    With an inline recipient, an optional `businessName` finds or creates
    the matching contact. All writes commit together.
    """
    data = DeliveryRegistrationRequest.from_json(request.get_json(silent=True))
    db = SessionLocal()
    try:
        # Setup dependencies: one session, repositories flush only
        registration = DeliveryRegistrationService(
            db,
            RecipientService(RecipientRepository(db, auto_commit=False)),
            ContactService(ContactRepository(db, auto_commit=False)),
            DeliveryService(DeliveryRepository(db, auto_commit=False)),
        )
        delivery = registration.register(data)
        return jsonify(DeliveryResponse.from_domain(delivery).to_dict())
    finally:
        db.close()


@delivery_bp.route("/<delivery_id>/status", methods=["POST"])
@limiter.limit("60 per minute")
def change_status(delivery_id):
    """Apply {"status": "DELIVERED" | "SETTLED"}.

    Every domain failure on this endpoint, unknown delivery included,
    is reported as 400.
    """
    body = request.get_json(silent=True)
    status = body.get("status") if isinstance(body, dict) else None
    if not status:
        return jsonify({"error": "status is required"}), 400

    db = SessionLocal()
    try:
        DeliveryService(DeliveryRepository(db)).change_status(delivery_id, status)
        return jsonify({"ok": True})
    except DomainError as e:
        logger.info(
            "Status change rejected",
            extra={
                "context": {
                    "delivery_id": delivery_id,
                    "requested": status,
                    "reason": e.message,
                }
            },
        )
        return jsonify({"error": e.message}), 400
    finally:
        db.close()
