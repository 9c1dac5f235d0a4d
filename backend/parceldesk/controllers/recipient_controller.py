"""
Recipient controller for handling HTTP requests following SOLID principles.

This controller:
- Handles HTTP concerns only (Single Responsibility)
- Depends on service abstractions (Dependency Inversion)

Domain errors propagate to the JSON error handlers registered in create_app().
"""

from flask import Blueprint, jsonify, request

from parceldesk.core.limiter_config import limiter
from parceldesk.db.session import SessionLocal
from parceldesk.repositories.recipient_repo import RecipientRepository
from parceldesk.schemas.dtos import RecipientRequest, RecipientResponse
from parceldesk.services.recipient_service import RecipientService

recipient_bp = Blueprint("recipients", __name__, url_prefix="/api/recipients")


def _service(db) -> RecipientService:
    return RecipientService(RecipientRepository(db))


@recipient_bp.route("", methods=["GET"])
def search_recipients():
    """Bounded substring search over address and phone (?q=)."""
    db = SessionLocal()
    try:
        recipients = _service(db).search(request.args.get("q", ""))
        return jsonify([RecipientResponse.from_domain(r).to_dict() for r in recipients])
    finally:
        db.close()


@recipient_bp.route("/<recipient_id>", methods=["GET"])
def get_recipient(recipient_id):
    db = SessionLocal()
    try:
        recipient = _service(db).get_recipient(recipient_id)
        return jsonify(RecipientResponse.from_domain(recipient).to_dict())
    finally:
        db.close()


@recipient_bp.route("", methods=["POST"])
@limiter.limit("30 per minute")
def create_recipient():
    data = RecipientRequest.from_json(request.get_json(silent=True))
    db = SessionLocal()
    try:
        recipient = _service(db).create_recipient(**data.as_kwargs())
        return jsonify(RecipientResponse.from_domain(recipient).to_dict())
    finally:
        db.close()


@recipient_bp.route("/<recipient_id>", methods=["PUT"])
@limiter.limit("30 per minute")
def update_recipient(recipient_id):
    """Full replace; 404 when the recipient does not exist."""
    data = RecipientRequest.from_json(request.get_json(silent=True))
    db = SessionLocal()
    try:
        recipient = _service(db).update_recipient(recipient_id, **data.as_kwargs())
        return jsonify(RecipientResponse.from_domain(recipient).to_dict())
    finally:
        db.close()


@recipient_bp.route("/<recipient_id>", methods=["DELETE"])
@limiter.limit("30 per minute")
def delete_recipient(recipient_id):
    db = SessionLocal()
    try:
        _service(db).delete_recipient(recipient_id)
        return jsonify({"ok": True})
    finally:
        db.close()
