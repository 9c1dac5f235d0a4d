"""
Contact controller: CRUD, exact-name lookup and find-or-create.
"""

from flask import Blueprint, jsonify, request

from parceldesk.core.exceptions import BadRequestError, NotFoundError
from parceldesk.core.limiter_config import limiter
from parceldesk.db.session import SessionLocal
from parceldesk.repositories.contact_repo import ContactRepository
from parceldesk.schemas.dtos import ContactRequest, ContactResponse
from parceldesk.services.contact_service import ContactService

contact_bp = Blueprint("contacts", __name__, url_prefix="/api/contacts")


def _service(db) -> ContactService:
    return ContactService(ContactRepository(db))


@contact_bp.route("", methods=["GET"])
def list_contacts():
    db = SessionLocal()
    try:
        contacts = _service(db).find_all()
        return jsonify([ContactResponse.from_domain(c).to_dict() for c in contacts])
    finally:
        db.close()


@contact_bp.route("/lookup", methods=["GET"])
def lookup_contact():
    """Exact business-name lookup (?businessName=)."""
    business_name = request.args.get("businessName", "")
    if not business_name:
        raise BadRequestError("businessName is required")

    db = SessionLocal()
    try:
        contact = _service(db).find_by_business_name(business_name)
        if not contact:
            raise NotFoundError(f"Contact with business name {business_name} not found")
        return jsonify(ContactResponse.from_domain(contact).to_dict())
    finally:
        db.close()


@contact_bp.route("/<contact_id>", methods=["GET"])
def get_contact(contact_id):
    db = SessionLocal()
    try:
        contact = _service(db).get_contact(contact_id)
        return jsonify(ContactResponse.from_domain(contact).to_dict())
    finally:
        db.close()


@contact_bp.route("", methods=["POST"])
@limiter.limit("30 per minute")
def create_contact():
    data = ContactRequest.from_json(request.get_json(silent=True))
    db = SessionLocal()
    try:
        contact = _service(db).create_contact(**data.as_kwargs())
        return jsonify(ContactResponse.from_domain(contact).to_dict())
    finally:
        db.close()


@contact_bp.route("/find-or-create", methods=["POST"])
@limiter.limit("30 per minute")
def find_or_create_contact():
    """Return the contact with this business name unchanged, or create it."""
    data = ContactRequest.from_json(request.get_json(silent=True))
    db = SessionLocal()
    try:
        contact = _service(db).find_or_create_contact(**data.as_kwargs())
        return jsonify(ContactResponse.from_domain(contact).to_dict())
    finally:
        db.close()


@contact_bp.route("/<contact_id>", methods=["PUT"])
@limiter.limit("30 per minute")
def update_contact(contact_id):
    data = ContactRequest.from_json(request.get_json(silent=True))
    db = SessionLocal()
    try:
        contact = _service(db).update_contact(contact_id, **data.as_kwargs())
        return jsonify(ContactResponse.from_domain(contact).to_dict())
    finally:
        db.close()


@contact_bp.route("/<contact_id>", methods=["DELETE"])
@limiter.limit("30 per minute")
def delete_contact(contact_id):
    db = SessionLocal()
    try:
        _service(db).delete_contact(contact_id)
        return jsonify({"ok": True})
    finally:
        db.close()
