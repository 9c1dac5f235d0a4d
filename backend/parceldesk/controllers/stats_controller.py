"""
Stats controller: daily and monthly delivery rollups.
"""

from flask import Blueprint, jsonify, request

from parceldesk.db.session import SessionLocal
from parceldesk.repositories.delivery_repo import DeliveryRepository
from parceldesk.schemas.dtos import stats_to_dict
from parceldesk.services.delivery_service import DeliveryService

stats_bp = Blueprint("stats", __name__, url_prefix="/api/stats")


@stats_bp.route("/daily", methods=["GET"])
def daily_stats():
    """
    Per-day rollup.

    Query parameters:
    - start: first day, YYYY-MM-DD (required)
    - end: last day, YYYY-MM-DD, inclusive (required)
    """
    db = SessionLocal()
    try:
        rows = DeliveryService(DeliveryRepository(db)).get_daily_stats(
            request.args.get("start", ""), request.args.get("end", "")
        )
        return jsonify([stats_to_dict(row, "day") for row in rows])
    finally:
        db.close()


@stats_bp.route("/monthly", methods=["GET"])
def monthly_stats():
    """
    Rollup for one month.

    Query parameters:
    - month: YYYY-MM (required)
    """
    db = SessionLocal()
    try:
        rows = DeliveryService(DeliveryRepository(db)).get_monthly_stats(
            request.args.get("month", "")
        )
        return jsonify([stats_to_dict(row, "month") for row in rows])
    finally:
        db.close()
