"""Delivery repository implementation.

Deliveries are stored with a foreign key to their recipient and read back
with the recipient embedded. Every write stamps updated_at, which is also
the column the daily and monthly rollups group on.
"""

from datetime import date, datetime, time, timedelta
from typing import List, Optional

from sqlalchemy import case, func, literal_column
from sqlalchemy.orm import joinedload

from parceldesk.core.config import local_now
from parceldesk.db.base import Delivery as DbDelivery
from parceldesk.domain.entities import Delivery as DomainDelivery
from parceldesk.domain.entities import PeriodStats
from parceldesk.domain.interfaces import IDeliveryRepository
from parceldesk.domain.lifecycle import DeliveryStatus

from .base import SqlAlchemyRepository, new_id
from .recipient_repo import RecipientRepository

# strftime / to_char patterns per rollup granularity
_PERIOD_FORMATS = {
    "day": ("%Y-%m-%d", "YYYY-MM-DD"),
    "month": ("%Y-%m", "YYYY-MM"),
}


class DeliveryRepository(SqlAlchemyRepository, IDeliveryRepository):
    """Repository for Delivery persistence and reporting queries."""

    def get_by_id(self, delivery_id: str) -> Optional[DomainDelivery]:
        db_delivery = (
            self.db.query(DbDelivery)
            .options(joinedload(DbDelivery.recipient))
            .filter_by(id=delivery_id)
            .first()
        )
        return self._to_domain(db_delivery) if db_delivery else None

    def get_all(self) -> List[DomainDelivery]:
        db_deliveries = (
            self.db.query(DbDelivery)
            .options(joinedload(DbDelivery.recipient))
            .order_by(DbDelivery.updated_at.desc())
            .all()
        )
        return [self._to_domain(d) for d in db_deliveries]

    def create(self, delivery: DomainDelivery) -> DomainDelivery:
        if delivery.recipient is None or not delivery.recipient.id:
            raise ValueError("A stored recipient is required to create a delivery")

        db_delivery = DbDelivery(
            id=delivery.id or new_id(),
            recipient_id=delivery.recipient.id,
            pickup_place=delivery.pickup_place,
            box_count=delivery.box_count,
            settlement=delivery.settlement.value,
            fee=delivery.fee,
            note=delivery.note,
            status=delivery.status.value,
            updated_at=local_now(),
        )
        self._save(db_delivery)
        return DomainDelivery(
            id=db_delivery.id,
            recipient=delivery.recipient,
            pickup_place=db_delivery.pickup_place,
            box_count=db_delivery.box_count,
            settlement=delivery.settlement,
            fee=db_delivery.fee,
            note=db_delivery.note,
            status=delivery.status,
            updated_at=db_delivery.updated_at,
        )

    def update_status(self, delivery_id: str, status: DeliveryStatus) -> bool:
        db_delivery = self.db.get(DbDelivery, delivery_id)
        if not db_delivery:
            return False
        db_delivery.status = DeliveryStatus(status).value
        db_delivery.updated_at = local_now()
        self._save(db_delivery)
        return True

    def daily_stats(self, start: date, end: date) -> List[PeriodStats]:
        return self._rollup("day", start, end + timedelta(days=1))

    def monthly_stats(self, year: int, month: int) -> List[PeriodStats]:
        first_day = date(year, month, 1)
        next_month = date(year + month // 12, month % 12 + 1, 1)
        return self._rollup("month", first_day, next_month)

    def _period_expr(self, granularity: str):
        # Formats are inlined as literals so SELECT and GROUP BY render the
        # same expression on PostgreSQL
        sqlite_fmt, pg_fmt = _PERIOD_FORMATS[granularity]
        if self.db.get_bind().dialect.name == "postgresql":
            return func.to_char(DbDelivery.updated_at, literal_column(f"'{pg_fmt}'"))
        return func.strftime(literal_column(f"'{sqlite_fmt}'"), DbDelivery.updated_at)

    def _rollup(self, granularity: str, start: date, stop: date) -> List[PeriodStats]:
        """Aggregate deliveries with start <= updated_at < stop, newest period first."""
        period = self._period_expr(granularity).label("period")
        settled = func.sum(
            case((DbDelivery.status == DeliveryStatus.SETTLED.value, 1), else_=0)
        )
        rows = (
            self.db.query(
                period,
                func.count(DbDelivery.id),
                func.coalesce(func.sum(DbDelivery.box_count), 0),
                func.coalesce(func.sum(DbDelivery.fee), 0),
                func.coalesce(settled, 0),
            )
            .filter(
                DbDelivery.updated_at >= datetime.combine(start, time.min),
                DbDelivery.updated_at < datetime.combine(stop, time.min),
            )
            .group_by(period)
            .order_by(period.desc())
            .all()
        )
        return [
            PeriodStats(
                period=row[0],
                deliveries=int(row[1]),
                boxes=int(row[2]),
                fees=int(row[3]),
                settled=int(row[4]),
            )
            for row in rows
        ]

    def _to_domain(self, db_delivery: DbDelivery) -> DomainDelivery:
        return DomainDelivery(
            id=db_delivery.id,
            recipient=RecipientRepository.to_domain(db_delivery.recipient),
            pickup_place=db_delivery.pickup_place,
            box_count=db_delivery.box_count,
            settlement=db_delivery.settlement,
            fee=db_delivery.fee,
            note=db_delivery.note,
            status=db_delivery.status,
            updated_at=db_delivery.updated_at,
        )
