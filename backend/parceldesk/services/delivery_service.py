"""
Delivery service following SOLID principles.

Owns the delivery lifecycle use-cases (registration, status changes) and
the read-only daily/monthly rollups.
"""

import logging
from datetime import date, datetime
from typing import Callable, List, Optional

from parceldesk.core.exceptions import BadRequestError, NotFoundError
from parceldesk.domain.entities import (
    Delivery,
    DeliveryStatusChanged,
    PeriodStats,
    Recipient,
)
from parceldesk.domain.interfaces import IDeliveryRepository
from parceldesk.domain.lifecycle import (
    INITIAL_STATUS,
    DeliveryStatus,
    SettlementMethod,
    ensure_transition,
)

logger = logging.getLogger(__name__)
event_logger = logging.getLogger("parceldesk.events")

StatusListener = Callable[[DeliveryStatusChanged], None]


def log_status_change(event: DeliveryStatusChanged) -> None:
    """Default listener: diagnostic log line per transition."""
    event_logger.info(
        f"Delivery {event.delivery_id} moved {event.old_status.value} -> {event.new_status.value}",
        extra={
            "context": {
                "delivery_id": event.delivery_id,
                "old_status": event.old_status.value,
                "new_status": event.new_status.value,
                "timestamp": event.timestamp.isoformat(),
            }
        },
    )


def _parse_day(value: str, field: str) -> date:
    try:
        return datetime.strptime(value, "%Y-%m-%d").date()
    except (TypeError, ValueError):
        raise BadRequestError(f"{field} must be a date in YYYY-MM-DD format") from None


class DeliveryService:
    """Application service for delivery-related use-cases.

    Status listeners are plain callables invoked after each successful
    transition has been stored.
    """

    def __init__(
        self,
        delivery_repo: IDeliveryRepository,
        listeners: Optional[List[StatusListener]] = None,
    ) -> None:
        self.delivery_repo = delivery_repo
        self.listeners: List[StatusListener] = (
            list(listeners) if listeners is not None else [log_status_change]
        )

    def subscribe(self, listener: StatusListener) -> None:
        self.listeners.append(listener)

    def find_by_id(self, delivery_id: str) -> Optional[Delivery]:
        return self.delivery_repo.get_by_id(delivery_id)

    def get_delivery(self, delivery_id: str) -> Delivery:
        delivery = self.delivery_repo.get_by_id(delivery_id)
        if not delivery:
            raise NotFoundError.for_entity("Delivery", delivery_id)
        return delivery

    def find_all(self) -> List[Delivery]:
        return self.delivery_repo.get_all()

    def register(
        self,
        recipient: Recipient,
        pickup_place: str,
        box_count: int,
        settlement: SettlementMethod,
        fee: Optional[int] = None,
        note: Optional[str] = None,
    ) -> Delivery:
        """Create a delivery for a stored recipient.

        The status always starts at PICKED_UP; callers cannot choose it.
        """
        delivery = Delivery(
            recipient=recipient,
            pickup_place=pickup_place,
            box_count=box_count,
            settlement=settlement,
            fee=fee,
            note=note,
            status=INITIAL_STATUS,
        )
        created = self.delivery_repo.create(delivery)
        logger.info(
            "Delivery registered",
            extra={
                "context": {
                    "delivery_id": created.id,
                    "recipient_id": recipient.id,
                    "box_count": box_count,
                }
            },
        )
        return created

    def change_status(self, delivery_id: str, new_status) -> DeliveryStatusChanged:
        """Move a delivery one step along PICKED_UP -> DELIVERED -> SETTLED.

        The transition is validated here and again by the entity, against
        the status read at the start of the call. There is no
        compare-and-swap at the storage level, so two concurrent requests
        can both pass the check.

        Raises:
            NotFoundError: unknown delivery, or one deleted before the write
                (nothing is written)
            InvalidTransitionError: the move breaks the lifecycle (nothing is written)
        """
        delivery = self.get_delivery(delivery_id)

        target = ensure_transition(delivery.status, new_status)
        event = delivery.transition_to(target)

        if not self.delivery_repo.update_status(delivery_id, event.new_status):
            # Row removed between the read and the write
            raise NotFoundError.for_entity("Delivery", delivery_id)
        self._publish(event)
        return event

    def deliver(self, delivery_id: str) -> DeliveryStatusChanged:
        return self.change_status(delivery_id, DeliveryStatus.DELIVERED)

    def settle(self, delivery_id: str) -> DeliveryStatusChanged:
        return self.change_status(delivery_id, DeliveryStatus.SETTLED)

    def get_daily_stats(self, start: str, end: str) -> List[PeriodStats]:
        """Per-day rollup for the inclusive YYYY-MM-DD range, newest day first."""
        if not start or not end:
            raise BadRequestError("Both start and end dates are required")
        start_day = _parse_day(start, "start")
        end_day = _parse_day(end, "end")
        if end_day < start_day:
            raise BadRequestError("end must not be before start")
        return self.delivery_repo.daily_stats(start_day, end_day)

    def get_monthly_stats(self, year_month: str) -> List[PeriodStats]:
        """Rollup for one YYYY-MM month."""
        if not year_month:
            raise BadRequestError("Month parameter is required (format: YYYY-MM)")
        try:
            parsed = datetime.strptime(year_month, "%Y-%m")
        except ValueError:
            raise BadRequestError("month must be in YYYY-MM format") from None
        return self.delivery_repo.monthly_stats(parsed.year, parsed.month)

    def _publish(self, event: DeliveryStatusChanged) -> None:
        for listener in self.listeners:
            try:
                listener(event)
            except Exception:
                # The transition is already stored; a broken listener must not undo it
                logger.error(
                    "Delivery status listener failed",
                    extra={"context": {"delivery_id": event.delivery_id}},
                    exc_info=True,
                )
