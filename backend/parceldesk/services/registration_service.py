"""
Delivery registration use-case.

Combines up to three writes (recipient, contact, delivery) into one
database transaction: the repositories behind the services are expected to
only flush, and this service commits once at the end or rolls back on any
error, so a failed registration never leaves an orphaned recipient or
contact behind.
"""

import logging

from parceldesk.domain.entities import Delivery
from parceldesk.schemas.dtos import DeliveryRegistrationRequest

from .contact_service import ContactService
from .delivery_service import DeliveryService
from .recipient_service import RecipientService

logger = logging.getLogger(__name__)


class DeliveryRegistrationService:
    """Application service orchestrating POST /api/deliveries."""

    def __init__(
        self,
        db_session,
        recipient_service: RecipientService,
        contact_service: ContactService,
        delivery_service: DeliveryService,
    ) -> None:
        self.db = db_session
        self.recipient_service = recipient_service
        self.contact_service = contact_service
        self.delivery_service = delivery_service

    def register(self, request: DeliveryRegistrationRequest) -> Delivery:
        """Register a delivery for an existing or inline recipient.

        Business Rules:
        - recipient_id must resolve to a stored recipient (NotFoundError otherwise)
        - an inline recipient is created first
        - with an inline recipient and a business name, the contact with that
          name is found or created from the recipient's phone and address
        """
        try:
            if request.recipient_id:
                recipient = self.recipient_service.get_recipient(request.recipient_id)
            else:
                recipient = self.recipient_service.create_recipient(
                    **request.recipient.as_kwargs()
                )
                if request.business_name:
                    self.contact_service.find_or_create_contact(
                        business_name=request.business_name,
                        phone=recipient.phone,
                        address=recipient.address.full,
                    )

            delivery = self.delivery_service.register(
                recipient=recipient,
                pickup_place=request.pickup_place,
                box_count=request.box_count,
                settlement=request.settlement,
                fee=request.fee,
                note=request.note,
            )
            self.db.commit()
        except Exception:
            self.db.rollback()
            logger.warning(
                "Delivery registration rolled back",
                extra={"context": {"recipient_id": request.recipient_id}},
            )
            raise
        return delivery
