"""
Unit tests for request parsing and response shapes.
"""

from datetime import datetime

import pytest

from parceldesk.core.exceptions import BadRequestError
from parceldesk.domain.entities import PeriodStats
from parceldesk.domain.lifecycle import SettlementMethod
from parceldesk.schemas.dtos import (
    ContactRequest,
    ContactResponse,
    DeliveryRegistrationRequest,
    DeliveryResponse,
    RecipientRequest,
    RecipientResponse,
    stats_to_dict,
)
from tests.factories.domain_factories import make_contact, make_delivery, make_recipient


def _registration_body(**overrides):
    body = {
        "recipientId": "rcp-1",
        "pickupPlace": "Warehouse A",
        "boxCount": 2,
        "settlement": "COLLECT",
    }
    body.update(overrides)
    return body


@pytest.mark.unit
@pytest.mark.delivery
class TestDeliveryRegistrationRequest:
    def test_parses_recipient_id_form(self):
        request = DeliveryRegistrationRequest.from_json(_registration_body(fee=3000))

        assert request.recipient_id == "rcp-1"
        assert request.recipient is None
        assert request.settlement is SettlementMethod.COLLECT
        assert request.fee == 3000

    def test_parses_inline_recipient(self):
        request = DeliveryRegistrationRequest.from_json(
            _registration_body(
                recipientId=None,
                recipient={"phone": "010-1111-2222", "address": "Seoul", "lat": 37},
                businessName="Acme",
            )
        )

        assert request.recipient.phone == "010-1111-2222"
        assert request.recipient.lat == 37.0
        assert request.business_name == "Acme"

    def test_recipient_id_wins_over_inline_recipient(self):
        request = DeliveryRegistrationRequest.from_json(
            _registration_body(recipient={"phone": "1", "address": "x"})
        )

        assert request.recipient_id == "rcp-1"
        assert request.recipient is None

    def test_status_in_body_is_ignored(self):
        request = DeliveryRegistrationRequest.from_json(
            _registration_body(status="SETTLED")
        )

        assert not hasattr(request, "status")

    def test_neither_recipient_form_is_rejected(self):
        with pytest.raises(BadRequestError, match="Either recipientId or recipient"):
            DeliveryRegistrationRequest.from_json(_registration_body(recipientId=None))

    @pytest.mark.parametrize(
        "overrides",
        [
            {"boxCount": 0},
            {"boxCount": "3"},
            {"boxCount": None},
            {"settlement": "CASH"},
            {"fee": "5000"},
            {"pickupPlace": ""},
            {"recipientId": None, "recipient": {"phone": "010"}},
            {"recipientId": {"x": 1}},
            {"recipientId": 42},
            {"boxCount": 2**63},
            {"fee": 2**63},
            {"fee": -(2**63)},
        ],
    )
    def test_invalid_bodies_are_rejected(self, overrides):
        with pytest.raises(BadRequestError):
            DeliveryRegistrationRequest.from_json(_registration_body(**overrides))

    @pytest.mark.parametrize("body", [None, [], "text"])
    def test_non_object_body_is_rejected(self, body):
        with pytest.raises(BadRequestError, match="JSON object"):
            DeliveryRegistrationRequest.from_json(body)


@pytest.mark.unit
class TestSimpleRequests:
    def test_recipient_request_rejects_non_numeric_lat(self):
        with pytest.raises(BadRequestError, match="lat must be a number"):
            RecipientRequest.from_json({"phone": "1", "address": "x", "lat": "37.5"})

    def test_contact_request_uses_camel_case(self):
        request = ContactRequest.from_json(
            {"businessName": "Acme", "phone": "1", "address": "Seoul"}
        )

        assert request.as_kwargs() == {
            "business_name": "Acme",
            "phone": "1",
            "address": "Seoul",
            "note": None,
        }


@pytest.mark.unit
class TestResponses:
    def test_recipient_response_nests_address(self):
        data = RecipientResponse.from_domain(
            make_recipient(lat=37.5, lng=127.0, name="Kim")
        ).to_dict()

        assert data["address"] == {"full": "Seoul", "lat": 37.5, "lng": 127.0}
        assert data["name"] == "Kim"

    def test_contact_response_is_camel_case(self):
        data = ContactResponse.from_domain(make_contact()).to_dict()

        assert data["businessName"] == "Acme"
        assert "business_name" not in data

    def test_delivery_response_shape(self):
        delivery = make_delivery()
        delivery.updated_at = datetime(2024, 3, 5, 14, 30)

        data = DeliveryResponse.from_domain(delivery).to_dict()

        assert data["status"] == "PICKED_UP"
        assert data["settlement"] == "PREPAID"
        assert data["pickupPlace"] == "Warehouse A"
        assert data["boxCount"] == 3
        assert data["updatedAt"] == "2024-03-05T14:30:00"
        assert data["recipient"]["id"] == "rcp-1"

    def test_stats_row_uses_period_key(self):
        row = PeriodStats(period="2024-03", deliveries=4, boxes=9, fees=12000, settled=1)

        assert stats_to_dict(row, "month") == {
            "month": "2024-03",
            "deliveries": 4,
            "boxes": 9,
            "fees": 12000,
            "settled": 1,
        }
