"""
Unit tests for DeliveryService.

Repositories are replaced by Mock(spec=IDeliveryRepository) so these tests
exercise only the lifecycle rules and the parameter handling.
"""

from datetime import date
from unittest.mock import Mock

import pytest

from parceldesk.core.exceptions import (
    BadRequestError,
    InvalidTransitionError,
    NotFoundError,
)
from parceldesk.domain.lifecycle import DeliveryStatus, SettlementMethod
from parceldesk.services.delivery_service import DeliveryService
from tests.factories.domain_factories import make_delivery, make_recipient
from tests.factories.repository_factories import DeliveryRepositoryFactory


@pytest.fixture
def mock_repo():
    return DeliveryRepositoryFactory.create_mock_full()


@pytest.fixture
def listener():
    return Mock()


@pytest.fixture
def service(mock_repo, listener):
    return DeliveryService(mock_repo, listeners=[listener])


@pytest.mark.unit
@pytest.mark.services
@pytest.mark.delivery
class TestRegister:
    def test_register_starts_at_picked_up(self, service, mock_repo):
        result = service.register(
            recipient=make_recipient(),
            pickup_place="Warehouse A",
            box_count=3,
            settlement=SettlementMethod.PREPAID,
            fee=5000,
        )

        mock_repo.create.assert_called_once()
        stored = mock_repo.create.call_args[0][0]
        assert stored.status is DeliveryStatus.PICKED_UP
        assert stored.recipient.id == "rcp-1"
        assert result.box_count == 3

    def test_register_validates_box_count(self, service, mock_repo):
        with pytest.raises(BadRequestError):
            service.register(
                recipient=make_recipient(),
                pickup_place="Warehouse A",
                box_count=0,
                settlement=SettlementMethod.PREPAID,
            )
        mock_repo.create.assert_not_called()


@pytest.mark.unit
@pytest.mark.services
@pytest.mark.delivery
class TestChangeStatus:
    def test_deliver_updates_and_publishes(self, service, mock_repo, listener):
        mock_repo.get_by_id.return_value = make_delivery()

        event = service.change_status("dlv-1", "DELIVERED")

        mock_repo.update_status.assert_called_once_with("dlv-1", DeliveryStatus.DELIVERED)
        listener.assert_called_once_with(event)
        assert event.old_status is DeliveryStatus.PICKED_UP
        assert event.new_status is DeliveryStatus.DELIVERED

    def test_settle_after_delivery(self, service, mock_repo):
        mock_repo.get_by_id.return_value = make_delivery(status=DeliveryStatus.DELIVERED)

        event = service.settle("dlv-1")

        assert event.new_status is DeliveryStatus.SETTLED
        mock_repo.update_status.assert_called_once_with("dlv-1", DeliveryStatus.SETTLED)

    @pytest.mark.parametrize(
        "current,target",
        [
            (DeliveryStatus.PICKED_UP, "SETTLED"),
            (DeliveryStatus.DELIVERED, "DELIVERED"),
            (DeliveryStatus.SETTLED, "DELIVERED"),
            (DeliveryStatus.SETTLED, "SETTLED"),
            (DeliveryStatus.DELIVERED, "PICKED_UP"),
            (DeliveryStatus.PICKED_UP, "RETURNED"),
        ],
    )
    def test_rejected_transition_writes_nothing(
        self, service, mock_repo, listener, current, target
    ):
        mock_repo.get_by_id.return_value = make_delivery(status=current)

        with pytest.raises(InvalidTransitionError):
            service.change_status("dlv-1", target)

        mock_repo.update_status.assert_not_called()
        listener.assert_not_called()

    def test_unknown_delivery_raises_not_found(self, service, mock_repo):
        mock_repo.get_by_id.return_value = None

        with pytest.raises(NotFoundError, match="Delivery with id missing not found"):
            service.deliver("missing")

        mock_repo.update_status.assert_not_called()

    def test_delivery_removed_before_write_raises_not_found(
        self, service, mock_repo, listener
    ):
        mock_repo.get_by_id.return_value = make_delivery()
        mock_repo.update_status.return_value = False

        with pytest.raises(NotFoundError):
            service.deliver("dlv-1")

        listener.assert_not_called()

    def test_broken_listener_does_not_undo_transition(self, mock_repo):
        second = Mock()
        service = DeliveryService(
            mock_repo, listeners=[Mock(side_effect=RuntimeError("boom")), second]
        )
        mock_repo.get_by_id.return_value = make_delivery()

        event = service.deliver("dlv-1")

        assert event.new_status is DeliveryStatus.DELIVERED
        mock_repo.update_status.assert_called_once()
        second.assert_called_once_with(event)

    def test_subscribe_adds_listener(self, mock_repo):
        service = DeliveryService(mock_repo, listeners=[])
        received = []
        service.subscribe(received.append)
        mock_repo.get_by_id.return_value = make_delivery()

        service.deliver("dlv-1")

        assert [e.new_status for e in received] == [DeliveryStatus.DELIVERED]

    def test_default_listener_logs_transition(self, mock_repo, caplog):
        service = DeliveryService(mock_repo)
        mock_repo.get_by_id.return_value = make_delivery()

        with caplog.at_level("INFO", logger="parceldesk.events"):
            service.deliver("dlv-1")

        assert any("PICKED_UP -> DELIVERED" in r.getMessage() for r in caplog.records)


@pytest.mark.unit
@pytest.mark.services
@pytest.mark.stats
class TestStatsParameters:
    def test_daily_passes_parsed_dates(self, service, mock_repo):
        service.get_daily_stats("2024-03-01", "2024-03-31")

        mock_repo.daily_stats.assert_called_once_with(date(2024, 3, 1), date(2024, 3, 31))

    @pytest.mark.parametrize("start,end", [("", "2024-03-31"), ("2024-03-01", "")])
    def test_daily_requires_both_dates(self, service, mock_repo, start, end):
        with pytest.raises(BadRequestError, match="Both start and end dates are required"):
            service.get_daily_stats(start, end)
        mock_repo.daily_stats.assert_not_called()

    def test_daily_rejects_malformed_date(self, service):
        with pytest.raises(BadRequestError, match="YYYY-MM-DD"):
            service.get_daily_stats("03/01/2024", "2024-03-31")

    def test_daily_rejects_reversed_range(self, service):
        with pytest.raises(BadRequestError):
            service.get_daily_stats("2024-03-31", "2024-03-01")

    def test_monthly_passes_year_and_month(self, service, mock_repo):
        service.get_monthly_stats("2024-12")

        mock_repo.monthly_stats.assert_called_once_with(2024, 12)

    def test_monthly_requires_month(self, service):
        with pytest.raises(BadRequestError, match="Month parameter is required"):
            service.get_monthly_stats("")

    @pytest.mark.parametrize("value", ["2024-13", "2024/03", "March"])
    def test_monthly_rejects_malformed_month(self, service, value):
        with pytest.raises(BadRequestError):
            service.get_monthly_stats(value)
