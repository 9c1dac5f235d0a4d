"""
Repository test factories following Interface Segregation Principle.

This module provides mock factories for repository interfaces, ensuring
tests only depend on the specific interfaces they need.
"""

from unittest.mock import Mock

from parceldesk.domain.interfaces import (
    IContactRepository,
    IDeliveryRepository,
    IRecipientRepository,
)


def _echo(entity):
    """Default create/update behaviour: return what was passed in."""
    return entity


class RecipientRepositoryFactory:
    """Factory for creating Recipient repository mocks."""

    @staticmethod
    def create_mock_full() -> Mock:
        mock_repo = Mock(spec=IRecipientRepository)

        mock_repo.get_by_id.return_value = None
        mock_repo.search.return_value = []

        mock_repo.create.side_effect = _echo
        mock_repo.update.side_effect = _echo
        mock_repo.delete.return_value = True

        return mock_repo


class DeliveryRepositoryFactory:
    """Factory for creating Delivery repository mocks."""

    @staticmethod
    def create_mock_full() -> Mock:
        mock_repo = Mock(spec=IDeliveryRepository)

        mock_repo.get_by_id.return_value = None
        mock_repo.get_all.return_value = []
        mock_repo.daily_stats.return_value = []
        mock_repo.monthly_stats.return_value = []

        mock_repo.create.side_effect = _echo
        mock_repo.update_status.return_value = True

        return mock_repo


class ContactRepositoryFactory:
    """Factory for creating Contact repository mocks."""

    @staticmethod
    def create_mock_full() -> Mock:
        mock_repo = Mock(spec=IContactRepository)

        mock_repo.get_by_id.return_value = None
        mock_repo.get_by_business_name.return_value = None
        mock_repo.get_all.return_value = []

        mock_repo.create.side_effect = _echo
        mock_repo.update.side_effect = _echo
        mock_repo.delete.return_value = True

        return mock_repo
