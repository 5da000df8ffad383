"""Fixtures for infrastructure.notifications tests."""

import pytest

from infrastructure.notifications import EmailFactory, EmailMessage, InMemoryTransport
from infrastructure.operations import OperationResult
from tests.factories.communicator import make_payload


@pytest.fixture
def transport():
    return InMemoryTransport()


@pytest.fixture
def failing_transport():
    return InMemoryTransport(
        failure=OperationResult.permanent_error(
            "Recipient rejected", error_code="REJECTED"
        )
    )


@pytest.fixture
def payload():
    return make_payload()


@pytest.fixture
def message(transport):
    return EmailMessage(transport)


@pytest.fixture
def factory(transport):
    return EmailFactory(transport)
