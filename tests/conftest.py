"""Pytest configuration and fixtures."""

from unittest.mock import AsyncMock, MagicMock

import pytest
from botocore.exceptions import ClientError

import config
from config import HandlerConfig
from models import HandlerRequest, ResourceModel
from reconcilers.organizational_unit import OrganizationalUnitReconciler


@pytest.fixture(autouse=True)
def reset_global_config():
    """Make every test start from a fresh configuration singleton."""
    config.reset_config()
    yield
    config.reset_config()


@pytest.fixture
def mock_client():
    """Create a mock OrganizationsClient."""
    client = AsyncMock()
    client.list_roots = AsyncMock(return_value=[{"Id": "r-1", "Name": "Root"}])
    client.create_organizational_unit = AsyncMock(
        return_value={
            "Id": "ou-new",
            "Arn": "arn:aws:organizations::111111111111:ou/o-abc/ou-new",
            "Name": "Team A",
        }
    )
    client.delete_organizational_unit = AsyncMock(return_value=None)
    return client


@pytest.fixture
def mock_boto_client():
    """Create a mock boto3 organizations client."""
    return MagicMock()


@pytest.fixture
def handler_config():
    return HandlerConfig(type_name="Test::Organizations::OrganizationalUnit")


@pytest.fixture
def reconciler(mock_client, handler_config):
    return OrganizationalUnitReconciler(mock_client, handler_config)


@pytest.fixture
def sample_model():
    """Desired model for an OU that has not been created yet."""
    return ResourceModel(organizational_unit_name="Team A", parent_ou="ou-1")


@pytest.fixture
def created_model():
    """Model of an OU that exists."""
    return ResourceModel(
        organizational_unit_name="Team A",
        parent_ou="ou-1",
        resource_id="ou-7",
        arn="arn:aws:organizations::111111111111:ou/o-abc/ou-7",
    )


@pytest.fixture
def make_request():
    """Build a HandlerRequest from desired and previous models."""

    def _make(desired=None, previous=None, logical_id="MyOU"):
        return HandlerRequest(
            desired_resource_state=desired or ResourceModel(),
            previous_resource_state=previous,
            logical_resource_identifier=logical_id,
        )

    return _make


@pytest.fixture
def client_error():
    """Build a botocore ClientError with a given AWS error code."""

    def _make(code, message="", operation="CreateOrganizationalUnit"):
        return ClientError({"Error": {"Code": code, "Message": message}}, operation)

    return _make
