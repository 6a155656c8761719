"""
AWS Organizations client - async facade over the boto3 client.

Only the three calls the reconciler needs are exposed. Blocking SDK calls run
in a worker thread so handlers can await them.
"""

import asyncio
import logging
from typing import Any, Dict, List, Optional

import boto3
from botocore.config import Config as BotoConfig

from config import AWSConfig
from models import Credentials

logger = logging.getLogger(__name__)


class OrganizationsClient:
    """
    Organizations API capability injected into the reconciler.

    Wraps a boto3 ``organizations`` client. Errors raised by boto3
    (``botocore.exceptions.ClientError`` and friends) propagate unchanged;
    classification happens in the reconciler.
    """

    def __init__(self, client: Any):
        self._client = client

    @classmethod
    def from_credentials(
        cls,
        credentials: Optional[Credentials] = None,
        aws_config: Optional[AWSConfig] = None,
        region: Optional[str] = None,
    ) -> "OrganizationsClient":
        """
        Build a client from caller credentials.

        Uses the default credential chain when no explicit credentials are
        passed.

        Args:
            credentials: Caller credentials from the request, if any.
            aws_config: Client settings (region, endpoint, retries, timeouts).
            region: Region override, typically the request's region.

        Returns:
            A ready OrganizationsClient.
        """
        aws_config = aws_config or AWSConfig()
        region_name = region or aws_config.region

        if credentials is not None:
            session = boto3.session.Session(
                aws_access_key_id=credentials.access_key_id,
                aws_secret_access_key=credentials.secret_access_key,
                aws_session_token=credentials.session_token,
                region_name=region_name,
            )
        else:
            session = boto3.session.Session(region_name=region_name)

        boto_config = BotoConfig(
            retries={"max_attempts": aws_config.max_attempts, "mode": "standard"},
            connect_timeout=aws_config.connect_timeout,
            read_timeout=aws_config.read_timeout,
        )
        client = session.client(
            "organizations",
            endpoint_url=aws_config.endpoint_url,
            config=boto_config,
        )
        logger.debug(
            f"Created Organizations client: region={region_name}, "
            f"endpoint_url={aws_config.endpoint_url}, "
            f"explicit_credentials={credentials is not None}"
        )
        return cls(client)

    async def list_roots(self) -> List[Dict[str, Any]]:
        """
        List the roots of the organization.

        Returns:
            The ``Roots`` list from a single ListRoots call.
        """
        response = await asyncio.to_thread(self._client.list_roots)
        roots = response.get("Roots", [])
        logger.debug(f"ListRoots returned {len(roots)} root(s)")
        return roots

    async def create_organizational_unit(
        self, name: str, parent_id: str
    ) -> Dict[str, Any]:
        """
        Create an organizational unit under a parent.

        Args:
            name: Display name of the new OU.
            parent_id: Root or OU id to create under.

        Returns:
            The ``OrganizationalUnit`` dict (Id, Arn, Name).
        """
        logger.debug(f"CreateOrganizationalUnit: name={name}, parent_id={parent_id}")
        response = await asyncio.to_thread(
            self._client.create_organizational_unit, Name=name, ParentId=parent_id
        )
        return response["OrganizationalUnit"]

    async def delete_organizational_unit(self, organizational_unit_id: str) -> None:
        """
        Delete an organizational unit.

        Args:
            organizational_unit_id: Id of the OU to delete.
        """
        logger.debug(f"DeleteOrganizationalUnit: id={organizational_unit_id}")
        await asyncio.to_thread(
            self._client.delete_organizational_unit,
            OrganizationalUnitId=organizational_unit_id,
        )
