"""
Organizational Unit Reconciler - lifecycle handlers for one OU resource.

Maps desired/previous resource models onto AWS Organizations calls and
translates the outcome into a ProgressEvent. Every invocation is terminal:
failures are reported as FAILED, never retried here.
"""

import logging
from typing import Any, Dict, Optional

from clients.organizations import OrganizationsClient
from config import ROOT_SELECTION_STRICT, HandlerConfig
from errors import (
    AmbiguousRootError,
    HandlerError,
    InvalidRequestError,
    MissingIdentifierError,
    NotUpdatableError,
    RootNotFoundError,
    classify_error,
    error_message,
)
from models import Action, HandlerRequest
from progress import ProgressEvent

logger = logging.getLogger(__name__)


async def parent_id_or_root_id(
    client: OrganizationsClient, parent_id: Optional[str] = None, strict: bool = False
) -> str:
    """
    Resolve the parent an OU is created under.

    A non-empty ``parent_id`` is returned unchanged without checking that it
    exists. Otherwise the organization's roots are listed and the first one
    is used.

    Args:
        client: Organizations client.
        parent_id: Declared parent, if any.
        strict: Reject organizations that list more than one root.

    Returns:
        The parent id to pass to CreateOrganizationalUnit.

    Raises:
        RootNotFoundError: If ListRoots returns no roots.
        AmbiguousRootError: If ``strict`` and more than one root is listed.
    """
    if isinstance(parent_id, str) and parent_id != "":
        return parent_id

    roots = await client.list_roots()
    if not roots:
        raise RootNotFoundError(
            "ListRoots returned no roots; cannot resolve a parent for the "
            "organizational unit"
        )

    if len(roots) > 1:
        root_ids = ", ".join(root["Id"] for root in roots)
        if strict:
            raise AmbiguousRootError(
                f"Organization has {len(roots)} roots ({root_ids}); "
                f"set ParentOU explicitly"
            )
        logger.warning(f"Organization has multiple roots ({root_ids}), using the first")

    return roots[0]["Id"]


class OrganizationalUnitReconciler:
    """
    Reconciles an organizational unit against AWS Organizations.

    The Organizations client is a required dependency; there is no
    "no session" mode.
    """

    def __init__(
        self, client: OrganizationsClient, config: Optional[HandlerConfig] = None
    ):
        if client is None:
            raise ValueError("An Organizations client is required")
        self.client = client
        self.config = config or HandlerConfig()

    @property
    def type_name(self) -> str:
        return self.config.type_name

    async def dispatch(
        self,
        action: Action,
        request: HandlerRequest,
        callback_context: Optional[Dict[str, Any]] = None,
    ) -> ProgressEvent:
        """
        Run the handler for one lifecycle action.

        Args:
            action: The lifecycle action requested by the orchestrator.
            request: Desired and previous resource state.
            callback_context: Continuation state from a previous invocation.
                Unused, since every handler completes in one invocation.

        Returns:
            The ProgressEvent for the orchestrator.

        Raises:
            ValueError: If ``action`` is not a known lifecycle action.
        """
        action = Action(action)
        logger.info(
            f"Handling {action.value} for {self.type_name} "
            f"({request.logical_resource_identifier or 'no logical id'})"
        )

        if action is Action.CREATE:
            event = await self.create(request)
        elif action is Action.READ:
            event = await self.read(request)
        elif action is Action.UPDATE:
            event = await self.update(request)
        elif action is Action.DELETE:
            event = await self.delete(request)
        elif action is Action.LIST:
            event = await self.list(request)
        else:
            raise ValueError(f"Unsupported action: {action}")

        logger.info(f"{action.value} finished with status {event.status.value}")
        return event

    async def create(self, request: HandlerRequest) -> ProgressEvent:
        """Create the OU and report its assigned id and ARN."""
        model = request.desired_resource_state
        try:
            if not model.organizational_unit_name:
                raise InvalidRequestError(
                    f"OrganizationalUnitName is required to create {self.type_name}"
                )
            parent_id = await parent_id_or_root_id(
                self.client,
                model.parent_ou,
                strict=self.config.root_selection == ROOT_SELECTION_STRICT,
            )
            logger.info(
                f"Creating organizational unit '{model.organizational_unit_name}' "
                f"under {parent_id}"
            )
            unit = await self.client.create_organizational_unit(
                model.organizational_unit_name, parent_id
            )
            if not unit.get("Id") or not unit.get("Arn"):
                raise HandlerError(
                    "CreateOrganizationalUnit response is missing Id or Arn"
                )
            created = model.model_copy(
                update={"resource_id": unit["Id"], "arn": unit["Arn"]}
            )
        except Exception as e:
            return self._failed("create", e)

        logger.info(f"Created organizational unit {created.resource_id}")
        return ProgressEvent.success(created)

    async def read(self, request: HandlerRequest) -> ProgressEvent:
        """Echo the desired model; no live lookup is made."""
        return ProgressEvent.success(request.desired_resource_state)

    async def update(self, request: HandlerRequest) -> ProgressEvent:
        """Reject parent changes; other properties are accepted as declared."""
        model = request.desired_resource_state
        previous = request.previous_resource_state

        if previous is None:
            return self._failed(
                "update",
                InvalidRequestError("previousResourceState is required for update"),
            )

        # absent and empty both mean "attach to the root"
        if (model.parent_ou or None) != (previous.parent_ou or None):
            return self._failed(
                "update",
                NotUpdatableError(
                    f"cannot change parentOU on resource of type {self.type_name}"
                ),
            )

        updated = model.model_copy(
            update={
                "resource_id": model.resource_id or previous.resource_id,
                "arn": model.arn or previous.arn,
            }
        )
        return ProgressEvent.success(updated)

    async def delete(self, request: HandlerRequest) -> ProgressEvent:
        """Delete the OU identified by the previous model's ResourceId."""
        model = request.previous_resource_state
        # protocol payloads send delete state as resourceProperties only
        if model is None:
            model = request.desired_resource_state

        try:
            if not model.resource_id:
                raise MissingIdentifierError(
                    f"ResourceId is required to delete {self.type_name}"
                )
            logger.info(f"Deleting organizational unit {model.resource_id}")
            await self.client.delete_organizational_unit(model.resource_id)
        except Exception as e:
            return self._failed("delete", e)

        return ProgressEvent.success(model)

    async def list(self, request: HandlerRequest) -> ProgressEvent:
        """Return the desired model as the only listed resource."""
        return ProgressEvent.listed([request.desired_resource_state])

    def _failed(self, operation: str, error: Exception) -> ProgressEvent:
        error_code = classify_error(error)
        message = error_message(error)
        logger.error(
            f"Failed to {operation} {self.type_name}: [{error_code.value}] {message}",
            exc_info=not isinstance(error, HandlerError),
        )
        return ProgressEvent.failed(error_code, message)
