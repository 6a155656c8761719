"""
Progress Events - Outcome of one handler invocation.

A ProgressEvent is what the orchestrator receives back: a status, the
resource model(s) as known after the operation, and error detail on failure.
"""

import json
from dataclasses import dataclass
from enum import Enum
from typing import Any, Dict, List, Optional

from models import ResourceModel


class OperationStatus(Enum):
    """Status of a handler invocation."""

    IN_PROGRESS = "IN_PROGRESS"
    SUCCESS = "SUCCESS"
    FAILED = "FAILED"


class HandlerErrorCode(Enum):
    """Failure categories understood by the orchestrator."""

    NOT_UPDATABLE = "NotUpdatable"
    INVALID_REQUEST = "InvalidRequest"
    ACCESS_DENIED = "AccessDenied"
    INVALID_CREDENTIALS = "InvalidCredentials"
    ALREADY_EXISTS = "AlreadyExists"
    NOT_FOUND = "NotFound"
    RESOURCE_CONFLICT = "ResourceConflict"
    THROTTLING = "Throttling"
    SERVICE_LIMIT_EXCEEDED = "ServiceLimitExceeded"
    GENERAL_SERVICE_EXCEPTION = "GeneralServiceException"
    SERVICE_INTERNAL_ERROR = "ServiceInternalError"
    NETWORK_FAILURE = "NetworkFailure"
    INTERNAL_FAILURE = "InternalFailure"


@dataclass
class ProgressEvent:
    """Result returned to the orchestrator."""

    status: OperationStatus
    resource_model: Optional[ResourceModel] = None
    resource_models: Optional[List[ResourceModel]] = None
    error_code: Optional[HandlerErrorCode] = None
    message: Optional[str] = None
    callback_context: Optional[Dict[str, Any]] = None
    callback_delay_seconds: int = 0
    next_token: Optional[str] = None

    @classmethod
    def success(cls, model: Optional[ResourceModel]) -> "ProgressEvent":
        """Terminal success carrying the resulting model."""
        return cls(status=OperationStatus.SUCCESS, resource_model=model)

    @classmethod
    def listed(
        cls, models: List[ResourceModel], next_token: Optional[str] = None
    ) -> "ProgressEvent":
        """Terminal success for a List invocation."""
        return cls(
            status=OperationStatus.SUCCESS,
            resource_models=list(models),
            next_token=next_token,
        )

    @classmethod
    def failed(cls, error_code: HandlerErrorCode, message: str) -> "ProgressEvent":
        """Terminal failure."""
        return cls(status=OperationStatus.FAILED, error_code=error_code, message=message)

    def to_dict(self) -> Dict[str, Any]:
        """
        Serialize for the orchestrator.

        Keys are camelCase; models use schema property names. Unset values
        are omitted.

        Returns:
            JSON-compatible dict.
        """
        data: Dict[str, Any] = {"status": self.status.value}
        if self.error_code is not None:
            data["errorCode"] = self.error_code.value
        if self.message is not None:
            data["message"] = self.message
        if self.resource_model is not None:
            data["resourceModel"] = self.resource_model.to_wire()
        if self.resource_models is not None:
            data["resourceModels"] = [m.to_wire() for m in self.resource_models]
        if self.callback_context:
            data["callbackContext"] = self.callback_context
        if self.callback_delay_seconds:
            data["callbackDelaySeconds"] = self.callback_delay_seconds
        if self.next_token is not None:
            data["nextToken"] = self.next_token
        return data

    def to_json(self) -> str:
        """Serialize to a JSON string."""
        return json.dumps(self.to_dict())
