"""
Resource and request models for the Organizational Unit handler.

Wire names follow the resource schema (PascalCase properties, camelCase
request envelope). Python attributes are snake_case. Resource properties are
accepted on input as PascalCase, camelCase or snake_case.
"""

from enum import Enum
from typing import Any, Dict, Optional

from pydantic import AliasChoices, BaseModel, ConfigDict, Field, field_validator

PRIMARY_IDENTIFIER = "ResourceId"
CREATE_ONLY_PROPERTIES = ("ParentOU",)
READ_ONLY_PROPERTIES = ("ResourceId", "Arn")


class Action(Enum):
    """Lifecycle actions the orchestrator can invoke."""

    CREATE = "CREATE"
    READ = "READ"
    UPDATE = "UPDATE"
    DELETE = "DELETE"
    LIST = "LIST"


class ResourceModel(BaseModel):
    """Declarative state of one organizational unit."""

    model_config = ConfigDict(populate_by_name=True)

    organizational_unit_name: Optional[str] = Field(
        default=None,
        alias="OrganizationalUnitName",
        validation_alias=AliasChoices(
            "OrganizationalUnitName", "organizationalUnitName"
        ),
        description="Display name of the organizational unit",
    )
    parent_ou: Optional[str] = Field(
        default=None,
        alias="ParentOU",
        validation_alias=AliasChoices("ParentOU", "parentOU"),
        description="Parent OU or root id; empty means the organization root",
    )
    resource_id: Optional[str] = Field(
        default=None,
        alias="ResourceId",
        validation_alias=AliasChoices("ResourceId", "resourceId"),
        description="OU id assigned on create",
    )
    arn: Optional[str] = Field(
        default=None,
        alias="Arn",
        validation_alias=AliasChoices("Arn", "arn"),
        description="OU ARN assigned on create",
    )

    def to_wire(self) -> Dict[str, Any]:
        """Serialize using schema property names, omitting unset values."""
        return self.model_dump(by_alias=True, exclude_none=True)


class Credentials(BaseModel):
    """Caller credentials passed through by the orchestrator."""

    model_config = ConfigDict(populate_by_name=True)

    access_key_id: str = Field(..., alias="accessKeyId")
    secret_access_key: str = Field(..., alias="secretAccessKey", repr=False)
    session_token: Optional[str] = Field(default=None, alias="sessionToken", repr=False)


class HandlerRequest(BaseModel):
    """Desired and previous state for one handler invocation."""

    model_config = ConfigDict(populate_by_name=True)

    desired_resource_state: ResourceModel = Field(
        default_factory=ResourceModel, alias="desiredResourceState"
    )
    previous_resource_state: Optional[ResourceModel] = Field(
        default=None, alias="previousResourceState"
    )
    logical_resource_identifier: Optional[str] = Field(
        default=None, alias="logicalResourceIdentifier"
    )
    client_request_token: Optional[str] = Field(
        default=None, alias="clientRequestToken"
    )
    next_token: Optional[str] = Field(default=None, alias="nextToken")

    @field_validator("desired_resource_state", mode="before")
    @classmethod
    def default_desired_state(cls, v: Any) -> Any:
        return {} if v is None else v


class HandlerEvent(BaseModel):
    """A complete invocation: action, credentials, request and callback context."""

    model_config = ConfigDict(populate_by_name=True)

    action: Action
    region: Optional[str] = None
    credentials: Optional[Credentials] = None
    request: HandlerRequest = Field(default_factory=HandlerRequest)
    callback_context: Dict[str, Any] = Field(
        default_factory=dict, alias="callbackContext"
    )

    @field_validator("action", mode="before")
    @classmethod
    def normalize_action(cls, v: Any) -> Any:
        if isinstance(v, str):
            return v.strip().upper()
        return v

    @field_validator("request", "callback_context", mode="before")
    @classmethod
    def default_empty(cls, v: Any) -> Any:
        return {} if v is None else v

    @classmethod
    def from_payload(cls, payload: Dict[str, Any]) -> "HandlerEvent":
        """
        Build an event from either supported payload shape.

        The resource-provider protocol nests state under ``requestData``;
        the local invocation shape carries ``credentials`` and ``request``
        directly.

        Args:
            payload: Raw payload dict.

        Returns:
            The parsed HandlerEvent.

        Raises:
            pydantic.ValidationError: If the payload does not match either shape.
        """
        if "requestData" not in payload:
            return cls.model_validate(payload)

        request_data = payload.get("requestData") or {}
        return cls.model_validate(
            {
                "action": payload.get("action"),
                "region": payload.get("region"),
                "credentials": request_data.get("callerCredentials"),
                "request": {
                    "desiredResourceState": request_data.get("resourceProperties"),
                    "previousResourceState": request_data.get(
                        "previousResourceProperties"
                    ),
                    "logicalResourceIdentifier": request_data.get("logicalResourceId"),
                    "clientRequestToken": payload.get("bearerToken"),
                    "nextToken": payload.get("nextToken"),
                },
                "callbackContext": payload.get("callbackContext"),
            }
        )
