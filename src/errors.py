"""
Handler errors and classification of Organizations API failures.
"""

from typing import Dict

from botocore.exceptions import ClientError

from progress import HandlerErrorCode


class HandlerError(Exception):
    """Raised when a handler cannot complete; carries the failure category."""

    error_code = HandlerErrorCode.INTERNAL_FAILURE

    def __init__(self, message: str):
        self.message = message
        super().__init__(message)


class InvalidRequestError(HandlerError):
    """The request is missing required input."""

    error_code = HandlerErrorCode.INVALID_REQUEST


class NotUpdatableError(HandlerError):
    """An update tried to change a create-only property."""

    error_code = HandlerErrorCode.NOT_UPDATABLE


class MissingIdentifierError(InvalidRequestError):
    """The model has no ResourceId where one is required."""


class RootNotFoundError(HandlerError):
    """The organization has no root to attach to."""

    error_code = HandlerErrorCode.NOT_FOUND


class AmbiguousRootError(InvalidRequestError):
    """More than one root was listed and strict root selection is enabled."""


# AWS Organizations error codes -> handler error codes
CLIENT_ERROR_CODES: Dict[str, HandlerErrorCode] = {
    "DuplicateOrganizationalUnitException": HandlerErrorCode.ALREADY_EXISTS,
    "OrganizationalUnitNotFoundException": HandlerErrorCode.NOT_FOUND,
    "ParentNotFoundException": HandlerErrorCode.NOT_FOUND,
    "TooManyRequestsException": HandlerErrorCode.THROTTLING,
    "ConcurrentModificationException": HandlerErrorCode.RESOURCE_CONFLICT,
    "OrganizationalUnitNotEmptyException": HandlerErrorCode.RESOURCE_CONFLICT,
    "ConstraintViolationException": HandlerErrorCode.SERVICE_LIMIT_EXCEEDED,
    "InvalidInputException": HandlerErrorCode.INVALID_REQUEST,
    "AccessDeniedException": HandlerErrorCode.ACCESS_DENIED,
    "AWSOrganizationsNotInUseException": HandlerErrorCode.ACCESS_DENIED,
    "ServiceException": HandlerErrorCode.SERVICE_INTERNAL_ERROR,
}


def classify_error(error: Exception) -> HandlerErrorCode:
    """
    Map an exception to the handler error code reported to the orchestrator.

    Args:
        error: Exception raised while handling the request.

    Returns:
        The matching HandlerErrorCode, InternalFailure when unknown.
    """
    if isinstance(error, HandlerError):
        return error.error_code
    if isinstance(error, ClientError):
        code = error.response.get("Error", {}).get("Code", "")
        return CLIENT_ERROR_CODES.get(code, HandlerErrorCode.INTERNAL_FAILURE)
    return HandlerErrorCode.INTERNAL_FAILURE


def error_message(error: Exception) -> str:
    """Return the underlying message of an exception."""
    if isinstance(error, HandlerError):
        return error.message
    if isinstance(error, ClientError):
        message = error.response.get("Error", {}).get("Message")
        if message:
            return message
    return str(error)
