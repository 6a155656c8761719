"""Unit tests for handler errors and error classification."""

import pytest
from botocore.exceptions import EndpointConnectionError

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
from progress import HandlerErrorCode


class TestHandlerErrors:
    """Tests for the HandlerError hierarchy."""

    def test_message_attribute(self):
        error = HandlerError("something broke")
        assert error.message == "something broke"
        assert str(error) == "something broke"
        assert error.error_code == HandlerErrorCode.INTERNAL_FAILURE

    @pytest.mark.parametrize(
        "error_class,expected",
        [
            (InvalidRequestError, HandlerErrorCode.INVALID_REQUEST),
            (NotUpdatableError, HandlerErrorCode.NOT_UPDATABLE),
            (MissingIdentifierError, HandlerErrorCode.INVALID_REQUEST),
            (RootNotFoundError, HandlerErrorCode.NOT_FOUND),
            (AmbiguousRootError, HandlerErrorCode.INVALID_REQUEST),
        ],
    )
    def test_error_codes(self, error_class, expected):
        assert classify_error(error_class("x")) == expected

    def test_precondition_errors_are_handler_errors(self):
        assert issubclass(MissingIdentifierError, InvalidRequestError)
        assert issubclass(RootNotFoundError, HandlerError)


class TestClassifyError:
    """Tests for classify_error with AWS errors."""

    @pytest.mark.parametrize(
        "code,expected",
        [
            ("DuplicateOrganizationalUnitException", HandlerErrorCode.ALREADY_EXISTS),
            ("OrganizationalUnitNotFoundException", HandlerErrorCode.NOT_FOUND),
            ("ParentNotFoundException", HandlerErrorCode.NOT_FOUND),
            ("TooManyRequestsException", HandlerErrorCode.THROTTLING),
            ("ConcurrentModificationException", HandlerErrorCode.RESOURCE_CONFLICT),
            ("OrganizationalUnitNotEmptyException", HandlerErrorCode.RESOURCE_CONFLICT),
            ("ConstraintViolationException", HandlerErrorCode.SERVICE_LIMIT_EXCEEDED),
            ("InvalidInputException", HandlerErrorCode.INVALID_REQUEST),
            ("AccessDeniedException", HandlerErrorCode.ACCESS_DENIED),
            ("AWSOrganizationsNotInUseException", HandlerErrorCode.ACCESS_DENIED),
            ("ServiceException", HandlerErrorCode.SERVICE_INTERNAL_ERROR),
            ("SomethingNewException", HandlerErrorCode.INTERNAL_FAILURE),
        ],
    )
    def test_client_error_codes(self, client_error, code, expected):
        assert classify_error(client_error(code, "msg")) == expected

    def test_generic_exception(self):
        assert classify_error(RuntimeError("throttled")) == HandlerErrorCode.INTERNAL_FAILURE

    def test_transport_error(self):
        error = EndpointConnectionError(endpoint_url="https://organizations.us-east-1.amazonaws.com")
        assert classify_error(error) == HandlerErrorCode.INTERNAL_FAILURE


class TestErrorMessage:
    """Tests for error_message."""

    def test_handler_error(self):
        assert error_message(NotUpdatableError("cannot change")) == "cannot change"

    def test_client_error_uses_service_message(self, client_error):
        error = client_error("TooManyRequestsException", "Rate exceeded")
        assert error_message(error) == "Rate exceeded"

    def test_client_error_without_message(self, client_error):
        error = client_error("TooManyRequestsException", "")
        assert "TooManyRequestsException" in error_message(error)

    def test_generic_exception(self):
        assert error_message(ValueError("throttled")) == "throttled"
