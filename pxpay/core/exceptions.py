"""
PxPay Client - Custom Exceptions

This module defines the exception classes raised by the PxPay client.

The three protocol failure kinds are siblings under PxPayException so a
caller can branch on them exhaustively:

    try:
        url = client.create_transaction(request)
    except PxPayValidationError as e:   # fix the input and resubmit
        ...
    except PxPayProtocolError as e:     # gateway said no
        ...
    except PxPayParseError as e:        # gateway reply was not XML
        ...
"""

from enum import Enum
from typing import Any, Dict, Optional


class ValidationReason(str, Enum):
    """Why a request field was rejected before it left the process."""

    MISSING = "missing"
    TOO_LONG = "too long"
    NOT_NUMERIC = "not a valid number"
    UNSUPPORTED_CURRENCY = "not a valid currency"
    UNSUPPORTED_TRANSACTION_TYPE = "not a valid transaction type"


class PxPayException(Exception):
    """Base exception for all PxPay client errors."""

    def __init__(
        self,
        message: str,
        error_code: Optional[str] = None,
        context: Optional[Dict[str, Any]] = None,
    ):
        super().__init__(message)
        self.message = message
        self.error_code = error_code or "PXPAY_ERROR"
        self.context = context or {}

    def __str__(self) -> str:
        if self.context:
            return f"{self.message} (Code: {self.error_code}, Context: {self.context})"
        return f"{self.message} (Code: {self.error_code})"


class ConfigurationException(PxPayException):
    """Exception raised for configuration-related errors."""

    def __init__(self, message: str, config_key: Optional[str] = None):
        super().__init__(
            message,
            error_code="CONFIG_ERROR",
            context={"config_key": config_key} if config_key else {},
        )
        self.config_key = config_key


class PxPayValidationError(PxPayException):
    """
    A request field failed the message schema rules.

    Raised before anything is sent to the gateway. Always recoverable by
    correcting the input.
    """

    def __init__(
        self,
        field: str,
        reason: ValidationReason,
        limit: Optional[int] = None,
        value: Optional[str] = None,
    ):
        if reason is ValidationReason.TOO_LONG:
            message = f"{field} cannot be more than {limit} characters"
        elif reason is ValidationReason.MISSING:
            message = f"{field} is missing"
        elif value is not None:
            message = f"{field} is {reason.value}: {value}"
        else:
            message = f"{field} is {reason.value}"

        context: Dict[str, Any] = {"field": field, "reason": reason.value}
        if limit is not None:
            context["limit"] = limit

        super().__init__(message, error_code="VALIDATION_ERROR", context=context)
        self.field = field
        self.reason = reason
        self.limit = limit


class PxPayProtocolError(PxPayException):
    """The gateway rejected the request or returned an unrecognised outcome."""

    def __init__(self, message: str, response_code: Optional[str] = None):
        super().__init__(
            message,
            error_code="PROTOCOL_ERROR",
            context={"response_code": response_code} if response_code else {},
        )
        self.response_code = response_code


class PxPayParseError(PxPayException):
    """The body received from the gateway is not well-formed XML."""

    def __init__(
        self,
        message: str,
        line: Optional[int] = None,
        column: Optional[int] = None,
    ):
        context = {}
        if line is not None:
            context["line"] = line
        if column is not None:
            context["column"] = column

        super().__init__(message, error_code="PARSE_ERROR", context=context)
        self.line = line
        self.column = column


class GatewayTransportError(PxPayException):
    """The HTTP round trip to the gateway failed."""

    def __init__(
        self,
        message: str,
        url: Optional[str] = None,
        status_code: Optional[int] = None,
    ):
        context: Dict[str, Any] = {}
        if url:
            context["url"] = url
        if status_code is not None:
            context["status_code"] = status_code

        super().__init__(message, error_code="TRANSPORT_ERROR", context=context)
        self.url = url
        self.status_code = status_code
