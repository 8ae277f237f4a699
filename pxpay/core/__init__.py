"""
PxPay Client - Core

Exceptions, configuration and logging shared by the protocol and client
layers. Only the exception types are re-exported here; configuration
depends on the protocol code tables.
"""

from pxpay.core.exceptions import (
    ConfigurationException,
    GatewayTransportError,
    PxPayException,
    PxPayParseError,
    PxPayProtocolError,
    PxPayValidationError,
    ValidationReason,
)

__all__ = [
    "ConfigurationException",
    "GatewayTransportError",
    "PxPayException",
    "PxPayParseError",
    "PxPayProtocolError",
    "PxPayValidationError",
    "ValidationReason",
]
