"""
PxPay - Hosted Payment Page Client

Client for the Payment Express PxPay 2.0 hosted payment page:
- Validates and serializes GenerateRequest / ProcessResponse messages
- Posts them to the gateway over HTTPS
- Decodes the redirect URL and the transaction result

Configuration: PXPAY_USER_ID, PXPAY_KEY (see pxpay.core.config)
"""

import logging
from typing import List

from pxpay.core.exceptions import (
    ConfigurationException,
    GatewayTransportError,
    PxPayException,
    PxPayParseError,
    PxPayProtocolError,
    PxPayValidationError,
    ValidationReason,
)
from pxpay.protocol import (
    Currency,
    NoResult,
    TransactionRequest,
    TransactionResult,
    TransactionType,
)
from pxpay.core.config import PxPayConfig, get_config, load_config, set_config
from pxpay.core.structured_logging import configure_logging
from pxpay.transport import HttpTransport, Transport
from pxpay.client import PxPayClient, extract_result_token

logging.getLogger(__name__).addHandler(logging.NullHandler())

__version__ = "1.0.0"
__all__: List[str] = [
    "PxPayClient",
    "extract_result_token",
    "HttpTransport",
    "Transport",
    # Messages
    "Currency",
    "NoResult",
    "TransactionRequest",
    "TransactionResult",
    "TransactionType",
    # Configuration
    "PxPayConfig",
    "get_config",
    "load_config",
    "set_config",
    "configure_logging",
    # Errors
    "ConfigurationException",
    "GatewayTransportError",
    "PxPayException",
    "PxPayParseError",
    "PxPayProtocolError",
    "PxPayValidationError",
    "ValidationReason",
]
