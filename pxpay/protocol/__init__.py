"""
PxPay 2.0 Message Protocol

The hosted payment page protocol is two XML round trips:
- GenerateRequest -> Request: register a transaction, receive the page URI
- ProcessResponse -> Response: exchange the result token for the outcome

Requests are flat: one root element, one child per non-empty field.
Replies are read with a path-addressable tag stream.
"""

from typing import List

from pxpay.protocol.pxpay_codes import (
    PXPAY_ENDPOINT,
    SUPPORTED_CURRENCIES,
    SUPPORTED_TRANSACTION_TYPES,
    Currency,
    ResponseCode,
    TransactionType,
    response_message,
)
from pxpay.protocol.pxpay_message import (
    NoResult,
    ResultRequest,
    TransactionRequest,
    TransactionResult,
)
from pxpay.protocol.pxpay_validator import PxPayValidator
from pxpay.protocol.pxpay_schema import (
    GENERATE_REQUEST_SCHEMA,
    PROCESS_RESPONSE_SCHEMA,
    FieldSpec,
    MessageSchema,
)
from pxpay.protocol.tag_stream import TagEvent, TagKind, TagStream
from pxpay.protocol.pxpay_builder import PxPayBuilder, format_amount
from pxpay.protocol.pxpay_decoder import decode_result, decode_transaction_response

__all__: List[str] = [
    # Codes
    "PXPAY_ENDPOINT",
    "SUPPORTED_CURRENCIES",
    "SUPPORTED_TRANSACTION_TYPES",
    "Currency",
    "ResponseCode",
    "TransactionType",
    "response_message",
    # Message structures
    "NoResult",
    "ResultRequest",
    "TransactionRequest",
    "TransactionResult",
    # Schema and validation
    "GENERATE_REQUEST_SCHEMA",
    "PROCESS_RESPONSE_SCHEMA",
    "FieldSpec",
    "MessageSchema",
    "PxPayValidator",
    # Reader
    "TagEvent",
    "TagKind",
    "TagStream",
    # Builder / decoder
    "PxPayBuilder",
    "format_amount",
    "decode_result",
    "decode_transaction_response",
]
