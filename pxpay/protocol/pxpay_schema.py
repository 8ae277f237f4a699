"""
PxPay Message Schemas

Declarative description of the two request messages: which fields exist,
their wire tag names, which are required, and how long they may be.
Field order is the order children are written on the wire.
"""

from dataclasses import dataclass
from typing import Callable, Optional, Tuple

from pxpay.core.exceptions import ValidationReason
from pxpay.protocol import pxpay_codes as codes
from pxpay.protocol.pxpay_validator import (
    is_numeric_amount,
    is_supported_currency,
    is_supported_transaction_type,
)


FieldCheck = Callable[[Optional[str]], Optional[ValidationReason]]


@dataclass(frozen=True)
class FieldSpec:
    """One field of a message schema."""

    name: str
    wire_name: str
    max_length: Optional[int] = None
    required: bool = False


@dataclass(frozen=True)
class MessageSchema:
    """Ordered field specs plus message-level checks, keyed by wire name."""

    root_tag: str
    fields: Tuple[FieldSpec, ...]
    checks: Tuple[Tuple[str, FieldCheck], ...] = ()

    def field(self, name: str) -> FieldSpec:
        """Look up a field spec by logical name."""
        for spec in self.fields:
            if spec.name == name:
                return spec
        raise KeyError(name)

    @property
    def wire_names(self) -> Tuple[str, ...]:
        return tuple(spec.wire_name for spec in self.fields)


GENERATE_REQUEST_SCHEMA = MessageSchema(
    root_tag="GenerateRequest",
    fields=(
        FieldSpec("user_id", "PxPayUserId", codes.USER_ID_MAX_LENGTH, required=True),
        FieldSpec("key", "PxPayKey", codes.KEY_MAX_LENGTH, required=True),
        FieldSpec("amount", "AmountInput", codes.AMOUNT_MAX_LENGTH, required=True),
        FieldSpec("billing_id", "BillingId", codes.BILLING_ID_MAX_LENGTH),
        FieldSpec("currency", "CurrencyInput", codes.CURRENCY_MAX_LENGTH, required=True),
        FieldSpec("email_address", "EmailAddress", codes.EMAIL_ADDRESS_MAX_LENGTH),
        FieldSpec("enable_add_bill_card", "EnableAddBillCard", codes.ENABLE_ADD_BILL_CARD_MAX_LENGTH),
        FieldSpec("merchant_reference", "MerchantReference", codes.MERCHANT_REFERENCE_MAX_LENGTH),
        FieldSpec("dps_billing_id", "DpsBillingId", codes.DPS_BILLING_ID_MAX_LENGTH),
        FieldSpec("txn_data1", "TxnData1", codes.TXN_DATA_MAX_LENGTH),
        FieldSpec("txn_data2", "TxnData2", codes.TXN_DATA_MAX_LENGTH),
        FieldSpec("txn_data3", "TxnData3", codes.TXN_DATA_MAX_LENGTH),
        FieldSpec("transaction_type", "TxnType", codes.TXN_TYPE_MAX_LENGTH, required=True),
        FieldSpec("txn_id", "TxnId", codes.TXN_ID_MAX_LENGTH),
        FieldSpec("url_fail", "UrlFail", codes.URL_MAX_LENGTH, required=True),
        FieldSpec("url_success", "UrlSuccess", codes.URL_MAX_LENGTH, required=True),
        FieldSpec("opt", "Opt", codes.OPT_MAX_LENGTH),
    ),
    checks=(
        ("AmountInput", is_numeric_amount),
        ("CurrencyInput", is_supported_currency),
        ("TxnType", is_supported_transaction_type),
    ),
)

# The result token has no documented limit
PROCESS_RESPONSE_SCHEMA = MessageSchema(
    root_tag="ProcessResponse",
    fields=(
        FieldSpec("user_id", "PxPayUserId", codes.USER_ID_MAX_LENGTH, required=True),
        FieldSpec("key", "PxPayKey", codes.KEY_MAX_LENGTH, required=True),
        FieldSpec("response", "Response", required=True),
    ),
)
