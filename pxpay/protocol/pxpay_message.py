"""
PxPay Message Data Structures

Typed field sets for the two PxPay 2.0 round trips:
- GenerateRequest: register a pending transaction, get a hosted page URL
- ProcessResponse: exchange the result token for the transaction outcome
"""

from dataclasses import dataclass
from decimal import Decimal, InvalidOperation
from enum import Enum
from typing import Optional, Union

from pxpay.protocol.pxpay_codes import Currency, TransactionType


Amount = Union[Decimal, int, float, str]


@dataclass
class TransactionRequest:
    """
    Fields of a GenerateRequest, as supplied by the merchant.

    Nothing is checked here; the builder validates the whole set once,
    when it is serialized. Credentials are supplied by the client.
    """

    # Required
    amount: Optional[Amount] = None
    currency: Union[Currency, str, None] = None
    transaction_type: Union[TransactionType, str, None] = None
    url_success: Optional[str] = None
    url_fail: Optional[str] = None

    # Merchant references, echoed back in the result
    merchant_reference: Optional[str] = None
    txn_id: Optional[str] = None
    txn_data1: Optional[str] = None
    txn_data2: Optional[str] = None
    txn_data3: Optional[str] = None
    email_address: Optional[str] = None

    # Token billing
    billing_id: Optional[str] = None
    dps_billing_id: Optional[str] = None
    enable_add_bill_card: bool = False

    opt: Optional[str] = None


@dataclass
class ResultRequest:
    """Fields of a ProcessResponse: the opaque result token."""

    response: Optional[str] = None


@dataclass(frozen=True)
class TransactionResult:
    """
    Decoded transaction outcome.

    Every field except is_valid is optional; a field the gateway did not
    send is None.
    """

    is_valid: bool = False
    success: bool = False

    amount_settlement: Optional[str] = None
    auth_code: Optional[str] = None
    billing_id: Optional[str] = None
    card_holder_name: Optional[str] = None
    card_name: Optional[str] = None
    card_number: Optional[str] = None
    card_number2: Optional[str] = None
    client_info: Optional[str] = None
    currency_input: Optional[str] = None
    currency_settlement: Optional[str] = None
    cvs2_result_code: Optional[str] = None
    date_expiry: Optional[str] = None
    dps_billing_id: Optional[str] = None
    dps_txn_ref: Optional[str] = None
    email_address: Optional[str] = None
    merchant_reference: Optional[str] = None
    response_text: Optional[str] = None
    txn_data1: Optional[str] = None
    txn_data2: Optional[str] = None
    txn_data3: Optional[str] = None
    txn_id: Optional[str] = None
    txn_mac: Optional[str] = None
    txn_type: Optional[str] = None

    @property
    def amount_settled(self) -> Optional[Decimal]:
        """Settled amount as a Decimal, or None if not reported or not a number."""
        if self.amount_settlement is None:
            return None
        try:
            return Decimal(self.amount_settlement.strip())
        except InvalidOperation:
            return None

    @property
    def was_successful(self) -> bool:
        return self.success


class NoResult(Enum):
    """Outcome of the decode flow when there is no result token to process."""

    NOTHING_TO_PROCESS = "nothing to process"
