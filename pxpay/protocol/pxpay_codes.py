"""
PxPay Code Definitions

Static code tables for the PxPay 2.0 hosted payment page protocol:
- Supported input currencies
- Transaction types
- Gateway response (rejection) codes
- Field length limits
"""

from enum import Enum
from typing import FrozenSet, Optional

from pxpay.core.exceptions import PxPayProtocolError


PXPAY_ENDPOINT = "https://sec.paymentexpress.com/pxaccess/pxpay.aspx"


class Currency(Enum):
    """
    Currencies accepted in CurrencyInput.

    Codes are sent to the gateway exactly as listed.
    """

    AUD = ("AUD", "Australian Dollar")
    BND = ("BND", "Brunei Dollar")
    CAD = ("CAD", "Canadian Dollar")
    CHF = ("CHF", "Swiss Franc")
    EUR = ("EUR", "Euro")
    FJD = ("FJD", "Fiji Dollar")
    FRH = ("FRH", "French Polynesia Franc")
    GBP = ("GBP", "United Kingdom Pound")
    HKD = ("HKD", "Hong Kong Dollar")
    INR = ("INR", "Indian Rupee")
    JPY = ("JPY", "Japanese Yen")
    KWD = ("KWD", "Kuwait Dinar")
    MYR = ("MYR", "Malaysian Ringgit")
    NZD = ("NZD", "New Zealand Dollar")
    PGK = ("PGK", "Papua New Guinean Kina")
    SBD = ("SBD", "Solomon Islands Dollar")
    SGB = ("SGB", "Singapore Dollar")
    THB = ("THB", "Thai Baht")
    TOP = ("TOP", "Tongan Pa'anga")
    USD = ("USD", "United States Dollar")
    VUV = ("VUV", "Vanuatu Vatu")
    WST = ("WST", "Samoan Tala")
    ZAR = ("ZAR", "South African Rand")

    def __init__(self, code: str, description: str):
        self.code = code
        self.description = description

    @classmethod
    def from_code(cls, code: str) -> Optional["Currency"]:
        """Get currency from its three letter code."""
        for currency in cls:
            if currency.code == code:
                return currency
        return None


class TransactionType(Enum):
    """PxPay transaction types."""

    AUTH = ("Auth", "Authorise only, complete later")
    PURCHASE = ("Purchase", "Authorise and settle immediately")

    def __init__(self, code: str, description: str):
        self.code = code
        self.description = description

    @classmethod
    def from_code(cls, code: str) -> Optional["TransactionType"]:
        """Get transaction type from its wire value."""
        for txn_type in cls:
            if txn_type.code == code:
                return txn_type
        return None


class ResponseCode(Enum):
    """
    Gateway response codes for a rejected GenerateRequest.

    Returned in the Reco element when no URI is issued.
    """

    IC = ("IC", "Invalid Key or Username. Also check that if a TxnId is being supplied that it is unique.")
    ID = ("ID", "Invalid transaction type. Ensure that the transaction type is either Auth or Purchase.")
    IK = ("IK", "Invalid UrlSuccess. Ensure that the URL being supplied does not contain a query string.")
    IL = ("IL", "Invalid UrlFail. Ensure that the URL being supplied does not contain a query string.")
    IM = ("IM", "Invalid PxPayUserId.")
    IN = ("IN", "Blank PxPayUserId.")
    IP = ("IP", "Invalid parameter. Ensure that only documented properties are being supplied.")
    IQ = ("IQ", 'Invalid TxnType. Ensure the transaction type being submitted is either "Auth" or "Purchase".')
    IT = ("IT", 'Invalid currency. Ensure that the CurrencyInput is correct and in the correct format e.g. "USD".')
    IU = ("IU", 'Invalid AmountInput. Ensure that the amount is in the correct format e.g. "1.80".')
    NF = ("NF", "Invalid Username.")
    NK = ("NK", "Request not found. Check the key and the mcrypt library if in use.")
    NL = ("NL", "User not enabled. Contact DPS.")
    NM = ("NM", "User not enabled. Contact DPS.")
    NN = ("NN", "Invalid MAC.")
    NO = ("NO", "Request contains non ASCII characters.")
    NP = ("NP", "Closing Request tag not found.")
    NQ = ("NQ", "User not enabled for PxPay 2.0. Contact DPS.")
    NT = ("NT", "Key is not 64 characters.")
    W4 = ("W4", "Duplicate transaction")

    def __init__(self, code: str, message: str):
        self.code = code
        self.message = message

    @classmethod
    def from_code(cls, code: str) -> Optional["ResponseCode"]:
        """Get response code from string. Exact, case-sensitive match."""
        for rc in cls:
            if rc.code == code:
                return rc
        return None


SUPPORTED_CURRENCIES: FrozenSet[str] = frozenset(c.code for c in Currency)
SUPPORTED_TRANSACTION_TYPES: FrozenSet[str] = frozenset(t.code for t in TransactionType)


def response_message(code: Optional[str]) -> str:
    """
    Resolve a gateway response code to its explanation.

    Raises:
        PxPayProtocolError: If the code is not a known response code
    """
    rc = ResponseCode.from_code(code) if code is not None else None
    if rc is None:
        raise PxPayProtocolError(f"unknown response code: {code}", response_code=code)
    return rc.message


# Field length limits (characters)
USER_ID_MAX_LENGTH = 32
KEY_MAX_LENGTH = 64
AMOUNT_MAX_LENGTH = 13
BILLING_ID_MAX_LENGTH = 32
CURRENCY_MAX_LENGTH = 4
EMAIL_ADDRESS_MAX_LENGTH = 255
ENABLE_ADD_BILL_CARD_MAX_LENGTH = 1
MERCHANT_REFERENCE_MAX_LENGTH = 64
DPS_BILLING_ID_MAX_LENGTH = 16
TXN_DATA_MAX_LENGTH = 255
TXN_TYPE_MAX_LENGTH = 8
TXN_ID_MAX_LENGTH = 16
URL_MAX_LENGTH = 255
OPT_MAX_LENGTH = 64
