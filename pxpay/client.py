"""
PxPay Gateway Client

Runs the two PxPay 2.0 round trips:

    client = PxPayClient(user_id, key)

    # 1. Register the transaction and send the customer to the hosted page
    url = client.create_transaction(TransactionRequest(...))

    # 2. On the merchant return URL, decode the outcome
    result = client.process_query(request.query_string)
    if result is NoResult.NOTHING_TO_PROCESS:
        ...  # customer came back without paying
"""

import logging
from typing import Mapping, Optional, Sequence, Union
from urllib.parse import parse_qs

from pxpay.core.config import PxPayConfig
from pxpay.core.exceptions import ConfigurationException
from pxpay.core.structured_logging import configure_logging, mask_secret
from pxpay.protocol.pxpay_builder import PxPayBuilder
from pxpay.protocol.pxpay_codes import PXPAY_ENDPOINT
from pxpay.protocol.pxpay_decoder import decode_result, decode_transaction_response
from pxpay.protocol.pxpay_message import NoResult, ResultRequest, TransactionRequest, TransactionResult
from pxpay.transport import HttpTransport, Transport

logger = logging.getLogger(__name__)

RESULT_PARAMETER = "result"

QueryParams = Union[str, Mapping[str, Union[str, Sequence[str]]]]


class PxPayClient:
    """
    Client for the PxPay hosted payment page.

    Holds credentials and a transport; keeps no state between calls.
    """

    def __init__(
        self,
        user_id: str,
        key: str,
        transport: Optional[Transport] = None,
        endpoint: str = PXPAY_ENDPOINT,
    ):
        self.user_id = user_id
        self.key = key
        self.endpoint = endpoint
        self._owns_transport = transport is None
        self._transport: Transport = transport or HttpTransport()
        self._builder = PxPayBuilder()

    @classmethod
    def from_config(cls, config: PxPayConfig, transport: Optional[Transport] = None) -> "PxPayClient":
        """Create a client from validated configuration and apply its logging settings."""
        config.validate()
        configure_logging(config.log_level.value, json_output=config.json_logs)

        owns_transport = transport is None
        if transport is None:
            transport = HttpTransport(timeout=config.timeout, verify_ssl=config.verify_ssl)

        client = cls(config.user_id, config.key, transport=transport, endpoint=config.endpoint)
        client._owns_transport = owns_transport
        return client

    def create_transaction(self, request: TransactionRequest) -> str:
        """
        Register a transaction with the gateway.

        Returns:
            URL of the hosted payment page to redirect the customer to

        Raises:
            PxPayValidationError: If the request is invalid; nothing is sent
            GatewayTransportError: If the HTTP round trip fails
            PxPayParseError: If the reply is not XML
            PxPayProtocolError: If the gateway rejected the request
        """
        xml = self._builder.build_generate_request(request, self.user_id, self.key)

        logger.info(
            "Sending GenerateRequest",
            extra={"user_id": self.user_id, "merchant_reference": request.merchant_reference},
        )
        body = self._transport.post(self.endpoint, xml)
        url = decode_transaction_response(body)

        logger.info("GenerateRequest accepted", extra={"user_id": self.user_id})
        return url

    def process_response(self, token: Optional[str]) -> Union[TransactionResult, NoResult]:
        """
        Exchange a result token for the transaction outcome.

        Returns:
            The decoded TransactionResult, or NoResult.NOTHING_TO_PROCESS if
            the token is empty

        Raises:
            ConfigurationException: If the client has no user id
            PxPayValidationError: If the credentials break the schema rules
            GatewayTransportError: If the HTTP round trip fails
            PxPayParseError: If the reply is not XML
        """
        if not self.user_id:
            raise ConfigurationException("UserId is not set", config_key="user_id")

        token = (token or "").strip()
        if not token:
            logger.debug("No result token to process")
            return NoResult.NOTHING_TO_PROCESS

        xml = self._builder.build_process_response(ResultRequest(response=token), self.user_id, self.key)

        logger.info("Sending ProcessResponse", extra={"token": mask_secret(token)})
        body = self._transport.post(self.endpoint, xml)
        result = decode_result(body)

        logger.info(
            "Transaction result decoded",
            extra={
                "success": result.success,
                "dps_txn_ref": result.dps_txn_ref,
                "merchant_reference": result.merchant_reference,
            },
        )
        return result

    def process_query(self, query: QueryParams) -> Union[TransactionResult, NoResult]:
        """
        Decode the outcome from the merchant return URL's query parameters.

        Accepts a raw query string ("result=...&userid=...") or a mapping of
        parameters such as a web framework's request.args.
        """
        return self.process_response(extract_result_token(query))

    def close(self) -> None:
        """Close the transport if this client created it."""
        if self._owns_transport and hasattr(self._transport, "close"):
            self._transport.close()

    def __enter__(self) -> "PxPayClient":
        return self

    def __exit__(self, *exc_info) -> None:
        self.close()


def extract_result_token(query: QueryParams) -> Optional[str]:
    """Pull the result token out of return URL query parameters."""
    if isinstance(query, str):
        values = parse_qs(query.lstrip("?")).get(RESULT_PARAMETER)
        return values[0] if values else None

    value = query.get(RESULT_PARAMETER)
    if value is None or isinstance(value, str):
        return value
    return value[0] if value else None
