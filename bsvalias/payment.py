import logging
import typing
from datetime import datetime, timezone

from bsvalias.error import TransportError, FormatError, EmptyResultError
from bsvalias.identity import Identity, PAYMENT_DESTINATION, PAYMENT_REQUEST
from bsvalias.messages import (
    format_datetime, PaymentRequest,
    PaymentDestinationRequest, PaymentDestinationResponse,
    PaymentRequestRequest, PaymentRequestResponse,
)
from bsvalias.signing import get_signer
from bsvalias.transport import Transport, JSONTransport
from bsvalias.wallet.keys import PrivateKey

log = logging.getLogger(__name__)

Clock = typing.Callable[[], datetime]


def utc_now() -> datetime:
    return datetime.now(timezone.utc)


class PaymentClient:

    capability: str = ''

    def __init__(self, identity: Identity, transport: typing.Optional[Transport] = None,
                 clock: Clock = utc_now):
        self.identity = identity
        self.transport = transport or JSONTransport()
        self.clock = clock

    def timestamp(self) -> str:
        return format_datetime(self.clock())

    async def exchange(self, url: str, request) -> typing.Any:
        log.debug("sending %s request for %s to %s (signed: %s)",
                  self.capability, self.identity.handle, url, request.is_signed)
        try:
            return await self.transport(url, request.to_dict())
        except Exception as e:
            log.warning("%s request to %s failed: %s", self.capability, url, e)
            raise TransportError(url, e) from e


class PaymentDestinationClient(PaymentClient):
    """ Gets a locking script that can be used to send bitcoin to the identity. """

    capability = PAYMENT_DESTINATION

    async def get_payment_destination(self, sender_name: str, sender_handle: str, purpose: str,
                                      amount: int, sender_key: typing.Optional[PrivateKey] = None) -> bytes:
        """
        If sender_key is given it must belong to sender_handle and is used to sign the request.
        """
        url = self.identity.url_for(self.capability)
        request = PaymentDestinationRequest(
            sender_name=sender_name,
            sender_handle=sender_handle,
            dt=self.timestamp(),
            amount=amount,
            purpose=purpose,
        )
        request = get_signer(sender_key).sign_request(request)
        data = await self.exchange(url, request)
        try:
            script = PaymentDestinationResponse.from_dict(data).locking_script()
        except (FormatError, EmptyResultError) as e:
            log.warning("invalid payment destination from %s: %s", self.identity.handle, e)
            raise
        log.debug("received %i byte locking script from %s", len(script), self.identity.handle)
        return script


class PaymentRequestClient(PaymentClient):
    """ Gets a transaction template and the outputs the identity expects to be funded. """

    capability = PAYMENT_REQUEST

    async def get_payment_request(self, sender_name: str, sender_handle: str, purpose: str,
                                  asset_id: str, amount: int,
                                  sender_key: typing.Optional[PrivateKey] = None) -> PaymentRequest:
        """
        asset_id can be empty or "BSV" to request bitcoin.
        If sender_key is given it must belong to sender_handle and is used to sign the request.
        """
        url = self.identity.url_for(self.capability)
        request = PaymentRequestRequest(
            sender_name=sender_name,
            sender_handle=sender_handle,
            dt=self.timestamp(),
            amount=amount,
            purpose=purpose,
            asset_id=asset_id,
        )
        request = get_signer(sender_key).sign_request(request)
        data = await self.exchange(url, request)
        try:
            return PaymentRequestResponse.from_dict(data).decode()
        except FormatError as e:
            log.warning("invalid payment request from %s: %s", self.identity.handle, e)
            raise


async def get_payment_destination(identity: Identity, sender_name: str, sender_handle: str,
                                  purpose: str, amount: int, sender_key: PrivateKey = None,
                                  transport: Transport = None) -> bytes:
    client = PaymentDestinationClient(identity, transport)
    return await client.get_payment_destination(sender_name, sender_handle, purpose, amount, sender_key)


async def get_payment_request(identity: Identity, sender_name: str, sender_handle: str,
                              purpose: str, asset_id: str, amount: int, sender_key: PrivateKey = None,
                              transport: Transport = None) -> PaymentRequest:
    client = PaymentRequestClient(identity, transport)
    return await client.get_payment_request(
        sender_name, sender_handle, purpose, asset_id, amount, sender_key
    )
