"""
Wire structures for the payment-destination and payment-request capabilities.

Requests serialize to the JSON bodies the identity service expects. Responses
are validated when they are built from JSON and decoded into binary structures
by a single fail-fast pass.
"""
import logging
from binascii import unhexlify
from dataclasses import dataclass, replace
from datetime import datetime, timezone
from typing import NamedTuple, Tuple

from bsvalias.error import (
    InvalidAmountError, MissingSenderHandleError, SerializationError,
    FormatError, MissingResponseFieldError, UnexpectedResponseFieldError, EmptyLockingScriptError
)
from bsvalias.wallet.transaction import Transaction, Output

log = logging.getLogger(__name__)

MAX_AMOUNT = 2**64 - 1
BASE_CURRENCY = 'BSV'

# Outputs in a payment-request response are serialized with protocol version 1
# of the wire format for version 1 transactions.
OUTPUT_PROTOCOL_VERSION = 1
OUTPUT_TX_VERSION = 1


def format_datetime(dt: datetime) -> str:
    """ RFC3339 in UTC with second precision, e.g. 2020-01-02T15:04:05Z """
    if dt.tzinfo is None:
        dt = dt.replace(tzinfo=timezone.utc)
    return dt.astimezone(timezone.utc).strftime('%Y-%m-%dT%H:%M:%SZ')


def _validate_sender(sender_handle, amount):
    if not sender_handle:
        raise MissingSenderHandleError()
    if isinstance(amount, bool) or not isinstance(amount, int) or not 0 <= amount <= MAX_AMOUNT:
        raise InvalidAmountError(amount)


@dataclass(frozen=True)
class PaymentDestinationRequest:
    sender_name: str
    sender_handle: str
    dt: str
    amount: int
    purpose: str = ''
    signature: str = ''

    def __post_init__(self):
        _validate_sender(self.sender_handle, self.amount)

    def signature_message(self) -> str:
        return self.sender_handle + self.dt + str(self.amount) + self.purpose

    def with_signature(self, signature: str):
        return replace(self, signature=signature)

    @property
    def is_signed(self) -> bool:
        return bool(self.signature)

    def to_dict(self) -> dict:
        return {
            'senderName': self.sender_name,
            'senderHandle': self.sender_handle,
            'dt': self.dt,
            'amount': self.amount,
            'purpose': self.purpose,
            'signature': self.signature,
        }


@dataclass(frozen=True)
class PaymentRequestRequest(PaymentDestinationRequest):
    """ asset_id is empty or BASE_CURRENCY to request bitcoin. """
    asset_id: str = ''

    def signature_message(self) -> str:
        return self.sender_handle + self.dt + self.asset_id + str(self.amount) + self.purpose

    def to_dict(self) -> dict:
        return {
            'senderName': self.sender_name,
            'senderHandle': self.sender_handle,
            'dt': self.dt,
            'assetID': self.asset_id,
            'amount': self.amount,
            'purpose': self.purpose,
            'signature': self.signature,
        }


def _check_fields(data, fields):
    if not isinstance(data, dict):
        raise FormatError('response', f'expected a JSON object, got {type(data).__name__}')
    for name, kind in fields.items():
        if not isinstance(data.get(name), kind):
            raise MissingResponseFieldError(name)
    unexpected = sorted(set(data) - set(fields))
    if unexpected:
        raise UnexpectedResponseFieldError(unexpected)


def _decode_hex(value: str, stage: str, position=None) -> bytes:
    try:
        return unhexlify(value)
    except ValueError as e:
        raise FormatError(stage, e, position) from e


class PaymentRequest(NamedTuple):
    tx: Transaction
    outputs: Tuple[Output, ...]


@dataclass(frozen=True)
class PaymentDestinationResponse:
    output: str

    @classmethod
    def from_dict(cls, data) -> 'PaymentDestinationResponse':
        _check_fields(data, {'output': str})
        return cls(data['output'])

    def locking_script(self) -> bytes:
        script = _decode_hex(self.output, 'parse script hex')
        if not script:
            raise EmptyLockingScriptError()
        return script


@dataclass(frozen=True)
class PaymentRequestResponse:
    payment_request: str
    outputs: Tuple[str, ...]

    @classmethod
    def from_dict(cls, data) -> 'PaymentRequestResponse':
        _check_fields(data, {'paymentRequest': str, 'outputs': list})
        if not all(isinstance(output, str) for output in data['outputs']):
            raise MissingResponseFieldError('outputs')
        return cls(data['paymentRequest'], tuple(data['outputs']))

    def decode_tx(self) -> Transaction:
        raw = _decode_hex(self.payment_request, 'parse tx hex')
        try:
            return Transaction(raw)
        except SerializationError as e:
            raise FormatError('deserialize tx', e) from e

    def decode_outputs(self) -> Tuple[Output, ...]:
        outputs = []
        for position, output_hex in enumerate(self.outputs):
            raw = _decode_hex(output_hex, 'parse output hex', position)
            try:
                output = Output.from_bytes(raw, OUTPUT_PROTOCOL_VERSION, OUTPUT_TX_VERSION)
            except SerializationError as e:
                raise FormatError('deserialize output', e, position) from e
            outputs.append(output)
        return tuple(outputs)

    def decode(self) -> PaymentRequest:
        tx = self.decode_tx()
        outputs = self.decode_outputs()
        log.debug("decoded payment request tx %s with %i funding outputs", tx.id, len(outputs))
        return PaymentRequest(tx, outputs)
