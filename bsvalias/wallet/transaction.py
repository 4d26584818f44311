import logging
from binascii import hexlify, unhexlify
from typing import List, Iterable, Optional, Tuple

from bsvalias.error import SerializationError
from bsvalias.crypto.hash import double_sha256

from .bcd_data_stream import BCDataStream
from .script import pay_pubkey_hash, is_pay_pubkey_hash

log = logging.getLogger(__name__)

NULL_HASH32 = b'\x00'*32

# wire protocol and transaction format versions understood by the codec
PROTOCOL_VERSIONS = (1,)
TX_VERSIONS = (1, 2)


def _check_versions(protocol_version, tx_version):
    if protocol_version not in PROTOCOL_VERSIONS:
        raise SerializationError(f'unsupported protocol version {protocol_version}')
    if tx_version not in TX_VERSIONS:
        raise SerializationError(f'unsupported transaction version {tx_version}')


class InputOutput:

    __slots__ = ()

    @property
    def size(self) -> int:
        """ Size of this input / output in bytes. """
        stream = BCDataStream()
        self.serialize_to(stream)
        return len(stream.get_bytes())

    def serialize_to(self, stream):
        raise NotImplementedError

    def _fields(self) -> tuple:
        raise NotImplementedError

    def __eq__(self, other):
        if type(other) is not type(self):
            return NotImplemented
        return self._fields() == other._fields()

    def __hash__(self):
        return hash(self._fields())


class Input(InputOutput):

    __slots__ = 'txo_hash', 'txo_position', 'script', 'sequence'

    def __init__(self, txo_hash: bytes, txo_position: int, script: bytes = b'',
                 sequence: int = 0xFFFFFFFF) -> None:
        self.txo_hash = txo_hash
        self.txo_position = txo_position
        self.script = script
        self.sequence = sequence

    @property
    def txo_id(self):
        return f'{hexlify(self.txo_hash[::-1]).decode()}:{self.txo_position}'

    @property
    def is_coinbase(self):
        return self.txo_hash == NULL_HASH32

    @classmethod
    def deserialize_from(cls, stream: BCDataStream) -> 'Input':
        return cls(
            txo_hash=stream.read(32),
            txo_position=stream.read_uint32(),
            script=stream.read_string(),
            sequence=stream.read_uint32()
        )

    def serialize_to(self, stream):
        stream.write(self.txo_hash)
        stream.write_uint32(self.txo_position)
        stream.write_string(self.script)
        stream.write_uint32(self.sequence)

    def _fields(self):
        return self.txo_hash, self.txo_position, self.script, self.sequence

    def __repr__(self):
        return f'Input({self.txo_id})'


class Output(InputOutput):

    __slots__ = 'amount', 'script'

    def __init__(self, amount: int, script: bytes) -> None:
        self.amount = amount
        self.script = script

    @classmethod
    def pay_pubkey_hash(cls, amount, pubkey_hash):
        return cls(amount, pay_pubkey_hash(pubkey_hash))

    @property
    def is_pay_pubkey_hash(self):
        return is_pay_pubkey_hash(self.script)

    @classmethod
    def deserialize_from(cls, stream: BCDataStream, protocol_version: int = 1,
                         tx_version: int = 1) -> 'Output':
        _check_versions(protocol_version, tx_version)
        return cls(
            amount=stream.read_uint64(),
            script=stream.read_string()
        )

    @classmethod
    def from_bytes(cls, raw: bytes, protocol_version: int = 1, tx_version: int = 1) -> 'Output':
        """ Deserialize a standalone output, the whole buffer must be consumed. """
        stream = BCDataStream(raw)
        output = cls.deserialize_from(stream, protocol_version, tx_version)
        stream.ensure_consumed()
        return output

    def serialize_to(self, stream):
        stream.write_uint64(self.amount)
        stream.write_string(self.script)

    @property
    def raw(self) -> bytes:
        stream = BCDataStream()
        self.serialize_to(stream)
        return stream.get_bytes()

    def _fields(self):
        return self.amount, self.script

    def __repr__(self):
        return f'Output({self.amount}, {hexlify(self.script).decode()})'


class Transaction:
    """ Legacy (non-segwit) bitcoin transaction. A transaction with no inputs is allowed. """

    def __init__(self, raw: Optional[bytes] = None, version: int = 1, locktime: int = 0) -> None:
        self._raw = raw
        self._hash = None
        self.version = version
        self.locktime = locktime
        self._inputs: List[Input] = []
        self._outputs: List[Output] = []
        if raw is not None:
            self._deserialize()

    @classmethod
    def from_hex(cls, tx_hex: str) -> 'Transaction':
        return cls(unhexlify(tx_hex))

    @property
    def id(self):
        return hexlify(self.hash[::-1]).decode()

    @property
    def hash(self):
        if self._hash is None:
            self._hash = double_sha256(self.raw)
        return self._hash

    @property
    def raw(self):
        if self._raw is None:
            self._raw = self._serialize()
        return self._raw

    def _reset(self):
        self._raw = None
        self._hash = None

    @property
    def inputs(self) -> Tuple[Input, ...]:
        return tuple(self._inputs)

    @property
    def outputs(self) -> Tuple[Output, ...]:
        return tuple(self._outputs)

    def add_inputs(self, inputs: Iterable[Input]) -> 'Transaction':
        self._inputs.extend(inputs)
        self._reset()
        return self

    def add_outputs(self, outputs: Iterable[Output]) -> 'Transaction':
        self._outputs.extend(outputs)
        self._reset()
        return self

    @property
    def size(self) -> int:
        """ Size in bytes of the entire transaction. """
        return len(self.raw)

    @property
    def output_sum(self):
        return sum(o.amount for o in self._outputs)

    def _serialize(self) -> bytes:
        stream = BCDataStream()
        stream.write_uint32(self.version)
        stream.write_compact_size(len(self._inputs))
        for txin in self._inputs:
            txin.serialize_to(stream)
        stream.write_compact_size(len(self._outputs))
        for txout in self._outputs:
            txout.serialize_to(stream)
        stream.write_uint32(self.locktime)
        return stream.get_bytes()

    def _deserialize(self):
        stream = BCDataStream(self._raw)
        self.version = stream.read_uint32()
        input_count = stream.read_compact_size()
        self._inputs = [Input.deserialize_from(stream) for _ in range(input_count)]
        output_count = stream.read_compact_size()
        self._outputs = [Output.deserialize_from(stream) for _ in range(output_count)]
        self.locktime = stream.read_uint32()
        stream.ensure_consumed()
        log.debug("deserialized tx %s with %i inputs and %i outputs", self.id, input_count, output_count)

    def __eq__(self, other):
        if not isinstance(other, Transaction):
            return NotImplemented
        return (
            self.version == other.version and
            self.locktime == other.locktime and
            self._inputs == other._inputs and
            self._outputs == other._outputs
        )

    def __hash__(self):
        return hash(self.hash)

    def __repr__(self):
        return f'Transaction({self.id})'
