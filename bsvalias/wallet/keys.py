""" secp256k1 keys used to authenticate the sender of a payment request. """
from binascii import hexlify, unhexlify

from coincurve import PublicKey as _PublicKey, PrivateKey as _PrivateKey

from bsvalias.error import InvalidPrivateKeyError
from bsvalias.crypto.base58 import Base58, Base58Error

WIF_PREFIXES = {
    b'\x80': 'mainnet',
    b'\xef': 'testnet',
}


class PublicKey:

    def __init__(self, pubkey):
        if isinstance(pubkey, _PublicKey):
            self.verifying_key = pubkey
        else:
            self.verifying_key = self._verifying_key_from_pubkey(pubkey)

    @classmethod
    def _verifying_key_from_pubkey(cls, pubkey):
        """ Converts a 33-byte compressed pubkey into a coincurve.PublicKey object. """
        if not isinstance(pubkey, (bytes, bytearray)):
            raise TypeError('pubkey must be raw bytes')
        if len(pubkey) != 33:
            raise ValueError('pubkey must be 33 bytes')
        if pubkey[0] not in (2, 3):
            raise ValueError('invalid pubkey prefix byte')
        return _PublicKey(bytes(pubkey))

    @property
    def pubkey_bytes(self):
        """ Return the compressed public key as 33 bytes. """
        return self.verifying_key.format(compressed=True)

    def __eq__(self, other):
        return isinstance(other, PublicKey) and self.pubkey_bytes == other.pubkey_bytes

    def __hash__(self):
        return hash(self.pubkey_bytes)

    def __str__(self):
        return hexlify(self.pubkey_bytes).decode()


class PrivateKey:

    def __init__(self, signing_key: _PrivateKey, network: str = 'mainnet'):
        self.signing_key = signing_key
        self.network = network

    @classmethod
    def generate(cls, network='mainnet'):
        return cls(_PrivateKey(), network)

    @classmethod
    def from_bytes(cls, private_key, network='mainnet'):
        if not isinstance(private_key, (bytes, bytearray)):
            raise InvalidPrivateKeyError('private key must be raw bytes')
        if len(private_key) != 32:
            raise InvalidPrivateKeyError('private key must be 32 bytes')
        try:
            return cls(_PrivateKey(bytes(private_key)), network)
        except ValueError as e:
            raise InvalidPrivateKeyError(str(e)) from e

    @classmethod
    def from_hex(cls, private_key_hex: str, network='mainnet'):
        try:
            raw = unhexlify(private_key_hex)
        except ValueError as e:
            raise InvalidPrivateKeyError('private key is not valid hex') from e
        return cls.from_bytes(raw, network)

    @classmethod
    def from_wif(cls, wif: str):
        """ Load a key from Wallet Import Format, compressed or not. """
        try:
            payload = Base58.decode_check(wif)
        except (Base58Error, TypeError) as e:
            raise InvalidPrivateKeyError(str(e)) from e
        network = WIF_PREFIXES.get(payload[:1])
        if network is None:
            raise InvalidPrivateKeyError('unknown WIF version byte')
        secret = payload[1:]
        if len(secret) == 33 and secret[-1] == 1:
            secret = secret[:-1]
        return cls.from_bytes(secret, network)

    @property
    def private_key_bytes(self):
        return self.signing_key.secret

    @property
    def public_key(self) -> PublicKey:
        return PublicKey(self.signing_key.public_key)

    def wif(self):
        """ Return the private key encoded in compressed Wallet Import Format. """
        prefix = next(k for k, v in WIF_PREFIXES.items() if v == self.network)
        return Base58.encode_check(prefix + self.private_key_bytes + b'\x01')

    def sign_digest(self, digest: bytes) -> bytes:
        """ Sign an already computed 32 byte digest, returns a DER encoded signature. """
        if len(digest) != 32:
            raise ValueError('digest must be 32 bytes')
        return self.signing_key.sign(digest, hasher=None)

    def __repr__(self):
        return f'PrivateKey({self.public_key})'
