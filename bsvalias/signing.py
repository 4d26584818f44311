"""
Sender authentication for payment requests.

The signature hash is the bitcoin signed message digest of the request's
canonical message. The digest is signed directly with the sender's key and
sent as hex encoded DER.
"""
import logging
from binascii import hexlify, unhexlify

import ecdsa
from ecdsa.der import UnexpectedDER
from ecdsa.util import sigdecode_der

from bsvalias.error import SigningError, SerializationError
from bsvalias.crypto.hash import double_sha256
from bsvalias.wallet.bcd_data_stream import BCDataStream
from bsvalias.wallet.keys import PrivateKey, PublicKey

log = logging.getLogger(__name__)

SIGNED_MESSAGE_MAGIC = b'Bitcoin Signed Message:\n'


def signature_hash_for_message(message: str) -> bytes:
    stream = BCDataStream()
    stream.write_string(SIGNED_MESSAGE_MAGIC)
    stream.write_string(message.encode('utf-8'))
    return double_sha256(stream.get_bytes())


class MessageSigner:

    def __init__(self, key: PrivateKey):
        self.key = key

    def sign(self, message: str) -> str:
        try:
            digest = signature_hash_for_message(message)
        except (ValueError, SerializationError) as e:
            raise SigningError('signature hash', e) from e
        try:
            signature = self.key.sign_digest(digest)
        except (ValueError, TypeError) as e:
            raise SigningError('sign', e) from e
        return hexlify(signature).decode()

    def sign_request(self, request):
        log.debug("signing request from %s", request.sender_handle)
        return request.with_signature(self.sign(request.signature_message()))


class UnsignedRequests:
    """ Passes requests through untouched, the counterparty sees an unauthenticated sender. """

    def sign_request(self, request):
        return request


UNSIGNED = UnsignedRequests()


def get_signer(key=None):
    if key is None:
        return UNSIGNED
    return MessageSigner(key)


def verify_signature(public_key: PublicKey, message: str, signature: str) -> bool:
    try:
        der = unhexlify(signature)
    except ValueError:
        return False
    verifying_key = ecdsa.VerifyingKey.from_string(public_key.pubkey_bytes, curve=ecdsa.SECP256k1)
    try:
        return verifying_key.verify_digest(
            der, signature_hash_for_message(message), sigdecode=sigdecode_der
        )
    except (ecdsa.BadSignatureError, UnexpectedDER):
        return False
