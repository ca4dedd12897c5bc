"""Transport envelope for octet string ciphertexts and signatures.

Wraps the raw output of `encrypt` or `sign` in a small DER structure naming the scheme that produced it, then base64
encodes it so it can be copied around as text. Keys are never wrapped, only payloads.

Typical usage example:

    text = wrap(key.encrypt(b"Hi there!"), "encryption")
    key.decrypt(unwrap(text, "encryption"))
"""
# Copyright (c) 2025-present Tech. TTGames
# SPDX-License-Identifier: EPL-2.0
import base64
import binascii

from pyasn1 import error
from pyasn1.codec.der import decoder
from pyasn1.codec.der import encoder
from pyasn1.type import namedtype
from pyasn1.type import univ
from pyasn1_modules import rfc8017

from textrsa.errors import EnvelopeError
from textrsa.padding import BLOCK_SIZE

# No real OIDs exist for block-padded textbook RSA, so we extend the "baseline" rsaEncryption to branches 0 and 1
id_textrsa_encryption = rfc8017.rsaEncryption + (0,)
id_textrsa_signature = rfc8017.rsaEncryption + (1,)

ALGORITHMS = {
    "encryption": id_textrsa_encryption,
    "signature": id_textrsa_signature,
}


class RSAEnvelope(univ.Sequence):
    """Names the scheme alongside the payload it produced."""
    componentType = namedtype.NamedTypes(
        namedtype.NamedType("algorithm", rfc8017.AlgorithmIdentifier()),
        namedtype.NamedType("payload", univ.OctetString()),
    )


def wrap(payload: bytes, kind: str) -> str:
    """Packs a ciphertext or signature into a base64 encoded envelope.

    Args:
        payload: The octet string produced by `encrypt` or `sign`.
        kind: Either "encryption" or "signature".

    Returns:
        The envelope as ASCII text.

    Raises:
        ValueError: If `kind` is unknown.
    """
    if kind not in ALGORITHMS:
        raise ValueError(f"Unknown envelope kind: {kind}")
    algid = rfc8017.AlgorithmIdentifier()
    algid["algorithm"] = ALGORITHMS[kind]
    algid["parameters"] = encoder.encode(univ.Integer(BLOCK_SIZE))
    pld = RSAEnvelope()
    pld["algorithm"] = algid
    pld["payload"] = payload
    return base64.b64encode(encoder.encode(pld)).decode("ascii")


def unwrap(text: str, kind: str) -> bytes:
    """Unpacks a ciphertext or signature from its envelope.

    Args:
        text: The base64 encoded envelope.
        kind: The expected kind, either "encryption" or "signature".

    Returns:
        The wrapped octet string.

    Raises:
        ValueError: If `kind` is unknown.
        EnvelopeError: If the envelope is malformed or was made for another scheme.
    """
    if kind not in ALGORITHMS:
        raise ValueError(f"Unknown envelope kind: {kind}")
    try:
        raw = base64.b64decode(text.encode("ascii"), validate=True)
        pld, rest = decoder.decode(raw, asn1Spec=RSAEnvelope())
        if rest:
            raise EnvelopeError("Trailing data after envelope.")
        if pld["algorithm"]["algorithm"] != ALGORITHMS[kind]:
            raise EnvelopeError(f"Envelope does not carry a textbook RSA {kind}.")
        if not pld["algorithm"]["parameters"].hasValue():
            raise EnvelopeError("Envelope does not state its block size.")
        block, _ = decoder.decode(bytes(pld["algorithm"]["parameters"]), asn1Spec=univ.Integer())
    except (binascii.Error, UnicodeEncodeError, error.PyAsn1Error) as exc:
        raise EnvelopeError("Malformed envelope.") from exc
    if int(block) != BLOCK_SIZE:
        raise EnvelopeError(f"Unsupported block size {int(block)}.")
    return bytes(pld["payload"])
