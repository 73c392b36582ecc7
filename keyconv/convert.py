"""Convert SEC1 and PKCS#1 private keys in PEM form to PKCS#8 PEM."""

import logging

import keyconv.pem as pem
from keyconv.errors import (FramingError, KeyFormatError, Pkcs1DeserializeError,
                            Pkcs1SerializeError, Sec1DeserializeError,
                            Sec1SerializeError)
from keyconv.pkcs1 import RsaPrivateKey
from keyconv.pkcs8 import PrivateKeyInfo
from keyconv.sec1 import EcPrivateKey

logger = logging.getLogger(__name__)


def _convert_sec1(body):
    try:
        key = EcPrivateKey.from_der(body)
    except KeyFormatError as e:
        raise Sec1DeserializeError("failed to deserialize SEC1 private key from PEM", e) from e
    curve = key.curve
    logger.debug("Read SEC1 key on curve %s", curve.name if curve else key.parameters)

    try:
        return PrivateKeyInfo.from_ec_key(key).to_pem()
    except ValueError as e:
        raise Sec1SerializeError("failed to serialize private key to PKCS#8 PEM", e) from e


def _convert_pkcs1(body):
    try:
        key = RsaPrivateKey.from_der(body)
    except KeyFormatError as e:
        raise Pkcs1DeserializeError("failed to deserialize PKCS#1 private key from PEM", e) from e
    logger.debug("Read PKCS#1 key, version %d, %d bit modulus", key.version, key.modulus.bit_length())

    try:
        return PrivateKeyInfo.from_rsa_key(key).to_pem()
    except ValueError as e:
        raise Pkcs1SerializeError("failed to serialize private key to PKCS#8 PEM", e) from e


def from_sec1_pem(pem_data) -> str:
    """Convert an ``EC PRIVATE KEY`` PEM block to a ``PRIVATE KEY`` PEM block.

    Raises Sec1DeserializeError if the input cannot be read and
    Sec1SerializeError if the PKCS#8 structure cannot be produced.
    """
    try:
        block = pem.decode(pem_data, label=pem.EC_PRIVATE_KEY_LABEL)
    except KeyFormatError as e:
        raise Sec1DeserializeError("failed to deserialize SEC1 private key from PEM", e) from e
    return _convert_sec1(block.body)


def from_pkcs1_pem(pem_data) -> str:
    """Convert an ``RSA PRIVATE KEY`` PEM block to a ``PRIVATE KEY`` PEM block.

    Raises Pkcs1DeserializeError if the input cannot be read and
    Pkcs1SerializeError if the PKCS#8 structure cannot be produced.
    """
    try:
        block = pem.decode(pem_data, label=pem.RSA_PRIVATE_KEY_LABEL)
    except KeyFormatError as e:
        raise Pkcs1DeserializeError("failed to deserialize PKCS#1 private key from PEM", e) from e
    return _convert_pkcs1(block.body)


# Keyed by PEM label, each takes the decoded DER body
CONVERTERS = {
    pem.EC_PRIVATE_KEY_LABEL: _convert_sec1,
    pem.RSA_PRIVATE_KEY_LABEL: _convert_pkcs1,
}


def to_pkcs8_pem(pem_data) -> str:
    """Pick the converter from the PEM label and run it."""
    block = pem.decode(pem_data)
    if block.label not in CONVERTERS:
        raise FramingError(f"Cannot convert a {block.label!r} PEM block, expected one of {', '.join(CONVERTERS)}")
    logger.debug("Converting %s to PKCS#8", block.label)
    return CONVERTERS[block.label](block.body)
