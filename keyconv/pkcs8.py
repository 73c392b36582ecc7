"""PKCS#8 PrivateKeyInfo (RFC 5958).

  PrivateKeyInfo ::= SEQUENCE {
      version                   Version,
      privateKeyAlgorithm       AlgorithmIdentifier,
      privateKey                OCTET STRING,
      attributes           [0]  IMPLICIT Attributes OPTIONAL,
      ...,
      [[2: publicKey       [1]  IMPLICIT BIT STRING OPTIONAL ]],
      ...
  }

  AlgorithmIdentifier ::= SEQUENCE {
      algorithm       OBJECT IDENTIFIER,
      parameters      ANY DEFINED BY algorithm OPTIONAL
  }
"""

from collections import namedtuple

import keyconv.curves as curves
import keyconv.der as der
import keyconv.pem as pem
from keyconv.errors import (MalformedStructure, MissingCurveIdentifier,
                            UnsupportedCurve, UnsupportedVersion)

RSA_ENCRYPTION_OID = "1.2.840.113549.1.1.1"
EC_PUBLIC_KEY_OID = "1.2.840.10045.2.1"

PKCS8_VERSION_1 = 0
PKCS8_VERSION_2 = 1

# When True the curve OID is written into the embedded ECPrivateKey too,
# not only into the algorithm identifier
EC_INNER_PARAMETERS = False

ATTRIBUTES_TAG = der.context_tag(0)
PUBLIC_KEY_TAG = der.context_tag(1, constructed=False)


class AlgorithmIdentifier(namedtuple("AlgorithmIdentifier", ["oid", "parameters"])):
    __slots__ = ()

    def to_der(self):
        children = [der.write_object_identifier(self.oid)]
        if self.parameters is not None:
            children.append(self.parameters)
        return der.write_sequence(children)

    @classmethod
    def from_content(cls, content):
        children = der.read_sequence(content)
        if not 1 <= len(children) <= 2:
            raise MalformedStructure(f"AlgorithmIdentifier has {len(children)} fields, expected 1 or 2")
        oid = der.read_object_identifier(
            der.expect(children[0], der.TAG_OBJECT_IDENTIFIER, "AlgorithmIdentifier algorithm"))
        parameters = None
        if len(children) == 2:
            tag, value = children[1]
            parameters = der.write_tlv(tag, value)
        return cls(oid, parameters)

    @property
    def named_curve(self):
        if self.oid != EC_PUBLIC_KEY_OID or self.parameters is None:
            return None
        tag, content, _ = der.read_tlv(self.parameters)
        if tag != der.TAG_OBJECT_IDENTIFIER:
            return None
        return der.read_object_identifier(content)


def rsa_algorithm():
    return AlgorithmIdentifier(RSA_ENCRYPTION_OID, der.write_null())


def ec_algorithm(curve_oid):
    if curve_oid is None:
        raise MissingCurveIdentifier("EC key has no named curve for the algorithm identifier")
    if curves.lookup(curve_oid) is None:
        raise UnsupportedCurve(f"Named curve {curve_oid} is not supported")
    return AlgorithmIdentifier(EC_PUBLIC_KEY_OID, der.write_object_identifier(curve_oid))


class PrivateKeyInfo:
    version = None
    algorithm = None
    private_key = None
    attributes = None
    public_key = None

    def __init__(self, algorithm, private_key, version=PKCS8_VERSION_1, attributes=None, public_key=None):
        self.version = version
        self.algorithm = algorithm
        self.private_key = bytes(private_key)
        self.attributes = attributes
        self.public_key = public_key

    def __repr__(self):
        return f"PrivateKeyInfo(version={self.version}, algorithm={self.algorithm.oid})"

    @classmethod
    def from_rsa_key(cls, key):
        # The PKCS#1 bytes are carried as they came in
        payload = key.encoded if key.encoded is not None else key.to_der()
        return cls(rsa_algorithm(), payload)

    @classmethod
    def from_ec_key(cls, key, include_parameters=EC_INNER_PARAMETERS):
        algorithm = ec_algorithm(key.parameters)
        return cls(algorithm, key.to_der(include_parameters=include_parameters))

    def to_der(self):
        children = [
            der.write_integer(self.version),
            self.algorithm.to_der(),
            der.write_octet_string(self.private_key),
        ]
        if self.attributes is not None:
            children.append(der.write_tlv(ATTRIBUTES_TAG, self.attributes))
        if self.public_key is not None:
            children.append(der.write_tlv(PUBLIC_KEY_TAG, b'\x00' + self.public_key))
        return der.write_sequence(children)

    def to_pem(self):
        return pem.encode(pem.PRIVATE_KEY_LABEL, self.to_der())

    @classmethod
    def from_der(cls, data):
        der.check_structure(data)
        tag, content, _ = der.read_tlv(data)
        der.expect((tag, content), der.TAG_SEQUENCE, "PrivateKeyInfo")
        children = der.read_sequence(content)
        if len(children) < 3:
            raise MalformedStructure("PrivateKeyInfo needs version, algorithm and privateKey")

        version = der.read_integer(der.expect(children[0], der.TAG_INTEGER, "PrivateKeyInfo version"))
        if version not in (PKCS8_VERSION_1, PKCS8_VERSION_2):
            raise UnsupportedVersion(f"PrivateKeyInfo version {version} is not supported")
        algorithm = AlgorithmIdentifier.from_content(
            der.expect(children[1], der.TAG_SEQUENCE, "PrivateKeyInfo privateKeyAlgorithm"))
        private_key = der.expect(children[2], der.TAG_OCTET_STRING, "PrivateKeyInfo privateKey")

        attributes = None
        public_key = None
        last_tag = None
        for tag, field in children[3:]:
            if tag == ATTRIBUTES_TAG and last_tag is None:
                attributes = field
            elif tag == PUBLIC_KEY_TAG and version == PKCS8_VERSION_2 and last_tag != PUBLIC_KEY_TAG:
                public_key = der.read_bit_string(field)
            else:
                raise MalformedStructure(f"Unexpected, duplicate or misordered field {der.tag_name(tag)} in PrivateKeyInfo")
            last_tag = tag
        return cls(algorithm, private_key, version, attributes, public_key)
