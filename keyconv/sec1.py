import keyconv.curves as curves
import keyconv.der as der
from keyconv.errors import (MalformedStructure, MissingCurveIdentifier,
                            UnsupportedVersion)

# RFC 5915
# ECPrivateKey ::= SEQUENCE {
#   version        INTEGER { ecPrivkeyVer1(1) } (ecPrivkeyVer1),
#   privateKey     OCTET STRING,
#   parameters [0] ECParameters {{ NamedCurve }} OPTIONAL,
#   publicKey  [1] BIT STRING OPTIONAL
# }

EC_PRIVATE_KEY_VERSION = 1

PARAMETERS_TAG = der.context_tag(0)
PUBLIC_KEY_TAG = der.context_tag(1)


class EcPrivateKey:
    version = None
    private_key = None
    parameters = None
    public_key = None

    def __init__(self, private_key, parameters=None, public_key=None, version=EC_PRIVATE_KEY_VERSION):
        self.version = version
        self.private_key = bytes(private_key)
        self.parameters = parameters
        self.public_key = None if public_key is None else bytes(public_key)

    def __repr__(self):
        return f"EcPrivateKey(curve={self.parameters!r}, public_key={self.public_key is not None})"

    @property
    def curve(self):
        return curves.lookup(self.parameters)

    @classmethod
    def from_der(cls, data, require_curve=True):
        der.check_structure(data)
        tag, content, _ = der.read_tlv(data)
        der.expect((tag, content), der.TAG_SEQUENCE, "ECPrivateKey")
        children = der.read_sequence(content)
        if len(children) < 2:
            raise MalformedStructure("ECPrivateKey needs at least version and privateKey")

        version = der.read_integer(der.expect(children[0], der.TAG_INTEGER, "ECPrivateKey version"))
        if version != EC_PRIVATE_KEY_VERSION:
            raise UnsupportedVersion(f"ECPrivateKey version {version}, expected {EC_PRIVATE_KEY_VERSION}")
        private_key = der.expect(children[1], der.TAG_OCTET_STRING, "ECPrivateKey privateKey")
        if not private_key:
            raise MalformedStructure("ECPrivateKey privateKey is empty")

        parameters = None
        public_key = None
        last_tag = None
        for tag, field in children[2:]:
            # [0] then [1], each at most once
            if tag == PARAMETERS_TAG and last_tag is None:
                parameters = cls._read_parameters(field)
            elif tag == PUBLIC_KEY_TAG and last_tag != PUBLIC_KEY_TAG:
                public_key = der.read_bit_string(
                    der.expect(der.read_single(field), der.TAG_BIT_STRING, "ECPrivateKey publicKey"))
            else:
                raise MalformedStructure(f"Unexpected, duplicate or misordered field {der.tag_name(tag)} in ECPrivateKey")
            last_tag = tag

        if parameters is None and require_curve:
            raise MissingCurveIdentifier("ECPrivateKey has no named curve parameters")

        curve = curves.lookup(parameters)
        if curve is not None and len(private_key) != curve.size:
            raise MalformedStructure(
                f"{curve.name} private key must be {curve.size} bytes, got {len(private_key)}")
        return cls(private_key, parameters, public_key, version)

    @staticmethod
    def _read_parameters(field):
        # ECParameters ::= CHOICE { namedCurve, implicitCurve, specifiedCurve }
        tag, content = der.read_single(field)
        if tag == der.TAG_OBJECT_IDENTIFIER:
            return der.read_object_identifier(content)
        if tag in (der.TAG_NULL, der.TAG_SEQUENCE):
            raise MissingCurveIdentifier("ECPrivateKey parameters are not a named curve")
        raise MalformedStructure(f"Unexpected {der.tag_name(tag)} in ECPrivateKey parameters")

    def to_der(self, include_parameters=True):
        children = [
            der.write_integer(self.version),
            der.write_octet_string(self.private_key),
        ]
        if include_parameters and self.parameters is not None:
            children.append(der.write_explicit(0, der.write_object_identifier(self.parameters)))
        if self.public_key is not None:
            children.append(der.write_explicit(1, der.write_bit_string(self.public_key)))
        return der.write_sequence(children)
