import keyconv.der as der
from keyconv.errors import MalformedStructure, UnsupportedVersion

# RFC 8017
# RSAPrivateKey ::= SEQUENCE {
#     version           Version,
#     modulus           INTEGER,  -- n
#     publicExponent    INTEGER,  -- e
#     privateExponent   INTEGER,  -- d
#     prime1            INTEGER,  -- p
#     prime2            INTEGER,  -- q
#     exponent1         INTEGER,  -- d mod (p-1)
#     exponent2         INTEGER,  -- d mod (q-1)
#     coefficient       INTEGER,  -- (inverse of q) mod p
#     otherPrimeInfos   OtherPrimeInfos OPTIONAL
# }
#
# OtherPrimeInfo ::= SEQUENCE {
#     prime             INTEGER,  -- ri
#     exponent          INTEGER,  -- di
#     coefficient       INTEGER   -- ti
# }

RSA_VERSION_TWO_PRIME = 0
RSA_VERSION_MULTI_PRIME = 1

FIELDS = ("modulus", "public_exponent", "private_exponent", "prime1", "prime2",
          "exponent1", "exponent2", "coefficient")


class RsaPrivateKey:
    version = None
    modulus = None
    public_exponent = None
    private_exponent = None
    prime1 = None
    prime2 = None
    exponent1 = None
    exponent2 = None
    coefficient = None
    other_prime_infos = None
    encoded = None  # exact bytes this key was parsed from

    def __init__(self, version, modulus, public_exponent, private_exponent, prime1, prime2,
                 exponent1, exponent2, coefficient, other_prime_infos=None):
        self.version = version
        self.modulus = modulus
        self.public_exponent = public_exponent
        self.private_exponent = private_exponent
        self.prime1 = prime1
        self.prime2 = prime2
        self.exponent1 = exponent1
        self.exponent2 = exponent2
        self.coefficient = coefficient
        self.other_prime_infos = other_prime_infos

    def __repr__(self):
        return f"RsaPrivateKey(version={self.version}, bits={self.modulus.bit_length()})"

    @property
    def fields(self):
        return tuple(getattr(self, name) for name in FIELDS)

    @classmethod
    def from_der(cls, data):
        der.check_structure(data)
        tag, content, _ = der.read_tlv(data)
        der.expect((tag, content), der.TAG_SEQUENCE, "RSAPrivateKey")
        children = der.read_sequence(content)
        if not children:
            raise MalformedStructure("RSAPrivateKey is empty")

        version = der.read_integer(der.expect(children[0], der.TAG_INTEGER, "RSAPrivateKey version"))
        if version not in (RSA_VERSION_TWO_PRIME, RSA_VERSION_MULTI_PRIME):
            raise UnsupportedVersion(f"RSAPrivateKey version {version} is not supported")

        expected = 1 + len(FIELDS) + (1 if version == RSA_VERSION_MULTI_PRIME else 0)
        if len(children) != expected:
            if version == RSA_VERSION_MULTI_PRIME and len(children) == expected - 1:
                raise MalformedStructure("Multi-prime RSAPrivateKey is missing otherPrimeInfos")
            if version == RSA_VERSION_TWO_PRIME and len(children) == expected + 1:
                raise MalformedStructure("Two-prime RSAPrivateKey must not carry otherPrimeInfos")
            raise MalformedStructure(f"RSAPrivateKey has {len(children)} fields, expected {expected}")

        values = [der.read_integer(der.expect(child, der.TAG_INTEGER, f"RSAPrivateKey {name}"))
                  for name, child in zip(FIELDS, children[1:])]

        other_prime_infos = None
        if version == RSA_VERSION_MULTI_PRIME:
            other_prime_infos = cls._read_other_prime_infos(
                der.expect(children[-1], der.TAG_SEQUENCE, "RSAPrivateKey otherPrimeInfos"))

        key = cls(version, *values, other_prime_infos=other_prime_infos)
        key.encoded = bytes(data)
        return key

    @staticmethod
    def _read_other_prime_infos(content):
        infos = []
        for child in der.read_sequence(content):
            triple = der.read_sequence(der.expect(child, der.TAG_SEQUENCE, "OtherPrimeInfo"))
            if len(triple) != 3:
                raise MalformedStructure(f"OtherPrimeInfo has {len(triple)} fields, expected 3")
            infos.append(tuple(der.read_integer(der.expect(t, der.TAG_INTEGER, "OtherPrimeInfo"))
                               for t in triple))
        if not infos:
            raise MalformedStructure("otherPrimeInfos must not be empty")
        return infos

    def to_der(self):
        children = [der.write_integer(self.version)]
        children += [der.write_integer(v) for v in self.fields]
        if self.version == RSA_VERSION_MULTI_PRIME:
            children.append(der.write_sequence(
                [der.write_sequence([der.write_integer(v) for v in info])
                 for info in self.other_prime_infos or ()]))
        return der.write_sequence(children)
