from collections import namedtuple

# Named curves by OID. size is the byte length of the curve order, which is
# also the width of the SEC1 private scalar.
Curve = namedtuple("Curve", ["name", "oid", "size"])

SECP192R1 = Curve("secp192r1", "1.2.840.10045.3.1.1", 24)
SECP224R1 = Curve("secp224r1", "1.3.132.0.33", 28)
SECP256R1 = Curve("secp256r1", "1.2.840.10045.3.1.7", 32)
SECP384R1 = Curve("secp384r1", "1.3.132.0.34", 48)
SECP521R1 = Curve("secp521r1", "1.3.132.0.35", 66)
SECP256K1 = Curve("secp256k1", "1.3.132.0.10", 32)
BRAINPOOLP256R1 = Curve("brainpoolP256r1", "1.3.36.3.3.2.8.1.1.7", 32)
BRAINPOOLP384R1 = Curve("brainpoolP384r1", "1.3.36.3.3.2.8.1.1.11", 48)
BRAINPOOLP512R1 = Curve("brainpoolP512r1", "1.3.36.3.3.2.8.1.1.13", 64)

CURVES = {c.oid: c for c in (
    SECP192R1, SECP224R1, SECP256R1, SECP384R1, SECP521R1, SECP256K1,
    BRAINPOOLP256R1, BRAINPOOLP384R1, BRAINPOOLP512R1,
)}


def lookup(oid):
    return CURVES.get(oid)
