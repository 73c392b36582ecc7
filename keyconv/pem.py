import base64
import binascii
import re
from collections import namedtuple

from keyconv.errors import Base64Error, FramingError, UnexpectedLabel

EC_PRIVATE_KEY_LABEL = "EC PRIVATE KEY"
RSA_PRIVATE_KEY_LABEL = "RSA PRIVATE KEY"
PRIVATE_KEY_LABEL = "PRIVATE KEY"

LINE_WIDTH = 64

_BEGIN_RE = re.compile(r"-----BEGIN ([^\r\n-]*)-----")
_END_RE = re.compile(r"-----END ([^\r\n-]*)-----")

PemBlock = namedtuple("PemBlock", ["label", "body"])


def encode(label: str, data: bytes) -> str:
    b64 = base64.b64encode(data).decode("ascii")
    lines = [f"-----BEGIN {label}-----"]
    lines += [b64[i:i + LINE_WIDTH] for i in range(0, len(b64), LINE_WIDTH)]
    lines.append(f"-----END {label}-----")
    return "\n".join(lines) + "\n"


def decode(text, label=None) -> PemBlock:
    """Decode the single PEM block in ``text``.

    Text before the BEGIN line and after the END line is ignored. When
    ``label`` is given the block must carry exactly that label.
    """
    try:
        if isinstance(text, (bytes, bytearray)):
            text = bytes(text).decode("ascii")
        else:
            text.encode("ascii")
    except UnicodeError:
        raise FramingError("PEM data is not ASCII") from None

    begin = _BEGIN_RE.search(text)
    if begin is None:
        raise FramingError("No -----BEGIN ...----- line found")
    end = _END_RE.search(text, begin.end())
    if end is None:
        raise FramingError(f"No -----END {begin.group(1)}----- line found")

    body = text[begin.end():end.start()]
    if "-----" in body:
        raise FramingError("Nested or unterminated PEM block")
    if begin.group(1) != end.group(1):
        raise FramingError(f"BEGIN label {begin.group(1)!r} does not match END label {end.group(1)!r}")
    if _BEGIN_RE.search(text, end.end()):
        raise FramingError("More than one PEM block found")
    if ":" in body:
        # RFC 1421 headers, used by legacy encrypted keys
        raise FramingError("PEM headers are not supported (encrypted key?)")

    found = begin.group(1)
    if label is not None and found != label:
        raise UnexpectedLabel(f"Expected {label!r} PEM block, got {found!r}")

    try:
        der = base64.b64decode("".join(body.split()), validate=True)
    except binascii.Error as e:
        raise Base64Error(f"Invalid base64 in PEM body: {e}") from e
    return PemBlock(found, der)
