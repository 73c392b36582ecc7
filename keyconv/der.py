"""Minimal ASN.1 DER reader/writer.

Only the universal types needed for key containers are handled: SEQUENCE,
INTEGER, OCTET STRING, BIT STRING, OBJECT IDENTIFIER and NULL, plus
context-specific tags. Readers work on ``bytes`` and return plain Python
values; writers return complete TLV encodings.
"""

from keyconv.errors import (ExcessiveNesting, MalformedStructure,
                            NonMinimalLength, TruncatedInput)

TAG_INTEGER = 0x02
TAG_BIT_STRING = 0x03
TAG_OCTET_STRING = 0x04
TAG_NULL = 0x05
TAG_OBJECT_IDENTIFIER = 0x06
TAG_SEQUENCE = 0x30

CLASS_CONTEXT = 0x80
CONSTRUCTED = 0x20

# Deepest nesting of constructed values we are willing to walk
MAX_DEPTH = 16

# Lengths beyond 4 length octets are never seen in key material
MAX_LENGTH_OCTETS = 4

_TAG_NAMES = {
    TAG_INTEGER: "INTEGER",
    TAG_BIT_STRING: "BIT STRING",
    TAG_OCTET_STRING: "OCTET STRING",
    TAG_NULL: "NULL",
    TAG_OBJECT_IDENTIFIER: "OBJECT IDENTIFIER",
    TAG_SEQUENCE: "SEQUENCE",
}


def tag_name(tag):
    if tag in _TAG_NAMES:
        return _TAG_NAMES[tag]
    if tag & 0xC0 == CLASS_CONTEXT:
        return f"[{tag & 0x1F}]"
    return f"tag {tag:#04x}"


def context_tag(number, constructed=True):
    tag = CLASS_CONTEXT | number
    if constructed:
        tag |= CONSTRUCTED
    return tag


def _read_length(data, offset):
    if offset >= len(data):
        raise TruncatedInput("Missing length octet")
    first = data[offset]
    if first < 0x80:
        return first, offset + 1
    n = first & 0x7F
    if n == 0:
        raise MalformedStructure("Indefinite length is not allowed in DER")
    if n > MAX_LENGTH_OCTETS:
        raise MalformedStructure(f"Length uses {n} octets, at most {MAX_LENGTH_OCTETS} supported")
    if offset + 1 + n > len(data):
        raise TruncatedInput("Ran out of length octets")
    length_bytes = data[offset + 1:offset + 1 + n]
    length = int.from_bytes(length_bytes, "big")
    # Long form must not start with a zero octet and must not encode a
    # value that fits the short form
    if length_bytes[0] == 0 or length < 0x80:
        raise NonMinimalLength(f"Length {length} is not minimally encoded")
    return length, offset + 1 + n


def read_tlv(data, offset=0):
    """Read one element starting at ``offset``.

    Returns ``(tag, content, next_offset)``.
    """
    if offset >= len(data):
        raise TruncatedInput("Expected a DER element, got end of input")
    tag = data[offset]
    if tag & 0x1F == 0x1F:
        raise MalformedStructure("High tag number form is not supported")
    length, pos = _read_length(data, offset + 1)
    end = pos + length
    if end > len(data):
        raise TruncatedInput(f"{tag_name(tag)} declares {length} bytes, only {len(data) - pos} available")
    return tag, bytes(data[pos:end]), end


def read_sequence(content):
    """Split the content of a constructed value into ``(tag, content)`` children."""
    children = []
    pos = 0
    while pos < len(content):
        tag, child, pos = read_tlv(content, pos)
        children.append((tag, child))
    return children


def read_single(content):
    # EXPLICIT tagging wraps exactly one element
    tag, child, end = read_tlv(content)
    if end != len(content):
        raise MalformedStructure("Trailing data inside explicitly tagged value")
    return tag, child


def expect(element, tag, what):
    if element[0] != tag:
        raise MalformedStructure(f"{what}: expected {tag_name(tag)}, got {tag_name(element[0])}")
    return element[1]


def read_integer(content):
    if not content:
        raise MalformedStructure("INTEGER has no content")
    if content[0] & 0x80:
        raise MalformedStructure("Negative INTEGER where a non-negative value is required")
    if len(content) > 1 and content[0] == 0 and not content[1] & 0x80:
        raise MalformedStructure("INTEGER has a superfluous leading zero")
    return int.from_bytes(content, "big")


def read_object_identifier(content):
    if not content:
        raise MalformedStructure("OBJECT IDENTIFIER has no content")
    numbers = []
    value = 0
    started = False
    for b in content:
        if not started and b == 0x80:
            raise MalformedStructure("OBJECT IDENTIFIER arc is not minimally encoded")
        started = True
        value = (value << 7) | (b & 0x7F)
        if not b & 0x80:
            numbers.append(value)
            value = 0
            started = False
    if started:
        raise MalformedStructure("OBJECT IDENTIFIER ends inside an arc")
    first = numbers.pop(0)
    if first < 40:
        arcs = [0, first]
    elif first < 80:
        arcs = [1, first - 40]
    else:
        arcs = [2, first - 80]
    return ".".join(str(n) for n in arcs + numbers)


def read_bit_string(content):
    if not content:
        raise MalformedStructure("BIT STRING is empty")
    if content[0] != 0:
        raise MalformedStructure("BIT STRING has unused bits (only 0 is supported)")
    return content[1:]


def read_null(content):
    if content:
        raise MalformedStructure("NULL must have no content")
    return None


def check_structure(data, max_depth=MAX_DEPTH):
    """Verify that ``data`` is exactly one well-formed DER element.

    Every constructed value is walked so that lengths are checked at each
    level of nesting, and the depth is bounded by ``max_depth``.
    """
    _, _, end = _check_element(data, 0, 1, max_depth)
    if end != len(data):
        raise MalformedStructure(f"{len(data) - end} bytes of trailing data after DER element")


def _check_element(data, offset, depth, max_depth):
    if depth > max_depth:
        raise ExcessiveNesting(f"DER nesting deeper than {max_depth} levels")
    tag, content, end = read_tlv(data, offset)
    if tag & CONSTRUCTED:
        pos = 0
        while pos < len(content):
            _, _, pos = _check_element(content, pos, depth + 1, max_depth)
    return tag, content, end


def write_length(length):
    if length < 0:
        raise ValueError("Length must not be negative")
    if length < 0x80:
        return bytes([length])
    l_bytes = length.to_bytes((length.bit_length() + 7) // 8, "big")
    return bytes([0x80 | len(l_bytes)]) + l_bytes


def write_tlv(tag, content):
    return bytes([tag]) + write_length(len(content)) + bytes(content)


def write_integer(n):
    if n < 0:
        raise ValueError("Only non-negative INTEGERs are supported")
    b = n.to_bytes((n.bit_length() + 7) // 8 or 1, "big")
    if b[0] & 0x80:
        b = b'\x00' + b  # Ensure positive
    return write_tlv(TAG_INTEGER, b)


def write_sequence(children):
    return write_tlv(TAG_SEQUENCE, b''.join(children))


def write_octet_string(data):
    return write_tlv(TAG_OCTET_STRING, data)


def write_bit_string(data):
    # Prepend unused bits byte (0)
    return write_tlv(TAG_BIT_STRING, b'\x00' + bytes(data))


def write_null():
    return write_tlv(TAG_NULL, b'')


def _encode_arc(num):
    parts = [num & 0x7F]
    num >>= 7
    while num:
        parts.insert(0, (num & 0x7F) | 0x80)
        num >>= 7
    return parts


def write_object_identifier(oid):
    if isinstance(oid, str):
        try:
            arcs = [int(part) for part in oid.split(".")]
        except ValueError:
            raise ValueError(f"Invalid OBJECT IDENTIFIER {oid!r}") from None
    else:
        arcs = list(oid)
    if len(arcs) < 2:
        raise ValueError("OID must have at least two components")
    if any(arc < 0 for arc in arcs) or arcs[0] > 2 or (arcs[0] < 2 and arcs[1] >= 40):
        raise ValueError(f"Invalid OBJECT IDENTIFIER {oid!r}")
    encoded = _encode_arc(40 * arcs[0] + arcs[1])
    for num in arcs[2:]:
        encoded.extend(_encode_arc(num))
    return write_tlv(TAG_OBJECT_IDENTIFIER, bytes(encoded))


def write_explicit(number, encoded):
    return write_tlv(context_tag(number), encoded)
