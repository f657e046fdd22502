# uhf_llrp/protocols/llrp/codec.py

"""
Low level LLRP parameter encoding helpers.

LLRP knows two parameter encodings:

* TLV: 16 bit header (6 reserved bits + 10 bit type) followed by a 16 bit
  length that includes the header itself.
* TV: one byte, high bit set, 7 bit type, followed by a value whose size is
  fixed by the type.

Vendor extensions are TLV parameters of type 1023 whose body starts with a
32 bit vendor id and a 32 bit subtype.
"""

import logging
import struct
from dataclasses import dataclass
from typing import Iterator, Optional, Tuple, List

from uhf_llrp.core.exceptions import ParameterParseError, EncodeError
from uhf_llrp.protocols.llrp import constants as llrp_const

logger = logging.getLogger(__name__)


@dataclass
class RawParameter:
    """One undecoded parameter as found in a message body."""
    param_type: int
    body: bytes
    raw: bytes
    is_tv: bool = False
    vendor: Optional[int] = None
    subtype: Optional[int] = None

    @property
    def key(self) -> Tuple[int, Optional[int], Optional[int]]:
        return self.param_type, self.vendor, self.subtype


# --- Building Functions ---

def encode_tlv(param_type: int, body: bytes) -> bytes:
    """Wraps body in a TLV header for the given parameter type."""
    if not (0 <= param_type <= llrp_const.TLV_TYPE_MASK):
        raise EncodeError(f"Invalid TLV parameter type {param_type}.")
    length = llrp_const.TLV_HEADER_LENGTH + len(body)
    if length > 0xFFFF:
        raise EncodeError(f"Parameter type {param_type} too long ({length} bytes).")
    return struct.pack(llrp_const.TLV_HEADER_FORMAT, param_type, length) + body


def encode_tv(param_type: int, value: bytes) -> bytes:
    """Builds a TV parameter. The value must have the size the type mandates."""
    expected = llrp_const.TV_VALUE_SIZES.get(param_type)
    if expected is None:
        raise EncodeError(f"Unknown TV parameter type {param_type}.")
    if len(value) != expected:
        raise EncodeError(f"TV parameter type {param_type} needs {expected} bytes, got {len(value)}.")
    return bytes([llrp_const.TV_FLAG | param_type]) + value


def encode_custom(vendor: int, subtype: int, body: bytes) -> bytes:
    """Builds a vendor custom parameter (TLV type 1023)."""
    header = struct.pack(llrp_const.CUSTOM_PARAMETER_HEADER_FORMAT, vendor, subtype)
    return encode_tlv(llrp_const.PARAM_CUSTOM, header + body)


def pack_utf8v(text: str) -> bytes:
    """u16 byte count followed by UTF-8 bytes."""
    data = text.encode('utf-8')
    return struct.pack('!H', len(data)) + data


def pack_u8v(data: bytes) -> bytes:
    return struct.pack('!H', len(data)) + bytes(data)


def pack_u16v(words: List[int]) -> bytes:
    """u16 word count followed by big-endian words."""
    return struct.pack(f'!H{len(words)}H', len(words), *words)


def pack_u1v(bit_count: int, data: bytes) -> bytes:
    """u16 bit count followed by the bytes that hold those bits."""
    needed = (bit_count + 7) // 8
    if len(data) < needed:
        raise EncodeError(f"Bit field of {bit_count} bits needs {needed} bytes, got {len(data)}.")
    return struct.pack('!H', bit_count) + bytes(data[:needed])


# --- Parsing Functions ---

def _need(data: bytes, offset: int, size: int, what: str) -> None:
    if len(data) < offset + size:
        raise ParameterParseError(
            f"Insufficient data for {what} (need {size} bytes at offset {offset}, have {max(len(data) - offset, 0)})",
            data=data[offset:],
            ref_field=what,
        )


def unpack_from(fmt: str, data: bytes, offset: int = 0, what: str = "field") -> tuple:
    """struct.unpack_from with the size check turned into ParameterParseError."""
    _need(data, offset, struct.calcsize(fmt), what)
    return struct.unpack_from(fmt, data, offset)


def unpack_utf8v(data: bytes, offset: int, what: str = "utf8v") -> Tuple[str, int]:
    (count,) = unpack_from('!H', data, offset, what)
    offset += 2
    _need(data, offset, count, what)
    text = bytes(data[offset:offset + count]).decode('utf-8', errors='replace')
    return text, offset + count


def unpack_u8v(data: bytes, offset: int, what: str = "u8v") -> Tuple[bytes, int]:
    (count,) = unpack_from('!H', data, offset, what)
    offset += 2
    _need(data, offset, count, what)
    return bytes(data[offset:offset + count]), offset + count


def unpack_u16v(data: bytes, offset: int, what: str = "u16v") -> Tuple[List[int], int]:
    (count,) = unpack_from('!H', data, offset, what)
    offset += 2
    words = list(unpack_from(f'!{count}H', data, offset, what))
    return words, offset + 2 * count


def unpack_u1v(data: bytes, offset: int, what: str = "u1v") -> Tuple[int, bytes, int]:
    (bit_count,) = unpack_from('!H', data, offset, what)
    offset += 2
    size = (bit_count + 7) // 8
    _need(data, offset, size, what)
    return bit_count, bytes(data[offset:offset + size]), offset + size


def iter_parameters(data: bytes) -> Iterator[RawParameter]:
    """
    Splits a sequence of encoded parameters.

    Yields:
        RawParameter for each TV or TLV parameter, in wire order.

    Raises:
        ParameterParseError: On truncated data, bad lengths or unknown TV types.
    """
    offset = 0
    data = bytes(data)
    while offset < len(data):
        first = data[offset]
        if first & llrp_const.TV_FLAG:
            tv_type = first & 0x7F
            size = llrp_const.TV_VALUE_SIZES.get(tv_type)
            if size is None:
                raise ParameterParseError(f"Unknown TV parameter type {tv_type} at offset {offset}", data=data[offset:])
            _need(data, offset + 1, size, f"TV parameter {tv_type}")
            body = data[offset + 1:offset + 1 + size]
            yield RawParameter(tv_type, body, data[offset:offset + 1 + size], is_tv=True)
            offset += 1 + size
            continue

        param_type, length = unpack_from(llrp_const.TLV_HEADER_FORMAT, data, offset, "TLV header")
        param_type &= llrp_const.TLV_TYPE_MASK
        if length < llrp_const.TLV_HEADER_LENGTH:
            raise ParameterParseError(f"TLV parameter type {param_type} declares invalid length {length}", data=data[offset:])
        if offset + length > len(data):
            raise ParameterParseError(
                f"Declared TLV length ({length}) of type {param_type} exceeds available data ({len(data) - offset} bytes)",
                data=data[offset:],
            )
        raw = data[offset:offset + length]
        body = raw[llrp_const.TLV_HEADER_LENGTH:]
        if param_type == llrp_const.PARAM_CUSTOM:
            vendor, subtype = unpack_from(llrp_const.CUSTOM_PARAMETER_HEADER_FORMAT, body, 0, "custom parameter header")
            yield RawParameter(param_type, body[8:], raw, vendor=vendor, subtype=subtype)
        else:
            yield RawParameter(param_type, body, raw)
        offset += length
