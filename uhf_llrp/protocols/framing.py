# uhf_llrp/protocols/framing.py

import logging
import struct
from typing import Tuple, Optional

from uhf_llrp.protocols.llrp import constants as llrp_const
from uhf_llrp.core.exceptions import FrameParseError, EncodeError

logger = logging.getLogger(__name__)


# --- Message Building ---

def build_message(message_type: int, message_id: int, payload: bytes = b'') -> bytes:
    """
    Constructs a complete LLRP message.

    Args:
        message_type: The 10 bit LLRP message type.
        message_id: The 32 bit message ID used to correlate responses.
        payload: The encoded message body (parameters, custom header, ...).

    Returns:
        The message bytes: 10 byte header followed by the payload.

    Raises:
        EncodeError: If input values are outside their valid ranges.
    """
    if not (0 <= message_type <= llrp_const.MESSAGE_TYPE_MASK):
        raise EncodeError(f"Invalid message_type: {message_type}. Must be between 0 and 1023.")
    if not (0 <= message_id <= 0xFFFFFFFF):
        raise EncodeError(f"Invalid message_id: {message_id}. Must fit in 32 bits.")

    total_length = llrp_const.MESSAGE_HEADER_LENGTH + len(payload)
    # ! = network order: rsvd(3) version(3) type(10), length(32), id(32)
    header = struct.pack(
        llrp_const.MESSAGE_HEADER_FORMAT,
        (llrp_const.LLRP_VERSION << 10) | message_type,
        total_length,
        message_id,
    )
    return header + payload


# --- Message Parsing ---

def parse_message_header(data: bytes) -> Tuple[int, int, int, int]:
    """
    Parses the 10 byte LLRP message header.

    Returns:
        (version, message_type, total_length, message_id)

    Raises:
        FrameParseError: If fewer than 10 bytes are given or the length is invalid.
    """
    if len(data) < llrp_const.MESSAGE_HEADER_LENGTH:
        raise FrameParseError(
            f"Data length {len(data)} is less than header length {llrp_const.MESSAGE_HEADER_LENGTH}.",
            frame_part=data,
        )
    type_word, total_length, message_id = struct.unpack_from(llrp_const.MESSAGE_HEADER_FORMAT, data, 0)
    version = (type_word >> 10) & 0x07
    message_type = type_word & llrp_const.MESSAGE_TYPE_MASK
    if total_length < llrp_const.MESSAGE_HEADER_LENGTH:
        raise FrameParseError(f"Declared message length {total_length} is shorter than the header.", frame_part=data)
    return version, message_type, total_length, message_id


def find_and_parse_message(buffer: bytearray, max_frame_size: int = llrp_const.DEFAULT_MAX_FRAME_SIZE) -> Optional[Tuple[int, int, bytes]]:
    """
    Extracts the next complete message from a receive buffer.

    LLRP has no resynchronisation marker, so a header that cannot be
    trusted leaves the stream unusable. In that case the buffer is cleared
    and FrameParseError is raised.

    Returns:
        (message_type, message_id, payload) with the consumed bytes removed
        from buffer, or None while the buffer holds only part of a message.
    """
    if len(buffer) < llrp_const.MESSAGE_HEADER_LENGTH:
        return None

    try:
        version, message_type, total_length, message_id = parse_message_header(bytes(buffer[:llrp_const.MESSAGE_HEADER_LENGTH]))
        if total_length > max_frame_size:
            raise FrameParseError(
                f"Declared message length {total_length} exceeds maximum frame size {max_frame_size}.",
                frame_part=bytes(buffer[:llrp_const.MESSAGE_HEADER_LENGTH]),
            )
    except FrameParseError:
        logger.error(f"Discarding {len(buffer)} buffered bytes after frame error.")
        buffer.clear()
        raise

    if version != llrp_const.LLRP_VERSION:
        logger.warning(f"Message type {message_type} uses LLRP version {version}, expected {llrp_const.LLRP_VERSION}.")

    if len(buffer) < total_length:
        return None

    payload = bytes(buffer[llrp_const.MESSAGE_HEADER_LENGTH:total_length])
    del buffer[:total_length]
    return message_type, message_id, payload
