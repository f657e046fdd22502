# uhf_llrp/core/exceptions.py

"""Custom exceptions for the uhf_llrp library."""

from typing import Optional

from uhf_llrp.protocols.llrp import constants as llrp_const


def _hex_preview(data: bytes) -> str:
    return f"{data[:32].hex(' ').upper()}{'...' if len(data) > 32 else ''}"


class UhfLlrpError(Exception):
    """Base exception class for all uhf_llrp errors."""
    def __init__(self, message="An unspecified LLRP error occurred."):
        super().__init__(message)


# --- Transport Layer Exceptions ---

class TransportError(UhfLlrpError):
    """
    Base exception for errors related to the connection to the reader
    (TCP, Mock). It often wraps a lower-level exception.

    Besides the human readable message it carries the connection result code
    and, when the codec could pin the failure down, the LLRP type and field
    the error refers to.
    """
    def __init__(
        self,
        message="Transport layer error.",
        original_exception: Exception | None = None,
        result_code=None,
        ref_type: Optional[str] = None,
        ref_field: Optional[str] = None,
    ):
        """
        Args:
            message: A description of the transport error.
            original_exception: The underlying exception that caused this error (e.g. from asyncio streams).
            result_code: A ResultCode member describing the failure class.
            ref_type: Name of the message/parameter type the error refers to, if any.
            ref_field: Name of the field the error refers to, if any.
        """
        super().__init__(message)
        self.original_exception = original_exception
        self.result_code = result_code
        self.ref_type = ref_type
        self.ref_field = ref_field

    @property
    def reason(self) -> str:
        """The bare error text, without the wrapped exception."""
        return self.args[0] if self.args else ""

    def __str__(self):
        base_msg = super().__str__()
        if self.original_exception:
            orig_exc_type = type(self.original_exception).__name__
            orig_exc_msg = str(self.original_exception)
            return f"{base_msg} Original exception: [{orig_exc_type}] {orig_exc_msg}"
        return base_msg


class ConnectionError(TransportError):
    """
    Exception raised when establishing a connection fails.
    This is more specific than a general TransportError during an active connection.
    """
    def __init__(self, message="Failed to establish connection.", original_exception: Exception | None = None, result_code=None):
        super().__init__(message, original_exception, result_code=result_code)


class NetworkConnectionError(ConnectionError):
    """
    Connection error related to the TCP transport.
    Common reasons include:
    - Host unreachable (network configuration issue, firewall).
    - Connection refused (no LLRP service listening on the target port).
    - DNS resolution failed (invalid hostname).
    """
    def __init__(self, host: str | None = None, port: int | None = None, message="Network connection error.", original_exception: Exception | None = None):
        msg = "Network connection error"
        if host and port:
            msg += f" to {host}:{port}"
        elif host:
            msg += f" to host '{host}'"
        msg += f": {message}"
        super().__init__(msg, original_exception)
        self.host = host
        self.port = port


class ReadError(TransportError):
    """Exception raised when reading data from the connection fails unexpectedly."""
    def __init__(self, message="Failed to read data from transport.", original_exception: Exception | None = None, result_code=None):
        super().__init__(message, original_exception, result_code=result_code)


class WriteError(TransportError):
    """Exception raised when writing data to the connection fails unexpectedly."""
    def __init__(self, message="Failed to write data to transport.", original_exception: Exception | None = None, result_code=None):
        super().__init__(message, original_exception, result_code=result_code)


class TimeoutError(TransportError):
    """
    Exception raised when an expected message (a response or any inbound
    message) does not arrive within the allocated time.
    """
    def __init__(self, message="Operation timed out waiting for reader message.", result_code=None):
        super().__init__(message, original_exception=None, result_code=result_code)


# --- Protocol Layer Exceptions ---

class ProtocolError(UhfLlrpError):
    """Exception related to LLRP framing, encoding, decoding, or message flow."""
    def __init__(self, message="Protocol error.", ref_type: Optional[str] = None, ref_field: Optional[str] = None):
        super().__init__(message)
        self.ref_type = ref_type
        self.ref_field = ref_field
        self.result_code = None  # set by the connection when the error surfaces there


class FrameParseError(ProtocolError):
    """Exception raised when a message header or frame boundary is invalid."""
    def __init__(self, message="Failed to parse frame structure.", frame_part: bytes | None = None):
        msg = f"Frame parsing error: {message}"
        if frame_part:
            msg += f" Near bytes: {_hex_preview(frame_part)}"
        super().__init__(msg)
        self.frame_part = frame_part


class ParameterParseError(ProtocolError):
    """Exception raised while decoding LLRP parameters inside a message body."""
    def __init__(self, message="Failed to parse parameter.", data: bytes | None = None, ref_type: Optional[str] = None, ref_field: Optional[str] = None):
        msg = f"Parameter parsing error: {message}"
        if data:
            msg += f" Near bytes: {_hex_preview(data)}"
        super().__init__(msg, ref_type=ref_type, ref_field=ref_field)
        self.data = data


class EncodeError(ProtocolError):
    """Exception raised when a message or parameter cannot be encoded."""
    def __init__(self, message="Failed to encode message.", ref_type: Optional[str] = None, ref_field: Optional[str] = None):
        super().__init__(f"Encoding error: {message}", ref_type=ref_type, ref_field=ref_field)


class UnexpectedResponseError(ProtocolError):
    """
    Exception raised when the reader answers with a message other than the
    expected response, most often an ERROR_MESSAGE.
    """
    def __init__(self, message="Received unexpected response from reader.", expected: str | None = None, received=None):
        super().__init__(message)
        self.expected = expected
        self.received = received


# --- Command/Reader Logic Exceptions ---

class CommandError(UhfLlrpError):
    """
    Exception representing a failure status (LLRPStatus) reported by the
    reader in a response message.
    """
    def __init__(self, status_code: Optional[int] = None, description: Optional[str] = None, message: Optional[str] = None):
        self.status_code = status_code
        self.description = description

        final_message: str
        if message:
            final_message = message
        elif status_code is not None:
            try:
                code_name = llrp_const.StatusCode(status_code).name
            except ValueError:
                code_name = f"Unknown status code {status_code}"
            final_message = f"Reader Error ({code_name})"
            if description:
                final_message += f": {description}"
        else:
            final_message = "Command execution failed with unspecified error."

        super().__init__(final_message)


class MissingStatusError(CommandError):
    """A response message arrived without the mandatory LLRPStatus parameter."""
    def __init__(self, message: str = "Response is missing its LLRP status."):
        super().__init__(message=message)


class PrerequisiteNotMetError(UhfLlrpError):
    """The reader does not meet a requirement of the run (vendor, firmware, capabilities)."""


class RegistryError(UhfLlrpError):
    """Raised for type registry misuse such as registering a class that is not a Message or Parameter."""
