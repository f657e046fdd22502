# uhf_llrp/protocols/llrp/messages.py

"""
Data classes representing the LLRP messages exchanged with the reader.

A message is identified on the wire by (type, vendor, subtype); vendor and
subtype are only set for custom messages (type 1023). Request messages name
the response they expect through RESPONSE_TYPE, so the connection can match
an inbound message to the pending transaction.
"""

import struct
from dataclasses import dataclass, field
from typing import ClassVar, Optional, List, Tuple

from uhf_llrp.core.exceptions import EncodeError
from uhf_llrp.protocols import framing
from uhf_llrp.protocols.llrp import codec
from uhf_llrp.protocols.llrp import constants as llrp_const
from uhf_llrp.protocols.llrp.parameters import (
    Parameter, LLRPStatus, GeneralDeviceCapabilities, ROSpec, AccessSpec,
    TagReportData, ReaderEventNotificationData, first_of, all_of, encode_all, to_enum,
)

TypeKey = Tuple[int, Optional[int], Optional[int]]


@dataclass
class Message:
    """Base class of all LLRP messages."""
    TYPE: ClassVar[int] = 0
    NAME: ClassVar[str] = "Message"
    VENDOR: ClassVar[Optional[int]] = None
    SUBTYPE: ClassVar[Optional[int]] = None
    RESPONSE_TYPE: ClassVar[Optional[TypeKey]] = None
    RESPONSE_NAME: ClassVar[Optional[str]] = None

    message_id: int = 0

    @classmethod
    def type_key(cls) -> TypeKey:
        return cls.TYPE, cls.VENDOR, cls.SUBTYPE

    @property
    def key(self) -> TypeKey:
        return self.type_key()

    @property
    def name(self) -> str:
        return self.NAME

    def encode_body(self) -> bytes:
        return b''

    def encode(self) -> bytes:
        """Encodes the complete message, header included."""
        try:
            body = self.encode_body()
        except struct.error as e:
            raise EncodeError(f"{self.NAME}: {e}", ref_type=self.NAME) from e
        if self.VENDOR is not None:
            body = struct.pack(llrp_const.CUSTOM_MESSAGE_HEADER_FORMAT, self.VENDOR, self.SUBTYPE) + body
        return framing.build_message(self.TYPE, self.message_id, body)

    @classmethod
    def decode_body(cls, message_id: int, body: bytes, registry) -> "Message":
        return cls(message_id=message_id)


@dataclass
class StatusResponse(Message):
    """Response that carries nothing but an LLRPStatus."""
    status: Optional[LLRPStatus] = None

    def encode_body(self) -> bytes:
        return encode_all(self.status)

    @classmethod
    def decode_body(cls, message_id, body, registry):
        return cls(message_id=message_id, status=first_of(registry.decode_parameters(body), LLRPStatus))


@dataclass
class UnknownMessage(Message):
    """Inbound message of a type the registry has no class for."""
    message_type: int = 0
    vendor: Optional[int] = None
    subtype: Optional[int] = None
    body: bytes = b''

    @property
    def key(self) -> TypeKey:
        return self.message_type, self.vendor, self.subtype

    @property
    def name(self) -> str:
        if self.vendor is not None:
            return f"CUSTOM_MESSAGE(vendor={self.vendor}, subtype={self.subtype})"
        return f"MESSAGE({self.message_type})"

    def encode(self) -> bytes:
        body = self.body
        if self.vendor is not None:
            body = struct.pack(llrp_const.CUSTOM_MESSAGE_HEADER_FORMAT, self.vendor, self.subtype or 0) + body
        return framing.build_message(self.message_type, self.message_id, body)


# --- Capabilities and Configuration ---

@dataclass
class GetReaderCapabilitiesResponse(Message):
    TYPE: ClassVar[int] = llrp_const.MSG_GET_READER_CAPABILITIES_RESPONSE
    NAME: ClassVar[str] = "GET_READER_CAPABILITIES_RESPONSE"
    status: Optional[LLRPStatus] = None
    general_device_capabilities: Optional[GeneralDeviceCapabilities] = None
    other_capabilities: List[Parameter] = field(default_factory=list)

    def encode_body(self) -> bytes:
        return encode_all(self.status, self.general_device_capabilities, self.other_capabilities)

    @classmethod
    def decode_body(cls, message_id, body, registry):
        children = registry.decode_parameters(body)
        return cls(
            message_id=message_id,
            status=first_of(children, LLRPStatus),
            general_device_capabilities=first_of(children, GeneralDeviceCapabilities),
            other_capabilities=[p for p in children if not isinstance(p, (LLRPStatus, GeneralDeviceCapabilities))],
        )


@dataclass
class GetReaderCapabilities(Message):
    TYPE: ClassVar[int] = llrp_const.MSG_GET_READER_CAPABILITIES
    NAME: ClassVar[str] = "GET_READER_CAPABILITIES"
    RESPONSE_TYPE: ClassVar[TypeKey] = GetReaderCapabilitiesResponse.type_key()
    RESPONSE_NAME: ClassVar[str] = GetReaderCapabilitiesResponse.NAME
    requested_data: int = llrp_const.GetReaderCapabilitiesRequestedData.All

    def encode_body(self) -> bytes:
        return struct.pack('!B', self.requested_data)

    @classmethod
    def decode_body(cls, message_id, body, registry):
        (requested,) = codec.unpack_from('!B', body, 0, "RequestedData")
        return cls(message_id=message_id,
                   requested_data=to_enum(llrp_const.GetReaderCapabilitiesRequestedData, requested))


@dataclass
class SetReaderConfigResponse(StatusResponse):
    TYPE: ClassVar[int] = llrp_const.MSG_SET_READER_CONFIG_RESPONSE
    NAME: ClassVar[str] = "SET_READER_CONFIG_RESPONSE"


@dataclass
class SetReaderConfig(Message):
    TYPE: ClassVar[int] = llrp_const.MSG_SET_READER_CONFIG
    NAME: ClassVar[str] = "SET_READER_CONFIG"
    RESPONSE_TYPE: ClassVar[TypeKey] = SetReaderConfigResponse.type_key()
    RESPONSE_NAME: ClassVar[str] = SetReaderConfigResponse.NAME
    reset_to_factory_default: bool = False
    parameters: List[Parameter] = field(default_factory=list)

    def encode_body(self) -> bytes:
        return struct.pack('!B', int(self.reset_to_factory_default) << 7) + encode_all(self.parameters)

    @classmethod
    def decode_body(cls, message_id, body, registry):
        (flags,) = codec.unpack_from('!B', body, 0, "ResetToFactoryDefault")
        return cls(message_id=message_id, reset_to_factory_default=bool(flags & 0x80),
                   parameters=registry.decode_parameters(body[1:]))


@dataclass
class CloseConnectionResponse(StatusResponse):
    TYPE: ClassVar[int] = llrp_const.MSG_CLOSE_CONNECTION_RESPONSE
    NAME: ClassVar[str] = "CLOSE_CONNECTION_RESPONSE"


@dataclass
class CloseConnection(Message):
    TYPE: ClassVar[int] = llrp_const.MSG_CLOSE_CONNECTION
    NAME: ClassVar[str] = "CLOSE_CONNECTION"
    RESPONSE_TYPE: ClassVar[TypeKey] = CloseConnectionResponse.type_key()
    RESPONSE_NAME: ClassVar[str] = CloseConnectionResponse.NAME


# --- ROSpec Management ---

@dataclass
class AddROSpecResponse(StatusResponse):
    TYPE: ClassVar[int] = llrp_const.MSG_ADD_ROSPEC_RESPONSE
    NAME: ClassVar[str] = "ADD_ROSPEC_RESPONSE"


@dataclass
class AddROSpec(Message):
    TYPE: ClassVar[int] = llrp_const.MSG_ADD_ROSPEC
    NAME: ClassVar[str] = "ADD_ROSPEC"
    RESPONSE_TYPE: ClassVar[TypeKey] = AddROSpecResponse.type_key()
    RESPONSE_NAME: ClassVar[str] = AddROSpecResponse.NAME
    ro_spec: ROSpec = field(default_factory=ROSpec)

    def encode_body(self) -> bytes:
        return self.ro_spec.encode()

    @classmethod
    def decode_body(cls, message_id, body, registry):
        return cls(message_id=message_id, ro_spec=first_of(registry.decode_parameters(body), ROSpec))


@dataclass
class _ROSpecIDMessage(Message):
    """Request whose only field is a u32 ROSpecID."""
    ro_spec_id: int = 0

    def encode_body(self) -> bytes:
        return struct.pack('!I', self.ro_spec_id)

    @classmethod
    def decode_body(cls, message_id, body, registry):
        (spec_id,) = codec.unpack_from('!I', body, 0, "ROSpecID")
        return cls(message_id=message_id, ro_spec_id=spec_id)


@dataclass
class DeleteROSpecResponse(StatusResponse):
    TYPE: ClassVar[int] = llrp_const.MSG_DELETE_ROSPEC_RESPONSE
    NAME: ClassVar[str] = "DELETE_ROSPEC_RESPONSE"


@dataclass
class DeleteROSpec(_ROSpecIDMessage):
    TYPE: ClassVar[int] = llrp_const.MSG_DELETE_ROSPEC
    NAME: ClassVar[str] = "DELETE_ROSPEC"
    RESPONSE_TYPE: ClassVar[TypeKey] = DeleteROSpecResponse.type_key()
    RESPONSE_NAME: ClassVar[str] = DeleteROSpecResponse.NAME


@dataclass
class StartROSpecResponse(StatusResponse):
    TYPE: ClassVar[int] = llrp_const.MSG_START_ROSPEC_RESPONSE
    NAME: ClassVar[str] = "START_ROSPEC_RESPONSE"


@dataclass
class StartROSpec(_ROSpecIDMessage):
    TYPE: ClassVar[int] = llrp_const.MSG_START_ROSPEC
    NAME: ClassVar[str] = "START_ROSPEC"
    RESPONSE_TYPE: ClassVar[TypeKey] = StartROSpecResponse.type_key()
    RESPONSE_NAME: ClassVar[str] = StartROSpecResponse.NAME


@dataclass
class StopROSpecResponse(StatusResponse):
    TYPE: ClassVar[int] = llrp_const.MSG_STOP_ROSPEC_RESPONSE
    NAME: ClassVar[str] = "STOP_ROSPEC_RESPONSE"


@dataclass
class StopROSpec(_ROSpecIDMessage):
    TYPE: ClassVar[int] = llrp_const.MSG_STOP_ROSPEC
    NAME: ClassVar[str] = "STOP_ROSPEC"
    RESPONSE_TYPE: ClassVar[TypeKey] = StopROSpecResponse.type_key()
    RESPONSE_NAME: ClassVar[str] = StopROSpecResponse.NAME


@dataclass
class EnableROSpecResponse(StatusResponse):
    TYPE: ClassVar[int] = llrp_const.MSG_ENABLE_ROSPEC_RESPONSE
    NAME: ClassVar[str] = "ENABLE_ROSPEC_RESPONSE"


@dataclass
class EnableROSpec(_ROSpecIDMessage):
    TYPE: ClassVar[int] = llrp_const.MSG_ENABLE_ROSPEC
    NAME: ClassVar[str] = "ENABLE_ROSPEC"
    RESPONSE_TYPE: ClassVar[TypeKey] = EnableROSpecResponse.type_key()
    RESPONSE_NAME: ClassVar[str] = EnableROSpecResponse.NAME


@dataclass
class DisableROSpecResponse(StatusResponse):
    TYPE: ClassVar[int] = llrp_const.MSG_DISABLE_ROSPEC_RESPONSE
    NAME: ClassVar[str] = "DISABLE_ROSPEC_RESPONSE"


@dataclass
class DisableROSpec(_ROSpecIDMessage):
    TYPE: ClassVar[int] = llrp_const.MSG_DISABLE_ROSPEC
    NAME: ClassVar[str] = "DISABLE_ROSPEC"
    RESPONSE_TYPE: ClassVar[TypeKey] = DisableROSpecResponse.type_key()
    RESPONSE_NAME: ClassVar[str] = DisableROSpecResponse.NAME


# --- AccessSpec Management ---

@dataclass
class AddAccessSpecResponse(StatusResponse):
    TYPE: ClassVar[int] = llrp_const.MSG_ADD_ACCESSSPEC_RESPONSE
    NAME: ClassVar[str] = "ADD_ACCESSSPEC_RESPONSE"


@dataclass
class AddAccessSpec(Message):
    TYPE: ClassVar[int] = llrp_const.MSG_ADD_ACCESSSPEC
    NAME: ClassVar[str] = "ADD_ACCESSSPEC"
    RESPONSE_TYPE: ClassVar[TypeKey] = AddAccessSpecResponse.type_key()
    RESPONSE_NAME: ClassVar[str] = AddAccessSpecResponse.NAME
    access_spec: AccessSpec = field(default_factory=AccessSpec)

    def encode_body(self) -> bytes:
        return self.access_spec.encode()

    @classmethod
    def decode_body(cls, message_id, body, registry):
        return cls(message_id=message_id, access_spec=first_of(registry.decode_parameters(body), AccessSpec))


@dataclass
class _AccessSpecIDMessage(Message):
    """Request whose only field is a u32 AccessSpecID."""
    access_spec_id: int = 0

    def encode_body(self) -> bytes:
        return struct.pack('!I', self.access_spec_id)

    @classmethod
    def decode_body(cls, message_id, body, registry):
        (spec_id,) = codec.unpack_from('!I', body, 0, "AccessSpecID")
        return cls(message_id=message_id, access_spec_id=spec_id)


@dataclass
class DeleteAccessSpecResponse(StatusResponse):
    TYPE: ClassVar[int] = llrp_const.MSG_DELETE_ACCESSSPEC_RESPONSE
    NAME: ClassVar[str] = "DELETE_ACCESSSPEC_RESPONSE"


@dataclass
class DeleteAccessSpec(_AccessSpecIDMessage):
    TYPE: ClassVar[int] = llrp_const.MSG_DELETE_ACCESSSPEC
    NAME: ClassVar[str] = "DELETE_ACCESSSPEC"
    RESPONSE_TYPE: ClassVar[TypeKey] = DeleteAccessSpecResponse.type_key()
    RESPONSE_NAME: ClassVar[str] = DeleteAccessSpecResponse.NAME


@dataclass
class EnableAccessSpecResponse(StatusResponse):
    TYPE: ClassVar[int] = llrp_const.MSG_ENABLE_ACCESSSPEC_RESPONSE
    NAME: ClassVar[str] = "ENABLE_ACCESSSPEC_RESPONSE"


@dataclass
class EnableAccessSpec(_AccessSpecIDMessage):
    TYPE: ClassVar[int] = llrp_const.MSG_ENABLE_ACCESSSPEC
    NAME: ClassVar[str] = "ENABLE_ACCESSSPEC"
    RESPONSE_TYPE: ClassVar[TypeKey] = EnableAccessSpecResponse.type_key()
    RESPONSE_NAME: ClassVar[str] = EnableAccessSpecResponse.NAME


@dataclass
class DisableAccessSpecResponse(StatusResponse):
    TYPE: ClassVar[int] = llrp_const.MSG_DISABLE_ACCESSSPEC_RESPONSE
    NAME: ClassVar[str] = "DISABLE_ACCESSSPEC_RESPONSE"


@dataclass
class DisableAccessSpec(_AccessSpecIDMessage):
    TYPE: ClassVar[int] = llrp_const.MSG_DISABLE_ACCESSSPEC
    NAME: ClassVar[str] = "DISABLE_ACCESSSPEC"
    RESPONSE_TYPE: ClassVar[TypeKey] = DisableAccessSpecResponse.type_key()
    RESPONSE_NAME: ClassVar[str] = DisableAccessSpecResponse.NAME


# --- Reports and Events ---

@dataclass
class GetReport(Message):
    TYPE: ClassVar[int] = llrp_const.MSG_GET_REPORT
    NAME: ClassVar[str] = "GET_REPORT"


@dataclass
class ROAccessReport(Message):
    TYPE: ClassVar[int] = llrp_const.MSG_RO_ACCESS_REPORT
    NAME: ClassVar[str] = "RO_ACCESS_REPORT"
    tag_report_data: List[TagReportData] = field(default_factory=list)
    other_parameters: List[Parameter] = field(default_factory=list)

    def encode_body(self) -> bytes:
        return encode_all(self.tag_report_data, self.other_parameters)

    @classmethod
    def decode_body(cls, message_id, body, registry):
        children = registry.decode_parameters(body)
        return cls(message_id=message_id,
                   tag_report_data=all_of(children, TagReportData),
                   other_parameters=[p for p in children if not isinstance(p, TagReportData)])


@dataclass
class Keepalive(Message):
    TYPE: ClassVar[int] = llrp_const.MSG_KEEPALIVE
    NAME: ClassVar[str] = "KEEPALIVE"


@dataclass
class KeepaliveAck(Message):
    TYPE: ClassVar[int] = llrp_const.MSG_KEEPALIVE_ACK
    NAME: ClassVar[str] = "KEEPALIVE_ACK"


@dataclass
class ReaderEventNotification(Message):
    TYPE: ClassVar[int] = llrp_const.MSG_READER_EVENT_NOTIFICATION
    NAME: ClassVar[str] = "READER_EVENT_NOTIFICATION"
    reader_event_notification_data: Optional[ReaderEventNotificationData] = None

    def encode_body(self) -> bytes:
        return encode_all(self.reader_event_notification_data)

    @classmethod
    def decode_body(cls, message_id, body, registry):
        children = registry.decode_parameters(body)
        return cls(message_id=message_id,
                   reader_event_notification_data=first_of(children, ReaderEventNotificationData))


@dataclass
class EnableEventsAndReports(Message):
    TYPE: ClassVar[int] = llrp_const.MSG_ENABLE_EVENTS_AND_REPORTS
    NAME: ClassVar[str] = "ENABLE_EVENTS_AND_REPORTS"


@dataclass
class ErrorMessage(StatusResponse):
    TYPE: ClassVar[int] = llrp_const.MSG_ERROR_MESSAGE
    NAME: ClassVar[str] = "ERROR_MESSAGE"


# --- Impinj Extensions ---

@dataclass
class ImpinjEnableExtensionsResponse(StatusResponse):
    TYPE: ClassVar[int] = llrp_const.MSG_CUSTOM_MESSAGE
    VENDOR: ClassVar[int] = llrp_const.VENDOR_IMPINJ
    SUBTYPE: ClassVar[int] = llrp_const.IMPINJ_ENABLE_EXTENSIONS_RESPONSE
    NAME: ClassVar[str] = "IMPINJ_ENABLE_EXTENSIONS_RESPONSE"


@dataclass
class ImpinjEnableExtensions(Message):
    TYPE: ClassVar[int] = llrp_const.MSG_CUSTOM_MESSAGE
    VENDOR: ClassVar[int] = llrp_const.VENDOR_IMPINJ
    SUBTYPE: ClassVar[int] = llrp_const.IMPINJ_ENABLE_EXTENSIONS
    NAME: ClassVar[str] = "IMPINJ_ENABLE_EXTENSIONS"
    RESPONSE_TYPE: ClassVar[TypeKey] = ImpinjEnableExtensionsResponse.type_key()
    RESPONSE_NAME: ClassVar[str] = ImpinjEnableExtensionsResponse.NAME

    def encode_body(self) -> bytes:
        return struct.pack('!I', 0)  # reserved


STANDARD_MESSAGES = (
    GetReaderCapabilities, GetReaderCapabilitiesResponse,
    SetReaderConfig, SetReaderConfigResponse,
    CloseConnection, CloseConnectionResponse,
    AddROSpec, AddROSpecResponse, DeleteROSpec, DeleteROSpecResponse,
    StartROSpec, StartROSpecResponse, StopROSpec, StopROSpecResponse,
    EnableROSpec, EnableROSpecResponse, DisableROSpec, DisableROSpecResponse,
    AddAccessSpec, AddAccessSpecResponse, DeleteAccessSpec, DeleteAccessSpecResponse,
    EnableAccessSpec, EnableAccessSpecResponse, DisableAccessSpec, DisableAccessSpecResponse,
    GetReport, ROAccessReport, Keepalive, KeepaliveAck,
    ReaderEventNotification, EnableEventsAndReports, ErrorMessage,
)

IMPINJ_MESSAGES = (
    ImpinjEnableExtensions, ImpinjEnableExtensionsResponse,
)
