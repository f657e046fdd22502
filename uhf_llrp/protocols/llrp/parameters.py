# uhf_llrp/protocols/llrp/parameters.py

"""
Data classes representing the LLRP parameters used by this library,
including the Impinj vendor extensions.

Every parameter knows how to encode its body and how to decode itself from
a body. Sub-parameters are decoded through the TypeRegistry passed to
decode_body, so vendor parameters enrolled at runtime are recognised inside
standard containers.
"""

import struct
from dataclasses import dataclass, field
from typing import ClassVar, Optional, List, Any, Type, TypeVar

from uhf_llrp.core.exceptions import EncodeError, ParameterParseError
from uhf_llrp.protocols.llrp import codec
from uhf_llrp.protocols.llrp import constants as llrp_const

P = TypeVar('P', bound='Parameter')


def to_enum(enum_cls, value: int):
    """Returns the enum member for value, or the raw int when it is not defined."""
    try:
        return enum_cls(value)
    except ValueError:
        return value


def first_of(params: List[Any], cls: Type[P]) -> Optional[P]:
    return next((p for p in params if isinstance(p, cls)), None)


def all_of(params: List[Any], *classes) -> list:
    return [p for p in params if isinstance(p, classes)]


def encode_all(*items) -> bytes:
    """Concatenates the encoding of parameters and parameter lists, skipping None."""
    out = bytearray()
    for item in items:
        if item is None:
            continue
        if isinstance(item, (list, tuple)):
            for sub in item:
                out += sub.encode()
        else:
            out += item.encode()
    return bytes(out)


@dataclass
class Parameter:
    """Base class of all LLRP parameters."""
    TYPE: ClassVar[int] = 0
    NAME: ClassVar[str] = "Parameter"
    VENDOR: ClassVar[Optional[int]] = None
    SUBTYPE: ClassVar[Optional[int]] = None
    TV: ClassVar[bool] = False

    @classmethod
    def type_key(cls):
        return cls.TYPE, cls.VENDOR, cls.SUBTYPE

    @property
    def name(self) -> str:
        return self.NAME

    def encode_body(self) -> bytes:
        raise EncodeError(f"{self.NAME} cannot be encoded", ref_type=self.NAME)

    def encode(self) -> bytes:
        """Encodes the parameter including its TLV/TV/custom header."""
        try:
            body = self.encode_body()
        except struct.error as e:
            raise EncodeError(f"{self.NAME}: {e}", ref_type=self.NAME) from e
        if self.TV:
            return codec.encode_tv(self.TYPE, body)
        if self.VENDOR is not None:
            return codec.encode_custom(self.VENDOR, self.SUBTYPE, body)
        return codec.encode_tlv(self.TYPE, body)

    @classmethod
    def decode_body(cls, body: bytes, registry) -> "Parameter":
        raise ParameterParseError(f"{cls.NAME} cannot be decoded", data=body, ref_type=cls.NAME)


class CustomParameter(Parameter):
    """Marker base for vendor extension parameters (TLV type 1023)."""
    TYPE: ClassVar[int] = llrp_const.PARAM_CUSTOM


@dataclass
class UnknownParameter(Parameter):
    """A parameter the registry has no class for. Body is kept undecoded."""
    param_type: int = 0
    vendor: Optional[int] = None
    subtype: Optional[int] = None
    body: bytes = b''

    @property
    def name(self) -> str:
        if self.vendor is not None:
            return f"Custom(vendor={self.vendor}, subtype={self.subtype})"
        return f"Parameter({self.param_type})"

    def encode(self) -> bytes:
        if self.vendor is not None:
            return codec.encode_custom(self.vendor, self.subtype or 0, self.body)
        return codec.encode_tlv(self.param_type, self.body)


TV_NAMES = {
    llrp_const.TV_ANTENNA_ID: "AntennaID",
    llrp_const.TV_FIRST_SEEN_UTC: "FirstSeenTimestampUTC",
    llrp_const.TV_FIRST_SEEN_UPTIME: "FirstSeenTimestampUptime",
    llrp_const.TV_LAST_SEEN_UTC: "LastSeenTimestampUTC",
    llrp_const.TV_LAST_SEEN_UPTIME: "LastSeenTimestampUptime",
    llrp_const.TV_PEAK_RSSI: "PeakRSSI",
    llrp_const.TV_CHANNEL_INDEX: "ChannelIndex",
    llrp_const.TV_TAG_SEEN_COUNT: "TagSeenCount",
    llrp_const.TV_ROSPEC_ID: "ROSpecID",
    llrp_const.TV_INVENTORY_PARAMETER_SPEC_ID: "InventoryParameterSpecID",
    llrp_const.TV_C1G2_CRC: "C1G2_CRC",
    llrp_const.TV_C1G2_PC: "C1G2_PC",
    llrp_const.TV_EPC_96: "EPC_96",
    llrp_const.TV_SPEC_INDEX: "SpecIndex",
    llrp_const.TV_CLIENT_REQUEST_OP_SPEC_RESULT: "ClientRequestOpSpecResult",
    llrp_const.TV_ACCESS_SPEC_ID: "AccessSpecID",
    llrp_const.TV_OP_SPEC_ID: "OpSpecID",
    llrp_const.TV_C1G2_SINGULATION_DETAILS: "C1G2SingulationDetails",
    llrp_const.TV_C1G2_XPC_W1: "C1G2XPCW1",
    llrp_const.TV_C1G2_XPC_W2: "C1G2XPCW2",
}

_TV_STRUCT = {1: '!B', 2: '!H', 4: '!I', 8: '!Q'}


@dataclass
class TVField(Parameter):
    """A fixed size TV parameter holding a single integer value."""
    tv_type: int = 0
    value: int = 0

    @property
    def name(self) -> str:
        return TV_NAMES.get(self.tv_type, f"TV({self.tv_type})")

    def _fmt(self) -> str:
        size = llrp_const.TV_VALUE_SIZES[self.tv_type]
        fmt = _TV_STRUCT[size]
        if self.tv_type == llrp_const.TV_PEAK_RSSI:
            fmt = '!b'
        return fmt

    def encode(self) -> bytes:
        if self.tv_type not in llrp_const.TV_VALUE_SIZES or self.tv_type == llrp_const.TV_EPC_96:
            raise EncodeError(f"TV type {self.tv_type} is not an integer field", ref_type=self.name)
        try:
            return codec.encode_tv(self.tv_type, struct.pack(self._fmt(), self.value))
        except struct.error as e:
            raise EncodeError(f"{self.name}: {e}", ref_type=self.name, ref_field="value") from e

    @classmethod
    def from_tv(cls, tv_type: int, body: bytes) -> "TVField":
        inst = cls(tv_type=tv_type)
        (inst.value,) = struct.unpack(inst._fmt(), body)
        return inst


# --- Timestamps and Status ---

@dataclass
class UTCTimestamp(Parameter):
    TYPE: ClassVar[int] = llrp_const.PARAM_UTC_TIMESTAMP
    NAME: ClassVar[str] = "UTCTimestamp"
    microseconds: int = 0

    def encode_body(self) -> bytes:
        return struct.pack('!Q', self.microseconds)

    @classmethod
    def decode_body(cls, body, registry):
        (value,) = codec.unpack_from('!Q', body, 0, "Microseconds")
        return cls(microseconds=value)


@dataclass
class Uptime(UTCTimestamp):
    TYPE: ClassVar[int] = llrp_const.PARAM_UPTIME
    NAME: ClassVar[str] = "Uptime"


@dataclass
class FieldError(Parameter):
    TYPE: ClassVar[int] = llrp_const.PARAM_FIELD_ERROR
    NAME: ClassVar[str] = "FieldError"
    field_num: int = 0
    error_code: int = 0

    def encode_body(self) -> bytes:
        return struct.pack('!HH', self.field_num, self.error_code)

    @classmethod
    def decode_body(cls, body, registry):
        field_num, error_code = codec.unpack_from('!HH', body, 0, "FieldError")
        return cls(field_num=field_num, error_code=to_enum(llrp_const.StatusCode, error_code))


@dataclass
class ParameterError(Parameter):
    TYPE: ClassVar[int] = llrp_const.PARAM_PARAMETER_ERROR
    NAME: ClassVar[str] = "ParameterError"
    parameter_type: int = 0
    error_code: int = 0
    field_error: Optional[FieldError] = None
    parameter_error: Optional["ParameterError"] = None

    def encode_body(self) -> bytes:
        return struct.pack('!HH', self.parameter_type, self.error_code) + encode_all(self.field_error, self.parameter_error)

    @classmethod
    def decode_body(cls, body, registry):
        parameter_type, error_code = codec.unpack_from('!HH', body, 0, "ParameterError")
        children = registry.decode_parameters(body[4:])
        return cls(
            parameter_type=parameter_type,
            error_code=to_enum(llrp_const.StatusCode, error_code),
            field_error=first_of(children, FieldError),
            parameter_error=first_of(children, ParameterError),
        )


@dataclass
class LLRPStatus(Parameter):
    TYPE: ClassVar[int] = llrp_const.PARAM_LLRP_STATUS
    NAME: ClassVar[str] = "LLRPStatus"
    status_code: int = llrp_const.StatusCode.M_Success
    error_description: str = ""
    field_error: Optional[FieldError] = None
    parameter_error: Optional[ParameterError] = None

    def encode_body(self) -> bytes:
        return (struct.pack('!H', self.status_code) + codec.pack_utf8v(self.error_description)
                + encode_all(self.field_error, self.parameter_error))

    @classmethod
    def decode_body(cls, body, registry):
        (status_code,) = codec.unpack_from('!H', body, 0, "StatusCode")
        description, offset = codec.unpack_utf8v(body, 2, "ErrorDescription")
        children = registry.decode_parameters(body[offset:])
        return cls(
            status_code=to_enum(llrp_const.StatusCode, status_code),
            error_description=description,
            field_error=first_of(children, FieldError),
            parameter_error=first_of(children, ParameterError),
        )


# --- Capabilities ---

@dataclass
class GeneralDeviceCapabilities(Parameter):
    TYPE: ClassVar[int] = llrp_const.PARAM_GENERAL_DEVICE_CAPABILITIES
    NAME: ClassVar[str] = "GeneralDeviceCapabilities"
    max_number_of_antenna_supported: int = 0
    can_set_antenna_properties: bool = False
    has_utc_clock_capability: bool = False
    device_manufacturer_name: int = 0
    model_name: int = 0
    reader_firmware_version: str = ""
    sub_parameters: List[Parameter] = field(default_factory=list)

    def encode_body(self) -> bytes:
        flags = (int(self.can_set_antenna_properties) << 15) | (int(self.has_utc_clock_capability) << 14)
        return (struct.pack('!HHII', self.max_number_of_antenna_supported, flags,
                            self.device_manufacturer_name, self.model_name)
                + codec.pack_utf8v(self.reader_firmware_version)
                + encode_all(self.sub_parameters))

    @classmethod
    def decode_body(cls, body, registry):
        antennas, flags, manufacturer, model = codec.unpack_from('!HHII', body, 0, "GeneralDeviceCapabilities")
        firmware, offset = codec.unpack_utf8v(body, 12, "ReaderFirmwareVersion")
        return cls(
            max_number_of_antenna_supported=antennas,
            can_set_antenna_properties=bool(flags & 0x8000),
            has_utc_clock_capability=bool(flags & 0x4000),
            device_manufacturer_name=manufacturer,
            model_name=model,
            reader_firmware_version=firmware,
            sub_parameters=registry.decode_parameters(body[offset:]),
        )


# --- Reader Operation (ROSpec) ---

@dataclass
class ROSpecStartTrigger(Parameter):
    TYPE: ClassVar[int] = llrp_const.PARAM_ROSPEC_START_TRIGGER
    NAME: ClassVar[str] = "ROSpecStartTrigger"
    ro_spec_start_trigger_type: int = llrp_const.ROSpecStartTriggerType.Null

    def encode_body(self) -> bytes:
        return struct.pack('!B', self.ro_spec_start_trigger_type)

    @classmethod
    def decode_body(cls, body, registry):
        (trigger,) = codec.unpack_from('!B', body, 0, "ROSpecStartTriggerType")
        return cls(ro_spec_start_trigger_type=to_enum(llrp_const.ROSpecStartTriggerType, trigger))


@dataclass
class ROSpecStopTrigger(Parameter):
    TYPE: ClassVar[int] = llrp_const.PARAM_ROSPEC_STOP_TRIGGER
    NAME: ClassVar[str] = "ROSpecStopTrigger"
    ro_spec_stop_trigger_type: int = llrp_const.ROSpecStopTriggerType.Null
    duration_trigger_value: int = 0

    def encode_body(self) -> bytes:
        return struct.pack('!BI', self.ro_spec_stop_trigger_type, self.duration_trigger_value)

    @classmethod
    def decode_body(cls, body, registry):
        trigger, duration = codec.unpack_from('!BI', body, 0, "ROSpecStopTrigger")
        return cls(ro_spec_stop_trigger_type=to_enum(llrp_const.ROSpecStopTriggerType, trigger),
                   duration_trigger_value=duration)


@dataclass
class ROBoundarySpec(Parameter):
    TYPE: ClassVar[int] = llrp_const.PARAM_RO_BOUNDARY_SPEC
    NAME: ClassVar[str] = "ROBoundarySpec"
    ro_spec_start_trigger: ROSpecStartTrigger = field(default_factory=ROSpecStartTrigger)
    ro_spec_stop_trigger: ROSpecStopTrigger = field(default_factory=ROSpecStopTrigger)

    def encode_body(self) -> bytes:
        return encode_all(self.ro_spec_start_trigger, self.ro_spec_stop_trigger)

    @classmethod
    def decode_body(cls, body, registry):
        children = registry.decode_parameters(body)
        return cls(
            ro_spec_start_trigger=first_of(children, ROSpecStartTrigger),
            ro_spec_stop_trigger=first_of(children, ROSpecStopTrigger),
        )


@dataclass
class AISpecStopTrigger(Parameter):
    TYPE: ClassVar[int] = llrp_const.PARAM_AISPEC_STOP_TRIGGER
    NAME: ClassVar[str] = "AISpecStopTrigger"
    ai_spec_stop_trigger_type: int = llrp_const.AISpecStopTriggerType.Null
    duration_trigger: int = 0

    def encode_body(self) -> bytes:
        return struct.pack('!BI', self.ai_spec_stop_trigger_type, self.duration_trigger)

    @classmethod
    def decode_body(cls, body, registry):
        trigger, duration = codec.unpack_from('!BI', body, 0, "AISpecStopTrigger")
        return cls(ai_spec_stop_trigger_type=to_enum(llrp_const.AISpecStopTriggerType, trigger),
                   duration_trigger=duration)


@dataclass
class C1G2TagInventoryMask(Parameter):
    TYPE: ClassVar[int] = llrp_const.PARAM_C1G2_TAG_INVENTORY_MASK
    NAME: ClassVar[str] = "C1G2TagInventoryMask"
    mb: int = llrp_const.C1G2MemoryBank.EPC
    pointer: int = 0
    tag_mask_bits: int = 0
    tag_mask: bytes = b''

    def encode_body(self) -> bytes:
        if not (0 <= self.mb <= 3):
            raise EncodeError(f"Memory bank {self.mb} out of range", ref_type=self.NAME, ref_field="MB")
        return struct.pack('!BH', self.mb << 6, self.pointer) + codec.pack_u1v(self.tag_mask_bits, self.tag_mask)

    @classmethod
    def decode_body(cls, body, registry):
        mb, pointer = codec.unpack_from('!BH', body, 0, "C1G2TagInventoryMask")
        bits, mask, _ = codec.unpack_u1v(body, 3, "TagMask")
        return cls(mb=to_enum(llrp_const.C1G2MemoryBank, mb >> 6), pointer=pointer, tag_mask_bits=bits, tag_mask=mask)


@dataclass
class C1G2TagInventoryStateUnawareFilterAction(Parameter):
    TYPE: ClassVar[int] = llrp_const.PARAM_C1G2_STATE_UNAWARE_FILTER_ACTION
    NAME: ClassVar[str] = "C1G2TagInventoryStateUnawareFilterAction"
    action: int = llrp_const.C1G2StateUnawareAction.Select_Unselect

    def encode_body(self) -> bytes:
        return struct.pack('!B', self.action)

    @classmethod
    def decode_body(cls, body, registry):
        (action,) = codec.unpack_from('!B', body, 0, "Action")
        return cls(action=to_enum(llrp_const.C1G2StateUnawareAction, action))


@dataclass
class C1G2Filter(Parameter):
    TYPE: ClassVar[int] = llrp_const.PARAM_C1G2_FILTER
    NAME: ClassVar[str] = "C1G2Filter"
    t: int = llrp_const.C1G2TruncateAction.Unspecified
    tag_inventory_mask: C1G2TagInventoryMask = field(default_factory=C1G2TagInventoryMask)
    state_unaware_action: Optional[C1G2TagInventoryStateUnawareFilterAction] = None

    def encode_body(self) -> bytes:
        return struct.pack('!B', self.t << 6) + encode_all(self.tag_inventory_mask, self.state_unaware_action)

    @classmethod
    def decode_body(cls, body, registry):
        (flags,) = codec.unpack_from('!B', body, 0, "T")
        children = registry.decode_parameters(body[1:])
        return cls(
            t=to_enum(llrp_const.C1G2TruncateAction, flags >> 6),
            tag_inventory_mask=first_of(children, C1G2TagInventoryMask),
            state_unaware_action=first_of(children, C1G2TagInventoryStateUnawareFilterAction),
        )


@dataclass
class C1G2RFControl(Parameter):
    TYPE: ClassVar[int] = llrp_const.PARAM_C1G2_RF_CONTROL
    NAME: ClassVar[str] = "C1G2RFControl"
    mode_index: int = 0
    tari: int = 0

    def encode_body(self) -> bytes:
        return struct.pack('!HH', self.mode_index, self.tari)

    @classmethod
    def decode_body(cls, body, registry):
        mode_index, tari = codec.unpack_from('!HH', body, 0, "C1G2RFControl")
        return cls(mode_index=mode_index, tari=tari)


@dataclass
class C1G2SingulationControl(Parameter):
    TYPE: ClassVar[int] = llrp_const.PARAM_C1G2_SINGULATION_CONTROL
    NAME: ClassVar[str] = "C1G2SingulationControl"
    session: int = 0
    tag_population: int = 0
    tag_transit_time: int = 0

    def encode_body(self) -> bytes:
        if not (0 <= self.session <= 3):
            raise EncodeError(f"Session {self.session} out of range", ref_type=self.NAME, ref_field="Session")
        return struct.pack('!BHI', self.session << 6, self.tag_population, self.tag_transit_time)

    @classmethod
    def decode_body(cls, body, registry):
        session, population, transit = codec.unpack_from('!BHI', body, 0, "C1G2SingulationControl")
        return cls(session=session >> 6, tag_population=population, tag_transit_time=transit)


@dataclass
class C1G2InventoryCommand(Parameter):
    TYPE: ClassVar[int] = llrp_const.PARAM_C1G2_INVENTORY_COMMAND
    NAME: ClassVar[str] = "C1G2InventoryCommand"
    tag_inventory_state_aware: bool = False
    filters: List[C1G2Filter] = field(default_factory=list)
    rf_control: Optional[C1G2RFControl] = None
    singulation_control: Optional[C1G2SingulationControl] = None
    custom: List[Parameter] = field(default_factory=list)

    def encode_body(self) -> bytes:
        return (struct.pack('!B', int(self.tag_inventory_state_aware) << 7)
                + encode_all(self.filters, self.rf_control, self.singulation_control, self.custom))

    @classmethod
    def decode_body(cls, body, registry):
        (flags,) = codec.unpack_from('!B', body, 0, "TagInventoryStateAware")
        children = registry.decode_parameters(body[1:])
        return cls(
            tag_inventory_state_aware=bool(flags & 0x80),
            filters=all_of(children, C1G2Filter),
            rf_control=first_of(children, C1G2RFControl),
            singulation_control=first_of(children, C1G2SingulationControl),
            custom=all_of(children, CustomParameter, UnknownParameter),
        )


@dataclass
class AntennaConfiguration(Parameter):
    TYPE: ClassVar[int] = llrp_const.PARAM_ANTENNA_CONFIGURATION
    NAME: ClassVar[str] = "AntennaConfiguration"
    antenna_id: int = 0
    air_protocol_inventory_commands: List[Parameter] = field(default_factory=list)

    def encode_body(self) -> bytes:
        return struct.pack('!H', self.antenna_id) + encode_all(self.air_protocol_inventory_commands)

    @classmethod
    def decode_body(cls, body, registry):
        (antenna_id,) = codec.unpack_from('!H', body, 0, "AntennaID")
        return cls(antenna_id=antenna_id, air_protocol_inventory_commands=registry.decode_parameters(body[2:]))


@dataclass
class InventoryParameterSpec(Parameter):
    TYPE: ClassVar[int] = llrp_const.PARAM_INVENTORY_PARAMETER_SPEC
    NAME: ClassVar[str] = "InventoryParameterSpec"
    inventory_parameter_spec_id: int = 0
    protocol_id: int = llrp_const.AirProtocols.EPCGlobalClass1Gen2
    antenna_configurations: List[AntennaConfiguration] = field(default_factory=list)

    def encode_body(self) -> bytes:
        return struct.pack('!HB', self.inventory_parameter_spec_id, self.protocol_id) + encode_all(self.antenna_configurations)

    @classmethod
    def decode_body(cls, body, registry):
        spec_id, protocol = codec.unpack_from('!HB', body, 0, "InventoryParameterSpec")
        children = registry.decode_parameters(body[3:])
        return cls(inventory_parameter_spec_id=spec_id,
                   protocol_id=to_enum(llrp_const.AirProtocols, protocol),
                   antenna_configurations=all_of(children, AntennaConfiguration))


@dataclass
class AISpec(Parameter):
    TYPE: ClassVar[int] = llrp_const.PARAM_AISPEC
    NAME: ClassVar[str] = "AISpec"
    antenna_ids: List[int] = field(default_factory=lambda: [0])
    ai_spec_stop_trigger: AISpecStopTrigger = field(default_factory=AISpecStopTrigger)
    inventory_parameter_specs: List[InventoryParameterSpec] = field(default_factory=list)

    def encode_body(self) -> bytes:
        return codec.pack_u16v(self.antenna_ids) + encode_all(self.ai_spec_stop_trigger, self.inventory_parameter_specs)

    @classmethod
    def decode_body(cls, body, registry):
        antenna_ids, offset = codec.unpack_u16v(body, 0, "AntennaIDs")
        children = registry.decode_parameters(body[offset:])
        return cls(antenna_ids=antenna_ids,
                   ai_spec_stop_trigger=first_of(children, AISpecStopTrigger),
                   inventory_parameter_specs=all_of(children, InventoryParameterSpec))


@dataclass
class C1G2EPCMemorySelector(Parameter):
    TYPE: ClassVar[int] = llrp_const.PARAM_C1G2_EPC_MEMORY_SELECTOR
    NAME: ClassVar[str] = "C1G2EPCMemorySelector"
    enable_crc: bool = False
    enable_pc_bits: bool = False

    def encode_body(self) -> bytes:
        return struct.pack('!B', (int(self.enable_crc) << 7) | (int(self.enable_pc_bits) << 6))

    @classmethod
    def decode_body(cls, body, registry):
        (flags,) = codec.unpack_from('!B', body, 0, "C1G2EPCMemorySelector")
        return cls(enable_crc=bool(flags & 0x80), enable_pc_bits=bool(flags & 0x40))


# Bit positions of TagReportContentSelector flags, most significant first.
_CONTENT_SELECTOR_FLAGS = (
    "enable_ro_spec_id",
    "enable_spec_index",
    "enable_inventory_parameter_spec_id",
    "enable_antenna_id",
    "enable_channel_index",
    "enable_peak_rssi",
    "enable_first_seen_timestamp",
    "enable_last_seen_timestamp",
    "enable_tag_seen_count",
    "enable_access_spec_id",
)


@dataclass
class TagReportContentSelector(Parameter):
    TYPE: ClassVar[int] = llrp_const.PARAM_TAG_REPORT_CONTENT_SELECTOR
    NAME: ClassVar[str] = "TagReportContentSelector"
    enable_ro_spec_id: bool = False
    enable_spec_index: bool = False
    enable_inventory_parameter_spec_id: bool = False
    enable_antenna_id: bool = False
    enable_channel_index: bool = False
    enable_peak_rssi: bool = False
    enable_first_seen_timestamp: bool = False
    enable_last_seen_timestamp: bool = False
    enable_tag_seen_count: bool = False
    enable_access_spec_id: bool = False
    air_protocol_epc_memory_selectors: List[Parameter] = field(default_factory=list)

    def encode_body(self) -> bytes:
        flags = 0
        for bit, attr in enumerate(_CONTENT_SELECTOR_FLAGS):
            if getattr(self, attr):
                flags |= 0x8000 >> bit
        return struct.pack('!H', flags) + encode_all(self.air_protocol_epc_memory_selectors)

    @classmethod
    def decode_body(cls, body, registry):
        (flags,) = codec.unpack_from('!H', body, 0, "TagReportContentSelector")
        values = {attr: bool(flags & (0x8000 >> bit)) for bit, attr in enumerate(_CONTENT_SELECTOR_FLAGS)}
        return cls(air_protocol_epc_memory_selectors=registry.decode_parameters(body[2:]), **values)


@dataclass
class ROReportSpec(Parameter):
    TYPE: ClassVar[int] = llrp_const.PARAM_RO_REPORT_SPEC
    NAME: ClassVar[str] = "ROReportSpec"
    ro_report_trigger: int = llrp_const.ROReportTriggerType.None_
    n: int = 0
    tag_report_content_selector: TagReportContentSelector = field(default_factory=TagReportContentSelector)
    custom: List[Parameter] = field(default_factory=list)

    def encode_body(self) -> bytes:
        return struct.pack('!BH', self.ro_report_trigger, self.n) + encode_all(self.tag_report_content_selector, self.custom)

    @classmethod
    def decode_body(cls, body, registry):
        trigger, n = codec.unpack_from('!BH', body, 0, "ROReportSpec")
        children = registry.decode_parameters(body[3:])
        return cls(ro_report_trigger=to_enum(llrp_const.ROReportTriggerType, trigger), n=n,
                   tag_report_content_selector=first_of(children, TagReportContentSelector),
                   custom=all_of(children, CustomParameter, UnknownParameter))


@dataclass
class ROSpec(Parameter):
    TYPE: ClassVar[int] = llrp_const.PARAM_ROSPEC
    NAME: ClassVar[str] = "ROSpec"
    ro_spec_id: int = 0
    priority: int = 0
    current_state: int = llrp_const.ROSpecState.Disabled
    ro_boundary_spec: ROBoundarySpec = field(default_factory=ROBoundarySpec)
    spec_parameters: List[AISpec] = field(default_factory=list)
    ro_report_spec: Optional[ROReportSpec] = None

    def encode_body(self) -> bytes:
        if not (0 <= self.priority <= 7):
            raise EncodeError(f"Priority {self.priority} out of range", ref_type=self.NAME, ref_field="Priority")
        return (struct.pack('!IBB', self.ro_spec_id, self.priority, self.current_state)
                + encode_all(self.ro_boundary_spec, self.spec_parameters, self.ro_report_spec))

    @classmethod
    def decode_body(cls, body, registry):
        spec_id, priority, state = codec.unpack_from('!IBB', body, 0, "ROSpec")
        children = registry.decode_parameters(body[6:])
        return cls(ro_spec_id=spec_id, priority=priority,
                   current_state=to_enum(llrp_const.ROSpecState, state),
                   ro_boundary_spec=first_of(children, ROBoundarySpec),
                   spec_parameters=all_of(children, AISpec),
                   ro_report_spec=first_of(children, ROReportSpec))


# --- Access (AccessSpec) ---

@dataclass
class AccessSpecStopTrigger(Parameter):
    TYPE: ClassVar[int] = llrp_const.PARAM_ACCESS_SPEC_STOP_TRIGGER
    NAME: ClassVar[str] = "AccessSpecStopTrigger"
    access_spec_stop_trigger: int = llrp_const.AccessSpecStopTriggerType.Null
    operation_count_value: int = 0

    def encode_body(self) -> bytes:
        return struct.pack('!BH', self.access_spec_stop_trigger, self.operation_count_value)

    @classmethod
    def decode_body(cls, body, registry):
        trigger, count = codec.unpack_from('!BH', body, 0, "AccessSpecStopTrigger")
        return cls(access_spec_stop_trigger=to_enum(llrp_const.AccessSpecStopTriggerType, trigger),
                   operation_count_value=count)


@dataclass
class C1G2TargetTag(Parameter):
    TYPE: ClassVar[int] = llrp_const.PARAM_C1G2_TARGET_TAG
    NAME: ClassVar[str] = "C1G2TargetTag"
    mb: int = llrp_const.C1G2MemoryBank.EPC
    match: bool = True
    pointer: int = 0
    tag_mask_bits: int = 0
    tag_mask: bytes = b''
    tag_data_bits: int = 0
    tag_data: bytes = b''

    def encode_body(self) -> bytes:
        if not (0 <= self.mb <= 3):
            raise EncodeError(f"Memory bank {self.mb} out of range", ref_type=self.NAME, ref_field="MB")
        return (struct.pack('!BH', (self.mb << 6) | (int(self.match) << 5), self.pointer)
                + codec.pack_u1v(self.tag_mask_bits, self.tag_mask)
                + codec.pack_u1v(self.tag_data_bits, self.tag_data))

    @classmethod
    def decode_body(cls, body, registry):
        flags, pointer = codec.unpack_from('!BH', body, 0, "C1G2TargetTag")
        mask_bits, mask, offset = codec.unpack_u1v(body, 3, "TagMask")
        data_bits, data, _ = codec.unpack_u1v(body, offset, "TagData")
        return cls(mb=to_enum(llrp_const.C1G2MemoryBank, flags >> 6), match=bool(flags & 0x20), pointer=pointer,
                   tag_mask_bits=mask_bits, tag_mask=mask, tag_data_bits=data_bits, tag_data=data)


@dataclass
class C1G2TagSpec(Parameter):
    TYPE: ClassVar[int] = llrp_const.PARAM_C1G2_TAG_SPEC
    NAME: ClassVar[str] = "C1G2TagSpec"
    target_tags: List[C1G2TargetTag] = field(default_factory=list)

    def encode_body(self) -> bytes:
        return encode_all(self.target_tags)

    @classmethod
    def decode_body(cls, body, registry):
        return cls(target_tags=all_of(registry.decode_parameters(body), C1G2TargetTag))


@dataclass
class C1G2Read(Parameter):
    TYPE: ClassVar[int] = llrp_const.PARAM_C1G2_READ
    NAME: ClassVar[str] = "C1G2Read"
    op_spec_id: int = 0
    access_password: int = 0
    mb: int = llrp_const.C1G2MemoryBank.Reserved
    word_pointer: int = 0
    word_count: int = 0

    def encode_body(self) -> bytes:
        return struct.pack('!HIBHH', self.op_spec_id, self.access_password, self.mb << 6,
                           self.word_pointer, self.word_count)

    @classmethod
    def decode_body(cls, body, registry):
        op_spec_id, password, mb, pointer, count = codec.unpack_from('!HIBHH', body, 0, "C1G2Read")
        return cls(op_spec_id=op_spec_id, access_password=password, mb=to_enum(llrp_const.C1G2MemoryBank, mb >> 6),
                   word_pointer=pointer, word_count=count)


@dataclass
class C1G2Write(Parameter):
    TYPE: ClassVar[int] = llrp_const.PARAM_C1G2_WRITE
    NAME: ClassVar[str] = "C1G2Write"
    op_spec_id: int = 0
    access_password: int = 0
    mb: int = llrp_const.C1G2MemoryBank.Reserved
    word_pointer: int = 0
    write_data: List[int] = field(default_factory=list)

    def encode_body(self) -> bytes:
        return (struct.pack('!HIBH', self.op_spec_id, self.access_password, self.mb << 6, self.word_pointer)
                + codec.pack_u16v(self.write_data))

    @classmethod
    def decode_body(cls, body, registry):
        op_spec_id, password, mb, pointer = codec.unpack_from('!HIBH', body, 0, "C1G2Write")
        words, _ = codec.unpack_u16v(body, 9, "WriteData")
        return cls(op_spec_id=op_spec_id, access_password=password, mb=to_enum(llrp_const.C1G2MemoryBank, mb >> 6),
                   word_pointer=pointer, write_data=words)


@dataclass
class AccessCommand(Parameter):
    TYPE: ClassVar[int] = llrp_const.PARAM_ACCESS_COMMAND
    NAME: ClassVar[str] = "AccessCommand"
    tag_spec: C1G2TagSpec = field(default_factory=C1G2TagSpec)
    op_specs: List[Parameter] = field(default_factory=list)

    def encode_body(self) -> bytes:
        return encode_all(self.tag_spec, self.op_specs)

    @classmethod
    def decode_body(cls, body, registry):
        children = registry.decode_parameters(body)
        return cls(tag_spec=first_of(children, C1G2TagSpec),
                   op_specs=[p for p in children if not isinstance(p, C1G2TagSpec)])


@dataclass
class AccessReportSpec(Parameter):
    TYPE: ClassVar[int] = llrp_const.PARAM_ACCESS_REPORT_SPEC
    NAME: ClassVar[str] = "AccessReportSpec"
    access_report_trigger: int = llrp_const.AccessReportTriggerType.Whenever_ROReport_Is_Generated

    def encode_body(self) -> bytes:
        return struct.pack('!B', self.access_report_trigger)

    @classmethod
    def decode_body(cls, body, registry):
        (trigger,) = codec.unpack_from('!B', body, 0, "AccessReportTrigger")
        return cls(access_report_trigger=to_enum(llrp_const.AccessReportTriggerType, trigger))


@dataclass
class AccessSpec(Parameter):
    TYPE: ClassVar[int] = llrp_const.PARAM_ACCESS_SPEC
    NAME: ClassVar[str] = "AccessSpec"
    access_spec_id: int = 0
    antenna_id: int = 0
    protocol_id: int = llrp_const.AirProtocols.EPCGlobalClass1Gen2
    current_state: int = llrp_const.AccessSpecState.Disabled
    ro_spec_id: int = 0
    access_spec_stop_trigger: AccessSpecStopTrigger = field(default_factory=AccessSpecStopTrigger)
    access_command: AccessCommand = field(default_factory=AccessCommand)
    access_report_spec: Optional[AccessReportSpec] = None

    def encode_body(self) -> bytes:
        return (struct.pack('!IHBBI', self.access_spec_id, self.antenna_id, self.protocol_id,
                            int(self.current_state) << 7, self.ro_spec_id)
                + encode_all(self.access_spec_stop_trigger, self.access_command, self.access_report_spec))

    @classmethod
    def decode_body(cls, body, registry):
        spec_id, antenna_id, protocol, state, ro_spec_id = codec.unpack_from('!IHBBI', body, 0, "AccessSpec")
        children = registry.decode_parameters(body[12:])
        return cls(access_spec_id=spec_id, antenna_id=antenna_id,
                   protocol_id=to_enum(llrp_const.AirProtocols, protocol),
                   current_state=to_enum(llrp_const.AccessSpecState, state >> 7), ro_spec_id=ro_spec_id,
                   access_spec_stop_trigger=first_of(children, AccessSpecStopTrigger),
                   access_command=first_of(children, AccessCommand),
                   access_report_spec=first_of(children, AccessReportSpec))


# --- Reports ---

@dataclass
class EPC96(Parameter):
    """96 bit EPC, carried as a TV parameter."""
    TYPE: ClassVar[int] = llrp_const.TV_EPC_96
    NAME: ClassVar[str] = "EPC_96"
    TV: ClassVar[bool] = True
    epc: bytes = bytes(12)

    def encode_body(self) -> bytes:
        return bytes(self.epc)

    @classmethod
    def decode_body(cls, body, registry):
        return cls(epc=bytes(body))


@dataclass
class EPCData(Parameter):
    """Variable length EPC."""
    TYPE: ClassVar[int] = llrp_const.PARAM_EPC_DATA
    NAME: ClassVar[str] = "EPCData"
    epc_bit_count: int = 0
    epc: bytes = b''

    def encode_body(self) -> bytes:
        return codec.pack_u1v(self.epc_bit_count, self.epc)

    @classmethod
    def decode_body(cls, body, registry):
        bits, epc, _ = codec.unpack_u1v(body, 0, "EPC")
        return cls(epc_bit_count=bits, epc=epc)


@dataclass
class C1G2ReadOpSpecResult(Parameter):
    TYPE: ClassVar[int] = llrp_const.PARAM_C1G2_READ_OP_SPEC_RESULT
    NAME: ClassVar[str] = "C1G2ReadOpSpecResult"
    result: int = llrp_const.C1G2ReadResultType.Success
    op_spec_id: int = 0
    read_data: List[int] = field(default_factory=list)

    def encode_body(self) -> bytes:
        return struct.pack('!BH', self.result, self.op_spec_id) + codec.pack_u16v(self.read_data)

    @classmethod
    def decode_body(cls, body, registry):
        result, op_spec_id = codec.unpack_from('!BH', body, 0, "C1G2ReadOpSpecResult")
        words, _ = codec.unpack_u16v(body, 3, "ReadData")
        return cls(result=to_enum(llrp_const.C1G2ReadResultType, result), op_spec_id=op_spec_id, read_data=words)


@dataclass
class C1G2WriteOpSpecResult(Parameter):
    TYPE: ClassVar[int] = llrp_const.PARAM_C1G2_WRITE_OP_SPEC_RESULT
    NAME: ClassVar[str] = "C1G2WriteOpSpecResult"
    result: int = llrp_const.C1G2WriteResultType.Success
    op_spec_id: int = 0
    num_words_written: int = 0

    def encode_body(self) -> bytes:
        return struct.pack('!BHH', self.result, self.op_spec_id, self.num_words_written)

    @classmethod
    def decode_body(cls, body, registry):
        result, op_spec_id, written = codec.unpack_from('!BHH', body, 0, "C1G2WriteOpSpecResult")
        return cls(result=to_enum(llrp_const.C1G2WriteResultType, result), op_spec_id=op_spec_id,
                   num_words_written=written)


# TV type -> TagReportData attribute
_TAG_REPORT_TV_FIELDS = {
    llrp_const.TV_ROSPEC_ID: "ro_spec_id",
    llrp_const.TV_SPEC_INDEX: "spec_index",
    llrp_const.TV_INVENTORY_PARAMETER_SPEC_ID: "inventory_parameter_spec_id",
    llrp_const.TV_ANTENNA_ID: "antenna_id",
    llrp_const.TV_PEAK_RSSI: "peak_rssi",
    llrp_const.TV_CHANNEL_INDEX: "channel_index",
    llrp_const.TV_FIRST_SEEN_UTC: "first_seen_utc",
    llrp_const.TV_FIRST_SEEN_UPTIME: "first_seen_uptime",
    llrp_const.TV_LAST_SEEN_UTC: "last_seen_utc",
    llrp_const.TV_LAST_SEEN_UPTIME: "last_seen_uptime",
    llrp_const.TV_TAG_SEEN_COUNT: "tag_seen_count",
    llrp_const.TV_C1G2_PC: "c1g2_pc",
    llrp_const.TV_C1G2_CRC: "c1g2_crc",
    llrp_const.TV_ACCESS_SPEC_ID: "access_spec_id",
}


@dataclass
class TagReportData(Parameter):
    """
    One tag observation inside an RO_ACCESS_REPORT.

    epc is exactly one of EPC96 or EPCData, or None when the reader sent
    neither. op_spec_results and custom keep the order the reader used.
    """
    TYPE: ClassVar[int] = llrp_const.PARAM_TAG_REPORT_DATA
    NAME: ClassVar[str] = "TagReportData"
    epc: Optional[Parameter] = None
    ro_spec_id: Optional[int] = None
    spec_index: Optional[int] = None
    inventory_parameter_spec_id: Optional[int] = None
    antenna_id: Optional[int] = None
    peak_rssi: Optional[int] = None
    channel_index: Optional[int] = None
    first_seen_utc: Optional[int] = None
    first_seen_uptime: Optional[int] = None
    last_seen_utc: Optional[int] = None
    last_seen_uptime: Optional[int] = None
    tag_seen_count: Optional[int] = None
    c1g2_pc: Optional[int] = None
    c1g2_crc: Optional[int] = None
    access_spec_id: Optional[int] = None
    op_spec_results: List[Parameter] = field(default_factory=list)
    custom: List[Parameter] = field(default_factory=list)

    def encode_body(self) -> bytes:
        out = bytearray(encode_all(self.epc))
        for tv_type, attr in _TAG_REPORT_TV_FIELDS.items():
            value = getattr(self, attr)
            if value is not None:
                out += TVField(tv_type=tv_type, value=value).encode()
        out += encode_all(self.op_spec_results, self.custom)
        return bytes(out)

    @classmethod
    def decode_body(cls, body, registry):
        entry = cls()
        for param in registry.decode_parameters(body):
            if isinstance(param, (EPC96, EPCData)):
                entry.epc = param
            elif isinstance(param, TVField) and param.tv_type in _TAG_REPORT_TV_FIELDS:
                setattr(entry, _TAG_REPORT_TV_FIELDS[param.tv_type], param.value)
            elif isinstance(param, OP_SPEC_RESULT_TYPES):
                entry.op_spec_results.append(param)
            elif isinstance(param, (CustomParameter, UnknownParameter)):
                entry.custom.append(param)
        return entry


# --- Reader Events ---

@dataclass
class ConnectionAttemptEvent(Parameter):
    TYPE: ClassVar[int] = llrp_const.PARAM_CONNECTION_ATTEMPT_EVENT
    NAME: ClassVar[str] = "ConnectionAttemptEvent"
    status: int = llrp_const.ConnectionAttemptStatusType.Success

    def encode_body(self) -> bytes:
        return struct.pack('!H', self.status)

    @classmethod
    def decode_body(cls, body, registry):
        (status,) = codec.unpack_from('!H', body, 0, "Status")
        return cls(status=to_enum(llrp_const.ConnectionAttemptStatusType, status))


@dataclass
class ConnectionCloseEvent(Parameter):
    TYPE: ClassVar[int] = llrp_const.PARAM_CONNECTION_CLOSE_EVENT
    NAME: ClassVar[str] = "ConnectionCloseEvent"

    def encode_body(self) -> bytes:
        return b''

    @classmethod
    def decode_body(cls, body, registry):
        return cls()


@dataclass
class AntennaEvent(Parameter):
    TYPE: ClassVar[int] = llrp_const.PARAM_ANTENNA_EVENT
    NAME: ClassVar[str] = "AntennaEvent"
    event_type: int = llrp_const.AntennaEventType.Antenna_Connected
    antenna_id: int = 0

    def encode_body(self) -> bytes:
        return struct.pack('!BH', self.event_type, self.antenna_id)

    @classmethod
    def decode_body(cls, body, registry):
        event_type, antenna_id = codec.unpack_from('!BH', body, 0, "AntennaEvent")
        return cls(event_type=to_enum(llrp_const.AntennaEventType, event_type), antenna_id=antenna_id)


@dataclass
class ReaderExceptionEvent(Parameter):
    TYPE: ClassVar[int] = llrp_const.PARAM_READER_EXCEPTION_EVENT
    NAME: ClassVar[str] = "ReaderExceptionEvent"
    message: str = ""
    sub_parameters: List[Parameter] = field(default_factory=list)

    def encode_body(self) -> bytes:
        return codec.pack_utf8v(self.message) + encode_all(self.sub_parameters)

    @classmethod
    def decode_body(cls, body, registry):
        message, offset = codec.unpack_utf8v(body, 0, "Message")
        return cls(message=message, sub_parameters=registry.decode_parameters(body[offset:]))


@dataclass
class ReaderEventNotificationData(Parameter):
    TYPE: ClassVar[int] = llrp_const.PARAM_READER_EVENT_NOTIFICATION_DATA
    NAME: ClassVar[str] = "ReaderEventNotificationData"
    timestamp: Optional[Parameter] = field(default_factory=UTCTimestamp)
    connection_attempt_event: Optional[ConnectionAttemptEvent] = None
    antenna_event: Optional[AntennaEvent] = None
    reader_exception_event: Optional[ReaderExceptionEvent] = None
    connection_close_event: Optional[ConnectionCloseEvent] = None
    other_events: List[Parameter] = field(default_factory=list)

    def encode_body(self) -> bytes:
        return encode_all(self.timestamp, self.connection_attempt_event, self.antenna_event,
                           self.reader_exception_event, self.connection_close_event, self.other_events)

    @classmethod
    def decode_body(cls, body, registry):
        data = cls(timestamp=None)
        for param in registry.decode_parameters(body):
            if isinstance(param, UTCTimestamp):
                data.timestamp = param
            elif isinstance(param, ConnectionAttemptEvent):
                data.connection_attempt_event = param
            elif isinstance(param, AntennaEvent):
                data.antenna_event = param
            elif isinstance(param, ReaderExceptionEvent):
                data.reader_exception_event = param
            elif isinstance(param, ConnectionCloseEvent):
                data.connection_close_event = param
            else:
                data.other_events.append(param)
        return data


# --- Impinj Extensions ---

@dataclass
class ImpinjInventorySearchMode(CustomParameter):
    VENDOR: ClassVar[int] = llrp_const.VENDOR_IMPINJ
    SUBTYPE: ClassVar[int] = llrp_const.IMPINJ_INVENTORY_SEARCH_MODE
    NAME: ClassVar[str] = "ImpinjInventorySearchMode"
    inventory_search_mode: int = llrp_const.ImpinjInventorySearchType.Reader_Selected

    def encode_body(self) -> bytes:
        return struct.pack('!H', self.inventory_search_mode)

    @classmethod
    def decode_body(cls, body, registry):
        (mode,) = codec.unpack_from('!H', body, 0, "InventorySearchMode")
        return cls(inventory_search_mode=to_enum(llrp_const.ImpinjInventorySearchType, mode))


@dataclass
class ImpinjLowDutyCycle(CustomParameter):
    VENDOR: ClassVar[int] = llrp_const.VENDOR_IMPINJ
    SUBTYPE: ClassVar[int] = llrp_const.IMPINJ_LOW_DUTY_CYCLE
    NAME: ClassVar[str] = "ImpinjLowDutyCycle"
    low_duty_cycle_mode: int = llrp_const.ImpinjLowDutyCycleMode.Disabled
    empty_field_timeout: int = 0
    field_ping_interval: int = 0

    def encode_body(self) -> bytes:
        return struct.pack('!HHH', self.low_duty_cycle_mode, self.empty_field_timeout, self.field_ping_interval)

    @classmethod
    def decode_body(cls, body, registry):
        mode, timeout, interval = codec.unpack_from('!HHH', body, 0, "ImpinjLowDutyCycle")
        return cls(low_duty_cycle_mode=to_enum(llrp_const.ImpinjLowDutyCycleMode, mode),
                   empty_field_timeout=timeout, field_ping_interval=interval)


@dataclass
class _ImpinjModeParameter(CustomParameter):
    """Impinj parameter consisting of a single u16 report mode."""
    VENDOR: ClassVar[int] = llrp_const.VENDOR_IMPINJ
    mode: int = llrp_const.ImpinjReportMode.Disabled

    def encode_body(self) -> bytes:
        return struct.pack('!H', self.mode)

    @classmethod
    def decode_body(cls, body, registry):
        (mode,) = codec.unpack_from('!H', body, 0, "Mode")
        return cls(mode=to_enum(llrp_const.ImpinjReportMode, mode))


@dataclass
class ImpinjEnableSerializedTID(_ImpinjModeParameter):
    SUBTYPE: ClassVar[int] = llrp_const.IMPINJ_ENABLE_SERIALIZED_TID
    NAME: ClassVar[str] = "ImpinjEnableSerializedTID"


@dataclass
class ImpinjEnableRFPhaseAngle(_ImpinjModeParameter):
    SUBTYPE: ClassVar[int] = llrp_const.IMPINJ_ENABLE_RF_PHASE_ANGLE
    NAME: ClassVar[str] = "ImpinjEnableRFPhaseAngle"


@dataclass
class ImpinjEnablePeakRSSI(_ImpinjModeParameter):
    SUBTYPE: ClassVar[int] = llrp_const.IMPINJ_ENABLE_PEAK_RSSI
    NAME: ClassVar[str] = "ImpinjEnablePeakRSSI"


@dataclass
class ImpinjTagReportContentSelector(CustomParameter):
    VENDOR: ClassVar[int] = llrp_const.VENDOR_IMPINJ
    SUBTYPE: ClassVar[int] = llrp_const.IMPINJ_TAG_REPORT_CONTENT_SELECTOR
    NAME: ClassVar[str] = "ImpinjTagReportContentSelector"
    enable_rf_phase_angle: Optional[ImpinjEnableRFPhaseAngle] = None
    enable_peak_rssi: Optional[ImpinjEnablePeakRSSI] = None
    enable_serialized_tid: Optional[ImpinjEnableSerializedTID] = None

    def encode_body(self) -> bytes:
        return encode_all(self.enable_rf_phase_angle, self.enable_peak_rssi, self.enable_serialized_tid)

    @classmethod
    def decode_body(cls, body, registry):
        children = registry.decode_parameters(body)
        return cls(enable_rf_phase_angle=first_of(children, ImpinjEnableRFPhaseAngle),
                   enable_peak_rssi=first_of(children, ImpinjEnablePeakRSSI),
                   enable_serialized_tid=first_of(children, ImpinjEnableSerializedTID))


@dataclass
class ImpinjSerializedTID(CustomParameter):
    VENDOR: ClassVar[int] = llrp_const.VENDOR_IMPINJ
    SUBTYPE: ClassVar[int] = llrp_const.IMPINJ_SERIALIZED_TID
    NAME: ClassVar[str] = "ImpinjSerializedTID"
    tid: List[int] = field(default_factory=list)

    def encode_body(self) -> bytes:
        return codec.pack_u16v(self.tid)

    @classmethod
    def decode_body(cls, body, registry):
        words, _ = codec.unpack_u16v(body, 0, "TID")
        return cls(tid=words)


@dataclass
class ImpinjRFPhaseAngle(CustomParameter):
    VENDOR: ClassVar[int] = llrp_const.VENDOR_IMPINJ
    SUBTYPE: ClassVar[int] = llrp_const.IMPINJ_RF_PHASE_ANGLE
    NAME: ClassVar[str] = "ImpinjRFPhaseAngle"
    phase_angle: int = 0

    def encode_body(self) -> bytes:
        return struct.pack('!H', self.phase_angle)

    @classmethod
    def decode_body(cls, body, registry):
        (angle,) = codec.unpack_from('!H', body, 0, "PhaseAngle")
        return cls(phase_angle=angle)


@dataclass
class ImpinjPeakRSSI(CustomParameter):
    VENDOR: ClassVar[int] = llrp_const.VENDOR_IMPINJ
    SUBTYPE: ClassVar[int] = llrp_const.IMPINJ_PEAK_RSSI
    NAME: ClassVar[str] = "ImpinjPeakRSSI"
    rssi: int = 0  # dBm * 100

    def encode_body(self) -> bytes:
        return struct.pack('!h', self.rssi)

    @classmethod
    def decode_body(cls, body, registry):
        (rssi,) = codec.unpack_from('!h', body, 0, "RSSI")
        return cls(rssi=rssi)


@dataclass
class ImpinjSetQTConfig(CustomParameter):
    VENDOR: ClassVar[int] = llrp_const.VENDOR_IMPINJ
    SUBTYPE: ClassVar[int] = llrp_const.IMPINJ_SET_QT_CONFIG
    NAME: ClassVar[str] = "ImpinjSetQTConfig"
    op_spec_id: int = 0
    access_password: int = 0
    data_profile: int = llrp_const.ImpinjQTDataProfile.Unknown
    access_range: int = llrp_const.ImpinjQTAccessRange.Unknown
    persistence: int = llrp_const.ImpinjQTPersistence.Unknown

    def encode_body(self) -> bytes:
        return struct.pack('!HIBBBI', self.op_spec_id, self.access_password, self.data_profile,
                           self.access_range, self.persistence, 0)

    @classmethod
    def decode_body(cls, body, registry):
        op_spec_id, password, profile, access_range, persistence, _ = codec.unpack_from("!HIBBBI", body, 0, "ImpinjSetQTConfig")
        return cls(op_spec_id=op_spec_id, access_password=password,
                   data_profile=to_enum(llrp_const.ImpinjQTDataProfile, profile),
                   access_range=to_enum(llrp_const.ImpinjQTAccessRange, access_range),
                   persistence=to_enum(llrp_const.ImpinjQTPersistence, persistence))


@dataclass
class ImpinjSetQTConfigOpSpecResult(CustomParameter):
    VENDOR: ClassVar[int] = llrp_const.VENDOR_IMPINJ
    SUBTYPE: ClassVar[int] = llrp_const.IMPINJ_SET_QT_CONFIG_OP_SPEC_RESULT
    NAME: ClassVar[str] = "ImpinjSetQTConfigOpSpecResult"
    result: int = llrp_const.ImpinjSetQTConfigResultType.Success
    op_spec_id: int = 0

    def encode_body(self) -> bytes:
        return struct.pack('!BH', self.result, self.op_spec_id)

    @classmethod
    def decode_body(cls, body, registry):
        result, op_spec_id = codec.unpack_from('!BH', body, 0, "ImpinjSetQTConfigOpSpecResult")
        return cls(result=to_enum(llrp_const.ImpinjSetQTConfigResultType, result), op_spec_id=op_spec_id)


@dataclass
class ImpinjGetQTConfig(CustomParameter):
    VENDOR: ClassVar[int] = llrp_const.VENDOR_IMPINJ
    SUBTYPE: ClassVar[int] = llrp_const.IMPINJ_GET_QT_CONFIG
    NAME: ClassVar[str] = "ImpinjGetQTConfig"
    op_spec_id: int = 0
    access_password: int = 0

    def encode_body(self) -> bytes:
        return struct.pack('!HII', self.op_spec_id, self.access_password, 0)

    @classmethod
    def decode_body(cls, body, registry):
        op_spec_id, password, _ = codec.unpack_from('!HII', body, 0, "ImpinjGetQTConfig")
        return cls(op_spec_id=op_spec_id, access_password=password)


@dataclass
class ImpinjGetQTConfigOpSpecResult(CustomParameter):
    VENDOR: ClassVar[int] = llrp_const.VENDOR_IMPINJ
    SUBTYPE: ClassVar[int] = llrp_const.IMPINJ_GET_QT_CONFIG_OP_SPEC_RESULT
    NAME: ClassVar[str] = "ImpinjGetQTConfigOpSpecResult"
    result: int = llrp_const.ImpinjGetQTConfigResultType.Success
    op_spec_id: int = 0
    data_profile: int = llrp_const.ImpinjQTDataProfile.Unknown
    access_range: int = llrp_const.ImpinjQTAccessRange.Unknown

    def encode_body(self) -> bytes:
        return struct.pack('!BHBBI', self.result, self.op_spec_id, self.data_profile, self.access_range, 0)

    @classmethod
    def decode_body(cls, body, registry):
        result, op_spec_id, profile, access_range, _ = codec.unpack_from('!BHBBI', body, 0, "ImpinjGetQTConfigOpSpecResult")
        return cls(result=to_enum(llrp_const.ImpinjGetQTConfigResultType, result), op_spec_id=op_spec_id,
                   data_profile=to_enum(llrp_const.ImpinjQTDataProfile, profile),
                   access_range=to_enum(llrp_const.ImpinjQTAccessRange, access_range))


OP_SPEC_RESULT_TYPES = (
    C1G2ReadOpSpecResult,
    C1G2WriteOpSpecResult,
    ImpinjSetQTConfigOpSpecResult,
    ImpinjGetQTConfigOpSpecResult,
)

STANDARD_PARAMETERS = (
    UTCTimestamp, Uptime, FieldError, ParameterError, LLRPStatus,
    GeneralDeviceCapabilities,
    ROSpecStartTrigger, ROSpecStopTrigger, ROBoundarySpec, AISpecStopTrigger,
    C1G2TagInventoryMask, C1G2TagInventoryStateUnawareFilterAction, C1G2Filter,
    C1G2RFControl, C1G2SingulationControl, C1G2InventoryCommand,
    AntennaConfiguration, InventoryParameterSpec, AISpec,
    C1G2EPCMemorySelector, TagReportContentSelector, ROReportSpec, ROSpec,
    AccessSpecStopTrigger, C1G2TargetTag, C1G2TagSpec, C1G2Read, C1G2Write,
    AccessCommand, AccessReportSpec, AccessSpec,
    EPCData, C1G2ReadOpSpecResult, C1G2WriteOpSpecResult, TagReportData,
    ConnectionAttemptEvent, ConnectionCloseEvent, AntennaEvent, ReaderExceptionEvent,
    ReaderEventNotificationData,
)

IMPINJ_PARAMETERS = (
    ImpinjInventorySearchMode, ImpinjLowDutyCycle,
    ImpinjEnableSerializedTID, ImpinjEnableRFPhaseAngle, ImpinjEnablePeakRSSI,
    ImpinjTagReportContentSelector, ImpinjSerializedTID, ImpinjRFPhaseAngle, ImpinjPeakRSSI,
    ImpinjSetQTConfig, ImpinjSetQTConfigOpSpecResult,
    ImpinjGetQTConfig, ImpinjGetQTConfigOpSpecResult,
)
