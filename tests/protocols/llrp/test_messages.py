# tests/protocols/llrp/test_messages.py

import struct

import pytest

from uhf_llrp.core.exceptions import EncodeError
from uhf_llrp.protocols import framing
from uhf_llrp.protocols.llrp import codec
from uhf_llrp.protocols.llrp import constants as llrp_const
from uhf_llrp.protocols.llrp.messages import (
    GetReaderCapabilities, GetReaderCapabilitiesResponse, SetReaderConfig, SetReaderConfigResponse,
    AddROSpec, AddROSpecResponse, StartROSpec, StopROSpec, EnableAccessSpec, GetReport, ROAccessReport,
    ReaderEventNotification, ErrorMessage, ImpinjEnableExtensions, ImpinjEnableExtensionsResponse,
)
from uhf_llrp.protocols.llrp.parameters import (
    LLRPStatus, GeneralDeviceCapabilities, ReaderEventNotificationData, UTCTimestamp,
    ConnectionAttemptEvent, AntennaEvent, TagReportData, EPC96, C1G2ReadOpSpecResult,
    ImpinjSerializedTID, ROSpec,
)
from uhf_llrp.protocols.registry import TypeRegistry, get_the_type_registry, enroll_impinj_types


@pytest.fixture
def registry() -> TypeRegistry:
    return enroll_impinj_types(get_the_type_registry())


def decode(frame: bytes, registry: TypeRegistry):
    """Runs a complete frame through framing and the registry."""
    message_type, message_id, payload = framing.find_and_parse_message(bytearray(frame))
    return registry.decode_message(message_type, message_id, payload)


# --- Requests ---

def test_ro_spec_id_request_encoding():
    frame = StartROSpec(message_id=9, ro_spec_id=1111).encode()
    assert frame == framing.build_message(llrp_const.MSG_START_ROSPEC, 9, struct.pack('!I', 1111))


def test_access_spec_id_request_encoding():
    frame = EnableAccessSpec(message_id=2, access_spec_id=23).encode()
    assert frame == framing.build_message(llrp_const.MSG_ENABLE_ACCESSSPEC, 2, struct.pack('!I', 23))


def test_set_reader_config_factory_reset_flag():
    frame = SetReaderConfig(message_id=1, reset_to_factory_default=True).encode()
    assert frame[10:] == b'\x80'


def test_get_reader_capabilities_encoding():
    frame = GetReaderCapabilities(message_id=3).encode()
    assert frame == framing.build_message(llrp_const.MSG_GET_READER_CAPABILITIES, 3,
                                          bytes([llrp_const.GetReaderCapabilitiesRequestedData.All]))


def test_impinj_enable_extensions_custom_header():
    frame = ImpinjEnableExtensions(message_id=5).encode()
    expected_body = struct.pack('!IB', llrp_const.VENDOR_IMPINJ, llrp_const.IMPINJ_ENABLE_EXTENSIONS) + b'\x00' * 4
    assert frame == framing.build_message(llrp_const.MSG_CUSTOM_MESSAGE, 5, expected_body)


def test_request_names_its_response():
    assert AddROSpec.RESPONSE_TYPE == AddROSpecResponse.type_key()
    assert AddROSpec.RESPONSE_NAME == "ADD_ROSPEC_RESPONSE"
    assert ImpinjEnableExtensions.RESPONSE_TYPE == (llrp_const.MSG_CUSTOM_MESSAGE, llrp_const.VENDOR_IMPINJ,
                                                    llrp_const.IMPINJ_ENABLE_EXTENSIONS_RESPONSE)
    assert GetReport.RESPONSE_TYPE is None


def test_encode_error_on_out_of_range_field():
    with pytest.raises(EncodeError):
        StopROSpec(message_id=1, ro_spec_id=-1).encode()


def test_encode_error_on_bad_parameter():
    with pytest.raises(EncodeError, match="Priority 9 out of range"):
        AddROSpec(message_id=1, ro_spec=ROSpec(ro_spec_id=1, priority=9)).encode()


# --- Responses and notifications ---

def test_decode_status_response(registry):
    frame = SetReaderConfigResponse(message_id=4, status=LLRPStatus()).encode()
    message = decode(frame, registry)
    assert isinstance(message, SetReaderConfigResponse)
    assert message.message_id == 4
    assert message.status.status_code == llrp_const.StatusCode.M_Success


def test_decode_status_response_without_status(registry):
    frame = framing.build_message(llrp_const.MSG_START_ROSPEC_RESPONSE, 4)
    assert decode(frame, registry).status is None


def test_decode_impinj_enable_extensions_response(registry):
    frame = ImpinjEnableExtensionsResponse(message_id=1, status=LLRPStatus()).encode()
    message = decode(frame, registry)
    assert isinstance(message, ImpinjEnableExtensionsResponse)
    assert message.key == ImpinjEnableExtensions.RESPONSE_TYPE


def test_decode_error_message(registry):
    status = LLRPStatus(status_code=llrp_const.StatusCode.M_UnsupportedMessage, error_description="nope")
    message = decode(ErrorMessage(message_id=8, status=status).encode(), registry)
    assert isinstance(message, ErrorMessage)
    assert message.status.error_description == "nope"


def test_decode_reader_capabilities(registry):
    capabilities = GeneralDeviceCapabilities(
        max_number_of_antenna_supported=4,
        can_set_antenna_properties=True,
        device_manufacturer_name=llrp_const.VENDOR_IMPINJ,
        model_name=2001002,
        reader_firmware_version="5.12.0.240",
    )
    frame = GetReaderCapabilitiesResponse(message_id=2, status=LLRPStatus(),
                                          general_device_capabilities=capabilities).encode()
    message = decode(frame, registry)

    assert message.status == LLRPStatus()
    assert message.general_device_capabilities == capabilities
    assert message.other_capabilities == []


def test_decode_connection_attempt_event(registry):
    data = ReaderEventNotificationData(
        timestamp=UTCTimestamp(microseconds=1_700_000_000_000_000),
        connection_attempt_event=ConnectionAttemptEvent(status=llrp_const.ConnectionAttemptStatusType.Success),
    )
    message = decode(ReaderEventNotification(message_id=0, reader_event_notification_data=data).encode(), registry)

    event_data = message.reader_event_notification_data
    assert event_data.timestamp == UTCTimestamp(microseconds=1_700_000_000_000_000)
    assert event_data.connection_attempt_event.status == llrp_const.ConnectionAttemptStatusType.Success
    assert event_data.antenna_event is None


def test_decode_antenna_event(registry):
    body = codec.encode_tlv(
        llrp_const.PARAM_READER_EVENT_NOTIFICATION_DATA,
        UTCTimestamp(microseconds=5).encode() + AntennaEvent(event_type=0, antenna_id=2).encode(),
    )
    message = decode(framing.build_message(llrp_const.MSG_READER_EVENT_NOTIFICATION, 0, body), registry)
    event = message.reader_event_notification_data.antenna_event
    assert event.event_type == llrp_const.AntennaEventType.Antenna_Disconnected
    assert event.antenna_id == 2


def test_decode_ro_access_report(registry):
    tag_body = (
        EPC96(epc=bytes.fromhex("AABBCCDDEEFF001122334455")).encode()
        + codec.encode_tv(llrp_const.TV_ANTENNA_ID, b'\x00\x01')
        + codec.encode_tv(llrp_const.TV_FIRST_SEEN_UTC, struct.pack('!Q', 1234))
        + C1G2ReadOpSpecResult(result=0, op_spec_id=1, read_data=[0x1234, 0x5678]).encode()
        + ImpinjSerializedTID(tid=[0xE280, 0x1160]).encode()
    )
    payload = codec.encode_tlv(llrp_const.PARAM_TAG_REPORT_DATA, tag_body) * 2
    message = decode(framing.build_message(llrp_const.MSG_RO_ACCESS_REPORT, 0, payload), registry)

    assert isinstance(message, ROAccessReport)
    assert len(message.tag_report_data) == 2
    entry = message.tag_report_data[0]
    assert entry.epc == EPC96(epc=bytes.fromhex("AABBCCDDEEFF001122334455"))
    assert entry.antenna_id == 1
    assert entry.first_seen_utc == 1234
    assert entry.op_spec_results == [C1G2ReadOpSpecResult(result=0, op_spec_id=1, read_data=[0x1234, 0x5678])]
    assert entry.custom == [ImpinjSerializedTID(tid=[0xE280, 0x1160])]


def test_tag_report_data_encodes_set_fields_only():
    entry = TagReportData(epc=EPC96(epc=bytes(12)), antenna_id=3)
    body = entry.encode()[4:]
    assert body == EPC96(epc=bytes(12)).encode() + codec.encode_tv(llrp_const.TV_ANTENNA_ID, b'\x00\x03')
