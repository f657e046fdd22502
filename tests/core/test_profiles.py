# tests/core/test_profiles.py

import random

import pytest

from uhf_llrp.core.profiles import (
    SessionOptions, InventoryProfile, QTScenario, RO_SPEC_ID, ACCESS_SPEC_ID,
    build_reader_config, build_ro_spec, build_access_spec, build_qt_op_specs, build_inventory_filters,
)
from uhf_llrp.protocols import framing
from uhf_llrp.protocols.llrp import constants as llrp_const
from uhf_llrp.protocols.llrp.messages import AddROSpec, AddAccessSpec, SetReaderConfig
from uhf_llrp.protocols.llrp.parameters import (
    AntennaConfiguration, ROReportSpec, C1G2InventoryCommand, C1G2Read, C1G2Write,
    ImpinjSetQTConfig, ImpinjGetQTConfig, ImpinjInventorySearchMode, ImpinjLowDutyCycle,
    ImpinjTagReportContentSelector,
)
from uhf_llrp.protocols.registry import get_the_type_registry, enroll_impinj_types

MB = llrp_const.C1G2MemoryBank


def qt_options(scenario: QTScenario, **kwargs) -> SessionOptions:
    return SessionOptions(profile=InventoryProfile.QT_ACCESS, qt_scenario=scenario, **kwargs)


def filtered_options(**kwargs) -> SessionOptions:
    return SessionOptions(profile=InventoryProfile.FILTERED, **kwargs)


# --- Options ---

def test_default_options():
    options = SessionOptions()
    assert options.profile == InventoryProfile.QT_ACCESS
    assert options.qt_scenario == QTScenario.READ_STANDARD_TID
    assert options.monitor_seconds == 1.0
    assert options.poll_reports is False
    assert options.checks_firmware is True
    assert options.access_range == llrp_const.ImpinjQTAccessRange.Normal_Range


def test_filtered_options():
    options = filtered_options()
    assert options.monitor_seconds == 60.0
    assert options.poll_reports is True
    assert options.checks_firmware is False


def test_monitor_duration_override():
    assert filtered_options(monitor_duration=2.5).monitor_seconds == 2.5


def test_short_range():
    assert SessionOptions(short_range=True).access_range == llrp_const.ImpinjQTAccessRange.Short_Range


@pytest.mark.parametrize("short_range, wire_value", [(False, 1), (True, 2)])
def test_access_range_is_never_unknown(short_range, wire_value):
    access_range = SessionOptions(short_range=short_range).access_range
    assert access_range != llrp_const.ImpinjQTAccessRange.Unknown
    assert int(access_range) == wire_value


@pytest.mark.parametrize("value, expected", [
    (0, QTScenario.READ_STANDARD_TID),
    (9, QTScenario.READ_RESERVED_MEMORY),
    (10, QTScenario.GET_QT_STATUS),
    (-1, QTScenario.GET_QT_STATUS),
])
def test_scenario_from_value(value, expected):
    assert QTScenario.from_value(value) == expected


# --- Reader configuration ---

def test_qt_reader_config():
    antenna, report_spec = build_reader_config(qt_options(QTScenario.READ_STANDARD_TID, tid=True))

    assert isinstance(antenna, AntennaConfiguration)
    assert antenna.antenna_id == 0
    (inventory,) = antenna.air_protocol_inventory_commands
    assert inventory.rf_control.mode_index == 2
    assert inventory.singulation_control.session == 1
    assert inventory.singulation_control.tag_population == 1
    search_mode, low_duty = inventory.custom
    assert search_mode == ImpinjInventorySearchMode(
        inventory_search_mode=llrp_const.ImpinjInventorySearchType.Single_Target)
    assert low_duty == ImpinjLowDutyCycle(low_duty_cycle_mode=llrp_const.ImpinjLowDutyCycleMode.Enabled,
                                          empty_field_timeout=10000, field_ping_interval=200)

    assert isinstance(report_spec, ROReportSpec)
    assert report_spec.ro_report_trigger == llrp_const.ROReportTriggerType.Upon_N_Tags_Or_End_Of_ROSpec
    assert report_spec.n == 1
    assert report_spec.tag_report_content_selector.enable_first_seen_timestamp is True
    (selector,) = report_spec.custom
    assert isinstance(selector, ImpinjTagReportContentSelector)
    assert selector.enable_serialized_tid.mode == llrp_const.ImpinjReportMode.Enabled


def test_qt_reader_config_without_tid():
    _, report_spec = build_reader_config(qt_options(QTScenario.READ_STANDARD_TID))
    assert report_spec.custom[0].enable_serialized_tid.mode == llrp_const.ImpinjReportMode.Disabled


def test_filtered_reader_config():
    antenna, report_spec = build_reader_config(filtered_options())
    (inventory,) = antenna.air_protocol_inventory_commands
    assert inventory.rf_control is None
    assert [type(p) for p in inventory.custom] == [ImpinjLowDutyCycle]
    assert report_spec.ro_report_trigger == llrp_const.ROReportTriggerType.None_
    assert report_spec.n == 0
    assert report_spec.custom == []


# --- ROSpec ---

def test_qt_ro_spec():
    ro_spec = build_ro_spec(qt_options(QTScenario.READ_STANDARD_TID))
    assert ro_spec.ro_spec_id == RO_SPEC_ID == 1111
    assert ro_spec.current_state == llrp_const.ROSpecState.Disabled
    assert ro_spec.ro_boundary_spec.ro_spec_start_trigger.ro_spec_start_trigger_type == llrp_const.ROSpecStartTriggerType.Null
    (ai_spec,) = ro_spec.spec_parameters
    assert ai_spec.antenna_ids == [0]
    (inventory_spec,) = ai_spec.inventory_parameter_specs
    assert inventory_spec.inventory_parameter_spec_id == 1234
    assert inventory_spec.antenna_configurations[0].air_protocol_inventory_commands == []


def test_filtered_ro_spec_carries_filters():
    ro_spec = build_ro_spec(filtered_options())
    antenna = ro_spec.spec_parameters[0].inventory_parameter_specs[0].antenna_configurations[0]
    (inventory,) = antenna.air_protocol_inventory_commands
    assert inventory.filters == build_inventory_filters()


def test_inventory_filters():
    first, second = build_inventory_filters()
    assert first.tag_inventory_mask.tag_mask == b'\x33'
    assert first.state_unaware_action.action == llrp_const.C1G2StateUnawareAction.Select_Unselect
    assert second.tag_inventory_mask.tag_mask == b'\x35'
    assert second.state_unaware_action.action == llrp_const.C1G2StateUnawareAction.Select_DoNothing
    for item in (first, second):
        assert item.t == llrp_const.C1G2TruncateAction.Do_Not_Truncate
        assert item.tag_inventory_mask.mb == MB.EPC
        assert item.tag_inventory_mask.pointer == 32
        assert item.tag_inventory_mask.tag_mask_bits == 8


# --- QT scenarios ---

def test_read_standard_tid():
    assert build_qt_op_specs(qt_options(QTScenario.READ_STANDARD_TID, password=0x1234)) == [
        C1G2Read(op_spec_id=1, access_password=0, mb=MB.TID, word_pointer=0, word_count=2),
    ]


def test_set_access_password_splits_words():
    (write,) = build_qt_op_specs(qt_options(QTScenario.SET_ACCESS_PASSWORD, password=7, new_password=0x12345678))
    assert write == C1G2Write(op_spec_id=10, access_password=7, mb=MB.Reserved, word_pointer=2,
                              write_data=[0x1234, 0x5678])


def test_read_private_memory():
    reads = build_qt_op_specs(qt_options(QTScenario.READ_PRIVATE_MEMORY))
    assert [(r.mb, r.word_pointer, r.word_count) for r in reads] == [(MB.TID, 0, 6), (MB.TID, 6, 6), (MB.User, 0, 32)]


def test_get_qt_status():
    assert build_qt_op_specs(qt_options(QTScenario.GET_QT_STATUS, password=99)) == [
        ImpinjGetQTConfig(op_spec_id=4, access_password=99),
    ]


@pytest.mark.parametrize("scenario, profile, op_spec_id", [
    (QTScenario.SET_QT_PRIVATE, llrp_const.ImpinjQTDataProfile.Private, 5),
    (QTScenario.SET_QT_PUBLIC, llrp_const.ImpinjQTDataProfile.Public, 6),
])
def test_set_qt_config(scenario, profile, op_spec_id):
    (op_spec,) = build_qt_op_specs(qt_options(scenario, password=5, short_range=True))
    assert op_spec == ImpinjSetQTConfig(
        op_spec_id=op_spec_id, access_password=5, data_profile=profile,
        access_range=llrp_const.ImpinjQTAccessRange.Short_Range,
        persistence=llrp_const.ImpinjQTPersistence.Permanent,
    )


def test_peek_private_memory():
    set_qt, *reads = build_qt_op_specs(qt_options(QTScenario.PEEK_PRIVATE_MEMORY, short_range=True))
    assert set_qt.persistence == llrp_const.ImpinjQTPersistence.Temporary
    assert set_qt.data_profile == llrp_const.ImpinjQTDataProfile.Private
    assert set_qt.access_range == llrp_const.ImpinjQTAccessRange.Normal_Range
    assert [(r.op_spec_id, r.mb, r.word_pointer, r.word_count) for r in reads] == [
        (7, MB.EPC, 2, 8), (8, MB.TID, 0, 6), (9, MB.User, 0, 32),
    ]


def test_write_user_memory_random_words():
    (write,) = build_qt_op_specs(qt_options(QTScenario.WRITE_USER_MEMORY), random.Random(7))
    assert write.mb == MB.User
    assert len(write.write_data) == 32
    assert all(0 <= word <= 0xFFFF for word in write.write_data)

    (again,) = build_qt_op_specs(qt_options(QTScenario.WRITE_USER_MEMORY), random.Random(7))
    assert again.write_data == write.write_data


def test_write_public_epc():
    (write,) = build_qt_op_specs(qt_options(QTScenario.WRITE_PUBLIC_EPC), random.Random(1))
    assert (write.op_spec_id, write.mb, write.word_pointer, len(write.write_data)) == (11, MB.TID, 6, 6)


def test_read_reserved_memory():
    (read,) = build_qt_op_specs(qt_options(QTScenario.READ_RESERVED_MEMORY))
    assert (read.op_spec_id, read.mb, read.word_pointer, read.word_count) == (12, MB.Reserved, 0, 4)


# --- AccessSpec ---

def test_qt_access_spec():
    access_spec = build_access_spec(qt_options(QTScenario.GET_QT_STATUS))
    assert access_spec.access_spec_id == ACCESS_SPEC_ID == 23
    assert access_spec.antenna_id == 0
    assert access_spec.ro_spec_id == 0
    (target,) = access_spec.access_command.tag_spec.target_tags
    assert (target.mb, target.match, target.pointer, target.tag_mask_bits, target.tag_data_bits) == (MB.EPC, True, 16, 0, 0)
    assert access_spec.access_command.op_specs == [ImpinjGetQTConfig(op_spec_id=4, access_password=0)]
    assert access_spec.access_report_spec.access_report_trigger == \
        llrp_const.AccessReportTriggerType.Whenever_ROReport_Is_Generated


def test_filtered_access_spec():
    access_spec = build_access_spec(filtered_options())
    (target,) = access_spec.access_command.tag_spec.target_tags
    assert target.tag_mask == bytes.fromhex("f800ff")
    assert target.tag_data == bytes.fromhex("300035")
    assert target.tag_mask_bits == target.tag_data_bits == 24
    assert access_spec.access_command.op_specs == [
        C1G2Read(op_spec_id=1, access_password=0, mb=MB.User, word_pointer=0, word_count=2),
    ]


# --- Wire level ---

@pytest.mark.parametrize("options", [
    qt_options(QTScenario.PEEK_PRIVATE_MEMORY, tid=True),
    qt_options(QTScenario.SET_QT_PUBLIC, short_range=True),
    filtered_options(),
])
def test_profile_trees_survive_the_wire(options):
    registry = enroll_impinj_types(get_the_type_registry())
    messages = [
        SetReaderConfig(message_id=1, parameters=build_reader_config(options)),
        AddROSpec(message_id=2, ro_spec=build_ro_spec(options)),
        AddAccessSpec(message_id=3, access_spec=build_access_spec(options, random.Random(3))),
    ]
    for message in messages:
        message_type, message_id, payload = framing.find_and_parse_message(bytearray(message.encode()))
        assert registry.decode_message(message_type, message_id, payload) == message
