# uhf_llrp/core/profiles.py

"""
Run options and the LLRP configuration trees each inventory profile installs.

Two profiles exist:

* ``qt``: Impinj QT access. Single-target inventory with low duty cycle,
  a report per tag, an access spec running one of the QT scenarios, and a
  one second monitoring window printing every op spec result.
* ``filtered``: filtered inventory. Two C1G2 select filters in the ROSpec,
  a targeted user memory read, reports fetched with GET_REPORT polls over a
  sixty second window, one compact line per tag.
"""

import random
from dataclasses import dataclass
from enum import Enum, IntEnum
from typing import List, Optional

from uhf_llrp.protocols.llrp import constants as llrp_const
from uhf_llrp.protocols.llrp.parameters import (
    Parameter, AntennaConfiguration, C1G2InventoryCommand, C1G2RFControl, C1G2SingulationControl,
    C1G2Filter, C1G2TagInventoryMask, C1G2TagInventoryStateUnawareFilterAction,
    ImpinjInventorySearchMode, ImpinjLowDutyCycle, ImpinjTagReportContentSelector,
    ImpinjEnableRFPhaseAngle, ImpinjEnablePeakRSSI, ImpinjEnableSerializedTID,
    ROReportSpec, TagReportContentSelector, C1G2EPCMemorySelector,
    ROSpec, ROBoundarySpec, ROSpecStartTrigger, ROSpecStopTrigger, AISpec, AISpecStopTrigger,
    InventoryParameterSpec, AccessSpec, AccessSpecStopTrigger, AccessCommand, AccessReportSpec,
    C1G2TagSpec, C1G2TargetTag, C1G2Read, C1G2Write, ImpinjSetQTConfig, ImpinjGetQTConfig,
)

RO_SPEC_ID = 1111
ACCESS_SPEC_ID = 23
INVENTORY_PARAMETER_SPEC_ID = 1234
ALL_ANTENNAS = 0

QT_MONITOR_SECONDS = 1.0
FILTERED_MONITOR_SECONDS = 60.0

MB = llrp_const.C1G2MemoryBank


class InventoryProfile(Enum):
    QT_ACCESS = "qt"
    FILTERED = "filtered"


class QTScenario(IntEnum):
    """Access operations run against each singulated tag in the QT profile."""
    READ_STANDARD_TID = 0
    SET_ACCESS_PASSWORD = 1
    READ_PRIVATE_MEMORY = 2
    GET_QT_STATUS = 3
    SET_QT_PRIVATE = 4
    SET_QT_PUBLIC = 5
    PEEK_PRIVATE_MEMORY = 6
    WRITE_USER_MEMORY = 7
    WRITE_PUBLIC_EPC = 8
    READ_RESERVED_MEMORY = 9

    @classmethod
    def from_value(cls, value: int) -> "QTScenario":
        """Unknown scenario numbers fall back to GET_QT_STATUS."""
        try:
            return cls(value)
        except ValueError:
            return cls.GET_QT_STATUS


QT_SCENARIO_HELP = {
    QTScenario.READ_STANDARD_TID: "Read standard TID memory",
    QTScenario.SET_ACCESS_PASSWORD: "set tag password (uses -p, -n)",
    QTScenario.READ_PRIVATE_MEMORY: "Read private memory data without QT commands",
    QTScenario.GET_QT_STATUS: "read QT status of tag (uses -p)",
    QTScenario.SET_QT_PRIVATE: "set QT status of tag to private (uses -p, -s)",
    QTScenario.SET_QT_PUBLIC: "set QT status of tag to public (uses -p, -s)",
    QTScenario.PEEK_PRIVATE_MEMORY: "Peek at private memory data with temporary QT command (uses -p)",
    QTScenario.WRITE_USER_MEMORY: "Write 32 words of user data to random values",
    QTScenario.WRITE_PUBLIC_EPC: "Write 6 words of public EPC data to random values",
    QTScenario.READ_RESERVED_MEMORY: "Read Reserved memory",
}


@dataclass
class SessionOptions:
    """Everything a run needs besides the reader address."""
    profile: InventoryProfile = InventoryProfile.QT_ACCESS
    qt_scenario: QTScenario = QTScenario.READ_STANDARD_TID
    password: int = 0
    new_password: int = 0
    short_range: bool = False
    tid: bool = False
    verbose: int = 0
    monitor_duration: Optional[float] = None  # seconds, None = profile default

    @property
    def monitor_seconds(self) -> float:
        if self.monitor_duration is not None:
            return self.monitor_duration
        if self.profile == InventoryProfile.FILTERED:
            return FILTERED_MONITOR_SECONDS
        return QT_MONITOR_SECONDS

    @property
    def poll_reports(self) -> bool:
        return self.profile == InventoryProfile.FILTERED

    @property
    def checks_firmware(self) -> bool:
        return self.profile == InventoryProfile.QT_ACCESS

    @property
    def access_range(self) -> llrp_const.ImpinjQTAccessRange:
        # the flag selects Short_Range; it is not sent as the raw 0/1 ordinal (Unknown/Normal_Range)
        if self.short_range:
            return llrp_const.ImpinjQTAccessRange.Short_Range
        return llrp_const.ImpinjQTAccessRange.Normal_Range


# --- Reader configuration ---

def _low_duty_cycle() -> ImpinjLowDutyCycle:
    return ImpinjLowDutyCycle(
        low_duty_cycle_mode=llrp_const.ImpinjLowDutyCycleMode.Enabled,
        empty_field_timeout=10000,
        field_ping_interval=200,
    )


def _first_seen_content_selector() -> TagReportContentSelector:
    return TagReportContentSelector(
        enable_first_seen_timestamp=True,
        air_protocol_epc_memory_selectors=[C1G2EPCMemorySelector(enable_crc=False, enable_pc_bits=False)],
    )


def _report_mode(enabled: bool) -> llrp_const.ImpinjReportMode:
    return llrp_const.ImpinjReportMode.Enabled if enabled else llrp_const.ImpinjReportMode.Disabled


def build_reader_config(options: SessionOptions) -> List[Parameter]:
    """Parameters of the profile's SET_READER_CONFIG: antenna settings and report spec."""
    if options.profile == InventoryProfile.FILTERED:
        inventory = C1G2InventoryCommand(tag_inventory_state_aware=False, custom=[_low_duty_cycle()])
        report_spec = ROReportSpec(
            ro_report_trigger=llrp_const.ROReportTriggerType.None_,
            n=0,
            tag_report_content_selector=_first_seen_content_selector(),
        )
    else:
        inventory = C1G2InventoryCommand(
            tag_inventory_state_aware=False,
            rf_control=C1G2RFControl(mode_index=2, tari=0),  # DRM M=4, tari ignored by the reader
            singulation_control=C1G2SingulationControl(session=1, tag_population=1, tag_transit_time=0),
            custom=[
                ImpinjInventorySearchMode(inventory_search_mode=llrp_const.ImpinjInventorySearchType.Single_Target),
                _low_duty_cycle(),
            ],
        )
        report_spec = ROReportSpec(
            ro_report_trigger=llrp_const.ROReportTriggerType.Upon_N_Tags_Or_End_Of_ROSpec,
            n=1,
            tag_report_content_selector=_first_seen_content_selector(),
            custom=[ImpinjTagReportContentSelector(
                enable_rf_phase_angle=ImpinjEnableRFPhaseAngle(mode=llrp_const.ImpinjReportMode.Disabled),
                enable_peak_rssi=ImpinjEnablePeakRSSI(mode=llrp_const.ImpinjReportMode.Disabled),
                enable_serialized_tid=ImpinjEnableSerializedTID(mode=_report_mode(options.tid)),
            )],
        )

    antenna = AntennaConfiguration(antenna_id=ALL_ANTENNAS, air_protocol_inventory_commands=[inventory])
    return [antenna, report_spec]


# --- ROSpec ---

def build_inventory_filters() -> List[C1G2Filter]:
    """Select tags whose EPC header is 0x33 (GID) and keep those with 0x35 (GRAI)."""
    def _filter(mask: int, action: llrp_const.C1G2StateUnawareAction) -> C1G2Filter:
        return C1G2Filter(
            t=llrp_const.C1G2TruncateAction.Do_Not_Truncate,
            tag_inventory_mask=C1G2TagInventoryMask(mb=MB.EPC, pointer=32, tag_mask_bits=8, tag_mask=bytes([mask])),
            state_unaware_action=C1G2TagInventoryStateUnawareFilterAction(action=action),
        )

    return [
        _filter(0x33, llrp_const.C1G2StateUnawareAction.Select_Unselect),
        _filter(0x35, llrp_const.C1G2StateUnawareAction.Select_DoNothing),
    ]


def build_ro_spec(options: SessionOptions) -> ROSpec:
    """
    ROSpec 1111: started and stopped by explicit messages, one AISpec on all
    antennas. The filtered profile adds its C1G2 filters to the antenna
    configuration.
    """
    antenna = AntennaConfiguration(antenna_id=ALL_ANTENNAS)
    if options.profile == InventoryProfile.FILTERED:
        antenna.air_protocol_inventory_commands.append(
            C1G2InventoryCommand(tag_inventory_state_aware=False, filters=build_inventory_filters())
        )

    ai_spec = AISpec(
        antenna_ids=[ALL_ANTENNAS],
        ai_spec_stop_trigger=AISpecStopTrigger(
            ai_spec_stop_trigger_type=llrp_const.AISpecStopTriggerType.Null, duration_trigger=0,
        ),
        inventory_parameter_specs=[InventoryParameterSpec(
            inventory_parameter_spec_id=INVENTORY_PARAMETER_SPEC_ID,
            protocol_id=llrp_const.AirProtocols.EPCGlobalClass1Gen2,
            antenna_configurations=[antenna],
        )],
    )
    return ROSpec(
        ro_spec_id=RO_SPEC_ID,
        priority=0,
        current_state=llrp_const.ROSpecState.Disabled,
        ro_boundary_spec=ROBoundarySpec(
            ro_spec_start_trigger=ROSpecStartTrigger(
                ro_spec_start_trigger_type=llrp_const.ROSpecStartTriggerType.Null,
            ),
            ro_spec_stop_trigger=ROSpecStopTrigger(
                ro_spec_stop_trigger_type=llrp_const.ROSpecStopTriggerType.Null, duration_trigger_value=0,
            ),
        ),
        spec_parameters=[ai_spec],
    )


# --- AccessSpec ---

def _read(op_spec_id: int, mb: int, word_pointer: int, word_count: int) -> C1G2Read:
    # reads need no access password
    return C1G2Read(op_spec_id=op_spec_id, access_password=0, mb=mb, word_pointer=word_pointer, word_count=word_count)


def _random_words(rng: random.Random, count: int) -> List[int]:
    return [rng.getrandbits(16) for _ in range(count)]


def build_qt_op_specs(options: SessionOptions, rng: Optional[random.Random] = None) -> List[Parameter]:
    """Op specs of the selected QT scenario, in execution order."""
    rng = rng or random.Random()
    scenario = QTScenario.from_value(int(options.qt_scenario))
    password = options.password

    if scenario == QTScenario.READ_STANDARD_TID:
        return [_read(1, MB.TID, 0, 2)]

    if scenario == QTScenario.SET_ACCESS_PASSWORD:
        words = [(options.new_password >> 16) & 0xFFFF, options.new_password & 0xFFFF]
        return [C1G2Write(op_spec_id=10, access_password=password, mb=MB.Reserved, word_pointer=2, write_data=words)]

    if scenario == QTScenario.READ_PRIVATE_MEMORY:
        return [
            _read(2, MB.TID, 0, 6),   # standard TID plus 48 bit serial
            _read(2, MB.TID, 6, 6),   # public EPC
            _read(3, MB.User, 0, 32),
        ]

    if scenario == QTScenario.SET_QT_PRIVATE:
        return [ImpinjSetQTConfig(
            op_spec_id=5, access_password=password,
            data_profile=llrp_const.ImpinjQTDataProfile.Private,
            access_range=options.access_range,
            persistence=llrp_const.ImpinjQTPersistence.Permanent,
        )]

    if scenario == QTScenario.SET_QT_PUBLIC:
        return [ImpinjSetQTConfig(
            op_spec_id=6, access_password=password,
            data_profile=llrp_const.ImpinjQTDataProfile.Public,
            access_range=options.access_range,
            persistence=llrp_const.ImpinjQTPersistence.Permanent,
        )]

    if scenario == QTScenario.PEEK_PRIVATE_MEMORY:
        return [
            ImpinjSetQTConfig(
                op_spec_id=6, access_password=password,
                data_profile=llrp_const.ImpinjQTDataProfile.Private,
                access_range=llrp_const.ImpinjQTAccessRange.Normal_Range,
                persistence=llrp_const.ImpinjQTPersistence.Temporary,
            ),
            _read(7, MB.EPC, 2, 8),   # assumes a 128 bit private EPC
            _read(8, MB.TID, 0, 6),
            _read(9, MB.User, 0, 32),
        ]

    if scenario == QTScenario.WRITE_USER_MEMORY:
        return [C1G2Write(op_spec_id=10, access_password=password, mb=MB.User, word_pointer=0,
                          write_data=_random_words(rng, 32))]

    if scenario == QTScenario.WRITE_PUBLIC_EPC:
        return [C1G2Write(op_spec_id=11, access_password=password, mb=MB.TID, word_pointer=6,
                          write_data=_random_words(rng, 6))]

    if scenario == QTScenario.READ_RESERVED_MEMORY:
        return [_read(12, MB.Reserved, 0, 4)]  # kill and access passwords

    return [ImpinjGetQTConfig(op_spec_id=4, access_password=password)]


def build_access_spec(options: SessionOptions, rng: Optional[random.Random] = None) -> AccessSpec:
    """AccessSpec 23, valid for all antennas and all ROSpecs."""
    if options.profile == InventoryProfile.FILTERED:
        target = C1G2TargetTag(
            mb=MB.EPC, match=True, pointer=16,
            tag_mask_bits=24, tag_mask=bytes([0xF8, 0x00, 0xFF]),
            tag_data_bits=24, tag_data=bytes([0x30, 0x00, 0x35]),
        )
        op_specs: List[Parameter] = [_read(1, MB.User, 0, 2)]
    else:
        target = C1G2TargetTag(mb=MB.EPC, match=True, pointer=16)
        op_specs = build_qt_op_specs(options, rng)

    return AccessSpec(
        access_spec_id=ACCESS_SPEC_ID,
        antenna_id=ALL_ANTENNAS,
        protocol_id=llrp_const.AirProtocols.EPCGlobalClass1Gen2,
        current_state=llrp_const.AccessSpecState.Disabled,
        ro_spec_id=0,
        access_spec_stop_trigger=AccessSpecStopTrigger(
            access_spec_stop_trigger=llrp_const.AccessSpecStopTriggerType.Null, operation_count_value=0,
        ),
        access_command=AccessCommand(tag_spec=C1G2TagSpec(target_tags=[target]), op_specs=op_specs),
        access_report_spec=AccessReportSpec(
            access_report_trigger=llrp_const.AccessReportTriggerType.Whenever_ROReport_Is_Generated,
        ),
    )
