# uhf_llrp/protocols/llrp/constants.py

"""
Constants of the EPCglobal Low Level Reader Protocol (LLRP 1.0.1) and of
the Impinj vendor extensions used by this library.
"""

from enum import IntEnum

# --- Message Header Constants ---
LLRP_VERSION: int = 1
MESSAGE_HEADER_FORMAT = '!HII'  # (version << 10) | type, length, message id
MESSAGE_HEADER_LENGTH = 10
MESSAGE_TYPE_MASK = 0x03FF
DEFAULT_LLRP_PORT: int = 5084
DEFAULT_MAX_FRAME_SIZE: int = 32 * 1024

# --- Parameter Header Constants ---
TLV_HEADER_FORMAT = '!HH'  # type, length (header included)
TLV_HEADER_LENGTH = 4
TLV_TYPE_MASK = 0x03FF
TV_FLAG = 0x80
CUSTOM_PARAMETER_HEADER_FORMAT = '!II'  # vendor id, subtype
CUSTOM_MESSAGE_HEADER_FORMAT = '!IB'  # vendor id, subtype

# --- Vendor Identifiers ---
VENDOR_IMPINJ: int = 25882

# --- Message Types ---
MSG_GET_READER_CAPABILITIES: int = 1
MSG_GET_READER_CONFIG: int = 2
MSG_SET_READER_CONFIG: int = 3
MSG_CLOSE_CONNECTION_RESPONSE: int = 4
MSG_GET_READER_CAPABILITIES_RESPONSE: int = 11
MSG_GET_READER_CONFIG_RESPONSE: int = 12
MSG_SET_READER_CONFIG_RESPONSE: int = 13
MSG_CLOSE_CONNECTION: int = 14
MSG_ADD_ROSPEC: int = 20
MSG_DELETE_ROSPEC: int = 21
MSG_START_ROSPEC: int = 22
MSG_STOP_ROSPEC: int = 23
MSG_ENABLE_ROSPEC: int = 24
MSG_DISABLE_ROSPEC: int = 25
MSG_ADD_ROSPEC_RESPONSE: int = 30
MSG_DELETE_ROSPEC_RESPONSE: int = 31
MSG_START_ROSPEC_RESPONSE: int = 32
MSG_STOP_ROSPEC_RESPONSE: int = 33
MSG_ENABLE_ROSPEC_RESPONSE: int = 34
MSG_DISABLE_ROSPEC_RESPONSE: int = 35
MSG_ADD_ACCESSSPEC: int = 40
MSG_DELETE_ACCESSSPEC: int = 41
MSG_ENABLE_ACCESSSPEC: int = 42
MSG_DISABLE_ACCESSSPEC: int = 43
MSG_ADD_ACCESSSPEC_RESPONSE: int = 50
MSG_DELETE_ACCESSSPEC_RESPONSE: int = 51
MSG_ENABLE_ACCESSSPEC_RESPONSE: int = 52
MSG_DISABLE_ACCESSSPEC_RESPONSE: int = 53
MSG_GET_REPORT: int = 60
MSG_RO_ACCESS_REPORT: int = 61
MSG_KEEPALIVE: int = 62
MSG_READER_EVENT_NOTIFICATION: int = 63
MSG_ENABLE_EVENTS_AND_REPORTS: int = 64
MSG_KEEPALIVE_ACK: int = 72
MSG_ERROR_MESSAGE: int = 100
MSG_CUSTOM_MESSAGE: int = 1023

# Impinj custom message subtypes
IMPINJ_ENABLE_EXTENSIONS: int = 21
IMPINJ_ENABLE_EXTENSIONS_RESPONSE: int = 22

# --- TV Parameter Types (value size in bytes) ---
TV_ANTENNA_ID: int = 1
TV_FIRST_SEEN_UTC: int = 2
TV_FIRST_SEEN_UPTIME: int = 3
TV_LAST_SEEN_UTC: int = 4
TV_LAST_SEEN_UPTIME: int = 5
TV_PEAK_RSSI: int = 6
TV_CHANNEL_INDEX: int = 7
TV_TAG_SEEN_COUNT: int = 8
TV_ROSPEC_ID: int = 9
TV_INVENTORY_PARAMETER_SPEC_ID: int = 10
TV_C1G2_CRC: int = 11
TV_C1G2_PC: int = 12
TV_EPC_96: int = 13
TV_SPEC_INDEX: int = 14
TV_CLIENT_REQUEST_OP_SPEC_RESULT: int = 15
TV_ACCESS_SPEC_ID: int = 16
TV_OP_SPEC_ID: int = 17
TV_C1G2_SINGULATION_DETAILS: int = 18
TV_C1G2_XPC_W1: int = 19
TV_C1G2_XPC_W2: int = 20

TV_VALUE_SIZES: dict[int, int] = {
    TV_ANTENNA_ID: 2,
    TV_FIRST_SEEN_UTC: 8,
    TV_FIRST_SEEN_UPTIME: 8,
    TV_LAST_SEEN_UTC: 8,
    TV_LAST_SEEN_UPTIME: 8,
    TV_PEAK_RSSI: 1,
    TV_CHANNEL_INDEX: 2,
    TV_TAG_SEEN_COUNT: 2,
    TV_ROSPEC_ID: 4,
    TV_INVENTORY_PARAMETER_SPEC_ID: 2,
    TV_C1G2_CRC: 2,
    TV_C1G2_PC: 2,
    TV_EPC_96: 12,
    TV_SPEC_INDEX: 2,
    TV_CLIENT_REQUEST_OP_SPEC_RESULT: 2,
    TV_ACCESS_SPEC_ID: 4,
    TV_OP_SPEC_ID: 2,
    TV_C1G2_SINGULATION_DETAILS: 4,
    TV_C1G2_XPC_W1: 2,
    TV_C1G2_XPC_W2: 2,
}

# --- TLV Parameter Types ---
PARAM_UTC_TIMESTAMP: int = 128
PARAM_UPTIME: int = 129
PARAM_GENERAL_DEVICE_CAPABILITIES: int = 137
PARAM_RECEIVE_SENSITIVITY_TABLE_ENTRY: int = 139
PARAM_PER_ANTENNA_AIR_PROTOCOL: int = 140
PARAM_GPIO_CAPABILITIES: int = 141
PARAM_LLRP_CAPABILITIES: int = 142
PARAM_REGULATORY_CAPABILITIES: int = 143
PARAM_ROSPEC: int = 177
PARAM_RO_BOUNDARY_SPEC: int = 178
PARAM_ROSPEC_START_TRIGGER: int = 179
PARAM_ROSPEC_STOP_TRIGGER: int = 182
PARAM_AISPEC: int = 183
PARAM_AISPEC_STOP_TRIGGER: int = 184
PARAM_INVENTORY_PARAMETER_SPEC: int = 186
PARAM_ACCESS_SPEC: int = 207
PARAM_ACCESS_SPEC_STOP_TRIGGER: int = 208
PARAM_ACCESS_COMMAND: int = 209
PARAM_ANTENNA_CONFIGURATION: int = 222
PARAM_RO_REPORT_SPEC: int = 237
PARAM_TAG_REPORT_CONTENT_SELECTOR: int = 238
PARAM_ACCESS_REPORT_SPEC: int = 239
PARAM_TAG_REPORT_DATA: int = 240
PARAM_EPC_DATA: int = 241
PARAM_READER_EVENT_NOTIFICATION_DATA: int = 246
PARAM_HOPPING_EVENT: int = 247
PARAM_GPI_EVENT: int = 248
PARAM_ROSPEC_EVENT: int = 249
PARAM_REPORT_BUFFER_LEVEL_WARNING_EVENT: int = 250
PARAM_REPORT_BUFFER_OVERFLOW_ERROR_EVENT: int = 251
PARAM_READER_EXCEPTION_EVENT: int = 252
PARAM_RF_SURVEY_EVENT: int = 253
PARAM_AISPEC_EVENT: int = 254
PARAM_ANTENNA_EVENT: int = 255
PARAM_CONNECTION_ATTEMPT_EVENT: int = 256
PARAM_CONNECTION_CLOSE_EVENT: int = 257
PARAM_LLRP_STATUS: int = 287
PARAM_FIELD_ERROR: int = 288
PARAM_PARAMETER_ERROR: int = 289
PARAM_C1G2_LLRP_CAPABILITIES: int = 327
PARAM_C1G2_INVENTORY_COMMAND: int = 330
PARAM_C1G2_FILTER: int = 331
PARAM_C1G2_TAG_INVENTORY_MASK: int = 332
PARAM_C1G2_STATE_AWARE_FILTER_ACTION: int = 333
PARAM_C1G2_STATE_UNAWARE_FILTER_ACTION: int = 334
PARAM_C1G2_RF_CONTROL: int = 335
PARAM_C1G2_SINGULATION_CONTROL: int = 336
PARAM_C1G2_TAG_SPEC: int = 338
PARAM_C1G2_TARGET_TAG: int = 339
PARAM_C1G2_READ: int = 341
PARAM_C1G2_WRITE: int = 342
PARAM_C1G2_EPC_MEMORY_SELECTOR: int = 348
PARAM_C1G2_READ_OP_SPEC_RESULT: int = 349
PARAM_C1G2_WRITE_OP_SPEC_RESULT: int = 350
PARAM_CUSTOM: int = 1023

# --- Impinj Custom Parameter Subtypes ---
IMPINJ_SET_QT_CONFIG: int = 46
IMPINJ_SET_QT_CONFIG_OP_SPEC_RESULT: int = 47
IMPINJ_GET_QT_CONFIG: int = 48
IMPINJ_GET_QT_CONFIG_OP_SPEC_RESULT: int = 49
IMPINJ_INVENTORY_SEARCH_MODE: int = 23
IMPINJ_LOW_DUTY_CYCLE: int = 28
IMPINJ_TAG_REPORT_CONTENT_SELECTOR: int = 50
IMPINJ_ENABLE_SERIALIZED_TID: int = 51
IMPINJ_ENABLE_RF_PHASE_ANGLE: int = 52
IMPINJ_ENABLE_PEAK_RSSI: int = 53
IMPINJ_SERIALIZED_TID: int = 55
IMPINJ_RF_PHASE_ANGLE: int = 56
IMPINJ_PEAK_RSSI: int = 57


# --- Field Enumerations ---

class StatusCode(IntEnum):
    M_Success = 0
    M_ParameterError = 100
    M_FieldError = 101
    M_UnexpectedParameter = 102
    M_MissingParameter = 103
    M_DuplicateParameter = 104
    M_OverflowParameter = 105
    M_OverflowField = 106
    M_UnknownParameter = 107
    M_UnknownField = 108
    M_UnsupportedMessage = 109
    M_UnsupportedVersion = 110
    M_UnsupportedParameter = 111
    P_ParameterError = 200
    P_FieldError = 201
    P_UnexpectedParameter = 202
    P_MissingParameter = 203
    P_DuplicateParameter = 204
    P_OverflowParameter = 205
    P_OverflowField = 206
    P_UnknownParameter = 207
    P_UnknownField = 208
    P_UnsupportedParameter = 209
    A_Invalid = 300
    A_OutOfRange = 301
    R_DeviceError = 401


class GetReaderCapabilitiesRequestedData(IntEnum):
    All = 0
    General_Device_Capabilities = 1
    LLRP_Capabilities = 2
    Regulatory_Capabilities = 3
    LLRP_Air_Protocol_Capabilities = 4


class ConnectionAttemptStatusType(IntEnum):
    Success = 0
    Failed_A_Reader_Initiated_Connection_Already_Exists = 1
    Failed_A_Client_Initiated_Connection_Already_Exists = 2
    Failed_Reason_Other_Than_A_Connection_Already_Exists = 3
    Another_Connection_Attempted = 4


class AntennaEventType(IntEnum):
    Antenna_Disconnected = 0
    Antenna_Connected = 1


class ROSpecState(IntEnum):
    Disabled = 0
    Inactive = 1
    Active = 2


class ROSpecStartTriggerType(IntEnum):
    Null = 0
    Immediate = 1
    Periodic = 2
    GPI = 3


class ROSpecStopTriggerType(IntEnum):
    Null = 0
    Duration = 1
    GPI_With_Timeout = 2


class AISpecStopTriggerType(IntEnum):
    Null = 0
    Duration = 1
    GPI_With_Timeout = 2
    Tag_Observation = 3


class AirProtocols(IntEnum):
    Unspecified = 0
    EPCGlobalClass1Gen2 = 1


class ROReportTriggerType(IntEnum):
    None_ = 0
    Upon_N_Tags_Or_End_Of_AISpec = 1
    Upon_N_Tags_Or_End_Of_ROSpec = 2


class AccessSpecState(IntEnum):
    Disabled = 0
    Active = 1


class AccessSpecStopTriggerType(IntEnum):
    Null = 0
    Operation_Count = 1


class AccessReportTriggerType(IntEnum):
    Whenever_ROReport_Is_Generated = 0
    End_Of_AccessSpec = 1


class C1G2TruncateAction(IntEnum):
    Unspecified = 0
    Do_Not_Truncate = 1
    Truncate = 2


class C1G2StateUnawareAction(IntEnum):
    Select_Unselect = 0
    Select_DoNothing = 1
    DoNothing_Unselect = 2
    Unselect_DoNothing = 3
    Unselect_Select = 4
    DoNothing_Select = 5


class C1G2MemoryBank(IntEnum):
    Reserved = 0
    EPC = 1
    TID = 2
    User = 3


class C1G2ReadResultType(IntEnum):
    Success = 0
    Nonspecific_Tag_Error = 1
    No_Response_From_Tag = 2
    Nonspecific_Reader_Error = 3
    Memory_Overrun_Error = 4
    Memory_Locked_Error = 5
    Incorrect_Password_Error = 6


class C1G2WriteResultType(IntEnum):
    Success = 0
    Tag_Memory_Overrun_Error = 1
    Tag_Memory_Locked_Error = 2
    Insufficient_Power = 3
    Nonspecific_Tag_Error = 4
    No_Response_From_Tag = 5
    Nonspecific_Reader_Error = 6
    Incorrect_Password_Error = 7


class ImpinjInventorySearchType(IntEnum):
    Reader_Selected = 0
    Single_Target = 1
    Dual_Target = 2
    Single_Target_With_Suppression = 3


class ImpinjLowDutyCycleMode(IntEnum):
    Disabled = 0
    Enabled = 1


class ImpinjReportMode(IntEnum):
    """Shared by the EnableSerializedTID / EnableRFPhaseAngle / EnablePeakRSSI parameters."""
    Disabled = 0
    Enabled = 1


class ImpinjQTDataProfile(IntEnum):
    Unknown = 0
    Private = 1
    Public = 2


class ImpinjQTAccessRange(IntEnum):
    Unknown = 0
    Normal_Range = 1
    Short_Range = 2


class ImpinjQTPersistence(IntEnum):
    Unknown = 0
    Temporary = 1
    Permanent = 2


class ImpinjSetQTConfigResultType(IntEnum):
    Success = 0
    Insufficient_Power = 1
    Nonspecific_Tag_Error = 2
    No_Response_From_Tag = 3
    Nonspecific_Reader_Error = 4
    Incorrect_Password_Error = 5


class ImpinjGetQTConfigResultType(IntEnum):
    Success = 0
    Nonspecific_Tag_Error = 1
    No_Response_From_Tag = 2
    Nonspecific_Reader_Error = 3
    Incorrect_Password_Error = 4
