# uhf_llrp/utils/report_format.py

"""
Text rendering of tag report entries.

Every formatter returns a plain string. The line builders cap their result
to ``capacity - 1`` characters, so a line never grows past the terminal
width the caller asked for; truncation is silent.
"""

from typing import Callable, Dict, Optional, Sequence, Type

from uhf_llrp.protocols.llrp import constants as llrp_const
from uhf_llrp.protocols.llrp.parameters import (
    Parameter, EPC96, EPCData, TagReportData,
    C1G2ReadOpSpecResult, C1G2WriteOpSpecResult,
    ImpinjSetQTConfigOpSpecResult, ImpinjGetQTConfigOpSpecResult, ImpinjSerializedTID,
)

DEFAULT_LINE_CAPACITY = 1024
DEFAULT_FIELD_CAPACITY = 64

NULL_EPC_TEXT = "--null epc---"
UNKNOWN_EPC_TEXT = "---unknown-epc-data-type---"

QT_DATA_PROFILE_NAMES = ("Unknown", "Private", "Public")
QT_ACCESS_RANGE_NAMES = ("Unknown", "Normal", "Short")


def cap(text: str, capacity: int) -> str:
    """Cuts text to at most capacity - 1 characters."""
    return text[:max(capacity - 1, 0)]


def _hex_groups(values: Sequence[int]) -> str:
    # "%02X" per value, '-' before every even index after the first
    parts = []
    for i, value in enumerate(values):
        if i > 0 and i % 2 == 0:
            parts.append('-')
        parts.append(f"{value:02X}")
    return ''.join(parts)


def _table_lookup(table: Sequence[str], ordinal: int) -> str:
    if 0 <= ordinal < len(table):
        return table[ordinal]
    return table[0]


def format_epc(epc: Optional[Parameter], prefix: str = "") -> str:
    """
    Renders an EPC as hex byte pairs grouped by two bytes.

    EPC96 always yields 12 bytes, EPCData yields ceil(bits / 8) bytes, so
    the same 96 bit pattern renders identically in both encodings.
    """
    if epc is None:
        return prefix + NULL_EPC_TEXT
    if isinstance(epc, EPC96):
        data = bytes(epc.epc)[:12]
    elif isinstance(epc, EPCData):
        data = bytes(epc.epc)[:(epc.epc_bit_count + 7) // 8]
    else:
        return prefix + UNKNOWN_EPC_TEXT
    return prefix + _hex_groups(data)


def format_read_result(result: C1G2ReadOpSpecResult, prefix: str = "") -> str:
    text = f"{prefix}result={int(result.result)}"
    if result.result == llrp_const.C1G2ReadResultType.Success:
        text += " Data=" + '-'.join(f"{word:04x}" for word in result.read_data)
    return text


def format_write_result(result: C1G2WriteOpSpecResult, prefix: str = "") -> str:
    return f"{prefix}result={int(result.result)}"


def format_set_qt_result(result: ImpinjSetQTConfigOpSpecResult, prefix: str = "") -> str:
    return f"{prefix}result={int(result.result)}"


def format_get_qt_result(result: ImpinjGetQTConfigOpSpecResult, prefix: str = "") -> str:
    """Result code, plus the decoded QT data profile and access range on success."""
    text = f"{prefix}result={int(result.result)} "
    if result.result == llrp_const.ImpinjGetQTConfigResultType.Success:
        data = _table_lookup(QT_DATA_PROFILE_NAMES, int(result.data_profile))
        access_range = _table_lookup(QT_ACCESS_RANGE_NAMES, int(result.access_range))
        text += f"data={data} range={access_range}\n"
    return text


def format_serialized_tid(tid: ImpinjSerializedTID, prefix: str = "") -> str:
    return prefix + _hex_groups(tid.tid)


# Op spec result type -> (formatter, line prefix)
OP_SPEC_RESULT_FORMATTERS: Dict[Type[Parameter], tuple[Callable[[Parameter, str], str], str]] = {
    C1G2ReadOpSpecResult: (format_read_result, "\n    READ "),
    C1G2WriteOpSpecResult: (format_write_result, "\n    WRITE "),
    ImpinjSetQTConfigOpSpecResult: (format_set_qt_result, "\n    SETQT "),
    ImpinjGetQTConfigOpSpecResult: (format_get_qt_result, "\n    GETQT "),
}


def format_op_spec_result(result: Parameter) -> str:
    """One labeled segment for an op spec result; unhandled kinds are named, not dropped."""
    entry = OP_SPEC_RESULT_FORMATTERS.get(type(result))
    if entry is None:
        return f"\n    {result.name} (not decoded)"
    formatter, prefix = entry
    return formatter(result, prefix)


def format_tag_report(entry: TagReportData, capacity: int = DEFAULT_LINE_CAPACITY) -> str:
    """
    Full line for one tag report entry: the EPC, then each op spec result
    and each serialized TID on its own indented line, in reader order.
    """
    parts = [format_epc(entry.epc, "epc=")]
    for result in entry.op_spec_results:
        parts.append(format_op_spec_result(result))
    for record in entry.custom:
        if isinstance(record, ImpinjSerializedTID):
            parts.append(format_serialized_tid(record, "\n    SERIAL-TID "))
    return cap(''.join(parts), capacity)


def format_compact_read_result(result: C1G2ReadOpSpecResult) -> str:
    text = f"ReadResult {int(result.result)}"
    if result.result == llrp_const.C1G2ReadResultType.Success:
        text += ": Data  " + '-'.join(f"{word:04x}" for word in result.read_data)
    return text


def format_compact_tag_report(entry: TagReportData, field_capacity: int = DEFAULT_FIELD_CAPACITY) -> str:
    """
    Single line 'EPC: <epc>  <read>' where <read> is the last read result
    of the entry. Each of the two fields is capped separately.
    """
    epc_text = cap(format_epc(entry.epc), field_capacity)
    read_text = ""
    for result in entry.op_spec_results:
        if isinstance(result, C1G2ReadOpSpecResult):
            read_text = cap(format_compact_read_result(result), field_capacity)
    return f"EPC: {epc_text}  {read_text}"
