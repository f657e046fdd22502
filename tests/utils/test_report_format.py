# tests/utils/test_report_format.py

import pytest

from uhf_llrp.protocols.llrp import constants as llrp_const
from uhf_llrp.protocols.llrp.parameters import (
    EPC96, EPCData, TagReportData, UnknownParameter,
    C1G2ReadOpSpecResult, C1G2WriteOpSpecResult,
    ImpinjSetQTConfigOpSpecResult, ImpinjGetQTConfigOpSpecResult, ImpinjSerializedTID, ImpinjPeakRSSI,
)
from uhf_llrp.utils import report_format
from uhf_llrp.utils.report_format import (
    cap, format_epc, format_read_result, format_get_qt_result, format_serialized_tid,
    format_op_spec_result, format_tag_report, format_compact_tag_report,
)

EPC_BYTES = bytes.fromhex("AABBCCDDEEFF001122334455")
EPC_TEXT = "AABB-CCDD-EEFF-0011-2233-4455"


def read_ok(words=(0x1234, 0x5678), op_spec_id=1) -> C1G2ReadOpSpecResult:
    return C1G2ReadOpSpecResult(result=llrp_const.C1G2ReadResultType.Success, op_spec_id=op_spec_id,
                                read_data=list(words))


# --- EPC ---

def test_format_epc96():
    assert format_epc(EPC96(epc=EPC_BYTES)) == EPC_TEXT


def test_format_epc_data_matches_epc96():
    epc_data = EPCData(epc_bit_count=96, epc=EPC_BYTES)
    assert format_epc(epc_data) == format_epc(EPC96(epc=EPC_BYTES))


def test_format_epc_data_uses_bit_count():
    # 100 bits -> 13 bytes, trailing bytes beyond the bit count are ignored
    epc_data = EPCData(epc_bit_count=100, epc=EPC_BYTES + bytes([0xF0, 0xEE]))
    assert format_epc(epc_data) == EPC_TEXT + "-F0"


def test_format_epc_with_prefix():
    assert format_epc(EPC96(epc=EPC_BYTES), "epc=") == "epc=" + EPC_TEXT


def test_format_epc_null():
    assert format_epc(None, "epc=") == "epc=--null epc---"


def test_format_epc_unknown_kind():
    assert format_epc(UnknownParameter(param_type=999)) == "---unknown-epc-data-type---"


# --- Op spec results ---

def test_format_read_result_success():
    assert format_read_result(read_ok()) == "result=0 Data=1234-5678"


def test_format_read_result_lowercase_hex_words():
    assert format_read_result(read_ok([0xABCD, 0x0001])) == "result=0 Data=abcd-0001"


def test_format_read_result_failure_has_no_data():
    result = C1G2ReadOpSpecResult(result=llrp_const.C1G2ReadResultType.No_Response_From_Tag,
                                  read_data=[0x1234])
    assert format_read_result(result, "R ") == "R result=2"


@pytest.mark.parametrize("profile, access_range, expected", [
    (llrp_const.ImpinjQTDataProfile.Private, llrp_const.ImpinjQTAccessRange.Short_Range, "data=Private range=Short\n"),
    (llrp_const.ImpinjQTDataProfile.Public, llrp_const.ImpinjQTAccessRange.Normal_Range, "data=Public range=Normal\n"),
    (7, 9, "data=Unknown range=Unknown\n"),
])
def test_format_get_qt_result_success(profile, access_range, expected):
    result = ImpinjGetQTConfigOpSpecResult(result=llrp_const.ImpinjGetQTConfigResultType.Success,
                                           data_profile=profile, access_range=access_range)
    assert format_get_qt_result(result) == "result=0 " + expected


def test_format_get_qt_result_failure():
    result = ImpinjGetQTConfigOpSpecResult(result=llrp_const.ImpinjGetQTConfigResultType.No_Response_From_Tag)
    assert format_get_qt_result(result) == "result=2 "


def test_format_serialized_tid_groups_two_words():
    tid = ImpinjSerializedTID(tid=[0xE280, 0x1160, 0x2000])
    assert format_serialized_tid(tid) == "E2801160-2000"


@pytest.mark.parametrize("result, expected", [
    (C1G2WriteOpSpecResult(result=llrp_const.C1G2WriteResultType.Insufficient_Power), "\n    WRITE result=3"),
    (ImpinjSetQTConfigOpSpecResult(result=llrp_const.ImpinjSetQTConfigResultType.Success), "\n    SETQT result=0"),
])
def test_format_op_spec_result_labels(result, expected):
    assert format_op_spec_result(result) == expected


def test_format_op_spec_result_unhandled_kind_is_named():
    assert format_op_spec_result(ImpinjPeakRSSI(rssi=-5500)) == "\n    ImpinjPeakRSSI (not decoded)"


# --- Full lines ---

def test_format_tag_report_epc_and_read():
    entry = TagReportData(epc=EPC96(epc=EPC_BYTES), op_spec_results=[read_ok()])
    assert format_tag_report(entry) == f"epc={EPC_TEXT}\n    READ result=0 Data=1234-5678"


def test_format_tag_report_keeps_result_order_and_appends_tid():
    entry = TagReportData(
        epc=EPC96(epc=EPC_BYTES),
        op_spec_results=[
            ImpinjSetQTConfigOpSpecResult(result=llrp_const.ImpinjSetQTConfigResultType.Success),
            read_ok([0x0102]),
        ],
        custom=[ImpinjPeakRSSI(rssi=-4000), ImpinjSerializedTID(tid=[0xE280, 0x1160])],
    )
    assert format_tag_report(entry) == (
        f"epc={EPC_TEXT}"
        "\n    SETQT result=0"
        "\n    READ result=0 Data=0102"
        "\n    SERIAL-TID E2801160"
    )


def test_format_tag_report_without_epc():
    assert format_tag_report(TagReportData()) == "epc=--null epc---"


def test_format_tag_report_is_capped():
    entry = TagReportData(epc=EPC96(epc=EPC_BYTES), op_spec_results=[read_ok([0xFFFF] * 300)])
    line = format_tag_report(entry)
    assert len(line) == report_format.DEFAULT_LINE_CAPACITY - 1
    assert line.startswith(f"epc={EPC_TEXT}")

    assert format_tag_report(entry, capacity=10) == "epc=AABB-"


def test_cap():
    assert cap("abcdef", 4) == "abc"
    assert cap("ab", 64) == "ab"
    assert cap("ab", 0) == ""


def test_format_compact_tag_report():
    entry = TagReportData(epc=EPC96(epc=EPC_BYTES), op_spec_results=[read_ok()])
    assert format_compact_tag_report(entry) == f"EPC: {EPC_TEXT}  ReadResult 0: Data  1234-5678"


def test_format_compact_tag_report_uses_last_read():
    entry = TagReportData(
        epc=EPCData(epc_bit_count=96, epc=EPC_BYTES),
        op_spec_results=[read_ok([0x1111]),
                         C1G2ReadOpSpecResult(result=llrp_const.C1G2ReadResultType.Nonspecific_Tag_Error)],
    )
    assert format_compact_tag_report(entry) == f"EPC: {EPC_TEXT}  ReadResult 1"


def test_format_compact_tag_report_without_read():
    entry = TagReportData(epc=EPC96(epc=EPC_BYTES))
    assert format_compact_tag_report(entry) == f"EPC: {EPC_TEXT}  "


def test_format_compact_tag_report_caps_each_field():
    entry = TagReportData(epc=EPC96(epc=EPC_BYTES), op_spec_results=[read_ok([0xAAAA] * 40)])
    line = format_compact_tag_report(entry, field_capacity=16)
    epc_field, read_field = line[len("EPC: "):].split("  ", 1)
    assert epc_field == EPC_TEXT[:15]
    assert read_field == "ReadResult 0: D"
