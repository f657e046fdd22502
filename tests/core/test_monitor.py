# tests/core/test_monitor.py

import itertools
import logging
from collections import deque

import pytest

from uhf_llrp.core.exceptions import TimeoutError, ReadError, TransportError
from uhf_llrp.core.monitor import ReportMonitor, handle_reader_event_notification
from uhf_llrp.core.status import ResultCode
from uhf_llrp.protocols.llrp import constants as llrp_const
from uhf_llrp.protocols.llrp.messages import ROAccessReport, ReaderEventNotification, Keepalive, GetReport
from uhf_llrp.protocols.llrp.parameters import (
    TagReportData, EPC96, C1G2ReadOpSpecResult, ReaderEventNotificationData, AntennaEvent, ReaderExceptionEvent,
)
from uhf_llrp.utils.report_format import format_compact_tag_report


# --- Test Doubles ---

class FakeClock:
    def __init__(self, start: float = 0.0):
        self.now = start

    def __call__(self) -> float:
        return self.now

    def advance(self, seconds: float) -> None:
        self.now += seconds


class ScriptedTransactor:
    """
    Replays a script of messages and exceptions, one per recv_message call.
    Every receive uses up its full wait on the fake clock; an exhausted
    script behaves like a silent reader.
    """

    def __init__(self, clock: FakeClock, script=(), send_error: Exception = None):
        self.clock = clock
        self.script = deque(script)
        self.send_error = send_error
        self.waits = []
        self.sent = []

    async def recv_message(self, max_wait_ms: int):
        self.waits.append(max_wait_ms)
        self.clock.advance(max_wait_ms / 1000.0)
        if not self.script:
            raise TimeoutError("silent", result_code=ResultCode.RECV_TIMEOUT)
        item = self.script.popleft()
        if isinstance(item, Exception):
            raise item
        return item

    async def send_message(self, command):
        if self.send_error is not None:
            raise self.send_error
        self.sent.append(command)


class RecordingSleep:
    def __init__(self):
        self.calls = []

    async def __call__(self, seconds: float) -> None:
        self.calls.append(seconds)


@pytest.fixture
def clock() -> FakeClock:
    return FakeClock(start=1000.0)


@pytest.fixture
def lines() -> list:
    return []


def make_monitor(transactor, clock, lines, **kwargs) -> ReportMonitor:
    kwargs.setdefault("sleep", RecordingSleep())
    return ReportMonitor(transactor, output=lines.append, clock=clock, **kwargs)


def tag_report(*epcs: bytes) -> ROAccessReport:
    return ROAccessReport(tag_report_data=[TagReportData(epc=EPC96(epc=epc)) for epc in epcs])


def event(**kwargs) -> ReaderEventNotification:
    return ReaderEventNotification(reader_event_notification_data=ReaderEventNotificationData(**kwargs))


EPC_A = bytes.fromhex("AABBCCDDEEFF001122334455")
EPC_B = bytes.fromhex("300833B2DDD9014000000001")


# --- Monitor loop ---

@pytest.mark.asyncio
async def test_prints_one_line_per_entry(clock, lines):
    transactor = ScriptedTransactor(clock, [tag_report(EPC_A, EPC_B)])
    printed = await make_monitor(transactor, clock, lines).run(timeout_seconds=1.0)

    assert printed == 2
    assert lines == ["epc=AABB-CCDD-EEFF-0011-2233-4455", "epc=3008-33B2-DDD9-0140-0000-0001"]


@pytest.mark.asyncio
async def test_uses_given_line_formatter(clock, lines):
    entry = TagReportData(epc=EPC96(epc=EPC_A),
                          op_spec_results=[C1G2ReadOpSpecResult(result=0, read_data=[0x1234, 0x5678])])
    transactor = ScriptedTransactor(clock, [ROAccessReport(tag_report_data=[entry])])
    monitor = make_monitor(transactor, clock, lines, line_formatter=format_compact_tag_report)

    await monitor.run(timeout_seconds=1.0)
    assert lines == ["EPC: AABB-CCDD-EEFF-0011-2233-4455  ReadResult 0: Data  1234-5678"]


@pytest.mark.asyncio
async def test_runs_until_deadline_in_slices(clock, lines):
    transactor = ScriptedTransactor(clock)
    printed = await make_monitor(transactor, clock, lines).run(timeout_seconds=3.0)

    assert printed == 0
    assert transactor.waits == [1000, 1000, 1000, 1000]
    assert lines == []


@pytest.mark.asyncio
async def test_message_received_past_deadline_is_still_printed(clock, lines):
    transactor = ScriptedTransactor(clock, [tag_report(EPC_A), tag_report(EPC_B)])
    printed = await make_monitor(transactor, clock, lines).run(timeout_seconds=0.5)

    assert printed == 1
    assert len(transactor.waits) == 1


@pytest.mark.asyncio
async def test_custom_slice(clock, lines):
    transactor = ScriptedTransactor(clock)
    await make_monitor(transactor, clock, lines, slice_ms=250).run(timeout_seconds=1.0)
    assert transactor.waits == [250] * 5


@pytest.mark.asyncio
async def test_polls_get_report_every_interval(clock, lines):
    transactor = ScriptedTransactor(clock)
    ids = itertools.count(100)
    monitor = make_monitor(transactor, clock, lines, next_message_id=ids.__next__)

    await monitor.run(timeout_seconds=25.0, poll=True)

    assert [type(m) for m in transactor.sent] == [GetReport, GetReport]
    assert [m.message_id for m in transactor.sent] == [100, 101]


@pytest.mark.asyncio
async def test_no_poll_by_default(clock, lines):
    transactor = ScriptedTransactor(clock)
    await make_monitor(transactor, clock, lines).run(timeout_seconds=25.0)
    assert transactor.sent == []


@pytest.mark.asyncio
async def test_poll_failure_does_not_stop_monitor(clock, lines):
    error = TransportError("Cannot send GET_REPORT: not connected.", result_code=ResultCode.NOT_CONNECTED)
    transactor = ScriptedTransactor(clock, send_error=error)
    printed = await make_monitor(transactor, clock, lines).run(timeout_seconds=25.0, poll=True)

    assert printed == 0
    assert len(transactor.waits) == 26


@pytest.mark.asyncio
async def test_receive_error_waits_one_slice(clock, lines):
    sleep = RecordingSleep()
    error = ReadError("Connection lost.", result_code=ResultCode.RECV_EOF)
    transactor = ScriptedTransactor(clock, [error, tag_report(EPC_A)])

    printed = await make_monitor(transactor, clock, lines, sleep=sleep).run(timeout_seconds=1.5)

    assert sleep.calls == [1.0]
    assert printed == 1


# --- Events ---

@pytest.mark.asyncio
async def test_antenna_event_is_reported(clock, lines, caplog):
    caplog.set_level(logging.INFO)
    transactor = ScriptedTransactor(clock, [
        event(antenna_event=AntennaEvent(event_type=llrp_const.AntennaEventType.Antenna_Disconnected, antenna_id=2)),
    ])
    printed = await make_monitor(transactor, clock, lines).run(timeout_seconds=1.0)

    assert printed == 0
    assert "Antenna 2 is disconnected" in caplog.text


@pytest.mark.asyncio
async def test_notification_without_data(clock, lines, caplog):
    transactor = ScriptedTransactor(clock, [ReaderEventNotification(reader_event_notification_data=None)])
    await make_monitor(transactor, clock, lines).run(timeout_seconds=1.0)
    assert "READER_EVENT_NOTIFICATION without data" in caplog.text


@pytest.mark.asyncio
async def test_unexpected_message_is_ignored(clock, lines, caplog):
    transactor = ScriptedTransactor(clock, [Keepalive(message_id=1), tag_report(EPC_A)])
    printed = await make_monitor(transactor, clock, lines).run(timeout_seconds=1.5)

    assert printed == 1
    assert "Ignored unexpected message during monitor: KEEPALIVE" in caplog.text


@pytest.mark.parametrize("data, handled, expected_log", [
    (ReaderEventNotificationData(antenna_event=AntennaEvent(event_type=1, antenna_id=4)), 1, "Antenna 4 is connected"),
    (ReaderEventNotificationData(antenna_event=AntennaEvent(event_type=7, antenna_id=1)), 1, "Antenna 1 is ?unknown-event?"),
    (ReaderEventNotificationData(reader_exception_event=ReaderExceptionEvent(message="overheat")), 1,
     "ReaderException 'overheat'"),
    (ReaderEventNotificationData(reader_exception_event=ReaderExceptionEvent()), 1, "ReaderException but no message"),
    (ReaderEventNotificationData(), 0, "Unexpected (unhandled) ReaderEvent"),
])
def test_handle_reader_event_notification(data, handled, expected_log, caplog):
    caplog.set_level(logging.INFO)
    assert handle_reader_event_notification(data) == handled
    assert expected_log in caplog.text


def test_handle_antenna_and_exception_together(caplog):
    caplog.set_level(logging.INFO)
    data = ReaderEventNotificationData(
        antenna_event=AntennaEvent(event_type=1, antenna_id=1),
        reader_exception_event=ReaderExceptionEvent(message="x"),
    )
    assert handle_reader_event_notification(data) == 2
    assert "Unexpected (unhandled) ReaderEvent" not in caplog.text
