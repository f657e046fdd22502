# uhf_llrp/core/monitor.py

import asyncio
import logging
import time
from typing import Callable, Optional, Any, Coroutine

from uhf_llrp.core.exceptions import UhfLlrpError, TimeoutError
from uhf_llrp.core.transaction import Transactor
from uhf_llrp.protocols.llrp import constants as llrp_const
from uhf_llrp.protocols.llrp.messages import Message, ROAccessReport, ReaderEventNotification, GetReport
from uhf_llrp.protocols.llrp.parameters import (
    TagReportData, ReaderEventNotificationData, AntennaEvent, ReaderExceptionEvent,
)
from uhf_llrp.utils.report_format import format_tag_report

logger = logging.getLogger(__name__)

DEFAULT_SLICE_MS = 1000
DEFAULT_POLL_INTERVAL = 10.0  # Seconds between GET_REPORT polls

LineFormatter = Callable[[TagReportData], str]
OutputSink = Callable[[str], Any]
Sleeper = Callable[[float], Coroutine[Any, Any, None]]


def handle_antenna_event(event: AntennaEvent) -> None:
    if event.event_type == llrp_const.AntennaEventType.Antenna_Disconnected:
        state = "disconnected"
    elif event.event_type == llrp_const.AntennaEventType.Antenna_Connected:
        state = "connected"
    else:
        state = "?unknown-event?"
    logger.info(f"Antenna {event.antenna_id} is {state}")


def handle_reader_exception_event(event: ReaderExceptionEvent) -> None:
    if event.message:
        logger.info(f"ReaderException '{event.message}'")
    else:
        logger.info("ReaderException but no message")


def handle_reader_event_notification(data: ReaderEventNotificationData) -> int:
    """
    Reports the antenna and reader exception events of one notification.

    Returns:
        The number of events that were handled. Zero is itself reported.
    """
    handled = 0
    if data.antenna_event is not None:
        handle_antenna_event(data.antenna_event)
        handled += 1
    if data.reader_exception_event is not None:
        handle_reader_exception_event(data.reader_exception_event)
        handled += 1
    if handled == 0:
        logger.info("Unexpected (unhandled) ReaderEvent")
    return handled


class ReportMonitor:
    """
    Receives and prints tag reports until a deadline passes.

    Each iteration waits at most one slice for a message, so the deadline
    and the optional GET_REPORT poll timer are re-evaluated at least once
    per slice even when the reader is silent.
    """

    def __init__(
        self,
        transactor: Transactor,
        line_formatter: LineFormatter = format_tag_report,
        output: OutputSink = print,
        clock: Callable[[], float] = time.monotonic,
        next_message_id: Optional[Callable[[], int]] = None,
        slice_ms: int = DEFAULT_SLICE_MS,
        poll_interval: float = DEFAULT_POLL_INTERVAL,
        sleep: Sleeper = asyncio.sleep,
    ):
        """
        Args:
            transactor: Source of inbound messages and sink of GET_REPORT polls.
            line_formatter: Renders one TagReportData into one output line.
            output: Receives each formatted line.
            clock: Monotonic seconds, injectable for tests.
            next_message_id: Supplies the message ID for each GET_REPORT.
            slice_ms: Longest single receive wait.
            poll_interval: Seconds between GET_REPORT polls when polling.
            sleep: Coroutine used to wait out a slice after a receive failure.
        """
        self._transactor = transactor
        self._line_formatter = line_formatter
        self._output = output
        self._clock = clock
        self._next_message_id = next_message_id or (lambda: 0)
        self._slice_ms = slice_ms
        self._poll_interval = poll_interval
        self._sleep = sleep

    async def run(self, timeout_seconds: float, poll: bool = False) -> int:
        """
        Runs the monitor loop.

        Args:
            timeout_seconds: Monitoring window, measured from the call.
            poll: Send a GET_REPORT every poll_interval seconds.

        Returns:
            Number of tag report entries printed.
        """
        start_time = self._clock()
        poll_time = start_time
        printed = 0
        done = False

        while not done:
            message: Optional[Message] = None
            try:
                message = await self._transactor.recv_message(self._slice_ms)
            except TimeoutError:
                pass
            except UhfLlrpError:
                # already logged by the transactor
                await self._sleep(self._slice_ms / 1000.0)

            now = self._clock()
            if now - start_time > timeout_seconds:
                done = True

            if poll and now - poll_time > self._poll_interval:
                await self._poll_report()
                poll_time = now

            if message is None:
                continue

            printed += self._handle_message(message)

        return printed

    async def _poll_report(self) -> None:
        try:
            await self._transactor.send_message(GetReport(message_id=self._next_message_id()))
        except UhfLlrpError:
            pass  # logged by the transactor, retried on the next interval

    def _handle_message(self, message: Message) -> int:
        if isinstance(message, ROAccessReport):
            return self._print_tag_report_data(message)

        if isinstance(message, ReaderEventNotification):
            data = message.reader_event_notification_data
            if data is None:
                logger.warning("READER_EVENT_NOTIFICATION without data")
            else:
                handle_reader_event_notification(data)
            return 0

        logger.warning(f"Ignored unexpected message during monitor: {message.name}")
        return 0

    def _print_tag_report_data(self, report: ROAccessReport) -> int:
        logger.info(f"{len(report.tag_report_data)} tag report entries")
        for entry in report.tag_report_data:
            self._output(self._line_formatter(entry))
        return len(report.tag_report_data)
