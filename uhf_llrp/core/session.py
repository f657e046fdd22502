# uhf_llrp/core/session.py

import asyncio
import logging
import random
import re
import time
from dataclasses import dataclass
from typing import Awaitable, Callable, List, Optional, Tuple, Any

from uhf_llrp.core.connection import LLRPConnection, DEFAULT_TRANSACT_TIMEOUT_MS
from uhf_llrp.core.exceptions import UhfLlrpError, ConnectionError, PrerequisiteNotMetError
from uhf_llrp.core.monitor import ReportMonitor, OutputSink, Sleeper
from uhf_llrp.core.profiles import (
    SessionOptions, InventoryProfile, RO_SPEC_ID, ACCESS_SPEC_ID,
    build_reader_config, build_ro_spec, build_access_spec,
)
from uhf_llrp.core.status import ResultCode, check_llrp_status
from uhf_llrp.core.transaction import Transactor
from uhf_llrp.protocols.llrp import constants as llrp_const
from uhf_llrp.protocols.llrp.messages import (
    Message, ReaderEventNotification, ImpinjEnableExtensions, SetReaderConfig, GetReaderCapabilities,
    AddROSpec, EnableROSpec, StartROSpec, StopROSpec, AddAccessSpec, EnableAccessSpec,
)
from uhf_llrp.protocols.registry import TypeRegistry, get_the_type_registry, enroll_impinj_types
from uhf_llrp.utils.report_format import format_tag_report, format_compact_tag_report

logger = logging.getLogger(__name__)

CONNECTION_STATUS_WAIT_MS = 10000
MIN_FIRMWARE = (4, 4)

# Outcome codes that are not step codes
SUCCESS = 0
REGISTRY_FAILED = -1
CONNECTION_CREATE_FAILED = -2
CONNECT_FAILED = -3

RegistryFactory = Callable[[], TypeRegistry]
ConnectionFactory = Callable[[TypeRegistry, int], LLRPConnection]


def default_registry_factory() -> TypeRegistry:
    """Standard LLRP types plus the Impinj extensions."""
    return enroll_impinj_types(get_the_type_registry())


def parse_firmware_version(text: str) -> Tuple[int, int, int, int]:
    """
    Parses 'major.minor.dev.build'. Parsing stops at the first character
    that is neither a digit nor a separating dot; the parts not reached
    read as 0, so '4.8.1-rc2.3' gives (4, 8, 1, 0).
    """
    parts = [0, 0, 0, 0]
    for index, piece in enumerate(text.strip().split('.')[:4]):
        match = re.match(r'\d+', piece)
        if not match:
            break
        parts[index] = int(match.group())
        if match.end() != len(piece):
            break
    return parts[0], parts[1], parts[2], parts[3]


def firmware_meets_minimum(text: str) -> bool:
    """
    True if the firmware string passes the 4.4 prerequisite.

    Only a version whose major AND minor are both below 4 is rejected, so
    e.g. 3.5 passes.
    """
    # TODO: decide whether 3.5 and 4.0-4.3 should be rejected (major < 4 or minor < 4)
    if len(text) < 3:
        return False
    major, minor, _, _ = parse_firmware_version(text)
    return not (major < MIN_FIRMWARE[0] and minor < MIN_FIRMWARE[1])


@dataclass(frozen=True)
class Step:
    name: str
    action: Callable[[], Awaitable[Any]]
    code: int


class Session:
    """
    One inventory-and-access run against one reader.

    The run is a fixed table of steps executed in order. The first step that
    raises stops the forward sequence and its code becomes the outcome; the
    reason was already logged where the failure was detected. The connection
    is closed exactly once on every path.

    A Session is not safe for concurrent use by several callers.
    """

    def __init__(
        self,
        options: Optional[SessionOptions] = None,
        registry_factory: RegistryFactory = default_registry_factory,
        connection_factory: ConnectionFactory = LLRPConnection,
        output: OutputSink = print,
        clock: Callable[[], float] = time.monotonic,
        rng: Optional[random.Random] = None,
        sleep: Sleeper = asyncio.sleep,
        max_frame_size: int = llrp_const.DEFAULT_MAX_FRAME_SIZE,
        transact_timeout_ms: int = DEFAULT_TRANSACT_TIMEOUT_MS,
    ):
        self.options = options or SessionOptions()
        self._registry_factory = registry_factory
        self._connection_factory = connection_factory
        self._output = output
        self._clock = clock
        self._rng = rng or random.Random()
        self._sleep = sleep
        self._max_frame_size = max_frame_size
        self._transact_timeout_ms = transact_timeout_ms

        self._message_id = 0
        self._connection: Optional[LLRPConnection] = None
        self._transactor: Optional[Transactor] = None
        self.tags_printed = 0

    @property
    def message_id(self) -> int:
        """The ID the next command will carry."""
        return self._message_id

    def next_message_id(self) -> int:
        message_id = self._message_id
        self._message_id += 1
        return message_id

    @property
    def steps(self) -> List[Step]:
        return [
            Step("checkConnectionStatus", self.check_connection_status, 1),
            Step("enableImpinjExtensions", self.enable_impinj_extensions, 2),
            Step("resetConfigurationToFactoryDefaults", self.reset_configuration_to_factory_defaults, 3),
            Step("getReaderCapabilities", self.get_reader_capabilities, 4),
            Step("setImpinjReaderConfig", self.set_impinj_reader_config, 5),
            Step("addROSpec", self.add_ro_spec, 6),
            Step("addAccessSpec", self.add_access_spec, 7),
            Step("enableAccessSpec", self.enable_access_spec, 8),
            Step("enableROSpec", self.enable_ro_spec, 9),
            Step("startROSpec", self.start_ro_spec, 10),
            Step("awaitAndPrintReport", self.await_and_print_report, 11),
            Step("stopROSpec", self.stop_ro_spec, 12),
        ]

    # --- Run ---

    async def run(self, host: str) -> int:
        """
        Connects to the reader at host ('name' or 'name:port') and runs all steps.

        Returns:
            0 on success, the failed step's code (1..12), or a negative code
            when the run never got connected.
        """
        try:
            registry = self._registry_factory()
        except Exception as e:
            logger.error(f"getTheTypeRegistry failed: {e}")
            return REGISTRY_FAILED

        try:
            connection = self._connection_factory(registry, self._max_frame_size)
        except Exception as e:
            logger.error(f"new LLRPConnection failed: {e}")
            return CONNECTION_CREATE_FAILED

        logger.info(f"Connecting to {host}....")
        try:
            await connection.open(host)
        except UhfLlrpError as e:
            logger.error(f"connect: {e}")
            await connection.close()
            return CONNECT_FAILED

        self._connection = connection
        self._transactor = Transactor(connection, verbose=self.options.verbose,
                                      transact_timeout_ms=self._transact_timeout_ms)
        logger.info("Connected, checking status....")

        try:
            rc = await self._run_steps()
            if rc != 1:
                logger.info("Clean up reader configuration...")
                try:
                    await self.reset_configuration_to_factory_defaults()
                except UhfLlrpError:
                    pass  # best effort, failure already logged
            logger.info("Finished")
        finally:
            await connection.close()
        return rc

    async def _run_steps(self) -> int:
        for step in self.steps:
            try:
                await step.action()
            except UhfLlrpError as e:
                logger.debug(f"Step {step.code} ({step.name}) failed: {e}")
                return step.code
        return SUCCESS

    async def _command(self, command: Message, what: str) -> Message:
        """Transacts one command with a fresh message ID and checks its status."""
        command.message_id = self.next_message_id()
        response = await self._transactor.transact(command)
        check_llrp_status(getattr(response, 'status', None), what)
        return response

    # --- Steps ---

    async def check_connection_status(self) -> None:
        """Expects the reader's greeting: a ConnectionAttemptEvent with status Success."""
        try:
            message = await self._transactor.recv_message(CONNECTION_STATUS_WAIT_MS)
        except UhfLlrpError:
            logger.error("checkConnectionStatus failed")
            raise

        event = None
        if isinstance(message, ReaderEventNotification) and message.reader_event_notification_data is not None:
            event = message.reader_event_notification_data.connection_attempt_event
        if event is None or event.status != llrp_const.ConnectionAttemptStatusType.Success:
            logger.error("checkConnectionStatus failed")
            raise ConnectionError(f"Reader refused the connection (received {message.name})",
                                  result_code=ResultCode.MISC_ERROR)
        logger.info("Connection status OK")

    async def enable_impinj_extensions(self) -> None:
        await self._command(ImpinjEnableExtensions(), "enableImpinjExtensions")
        logger.info("Impinj Extensions are enabled")

    async def reset_configuration_to_factory_defaults(self) -> None:
        await self._command(SetReaderConfig(reset_to_factory_default=True), "resetConfigurationToFactoryDefaults")
        logger.info("Configuration reset to factory defaults")

    async def get_reader_capabilities(self) -> None:
        """Requires an Impinj reader and, for the QT profile, firmware 4.4 or later."""
        response = await self._command(
            GetReaderCapabilities(requested_data=llrp_const.GetReaderCapabilitiesRequestedData.All),
            "getReaderCapabilities",
        )
        capabilities = response.general_device_capabilities
        if capabilities is None:
            logger.error("getReaderCapabilities failed, no GeneralDeviceCapabilities")
            raise PrerequisiteNotMetError("Reader did not report GeneralDeviceCapabilities")
        if capabilities.device_manufacturer_name != llrp_const.VENDOR_IMPINJ:
            logger.error(f"getReaderCapabilities failed, manufacturer {capabilities.device_manufacturer_name} is not Impinj")
            raise PrerequisiteNotMetError(f"Unsupported reader manufacturer {capabilities.device_manufacturer_name}")

        if self.options.checks_firmware and not firmware_meets_minimum(capabilities.reader_firmware_version):
            logger.error("Must have firmware 4.4 or later for low level tag data")
            raise PrerequisiteNotMetError(f"Firmware '{capabilities.reader_firmware_version}' is too old")

        logger.info("Found LLRP Capabilities")

    async def set_impinj_reader_config(self) -> None:
        await self._command(SetReaderConfig(parameters=build_reader_config(self.options)), "setImpinjReaderConfig")
        logger.info("Set Impinj Reader Configuration")

    async def add_ro_spec(self) -> None:
        await self._command(AddROSpec(ro_spec=build_ro_spec(self.options)), "addROSpec")
        logger.info("ROSpec added")

    async def add_access_spec(self) -> None:
        await self._command(AddAccessSpec(access_spec=build_access_spec(self.options, self._rng)), "addAccessSpec")
        logger.info("AccessSpec added")

    async def enable_access_spec(self) -> None:
        await self._command(EnableAccessSpec(access_spec_id=ACCESS_SPEC_ID), "enableAccessSpec")
        logger.info("AccessSpec enabled")

    async def enable_ro_spec(self) -> None:
        await self._command(EnableROSpec(ro_spec_id=RO_SPEC_ID), "enableROSpec")
        logger.info("ROSpec enabled")

    async def start_ro_spec(self) -> None:
        await self._command(StartROSpec(ro_spec_id=RO_SPEC_ID), "startROSpec")
        logger.info("ROSpec started")

    async def await_and_print_report(self) -> None:
        if self.options.profile == InventoryProfile.FILTERED:
            formatter = format_compact_tag_report
        else:
            formatter = format_tag_report
        monitor = ReportMonitor(
            self._transactor,
            line_formatter=formatter,
            output=self._output,
            clock=self._clock,
            next_message_id=self.next_message_id,
            sleep=self._sleep,
        )
        self.tags_printed += await monitor.run(self.options.monitor_seconds, poll=self.options.poll_reports)

    async def stop_ro_spec(self) -> None:
        await self._command(StopROSpec(ro_spec_id=RO_SPEC_ID), "stopROSpec")
        logger.info("ROSpec stopped")
