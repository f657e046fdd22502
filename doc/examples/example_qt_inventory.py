# doc/examples/example_qt_inventory.py

import asyncio
import logging

from uhf_llrp.core.profiles import SessionOptions, InventoryProfile, QTScenario
from uhf_llrp.core.session import Session

# Logging setup (optional)
logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s - %(levelname)s - %(name)s - %(message)s"
)
logger = logging.getLogger("QTInventoryExample")

# --- Configuration ---
# Change to match your setup
READER_HOST = '192.168.1.100'   # IP address of the reader, optionally 'host:port'
ACCESS_PASSWORD = 0x00000000    # needed by the QT scenarios


async def main():
    """Reads the QT status of every tag in the field, then runs a filtered inventory."""

    # --- QT access run ---
    options = SessionOptions(
        profile=InventoryProfile.QT_ACCESS,
        qt_scenario=QTScenario.GET_QT_STATUS,
        password=ACCESS_PASSWORD,
        verbose=1,
    )
    session = Session(options)
    rc = await session.run(READER_HOST)
    if rc != 0:
        logger.error(f"QT run failed with code {rc}")
        return
    logger.info(f"QT run printed {session.tags_printed} tag report entries")

    # --- Filtered inventory, reports polled with GET_REPORT ---
    # Lines are collected instead of printed
    lines = []
    session = Session(SessionOptions(profile=InventoryProfile.FILTERED, monitor_duration=15.0), output=lines.append)
    rc = await session.run(READER_HOST)
    logger.info(f"Filtered run finished with code {rc}, {len(lines)} lines")
    for line in lines:
        logger.info(line)


if __name__ == "__main__":
    try:
        asyncio.run(main())
    except KeyboardInterrupt:
        logger.info("Program stopped by user.")
