# uhf_llrp/cli.py

"""Command line front end: uhf-llrp [options] HOST[:PORT]"""

import argparse
import asyncio
import logging
import sys
from typing import List, Optional

from uhf_llrp.core.profiles import SessionOptions, InventoryProfile, QTScenario, QT_SCENARIO_HELP
from uhf_llrp.core.session import Session

logger = logging.getLogger(__name__)

EXIT_OK = 0
EXIT_USAGE = 1
EXIT_FAILED = 2

LOG_FORMAT = '%(levelname)s: %(message)s'


class _ArgumentParser(argparse.ArgumentParser):
    """Exits with EXIT_USAGE instead of argparse's default 2 on bad arguments."""

    def error(self, message):
        self.print_usage(sys.stderr)
        self.exit(EXIT_USAGE, f"{self.prog}: error: {message}\n")


def _int_value(text: str) -> int:
    # decimal, or 0x.. for passwords
    return int(text, 0)


def build_parser() -> argparse.ArgumentParser:
    scenarios = "\n".join(f"    {int(s)} -- {QT_SCENARIO_HELP[s]}" for s in QTScenario)
    parser = _ArgumentParser(
        prog='uhf-llrp',
        description='Inventory and tag access on an Impinj LLRP reader.',
        epilog=f"QT scenarios (-q):\n{scenarios}",
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    parser.add_argument('host', help='hostname or IP address of the reader, optionally HOST:PORT (default port 5084)')
    parser.add_argument('-p', dest='password', type=_int_value, default=0,
                        help='access password for tag operations')
    parser.add_argument('-n', dest='new_password', type=_int_value, default=0,
                        help='new password for the set password scenario')
    parser.add_argument('-t', dest='tid', action='store_true',
                        help='have the reader backscatter the serialized TID')
    parser.add_argument('-s', dest='short_range', action='store_true',
                        help='when setting QT config, short range the tag')
    parser.add_argument('-v', dest='verbose', type=int, default=0,
                        help='verbosity: 0 errors only, 1 progress, 2 message dumps')
    parser.add_argument('-q', dest='qt_scenario', type=int, default=int(QTScenario.READ_STANDARD_TID),
                        help='QT scenario to run, see below')
    parser.add_argument('--profile', choices=[p.value for p in InventoryProfile], default=InventoryProfile.QT_ACCESS.value,
                        help='inventory profile (default: qt)')
    parser.add_argument('--duration', type=float, default=None,
                        help='seconds to monitor tag reports (default: 1 for qt, 60 for filtered)')
    return parser


def options_from_args(args: argparse.Namespace) -> SessionOptions:
    return SessionOptions(
        profile=InventoryProfile(args.profile),
        qt_scenario=QTScenario.from_value(args.qt_scenario),
        password=args.password,
        new_password=args.new_password,
        short_range=args.short_range,
        tid=args.tid,
        verbose=args.verbose,
        monitor_duration=args.duration,
    )


def configure_logging(verbose: int) -> None:
    if verbose <= 0:
        level = logging.WARNING
    elif verbose == 1:
        level = logging.INFO
    else:
        level = logging.DEBUG
    logging.basicConfig(level=level, format=LOG_FORMAT)
    logger.setLevel(logging.INFO)  # "Done" is always shown


def main(argv: Optional[List[str]] = None) -> int:
    args = build_parser().parse_args(argv)
    configure_logging(args.verbose)

    session = Session(options_from_args(args))
    rc = asyncio.run(session.run(args.host))
    logger.info("Done")
    return EXIT_OK if rc == 0 else EXIT_FAILED


if __name__ == '__main__':
    sys.exit(main())
