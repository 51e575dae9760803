#!/usr/bin/env python3
"""
ERRANDS - CLI Interface
=======================
Command-line tool for a personal, priority-bucketed to-do list.

Usage:
    errands init local
    errands add "buy milk"
    errands add "call bank" -p urgent
    errands list
    errands list -o ascending -i "^call" -c 5
    errands rm "buy milk"
    errands clean -p routine
"""

import argparse
import logging
import sys
from typing import List, Optional

from colorama import Fore, Style, just_fix_windows_console

from .config import ErrandsSettings
from .errors import ErrandsError
from .manager import ErrandManager
from .schema import ListedErrand, Location, Order, Priority

logger = logging.getLogger("errands")

PRIORITY_COLORS = {
    Priority.EMERGENCY: Style.BRIGHT + Fore.WHITE,
    Priority.URGENT: Fore.RED,
    Priority.HIGH: Fore.YELLOW,
    Priority.MEDIUM: Fore.GREEN,
    Priority.ROUTINE: Fore.CYAN,
    Priority.DEFERRED: Fore.MAGENTA,
}


# ========================================
# ARGUMENT TYPES
# ========================================

def priority_arg(text: str) -> Priority:
    try:
        return Priority.parse(text)
    except ValueError:
        names = ", ".join(f"{p.rank}={p.value}" for p in Priority)
        raise argparse.ArgumentTypeError(f"invalid priority {text!r} (choose from {names})")


def count_arg(text: str) -> int:
    try:
        count = int(text)
    except ValueError:
        raise argparse.ArgumentTypeError(f"invalid count {text!r}")
    if count < 0:
        raise argparse.ArgumentTypeError(f"count must be >= 0, got {count}")
    return count


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="errands",
        description="Errands - a to-do list terminal prompt",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Priorities (most urgent first, by name or number):
  0 Emergency, 1 Urgent, 2 High, 3 Medium, 4 Routine (default), 5 Deferred

Locations (probed in this order when --location is omitted):
  local   ./errands.yml
  user    ~/.config/errands/errands.yml
  global  /etc/errands/errands.yml
        """
    )
    parser.add_argument("-v", "--verbose", action="count", default=0, help="More output (-vv for debug)")
    parser.add_argument("--no-color", action="store_true", help="Plain output")

    subparsers = parser.add_subparsers(dest="command", help="Commands")

    locations = [loc.value for loc in Location]

    # INIT command
    init_parser = subparsers.add_parser("init", help="Initializes errands list")
    init_parser.add_argument("location", choices=locations, help="Where to create the list")
    init_parser.add_argument("-f", "--force", action="store_true", help="Overwrite an existing list")

    # CLEAN command
    clean_parser = subparsers.add_parser("clean", help="Cleans errands list")
    clean_parser.add_argument("-l", "--location", choices=locations)
    clean_parser.add_argument("-p", "--priority", type=priority_arg, help="Only this priority")

    # ADD command
    add_parser = subparsers.add_parser("add", help="Adds an item to the errands list")
    add_parser.add_argument("-l", "--location", choices=locations)
    add_parser.add_argument("-p", "--priority", type=priority_arg, help="Priority (default: Routine)")
    add_parser.add_argument("errand", help="Errand description")

    # LIST command
    list_parser = subparsers.add_parser("list", help="Lists errands")
    list_parser.add_argument("-l", "--location", choices=locations)
    list_parser.add_argument("-i", "--ignore", help="Skip errands matching this regex")
    list_parser.add_argument("-o", "--order", choices=[o.value for o in Order])
    list_parser.add_argument("-p", "--priority", type=priority_arg, help="Only this priority")
    list_parser.add_argument("-c", "--count", type=count_arg, help="Show at most this many")

    # RM command
    rm_parser = subparsers.add_parser("rm", help="Removes errand(s)")
    rm_parser.add_argument("-l", "--location", choices=locations)
    rm_parser.add_argument("-p", "--priority", type=priority_arg, help="Only from this priority")
    rm_parser.add_argument("errands", nargs="+", help="Exact errand descriptions")

    return parser


# ========================================
# OUTPUT
# ========================================

def setup_logging(verbose: int) -> None:
    if verbose >= 2:
        level = logging.DEBUG
    elif verbose == 1:
        level = logging.INFO
    else:
        level = logging.WARNING
    logging.basicConfig(level=level, format="%(message)s", stream=sys.stderr)
    logger.setLevel(level)


def format_errand(errand: ListedErrand, color: bool) -> str:
    if not color:
        return errand.description
    return f"{PRIORITY_COLORS[errand.priority]}{errand.description}{Style.RESET_ALL}"


def _location(value: Optional[str]) -> Optional[Location]:
    return Location(value) if value is not None else None


# ========================================
# MAIN
# ========================================

def main(argv: Optional[List[str]] = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)

    if not args.command:
        parser.print_help()
        return 1

    setup_logging(args.verbose)
    color = not args.no_color and sys.stdout.isatty()
    if color:
        just_fix_windows_console()

    settings = ErrandsSettings()

    try:
        if args.command == "init":
            location = Location(args.location)
            logger.info(f"Initializing errands in location: {location}")
            manager = ErrandManager.create(location, settings, overwrite=args.force)
            print(f"✅ Created: {manager.path}")

        elif args.command == "add":
            logger.info(f"Adding errand {args.errand}")
            manager = ErrandManager.open(_location(args.location), settings)
            manager.add(args.errand, args.priority)
            manager.persist(_location(args.location))

        elif args.command == "clean":
            logger.info("Cleaning errands")
            manager = ErrandManager.open(_location(args.location), settings)
            manager.clean(args.priority)
            manager.persist(_location(args.location))

        elif args.command == "list":
            logger.info("Printing errands")
            if args.ignore is not None:
                logger.debug(f"Ignoring pattern: {args.ignore}")
            if args.count is not None:
                logger.debug(f"Printing with count: {args.count}")
            manager = ErrandManager.open(_location(args.location), settings)
            order = Order(args.order) if args.order else None
            for errand in manager.entries(args.ignore, order, args.priority, args.count):
                print(format_errand(errand, color))

        elif args.command == "rm":
            logger.info(f"Removing items: {args.errands}")
            manager = ErrandManager.open(_location(args.location), settings)
            removed = manager.remove(args.priority, args.errands)
            manager.persist(_location(args.location))
            if removed == 0:
                logger.warning("⚠️ No matching errands")

    except ErrandsError as e:
        print(f"❌ {e}", file=sys.stderr)
        return e.exit_code

    return 0


if __name__ == "__main__":
    sys.exit(main())
