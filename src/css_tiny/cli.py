"""Command line interface for CSS::Tiny."""

import argparse
import os
import sys
from typing import List, Optional

from . import __version__
from .config import CssTinyConfig, load_config
from .parser import parse
from .serializer import serialize
from .storage import StylesheetStorage
from .utils.errors import CssTinyError, MalformedDeclarationError, format_error
from .utils.logging_config import get_logger, setup_logging


def build_parser() -> argparse.ArgumentParser:
    """Build the argument parser for the ``css-tiny`` command."""
    parser = argparse.ArgumentParser(
        prog="css-tiny", description="Read and write simple CSS stylesheets"
    )
    parser.add_argument("--config", "-c", type=str, help="Path to configuration file")
    parser.add_argument(
        "--log-level",
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
        help="Log level",
    )
    parser.add_argument("--version", action="version", version=__version__)

    commands = parser.add_subparsers(dest="command", required=True)

    check = commands.add_parser("check", help="Check that a stylesheet parses")
    check.add_argument("file")

    fmt = commands.add_parser("format", help="Rewrite a stylesheet in canonical form")
    fmt.add_argument("file")
    fmt.add_argument(
        "--output", "-o", help="Write here instead of in place ('-' for stdout)"
    )

    selectors = commands.add_parser("selectors", help="List the selectors of a stylesheet")
    selectors.add_argument("file")

    get = commands.add_parser("get", help="Print a selector's block or one property value")
    get.add_argument("file")
    get.add_argument("selector")
    get.add_argument("property", nargs="?")

    set_ = commands.add_parser("set", help="Set one property and save the stylesheet")
    set_.add_argument("file")
    set_.add_argument("selector")
    set_.add_argument("property")
    set_.add_argument("value")

    delete = commands.add_parser("delete", help="Delete a selector or one property")
    delete.add_argument("file")
    delete.add_argument("selector")
    delete.add_argument("property", nargs="?")

    return parser


def run(args: argparse.Namespace, config: CssTinyConfig) -> int:
    """Run one parsed command and return the exit status."""
    storage = StylesheetStorage(config.storage)
    sheet = storage.load(args.file)

    if args.command == "check":
        print(f"{args.file}: {len(sheet)} selectors")
        return 0

    if args.command == "format":
        if args.output == "-":
            sys.stdout.write(sheet.to_string())
        else:
            storage.store(args.output or args.file, sheet)
        return 0

    if args.command == "selectors":
        for selector in sheet.selectors():
            print(selector)
        return 0

    if args.command == "get":
        if args.selector not in sheet:
            print(f"No such selector: {args.selector}", file=sys.stderr)
            return 1
        if args.property is None:
            sys.stdout.write(serialize({args.selector: sheet[args.selector]}))
            return 0
        value = sheet.get_property(args.selector, args.property)
        if value is None:
            print(f"No such property: {args.selector} {{ {args.property} }}", file=sys.stderr)
            return 1
        print(value)
        return 0

    if args.command == "set":
        sheet.set_property(args.selector, args.property, args.value)
        _check_entry(args.selector, args.property, args.value)
        storage.store(args.file, sheet)
        return 0

    if args.command == "delete":
        try:
            if args.property is None:
                del sheet[args.selector]
            else:
                sheet.delete_property(args.selector, args.property)
        except KeyError:
            print(f"Nothing to delete: {args.selector} {args.property or ''}".rstrip(), file=sys.stderr)
            return 1
        storage.store(args.file, sheet)
        return 0

    raise ValueError(f"Unknown command: {args.command}")


def _check_entry(selector: str, name: str, value: str) -> None:
    """Refuse an entry that would not read back unchanged once written."""
    entry = {selector: {name: value}}
    if parse(serialize(entry)) != entry:
        raise MalformedDeclarationError(
            f"Invalid or unexpected style data '{name}: {value}' in style '{selector}'",
            fragment=f"{name}: {value}",
            selector=selector,
        )


def main(argv: Optional[List[str]] = None) -> int:
    """Main entry point for the command line tool."""
    args = build_parser().parse_args(argv)

    if args.log_level:
        os.environ["LOG_LEVEL"] = args.log_level

    try:
        config = load_config(args.config)
        setup_logging(config.logging)
        return run(args, config)
    except CssTinyError as e:
        get_logger("cli").debug(f"Command {args.command} failed: {e.message}")
        print(f"css-tiny: {format_error(e)}", file=sys.stderr)
        return 1


if __name__ == "__main__":
    sys.exit(main())
