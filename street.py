#!/usr/bin/env python3
"""
Street Programming Language Interpreter
Usage: python3 street.py [filename.street]
"""

import argparse
import logging
import os
import sys

from diagnostics import get_formatter, ColorMode, set_color_mode, set_max_errors
from errors import StreetError, ErrorCode, InternalError
from interpreter import Interpreter
from source_map import reset_source_map
from transcriber import transcribe

logger = logging.getLogger(__name__)

def report(error: StreetError):
    get_formatter().emit_diagnostic(error.diagnostic)

def report_unexpected(error: Exception):
    """Host failures (deep recursion, bugs) are shown as internal errors"""
    logger.debug("Unexpected host error", exc_info=error)
    if isinstance(error, RecursionError):
        message = "maximum recursion depth exceeded"
    else:
        message = f"{type(error).__name__}: {error}"
    report(InternalError.from_simple(ErrorCode.INTERNAL_ERROR, message))

def run_file(filename: str, raw: bool = False) -> int:
    """Run a Street program from a file, returning the exit status"""
    if not os.path.exists(filename):
        print(f"Error: File '{filename}' not found.", file=sys.stderr)
        return 1

    reset_source_map()
    formatter = get_formatter()

    with open(filename, 'r', encoding='utf-8') as f:
        source = f.read()
    if not raw:
        source = transcribe(source)

    try:
        Interpreter().run(source, filename)
    except StreetError as e:
        report(e)
        formatter.print_summary()
        return 1
    except Exception as e:
        report_unexpected(e)
        return 1

    return 0

def run_interactive(raw: bool = False):
    """Run Street in interactive mode; one interpreter for the whole session"""
    print("Street Interactive Mode")
    print("Type 'exit' to quit")

    reset_source_map()
    interpreter = Interpreter()

    while True:
        try:
            line = input("street> ")
            if line.strip().lower() == 'exit':
                break
            if line.strip() == '':
                continue

            if not raw:
                line = transcribe(line)
            interpreter.run(line, "<interactive>")

        except EOFError:
            break
        except KeyboardInterrupt:
            print("\nUse 'exit' to quit.")
        except StreetError as e:
            report(e)
        except Exception as e:
            report_unexpected(e)

    print("Goodbye!")

def main(argv=None):
    """Main entry point"""
    parser = argparse.ArgumentParser(prog="street", description="Run Street programs")
    parser.add_argument("file", nargs="?",
                        help="file to run (if empty, starts interactive mode)")
    parser.add_argument("--raw", action="store_true",
                        help="skip the slang transcriber and run the source as written")
    parser.add_argument("--color", choices=[mode.value for mode in ColorMode], default="auto",
                        help="colorize diagnostics (default: auto)")
    parser.add_argument("--max-errors", type=int, default=20,
                        help="stop reporting after this many errors")
    parser.add_argument("--debug", action="store_true", help="enable debug logging")
    args = parser.parse_args(argv)

    if args.debug:
        logging.basicConfig(level=logging.DEBUG)
    set_color_mode(ColorMode(args.color))
    set_max_errors(args.max_errors)

    if args.file is None:
        run_interactive(args.raw)
        return 0
    return run_file(args.file, args.raw)

if __name__ == "__main__":
    sys.exit(main())
