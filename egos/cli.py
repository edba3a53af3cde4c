from __future__ import annotations

import argparse
import sys
from typing import NoReturn, Sequence

from egos import __version__
from egos.core.config import RuntimeConfig, get_runtime_config
from egos.core.errors import (
    EXIT_FAILURE,
    EXIT_SUCCESS,
    EgosError,
    UsageError,
    format_error,
)
from egos.core.logging import configure_logging, get_logger, log_event
from egos.domain.options import ProgramOptions
from egos.services.assembler import assemble_for
from egos.services.formatter import format_source
from egos.services.pipeline import build_and_run


logger = get_logger(__name__)


class _ArgumentParser(argparse.ArgumentParser):
    def error(self, message: str) -> NoReturn:
        raise UsageError(message)


def build_parser() -> argparse.ArgumentParser:
    parser = _ArgumentParser(
        prog="egos",
        usage="%(prog)s [-d] [-i packages] [-n|-p] 'script' [file ...]",
        description="Wrap a Go snippet in a program, build it and run it.",
    )

    parser.add_argument(
        "--version",
        action="version",
        version=f"%(prog)s {__version__}",
        help="Print version and exit.",
    )
    parser.add_argument(
        "-d",
        "--dry-run",
        action="store_true",
        help="Print the generated program but do not run it.",
    )
    parser.add_argument(
        "-i",
        "--import",
        dest="imports",
        default="",
        metavar="packages",
        help='Import packages, separated by ";" (e.g. \'strings; "os/exec"\').',
    )

    loop = parser.add_mutually_exclusive_group()
    loop.add_argument(
        "-n",
        "--line",
        dest="line_mode",
        action="store_true",
        help="Assume a 'read line' loop around the script; the line is in `line`.",
    )
    loop.add_argument(
        "-p",
        "--print",
        dest="print_mode",
        action="store_true",
        help="Like -n but also print each line after the script, like sed.",
    )

    parser.add_argument("script", help="Go statements to run.")
    parser.add_argument(
        "args",
        nargs=argparse.REMAINDER,
        metavar="file",
        help="Arguments passed to the generated program (input files with -n/-p).",
    )
    return parser


def run_snippet(
    snippet: str,
    options: ProgramOptions,
    args: Sequence[str] = (),
    config: RuntimeConfig | None = None,
) -> int:
    program = format_source(assemble_for(snippet, options), config)
    if options.dry_run:
        sys.stdout.write(program)
        sys.stdout.flush()
        return EXIT_SUCCESS
    # The child writes straight to fd 1; keep our buffered output ahead of it.
    sys.stdout.flush()
    return build_and_run(program, args, config)


def main(argv: Sequence[str] | None = None) -> int:
    config = get_runtime_config()
    configure_logging(
        level=config.log_level,
        format_name=config.log_format,
        log_dir=config.log_dir,
    )
    parser = build_parser()

    try:
        parsed = parser.parse_args(argv)
        options = ProgramOptions(
            dry_run=parsed.dry_run,
            imports=parsed.imports,
            line_mode=parsed.line_mode,
            print_mode=parsed.print_mode,
        )
        return run_snippet(parsed.script, options, parsed.args, config)
    except UsageError as exc:
        sys.stderr.write(parser.format_help())
        print(f"{parser.prog}: error: {exc}", file=sys.stderr)
        return EXIT_FAILURE
    except EgosError as exc:
        log_event(logger, "failed", code=exc.code)
        message = format_error(exc)
        if message:
            print(message, file=sys.stderr)
        return EXIT_FAILURE
    except KeyboardInterrupt:
        return EXIT_FAILURE


if __name__ == "__main__":
    sys.exit(main())
