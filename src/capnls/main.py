import argparse
import json
import os
import sys
from pathlib import Path
from typing import List

from lsprotocol import converters
from lsprotocol import types as lsp
from rich.console import Console
from rich.table import Table
from rich.text import Text

from .engine import DiagnosticsEngine
from .errors import CapnlsError
from .parsing import Diagnostic, Severity
from .utils.log import LoggingConfig, configure_logging, get_logger
from .utils.paths import path_to_uri

logger = get_logger("main")

SEVERITY_STYLES = {
    Severity.ERROR: "bold red",
    Severity.HINT: "cyan",
}


def _build_parser() -> argparse.ArgumentParser:
    """Build and return the CLI argument parser."""
    parser = argparse.ArgumentParser(
        prog="capnls", description="Check a Cap'n Proto schema and report diagnostics"
    )
    parser.add_argument("file", help="Schema file to check")
    parser.add_argument(
        "-I", "--import-path", dest="import_paths", action="append", default=[],
        metavar="DIR", help="Directory to search for imports (repeatable)",
    )
    parser.add_argument("--json", action="store_true", help="Print LSP diagnostics as JSON")
    parser.add_argument("-v", "--verbose", action="store_true", help="Enable debug logging")
    parser.add_argument("--log-file", type=Path, help="Also write logs to this file")
    return parser


def render_table(path: str, diagnostics: List[Diagnostic], console: Console):
    if not diagnostics:
        console.print(f"{path}: no problems found", style="green", markup=False, soft_wrap=True)
        return

    table = Table(title=Text(path), show_lines=False)
    table.add_column("Line", justify="right")
    table.add_column("Col", justify="right")
    table.add_column("Severity")
    table.add_column("Message")
    for d in diagnostics:
        # Shown 1-indexed, like the compiler prints them.
        cols = str(d.start_column + 1)
        if d.end_column != d.start_column:
            cols += f"-{d.end_column + 1}"
        table.add_row(
            str(d.start_line + 1),
            cols,
            Text(d.severity.value, style=SEVERITY_STYLES[d.severity]),
            Text(d.message),
        )
    console.print(table)


def run(argv=None):
    parser = _build_parser()
    args = parser.parse_args(argv)

    configure_logging(LoggingConfig.from_verbosity(args.verbose, args.log_file))

    abs_path = os.path.abspath(args.file)
    if not os.path.exists(abs_path):
        print(f"Error: File not found: {abs_path}", file=sys.stderr)
        sys.exit(2)

    uri = path_to_uri(abs_path)
    engine = DiagnosticsEngine()
    try:
        if args.json:
            published = engine.publishable(uri, args.import_paths)
            has_errors = any(d.severity == lsp.DiagnosticSeverity.Error for d in published)
            converter = converters.get_converter()
            payload = [converter.unstructure(d, lsp.Diagnostic) for d in published]
            print(json.dumps(payload, indent=2))
        else:
            diagnostics = engine.diagnostics(uri, args.import_paths)
            has_errors = any(d.severity is Severity.ERROR for d in diagnostics)
            render_table(abs_path, diagnostics, Console())
    except CapnlsError as e:
        logger.error("%s", e)
        sys.exit(2)

    sys.exit(1 if has_errors else 0)


if __name__ == "__main__":
    run()
