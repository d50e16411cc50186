import logging
from dataclasses import dataclass
from enum import Enum
from typing import Iterable, List, Optional, Tuple

from lsprotocol import types as lsp

logger = logging.getLogger(__name__)

SOURCE = "capnls"

# capnp reports every problem, including its "see also" notes, as "error".
ERROR_MARKER = " error: "

# Messages ending in one of these point back at an earlier declaration.
HINT_SUFFIXES: Tuple[str, ...] = ("originally used here",)

# Largest value an LSP ``uinteger`` can hold.
UINTEGER_MAX = 2**31 - 1


class Severity(str, Enum):
    ERROR = "error"
    HINT = "hint"

    def to_lsp(self) -> lsp.DiagnosticSeverity:
        if self is Severity.HINT:
            return lsp.DiagnosticSeverity.Hint
        return lsp.DiagnosticSeverity.Error


@dataclass(frozen=True)
class Diagnostic:
    """
    One problem reported by capnp, with 0-indexed positions.
    A single reported column gives start_column == end_column.
    """
    start_line: int
    start_column: int
    end_line: int
    end_column: int
    severity: Severity
    message: str
    source: str = SOURCE

    @property
    def range(self) -> lsp.Range:
        return lsp.Range(
            start=lsp.Position(line=self.start_line, character=self.start_column),
            end=lsp.Position(line=self.end_line, character=self.end_column),
        )

    def to_lsp(self) -> lsp.Diagnostic:
        return lsp.Diagnostic(
            range=self.range,
            severity=self.severity.to_lsp(),
            source=self.source,
            message=self.message,
        )


@dataclass(frozen=True)
class DiagnosticGroup:
    """An Error together with the Hints capnp emitted right after it."""
    primary: Diagnostic
    related: Tuple[Diagnostic, ...] = ()

    def to_lsp(self, uri: str) -> lsp.Diagnostic:
        """
        Build the primary LSP diagnostic, pointing ``relatedInformation``
        at each hint location in the same document.
        """
        related = [
            lsp.DiagnosticRelatedInformation(
                location=lsp.Location(uri=uri, range=hint.range),
                message=hint.message,
            )
            for hint in self.related
        ]
        return lsp.Diagnostic(
            range=self.primary.range,
            severity=self.primary.severity.to_lsp(),
            source=self.primary.source,
            message=self.primary.message,
            related_information=related or None,
        )


def classify_severity(message: str) -> Severity:
    """Hint if the message ends with a known back-reference phrase, else Error."""
    if message.endswith(HINT_SUFFIXES):
        return Severity.HINT
    return Severity.ERROR


def _parse_position(text: str) -> Optional[int]:
    """
    Parse a 1-indexed unsigned integer and convert it to 0-indexed,
    saturating at zero. Returns None when it is not representable.
    """
    text = text.strip()
    if not (text.isascii() and text.isdigit()):
        return None
    value = max(int(text) - 1, 0)
    if value > UINTEGER_MAX:
        return None
    return value


def parse_diagnostic_line(line: str) -> Optional[Diagnostic]:
    """
    Parse a single capnp stderr line into a Diagnostic.
    Example: foo.capnp:3:9-12: error: Not defined: Bar.

    Returns None for anything that does not follow that shape.
    """
    parts = line.split(":", 3)
    if len(parts) < 4:
        return None
    _, lineno, colspec, rest = parts

    if not rest.startswith(ERROR_MARKER):
        return None
    message = rest[len(ERROR_MARKER):].strip()
    if message.endswith("."):
        message = message[:-1].rstrip()

    line_idx = _parse_position(lineno)
    if line_idx is None:
        return None

    start_text, sep, end_text = colspec.partition("-")
    col_start = _parse_position(start_text)
    col_end = _parse_position(end_text) if sep else col_start
    if col_start is None or col_end is None:
        return None

    return Diagnostic(
        start_line=line_idx,
        start_column=col_start,
        end_line=line_idx,
        end_column=col_end,
        severity=classify_severity(message),
        message=message,
    )


def parse_diagnostics(stderr: str) -> List[Diagnostic]:
    """
    Parses capnp error output into Diagnostics, in output order.
    Lines that are not diagnostics (summaries, blanks, continuations)
    are skipped; this never raises.
    """
    diagnostics = []
    for line in stderr.splitlines():
        diag = parse_diagnostic_line(line)
        if diag is None:
            if line.strip():
                logger.debug("Skipping unrecognized compiler line: %r", line)
            continue
        diagnostics.append(diag)

    logger.debug("Parsed %d diagnostics", len(diagnostics))
    return diagnostics


def group_related(diagnostics: Iterable[Diagnostic]) -> List[DiagnosticGroup]:
    """
    Attach every Hint to the most recent Error before it.
    A Hint with no preceding Error becomes a group of its own.
    """
    groups: List[DiagnosticGroup] = []
    current: Optional[Diagnostic] = None
    hints: List[Diagnostic] = []

    for diag in diagnostics:
        if diag.severity is Severity.HINT and current is not None:
            hints.append(diag)
            continue
        if current is not None:
            groups.append(DiagnosticGroup(current, tuple(hints)))
        hints = []
        if diag.severity is Severity.HINT:
            groups.append(DiagnosticGroup(diag))
            current = None
        else:
            current = diag

    if current is not None:
        groups.append(DiagnosticGroup(current, tuple(hints)))
    return groups
