from .diagnostics import (
    HINT_SUFFIXES,
    SOURCE,
    Diagnostic,
    DiagnosticGroup,
    Severity,
    classify_severity,
    group_related,
    parse_diagnostic_line,
    parse_diagnostics,
)

__all__ = [
    "HINT_SUFFIXES",
    "SOURCE",
    "Diagnostic",
    "DiagnosticGroup",
    "Severity",
    "classify_severity",
    "group_related",
    "parse_diagnostic_line",
    "parse_diagnostics",
]
