"""capnls: turns ``capnp compile`` error output into editor diagnostics."""
from .engine import DiagnosticsEngine
from .parsing import Diagnostic, DiagnosticGroup, Severity, parse_diagnostics

__all__ = [
    "Diagnostic",
    "DiagnosticGroup",
    "DiagnosticsEngine",
    "Severity",
    "parse_diagnostics",
]
