"""
Exceptions raised by capnls.

Every error here is batch-fatal: when one is raised no diagnostics are
returned for the document. Problems confined to a single stderr line are
never raised; the parser skips those lines.
"""
from typing import Optional


class CapnlsError(Exception):
    """Base class for all capnls failures."""


class UnsupportedReferenceError(CapnlsError):
    """The document reference is not a local ``file://`` URI."""

    def __init__(self, uri: str, reason: str = "Unsupported URI scheme"):
        self.uri = uri
        super().__init__(f"{reason}: {uri}")


class NonRepresentablePathError(CapnlsError):
    """A path cannot be passed to the compiler as text."""

    def __init__(self, path):
        self.path = path
        super().__init__(f"Non-unicode path: {path!r}")


class CompilerExecutionError(CapnlsError):
    """The compiler could not be started or did not run to completion."""

    def __init__(self, command, cause: Optional[BaseException] = None):
        self.command = list(command)
        self.cause = cause
        detail = f": {cause}" if cause else ""
        super().__init__(f"Failed to run {self.command[0]!r}{detail}")


class CompilerTimeoutError(CompilerExecutionError):
    """The compiler did not exit within the configured timeout."""

    def __init__(self, command, timeout: float):
        self.timeout = timeout
        super().__init__(command)
        self.args = (f"{self.command[0]!r} did not exit within {timeout}s",)


class OutputDecodeError(CapnlsError):
    """The compiler wrote stderr that is not valid UTF-8."""

    def __init__(self, cause: UnicodeDecodeError):
        self.cause = cause
        super().__init__(f"Compiler stderr is not valid UTF-8: {cause}")
