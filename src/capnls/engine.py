import logging
from typing import Iterable, List, Optional

from lsprotocol import types as lsp

from .compiler.driver import CapnpDriver
from .parsing import Diagnostic, group_related, parse_diagnostics
from .utils.config import ConfigManager
from .utils.paths import PathArg, uri_to_path

logger = logging.getLogger(__name__)


class DiagnosticsEngine:
    """
    Checks one document per call: resolve the URI, run capnp, parse stderr.
    Holds no per-document state, so overlapping calls do not interact.
    """

    def __init__(self, driver: Optional[CapnpDriver] = None, config: Optional[ConfigManager] = None):
        self.config = config if config else (driver.config if driver else ConfigManager())
        self.driver = driver if driver else CapnpDriver(self.config)

    def search_paths(self, search_paths: Iterable[PathArg] = ()) -> List[PathArg]:
        """Caller's search paths first, then the configured import_paths."""
        return list(search_paths) + list(self.config.get("import_paths", []) or [])

    def diagnostics(self, uri: str, search_paths: Iterable[PathArg] = ()) -> List[Diagnostic]:
        # Rejects non-file URIs before any process is started.
        path = uri_to_path(uri)
        stderr = self.driver.run(path, self.search_paths(search_paths))
        diags = parse_diagnostics(stderr)
        logger.info("%s: %d diagnostics", path, len(diags))
        return diags

    def publishable(self, uri: str, search_paths: Iterable[PathArg] = ()) -> List[lsp.Diagnostic]:
        """
        LSP diagnostics for uri, with each hint folded into the error it
        annotates as related information and also kept as its own entry.
        """
        diags = self.diagnostics(uri, search_paths)
        published = []
        for group in group_related(diags):
            published.append(group.to_lsp(uri))
            published.extend(hint.to_lsp() for hint in group.related)
        return published
