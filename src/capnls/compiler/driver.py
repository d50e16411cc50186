import logging
import shutil
import subprocess
from typing import Iterable, List, Optional

from ..errors import CompilerExecutionError, CompilerTimeoutError, OutputDecodeError
from ..utils.config import ConfigManager
from ..utils.paths import PathArg, as_text

logger = logging.getLogger(__name__)


class CapnpDriver:
    def __init__(self, config_manager: Optional[ConfigManager] = None):
        self.config = config_manager if config_manager else ConfigManager()
        self.set_compiler(self.config.get("compiler", "capnp"))
        self.timeout: Optional[float] = self.config.get("timeout", 30.0)

    def set_compiler(self, compiler: str):
        """
        Updates the compiler used by the driver.
        """
        path = shutil.which(compiler)
        if not path:
            # Keep the bare name; a missing tool surfaces when we try to run it.
            logger.warning("Compiler '%s' not found on PATH", compiler)
        self.compiler = compiler
        self.compiler_path = path

    def build_command(self, source_file: str, search_paths: Iterable[PathArg] = ()) -> List[str]:
        """
        capnp compile [-I<dir>]... <file>

        No -o is passed, so capnp only parses and type-checks the schema.
        Search paths that are not valid text are left out with a warning.
        """
        command = [self.compiler_path or self.compiler, "compile"]
        for search_path in search_paths:
            text = as_text(search_path)
            if text is None:
                logger.warning("Non-unicode path: %r", search_path)
                continue
            command.append("-I" + text)
        command.append(source_file)
        return command

    def run(self, source_file: str, search_paths: Iterable[PathArg] = ()) -> str:
        """
        Runs capnp against source_file and returns its stderr.
        The exit status is not used: diagnostics come from stderr alone.
        """
        command = self.build_command(source_file, search_paths)
        logger.debug("Running capnp: %s", command)

        try:
            result = subprocess.run(
                command,
                capture_output=True,
                check=False,
                timeout=self.timeout,
            )
        except subprocess.TimeoutExpired as e:
            raise CompilerTimeoutError(command, e.timeout) from e
        except OSError as e:
            raise CompilerExecutionError(command, e) from e

        logger.debug("Capnp exited with status %d", result.returncode)

        try:
            return result.stderr.decode("utf-8")
        except UnicodeDecodeError as e:
            raise OutputDecodeError(e) from e
