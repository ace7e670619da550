"""Synchronous git subprocess runner bound to a single working tree."""

import logging
import os
import subprocess
from pathlib import Path

from .errors import ExecutionError

logger = logging.getLogger(__name__)

# Applied to every invocation: paths are literal (no glob pathspecs), raw
# UTF-8 paths in output, no ANSI colour codes.
_GIT_OPTIONS = (
    "--literal-pathspecs",
    "-c",
    "core.quotepath=off",
    "-c",
    "color.ui=never",
)


class CommandRunner:
    """Run git subcommands against a fixed working tree.

    Args:
        root: Working tree directory passed to ``git -C``.
        git_binary: Name or path of the git executable.
        timeout: Optional per-invocation timeout in seconds. ``None`` waits
            for the process indefinitely.
    """

    def __init__(
        self,
        root: Path,
        git_binary: str = "git",
        timeout: float | None = None,
    ) -> None:
        self.root = Path(root)
        self.git_binary = git_binary
        self.timeout = timeout
        self._env = {**os.environ, "LC_ALL": "C", "GIT_TERMINAL_PROMPT": "0"}

    def run(self, command: str, *args: str) -> bytes:
        """Run ``git <command> <args...>`` and return its stdout.

        Blocks the calling thread until git exits.

        Raises:
            ExecutionError: If git cannot be started, exits with a non-zero
                status, or writes anything to stderr. The captured stdout is
                attached to the error.
        """
        argv = [
            self.git_binary,
            "-C",
            str(self.root),
            *_GIT_OPTIONS,
            command,
            *args,
        ]
        logger.debug("git %s %s", command, " ".join(args))

        try:
            result = subprocess.run(
                argv,
                capture_output=True,
                env=self._env,
                timeout=self.timeout,
            )
        except subprocess.TimeoutExpired as e:
            raise ExecutionError(
                f"git {command} timed out after {self.timeout}s",
                stdout=e.stdout or b"",
            ) from e
        except OSError as e:
            raise ExecutionError(
                f"Unable to run {self.git_binary}: {e}"
            ) from e

        stderr = result.stderr.decode("utf-8", errors="replace").strip()
        if result.returncode != 0 or stderr:
            message = stderr or result.stdout.decode(
                "utf-8", errors="replace"
            ).strip()
            if not message:
                message = f"git {command} exited with status {result.returncode}"
            raise ExecutionError(
                message,
                stdout=result.stdout,
                stderr=stderr,
                returncode=result.returncode,
            )

        return result.stdout
