"""
Invariants implemented by running an external command on the trial files.
"""

from __future__ import annotations

import logging
import os
import re
import shlex
import subprocess
import time
from abc import abstractmethod
from pathlib import Path
from typing import List, Optional, TextIO

from .base import Invariant
from ..errors import ConfigError

logger = logging.getLogger(__name__)

FILES_PLACEHOLDER = "{files}"


class ProcessInvariant(Invariant):
    """
    Runs `command` after writing the trial texts to the working files.

    Options:
        command: list of arguments or a shell-like string; the argument
                 "{files}" expands to the working file paths
        cwd: working directory of the command
        timeout: seconds; a timed out run counts as "not satisfied"
        env: extra environment variables
    """

    def __init__(self, options=None):
        super().__init__(options)
        command = self.options.get("command")
        if isinstance(command, str):
            command = shlex.split(command)
        if not command:
            raise ConfigError(f"Invariant '{self.name}' requires a 'command' option")
        self.command: List[str] = [str(arg) for arg in command]
        self.cwd: Optional[str] = self.options.get("cwd")
        timeout = self.options.get("timeout")
        self.timeout: Optional[float] = float(timeout) if timeout is not None else None
        self.env = {str(k): str(v) for k, v in (self.options.get("env") or {}).items()}

        self.timeouts = 0
        self.process_seconds = 0.0

    def build_args(self, files: List[Path]) -> List[str]:
        args: List[str] = []
        for arg in self.command:
            if arg == FILES_PLACEHOLDER:
                args.extend(str(f) for f in files)
            else:
                args.append(arg)
        return args

    def check(self) -> bool:
        files = self.ops.materialize_scratch()
        args = self.build_args(files)
        env = {**os.environ, **self.env} if self.env else None

        started = time.monotonic()
        try:
            completed = subprocess.run(
                args,
                cwd=self.cwd,
                env=env,
                capture_output=True,
                text=True,
                encoding="utf-8",
                errors="replace",
                timeout=self.timeout,
            )
        except subprocess.TimeoutExpired:
            self.timeouts += 1
            logger.debug("Command timed out after %ss: %s", self.timeout, args)
            return False
        finally:
            self.process_seconds += time.monotonic() - started

        logger.debug("Command %s exited with %d", args, completed.returncode)
        return self.accepts(completed)

    @abstractmethod
    def accepts(self, completed: subprocess.CompletedProcess) -> bool:
        pass

    def print_statistics(self, out: TextIO) -> None:
        super().print_statistics(out)
        out.write(f"  {self.timeouts} timeouts, {self.process_seconds:.2f}s spent in the command\n")


class ExitCodeInvariant(ProcessInvariant):
    """
    Satisfied when the command exits with the expected code.

    Options:
        exit_code: expected code, or "nonzero" (default) for any failure
    """

    name = "exit-code"

    def __init__(self, options=None):
        super().__init__(options)
        expected = self.options.get("exit_code", "nonzero")
        if expected != "nonzero" and (isinstance(expected, bool) or not isinstance(expected, int)):
            raise ConfigError(f"Invariant 'exit-code': exit_code must be an integer or 'nonzero', got {expected!r}")
        self.expected = expected

    def accepts(self, completed: subprocess.CompletedProcess) -> bool:
        if self.expected == "nonzero":
            return completed.returncode != 0
        return completed.returncode == self.expected


class MessageInvariant(ProcessInvariant):
    """
    Satisfied when the command output contains a message.

    Options:
        message: substring (or regular expression with regex: true) to look for
        stream: "stdout", "stderr" or "any" (default)
    """

    name = "message"

    _STREAMS = ("stdout", "stderr", "any")

    def __init__(self, options=None):
        super().__init__(options)
        message = self.options.get("message")
        if not message:
            raise ConfigError("Invariant 'message' requires a 'message' option")
        self.stream = self.options.get("stream", "any")
        if self.stream not in self._STREAMS:
            raise ConfigError(f"Invariant 'message': stream must be one of {', '.join(self._STREAMS)}")
        self._pattern = re.compile(message if self.options.get("regex") else re.escape(message))

    def accepts(self, completed: subprocess.CompletedProcess) -> bool:
        outputs = []
        if self.stream in ("stdout", "any"):
            outputs.append(completed.stdout or "")
        if self.stream in ("stderr", "any"):
            outputs.append(completed.stderr or "")
        return any(self._pattern.search(text) for text in outputs)
