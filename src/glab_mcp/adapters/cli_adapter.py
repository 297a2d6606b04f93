"""glab CLI adapter for MCP tool invocation."""

import asyncio
import logging
import os
from functools import wraps
from typing import List, Sequence

from . import CallResult

logger = logging.getLogger(__name__)

DEFAULT_PROGRAM = "glab"


def handle_spawn_errors(method):
    """Decorator to convert process spawn failures into CallResult."""
    @wraps(method)
    async def wrapper(self, argv: Sequence[str], *args, **kwargs):
        try:
            return await method(self, argv, *args, **kwargs)
        except (OSError, ValueError) as e:
            # Missing binary, permission denied, NUL bytes or unencodable
            # characters in an argument
            logger.warning("Failed to start %s: %s", self.program, e)
            return CallResult.error_result(message=str(e), argv=list(argv))
    return wrapper


class GlabAdapter:
    """
    Runs glab with an argument vector and captures its output.

    The argument vector is passed straight to the process (no shell), and
    the child inherits this process's environment unchanged so glab uses
    its own authentication context.

    No timeout is applied: a hung glab process hangs the call.
    """

    def __init__(self, program: str = DEFAULT_PROGRAM):
        self.program = program

    @handle_spawn_errors
    async def run(self, argv: Sequence[str]) -> CallResult:
        """
        Run the program and wait for it to exit.

        Args:
            argv: Arguments after the program name (e.g., ["issue", "list"])

        Returns:
            Success with stdout, or failure with stderr (or an exit-code
            message when stderr is empty, or the spawn error text)
        """
        argv_list: List[str] = [str(a) for a in argv]
        logger.debug("Running %s %s", self.program, argv_list)

        process = await asyncio.create_subprocess_exec(
            self.program,
            *argv_list,
            stdout=asyncio.subprocess.PIPE,
            stderr=asyncio.subprocess.PIPE,
            env=dict(os.environ),
        )
        stdout, stderr = await process.communicate()
        exit_code = process.returncode

        out_text = stdout.decode("utf-8", errors="replace") if stdout else ""
        err_text = stderr.decode("utf-8", errors="replace") if stderr else ""

        if exit_code == 0:
            return CallResult.success_result(out_text, exit_code=0, argv=argv_list)

        logger.warning("%s exited with code %s", self.program, exit_code)
        return CallResult.error_result(
            message=err_text or f"{self.program} exited with code {exit_code}",
            exit_code=exit_code,
            argv=argv_list
        )
