"""Asynchronous execution of secret provider commands."""

import asyncio
import logging
import os
import signal
from collections.abc import Awaitable, Callable
from dataclasses import dataclass

from .errors import ProviderTimeoutError

logger = logging.getLogger(__name__)

# Children get their own process group so a kill reaches every process a
# provider command spawns, e.g. both sides of a shell pipeline
_POSIX = os.name == "posix"


@dataclass(frozen=True)
class ProcessOutput:
    """Exit status and captured output of a finished command."""

    returncode: int | None
    stdout: bytes
    stderr: bytes

    @property
    def success(self) -> bool:
        return self.returncode == 0


# (program, args, timeout) -> ProcessOutput
ProcessRunner = Callable[[str, list[str], float | None], Awaitable[ProcessOutput]]


async def run_process(program: str, args: list[str], timeout: float | None = None) -> ProcessOutput:
    """Run a command and capture its output.

    Standard input is closed so interactive tools that read from it fail fast
    instead of hanging; tools that prompt through their own UI (e.g. a
    biometric unlock) are unaffected. On POSIX the command runs in a new
    session, and a timeout or cancellation kills its whole process group.

    Args:
        program: Executable name, looked up on PATH
        args: Argument list passed without a shell
        timeout: Seconds to wait before killing the process, None to wait forever

    Raises:
        OSError: If the program cannot be started
        ValueError: If an argument cannot be passed to the OS (embedded NUL)
        ProviderTimeoutError: If the command runs longer than ``timeout``
    """
    proc = await asyncio.create_subprocess_exec(
        program,
        *args,
        stdin=asyncio.subprocess.DEVNULL,
        stdout=asyncio.subprocess.PIPE,
        stderr=asyncio.subprocess.PIPE,
        start_new_session=_POSIX,
    )
    try:
        stdout, stderr = await asyncio.wait_for(proc.communicate(), timeout=timeout)
    except asyncio.TimeoutError:
        logger.warning(f"Command '{program}' timed out after {timeout} seconds, killing it")
        await _kill(proc)
        raise ProviderTimeoutError(program, timeout or 0) from None
    except asyncio.CancelledError:
        await _kill(proc)
        raise

    return ProcessOutput(returncode=proc.returncode, stdout=stdout, stderr=stderr)


async def _kill(proc: asyncio.subprocess.Process) -> None:
    if _POSIX:
        try:
            os.killpg(proc.pid, signal.SIGKILL)
        except ProcessLookupError:
            pass
    else:
        proc.kill()
    await proc.wait()
