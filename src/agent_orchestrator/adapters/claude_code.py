"""Claude Code adapter.

Runs the ``claude`` CLI in print mode as a subprocess, feeds it the task on
stdin and streams stdout and stderr back to the orchestrator as text chunks.
"""

import asyncio
import codecs
import contextlib

from ..exceptions import SpawnError
from ..logging import get_logger
from ..types import AgentConfig
from .base import AgentHandle

logger = get_logger("adapter")

CLAUDE_EXECUTABLE = "claude"
READ_CHUNK_SIZE = 4096
# seconds to wait for a terminated process before killing it outright
CLOSE_TIMEOUT = 5.0


def build_command(config: AgentConfig, executable: str = CLAUDE_EXECUTABLE) -> list[str]:
    """Build the argv for a Claude Code process.

    Args:
        config: The agent config.
        executable: Name or path of the claude binary.

    Returns:
        Command line as a list of arguments.
    """
    args = [executable, "-p", "--output-format", "text"]
    if config.tools:
        args += ["--tools", ",".join(config.tools)]
    if config.system_prompt:
        args += ["--system-prompt", config.system_prompt]
    return args


class ClaudeCodeHandle(AgentHandle):
    """Handle around a running ``claude`` subprocess."""

    def __init__(self, config: AgentConfig, process: asyncio.subprocess.Process):
        super().__init__(config)
        self._process = process
        self._watcher: asyncio.Task | None = None

    @property
    def pid(self) -> int:
        return self._process.pid

    @property
    def returncode(self) -> int | None:
        return self._process.returncode

    def start(self) -> None:
        """Start pumping output and watching for exit."""
        if self._watcher is None:
            self._watcher = asyncio.create_task(self._run(), name=f"agent-{self.id}")

    def send(self, message: str) -> None:
        stdin = self._process.stdin
        if stdin is None or stdin.is_closing():
            logger.warning("send to closed stdin", id=self.id)
            return
        stdin.write((message + "\n").encode("utf-8"))

    def kill(self) -> None:
        if self._process.returncode is not None:
            return
        try:
            self._process.terminate()
        except ProcessLookupError:
            pass

    async def aclose(self) -> None:
        watcher = self._watcher
        if watcher is None or watcher.done():
            return
        try:
            await asyncio.wait_for(asyncio.shield(watcher), CLOSE_TIMEOUT)
            return
        except asyncio.TimeoutError:
            logger.warning("agent did not exit after terminate", id=self.id)
        except Exception as e:
            logger.error("agent watcher failed", id=self.id, error=str(e))
            return

        with contextlib.suppress(ProcessLookupError):
            self._process.kill()
        watcher.cancel()
        with contextlib.suppress(asyncio.CancelledError):
            await watcher

    async def _pump(self, stream: asyncio.StreamReader | None) -> None:
        if stream is None:
            return
        decoder = codecs.getincrementaldecoder("utf-8")(errors="replace")
        while True:
            data = await stream.read(READ_CHUNK_SIZE)
            if not data:
                break
            text = decoder.decode(data)
            if text:
                self._emit_output(text)
        tail = decoder.decode(b"", final=True)
        if tail:
            self._emit_output(tail)

    async def _run(self) -> None:
        try:
            await asyncio.gather(
                self._pump(self._process.stdout),
                self._pump(self._process.stderr),
            )
        except Exception as e:
            logger.error("output stream failed", id=self.id, error=str(e))

        code = await self._process.wait()
        logger.info("agent process exited", id=self.id, exitCode=code)
        self._emit_exit(code if code is not None else 0)


class ClaudeCodeAdapter:
    """Spawns Claude Code agents."""

    def __init__(self, executable: str = CLAUDE_EXECUTABLE):
        self.executable = executable

    async def spawn(self, config: AgentConfig) -> ClaudeCodeHandle:
        """Start a Claude Code process for the given config.

        Raises:
            SpawnError: If the process could not be started.
        """
        command = build_command(config, self.executable)
        logger.info("spawning agent", id=config.id, command=command, cwd=config.working_directory)

        try:
            process = await asyncio.create_subprocess_exec(
                *command,
                cwd=config.working_directory,
                stdin=asyncio.subprocess.PIPE,
                stdout=asyncio.subprocess.PIPE,
                stderr=asyncio.subprocess.PIPE,
            )
        except OSError as e:
            raise SpawnError(config.id, e) from e

        handle = ClaudeCodeHandle(config, process)
        # send the initial task
        handle.send(config.task)
        handle.start()
        return handle
