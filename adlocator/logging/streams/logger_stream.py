import asyncio
import datetime
import io
import os
import sys
import threading
from typing import TextIO, TypeVar

import msgspec

from adlocator.logging.config import LoggingConfig, StreamType
from adlocator.logging.models import Entry, Log


T = TypeVar('T', bound=Entry)

DEFAULT_TEMPLATE = "{timestamp} - {level} - {thread_id} - {filename}:{function_name}.{line_number} - {message}"


class LoggerStream:
    def __init__(
        self,
        name: str | None = None,
        template: str | None = None,
        filename: str | None = None,
        directory: str | None = None,
    ) -> None:
        self._name = name or 'default'
        self._default_template = template or DEFAULT_TEMPLATE
        self._default_logfile = filename
        self._default_log_directory = directory
        self._config = LoggingConfig()
        self._files: dict[str, io.BufferedWriter] = {}
        self._file_locks: dict[str, asyncio.Lock] = {}
        self._loop: asyncio.AbstractEventLoop | None = None

    @property
    def name(self) -> str:
        return self._name

    @property
    def logfile_path(self) -> str | None:
        if self._default_logfile is None:
            return None

        directory = self._default_log_directory or os.getcwd()
        return os.path.join(directory, self._default_logfile)

    async def initialize(self):
        self._loop = asyncio.get_running_loop()

        logfile_path = self.logfile_path
        if logfile_path and self._files.get(logfile_path) is None:
            self._files[logfile_path] = await self._loop.run_in_executor(
                None,
                self._open_file,
                logfile_path,
            )
            self._file_locks[logfile_path] = asyncio.Lock()

    def _open_file(self, logfile_path: str) -> io.BufferedWriter:
        directory = os.path.dirname(logfile_path)
        if directory:
            os.makedirs(directory, exist_ok=True)

        return open(logfile_path, 'ab+')

    async def log(
        self,
        entry: T,
        template: str | None = None,
    ):
        if self._config.enabled(self._name, entry.level) is False:
            return

        if self._loop is None or self._loop is not asyncio.get_running_loop():
            await self.initialize()

        filename, line_number, function_name = self._find_caller()

        if self.logfile_path:
            await self._log_to_file(
                Log(
                    entry=entry,
                    logger=self._name,
                    filename=filename,
                    function_name=function_name,
                    line_number=line_number,
                )
            )
            return

        line = entry.to_template(
            template or self._default_template,
            context={
                "filename": filename,
                "function_name": function_name,
                "line_number": line_number,
                "thread_id": threading.get_native_id(),
                "timestamp": datetime.datetime.now(datetime.UTC).isoformat(),
            },
        )

        # Executor threads do not see the caller's contextvars.
        stream = sys.stdout if self._config.output == StreamType.STDOUT else sys.stderr

        await self._loop.run_in_executor(
            None,
            self._write_stream,
            stream,
            line,
        )

    def _write_stream(self, stream: TextIO, line: str):
        stream.write(f"{line}\n")
        stream.flush()

    async def _log_to_file(self, log: Log):
        logfile_path = self.logfile_path
        if self._files.get(logfile_path) is None:
            await self.initialize()

        async with self._file_locks[logfile_path]:
            await self._loop.run_in_executor(
                None,
                self._write_to_file,
                logfile_path,
                msgspec.json.encode(log) + b"\n",
            )

    def _write_to_file(self, logfile_path: str, data: bytes):
        logfile = self._files.get(logfile_path)
        if logfile is None or logfile.closed:
            return

        logfile.write(data)
        logfile.flush()

    async def close(self):
        files = list(self._files.values())
        self._files.clear()
        self._file_locks.clear()

        for logfile in files:
            if self._loop is not None:
                await self._loop.run_in_executor(None, logfile.close)

            else:
                logfile.close()

    def _find_caller(self):
        """
        Find the stack frame of the caller of log() so that we can note
        the source file name, line number and function name.
        """
        frame = sys._getframe(2)
        code = frame.f_code

        return (
            code.co_filename,
            frame.f_lineno,
            code.co_name,
        )
