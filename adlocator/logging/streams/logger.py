from __future__ import annotations

import pathlib
from typing import Dict

from .logger_context import LoggerContext


class Logger:
    def __init__(self) -> None:
        self._contexts: Dict[str, LoggerContext] = {}

    def context(
        self,
        name: str | None = None,
        template: str | None = None,
        path: str | None = None,
    ):
        if name is None:
            name = 'default'

        filename, directory = self._parse_path(path)

        context = self._contexts.get(name)
        if context is None:
            self._contexts[name] = LoggerContext(
                name=name,
                template=template,
                filename=filename,
                directory=directory,
            )

        elif template or filename or directory:
            self._contexts[name] = LoggerContext(
                name=name,
                template=template if template else context.template,
                filename=filename if filename else context.filename,
                directory=directory if directory else context.directory,
            )

        return self._contexts[name]

    def _parse_path(self, path: str | None):
        if not path:
            return None, None

        logfile_path = pathlib.Path(path)
        is_logfile = len(logfile_path.suffix) > 0

        filename = logfile_path.name if is_logfile else 'adlocator.log.json'
        directory = str(logfile_path.parent.absolute()) if is_logfile else str(logfile_path.absolute())

        return filename, directory
