from .logger_stream import LoggerStream


class LoggerContext:
    def __init__(
        self,
        name: str | None = None,
        template: str | None = None,
        filename: str | None = None,
        directory: str | None = None,
    ) -> None:
        self.name = name
        self.template = template
        self.filename = filename
        self.directory = directory
        self.stream = LoggerStream(
            name=name,
            template=template,
            filename=filename,
            directory=directory,
        )

    async def __aenter__(self):
        await self.stream.initialize()
        return self.stream

    async def __aexit__(self, exc_type, exc_val, exc_tb):
        await self.stream.close()
