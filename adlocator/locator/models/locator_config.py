from typing import Any

from pydantic import (
    BaseModel,
    ConfigDict,
    Field,
    StrictBool,
    StrictStr,
    field_validator,
)


class LocatorConfig(BaseModel):
    """
    Immutable settings for the DNS transport used by the locator.

    Values are forwarded to ``aiodns.DNSResolver`` as they are, the
    locator itself does not interpret them. Use ``with_options()`` to
    derive a new config instead of changing an existing one.
    """

    model_config = ConfigDict(frozen=True)

    nameservers: tuple[StrictStr, ...] | None = None
    timeout: float | None = Field(default=None, gt=0)
    tries: int | None = Field(default=None, ge=1)
    rotate: StrictBool = False
    resolver_options: dict[StrictStr, Any] = Field(default_factory=dict)

    @field_validator("nameservers")
    @classmethod
    def validate_nameservers(cls, nameservers: tuple[str, ...] | None):
        if nameservers is not None and not all(nameservers):
            raise ValueError("nameservers cannot contain empty entries")

        return nameservers

    @field_validator("resolver_options")
    @classmethod
    def validate_resolver_options(cls, options: dict[str, Any]):
        if any(not name for name in options):
            raise ValueError("resolver option names cannot be empty")

        return options

    def with_options(self, **options: Any) -> "LocatorConfig":
        merged = dict(self.resolver_options)
        merged.update(options)

        return LocatorConfig(
            nameservers=self.nameservers,
            timeout=self.timeout,
            tries=self.tries,
            rotate=self.rotate,
            resolver_options=merged,
        )

    def resolver_kwargs(self) -> dict[str, Any]:
        """
        Keyword arguments for ``aiodns.DNSResolver``.

        ``resolver_options`` are applied last and override the typed
        settings of the same name.
        """
        kwargs: dict[str, Any] = {}

        if self.nameservers:
            kwargs["nameservers"] = list(self.nameservers)

        if self.timeout is not None:
            kwargs["timeout"] = self.timeout

        if self.tries is not None:
            kwargs["tries"] = self.tries

        if self.rotate:
            kwargs["rotate"] = True

        kwargs.update(self.resolver_options)

        return kwargs
