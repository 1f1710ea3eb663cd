"""Graph API route builder."""

from __future__ import annotations

from dataclasses import dataclass, field
from urllib.parse import quote, urlencode


@dataclass(slots=True)
class Route:
    """Versioned Graph API path plus ordered query parameters.

    >>> str(Route.new("v20.0", "/act_%s/advideos", "42").fields("id", "title").limit(1000))
    '/v20.0/act_42/advideos?fields=id%2Ctitle&limit=1000'
    """

    path: str
    params: dict[str, str] = field(default_factory=dict)

    @classmethod
    def new(cls, version: str, template: str, *args: object) -> "Route":
        if not template.startswith("/"):
            template = "/" + template
        escaped = tuple(quote(str(arg), safe="") for arg in args)
        return cls(path=f"/{version}{template % escaped}")

    def fields(self, *names: str) -> "Route":
        if names:
            self.params["fields"] = ",".join(names)
        return self

    def limit(self, size: int) -> "Route":
        if size < 1:
            raise ValueError("limit must be positive")
        self.params["limit"] = str(size)
        return self

    def param(self, key: str, value: object) -> "Route":
        self.params[key] = str(value)
        return self

    def __str__(self) -> str:
        if not self.params:
            return self.path
        return f"{self.path}?{urlencode(self.params)}"


__all__ = ["Route"]
