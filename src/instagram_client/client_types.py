"""
Common typing helpers used by resource modules to avoid circular imports.
"""

from collections.abc import Mapping
from typing import Any, Protocol

from .config import ClientConfig
from .request_builder import BuiltRequest, Verb


class RequesterProtocol(Protocol):
    @property
    def config(self) -> ClientConfig:
        ...

    def get_limit_size(self, override: int | None = None) -> int:
        ...

    def build(
        self,
        path: str,
        params: Mapping[str, Any] | None = None,
        *,
        raw: bool = False,
        verb: Verb | str = Verb.GET,
    ) -> BuiltRequest:
        ...

    def execute(
        self,
        path: str,
        verb: Verb | str = Verb.GET,
        params: Mapping[str, Any] | None = None,
    ) -> Any:
        ...
