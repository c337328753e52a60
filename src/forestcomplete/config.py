"""Application configuration defaults."""

from __future__ import annotations

from dataclasses import dataclass
from typing import List, Sequence

DEFAULT_EXECUTABLE = "forester"
DEFAULT_CONFIG_FILE = "forest.toml"
DEFAULT_TIMEOUT_MS = 30000


@dataclass(slots=True)
class ForesterSettings:
    path: str = DEFAULT_EXECUTABLE
    config: str | None = None
    timeout_ms: int = DEFAULT_TIMEOUT_MS
    show_id: bool = False
    random: bool = False
    default_prefix: str | None = None
    default_template: str | None = None

    def __post_init__(self) -> None:
        if not self.path:
            self.path = DEFAULT_EXECUTABLE
        if not self.config:
            self.config = None

    @property
    def config_file_name(self) -> str:
        return self.config or DEFAULT_CONFIG_FILE

    def with_config(self, args: Sequence[str]) -> List[str]:
        """Append the config file argument forester expects last."""
        return [*args, self.config] if self.config else list(args)

    def query_args(self) -> List[str]:
        return self.with_config(["query", "all"])
