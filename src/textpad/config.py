"""Editor settings shared by the render loop and the terminal host."""

from dataclasses import dataclass

DEFAULT_POLL_INTERVAL_MS = 250
DEFAULT_TITLE = "Text Editor"


@dataclass(frozen=True)
class EditorConfig:
    """Settings for one editing session."""

    poll_interval_ms: int = DEFAULT_POLL_INTERVAL_MS
    title: str = DEFAULT_TITLE

    def __post_init__(self) -> None:
        if self.poll_interval_ms <= 0:
            raise ValueError("poll_interval_ms must be positive")

    @property
    def poll_interval(self) -> float:
        return self.poll_interval_ms / 1000.0
