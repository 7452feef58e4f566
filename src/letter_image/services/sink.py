from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import List, Optional, Protocol, Tuple, Union

from ..models.grid import Grid


class MessageKind(str, Enum):
    LOADING = "loading"
    ERROR = "error"


class GlyphSink(Protocol):
    """Whatever paints the output. The pipeline only ever talks to it through these calls."""

    def set_visible(self, visible: bool) -> None: ...

    def clear(self) -> None: ...

    def show_message(self, kind: MessageKind, text: str) -> None: ...

    def show_grid(self, grid: Grid) -> None: ...


Content = Union[None, Tuple[MessageKind, str], Grid]


@dataclass
class MemorySink:
    """Keeps the current content and a journal of every call; used headless and in tests."""
    visible: bool = False
    content: Content = None
    events: List[Tuple[str, object]] = field(default_factory=list)

    def set_visible(self, visible: bool) -> None:
        self.visible = visible
        self.events.append(("fade_in" if visible else "fade_out", None))

    def clear(self) -> None:
        self.content = None
        self.events.append(("clear", None))

    def show_message(self, kind: MessageKind, text: str) -> None:
        self.content = (kind, text)
        self.events.append((kind.value, text))

    def show_grid(self, grid: Grid) -> None:
        self.content = grid
        self.events.append(("grid", grid))

    @property
    def grid(self) -> Optional[Grid]:
        return self.content if isinstance(self.content, Grid) else None

    @property
    def message(self) -> Optional[Tuple[MessageKind, str]]:
        return self.content if isinstance(self.content, tuple) else None

    def names(self) -> List[str]:
        return [name for name, _ in self.events]
