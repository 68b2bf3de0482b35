from __future__ import annotations

from typing import Any, List, Optional, Protocol


class ElementPort(Protocol):
    def inner_text(self) -> str:
        ...

    def text_content(self) -> Optional[str]:
        ...

    def get_attribute(self, name: str) -> Optional[str]:
        ...

    def query_selector(self, selector: str) -> Optional["ElementPort"]:
        ...

    def query_selector_all(self, selector: str) -> List["ElementPort"]:
        ...


class PagePort(Protocol):
    def goto(self, url: str, **kwargs: Any) -> Any:
        ...

    def wait_for_selector(self, selector: str, *, timeout: Optional[float] = None) -> Any:
        ...

    def query_selector_all(self, selector: str) -> List[ElementPort]:
        ...

    def evaluate(self, expression: str) -> Any:
        ...

    def close(self) -> None:
        ...


class BrowserPort(Protocol):
    def new_page(self) -> PagePort:
        ...

    def close(self) -> None:
        ...
