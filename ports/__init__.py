from .browser import BrowserPort, ElementPort, PagePort

__all__ = [
    "BrowserPort",
    "ElementPort",
    "PagePort",
]
