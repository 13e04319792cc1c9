"""Controller layer for GUI business logic."""

from .page_controller import FetchWorker, PageController

__all__ = [
    "FetchWorker",
    "PageController",
]
