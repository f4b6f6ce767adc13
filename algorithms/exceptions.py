"""Errors raised by the tracers."""

from typing import Optional


class TraceError(Exception):
    """Base class for tracer failures."""


class InvalidSourceError(TraceError, ValueError):
    """The requested source node is not in the graph. Raised before any step is recorded."""

    def __init__(self, source: Optional[str], message: Optional[str] = None):
        super().__init__(message or f"Source node '{source}' does not exist in the graph.")
        self.source = source
