"""
PageSketch Errors

Exceptions raised by the I/O layer. Input handling never raises; it
degrades to no-ops instead.
"""


class PageSketchError(Exception):
    """Base class for all PageSketch errors."""


class PageLoadError(PageSketchError):
    """An imported file could not be decoded into page rasters."""


class ExportError(PageSketchError):
    """A page or document could not be exported."""
