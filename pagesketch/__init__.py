"""
PageSketch - page annotation editing engine.

Draw, select, move, rotate, resize and type onto pages (blank canvases,
imported images or rendered PDF pages), then export PNG or multi-page PDF.
"""

__version__ = "0.1.0"
