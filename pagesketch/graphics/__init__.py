"""
PageSketch Graphics Module

Contains the interaction and rendering components:
- Metrics: text measurement
- Tools: tool types and draft-shape creation
- HitTester: pointer position to entity/handle resolution
- TextEditor: caret-based text editing
- InteractionController: drag/rotate/resize/paint state machine
- Renderer: page drawing for live view and export
"""

from .metrics import TextMetrics, QtTextMetrics, FixedAdvanceMetrics
from .tools import ToolType, create_draft
from .hit_test import HitTarget, HitResult, HitTester
from .text_editor import TextEditor, IGNORED_KEYS
from .controller import (
    InteractionController, DragOperation, Idle, DraggingShape, DraggingText,
    Painting, AwaitingTextInput
)
from .renderer import Renderer

__all__ = [
    # Metrics
    'TextMetrics',
    'QtTextMetrics',
    'FixedAdvanceMetrics',
    # Tools
    'ToolType',
    'create_draft',
    # Hit testing
    'HitTarget',
    'HitResult',
    'HitTester',
    # Text
    'TextEditor',
    'IGNORED_KEYS',
    # Controller
    'InteractionController',
    'DragOperation',
    'Idle',
    'DraggingShape',
    'DraggingText',
    'Painting',
    'AwaitingTextInput',
    # Rendering
    'Renderer',
]
