"""Tsuzuri - vertical and horizontal page layout with undoable editing."""

from .metrics import PageMetrics, metrics_for, resolve_metrics
from .paginator import Paginator, join_pages, paginate, replace_page
from .settings import DEFAULT_SETTINGS, EditorSettings, WritingMode
from .state import EditorState, EditorStore, transition
from .undo import ContentHistory

__version__ = "0.1.0"

__all__ = [
    'ContentHistory',
    'DEFAULT_SETTINGS',
    'EditorSettings',
    'EditorState',
    'EditorStore',
    'PageMetrics',
    'Paginator',
    'WritingMode',
    'join_pages',
    'metrics_for',
    'paginate',
    'replace_page',
    'resolve_metrics',
    'transition',
]
