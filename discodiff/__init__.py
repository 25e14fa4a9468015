"""
discodiff - change detection between API description documents

Compares two snapshots of a Discovery-style API description and produces
an ordered tree of additions, modifications and deletions, plus a text
rendering of that tree.
"""

from .engine import DiscoDiffEngine, diff_docs
from .options import DiffOptions
from .models import (
    EngineConfig,
    ChangeType,
    ElementKind,
    DiffEntry,
    Document,
    Schema,
    Resource,
    Method,
)
from .render import render_diff
from .exceptions import (
    DiscoDiffError,
    PreconditionError,
    MaxDepthExceededError,
    DocumentLoadError,
)
from .loader import load_document, parse_document
from .runner import DiffRunner, diff_files

__version__ = "1.0.0"
__all__ = [
    # Engine
    "DiscoDiffEngine",
    "diff_docs",
    "EngineConfig",
    "DiffOptions",
    # Diff tree
    "ChangeType",
    "ElementKind",
    "DiffEntry",
    "render_diff",
    # Document model
    "Document",
    "Schema",
    "Resource",
    "Method",
    # Errors
    "DiscoDiffError",
    "PreconditionError",
    "MaxDepthExceededError",
    "DocumentLoadError",
    # Loading
    "load_document",
    "parse_document",
    "DiffRunner",
    "diff_files",
]
