"""Compares two document files and renders the result."""

from __future__ import annotations

from pathlib import Path
from typing import Optional

from .engine import DiscoDiffEngine
from .loader import load_document
from .models import DiffEntry, Document, EngineConfig
from .render import render_diff


class DiffRunner:
    """
    Loads an old and a new document from disk and compares them.

    Usage:
        runner = DiffRunner("storage-v1-old.json", "storage-v1-new.json")
        print(runner.render())
    """

    def __init__(
        self,
        old_path: str,
        new_path: str,
        engine_config: Optional[EngineConfig] = None
    ):
        """
        Initialize the runner.

        Args:
            old_path: Path to the baseline JSON/YAML document
            new_path: Path to the newer JSON/YAML document
            engine_config: Optional engine configuration
        """
        self.old_path = Path(old_path)
        self.new_path = Path(new_path)
        self.engine_config = engine_config or EngineConfig()
        self._old: Optional[Document] = None
        self._new: Optional[Document] = None

    @property
    def old(self) -> Document:
        """Load and cache the baseline document."""
        if self._old is None:
            self._old = load_document(self.old_path)
        return self._old

    @property
    def new(self) -> Document:
        """Load and cache the newer document."""
        if self._new is None:
            self._new = load_document(self.new_path)
        return self._new

    def run(self) -> list[DiffEntry]:
        engine = DiscoDiffEngine(self.engine_config)
        return engine.compare(self.old, self.new)

    def render(self) -> str:
        return render_diff(self.run())


def diff_files(
    old_path: str,
    new_path: str,
    engine_config: Optional[EngineConfig] = None
) -> str:
    """
    Compare two document files and return the rendered diff.

        from discodiff.runner import diff_files
        print(diff_files("old.json", "new.json"))
    """
    return DiffRunner(old_path, new_path, engine_config).render()
