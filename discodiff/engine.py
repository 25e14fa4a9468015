"""Main comparison engine for discodiff."""

from __future__ import annotations

import logging
from typing import Optional

from .differ import Differ
from .models import DiffEntry, Document, EngineConfig
from .options import DiffOptions

logger = logging.getLogger(__name__)


class DiscoDiffEngine:
    """
    Compares two API description documents.

    The comparison runs in a fixed category order: identifiers, versioning,
    service metadata, schemas, resources. Categories other than identifiers
    are enabled through DiffOptions.
    """

    VERSION = "1.0.0"

    def __init__(self, config: Optional[EngineConfig] = None):
        """
        Initialize the engine.

        Args:
            config: Engine configuration (uses defaults if not provided)
        """
        self.config = config or EngineConfig()

    def compare(
        self,
        old: Document,
        new: Document,
        options: Optional[DiffOptions] = None
    ) -> list[DiffEntry]:
        """
        Compare two documents.

        Args:
            old: The baseline document
            new: The document to compare against the baseline
            options: Categories to compare (defaults to config.options)

        Returns:
            Ordered list of top-level diff entries, empty when nothing changed

        Raises:
            PreconditionError: If either input violates the document model
        """
        if options is None:
            options = self.config.options
        logger.debug(
            "Comparing %r -> %r with options %s",
            getattr(old, "name", old), getattr(new, "name", new), options.enabled()
        )

        differ = Differ(options, max_depth=self.config.max_depth)
        diffs = differ.compare_documents(old, new)

        logger.debug("Found %d top-level changes", len(diffs))
        return diffs


def diff_docs(
    old: Document,
    new: Document,
    options: DiffOptions = DiffOptions.ALL
) -> list[DiffEntry]:
    """
    Convenience function to compare two documents.

    Args:
        old: The baseline document
        new: The document to compare
        options: Categories to compare

    Returns:
        Ordered list of top-level diff entries
    """
    engine = DiscoDiffEngine(EngineConfig(options=options))
    return engine.compare(old, new)
