"""Custom exceptions for the discodiff engine."""


class DiscoDiffError(Exception):
    """Base exception for discodiff errors."""
    pass


class PreconditionError(DiscoDiffError):
    """Raised when the engine is handed structurally invalid input."""
    def __init__(self, message: str, details: dict = None):
        super().__init__(message)
        self.message = message
        self.details = details or {}


class MaxDepthExceededError(PreconditionError):
    """Raised when resource nesting goes deeper than the configured limit."""
    def __init__(self, depth: int, element_id: str):
        super().__init__(
            f"Maximum depth ({depth}) exceeded at element: {element_id}",
            {"depth": depth, "element_id": element_id},
        )
        self.depth = depth
        self.element_id = element_id


class DocumentLoadError(DiscoDiffError):
    """Raised when a document cannot be read or converted to the model."""
    def __init__(self, message: str, path: str = None, reason: str = None):
        super().__init__(message)
        self.message = message
        self.path = path
        self.reason = reason
