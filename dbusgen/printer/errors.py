"""Errors raised while printing generated bindings."""


class GenerationError(RuntimeError):
    """Raised when a generation run cannot produce well-formed source."""

    def __init__(self, message: str, *, line: int | None = None, text: str | None = None) -> None:
        super().__init__(message)
        self.line = line
        self.text = text
