"""Domain exceptions for speech generation, persistence, and CLI diagnostics."""

from __future__ import annotations


class PipelineStageError(RuntimeError):
    """Raised when a specific processing stage fails."""

    def __init__(
        self,
        *,
        stage: str,
        detail: str,
        hint: str | None = None,
    ) -> None:
        """Initialize a stage-scoped error."""

        super().__init__(detail)
        self.stage = stage
        self.detail = detail
        self.hint = hint


class DocumentLoadError(PipelineStageError):
    """Raised when a screenplay document cannot be read or parsed."""

    def __init__(self, *, detail: str, hint: str | None = None) -> None:
        super().__init__(stage="load", detail=detail, hint=hint)


class PersistenceError(RuntimeError):
    """Raised by an item store when the underlying storage rejects a write."""
