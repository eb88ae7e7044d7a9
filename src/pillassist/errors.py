"""
Failures raised by an invocation wrapper.

InvalidInput is the caller's to fix. The other three are fatal for the request
only; the entry point turns them into one generic message.
"""
from __future__ import annotations

from typing import Optional

from .validators import ValidationError, Violation


class InvocationError(Exception):
    kind = "invocation_error"

    def __init__(self, operation: str, message: str) -> None:
        super().__init__(f"{operation}: {message}")
        self.operation = operation


class InvalidInput(InvocationError):
    """Input failed its contract; the model was not called."""

    kind = "invalid_input"

    def __init__(self, operation: str, error: ValidationError) -> None:
        super().__init__(operation, str(error))
        self.violations: list[Violation] = list(error.violations)


class CapabilityError(InvocationError):
    """Network failure, timeout or refusal inside the model capability."""

    kind = "capability_error"

    def __init__(self, operation: str, cause: Optional[BaseException]) -> None:
        detail = f"{type(cause).__name__}: {cause}" if cause is not None else "unknown failure"
        super().__init__(operation, f"model capability failed ({detail})")
        self.cause = cause


class EmptyOutput(InvocationError):
    kind = "empty_output"

    def __init__(self, operation: str) -> None:
        super().__init__(operation, "model capability returned no output")


class OutputSchemaMismatch(InvocationError):
    kind = "output_schema_mismatch"

    def __init__(self, operation: str, error: ValidationError) -> None:
        super().__init__(operation, str(error))
        self.violations: list[Violation] = list(error.violations)
