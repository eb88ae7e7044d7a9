"""
Caller-facing success/error union.

Exactly one of `data` (success) or `error` (failure) is populated.
"""
from __future__ import annotations

from typing import Any, Generic, Optional, TypeVar

from pydantic import BaseModel, ConfigDict, model_validator

T = TypeVar("T")


class ResultEnvelope(BaseModel, Generic[T]):
    model_config = ConfigDict(frozen=True)

    success: bool
    data: Optional[T] = None
    error: Optional[str] = None

    @model_validator(mode="after")
    def _one_side_populated(self) -> "ResultEnvelope[T]":
        if self.success:
            if self.data is None or self.error is not None:
                raise ValueError("A successful envelope carries data and no error.")
        else:
            if self.data is not None or not (self.error or "").strip():
                raise ValueError("A failed envelope carries a non-empty error and no data.")
        return self

    @classmethod
    def ok(cls, data: T) -> "ResultEnvelope[T]":
        return cls(success=True, data=data)

    @classmethod
    def fail(cls, message: str) -> "ResultEnvelope[T]":
        return cls(success=False, error=message)

    def to_dict(self) -> dict[str, Any]:
        """Wire shape: {success, data} or {success, error}, data keys in camelCase."""
        if not self.success:
            return {"success": False, "error": self.error}
        data = self.data.model_dump(by_alias=True) if isinstance(self.data, BaseModel) else self.data
        return {"success": True, "data": data}
