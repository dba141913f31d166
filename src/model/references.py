"""Type reference records attached to components."""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict


class TypeReference(BaseModel):
    """One concrete use of a type, resolved to its fully-qualified name."""

    model_config = ConfigDict(frozen=True)

    resolved_name: str
    line: int


__all__ = ["TypeReference"]
