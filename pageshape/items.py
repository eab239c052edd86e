"""Pydantic output model for extraction results."""

from __future__ import annotations

from typing import Any, Literal

from pydantic import BaseModel, ConfigDict, Field, field_validator

from pageshape.publish import publish_path

StageName = Literal["template", "readability", "generic"]


class ExtractedRecord(BaseModel):
    """Canonical, immutable output of one extraction call.

    ``template`` is a registered template name, ``"readability"`` or
    ``"generic"``.  ``confidence`` is the detection score of the template
    that produced the record and 0 for both fallback stages.
    """

    model_config = ConfigDict(frozen=True)

    # Identity
    url: str = ""
    title: str = ""

    # Provenance
    template: str
    confidence: float = 0.0
    stage: StageName
    method: str = ""
    scores: dict[str, float] = Field(default_factory=dict)
    extracted_at: str = ""

    # Payload
    fields: dict[str, Any] = Field(default_factory=dict)
    content_text: str = ""
    content_markdown: str = ""

    # Validation
    is_valid: bool = True
    errors: dict[str, str] = Field(default_factory=dict)

    @field_validator("url", mode="before")
    @classmethod
    def strip_url(cls, v: Any) -> Any:
        if isinstance(v, str):
            return v.strip()
        return v or ""

    @field_validator("title", mode="before")
    @classmethod
    def strip_title(cls, v: Any) -> Any:
        if isinstance(v, str):
            return v.strip()
        return v or ""

    @field_validator("confidence", mode="before")
    @classmethod
    def clamp_confidence(cls, v: Any) -> Any:
        if isinstance(v, (int, float)) and not isinstance(v, bool):
            return min(1.0, max(0.0, float(v)))
        return v

    def to_publishable(self, base_path: str = "") -> dict[str, str]:
        """``{"path", "markdown"}`` pair for a publishing layer."""
        return {
            "path": publish_path(self.url, base_path),
            "markdown": self.content_markdown,
        }
