"""
Pydantic data models for the MultiVersus client.

Request descriptors for batch calls and pages of search results.
"""

from typing import Any
from urllib.parse import urlencode

from pydantic import BaseModel, ConfigDict, Field, field_validator


class RequestDescriptor(BaseModel):
    """A single backend request, as bundled into a batch call."""

    model_config = ConfigDict(frozen=True)

    path: str = Field(description="Path relative to the base URL")
    method: str = Field(default="GET", description="HTTP verb")
    query: dict[str, Any] = Field(default_factory=dict, description="Query parameters")
    body: Any = Field(default=None, description="JSON body")
    headers: dict[str, str] = Field(default_factory=dict, description="Extra headers")

    @field_validator("path")
    @classmethod
    def ensure_leading_slash(cls, v: str) -> str:
        """Paths are always relative to the base URL root."""
        if not v:
            raise ValueError("path must not be empty")
        return v if v.startswith("/") else f"/{v}"

    @field_validator("method")
    @classmethod
    def normalize_method(cls, v: str) -> str:
        """Uppercase the HTTP verb."""
        return v.upper()

    @property
    def url(self) -> str:
        """Path with the query string appended."""
        if not self.query:
            return self.path
        return f"{self.path}?{urlencode(self.query, doseq=True)}"

    def to_batch_entry(self) -> dict[str, Any]:
        """Serialize as a batch sub-request."""
        entry: dict[str, Any] = {
            "url": self.url,
            "verb": self.method,
            "headers": dict(self.headers),
        }
        if self.body is not None:
            entry["body"] = self.body
        return entry


class SearchPage(BaseModel):
    """One page of username search results."""

    results: list[dict[str, Any]] = Field(default_factory=list)
    cursor: str | None = Field(default=None, description="Continuation marker")

    @field_validator("results", mode="before")
    @classmethod
    def none_to_empty(cls, v: Any) -> Any:
        """The backend sends null for an empty result set."""
        if v is None:
            return []
        if isinstance(v, list):
            return [entry for entry in v if isinstance(entry, dict)]
        return v

    @property
    def has_more(self) -> bool:
        """Check if the backend offered another page."""
        return bool(self.cursor and self.cursor.strip())
