"""Domain models for spec documents as seen by the search engine.

The document store owns the source of truth; these value objects only carry
the fields the index and classifier consume.
"""

from typing import Any

from pydantic import BaseModel, ConfigDict, Field


class SpecMetadata(BaseModel):
    """One entry of the document store's metadata snapshot."""

    model_config = ConfigDict(frozen=True, extra="ignore")

    id: int
    title: str = ""
    category: str = ""
    status: str = ""
    file_path: str = ""


class ParsedSpec(BaseModel):
    """Structured front matter plus markdown body returned by a document source."""

    model_config = ConfigDict(frozen=True)

    front_matter: dict[str, Any] = Field(default_factory=dict)
    body: str = ""


class SpecDocument(BaseModel):
    """Value object describing the fields a spec contributes to the index."""

    model_config = ConfigDict(frozen=True)

    id: int
    title: str = ""
    category: str = ""
    status: str = ""
    tags: tuple[str, ...] = ()
    body: str = ""

    @property
    def searchable_text(self) -> str:
        """Lower-cased concatenation of every searchable field."""
        parts = [self.title, self.category, self.status, *self.tags, self.body]
        return " ".join(parts).lower()

    @classmethod
    def from_parsed(cls, doc_id: int, parsed: ParsedSpec, fallback: SpecMetadata | None = None) -> "SpecDocument":
        """Build a document from front matter, falling back to snapshot metadata."""
        front_matter = parsed.front_matter
        tags = front_matter.get("tags") or ()
        if isinstance(tags, str):
            tags = [tag.strip() for tag in tags.split(",") if tag.strip()]
        elif not isinstance(tags, list | tuple):
            tags = [tags]
        return cls(
            id=doc_id,
            title=_as_text(front_matter.get("title"), fallback.title if fallback else ""),
            category=_as_text(front_matter.get("category"), fallback.category if fallback else ""),
            status=_as_text(front_matter.get("status"), fallback.status if fallback else ""),
            tags=tuple(str(tag) for tag in tags if tag is not None),
            body=parsed.body,
        )


def _as_text(value: Any, default: str) -> str:
    if value is None or value == "":
        return default
    return str(value)
