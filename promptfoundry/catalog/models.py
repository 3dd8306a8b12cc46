from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field


class CatalogItem(BaseModel):
    """One library entry as the static site reads it (camelCase `buyUrl` on disk)."""

    model_config = ConfigDict(populate_by_name=True)

    id: str
    category: str
    title: str
    tags: list[str] = Field(default_factory=list)
    rating: int | float = 0
    price: int | float = 0
    buy_url: str = Field("", alias="buyUrl")
    prompt: str

    def to_record(self) -> dict:
        return self.model_dump(by_alias=True)


def identity_key(title: object, prompt: object) -> tuple[str, str]:
    """Dedup identity: case-insensitive (title, prompt)."""
    return (str(title or "").casefold(), str(prompt or "").casefold())
