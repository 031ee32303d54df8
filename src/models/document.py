"""Recipe document model: a title plus an ordered list of typed blocks."""

from __future__ import annotations

import uuid
from enum import Enum
from typing import Annotated, Any, List, Literal, Optional, Union

from pydantic import BaseModel, Field, field_validator

DEFAULT_TITLE = "Untitled Recipe"


def _new_id() -> str:
    return uuid.uuid4().hex


class BlockKind(str, Enum):
    HERO = "hero"
    INGREDIENTS = "ingredients"
    STEP = "step"
    NOTE = "note"

    @property
    def marker(self) -> str:
        return f"[{self.value}]"

    @property
    def display_name(self) -> str:
        return self.value.capitalize()

    @classmethod
    def from_marker(cls, line: str) -> Optional["BlockKind"]:
        """Return the kind named by a `[kind]` marker line, or None."""
        s = line.strip().lower()
        if not (s.startswith("[") and s.endswith("]")):
            return None
        try:
            return cls(s[1:-1])
        except ValueError:
            return None


class HeatLevel(str, Enum):
    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"

    @property
    def label(self) -> str:
        return self.value.capitalize()

    @classmethod
    def parse(cls, text: str) -> Optional["HeatLevel"]:
        try:
            return cls(text.strip().lower())
        except ValueError:
            return None


def _one_line(v: str) -> str:
    """Fold line breaks into spaces and trim; field lines hold one line each."""
    return " ".join(v.splitlines()).strip()


def _optional_one_line(v: Optional[str]) -> Optional[str]:
    if v is None:
        return None
    return _one_line(v) or None


def _multi_line(v: str) -> str:
    # Normalize every line-break style to "\n", the only one the encoder escapes.
    return "\n".join(v.splitlines()).strip()


class IngredientItem(BaseModel):
    id: str = Field(default_factory=_new_id)
    name: str = ""
    amount: str = ""
    icon: Optional[str] = None

    @field_validator("name", "amount")
    @classmethod
    def single_line(cls, v: str) -> str:
        return _one_line(v)

    @field_validator("icon")
    @classmethod
    def blank_icon_to_none(cls, v: Optional[str]) -> Optional[str]:
        return _optional_one_line(v)


class HeroBlock(BaseModel):
    kind: Literal["hero"] = "hero"
    id: str = Field(default_factory=_new_id)
    image_name: str = ""
    servings: str = ""
    total_time: str = ""
    nutrition: str = ""

    @field_validator("image_name", "servings", "total_time", "nutrition")
    @classmethod
    def single_line(cls, v: str) -> str:
        return _one_line(v)


class IngredientsBlock(BaseModel):
    kind: Literal["ingredients"] = "ingredients"
    id: str = Field(default_factory=_new_id)
    ingredients: List[IngredientItem] = Field(default_factory=list)


class StepBlock(BaseModel):
    kind: Literal["step"] = "step"
    id: str = Field(default_factory=_new_id)
    title: str = ""
    text: str = ""
    icon: Optional[str] = None
    duration_minutes: Optional[int] = Field(default=None, ge=0)
    heat: Optional[HeatLevel] = None

    @field_validator("title")
    @classmethod
    def single_line(cls, v: str) -> str:
        return _one_line(v)

    @field_validator("text")
    @classmethod
    def trimmed_text(cls, v: str) -> str:
        return _multi_line(v)

    @field_validator("icon")
    @classmethod
    def blank_icon_to_none(cls, v: Optional[str]) -> Optional[str]:
        return _optional_one_line(v)


class NoteBlock(BaseModel):
    kind: Literal["note"] = "note"
    id: str = Field(default_factory=_new_id)
    text: str = ""

    @field_validator("text")
    @classmethod
    def trimmed_text(cls, v: str) -> str:
        return _multi_line(v)


Block = Annotated[
    Union[HeroBlock, IngredientsBlock, StepBlock, NoteBlock],
    Field(discriminator="kind"),
]


def _strip_ids(obj: Any) -> Any:
    if isinstance(obj, dict):
        return {k: _strip_ids(v) for k, v in obj.items() if k != "id"}
    if isinstance(obj, list):
        return [_strip_ids(v) for v in obj]
    return obj


class RecipeDocument(BaseModel):
    title: str = DEFAULT_TITLE
    blocks: List[Block] = Field(default_factory=list)

    @field_validator("title")
    @classmethod
    def title_or_default(cls, v: str) -> str:
        return _one_line(v) or DEFAULT_TITLE

    def content(self) -> dict:
        """Plain dict of the document with block/ingredient ids removed.

        Two documents with equal content() are the same recipe; ids are only
        meaningful to editors addressing blocks within one session.
        """
        return _strip_ids(self.model_dump(mode="json"))

    def kinds(self) -> List[BlockKind]:
        return [BlockKind(b.kind) for b in self.blocks]
