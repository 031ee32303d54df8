"""Line-oriented recipe text format <-> RecipeDocument.

A file is a `# Title` line followed by blocks, each introduced by a marker
line (`[hero]`, `[ingredients]`, `[step]`, `[note]`) and holding `key: value`
or `key=value` field lines. Decoding is total: anything it does not
understand is skipped or defaulted, so callers never need to guard it.
"""

from __future__ import annotations

import logging
from typing import Any, Callable, Dict, List, Optional, Tuple

from src.codec.duration import parse_minutes
from src.models.document import (
    DEFAULT_TITLE,
    Block,
    BlockKind,
    HeatLevel,
    HeroBlock,
    IngredientItem,
    IngredientsBlock,
    NoteBlock,
    RecipeDocument,
    StepBlock,
)

logger = logging.getLogger(__name__)

TITLE_PREFIX = "# "


def _escape(text: str) -> str:
    return text.replace("\n", "\\n")


def _unescape(text: str) -> str:
    return text.replace("\\n", "\n")


def parse_key_value(line: str) -> Optional[Tuple[str, str]]:
    """Split `key: value` (tried first) or `key=value` into (lower key, value)."""
    s = line.strip()
    if not s:
        return None
    for sep in (":", "="):
        key, found, value = s.partition(sep)
        if not found:
            continue
        key = key.strip().lower()
        if key:
            return key, value.strip()
    return None


# ---------- decode ----------


def _parse_hero(lines: List[str]) -> HeroBlock:
    fields = {"image": "image_name", "servings": "servings", "time": "total_time", "nutrition": "nutrition"}
    values: Dict[str, str] = {}
    for line in lines:
        pair = parse_key_value(line)
        if pair and pair[0] in fields:
            values[fields[pair[0]]] = pair[1]
    return HeroBlock(**values)


def _parse_ingredient(body: str) -> Optional[IngredientItem]:
    name = ""
    amount = ""
    icon: Optional[str] = None
    for part in (p.strip() for p in body.split("|")):
        pair = parse_key_value(part)
        if pair:
            key, value = pair
            if key == "name":
                name = value
            elif key == "amount":
                amount = value
            elif key == "icon":
                icon = value
        elif not name:
            name = part
        elif not amount:
            amount = part
    if not name:
        return None
    return IngredientItem(name=name, amount=amount, icon=icon)


def _parse_ingredients(lines: List[str]) -> IngredientsBlock:
    items: List[IngredientItem] = []
    for line in lines:
        s = line.strip()
        if not s.startswith("-"):
            continue
        item = _parse_ingredient(s[1:].strip())
        if item is not None:
            items.append(item)
    return IngredientsBlock(ingredients=items)


def _parse_step(lines: List[str]) -> StepBlock:
    fields: Dict[str, Any] = {}
    text_lines: List[str] = []
    for line in lines:
        pair = parse_key_value(line)
        if pair is None:
            if line.strip():
                text_lines.append(line)
            continue
        key, value = pair
        if key == "title":
            fields["title"] = value
        elif key == "time":
            fields["duration_minutes"] = parse_minutes(value)
        elif key == "heat":
            fields["heat"] = HeatLevel.parse(value)
        elif key == "icon":
            fields["icon"] = value
        elif key == "text":
            text_lines.append(_unescape(value))
    return StepBlock(text="\n".join(text_lines), **fields)


def _parse_note(lines: List[str]) -> NoteBlock:
    text_lines: List[str] = []
    for line in lines:
        pair = parse_key_value(line)
        if pair and pair[0] == "text":
            text_lines.append(_unescape(pair[1]))
        elif line.strip():
            text_lines.append(line)
    return NoteBlock(text="\n".join(text_lines))


_PARSERS: Dict[BlockKind, Callable[[List[str]], Block]] = {
    BlockKind.HERO: _parse_hero,
    BlockKind.INGREDIENTS: _parse_ingredients,
    BlockKind.STEP: _parse_step,
    BlockKind.NOTE: _parse_note,
}


def decode(text: str) -> RecipeDocument:
    title = DEFAULT_TITLE
    title_seen = False
    blocks: List[Block] = []
    current: Optional[BlockKind] = None
    buffer: List[str] = []

    def flush() -> None:
        if current is not None:
            blocks.append(_PARSERS[current](buffer))

    for line in (text or "").splitlines():
        kind = BlockKind.from_marker(line)
        if kind is not None:
            flush()
            current = kind
            buffer = []
            continue
        if current is not None:
            buffer.append(line)
            continue
        stripped = line.strip()
        if not title_seen and stripped.startswith(TITLE_PREFIX):
            title = stripped[len(TITLE_PREFIX):].strip()
            title_seen = True
    flush()

    logger.debug("decode: title=%r blocks=%d", title, len(blocks))
    return RecipeDocument(title=title, blocks=blocks)


# ---------- encode ----------


def _encode_hero(block: HeroBlock) -> List[str]:
    lines = []
    if block.image_name:
        lines.append(f"image: {block.image_name}")
    if block.servings:
        lines.append(f"servings: {block.servings}")
    if block.total_time:
        lines.append(f"time: {block.total_time}")
    if block.nutrition:
        lines.append(f"nutrition: {block.nutrition}")
    return lines


def _encode_ingredients(block: IngredientsBlock) -> List[str]:
    lines = []
    for item in block.ingredients:
        parts = []
        if item.name:
            parts.append(f"name={item.name}")
        if item.amount:
            parts.append(f"amount={item.amount}")
        if item.icon:
            parts.append(f"icon={item.icon}")
        if parts:
            lines.append("- " + " | ".join(parts))
    return lines


def _encode_step(block: StepBlock) -> List[str]:
    lines = []
    if block.title:
        lines.append(f"title: {block.title}")
    if block.duration_minutes is not None:
        lines.append(f"time: {block.duration_minutes}m")
    if block.heat is not None:
        lines.append(f"heat: {block.heat.value}")
    if block.icon:
        lines.append(f"icon: {block.icon}")
    if block.text:
        lines.append(f"text: {_escape(block.text)}")
    return lines


def _encode_note(block: NoteBlock) -> List[str]:
    return [f"text: {_escape(block.text)}"] if block.text else []


_ENCODERS: Dict[BlockKind, Callable] = {
    BlockKind.HERO: _encode_hero,
    BlockKind.INGREDIENTS: _encode_ingredients,
    BlockKind.STEP: _encode_step,
    BlockKind.NOTE: _encode_note,
}


def encode(document: RecipeDocument) -> str:
    out = [f"{TITLE_PREFIX}{document.title}", ""]
    for block in document.blocks:
        kind = BlockKind(block.kind)
        out.append(kind.marker)
        out.extend(_ENCODERS[kind](block))
        out.append("")
    return "\n".join(out)
