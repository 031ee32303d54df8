"""Typer CLI for the recipe notebook (list, show, cat, new, sample, validate)."""

from __future__ import annotations

import sys
from pathlib import Path
from typing import List, Optional, Tuple

import typer
from rich.console import Console
from rich.markup import escape

from dotenv import load_dotenv
# load .env immediately so subsequent imports (which read settings at import time)
# pick up values from the .env file
load_dotenv()

# Configure top-level logging early so other modules pick it up.
import logging
from src.settings import settings

log_level = getattr(logging, settings.LOG_LEVEL.upper(), logging.INFO)
handlers = [logging.StreamHandler()]
if settings.LOG_FILE:
    handlers.append(logging.FileHandler(settings.LOG_FILE))
logging.basicConfig(
    level=log_level,
    format="%(asctime)s %(levelname)-8s [%(name)s] %(message)s",
    handlers=handlers,
)

from src.codec.markdown import decode, encode
from src.models.document import BlockKind, HeroBlock, IngredientsBlock, NoteBlock, StepBlock
from src.storage.catalog import scan_recipes
from src.storage.file_store import RecipeFileStore

PROG_NAME = "recipe-notebook"

# typer may ship its own copy of click; take the usage-error type from the same
# build its commands raise from.
_UsageError = sys.modules[typer.BadParameter.__module__].UsageError

app = typer.Typer(add_completion=False)
console = Console()


class CLIError(Exception):
    """A user-facing error: reported with the usage banner, exit code 1."""


def usage_text() -> str:
    default_dir = RecipeFileStore().directory
    return f"""Recipe Notebook CLI

Usage:
  {PROG_NAME} list [--dir <path>]
  {PROG_NAME} show <file> [--dir <path>]
  {PROG_NAME} cat <file> [--dir <path>]
  {PROG_NAME} new <title> [--dir <path>]
  {PROG_NAME} sample [--dir <path>]
  {PROG_NAME} validate <file> [--dir <path>]

Notes:
  - Default recipe directory: {default_dir}
  - Use --dir to point at a different Recipes folder

Examples:
  {PROG_NAME} list
  {PROG_NAME} new "Weeknight Stir-Fry"
  {PROG_NAME} show sample-stir-fry.md
  {PROG_NAME} validate ~/Documents/Recipes/sample-stir-fry.md
"""


def print_usage() -> None:
    console.print(usage_text(), markup=False, highlight=False)


def _fail(message: str) -> None:
    console.print(f"[red]Error:[/red] {escape(message)}", highlight=False)
    print_usage()
    raise typer.Exit(code=1)


def _plain(text: str) -> None:
    console.print(text, markup=False, highlight=False, soft_wrap=True)


def _store(directory: Optional[str]) -> RecipeFileStore:
    return RecipeFileStore(directory)


def _load_markdown(target: Optional[str], store: RecipeFileStore) -> Tuple[str, Path]:
    """Read a recipe given either a bare file name or a path containing '/'."""
    if not target:
        raise CLIError("Missing file argument")
    expanded = Path(target).expanduser()
    if "/" in str(expanded):
        text = RecipeFileStore(expanded.parent).read(expanded.name)
        path = expanded
    else:
        text = store.read(target)
        path = store.file_path(target)
    if not text:
        raise CLIError(f"No markdown found at {path}")
    return text, path


def _dir_option():
    return typer.Option(None, "--dir", "-d", help="Recipe directory override.")


@app.command("list")
def list_recipes(directory: Optional[str] = _dir_option()):
    """List recipe files with their titles and modification times."""
    store = _store(directory)
    store.ensure_directory()
    records = scan_recipes(store)
    if not records:
        _plain(f"No recipes found in {store.directory}")
        return
    _plain(f"Recipes in {store.directory}:")
    for rec in records:
        updated = rec.updated_at.isoformat(timespec="milliseconds").replace("+00:00", "Z")
        _plain(f"- {rec.file_name} | {rec.title} | updated {updated}")


def _block_lines(block) -> List[str]:
    lines: List[str] = []
    if isinstance(block, HeroBlock):
        for label, value in (
            ("servings", block.servings),
            ("time", block.total_time),
            ("nutrition", block.nutrition),
            ("image", block.image_name),
        ):
            if value:
                lines.append(f"  {label}: {value}")
    elif isinstance(block, IngredientsBlock):
        lines.append(f"  ingredients: {len(block.ingredients)}")
    elif isinstance(block, StepBlock):
        if block.title:
            lines.append(f"  title: {block.title}")
        if block.duration_minutes is not None:
            lines.append(f"  time: {block.duration_minutes}m")
        if block.heat is not None:
            lines.append(f"  heat: {block.heat.value}")
        if block.icon:
            lines.append(f"  icon: {block.icon}")
        if block.text:
            lines.append(f"  text: {block.text}")
    elif isinstance(block, NoteBlock):
        if block.text:
            lines.append(f"  text: {block.text}")
    return lines


@app.command()
def show(file: Optional[str] = typer.Argument(None), directory: Optional[str] = _dir_option()):
    """Summarize a recipe's blocks."""
    try:
        text, _ = _load_markdown(file, _store(directory))
    except CLIError as e:
        _fail(str(e))
    document = decode(text)
    _plain(f"Title: {document.title}")
    _plain(f"Blocks: {len(document.blocks)}")
    kinds = document.kinds()
    summary = ", ".join(f"{k.display_name}={kinds.count(k)}" for k in BlockKind)
    _plain(f"Block types: {summary}")
    for index, block in enumerate(document.blocks, start=1):
        _plain(f"Block {index}: {BlockKind(block.kind).display_name}")
        for line in _block_lines(block):
            _plain(line)


@app.command()
def cat(file: Optional[str] = typer.Argument(None), directory: Optional[str] = _dir_option()):
    """Print a recipe file verbatim."""
    try:
        text, _ = _load_markdown(file, _store(directory))
    except CLIError as e:
        _fail(str(e))
    _plain(text)


@app.command()
def new(title: Optional[List[str]] = typer.Argument(None), directory: Optional[str] = _dir_option()):
    """Create a new recipe from the default template."""
    joined = " ".join(title or []).strip()
    if not joined:
        _fail("Title cannot be empty")
    store = _store(directory)
    name = store.create_new(joined)
    _plain(f"Created {name} in {store.directory}")


@app.command()
def sample(directory: Optional[str] = _dir_option()):
    """Write the sample recipe if the directory has none."""
    store = _store(directory)
    store.bootstrap_sample_if_needed()
    _plain(f"Sample ensured in {store.directory}")


@app.command()
def validate(file: Optional[str] = typer.Argument(None), directory: Optional[str] = _dir_option()):
    """Check whether a recipe survives decode -> encode unchanged."""
    try:
        text, path = _load_markdown(file, _store(directory))
    except CLIError as e:
        _fail(str(e))
    reencoded = encode(decode(text))
    if text.strip() == reencoded.strip():
        _plain(f"Round-trip OK for {path.name}")
    else:
        _plain(f"Round-trip differs for {path.name}")
        _plain("Use 'cat' to compare the encoded output if needed.")


def main(argv: Optional[List[str]] = None) -> int:
    args = list(sys.argv[1:] if argv is None else argv)
    if not args or args[0] == "help" or "-h" in args or "--help" in args:
        print_usage()
        return 0
    command = typer.main.get_command(app)
    try:
        rv = command.main(args=args, prog_name=PROG_NAME, standalone_mode=False)
    except _UsageError as e:
        console.print(f"[red]Error:[/red] {escape(e.format_message())}", highlight=False)
        print_usage()
        return 1
    except typer.Exit as e:
        return e.exit_code
    return rv if isinstance(rv, int) else 0


if __name__ == "__main__":
    sys.exit(main())
