from __future__ import annotations

import json
import logging
import sys
from collections.abc import Callable, Iterable, Iterator
from pathlib import Path
from typing import Any

import typer

from unisplit.api import split_boundaries, split_lines
from unisplit.assemble import Pieces
from unisplit.config import load_settings

app = typer.Typer(add_completion=False, no_args_is_help=True)


def _exit_with_error(exc: Exception) -> None:
    """Print ``exc`` to stderr and exit with status 1."""
    print(f"error: {exc}", file=sys.stderr)
    raise typer.Exit(1)


def _safe(func: Callable[[], None]) -> None:
    """Invoke ``func`` and exit non-zero on any exception."""
    try:
        func()
    except Exception as exc:
        _exit_with_error(exc)


def _element(row: Any) -> str | None:
    """Return the string carried by one JSONL row."""
    if row is None or isinstance(row, str):
        return row
    if isinstance(row, dict) and "text" in row:
        return row["text"]
    raise ValueError(f"unsupported input row: {row!r}")


def _read_elements(path: Path) -> list[str | None]:
    # JSON leaves NEL/LS/PS unescaped, so split on LF only
    rows = path.read_text(encoding="utf-8").split("\n")
    return [_element(json.loads(row)) for row in rows if row.strip()]


def _elements(input_path: Path | None, texts: Iterable[str]) -> list[str | None]:
    from_file = _read_elements(input_path) if input_path else []
    return [*from_file, *texts]


def _serialize(results: Iterable[Pieces]) -> Iterator[str]:
    """Serialize one ``{"pieces": ...}`` JSON line per element."""
    for pieces in results:
        payload = None if pieces == [None] else pieces
        yield json.dumps({"pieces": payload}, ensure_ascii=False)


def _emit(results: Iterable[Pieces], out: Path | None) -> None:
    text = "".join(f"{line}\n" for line in _serialize(results))
    if out:
        out.write_text(text, encoding="utf-8")
    else:
        sys.stdout.write(text)


def _configure_logging(verbose: bool) -> None:
    if verbose:
        logging.basicConfig(level=logging.DEBUG, format="%(levelname)s %(name)s: %(message)s")


def _run_lines(
    input_path: Path | None,
    texts: list[str],
    n_max: int,
    omit_empty: bool,
    config: Path | None,
    out: Path | None,
) -> None:
    settings = load_settings(config)
    elements = _elements(input_path, texts)
    _emit(split_lines(elements, n_max, omit_empty, settings=settings), out)


def _run_boundaries(
    input_path: Path | None,
    texts: list[str],
    boundary: str,
    locale: str | None,
    config: Path | None,
    out: Path | None,
) -> None:
    settings = load_settings(config)
    elements = _elements(input_path, texts)
    _emit(split_boundaries(elements, boundary, locale, settings=settings), out)


@app.command()
def lines(
    input_path: Path | None = typer.Argument(None, exists=True, dir_okay=False, readable=True),
    text: list[str] | None = typer.Option(None, "--text"),
    n_max: int = typer.Option(-1, "--n-max"),
    omit_empty: bool = typer.Option(False, "--omit-empty/--keep-empty"),
    config: Path | None = typer.Option(None, "--config"),
    out: Path | None = typer.Option(None, "--out"),
    verbose: bool = typer.Option(False, "--verbose"),
) -> None:
    """Split every input element into text lines."""
    _configure_logging(verbose)
    _safe(lambda: _run_lines(input_path, text or [], n_max, omit_empty, config, out))


@app.command()
def boundaries(
    input_path: Path | None = typer.Argument(None, exists=True, dir_okay=False, readable=True),
    text: list[str] | None = typer.Option(None, "--text"),
    boundary: str = typer.Option("word", "--type"),
    locale: str | None = typer.Option(None, "--locale"),
    config: Path | None = typer.Option(None, "--config"),
    out: Path | None = typer.Option(None, "--out"),
    verbose: bool = typer.Option(False, "--verbose"),
) -> None:
    """Split every input element at Unicode text boundaries."""
    _configure_logging(verbose)
    _safe(lambda: _run_boundaries(input_path, text or [], boundary, locale, config, out))


if __name__ == "__main__":
    app()
