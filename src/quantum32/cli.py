"""Command line interface for Quantum32."""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any, Optional

import typer

from .config import Quantum32Config, load_config
from .data import load_sample_document
from .errors import FetchError
from .logging import configure_logging, set_level
from .model import Document
from .report import render_analysis, render_debate
from .session import Session
from .utils import load_jsonl, save_json

LOGGER = configure_logging(logger_name=__name__)

TITLE_ARGUMENT = typer.Argument(None, help="Article title to fetch (or label for local text).")
TEXT_FILE_OPTION = typer.Option(
    None,
    "--text-file",
    help="Analyse a local UTF-8 text file instead of fetching the article.",
)
SAMPLE_OPTION = typer.Option(False, "--sample", help="Analyse the bundled sample article.")
LANGUAGE_OPTION = typer.Option(None, help="Wikipedia language code (defaults to configuration).")
CONFIG_OPTION = typer.Option(
    None,
    "--config",
    help="Path to Quantum32 configuration (YAML or JSON).",
)
SEED_OPTION = typer.Option(None, help="Seed for the uncertain-bit measurement.")
CORPUS_OPTION = typer.Option(
    None,
    help="JSONL corpus with a 'text' field to fit the vocabulary on.",
)
JSON_OPTION = typer.Option(False, "--json", help="Print the result as JSON.")
OUTPUT_OPTION = typer.Option(None, help="Optional path to write the result as JSON.")
LOG_LEVEL_OPTION = typer.Option("INFO", "--log-level", help="Logging level (DEBUG, INFO, WARNING, ...).")

app = typer.Typer(help="Derive Quantum32 controller state from text documents.")


@app.callback()
def main(log_level: str = LOG_LEVEL_OPTION) -> None:
    """Apply global options before the selected command runs."""

    try:
        set_level(log_level)
    except ValueError as exc:
        raise typer.BadParameter(str(exc), param_hint="--log-level") from exc


def _load_settings(config_path: Optional[Path], seed: Optional[int]) -> Quantum32Config:
    overrides: list[dict[str, Any]] = []
    if seed is not None:
        overrides.append({"quantum": {"seed": seed}})
    return load_config(config_path, overrides)


def _load_corpus(path: Optional[Path]) -> Optional[list[str]]:
    if path is None:
        return None
    return [str(record.get("text", "")) for record in load_jsonl(Path(path))]


def _analyze(
    title: Optional[str],
    text_file: Optional[Path],
    sample: bool,
    language: Optional[str],
    config_path: Optional[Path],
    seed: Optional[int],
    corpus_path: Optional[Path] = None,
) -> Session:
    session = Session(config=_load_settings(config_path, seed))
    corpus = _load_corpus(corpus_path)
    if sample:
        payload = load_sample_document()
        document = Document(title=title or payload["title"], raw_text=payload["text"])
        session.analyze(document, corpus=corpus)
        return session
    if title is None:
        typer.echo("A title is required unless --sample is given.", err=True)
        raise typer.Exit(code=2)
    if text_file is not None:
        text = Path(text_file).read_text(encoding="utf-8")
        session.analyze(Document(title=title, raw_text=text), corpus=corpus)
        return session
    try:
        session.analyze_title(title, language)
    except FetchError as exc:
        typer.echo(f"Error: {exc}", err=True)
        raise typer.Exit(code=1) from exc
    return session


@app.command()
def analyze(
    title: Optional[str] = TITLE_ARGUMENT,
    text_file: Optional[Path] = TEXT_FILE_OPTION,
    sample: bool = SAMPLE_OPTION,
    language: Optional[str] = LANGUAGE_OPTION,
    config_path: Optional[Path] = CONFIG_OPTION,
    seed: Optional[int] = SEED_OPTION,
    corpus: Optional[Path] = CORPUS_OPTION,
    as_json: bool = JSON_OPTION,
    output: Optional[Path] = OUTPUT_OPTION,
) -> None:
    """Analyse a document and print its Quantum32 state."""

    session = _analyze(title, text_file, sample, language, config_path, seed, corpus)
    result = session.require_result()
    if as_json:
        typer.echo(json.dumps(result.to_dict(), indent=2, ensure_ascii=False))
    else:
        render_analysis(result)
    if output is not None:
        save_json(output, result.to_dict())
        LOGGER.info("Wrote analysis to %s", output)


@app.command()
def frame(
    title: Optional[str] = TITLE_ARGUMENT,
    text_file: Optional[Path] = TEXT_FILE_OPTION,
    sample: bool = SAMPLE_OPTION,
    language: Optional[str] = LANGUAGE_OPTION,
    config_path: Optional[Path] = CONFIG_OPTION,
    seed: Optional[int] = SEED_OPTION,
) -> None:
    """Print the START|...|END frame for a document."""

    session = _analyze(title, text_file, sample, language, config_path, seed)
    typer.echo(session.analysis_frame())


@app.command()
def debate(
    title: Optional[str] = TITLE_ARGUMENT,
    text_file: Optional[Path] = TEXT_FILE_OPTION,
    sample: bool = SAMPLE_OPTION,
    language: Optional[str] = LANGUAGE_OPTION,
    config_path: Optional[Path] = CONFIG_OPTION,
    seed: Optional[int] = SEED_OPTION,
    as_json: bool = JSON_OPTION,
    output: Optional[Path] = OUTPUT_OPTION,
) -> None:
    """Analyse a document and let the four agents debate its dominant category."""

    session = _analyze(title, text_file, sample, language, config_path, seed)
    outcome = session.run_debate()
    if as_json:
        typer.echo(json.dumps(outcome.to_dict(), indent=2, ensure_ascii=False))
    else:
        render_debate(outcome)
    if output is not None:
        save_json(output, outcome.to_dict())
        LOGGER.info("Wrote debate result to %s", output)


if __name__ == "__main__":
    app()
