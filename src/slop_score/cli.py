from __future__ import annotations

import json
import logging
import os
from pathlib import Path
from typing import Any, List

import typer
import yaml

from .config import SlopScoreConfig, load_config
from .context import build_context
from .models import Document
from .pipeline import analyze_corpus

LOGGER = logging.getLogger(__name__)

app = typer.Typer(help="Slop score CLI.", no_args_is_help=True)

# File types the CLI knows how to expand into Document instances.
SUPPORTED_INPUT_EXTENSIONS = {".txt", ".json"}

LOG_FORMAT = "%(asctime)s - %(levelname)s - %(threadName)s - %(message)s"


class InputFormatError(ValueError):
    """Raised when an input file cannot be turned into documents."""


@app.command()
def analyze(
    input_path: Path = typer.Option(
        ..., exists=True, readable=True, dir_okay=True, file_okay=True
    ),
    config: Path | None = typer.Option(None, "--config", "-c"),
    no_pos: bool = typer.Option(
        False, "--no-pos", help="Skip the part-of-speech contrast patterns."
    ),
    top_k: int | None = typer.Option(
        None, "--top-k", help="Number of over-used n-grams to report."
    ),
    workers: int | None = typer.Option(
        None, "--workers", help="Documents analyzed in parallel."
    ),
    log_level: str | None = typer.Option(
        None, "--log-level", help="Logging level (defaults to $LOG_VERBOSITY or WARNING)."
    ),
) -> None:
    """Analyze the input documents and emit a JSON summary."""
    setup_logging(log_level)
    cfg = load_config(config)
    _apply_overrides(cfg, no_pos, top_k, workers)
    try:
        documents = _load_documents(input_path)
    except InputFormatError as exc:
        raise typer.BadParameter(str(exc)) from exc
    context = build_context(cfg)
    results = analyze_corpus(documents, context, cfg.workers)
    typer.echo(json.dumps({"documents": [r.to_dict() for r in results]}, indent=2))


@app.command("print-config")
def print_config() -> None:
    """Print the default configuration as YAML."""
    cfg = SlopScoreConfig()
    typer.echo(yaml.safe_dump(cfg.to_dict(), sort_keys=False))


def main() -> None:
    app()


def setup_logging(level: str | None = None) -> None:
    """Configure root logging for command-line runs."""
    name = (level or os.getenv("LOG_VERBOSITY") or "WARNING").upper()
    logging.basicConfig(
        level=getattr(logging, name, logging.WARNING),
        format=LOG_FORMAT,
        datefmt="%Y-%m-%d %H:%M:%S",
    )


def _apply_overrides(
    config: SlopScoreConfig,
    no_pos: bool,
    top_k: int | None,
    workers: int | None,
) -> None:
    if no_pos:
        config.tagger.enabled = False
    if top_k is not None:
        config.top_k_ngrams = top_k
    if workers is not None:
        config.workers = workers


def _load_documents(input_path: Path) -> List[Document]:
    """Expand the input path into documents, sorted by path for directories."""
    if input_path.is_file():
        return _documents_from_file(input_path, input_path.name)

    files = sorted(
        p
        for p in input_path.rglob("*")
        if p.is_file() and p.suffix.lower() in SUPPORTED_INPUT_EXTENSIONS
    )
    documents: List[Document] = []
    for file in files:
        documents.extend(_documents_from_file(file, str(file.relative_to(input_path))))
    return documents


def _documents_from_file(path: Path, doc_id: str) -> List[Document]:
    if path.suffix.lower() == ".json":
        return _documents_from_results(path, doc_id)
    return [Document(doc_id=doc_id, text=path.read_text(encoding="utf-8"))]


def _documents_from_results(path: Path, doc_id: str) -> List[Document]:
    """
    Read a benchmark results file: ``{model: {"samples": [...]}}``.

    Each sample with a non-empty ``output`` becomes a document identified as
    ``<file>:<model>:<prompt_index>``; errored or empty samples are skipped.
    """
    try:
        payload: Any = json.loads(path.read_text(encoding="utf-8"))
    except json.JSONDecodeError as exc:
        raise InputFormatError(f"{path}: invalid JSON ({exc})") from exc
    if not isinstance(payload, dict):
        raise InputFormatError(f"{path}: expected an object keyed by model id")

    documents: List[Document] = []
    for model_id, entry in payload.items():
        samples = entry.get("samples") if isinstance(entry, dict) else None
        if not isinstance(samples, list):
            LOGGER.warning("No samples for model %r in %s", model_id, path)
            continue
        for position, sample in enumerate(samples):
            if not isinstance(sample, dict):
                continue
            output = sample.get("output")
            if not isinstance(output, str) or not output.strip():
                continue
            index = sample.get("prompt_index", position)
            documents.append(
                Document(doc_id=f"{doc_id}:{model_id}:{index}", text=output)
            )
    LOGGER.info("Loaded %d samples from %s", len(documents), path)
    return documents
