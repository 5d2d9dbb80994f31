"""Command-line entrypoint: list models or make sure one is cached."""

from __future__ import annotations

import argparse
import logging
import os
import sys
from pathlib import Path
from typing import List, Optional

from artifact_store import ArtifactStore
from config import JsonConfigStore
from errors import ERROR_MESSAGES, UNKNOWN_MODEL, WhisperStreamError
from interfaces import ConfigStore
from models import ModelVariant

LOG_LEVEL_ENV = "WHISPER_STREAM_LOG"


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Fetch and cache Whisper models.")
    parser.add_argument("--model", help="model to ensure, e.g. base.en")
    parser.add_argument("--list-models", action="store_true", help="print supported models and exit")
    parser.add_argument("--cache-dir", type=Path, help="override the model cache directory")
    parser.add_argument("--coreml", action="store_true", help="also fetch the CoreML encoder")
    parser.add_argument("--verbose", action="store_true", help="enable debug logging")
    return parser


def _setup_logging(verbose: bool) -> None:
    if verbose:
        level = logging.DEBUG
    else:
        level = getattr(logging, os.getenv(LOG_LEVEL_ENV, "INFO").upper(), logging.INFO)
    logging.basicConfig(
        level=level,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
    logging.getLogger("urllib3").setLevel(logging.WARNING)


def run(argv: Optional[List[str]] = None, config_store: Optional[ConfigStore] = None) -> int:
    args = _build_parser().parse_args(argv)
    _setup_logging(args.verbose)

    if args.list_models:
        for model in ModelVariant.list():
            print(f"{model.display_name}\t{model.file_name}")
        return 0

    config = config_store or JsonConfigStore()
    name = args.model or config.get_default_model()
    model = ModelVariant.from_name(name)
    if model is None:
        valid = ", ".join(m.display_name for m in ModelVariant.list())
        print(f"error: {ERROR_MESSAGES[UNKNOWN_MODEL]} {name!r} (choose from: {valid})", file=sys.stderr)
        return 2

    store = ArtifactStore(
        cache_root=args.cache_dir or config.get_cache_dir(),
        coreml_enabled=args.coreml or config.get_coreml_enabled(),
    )
    try:
        path = store.ensure(model)
    except WhisperStreamError as exc:
        print(f"error: {exc.message}", file=sys.stderr)
        return 1
    print(path)
    return 0


def main() -> None:
    raise SystemExit(run())


if __name__ == "__main__":
    main()
