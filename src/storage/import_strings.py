"""Bulk-load strings from a file into the configured store.

The input is either a `.json` file holding a list of strings or a plain text file with one string
per line (blank lines are skipped). Every string is analyzed before it is stored.
"""

from __future__ import annotations

import argparse
import json
import logging
from collections.abc import Iterable
from pathlib import Path

from dotenv import load_dotenv

from src.analysis.properties import build_record
from src.config.logging import configure_logging
from src.config.settings import load_settings
from src.storage.store import DuplicateStringError, StringStore

logger = logging.getLogger(__name__)


def read_values(path: Path) -> list[str]:
    """Read the strings to import from `path`."""

    text = path.read_text(encoding="utf-8")
    if path.suffix.lower() != ".json":
        return [line.rstrip("\r") for line in text.split("\n") if line.strip()]

    payload = json.loads(text)
    if not isinstance(payload, list) or not all(isinstance(v, str) for v in payload):
        raise ValueError("Unexpected input format: expected a JSON list of strings")
    return payload


def import_values(store: StringStore, values: Iterable[str], *, skip_duplicates: bool) -> int:
    """Add every value to `store` and persist once at the end.

    Returns:
        The number of strings added.

    Raises:
        DuplicateStringError: If a value is already stored and `skip_duplicates` is false. Nothing
            is persisted in that case.
    """

    added = 0
    for value in values:
        try:
            store.add(build_record(value), persist=False)
        except DuplicateStringError:
            if not skip_duplicates:
                raise
            logger.info("skipping duplicate length=%d", len(value))
            continue
        added += 1

    store.save()
    return added


def main() -> None:
    """CLI entry point for importing strings into the store."""

    parser = argparse.ArgumentParser(description="Analyze and store strings read from a file.")
    parser.add_argument("--path", required=True, help="Input file (.json list or one per line).")
    parser.add_argument(
        "--skip-duplicates",
        action="store_true",
        help="Skip strings that are already stored instead of aborting.",
    )
    args = parser.parse_args()

    load_dotenv(".env")
    settings = load_settings()
    configure_logging(settings.log_level)

    store = StringStore(Path(settings.data_file))
    store.load()

    added = import_values(
        store,
        read_values(Path(args.path)),
        skip_duplicates=args.skip_duplicates,
    )
    logger.info("imported strings added=%d total=%d", added, len(store))


if __name__ == "__main__":
    main()
