"""One-off migration script: JSON storage file -> SQL storage table."""
from __future__ import annotations

import argparse
import sys
from pathlib import Path

# Make the saas package importable when run directly
ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

from saas.core.config import get_settings  # noqa: E402
from saas.db.session import create_schema  # noqa: E402
from saas.repositories.json_storage import JsonFileStore, KeyValueStore  # noqa: E402
from saas.repositories.sql_repository import SQLKeyValueStore  # noqa: E402


def migrate(source: KeyValueStore, target: KeyValueStore) -> list[str]:
    """Copy every key verbatim; returns the keys copied."""
    copied = []
    for key in source.keys():
        value = source.load(key)
        if value is None:
            continue
        target.save(key, value)
        copied.append(key)
    return copied


def main(argv: list[str] | None = None) -> int:
    settings = get_settings()
    ap = argparse.ArgumentParser(description="Copy the JSON storage file into the SQL table")
    ap.add_argument("--data-file", default=str(settings.data_file), help="Source JSON storage file")
    args = ap.parse_args(argv)

    data_file = Path(args.data_file)
    if not data_file.exists():
        raise SystemExit(f"File not found: {data_file}")
    create_schema()
    copied = migrate(JsonFileStore(data_file), SQLKeyValueStore())
    print(f"Migrated {len(copied)} key(s): {', '.join(copied) or '-'}")
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
