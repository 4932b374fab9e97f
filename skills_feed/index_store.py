"""
Index storage
Reads and writes the flat JSON files shared by the feed stages
"""

import os
import json
import logging
import tempfile
from pathlib import Path
from datetime import datetime, timezone
from typing import Dict, Iterable

import jsonschema

logger = logging.getLogger(__name__)

SCHEMA_PATH = Path(__file__).parent / "schema" / "skills_index.schema.json"


def utc_now() -> str:
    """Current UTC time as an ISO timestamp, e.g. 2024-01-01T00:00:00.000Z"""
    now = datetime.now(timezone.utc)
    return now.strftime('%Y-%m-%dT%H:%M:%S.') + f"{now.microsecond // 1000:03d}Z"


def write_json(path, data) -> None:
    """Write pretty-printed JSON, replacing the target only once fully written"""
    path = Path(path)
    path.parent.mkdir(parents=True, exist_ok=True)

    fd, tmp_path = tempfile.mkstemp(dir=path.parent, prefix=f".{path.name}.", suffix='.tmp')
    try:
        with os.fdopen(fd, 'w', encoding='utf-8') as f:
            json.dump(data, f, indent=2, ensure_ascii=False)
        os.replace(tmp_path, path)
    except BaseException:
        os.unlink(tmp_path)
        raise


def read_json(path):
    with open(path, 'r', encoding='utf-8') as f:
        return json.load(f)


def load_schema() -> dict:
    return read_json(SCHEMA_PATH)


def load_index(path) -> dict:
    """Load skills_index.json and validate it against the bundled schema"""
    index = read_json(path)
    jsonschema.validate(instance=index, schema=load_schema())
    return index


def save_index(path, index: dict) -> None:
    write_json(path, index)
    logger.info(f"Saved {len(index['items'])} skills to {path}")


def load_first_seen(path) -> Dict[str, str]:
    """
    Load the id -> first-seen timestamp map.

    A missing or unreadable file yields an empty map; every id seen in the
    current run then gets a fresh timestamp.
    """
    path = Path(path)
    if not path.exists():
        return {}

    try:
        data = read_json(path)
    except (OSError, ValueError) as e:
        logger.warning(f"Could not read {path}, starting with empty first-seen map: {e}")
        return {}

    if not isinstance(data, dict):
        logger.warning(f"Unexpected first-seen format in {path}, starting with empty map")
        return {}

    return {str(k): str(v) for k, v in data.items()}


def save_first_seen(path, first_seen: Dict[str, str]) -> None:
    write_json(path, dict(sorted(first_seen.items())))


def stamp_first_seen(first_seen: Dict[str, str], ids: Iterable[str], now: str) -> Dict[str, str]:
    """Return a copy of first_seen with `now` added for every id not yet present"""
    stamped = dict(first_seen)
    for skill_id in ids:
        stamped.setdefault(skill_id, now)
    return stamped
