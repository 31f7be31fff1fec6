"""
Persistent storage for downloaded reports and their parsed catalogs.

Every report is stored under the SHA-1 of its raw bytes, so re-downloading an
unchanged report adds nothing new:

    <sha>.repy        raw report (CP862), written once
    <sha>.txt         same report recoded to ISO-8859-8, written once
    <sha>.timestamp   when the report was first seen (ISO-8601, UTC)
    <sha>.json        parsed catalog
    latest.*          copies of the most recent report / catalog / parse log
    catalog.json      index of all stored reports

The data directory defaults to repy/data/store inside the package and can be
moved with the REPY_DATA_DIR environment variable.
"""

from __future__ import annotations

import hashlib
import json
import logging
import os
import re
from datetime import datetime, timezone
from pathlib import Path
from typing import Any, Dict, List, Optional

from repy.decode import recode
from repy.errors import RepyError
from repy.model import Catalog, catalog_to_dicts
from repy.parse import read_file


log = logging.getLogger(__name__)

INDEX_FILE = "catalog.json"
PARSE_LOG_FILE = "latest.parse.log"

_REPY_FILE = re.compile(r"^([0-9a-f]{40})\.repy$")


def default_data_dir() -> Path:
    """
    Return the directory used when no explicit one is given.

    Using a function instead of a constant keeps the environment lookup
    late, so tests can override it.
    """
    env = os.environ.get("REPY_DATA_DIR", "").strip()
    if env:
        return Path(env)
    return Path(__file__).resolve().parent / "data" / "store"


def write_json(path: Path, data: Any) -> None:
    path.write_text(json.dumps(data, indent=2, ensure_ascii=False) + "\n", encoding="utf-8")


def load_index(path: Path) -> Dict[str, Dict[str, Any]]:
    """
    Load catalog.json as {sha1sum: entry}.

    Returns an empty dict if the file does not exist or is invalid.
    """
    if not path.exists():
        return {}

    try:
        data = json.loads(path.read_text(encoding="utf-8"))
        entries = data.get("entries", [])
        if not isinstance(entries, list):
            return {}
        return {e["sha1sum"]: e for e in entries if isinstance(e, dict) and e.get("sha1sum")}
    except (OSError, json.JSONDecodeError, UnicodeDecodeError, AttributeError) as err:
        log.warning("Failed to read %s: %s", path, err)
        return {}


def semester_of(parsed_path: Path) -> str:
    """
    Semester of a parsed catalog, for the index.

    "No faculties" for an empty catalog, "INCONSISTENT" if faculties disagree,
    "" if the file can't be read or is not a list of faculties.
    """
    try:
        catalog = json.loads(parsed_path.read_text(encoding="utf-8"))
    except (OSError, json.JSONDecodeError, UnicodeDecodeError) as err:
        log.warning("Failed to read %s: %s", parsed_path, err)
        return ""

    if not isinstance(catalog, list) or not catalog:
        return "No faculties"
    if not all(isinstance(faculty, dict) for faculty in catalog):
        log.warning("Unexpected catalog layout in %s", parsed_path)
        return ""

    semester = catalog[0].get("semester", "")
    for faculty in catalog:
        if faculty.get("semester", "") != semester:
            return "INCONSISTENT"
    return semester


class RepyStore:
    """
    Stores one downloaded report and everything derived from it.
    """

    def __init__(self, data: bytes, root: Optional[Path] = None, cache_disabled: bool = False) -> None:
        self.data = data
        self.root = root if root is not None else default_data_dir()
        self.sha1sum = hashlib.sha1(data).hexdigest()
        self.cache_disabled = cache_disabled
        log.info("REPY SHA1SUM: %s", self.sha1sum)

    def write_all_repy_files(self) -> bool:
        """
        Write the raw and recoded report. Returns True if it was new.
        """
        self.root.mkdir(parents=True, exist_ok=True)

        base = self.root / f"{self.sha1sum}.repy"
        is_new = not base.exists()
        if not is_new:
            log.info("%s already exists", base.name)

        iso = recode(self.data)

        destinations = [
            (base, self.data, True),
            (self.root / f"{self.sha1sum}.txt", iso, True),
            (self.root / "latest.txt", iso, False),
            (self.root / "latest.repy", self.data, False),
        ]
        for path, payload, only_if_new in destinations:
            if only_if_new and not is_new:
                continue
            log.info("Writing %s", path.name)
            path.write_bytes(payload)

        if is_new:
            stamp = self.root / f"{self.sha1sum}.timestamp"
            log.info("Writing timestamp file %s", stamp.name)
            stamp.write_text(datetime.now(timezone.utc).isoformat() + "\n", encoding="utf-8")

        return is_new

    def parse_and_write(self) -> Catalog:
        """
        Parse the report and write <sha>.json and latest.json.

        Parser diagnostics of this run are captured in latest.parse.log.
        """
        self.root.mkdir(parents=True, exist_ok=True)

        handler = logging.FileHandler(self.root / PARSE_LOG_FILE, mode="w", encoding="utf-8")
        handler.setLevel(logging.INFO)
        handler.setFormatter(logging.Formatter("%(levelname)s %(message)s"))
        parse_log = logging.getLogger("repy.parse")
        previous_level = parse_log.level
        parse_log.addHandler(handler)
        if parse_log.getEffectiveLevel() > logging.INFO:
            parse_log.setLevel(logging.INFO)

        try:
            catalog = read_file(self.data)
        except RepyError as err:
            parse_log.warning("Read returned error: %s", err)
            raise
        finally:
            parse_log.removeHandler(handler)
            parse_log.setLevel(previous_level)
            handler.close()

        payload = catalog_to_dicts(catalog)
        for name in (f"{self.sha1sum}.json", "latest.json"):
            log.info("Writing %s", name)
            write_json(self.root / name, payload)

        return catalog

    def write_index(self) -> List[Dict[str, Any]]:
        """
        Rebuild catalog.json from all reports in the data directory.

        Entries of the previous index are reused unless caching is disabled.
        """
        index_path = self.root / INDEX_FILE

        if self.cache_disabled:
            log.info("Bypassing cache")
            cache: Dict[str, Dict[str, Any]] = {}
        else:
            log.info("Reading cached index from %s", index_path)
            cache = load_index(index_path)

        entries: List[Dict[str, Any]] = []
        for path in sorted(self.root.glob("*.repy")):
            m = _REPY_FILE.match(path.name)
            if m is None:
                continue
            sha = m.group(1)

            if sha in cache:
                entries.append(cache[sha])
                continue

            stamp = self.root / f"{sha}.timestamp"
            try:
                timestamp = stamp.read_text(encoding="utf-8").strip()
            except OSError as err:
                log.warning("Couldn't get timestamp for %s: %s", sha, err)
                continue

            entries.append(
                {
                    "sha1sum": sha,
                    "original": f"{sha}.repy",
                    "iso8859_8": f"{sha}.txt",
                    "parsed": f"{sha}.json",
                    "timestamp": timestamp,
                    "semester": semester_of(self.root / f"{sha}.json"),
                }
            )

        entries.sort(key=lambda e: str(e.get("timestamp", "")))
        write_json(index_path, {"entries": entries})
        return entries
