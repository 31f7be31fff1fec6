"""
CLI (Command Line Interface).

    repy fetch [--out FILE] [--refresh]
    repy parse <REPY file> [--out catalog.json]
    repy update [--data-dir DIR] [--no-cache]
    repy summary <catalog.json>
    repy search <catalog.json> <text>

`update` is the full periodic job: download, store, parse, re-index.

Note:
- Parser warnings go through logging (rich handler on stderr)
- Errors of the whole parse exit with status 1, nothing is written
"""

from __future__ import annotations

import argparse
import json
import logging
import sys
from pathlib import Path
from typing import Any

from rich.console import Console
from rich.logging import RichHandler
from rich.table import Table

from repy.decode import REPY_ENCODING, check_encoding
from repy.errors import RepyError
from repy.model import catalog_to_dicts
from repy.parse import read_file
from repy.scrape import RAW_PATH, REPFILE_URL, download_repy, fetch_repy
from repy.storage import RepyStore, default_data_dir


console = Console()


def _setup_logging(verbose: bool, quiet: bool) -> None:
    level = logging.INFO
    if verbose:
        level = logging.DEBUG
    elif quiet:
        level = logging.WARNING

    logging.basicConfig(
        level=level,
        format="%(message)s",
        datefmt="[%X]",
        handlers=[RichHandler(console=Console(stderr=True), show_path=False)],
    )


def _encoding(name: str) -> str:
    try:
        return check_encoding(name)
    except RepyError as err:
        raise argparse.ArgumentTypeError(str(err)) from err


def _load_json(path: Path) -> Any:
    """
    Read a parsed catalog written by `repy parse` or `repy update`.

    A missing or unreadable catalog reads as an empty one, so summary and
    search report nothing instead of failing.
    """
    try:
        return json.loads(path.read_text(encoding="utf-8"))
    except (OSError, json.JSONDecodeError, UnicodeDecodeError):
        return []


def _load_catalog(path: Path) -> list[dict[str, Any]]:
    data = _load_json(path)
    return [f for f in data if isinstance(f, dict)] if isinstance(data, list) else []


def _cmd_fetch(args: argparse.Namespace) -> int:
    fetch_repy(args.out, url=args.url, refresh=args.refresh)
    return 0


def _cmd_parse(args: argparse.Namespace) -> int:
    """
    Parse a raw REPY file and write the catalog as JSON (stdout by default).
    """
    with open(args.file, "rb") as f:
        catalog = read_file(f, encoding=args.encoding)

    text = json.dumps(catalog_to_dicts(catalog), ensure_ascii=False, indent=2)
    if args.out is None:
        print(text)
    else:
        args.out.parent.mkdir(parents=True, exist_ok=True)
        args.out.write_text(text + "\n", encoding="utf-8")
        n_courses = sum(len(f.courses) for f in catalog)
        print(f"Parsed {len(catalog)} faculties, {n_courses} courses -> {args.out}")
    return 0


def _cmd_update(args: argparse.Namespace) -> int:
    """
    Download the latest report, store it, parse it and rebuild the index.
    """
    data = download_repy(args.url)

    store = RepyStore(data, root=args.data_dir, cache_disabled=args.no_cache)
    store.write_all_repy_files()
    store.parse_and_write()
    entries = store.write_index()

    print(f"Success: {store.sha1sum} ({len(entries)} reports in index)")
    return 0


def _cmd_summary(args: argparse.Namespace) -> int:
    """
    Print one table row per faculty.
    """
    catalog = _load_catalog(args.catalog)
    if not catalog:
        print("No faculties.")
        return 0

    table = Table(title=str(args.catalog))
    table.add_column("Faculty")
    table.add_column("Semester")
    table.add_column("Courses", justify="right")
    table.add_column("Groups", justify="right")

    for faculty in catalog:
        courses = faculty.get("courses", []) or []
        n_groups = sum(len(c.get("groups", []) or []) for c in courses)
        table.add_row(
            str(faculty.get("name", "")),
            str(faculty.get("semester", "")),
            str(len(courses)),
            str(n_groups),
        )

    console.print(table)
    return 0


def _cmd_search(args: argparse.Namespace) -> int:
    """
    Search courses by substring match in id, name, or lecturer in charge.
    """
    query = (args.text or "").strip().lower()
    if not query:
        print("Please provide a search text.")
        return 1

    matches: list[tuple[str, str]] = []
    for faculty in _load_catalog(args.catalog):
        for c in faculty.get("courses", []) or []:
            cid = str(c.get("id", ""))
            name = str(c.get("name", "") or "").strip()
            lecturer = str(c.get("lecturer_in_charge", "") or "")

            hay = f"{cid} {name} {lecturer}".lower()
            if query in hay:
                matches.append((cid, name if name else "(no name)"))

    if not matches:
        print("No results.")
        return 0

    # show max 20
    for cid, name in matches[:20]:
        print(f"{cid} | {name}")
    if len(matches) > 20:
        print(f"... and {len(matches) - 20} more results")

    return 0


def build_parser() -> argparse.ArgumentParser:
    """
    Build the argparse CLI parser with sub-commands.
    """
    parser = argparse.ArgumentParser(prog="repy", description="REPY course schedule parser")
    parser.add_argument("-v", "--verbose", action="store_true", help="Show debug messages")
    parser.add_argument("-q", "--quiet", action="store_true", help="Only show warnings")
    sub = parser.add_subparsers(dest="command", required=True)

    p_fetch = sub.add_parser("fetch", help="Download the published REPY report")
    p_fetch.add_argument("--out", type=Path, default=RAW_PATH, help="Where to store the raw report")
    p_fetch.add_argument("--url", type=str, default=REPFILE_URL, help="URL of REPFILE.zip")
    p_fetch.add_argument("--refresh", action="store_true", help="Re-download even if cached")

    p_parse = sub.add_parser("parse", help="Parse a raw REPY file into JSON")
    p_parse.add_argument("file", type=Path, help="Raw REPY file")
    p_parse.add_argument("--out", type=Path, default=None, help="Output JSON path (default: stdout)")
    p_parse.add_argument("--encoding", type=_encoding, default=REPY_ENCODING, help="Encoding of the raw file")

    p_update = sub.add_parser("update", help="Download, store, parse and index the latest report")
    p_update.add_argument("--data-dir", type=Path, default=None, help="Data directory (default: REPY_DATA_DIR)")
    p_update.add_argument("--url", type=str, default=REPFILE_URL, help="URL of REPFILE.zip")
    p_update.add_argument("--no-cache", action="store_true", help="Rebuild every index entry")

    p_summary = sub.add_parser("summary", help="Show faculties of a parsed catalog")
    p_summary.add_argument("catalog", type=Path, help="Parsed catalog JSON")

    p_search = sub.add_parser("search", help="Search courses in a parsed catalog")
    p_search.add_argument("catalog", type=Path, help="Parsed catalog JSON")
    p_search.add_argument("text", type=str, help="Search text")

    return parser


COMMANDS = {
    "fetch": _cmd_fetch,
    "parse": _cmd_parse,
    "update": _cmd_update,
    "summary": _cmd_summary,
    "search": _cmd_search,
}


def main(argv: list[str] | None = None) -> None:
    """
    CLI entry point. Parses args, dispatches to command handlers,
    and exits via SystemExit with a return code.
    """
    parser = build_parser()
    args = parser.parse_args(argv)
    _setup_logging(args.verbose, args.quiet)

    if args.command == "update" and args.data_dir is None:
        args.data_dir = default_data_dir()

    try:
        code = COMMANDS[args.command](args)
    except (RepyError, OSError) as err:
        # requests' exceptions are OSErrors too
        print(f"Error: {err}", file=sys.stderr)
        code = 1

    raise SystemExit(code)
