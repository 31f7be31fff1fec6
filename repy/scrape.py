from __future__ import annotations

import argparse
import io
import zipfile
from pathlib import Path, PurePosixPath

import requests

from repy.errors import FetchError


# ---------------------------------------------------------------------------
# Paths & URLs
# ---------------------------------------------------------------------------

PACKAGE_DIR = Path(__file__).resolve().parent
RAW_PATH = PACKAGE_DIR / "data" / "raw" / "REPY"

REPFILE_URL = "https://ug3.technion.ac.il/rep/REPFILE.zip"

REPY_MEMBER = "REPY"


# ---------------------------------------------------------------------------
# Core logic
# ---------------------------------------------------------------------------


def extract_from_zip(data: bytes) -> bytes:
    """
    Return the raw bytes of the REPY member of the published archive.

    The member is matched by base name, case-insensitively.
    """
    try:
        archive = zipfile.ZipFile(io.BytesIO(data))
    except zipfile.BadZipFile as err:
        raise FetchError(f"Downloaded file is not a zip archive: {err}") from err

    with archive:
        names = archive.namelist()
        for name in names:
            if PurePosixPath(name).name.upper() == REPY_MEMBER:
                return archive.read(name)

    raise FetchError(f"No {REPY_MEMBER} file in archive (members: {names})")


def download_repy(url: str = REPFILE_URL, timeout: float = 30) -> bytes:
    """
    Download the published archive and return the raw (CP862) report.
    """
    resp = requests.get(url, timeout=timeout)
    resp.raise_for_status()
    return extract_from_zip(resp.content)


def fetch_repy(
    out_path: Path = RAW_PATH,
    url: str = REPFILE_URL,
    refresh: bool = False,
) -> bytes:
    """
    Return the raw report, downloading it only if no cached copy exists.
    """
    if out_path.exists() and not refresh:
        print(f"SKIP  {out_path} (cached)")
        return out_path.read_bytes()

    print(f"FETCH {url}")
    data = download_repy(url)

    out_path.parent.mkdir(parents=True, exist_ok=True)
    out_path.write_bytes(data)
    print(f"Wrote {len(data)} bytes to {out_path}")
    return data


# ---------------------------------------------------------------------------
# CLI entry
# ---------------------------------------------------------------------------


def build_parser() -> argparse.ArgumentParser:
    p = argparse.ArgumentParser(prog="repy.scrape", description="Download the published REPY report (cached)")
    p.add_argument("--out", type=Path, default=RAW_PATH, help="Where to store the raw report")
    p.add_argument("--url", type=str, default=REPFILE_URL, help="URL of the REPFILE.zip archive")
    p.add_argument("--refresh", action="store_true", help="Re-download and overwrite a cached report")
    return p


def main(argv: list[str] | None = None) -> None:
    args = build_parser().parse_args(argv)
    fetch_repy(args.out, url=args.url.strip(), refresh=args.refresh)


if __name__ == "__main__":
    main()
