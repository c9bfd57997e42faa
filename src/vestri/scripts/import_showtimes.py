"""Import showtimes from a programme spreadsheet into the catalog."""

import argparse
import asyncio
import sys
from pathlib import Path

from vestri.database import AsyncSessionLocal
from vestri.exceptions import ImportValidationError
from vestri.services.catalog import ShowtimeCatalog
from vestri.services.importer import parse_workbook
from vestri.services.temporal import local_now


async def import_showtimes(path: Path, dry_run: bool = False, purge_past: bool = False) -> bool:
    """Validate the workbook, print a preview and insert the rows unless ``dry_run``."""
    try:
        payloads = parse_workbook(path.read_bytes())
    except ImportValidationError as e:
        print(f"{path.name}: {e}")
        for error in e.errors:
            print(f"  - {error}")
        return False

    for p in payloads:
        subtitles = f" (sub {p.subtitle_language})" if p.subtitle_language else ""
        print(
            f"  {p.screening_date}  {p.start_time:%H:%M}-{p.end_time:%H:%M}  "
            f"{p.title:<40} {p.language}{subtitles}"
        )
    print(f"\n{len(payloads)} showtime{'s' if len(payloads) != 1 else ''} in {path.name}")

    if dry_run:
        print("Dry run: nothing imported.")
        return True

    async with AsyncSessionLocal() as db:
        catalog = ShowtimeCatalog(db)
        if purge_past:
            deleted = await catalog.delete_past(local_now())
            print(f"Deleted {deleted} past showtimes.")
        await catalog.bulk_create(payloads)
        await db.commit()

    print("Import complete.")
    return True


def main() -> None:
    parser = argparse.ArgumentParser(description="Import showtimes from an .xlsx programme.")
    parser.add_argument("workbook", type=Path, help="Path to the .xlsx file")
    parser.add_argument(
        "--dry-run",
        action="store_true",
        help="Validate and preview without writing to the database",
    )
    parser.add_argument(
        "--purge-past",
        action="store_true",
        help="Delete showtimes that have already ended before importing",
    )
    args = parser.parse_args()

    ok = asyncio.run(import_showtimes(args.workbook, args.dry_run, args.purge_past))
    sys.exit(0 if ok else 1)


if __name__ == "__main__":
    main()
