"""Bulk import of showtimes from the venue's programme spreadsheet."""

import io
import logging
from datetime import date, datetime, time
from typing import Any

from openpyxl import load_workbook
from pydantic import ValidationError

from vestri.exceptions import ImportValidationError
from vestri.schemas.showtime import ShowtimeCreate

logger = logging.getLogger(__name__)

# Spreadsheet header -> showtime field. The programme sheets use the same
# Italian headings as the legacy table; English field names are accepted too.
HEADER_ALIASES: dict[str, str] = {
    "data": "screening_date",
    "id film tmdb": "film_external_id",
    "orario inizio": "start_time",
    "orario fine": "end_time",
    "lingua": "language",
    "sottotitoli": "subtitle_language",
    "pretix event id": "booking_reference",
    "sold out": "sold_out",
    "titolo": "title",
    "mark": "annotation",
}
for _field in set(HEADER_ALIASES.values()):
    HEADER_ALIASES[_field] = _field

TRUTHY = {"true", "1", "yes", "si", "sì", "x"}
DATE_FORMATS = ("%Y-%m-%d", "%d/%m/%Y", "%d-%m-%Y")
TIME_FORMATS = ("%H:%M", "%H:%M:%S", "%H.%M")


def _parse_date(value: Any) -> Any:
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    if isinstance(value, str):
        for fmt in DATE_FORMATS:
            try:
                return datetime.strptime(value.strip(), fmt).date()
            except ValueError:
                continue
    return value


def _parse_time(value: Any) -> Any:
    if isinstance(value, datetime):
        return value.time().replace(second=0, microsecond=0)
    if isinstance(value, time):
        return value.replace(second=0, microsecond=0)
    if isinstance(value, str):
        for fmt in TIME_FORMATS:
            try:
                return datetime.strptime(value.strip(), fmt).time()
            except ValueError:
                continue
    return value


def _parse_text(value: Any) -> Any:
    if value is None:
        return None
    if isinstance(value, float) and value.is_integer():
        # TMDb ids and event ids typed as numbers come back as floats
        return str(int(value))
    return str(value)


def _parse_bool(value: Any) -> bool:
    if isinstance(value, bool):
        return value
    if value is None:
        return False
    return str(value).strip().lower() in TRUTHY


PARSERS = {
    "screening_date": _parse_date,
    "start_time": _parse_time,
    "end_time": _parse_time,
    "sold_out": _parse_bool,
}


def map_headers(headers: tuple[Any, ...]) -> dict[int, str]:
    """Column index -> showtime field for every recognised header."""
    columns: dict[int, str] = {}
    for index, header in enumerate(headers):
        if header is None:
            continue
        field = HEADER_ALIASES.get(str(header).strip().lower())
        if field:
            columns[index] = field
    return columns


def parse_rows(rows: list[tuple[Any, ...]]) -> list[ShowtimeCreate]:
    """
    Validate spreadsheet rows (header first) into showtime payloads.

    Blank rows are skipped. Every invalid row is reported; nothing is
    returned unless all rows are valid.

    Raises:
        ImportValidationError: If the header is unusable or any row is invalid
    """
    if not rows:
        raise ImportValidationError(["Spreadsheet is empty"])

    columns = map_headers(rows[0])
    if not columns:
        raise ImportValidationError(["No recognised column headers"])

    showtimes: list[ShowtimeCreate] = []
    errors: list[str] = []
    for row_number, row in enumerate(rows[1:], start=2):
        if all(cell is None or str(cell).strip() == "" for cell in row):
            continue

        values: dict[str, Any] = {}
        for index, field in columns.items():
            cell = row[index] if index < len(row) else None
            parser = PARSERS.get(field, _parse_text)
            values[field] = parser(cell)

        try:
            showtimes.append(ShowtimeCreate.model_validate(values))
        except ValidationError as e:
            problems = "; ".join(
                f"{'.'.join(str(p) for p in err['loc']) or 'row'}: {err['msg']}"
                for err in e.errors()
            )
            errors.append(f"Row {row_number}: {problems}")

    if errors:
        raise ImportValidationError(errors)
    return showtimes


def parse_workbook(content: bytes) -> list[ShowtimeCreate]:
    """
    Read showtimes from the first sheet of an ``.xlsx`` file.

    Args:
        content: Raw workbook bytes

    Returns:
        Validated showtime payloads
    """
    try:
        workbook = load_workbook(io.BytesIO(content), read_only=True, data_only=True)
    except Exception as e:
        logger.warning(f"Could not open uploaded workbook: {e}")
        raise ImportValidationError([f"Not a readable .xlsx file: {e}"]) from e

    try:
        sheet = workbook.worksheets[0]
        rows = [tuple(row) for row in sheet.iter_rows(values_only=True)]
    finally:
        workbook.close()

    showtimes = parse_rows(rows)
    logger.info(f"Parsed {len(showtimes)} showtimes from workbook")
    return showtimes
