from __future__ import annotations

import csv
import io
import logging

from ..core.constants import CSV_MIME_TYPE, OPTIONAL_IMPORT_HEADERS, REQUIRED_IMPORT_HEADERS
from ..core.exceptions import ValidationError
from .model import ImportResult

logger = logging.getLogger(__name__)

# Some browsers label .csv uploads with the Excel MIME type.
_LEGACY_CSV_MIME_TYPES = {"application/vnd.ms-excel"}


def ensure_csv_upload(filename: str | None, content_type: str | None) -> None:
    mime = (content_type or "").split(";")[0].strip().lower()
    if mime == CSV_MIME_TYPE:
        return
    if mime in _LEGACY_CSV_MIME_TYPES and (filename or "").lower().endswith(".csv"):
        return
    raise ValidationError("Invalid file type. Please upload a CSV file.")


def decode_csv_bytes(data: bytes) -> str:
    try:
        return data.decode("utf-8-sig")
    except UnicodeDecodeError:
        raise ValidationError("Could not read the CSV file. Please save it as UTF-8.")


def parse_roster_csv(text: str, *, class_id: int) -> ImportResult:
    """Turn a roster CSV into add-bulk payloads.

    Rules:
    - blank lines are ignored; a header plus at least one record is required
    - the header must name rollNumber, firstName, lastName and parentPhone
      (any order, extra columns ignored), otherwise the whole file is rejected
    - rows whose field count differs from the header, or with an empty
      required field, are skipped
    """

    rows = [row for row in csv.reader(io.StringIO(text)) if any(cell.strip() for cell in row)]
    if len(rows) < 2:
        raise ValidationError("CSV must contain a header row and at least one student record.")

    headers = [h.strip() for h in rows[0]]
    missing = [h for h in REQUIRED_IMPORT_HEADERS if h not in headers]
    if missing:
        raise ValidationError(f"Required headers missing: {', '.join(missing)}")

    students: list[dict] = []
    skipped = 0
    for line_no, row in enumerate(rows[1:], start=2):
        if len(row) != len(headers):
            skipped += 1
            logger.debug("Skipping CSV row %s: %s fields, expected %s", line_no, len(row), len(headers))
            continue

        values = {header: value.strip() for header, value in zip(headers, row)}
        if not all(values.get(h) for h in REQUIRED_IMPORT_HEADERS):
            skipped += 1
            logger.debug("Skipping CSV row %s: missing a required field", line_no)
            continue

        optional = {h: values.get(h, "") for h in OPTIONAL_IMPORT_HEADERS}
        students.append(
            {
                "class_id": class_id,
                "name": f"{values['firstName']} {values['lastName']}",
                "roll_number": values["rollNumber"],
                "father_name": optional["fatherName"],
                "mother_name": optional["motherName"],
                "parent_phone": values["parentPhone"],
                "parent_email": optional["parentEmail"],
                "address": optional["address"],
                "gender": optional["gender"],
            }
        )

    return ImportResult(students=students, skipped_rows=skipped)
