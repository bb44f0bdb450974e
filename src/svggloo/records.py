"""CSV record source.

Reads the companion data file of a template and yields one record per row.
The first row is always the header; it names the fields of every record.

A malformed file aborts the whole read: there is no partial-row recovery.
"""

import csv
import logging
from collections.abc import Iterator
from pathlib import Path

from svggloo.exceptions import DataFormatError
from svggloo.models import Record

logger = logging.getLogger(__name__)

DATA_SUFFIX = ".csv"


def companion_data_path(template_path: Path) -> Path:
    """Return the CSV file associated with a template.

    ``maps/brochure.svg`` → ``maps/brochure.csv``

    Args:
        template_path: Path to the template file

    Returns:
        Template path with its extension replaced by ``.csv``
    """
    return Path(template_path).with_suffix(DATA_SUFFIX)


def _check_header(path: Path, header: list[str]) -> list[str]:
    """Validate header field names (non-empty, unique)."""
    seen: set[str] = set()
    for name in header:
        if not name:
            raise DataFormatError(path, "empty field name in header", row=1)
        if name in seen:
            raise DataFormatError(path, f"duplicate field name in header: {name!r}", row=1)
        seen.add(name)

    return header


def read_records(path: Path) -> Iterator[Record]:
    """Yield the records of a CSV file in file order.

    Lazy and single-pass: the file stays open until the generator is
    exhausted or closed.

    Args:
        path: Path to the CSV file

    Yields:
        One record per data row, keyed by header field names

    Raises:
        DataFormatError: If the file cannot be opened or decoded, has no
            header, or a row's column count differs from the header's
    """
    path = Path(path)

    try:
        handle = path.open(encoding="utf-8-sig", newline="")
    except OSError as e:
        raise DataFormatError(path, f"cannot open data file: {e}") from e

    with handle:
        reader = csv.reader(handle)
        try:
            header: list[str] | None = None
            for row in reader:
                # Entirely blank lines carry no record
                if not row:
                    continue

                if header is None:
                    header = _check_header(path, row)
                    logger.debug("Data file %s has fields: %s", path, ", ".join(header))
                    continue

                if len(row) != len(header):
                    raise DataFormatError(
                        path,
                        f"expected {len(header)} fields, found {len(row)}",
                        row=reader.line_num,
                    )

                yield dict(zip(header, row))

        except UnicodeDecodeError as e:
            # Decoding runs ahead of the parser, so the row is approximate
            raise DataFormatError(
                path, f"invalid UTF-8 data near row {reader.line_num + 1}: {e.reason}"
            ) from e
        except csv.Error as e:
            raise DataFormatError(path, f"malformed CSV: {e}", row=reader.line_num) from e

    if header is None:
        raise DataFormatError(path, "missing header row")
