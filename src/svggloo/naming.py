"""Output file naming.

Derives a deterministic base name for a record's output file from a
naming policy. Two modes exist and deliberately differ:

- Fields given: each value has its whitespace replaced by ``_`` and is
  lowercased, then the values are joined with the separator.
- No fields: the first field's value is lowercased as is (whitespace kept).
"""

import os
import re

from svggloo.exceptions import InvalidNameError, MissingFieldError
from svggloo.models import NamingPolicy, Record

_WHITESPACE_RE = re.compile(r"\s")


def _clean_value(value: str) -> str:
    return _WHITESPACE_RE.sub("_", value).lower()


def compute_name(record: Record, policy: NamingPolicy) -> str:
    """Compute the base name (no extension) of a record's output file.

    Args:
        record: Field → value mapping, in CSV column order
        policy: Fields and separator to use

    Returns:
        Base file name

    Raises:
        MissingFieldError: If a policy field is absent from the record, or
            the record is empty in first-field mode

    Examples:
        >>> policy = NamingPolicy(fields=("country", "state", "city"))
        >>> compute_name({"country": "USA", "state": "CA", "city": "Los Angeles"}, policy)
        'usa-ca-los_angeles'
        >>> compute_name({"city": "Austin"}, NamingPolicy())
        'austin'
    """
    if not policy.uses_first_field:
        parts: list[str] = []
        for field_name in policy.fields:
            if field_name not in record:
                raise MissingFieldError(field_name)
            parts.append(_clean_value(record[field_name]))
        return policy.separator.join(parts)

    for value in record.values():
        return value.lower()

    raise MissingFieldError("<first field>", "Record has no fields to derive a name from")


def check_name(name: str) -> str:
    """Ensure a computed name can be used as a single file name.

    Args:
        name: Base name from compute_name

    Returns:
        The name, unchanged

    Raises:
        InvalidNameError: If the name is empty, a relative path component,
            or contains a path separator
    """
    if name in {"", ".", ".."}:
        raise InvalidNameError(name)

    separators = {"/", os.sep}
    if os.altsep:
        separators.add(os.altsep)
    if any(sep in name for sep in separators):
        raise InvalidNameError(name, "output file name contains a path separator")

    return name
