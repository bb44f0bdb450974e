"""Record and naming policy entities."""

from collections.abc import Iterable
from dataclasses import dataclass, field

# One CSV row. Keys follow the header's column order.
Record = dict[str, str]

DEFAULT_SEPARATOR = "-"


@dataclass(frozen=True)
class NamingPolicy:
    """Rule for deriving an output file's base name from a record.

    Attributes:
        fields: Field names to join, in order. Empty means "use the
            record's first field".
        separator: String placed between the per-field values
    """

    fields: tuple[str, ...] = field(default_factory=tuple)
    separator: str = DEFAULT_SEPARATOR

    def __post_init__(self) -> None:
        # Accept any iterable of names (lists from YAML or the CLI)
        if not isinstance(self.fields, tuple):
            object.__setattr__(self, "fields", tuple(self.fields))

    @classmethod
    def from_fields(
        cls,
        fields: Iterable[str] | None,
        separator: str | None = None,
    ) -> "NamingPolicy":
        """Build a policy, treating None as "no fields" / default separator."""
        return cls(
            fields=tuple(fields or ()),
            separator=DEFAULT_SEPARATOR if separator is None else separator,
        )

    @property
    def uses_first_field(self) -> bool:
        """Return True when names fall back to the record's first field."""
        return not self.fields
