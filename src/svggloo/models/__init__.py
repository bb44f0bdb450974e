"""svggloo data models.

- Record: one CSV row as an ordered field → value mapping
- NamingPolicy: fields and separator used to name output files
- ExportTarget: which external converter to run on rendered files
- RenderResult: summary of a completed render run
"""

from svggloo.models.naming import NamingPolicy, Record
from svggloo.models.render import ExportTarget, RenderResult

__all__ = [
    "ExportTarget",
    "NamingPolicy",
    "Record",
    "RenderResult",
]
