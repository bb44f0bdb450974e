"""svggloo template rendering.

Jinja2-based engine that parses a template once and renders it per record.
Rendering is deterministic: the same record always produces the same text.
"""

from svggloo.templates.engine import (
    TemplateEngine,
    TemplateHandle,
    read_template,
    render_record,
    render_record_from_file,
)

__all__ = [
    "TemplateEngine",
    "TemplateHandle",
    "read_template",
    "render_record",
    "render_record_from_file",
]
