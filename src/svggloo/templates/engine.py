"""Template engine for per-record rendering.

Wraps a Jinja2 environment. A template is parsed once into a
``TemplateHandle`` and rendered many times, once per record. Undefined
field references are errors: a record missing a referenced field never
renders as an empty string.
"""

import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

from jinja2 import (
    DictLoader,
    Environment,
    StrictUndefined,
    Template,
    TemplateError,
    select_autoescape,
)
from jinja2 import TemplateSyntaxError as JinjaSyntaxError

from svggloo.exceptions import TemplateRenderError, TemplateSyntaxError
from svggloo.models import Record

logger = logging.getLogger(__name__)

# Name used for templates rendered from a bare string
INLINE_TEMPLATE_NAME = "template"


@dataclass(frozen=True)
class TemplateHandle:
    """A parsed, render-ready template bound to a name.

    Attributes:
        name: Template name (the template file's base name)
        source: Original template text
    """

    name: str
    source: str
    _template: Template = field(repr=False, compare=False)
    _env: Environment = field(repr=False, compare=False)


class TemplateEngine:
    """Parses and renders templates against records.

    One engine is created per render run and discarded at its end.

    Usage:
        engine = TemplateEngine()
        handle = engine.load("brochure.svg", source)
        for record in records:
            svg = engine.render(handle, record)
    """

    def __init__(self) -> None:
        """Initialize the engine with an empty template store."""
        self._sources: dict[str, str] = {}
        self._env = Environment(
            loader=DictLoader(self._sources),
            autoescape=select_autoescape(["html", "xml"]),
            undefined=StrictUndefined,
            keep_trailing_newline=True,
        )

    def load(self, name: str, source: str) -> TemplateHandle:
        """Parse a template and bind it to a name.

        Args:
            name: Template name; its extension drives autoescaping
            source: Template text

        Returns:
            Handle to pass to render()

        Raises:
            TemplateSyntaxError: If the source cannot be parsed
        """
        self._sources[name] = source
        try:
            template = self._env.get_template(name)
        except JinjaSyntaxError as e:
            del self._sources[name]
            raise TemplateSyntaxError(name, e.message or str(e), e.lineno) from e

        logger.debug("Loaded template %s (%d characters)", name, len(source))
        return TemplateHandle(name=name, source=source, _template=template, _env=self._env)

    def render(self, handle: TemplateHandle, record: Record) -> str:
        """Render a loaded template against one record.

        Args:
            handle: Handle returned by load() on this engine
            record: Field → value mapping

        Returns:
            Rendered text

        Raises:
            TemplateRenderError: If a referenced field is absent from the
                record or the template fails at runtime
        """
        if handle._env is not self._env:
            raise TemplateRenderError(handle.name, "template was not loaded by this engine")

        # Each call gets its own context so no state carries between records
        context: dict[str, Any] = dict(record)
        try:
            return handle._template.render(context)
        except TemplateError as e:
            raise TemplateRenderError(handle.name, e.message or str(e)) from e
        except (TypeError, ValueError, ArithmeticError) as e:
            raise TemplateRenderError(handle.name, f"{type(e).__name__}: {e}") from e


def read_template(template_path: Path) -> str:
    """Read a template file as UTF-8 text.

    Raises:
        OSError: If the file cannot be read
        TemplateSyntaxError: If the file is not valid UTF-8
    """
    template_path = Path(template_path)
    try:
        return template_path.read_text(encoding="utf-8")
    except UnicodeDecodeError as e:
        raise TemplateSyntaxError(
            template_path.name, f"template is not valid UTF-8 (byte {e.start}): {e.reason}"
        ) from e


def render_record(template: str, record: Record) -> str:
    """Render a template string once against a record.

    Args:
        template: Template text
        record: Field → value mapping

    Returns:
        Rendered text

    Examples:
        >>> render_record("This is {{city}}.", {"city": "Austin"})
        'This is Austin.'
    """
    engine = TemplateEngine()
    handle = engine.load(INLINE_TEMPLATE_NAME, template)
    return engine.render(handle, record)


def render_record_from_file(template_path: Path, record: Record) -> str:
    """Render a template file once against a record.

    Args:
        template_path: Path to the template file
        record: Field → value mapping

    Returns:
        Rendered text

    Raises:
        OSError: If the template file cannot be read
        TemplateSyntaxError: If the template is not valid UTF-8 or cannot be parsed
    """
    source = read_template(template_path)
    return render_record(source, record)
