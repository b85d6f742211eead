"""emit_docs.py - Render the SGML wait event tables.

One ``<table>`` per wait class, every class included.  Descriptions keep
their markup; only the surrounding double quotes are removed.
"""

from __future__ import annotations

from pathlib import Path
from typing import Any

import jinja2

from waitgen.config import DEFAULT_CONFIG, GeneratorConfig
from waitgen.describe import docs_description
from waitgen.naming import class_suffix
from waitgen.registry import Catalog, GenerationMode
from waitgen.utils import write_outputs

_DOCS_TEMPLATE = jinja2.Template(
    """\
{% for cls in classes %}
  <table id="{{ cls.anchor }}">
   <title>Wait Events of Type <literal>{{ cls.title }}</literal></title>
   <tgroup cols="2">
    <thead>
     <row>
      <entry><literal>{{ cls.suffix }}</literal> Wait Event</entry>
      <entry>Description</entry>
     </row>
    </thead>

    <tbody>
{% for ev in cls.events %}
     <row>
      <entry><literal>{{ ev.label }}</literal></entry>
      <entry>{{ ev.description }}</entry>
     </row>
{% endfor %}
    </tbody>
   </tgroup>
  </table>

{% endfor %}
""",
    trim_blocks=True,
    lstrip_blocks=True,
    keep_trailing_newline=True,
)


def table_anchor(category: str, cfg: GeneratorConfig = DEFAULT_CONFIG) -> str:
    """``WaitEventLWLock`` -> ``wait-event-lwlock-table``."""
    return f"wait-event-{class_suffix(category, cfg).lower()}-table"


def _docs_classes(catalog: Catalog, cfg: GeneratorConfig) -> list[dict[str, Any]]:
    classes = []
    for category, events in catalog.items():
        suffix = class_suffix(category, cfg)
        classes.append(
            {
                "anchor": table_anchor(category, cfg),
                "title": suffix.lower().capitalize(),
                "suffix": suffix,
                "events": [
                    {"label": ev.display_label, "description": docs_description(ev.doc_sentence)}
                    for ev in events
                ],
            }
        )
    return classes


def render_docs(catalog: Catalog, cfg: GeneratorConfig = DEFAULT_CONFIG) -> str:
    if catalog.mode is not GenerationMode.DOCS:
        raise ValueError(f"docs need a docs-mode catalog, got {catalog.mode.value}")
    return _DOCS_TEMPLATE.render(classes=_docs_classes(catalog, cfg))


def write_docs(catalog: Catalog, outdir: Path, cfg: GeneratorConfig = DEFAULT_CONFIG) -> list[Path]:
    """Render the docs tables and write them atomically into *outdir*."""
    return write_outputs(outdir, {cfg.docs: render_docs(catalog, cfg)})
