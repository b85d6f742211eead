"""emit_code.py - Render the C artifacts of a code-mode catalog.

Three files come out of one :class:`~waitgen.registry.Catalog`:

* ``wait_event_types.h`` - one ``typedef enum`` per wait class, first member
  pinned to the class base constant (``PG_WAIT_<CLASS>``).
* ``pgstat_wait_event.c`` - one ``pgstat_get_wait_<class>()`` per wait class,
  a ``switch`` with one ``case`` per member and deliberately no ``default``
  so the C compiler flags any member left out.
* ``wait_event_funcs_data.c`` - flat ``{type, name, description}`` rows for
  every wait event, hand-maintained classes included.

Classes listed in ``cfg.excluded`` are skipped for the first two files.
All renderers are pure; :func:`write_code` does the I/O.
"""

from __future__ import annotations

import re
from pathlib import Path
from typing import Any

import jinja2

from waitgen.config import DEFAULT_CONFIG, GeneratorConfig
from waitgen.describe import clean_description
from waitgen.naming import class_constant, class_suffix, lookup_function_name
from waitgen.registry import Catalog, GenerationMode
from waitgen.utils import write_outputs

DEFAULT_SOURCE_NAME = "wait_event_names.txt"

_BANNER_TEMPLATE = jinja2.Template(
    """\
/*-------------------------------------------------------------------------
 *
 * {{ filename }}
 *    Generated wait events infrastructure code
 *
 * NOTES
 *  ******************************
 *  *** DO NOT EDIT THIS FILE! ***
 *  ******************************
 *
 *  It has been GENERATED by waitgen from {{ source_name }}
 *
 *-------------------------------------------------------------------------
 */

""",
    keep_trailing_newline=True,
)

_HEADER_TEMPLATE = jinja2.Template(
    """\
{{ banner }}#ifndef {{ guard }}
#define {{ guard }}

#include "{{ include }}"

{% for cls in classes %}
typedef enum
{
{% for member in cls.members %}
\t{{ member }}
{% endfor %}
} {{ cls.name }};

{% endfor %}
#endif\t\t\t\t\t\t\t/* {{ guard }} */
""",
    trim_blocks=True,
    lstrip_blocks=True,
    keep_trailing_newline=True,
)

_LOOKUP_TEMPLATE = jinja2.Template(
    """\
{{ banner }}{% for cls in classes %}
static const char *
{{ cls.function }}({{ cls.name }} w)
{
\tconst char *event_name = "{{ unknown_label }}";

\tswitch (w)
\t{
{% for ev in cls.events %}
\t\tcase {{ ev.enum_name }}:
\t\t\tevent_name = "{{ ev.display_label }}";
\t\t\tbreak;
{% endfor %}
\t\t\t/* no default case, so that compiler will warn */
\t}

\treturn event_name;
}

{% endfor %}
""",
    trim_blocks=True,
    lstrip_blocks=True,
    keep_trailing_newline=True,
)

_FUNCS_DATA_TEMPLATE = jinja2.Template(
    """\
{{ banner }}{% for row in rows %}
\t{"{{ row.type }}", "{{ row.name }}", "{{ row.description }}"},
{% endfor %}
""",
    trim_blocks=True,
    lstrip_blocks=True,
    keep_trailing_newline=True,
)


def render_banner(filename: str, source_name: str = DEFAULT_SOURCE_NAME) -> str:
    return _BANNER_TEMPLATE.render(filename=filename, source_name=source_name)


def header_guard(filename: str) -> str:
    """``wait_event_types.h`` -> ``WAIT_EVENT_TYPES_H``."""
    return re.sub(r"\W", "_", filename, flags=re.ASCII).upper()


def _require_code_mode(catalog: Catalog) -> None:
    if catalog.mode is not GenerationMode.CODE:
        raise ValueError(f"code artifacts need a code-mode catalog, got {catalog.mode.value}")


def _generated_classes(catalog: Catalog, cfg: GeneratorConfig) -> list[dict[str, Any]]:
    """Template context for every class that gets an enum and lookup function."""
    classes: list[dict[str, Any]] = []
    for category, events in catalog.items():
        if category in cfg.excluded:
            continue
        members = [ev.enum_name for ev in events]
        members[0] = f"{members[0]} = {class_constant(category, cfg)}"
        members = [m + "," for m in members[:-1]] + members[-1:]
        classes.append(
            {
                "name": category,
                "function": lookup_function_name(category, cfg),
                "members": members,
                "events": events,
            }
        )
    return classes


def render_types_header(
    catalog: Catalog,
    cfg: GeneratorConfig = DEFAULT_CONFIG,
    source_name: str = DEFAULT_SOURCE_NAME,
) -> str:
    """Render the enum header."""
    _require_code_mode(catalog)
    return _HEADER_TEMPLATE.render(
        banner=render_banner(cfg.types_header, source_name),
        guard=header_guard(cfg.types_header),
        include=cfg.include,
        classes=_generated_classes(catalog, cfg),
    )


def render_lookup_source(
    catalog: Catalog,
    cfg: GeneratorConfig = DEFAULT_CONFIG,
    source_name: str = DEFAULT_SOURCE_NAME,
) -> str:
    """Render the enum-value -> display-label lookup functions."""
    _require_code_mode(catalog)
    return _LOOKUP_TEMPLATE.render(
        banner=render_banner(cfg.lookup_source, source_name),
        unknown_label=cfg.unknown_label,
        classes=_generated_classes(catalog, cfg),
    )


def funcs_data_rows(catalog: Catalog, cfg: GeneratorConfig = DEFAULT_CONFIG) -> list[dict[str, str]]:
    """One ``{type, name, description}`` row per wait event, all classes."""
    return [
        {
            "type": class_suffix(category, cfg),
            "name": ev.display_label,
            "description": clean_description(ev.doc_sentence),
        }
        for category, events in catalog.items()
        for ev in events
    ]


def render_funcs_data(
    catalog: Catalog,
    cfg: GeneratorConfig = DEFAULT_CONFIG,
    source_name: str = DEFAULT_SOURCE_NAME,
) -> str:
    """Render the flat static table used by ``pg_get_wait_events()``."""
    _require_code_mode(catalog)
    return _FUNCS_DATA_TEMPLATE.render(
        banner=render_banner(cfg.funcs_data, source_name),
        rows=funcs_data_rows(catalog, cfg),
    )


def render_code(
    catalog: Catalog,
    cfg: GeneratorConfig = DEFAULT_CONFIG,
    source_name: str = DEFAULT_SOURCE_NAME,
) -> dict[str, str]:
    """Render all code artifacts, keyed by output file name."""
    return {
        cfg.types_header: render_types_header(catalog, cfg, source_name),
        cfg.lookup_source: render_lookup_source(catalog, cfg, source_name),
        cfg.funcs_data: render_funcs_data(catalog, cfg, source_name),
    }


def write_code(
    catalog: Catalog,
    outdir: Path,
    cfg: GeneratorConfig = DEFAULT_CONFIG,
    source_name: str = DEFAULT_SOURCE_NAME,
) -> list[Path]:
    """Render every code artifact, then write them atomically into *outdir*."""
    return write_outputs(outdir, render_code(catalog, cfg, source_name))
