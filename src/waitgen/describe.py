"""describe.py - Turn SGML-flavoured doc sentences into C string contents.

Catalog descriptions are written for the SGML docs and may contain markup
such as ``<literal>``, ``<quote>`` or ``<xref linkend="guc-..."/>``.  The flat
C table wants plain text, so :func:`clean_description` runs each rule below
in order.  Every rule is a pure ``str -> str`` function.
"""

import re

QUOTE_RE = re.compile(r"<quote>(.*?)</quote>")
# Matches a tag pair lazily; also swallows the text between two lone tags.
MARKUP_RE = re.compile(r"<.*?>(.*?)<.*?>")
GUC_LINK_RE = re.compile(r'<xref linkend="guc-(.*?)"/>')
SEE_CLAUSE_RE = re.compile(r"; see.*$")


def strip_sentence(sentence: str) -> str:
    """Drop the leading quote and the trailing period + quote."""
    return sentence[1:-2]


def escape_single_quotes(text: str) -> str:
    return text.replace("'", "\\'")


def replace_quote_markup(text: str) -> str:
    """``<quote>X</quote>`` -> ``\\"X\\"`` (escaped for a C string literal)."""
    return QUOTE_RE.sub(lambda m: f'\\"{m.group(1)}\\"', text)


def strip_markup(text: str) -> str:
    return MARKUP_RE.sub(lambda m: m.group(1), text)


def resolve_guc_links(text: str) -> str:
    """``<xref linkend="guc-max-wal-size"/>`` -> ``max_wal_size``."""
    return GUC_LINK_RE.sub(lambda m: m.group(1).replace("-", "_"), text)


def drop_see_clause(text: str) -> str:
    return SEE_CLAUSE_RE.sub("", text)


CLEANING_STEPS = (
    strip_sentence,
    escape_single_quotes,
    replace_quote_markup,
    strip_markup,
    resolve_guc_links,
    drop_see_clause,
)


def clean_description(sentence: str) -> str:
    """Apply every step of :data:`CLEANING_STEPS` to a quoted doc sentence."""
    for step in CLEANING_STEPS:
        sentence = step(sentence)
    return sentence


def docs_description(sentence: str) -> str:
    """Strip only the outer quotes; markup stays for the SGML output."""
    return sentence[1:-1]
