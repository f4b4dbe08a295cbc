"""Resolve user input to a meme template and caption text.

Two mutually exclusive modes are supported:

* **Query mode** -- an explicit ``--search`` string is compared against
  template names after both are normalised by :func:`codify`.
* **Shorthand mode** -- a free-text phrase is tested against the compiled
  expression table; the first rule that matches selects the template and
  its capture groups supply the top and bottom text.

Example::

    >>> codify("Y U No!!")
    'y-u-no'
"""

from __future__ import annotations

import re
from dataclasses import dataclass, field
from typing import Optional, Union

from memey.exceptions import NoMatchError
from memey.models import CompiledExpression, Template
from memey.store import TemplateStore

_NON_WORD_RUN = re.compile(r"[^\w]+")

NO_MEMES_FOUND = "No memes found."
MEME_NOT_FOUND = "Meme not found."


@dataclass
class ResolvedMatch:
    """A single template chosen for captioning."""

    template_id: int
    top: Optional[str] = None
    bottom: Optional[str] = None
    template: Optional[Template] = None


@dataclass
class CandidateList:
    """Every template matching a query, returned when no caption text was given."""

    templates: list[Template] = field(default_factory=list)


Resolution = Union[ResolvedMatch, CandidateList]


def codify(text: str) -> str:
    """Normalise *text* for fuzzy name matching.

    Lower-cases, collapses every run of non-word characters to a single
    hyphen and trims hyphens from both ends. Idempotent.
    """
    return _NON_WORD_RUN.sub("-", text.lower()).strip("-")


def find_templates(store: TemplateStore, query: str) -> list[Template]:
    """Return templates whose codified name contains the codified *query*, in store order."""
    key = codify(query)
    return [t for t in store if key in codify(t.name)]


def match_expression(
    expressions: list[CompiledExpression], phrase: str
) -> Optional[ResolvedMatch]:
    """Apply *expressions* in order and return the first match, or ``None``."""
    if not phrase or not phrase.strip():
        return None
    for expression in expressions:
        matched = expression.pattern.search(phrase)
        if matched:
            return ResolvedMatch(
                template_id=expression.id,
                top=_group(matched, 1),
                bottom=_group(matched, 2),
            )
    return None


def _group(matched: re.Match[str], index: int) -> Optional[str]:
    if index > (matched.re.groups or 0):
        return None
    return matched.group(index)


def resolve(
    store: TemplateStore,
    expressions: list[CompiledExpression],
    phrase: Optional[str] = None,
    query: Optional[str] = None,
    top: Optional[str] = None,
    bottom: Optional[str] = None,
) -> Resolution:
    """Decide which template applies to the given input.

    Args:
        store: Template catalog searched in query mode.
        expressions: Compiled shorthand table used when *query* is ``None``.
        phrase: Free-text shorthand phrase (ignored in query mode).
        query: Explicit template search string; selects query mode.
        top: Top caption text for query mode.
        bottom: Bottom caption text for query mode.

    Returns:
        A :class:`ResolvedMatch` when a single template was chosen, or a
        :class:`CandidateList` when a query was given without caption text.

    Raises:
        NoMatchError: If nothing matched.
    """
    if query is not None:
        matches = find_templates(store, query)
        if not matches:
            raise NoMatchError(NO_MEMES_FOUND)
        if not top and not bottom:
            return CandidateList(matches)
        first = matches[0]
        return ResolvedMatch(template_id=first.id, top=top, bottom=bottom, template=first)

    resolved = match_expression(expressions, phrase or "")
    if resolved is None:
        raise NoMatchError(MEME_NOT_FOUND)
    return resolved
