"""
Reference resolution: turn a human-friendly ref into exactly one entity.

A ref is tried, in order, as a Todoist URL, an ``id:`` prefixed id, a
free-text query ranked exact-then-substring, and finally a raw id. The first
strategy that commits (an entity or a terminal error) wins.
"""

from __future__ import annotations

import re

from todoist_cli import config
from todoist_cli.exceptions import (
    AmbiguousReference,
    EmptyReference,
    NotFound,
    RemoteFailure,
    WrongUrlKind,
)
from todoist_cli.models import Reference

_URL_RE = re.compile(
    r"^https?://app\.todoist\.com/app/(" + "|".join(config.URL_KINDS) + r")/([^?#/]+)"
)
_RAW_ID_DIGITS = re.compile(r"^\d+$")
_HAS_LETTER = re.compile(r"[a-zA-Z]")
_HAS_DIGIT = re.compile(r"\d")

ID_PREFIX = "id:"


def parse_todoist_url(text):
    """Return (kind, id) for an app.todoist.com URL, else None.

    The id is whatever follows the last hyphen of the slug segment
    (``buy-milk-6X7rM8997g3RQmvh`` -> ``6X7rM8997g3RQmvh``).
    """
    m = _URL_RE.match(text.strip())
    if not m:
        return None
    slug = m.group(2)
    _, _, tail = slug.rpartition("-")
    return m.group(1), tail or slug


def looks_like_raw_id(text):
    if re.search(r"\s", text):
        return False
    if _RAW_ID_DIGITS.match(text):
        return True
    return bool(text.isalnum() and _HAS_LETTER.search(text) and _HAS_DIGIT.search(text))


def strip_id_prefix(text):
    """'id:123' -> '123'; anything else is returned unchanged."""
    return text[len(ID_PREFIX) :] if text.startswith(ID_PREFIX) else text


def parse_reference(text):
    parsed = parse_todoist_url(text)
    if parsed:
        url_kind, entity_id = parsed
        return Reference(kind="url", value=entity_id, url_kind=url_kind)
    if text.startswith(ID_PREFIX):
        return Reference(kind="id", value=text[len(ID_PREFIX) :])
    return Reference(kind="query", value=text)


def rank_candidates(items, text_of, ref, kind):
    """Exact-then-substring match, case-insensitive, response order preserved.

    Returns the single match, None when nothing matched, or raises
    AmbiguousReference when several substring matches remain.
    """
    lower = ref.lower()
    exact = [item for item in items if text_of(item).lower() == lower]
    if len(exact) == 1:
        return exact[0]
    partial = [item for item in items if lower in text_of(item).lower()]
    if len(partial) == 1:
        return partial[0]
    if len(partial) > 1:
        shown = partial[: config.MAX_AMBIGUOUS_CANDIDATES]
        raise AmbiguousReference(kind, ref, [(text_of(item), item.id) for item in shown])
    return None


# ---------------------------------------------------------------------------
# Per-kind strategies
# ---------------------------------------------------------------------------


def _search_tasks(api, ref):
    return api.filter_tasks(f"search: {ref}", limit=config.RESOLVE_SEARCH_LIMIT)


def _list_projects(api, ref):
    return api.get_projects()


_KINDS = {
    "task": {
        "fetch": lambda api, entity_id: api.get_task(entity_id),
        "candidates": _search_tasks,
        "text": lambda task: task.content,
    },
    "project": {
        "fetch": lambda api, entity_id: api.get_project(entity_id),
        "candidates": _list_projects,
        "text": lambda project: project.name,
    },
}


def _not_found(kind, ref, search_error=None):
    message = f'{kind.capitalize()} "{ref}" not found. Use a name, URL, or id:xxx.'
    if search_error is not None:
        message += f" (search failed: {search_error})"
    return NotFound(message)


def _fetch_or_not_found(strategy, api, kind, ref, entity_id):
    if not entity_id.strip():
        raise _not_found(kind, ref)
    try:
        return strategy["fetch"](api, entity_id)
    except RemoteFailure as e:
        raise _not_found(kind, ref) from e


def resolve(api, kind, ref):
    """Resolve *ref* to exactly one entity of *kind* ('task' or 'project')."""
    strategy = _KINDS[kind]
    if ref is None or not ref.strip():
        raise EmptyReference(kind)

    reference = parse_reference(ref)
    if reference.kind == "url":
        if reference.url_kind != kind:
            raise WrongUrlKind(kind, reference.url_kind)
        return _fetch_or_not_found(strategy, api, kind, ref, reference.value)
    if reference.kind == "id":
        return _fetch_or_not_found(strategy, api, kind, ref, reference.value)

    search_error = None
    try:
        candidates = strategy["candidates"](api, ref)
    except RemoteFailure as e:
        search_error = e
    else:
        match = rank_candidates(candidates, strategy["text"], ref, kind)
        if match is not None:
            return match

    if looks_like_raw_id(ref):
        try:
            return strategy["fetch"](api, ref)
        except RemoteFailure:
            pass

    raise _not_found(kind, ref, search_error)


def resolve_task(api, ref):
    return resolve(api, "task", ref)


def resolve_project(api, ref):
    return resolve(api, "project", ref)
