"""Reference resolver: match a declared project reference against discovered units.

Resolution runs an ordered list of pure strategies, each with the signature
``(raw, source, units) -> unit id | None``. The first strategy that returns
an id wins. Every comparison prefers an exact-case match and then falls back
to a case-insensitive one, since project references are usually written on
case-insensitive file systems.
"""

from __future__ import annotations

import ntpath
import os
import posixpath
import re
from collections.abc import Callable, Iterable, Sequence

from build_order.models import Reference, Unit

Strategy = Callable[[str, Unit, Sequence[Unit]], "str | None"]

_PARENT_PREFIX_RE = re.compile(r"^(?:\.\.[\\/])+")


def _last_segment(path: str) -> str:
    return re.split(r"[\\/]", path.rstrip("\\/"))[-1]


def _first_match(candidates: Iterable[tuple[str, str]], key: str) -> str | None:
    """Pick the unit id whose comparison value equals ``key``.

    ``candidates`` yields ``(value, unit_id)`` pairs; exact-case hits win
    over case-insensitive ones.
    """
    if not key:
        return None
    folded_key = key.casefold()
    fallback: str | None = None
    for value, unit_id in candidates:
        if value == key:
            return unit_id
        if fallback is None and value.casefold() == folded_key:
            fallback = unit_id
    return fallback


# ── strategies ────────────────────────────────────────────────

def match_identity(raw: str, source: Unit, units: Sequence[Unit]) -> str | None:
    """The raw path is a unit id verbatim."""
    return _first_match(((u.id, u.id) for u in units), raw)


def match_relative_path(raw: str, source: Unit, units: Sequence[Unit]) -> str | None:
    """Resolve the raw path against the source unit's directory.

    Both ``\\`` and ``/`` count as separators, whatever the host platform.
    """
    base = os.path.dirname(source.id)
    if not base:
        return None
    candidate = os.path.normpath(os.path.join(base, raw.replace("\\", "/")))
    return _first_match(((os.path.normpath(u.id), u.id) for u in units), candidate)


def match_anchored(raw: str, source: Unit, units: Sequence[Unit]) -> str | None:
    """Try ``raw`` relative to the directory of every discovered unit.

    Paths that climb with ``../`` or are absolute are left to the other
    strategies.
    """
    relative = raw.replace("\\", "/")
    if relative.startswith("../") or posixpath.isabs(relative) or ntpath.isabs(raw):
        return None
    ids = [(os.path.normpath(u.id), u.id) for u in units]
    for directory in dict.fromkeys(os.path.dirname(u.id) for u in units):
        if not directory:
            continue
        candidate = os.path.normpath(os.path.join(directory, relative))
        found = _first_match(ids, candidate)
        if found is not None:
            return found
    return None


def match_bare_name(raw: str, source: Unit, units: Sequence[Unit]) -> str | None:
    """Strip directories and extension, compare with each display name."""
    name = _last_segment(raw)
    stem, _ext = posixpath.splitext(name)
    return _first_match(((u.display_name, u.id) for u in units), stem or name)


def match_filename(raw: str, source: Unit, units: Sequence[Unit]) -> str | None:
    """Compare the final path segment, extension included."""
    return _first_match(((_last_segment(u.id), u.id) for u in units), _last_segment(raw))


BASE_STRATEGIES: list[Strategy] = [
    match_identity,
    match_relative_path,
    match_anchored,
    match_bare_name,
    match_filename,
]


def _normalized_variants(raw: str) -> list[str]:
    variants = [
        raw.replace("\\", "/"),
        raw.replace("/", "\\"),
        _PARENT_PREFIX_RE.sub("", raw),
        _PARENT_PREFIX_RE.sub("", raw.replace("\\", "/")),
    ]
    seen: list[str] = []
    for variant in variants:
        if variant and variant != raw and variant not in seen:
            seen.append(variant)
    return seen


def match_normalized(raw: str, source: Unit, units: Sequence[Unit]) -> str | None:
    """Retry the base strategies on separator- and prefix-normalized forms.

    Each strategy sees every variant before the next strategy runs, so a
    path match on a stripped variant beats a name match on the original.
    """
    variants = _normalized_variants(raw)
    for strategy in BASE_STRATEGIES:
        for variant in variants:
            found = strategy(variant, source, units)
            if found is not None:
                return found
    return None


STRATEGIES: list[Strategy] = [*BASE_STRATEGIES, match_normalized]


# ── public API ────────────────────────────────────────────────

def resolve_reference(
    raw: str,
    source: Unit,
    units: Sequence[Unit],
    strategies: Sequence[Strategy] = STRATEGIES,
) -> str | None:
    """Return the id of the unit ``raw`` refers to, or None if unresolved."""
    if not raw or not raw.strip():
        return None
    raw = raw.strip()
    for strategy in strategies:
        found = strategy(raw, source, units)
        if found is not None:
            return found
    return None


def resolve_references(
    unit: Unit,
    units: Sequence[Unit],
    strategies: Sequence[Strategy] = STRATEGIES,
) -> tuple[list[Reference], list[Reference]]:
    """Resolve every declared reference of ``unit`` in place.

    Returns ``(resolved, unresolved)`` lists of the unit's references.
    """
    resolved: list[Reference] = []
    unresolved: list[Reference] = []
    for reference in unit.declared_references:
        reference.resolved_unit_id = resolve_reference(
            reference.raw_path, unit, units, strategies,
        )
        if reference.resolved:
            resolved.append(reference)
        else:
            unresolved.append(reference)
    return resolved, unresolved
