"""Reconcile the two JSON shapes ``forester query all`` has produced.

Current releases print a list of tree objects, each carrying its ``uri``.
Older releases print an object keyed by tree id. Only the shape tells them
apart; there is no version field to look at.
"""

from __future__ import annotations

import logging
from typing import Any, Iterable, Mapping

from forestcomplete.models import Entry, Forest

LOGGER = logging.getLogger(__name__)


def _entries_from_list(items: Iterable[Any]) -> Forest:
    forest: Forest = []
    for item in items:
        if not isinstance(item, Mapping):
            # Keeps the position; the entry carries only defaults.
            LOGGER.warning("Non-object tree in forester output: %r", item)
            item = {}
        forest.append(Entry.from_dict(item))
    return forest


def _entries_from_mapping(trees: Mapping[str, Any]) -> Forest:
    forest: Forest = []
    for uri, fields in trees.items():
        data = dict(fields) if isinstance(fields, Mapping) else {}
        data["uri"] = uri
        forest.append(Entry.from_dict(data))
    return forest


def normalize(parsed: Any) -> Forest:
    """Turn parsed forester JSON into a list of entries, keeping its order."""
    if isinstance(parsed, list):
        return _entries_from_list(parsed)
    if isinstance(parsed, Mapping):
        return _entries_from_mapping(parsed)
    LOGGER.warning("Unexpected forester output of type %s", type(parsed).__name__)
    return []
