"""Split documents into modeled fields and an opaque remainder, and back."""

from copy import deepcopy
from typing import Any, Iterable, Mapping, Optional, Tuple


def split_properties(
    data: Mapping[str, Any], known_keys: Iterable[str]
) -> Tuple[dict, dict]:
    """Split `data` into (known fields, every other key).

    Both halves are new dictionaries. The remainder keeps the input order and is
    a deep copy, so it never aliases `data`.
    """
    known_keys = set(known_keys)
    known = {}
    rest = {}
    for key, value in data.items():
        if key in known_keys:
            known[key] = value
        else:
            rest[key] = deepcopy(value)
    return known, rest


def merge_properties(
    properties: Optional[Mapping[str, Any]], explicit: Mapping[str, Any]
) -> dict:
    """Rebuild a document from its opaque remainder and its explicit fields.

    Explicit fields are written last so they win over a same-named property.
    """
    merged = deepcopy(dict(properties or {}))
    merged.update(explicit)
    return merged
