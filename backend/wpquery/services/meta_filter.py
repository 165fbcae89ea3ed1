"""
Post metadata as a key -> value map.

meta_key is not unique per post. Rows are taken in ascending meta_id order
and the first occurrence of a key wins.
"""
from collections import abc
from typing import Dict, FrozenSet, Iterable, Optional

from wpquery.errors import QueryValidationError
from wpquery.models.postmeta import PostMeta


def validate_meta_keys(keys) -> Optional[FrozenSet[str]]:
    """
    Normalise the optional key argument.

    None means "all keys". Any other value must be a non-string collection of
    strings; a bare string is rejected rather than split into characters.
    """
    if keys is None:
        return None
    if isinstance(keys, (str, bytes)) or not isinstance(keys, abc.Iterable):
        raise QueryValidationError(f"keys must be a collection of strings, got {type(keys).__name__}")
    keys = list(keys)
    bad = [k for k in keys if not isinstance(k, str)]
    if bad:
        raise QueryValidationError(f"keys must be strings, got {bad!r}")
    return frozenset(keys)


def filter_meta(rows: Iterable[PostMeta], keys: Optional[FrozenSet[str]] = None) -> Dict[str, Optional[str]]:
    """Reduce meta rows to {meta_key: meta_value}, first row (by meta_id) wins."""
    result: Dict[str, Optional[str]] = {}
    for row in sorted(rows, key=lambda r: r.meta_id):
        if row.meta_key is None:
            continue
        if keys is not None and row.meta_key not in keys:
            continue
        result.setdefault(row.meta_key, row.meta_value)
    return result
