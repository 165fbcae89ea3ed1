"""
Menu tree assembly from flat nav_menu_item records.

Parent links come from post meta and are not enforced, so the input may
reference missing parents or contain cycles. Neither is an error:
- parent 0, missing, or outside the input set -> root
- every cycle is broken by promoting its lowest-id member to a root

Each level is ordered by (menu_order, id).
"""
import logging
from typing import Dict, Iterable, List

from wpquery.models.derived import MenuItem

logger = logging.getLogger(__name__)


def _sort_key(item: MenuItem):
    return (item.menu_order, item.id)


def resolve_parents(items: Dict[int, MenuItem]) -> Dict[int, int]:
    """
    Map each item id to the id of its parent within ``items`` (0 for roots).

    Walks each item's ancestor chain with a visited set. When a walk comes
    back to a node already on the path, the cycle's lowest id becomes a root.
    """
    parents = {
        item_id: (item.parent_id if item.parent_id in items else 0)
        for item_id, item in items.items()
    }

    for start in sorted(parents):
        path: List[int] = []
        on_path = set()
        node = start
        while node and node not in on_path:
            on_path.add(node)
            path.append(node)
            node = parents[node]
        if node:
            cycle = path[path.index(node):]
            promoted = min(cycle)
            logger.warning("Menu item cycle %s; promoting item %d to root", cycle, promoted)
            parents[promoted] = 0

    return parents


def build_menu_tree(records: Iterable[MenuItem]) -> List[MenuItem]:
    """Assemble an ordered forest. Input children are ignored; duplicate ids keep the first record."""
    items: Dict[int, MenuItem] = {}
    for record in records:
        if record.id in items:
            logger.warning("Duplicate menu item id %d ignored", record.id)
            continue
        items[record.id] = record.model_copy(update={"children": []})

    parents = resolve_parents(items)

    roots: List[MenuItem] = []
    for item_id in sorted(items):
        parent_id = parents[item_id]
        if parent_id:
            items[parent_id].children.append(items[item_id])
        else:
            roots.append(items[item_id])

    roots.sort(key=_sort_key)
    for item in items.values():
        item.children.sort(key=_sort_key)
    return roots
