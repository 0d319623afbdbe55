from __future__ import annotations

"""
Parent -> children index over a flat category snapshot.

The index does not validate id uniqueness or acyclicity; those are caller
invariants. Walks that follow parent links (``ancestors``) guard against
loops and raise CycleDetected instead of spinning.
"""

from typing import Dict, Iterable, Iterator, List, Optional, Set

from .errors import CycleDetected
from .models import Category


class HierarchyIndex:
    def __init__(self, categories: Iterable[Category]) -> None:
        self._by_id: Dict[str, Category] = {}
        self._children: Dict[Optional[str], List[str]] = {}
        for cat in categories:
            self._by_id[cat.id] = cat
            self._children.setdefault(cat.parent_id, []).append(cat.id)

    # ---------- Queries ----------

    @property
    def ids(self) -> Set[str]:
        return set(self._by_id)

    def __contains__(self, category_id: object) -> bool:
        return category_id in self._by_id

    def __iter__(self) -> Iterator[str]:
        return iter(self._by_id)

    def __len__(self) -> int:
        return len(self._by_id)

    def get(self, category_id: Optional[str]) -> Optional[Category]:
        if category_id is None:
            return None
        return self._by_id.get(category_id)

    def children_of(self, parent_id: Optional[str]) -> List[str]:
        """Direct child ids in snapshot order; ``None`` addresses the root level."""
        return list(self._children.get(parent_id, ()))

    def level(self, parent_id: Optional[str]) -> List[Category]:
        """Categories shown together at one browsing level."""
        return [self._by_id[cid] for cid in self._children.get(parent_id, ())]

    def is_leaf(self, category_id: str) -> bool:
        return not self._children.get(category_id)

    def parent_of(self, category_id: str) -> Optional[str]:
        cat = self._by_id.get(category_id)
        return cat.parent_id if cat is not None else None

    def ancestors(self, category_id: str) -> List[str]:
        """Ids from the direct parent up to the root, nearest first."""
        chain: List[str] = []
        seen = {category_id}
        current = self.parent_of(category_id)
        while current is not None:
            if current in seen:
                loop_start = ([category_id] + chain).index(current)
                raise CycleDetected(([category_id] + chain)[loop_start:] + [current])
            seen.add(current)
            chain.append(current)
            current = self.parent_of(current)
        return chain

    def path_name(self, category_id: str, sep: str = " › ") -> str:
        """Display name with the parent prefix, e.g. ``Career › Reading``."""
        cat = self._by_id.get(category_id)
        if cat is None:
            return category_id
        if cat.parent_id is not None:
            parent = self._by_id.get(cat.parent_id)
            return f"{parent.name if parent else '?'}{sep}{cat.name}"
        return cat.name


def build_hierarchy_index(categories: Iterable[Category]) -> HierarchyIndex:
    return HierarchyIndex(categories)
