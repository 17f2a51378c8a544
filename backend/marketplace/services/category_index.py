"""
Category visibility index.

Flattens the parent/child category rows into an id -> visibility lookup and a
display tree. Each row's `is_visible` flag is authoritative for that row only;
children never inherit visibility from their parent.
"""
import logging
from typing import Iterable

from marketplace.models import Category
from marketplace.schemas.category import CategoryNode

logger = logging.getLogger(__name__)


def build_tree(categories: Iterable[Category]) -> list[CategoryNode]:
    """Build a category forest in two passes over the flat list.

    Input order does not matter; a child may appear before its parent.
    Children whose parent is missing are left out of the tree, and a link
    that would close a parent cycle is refused.
    """
    categories = list(categories)
    nodes: dict[str, CategoryNode] = {}
    roots: list[CategoryNode] = []

    # First pass: create all nodes
    for category in categories:
        nodes[category.id] = CategoryNode(
            id=category.id,
            name=category.name,
            parent_id=category.parent_id,
            is_visible=bool(category.is_visible),
            subcategories=[],
        )

    # Second pass: attach children. `attached` only holds links already in the
    # forest, so walking it upwards always terminates.
    attached: dict[str, str] = {}
    for category in categories:
        node = nodes[category.id]
        parent_id = category.parent_id

        if not parent_id:
            roots.append(node)
            continue

        parent = nodes.get(parent_id)
        if parent is None:
            continue

        if _creates_cycle(category.id, parent_id, attached):
            logger.warning(f"Category cycle detected at {category.id} -> {parent_id}; link skipped")
            continue

        parent.subcategories.append(node)
        attached[category.id] = parent_id

    return roots


def _creates_cycle(child_id: str, parent_id: str, attached: dict[str, str]) -> bool:
    current = parent_id
    while current is not None:
        if current == child_id:
            return True
        current = attached.get(current)
    return False


class CategoryIndex:
    """Lookup from category id to its own visibility flag, plus the full tree."""

    def __init__(self, categories: Iterable[Category]):
        self._categories = list(categories)
        self._visibility = {c.id: bool(c.is_visible) for c in self._categories}
        self.tree = build_tree(self._categories)

    def is_visible(self, category_id: str | None) -> bool:
        """Flag on that exact row. Null and unknown ids fail open."""
        if category_id is None:
            return True
        visible = self._visibility.get(category_id)
        if visible is None:
            logger.warning(f"Unknown category {category_id}; treating as visible")
            return True
        return visible

    def visible_tree(self) -> list[CategoryNode]:
        """Display tree restricted to visible rows.

        A visible child under a hidden parent has nowhere to attach and is
        left out, the same way the browsing navigation behaves.
        """
        return build_tree(c for c in self._categories if c.is_visible)


def build_index(categories: Iterable[Category]) -> CategoryIndex:
    return CategoryIndex(categories)
