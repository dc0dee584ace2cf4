import logging
from typing import Iterator, Optional

from warehouse import settings, utils

logger = logging.getLogger(__name__)


class CategoryNode:
    """One path segment of the category tree. Children are keyed by segment name."""

    def __init__(self, name: str):
        self.name = name
        self.children: dict[str, "CategoryNode"] = {}
        self.item_ids: list[int] = []

    def __repr__(self) -> str:
        return f"CategoryNode({self.name!r}, children={len(self.children)}, items={len(self.item_ids)})"


class CategoryTree:
    """
    Hierarchical index of item ids by slash-delimited category path.

    "Electronics/Phones" lives under "Electronics", which lives under the root.
    Missing segments are created on demand when an item is recorded; lookups
    that only read never grow the tree. Nodes are never pruned.
    """

    def __init__(self):
        self.root = CategoryNode(settings.ROOT_CATEGORY_NAME)
        # Path each item was filed under, independent of its record's current category.
        self._filed: dict[int, str] = {}

    def resolve_path(self, category: str) -> CategoryNode:
        """Walks the path from the root, creating missing segments, and returns its node."""
        current = self.root
        for segment in utils.split_category_path(category):
            child = current.children.get(segment)
            if child is None:
                child = CategoryNode(segment)
                current.children[segment] = child
                logger.debug(f"Created category node '{segment}' under '{current.name}'")
            current = child
        return current

    def find(self, category: str) -> Optional[CategoryNode]:
        current = self.root
        for segment in utils.split_category_path(category):
            current = current.children.get(segment)
            if current is None:
                return None
        return current

    def record_item(self, category: str, item_id: int):
        self.resolve_path(category).item_ids.append(item_id)

    def discard_item(self, category: str, item_id: int) -> bool:
        node = self.find(category)
        if node is None or item_id not in node.item_ids:
            return False
        node.item_ids.remove(item_id)
        return True

    def filed_path(self, item_id: int) -> Optional[str]:
        return self._filed.get(item_id)

    def file_item(self, item_id: int, category: str):
        """Files an item under one path, moving it out of wherever it was filed before."""
        self.unfile_item(item_id)
        self.record_item(category, item_id)
        self._filed[item_id] = category

    def unfile_item(self, item_id: int) -> bool:
        category = self._filed.pop(item_id, None)
        if category is None:
            return False
        return self.discard_item(category, item_id)

    def item_ids_under(self, category: str) -> list[int]:
        """Ids recorded at the path and at every path below it, depth-first."""
        node = self.find(category)
        if node is None:
            return []
        return [item_id for _, n in self._walk(node, "") for item_id in n.item_ids]

    def paths(self) -> list[str]:
        return [path for path, _ in self._walk(self.root, "") if path]

    def _walk(self, node: CategoryNode, path: str) -> Iterator[tuple[str, CategoryNode]]:
        yield path, node
        for name, child in node.children.items():
            child_path = f"{path}{settings.CATEGORY_SEPARATOR}{name}" if path else name
            yield from self._walk(child, child_path)
