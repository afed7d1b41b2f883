"""Hierarchy models for the equipment taxonomy."""

import json
import logging
from collections import Counter
from collections.abc import Iterable, Iterator, Sequence
from enum import Enum
from pathlib import Path
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, TypeAdapter, ValidationError

logger = logging.getLogger(__name__)


class NodeType(str, Enum):
    """Categorical node tags. Presentation only, never used for traversal."""
    ROOT = "Root"
    CATEGORY = "Category"
    SYSTEM = "System"
    SUB_SYSTEM = "SubSystem"
    SUB_SYSTEM_CODE = "SubSystemCode"
    COMPONENT_GROUP = "ComponentGroup"
    PART_GROUP = "PartGroup"
    PART = "Part"
    EQUIPMENT_TYPE = "EquipmentType"
    EQUIPMENT = "Equipment"
    ASSEMBLY = "Assembly"
    COMPONENT = "Component"


class NodeStatus(str, Enum):
    """Optional lifecycle status carried by the source data."""
    ACTIVE = "active"
    INACTIVE = "inactive"


class TreeNode(BaseModel):
    """Immutable node of the equipment hierarchy.

    Ids are expected to be unique across the whole tree and the structure is
    expected to be a strict tree. Neither is checked here; see
    ``find_duplicate_ids`` for a diagnostic.
    """
    id: str
    label: str
    type: NodeType
    children: tuple["TreeNode", ...] = ()
    status: NodeStatus | None = None
    meta: dict[str, Any] = Field(default_factory=dict)

    model_config = ConfigDict(frozen=True)

    def __hash__(self) -> int:
        # meta is a plain dict and stays out of the hash
        return hash((self.id, self.label, self.type, self.children, self.status))

    @property
    def has_children(self) -> bool:
        """Whether the node has at least one child."""
        return len(self.children) > 0


_ROOTS_ADAPTER = TypeAdapter(list[TreeNode])


def parse_hierarchy(data: Any) -> list[TreeNode]:
    """Validate raw hierarchy data into root nodes.

    Accepts either a list of root nodes, a single root node mapping, or a
    mapping with a ``roots`` key.
    """
    if isinstance(data, dict) and "roots" in data:
        data = data["roots"]
    elif isinstance(data, dict):
        data = [data]
    return _ROOTS_ADAPTER.validate_python(data)


def load_hierarchy(path: str | Path) -> list[TreeNode]:
    """Load a hierarchy from a JSON file.

    Args:
        path: Path to a JSON document in the TreeNode shape

    Returns:
        Root nodes of the hierarchy

    Raises:
        FileNotFoundError: If the file does not exist
        ValueError: If the file is not valid JSON or not a valid hierarchy
    """
    path = Path(path)
    if not path.exists():
        raise FileNotFoundError(f"Hierarchy file not found: {path}")

    try:
        with open(path, encoding="utf-8") as f:
            raw = json.load(f)
        roots = parse_hierarchy(raw)
    except json.JSONDecodeError as e:
        raise ValueError(f"Invalid JSON in hierarchy file {path}: {e}") from e
    except ValidationError as e:
        raise ValueError(f"Invalid hierarchy in {path}: {e}") from e

    logger.info(f"Loaded hierarchy from {path}: {len(roots)} root(s), {count_nodes(roots)} nodes")
    return roots


def iter_nodes(roots: Iterable[TreeNode]) -> Iterator[TreeNode]:
    """Yield every node in pre-order."""
    stack = list(reversed(list(roots)))
    while stack:
        node = stack.pop()
        yield node
        stack.extend(reversed(node.children))


def all_ids(roots: Iterable[TreeNode]) -> set[str]:
    """Collect the ids of every node in the hierarchy."""
    return {node.id for node in iter_nodes(roots)}


def count_nodes(roots: Iterable[TreeNode]) -> int:
    return sum(1 for _ in iter_nodes(roots))


def find_node(roots: Iterable[TreeNode], node_id: str) -> TreeNode | None:
    """Find a node by id."""
    for node in iter_nodes(roots):
        if node.id == node_id:
            return node
    return None


def ancestry(roots: Sequence[TreeNode], node_id: str) -> list[TreeNode] | None:
    """Return the chain of nodes from a root down to ``node_id``.

    Used for breadcrumbs. Returns None when the id is not in the hierarchy.
    """
    def walk(node: TreeNode, path: list[TreeNode]) -> list[TreeNode] | None:
        path.append(node)
        if node.id == node_id:
            return path
        for child in node.children:
            found = walk(child, path)
            if found is not None:
                return found
        path.pop()
        return None

    for root in roots:
        found = walk(root, [])
        if found is not None:
            return found
    return None


def find_duplicate_ids(roots: Iterable[TreeNode]) -> dict[str, int]:
    """Report ids that occur more than once, with their occurrence count."""
    counts = Counter(node.id for node in iter_nodes(roots))
    return {node_id: count for node_id, count in counts.items() if count > 1}


def max_depth(roots: Iterable[TreeNode]) -> int:
    """Deepest 0-based level in the hierarchy, -1 for an empty hierarchy."""
    deepest = -1
    stack = [(root, 0) for root in roots]
    while stack:
        node, level = stack.pop()
        deepest = max(deepest, level)
        stack.extend((child, level + 1) for child in node.children)
    return deepest
