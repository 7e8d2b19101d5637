"""Rebuild hierarchical paths from the flat, pre-ordered TOC."""

from collections.abc import Iterable, Sequence

from loguru import logger

from yuque_mirror.core.tree.sanitize import sanitize_title
from yuque_mirror.models.toc import ProgressRecord, ResolvedEntry, TocNode

ARTICLE_SUFFIX = ".md"

# Mapping uuid -> entry. Insertion order follows the order nodes were resolved.
ResolutionMap = dict[str, ResolvedEntry]


def seed_resolution_map(records: Iterable[ProgressRecord]) -> tuple[ResolutionMap, set[str]]:
    """Replay successful records from an earlier run.

    Returns:
        The resolution map and the set of ids that need no more work.
    """
    resolution_map: ResolutionMap = {}
    done: set[str] = set()
    for record in records:
        if not record.success:
            continue
        resolution_map[record.entry.id] = record.entry
        done.add(record.entry.id)
    return resolution_map, done


def resolve_directory(node: TocNode, resolution_map: ResolutionMap) -> ResolvedEntry:
    """Climb the ancestor chain of a directory node through the resolution map."""
    title_segments: list[str] = []
    id_segments: list[str] = []
    current: TocNode | None = node
    seen: set[str] = set()
    while current is not None and current.uuid not in seen:
        seen.add(current.uuid)
        title_segments.insert(0, sanitize_title(current.title))
        id_segments.insert(0, current.uuid)
        parent = resolution_map.get(current.parent_uuid)
        current = parent.node if parent is not None else None

    return ResolvedEntry(
        id=node.uuid,
        path="/".join(title_segments),
        title_segments=tuple(title_segments),
        id_segments=tuple(id_segments),
        node=node,
    )


def resolve_leaf(node: TocNode, resolution_map: ResolutionMap) -> ResolvedEntry:
    """Extend the parent's segments with this article's file name.

    A leaf whose parent is not resolved (yet) lands in the book root.
    """
    parent = resolution_map.get(node.parent_uuid)
    parent_titles = parent.title_segments if parent is not None else ()
    parent_ids = parent.id_segments if parent is not None else ()

    title_segments = (*parent_titles, sanitize_title(node.title) + ARTICLE_SUFFIX)
    return ResolvedEntry(
        id=node.uuid,
        path="/".join(title_segments),
        title_segments=title_segments,
        id_segments=(*parent_ids, node.uuid),
        node=node,
    )


def resolve_node(node: TocNode, resolution_map: ResolutionMap) -> ResolvedEntry | None:
    """Resolve one node against the map and insert it.

    Returns:
        The new entry, or None for nodes that are neither directory nor article.
    """
    if node.is_directory:
        entry = resolve_directory(node, resolution_map)
    elif node.is_leaf:
        entry = resolve_leaf(node, resolution_map)
    else:
        logger.debug(f"Ignoring TOC item {node.uuid!r} (type {node.type!r}, no url)")
        return None
    resolution_map[node.uuid] = entry
    return entry


def resolve_toc(
    nodes: Sequence[TocNode],
    prior_records: Iterable[ProgressRecord] = (),
) -> tuple[ResolutionMap, set[str]]:
    """Resolve every node in one forward pass.

    Parents must precede their children in ``nodes``; a child seen before its
    parent is treated as a root-level item.

    Args:
        nodes: TOC in pre-order.
        prior_records: Progress of an earlier, interrupted run.

    Returns:
        (resolution map, ids of nodes already handled by an earlier run).
    """
    resolution_map, skip = seed_resolution_map(prior_records)
    for node in nodes:
        if node.uuid in skip:
            continue
        resolve_node(node, resolution_map)
    return resolution_map, skip
