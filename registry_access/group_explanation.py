"""
Group Explanation — Lists the modules each group is explicitly granted.

For every group, the value payloads of its "Table Access" rows
(key1 == "Group", key2 == <group>, key3 == "Table Access") are split on ";",
each piece is trimmed, empty pieces are dropped, and the pieces of all rows are
merged into one ascending list. Duplicates across rows are kept as listed.

A group without any granted module gets an empty list; renderers show a note
pointing to the Default group for those.
"""

import logging
from typing import Dict, List, Sequence

from .table_loader import Table

logger = logging.getLogger(__name__)

MODULE_SEPARATOR = ";"


class GroupExplanations(dict):
    """Mapping of group name -> sorted granted modules, in group order."""

    def needs_fallback(self, group: str) -> bool:
        """True when a listed group has no explicit module grants.

        Groups that are not part of the mapping are never flagged.
        """
        return group in self and not self[group]

    @property
    def fallback_groups(self) -> List[str]:
        return [group for group in self if self.needs_fallback(group)]

    def fallback_flags(self) -> Dict[str, bool]:
        return {group: self.needs_fallback(group) for group in self}


def split_modules(payload: str) -> List[str]:
    """Split one access payload into trimmed, non-empty module names."""
    pieces = (piece.strip() for piece in (payload or "").split(MODULE_SEPARATOR))
    return [piece for piece in pieces if piece]


def build_group_explanations(table: Table, groups: Sequence[str]) -> GroupExplanations:
    """Collect the granted modules for each group.

    Args:
        table: A validated Table.
        groups: Ordered group names, normally from extract_groups().

    Returns:
        GroupExplanations with one entry per group, in the given order.
    """
    explanations = GroupExplanations()
    for group in groups:
        modules = []
        for payload in table.index.access_payloads(group):
            modules.extend(split_modules(payload))
        explanations[group] = sorted(modules)

    logger.debug(
        "Group explanations built for %d groups (%d without explicit grants)",
        len(explanations), len(explanations.fallback_groups),
    )
    return explanations
