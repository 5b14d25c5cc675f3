"""
Group Extractor — Discovers the user groups present in a registry table.

A user group is any non-empty key2 of a row whose key1 is "Group". The result
is de-duplicated and sorted ascending, with the "Default" group pinned first
when it exists, so renderers can list it before the groups that fall back to it.

Pipeline context:
    Step 2 of the orchestrator pipeline. The returned list orders the columns
    of the permission matrix (Step 3) and the group sections (Step 4).
"""

import logging
from typing import List

from .settings import DEFAULT_GROUP
from .table_loader import Table

logger = logging.getLogger(__name__)


def extract_groups(table: Table) -> List[str]:
    """Return the unique group names, "Default" first, the rest ascending.

    Args:
        table: A validated Table.

    Returns:
        Ordered list of group names; empty if the table has no group rows.
    """
    groups = sorted({name for name in table.index.group_names if name})

    if DEFAULT_GROUP in groups:
        groups.remove(DEFAULT_GROUP)
        groups.insert(0, DEFAULT_GROUP)

    logger.debug("Extracted %d groups: %s", len(groups), groups)
    return groups
