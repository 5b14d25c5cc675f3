"""
Permission Matrix — Which groups carry explicit settings for which modules.

Rows are modules: the distinct key4 values of "Table" rows, kept in the order
they first appear in the source. Columns are the groups from
extract_groups(). A cell is True when the registry holds at least one row with

    key1 == "Group", key2 == <group>, key3 == "Table", key4 == <module>

and False otherwise. The matrix is dense: every (module, group) pair of the two
label lists has a value.

Pipeline context:
    Step 3 of the orchestrator pipeline. The html_renderer turns the matrix into
    the "Has Access to Module" Yes/No grid.
"""

import logging
from typing import Dict, Iterator, List, Sequence, Tuple

from .table_loader import Table

logger = logging.getLogger(__name__)


class PermissionMatrix:
    """Dense module x group presence matrix.

    Attributes:
        modules: Row labels, in first-seen source order.
        groups: Column labels, in the order supplied by the caller.
        cells: (module, group) -> bool for every pair of labels.
    """

    def __init__(self, modules: Sequence[str], groups: Sequence[str],
                 cells: Dict[Tuple[str, str], bool]):
        self.modules = list(modules)
        self.groups = list(groups)
        self.cells = dict(cells)

    def __getitem__(self, key: Tuple[str, str]) -> bool:
        return self.cells[key]

    def __contains__(self, key) -> bool:
        return key in self.cells

    def __len__(self) -> int:
        return len(self.cells)

    def has_access(self, module: str, group: str) -> bool:
        return self.cells[(module, group)]

    def rows(self) -> Iterator[Tuple[str, List[bool]]]:
        """Yield (module, [presence per group]) in row order."""
        for module in self.modules:
            yield module, [self.cells[(module, group)] for group in self.groups]

    def to_dict(self) -> Dict[str, Dict[str, bool]]:
        """Nested {module: {group: bool}} form for JSON output."""
        return {
            module: {group: self.cells[(module, group)] for group in self.groups}
            for module in self.modules
        }


def build_permission_matrix(table: Table, groups: Sequence[str]) -> Tuple[List[str], PermissionMatrix]:
    """Build the module x group presence matrix.

    Args:
        table: A validated Table.
        groups: Ordered group names, normally from extract_groups().

    Returns:
        Tuple of (modules, matrix). Both are empty-but-valid when the table has
        no "Table" rows or no groups were given.
    """
    index = table.index
    modules = list(index.modules)

    cells = {}
    for module in modules:
        for group in groups:
            cells[(module, group)] = index.has_table_row(group, module)

    logger.debug(
        "Permission matrix: %d modules x %d groups, %d explicit settings",
        len(modules), len(groups), sum(cells.values()),
    )
    return modules, PermissionMatrix(modules, groups, cells)
