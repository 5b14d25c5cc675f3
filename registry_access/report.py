"""
Report — Runs the three derivations over one loaded table.

build_report() is the whole derivation pipeline: groups first, then the
permission matrix and the group explanations, both keyed by those groups.
The AccessReport it returns is plain data; renderers and the JSON export read
from it and never modify it.
"""

from dataclasses import dataclass
from typing import Any, Dict, List

from .group_explanation import GroupExplanations, build_group_explanations
from .group_extractor import extract_groups
from .permission_matrix import PermissionMatrix, build_permission_matrix
from .table_loader import Table


@dataclass
class AccessReport:
    source: str
    row_count: int
    column_count: int
    groups: List[str]
    modules: List[str]
    matrix: PermissionMatrix
    explanations: GroupExplanations

    def to_dict(self) -> Dict[str, Any]:
        return {
            "source": self.source,
            "rows": self.row_count,
            "columns": self.column_count,
            "groups": list(self.groups),
            "group_count": len(self.groups),
            "modules": list(self.modules),
            "matrix": self.matrix.to_dict(),
            "explanations": {group: list(mods) for group, mods in self.explanations.items()},
            "fallback_groups": self.explanations.fallback_groups,
        }


def build_report(table: Table) -> AccessReport:
    """Derive groups, permission matrix and group explanations from a table."""
    groups = extract_groups(table)
    modules, matrix = build_permission_matrix(table, groups)
    explanations = build_group_explanations(table, groups)

    return AccessReport(
        source=table.source,
        row_count=table.row_count,
        column_count=table.column_count,
        groups=groups,
        modules=modules,
        matrix=matrix,
        explanations=explanations,
    )
