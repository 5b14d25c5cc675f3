"""
Registry Index — Single-pass lookup structure over the registry records.

The registry marks what each row means through its generic key columns:

    key1 == "Group"          the row is scoped to a user group
    key2                     the group name
    key3 == "Table"          the row marks a module as relevant to the group
    key3 == "Table Access"   the row's value lists the modules granted to the group
    key4                     the module name (for "Table" rows)

Instead of re-filtering the whole table for every (module, group) cell, the
index is built once per loaded table and answers each question with a set or
dict lookup. The derivation modules (group_extractor, permission_matrix,
group_explanation) read only from this index.
"""

from collections import defaultdict
from typing import Dict, Iterable, List, Set, Tuple

GROUP_ROW = "Group"
TABLE_ROW = "Table"
ACCESS_ROW = "Table Access"


class RegistryIndex:
    """Precomputed lookups for one immutable table.

    Attributes:
        group_names: key2 of every group row, in source order (with repeats).
        modules: key4 of every "Table" row, de-duplicated, first-seen order.
        table_pairs: (group, module) pairs that have an explicit "Table" group row.
        access_values: group name -> value payloads of its "Table Access" rows.
    """

    def __init__(self, records: Iterable):
        self.group_names: List[str] = []
        self.modules: List[str] = []
        self.table_pairs: Set[Tuple[str, str]] = set()
        self.access_values: Dict[str, List[str]] = defaultdict(list)

        seen_modules = set()
        for record in records:
            is_group_row = record.key1 == GROUP_ROW

            if is_group_row:
                self.group_names.append(record.key2)

            if record.key3 == TABLE_ROW:
                # Module labels come from every "Table" row, group-scoped or not
                if record.key4 and record.key4 not in seen_modules:
                    seen_modules.add(record.key4)
                    self.modules.append(record.key4)
                if is_group_row:
                    self.table_pairs.add((record.key2, record.key4))

            elif record.key3 == ACCESS_ROW and is_group_row:
                self.access_values[record.key2].append(record.value)

    def has_table_row(self, group: str, module: str) -> bool:
        """True if at least one "Table" group row exists for this pairing."""
        return (group, module) in self.table_pairs

    def access_payloads(self, group: str) -> List[str]:
        """Value payloads of the group's "Table Access" rows (may be empty)."""
        return list(self.access_values.get(group, ()))
