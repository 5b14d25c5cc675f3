"""
registry_access — Group and module access report for registry exports.

This package turns a delimited registry export into three views of its access
settings. Each module handles one concern:

  table_loader.py       Read the CSV, normalize headers, check required columns
  registry_index.py     Single-pass lookups over the loaded records
  group_extractor.py    Unique user groups, "Default" first
  permission_matrix.py  Module x group presence matrix
  group_explanation.py  Explicitly granted modules per group
  report.py             Runs the three derivations over one table
  html_renderer.py      Self-contained HTML page for a report
  output_manager.py     Timestamped output folders and retention cleanup
  orchestrator.py       Pipeline coordination (Steps 1-5)

Install with: pip install -e . (from the repository root)
"""

from .table_loader import (
    REQUIRED_COLUMNS,
    MissingColumnsError,
    Record,
    Table,
    load_table,
)
from .group_extractor import extract_groups
from .permission_matrix import PermissionMatrix, build_permission_matrix
from .group_explanation import GroupExplanations, build_group_explanations
from .report import AccessReport, build_report
from .html_renderer import render_report, write_html_report
from .output_manager import OutputManager
from .orchestrator import ReportOrchestrator
