"""
Report Orchestrator — Pipeline coordination for the registry access report.

This module ties the loader, the three derivations and the renderers together
into a sequential 5-step workflow:

  Step 1: LOAD TABLE
      Reads the registry export with load_table(). Header names are lowered
      and checked against the required columns; a missing column stops the run
      with MissingColumnsError before anything is derived.

  Steps 2-4 come from a single build_report() call over the loaded table;
  each step prints its part of the resulting AccessReport.

  Step 2: EXTRACT GROUPS
      extract_groups() lists the unique user groups, "Default" first.

  Step 3: BUILD PERMISSION MATRIX
      build_permission_matrix() marks, per module and group, whether an
      explicit "Table" setting exists.

  Step 4: BUILD GROUP EXPLANATIONS
      build_group_explanations() lists the explicitly granted modules per group
      and flags the groups that fall back to Default.

  Step 5: SAVE OUTPUT
      Writes the HTML report and the JSON summary into a timestamped output
      folder.

Every run starts from a fresh table; results of earlier runs are never reused,
and a failed load leaves earlier output folders untouched.

Configuration:
    All settings are loaded from environment variables (typically via .env file).
    See registry_access/settings.py for defaults.

Typical usage:
    orchestrator = ReportOrchestrator(env_file="./.env")
    if orchestrator.validate_config():
        results = orchestrator.run()
        orchestrator.print_summary(results)
"""

import json
import os
import traceback
from datetime import datetime, timezone
from pathlib import Path
from typing import Any, Dict

from dotenv import load_dotenv

from .html_renderer import write_html_report
from .output_manager import OutputManager
from .report import AccessReport, build_report
from .settings import DEFAULT_SETTINGS
from .table_loader import load_table

HTML_FILENAME = "access_report.html"
JSON_FILENAME = "access_summary.json"
RESULTS_FILENAME = "run_results.json"


def _env_flag(name: str) -> bool:
    return os.getenv(name, str(DEFAULT_SETTINGS[name])).lower() == "true"


def _banner(title: str):
    print(f"\n{'='*60}")
    print(title)
    print("="*60)


class ReportOrchestrator:
    """Orchestrates the registry access report pipeline.

    Attributes:
        csv_input_path: Registry export to read.
        delimiter: Field delimiter of the export.
        report_name: Label used in output folder naming and the page title.
        save_html: Whether to write the HTML report.
        save_json: Whether to write the JSON summary.
        debug: Whether to enable verbose output.
        output_manager: Handles timestamped output folders and retention cleanup.
    """

    def __init__(self, env_file: str = "./.env"):
        """Initialize the orchestrator by loading configuration from environment.

        Args:
            env_file: Path to a .env file. If the file exists, it is loaded via
                      python-dotenv. Otherwise, falls back to system environment.
        """
        env_path = Path(env_file)
        if env_path.exists():
            load_dotenv(env_path)
            print(f"Loaded configuration from: {env_file}")
        else:
            print(f"Warning: {env_file} not found, using defaults/environment")

        self.csv_input_path = os.getenv("CSV_INPUT_PATH", DEFAULT_SETTINGS["CSV_INPUT_PATH"])
        self.delimiter = os.getenv("CSV_DELIMITER", DEFAULT_SETTINGS["CSV_DELIMITER"])
        self.report_name = os.getenv("REPORT_NAME", DEFAULT_SETTINGS["REPORT_NAME"])

        self.output_dir = os.getenv("OUTPUT_DIR", DEFAULT_SETTINGS["OUTPUT_DIR"])
        self.retention_days_raw = os.getenv(
            "OUTPUT_RETENTION_DAYS", str(DEFAULT_SETTINGS["OUTPUT_RETENTION_DAYS"])
        )

        self.save_html = _env_flag("SAVE_HTML")
        self.save_json = _env_flag("SAVE_JSON")
        self.debug = _env_flag("DEBUG")

        self.output_manager = OutputManager(self.output_dir, self.report_name, self.retention_days)

    @property
    def retention_days(self) -> int:
        try:
            return int(self.retention_days_raw)
        except ValueError:
            return int(DEFAULT_SETTINGS["OUTPUT_RETENTION_DAYS"])

    def set_output_dir(self, output_dir: str):
        """Point output at another base directory (CLI override)."""
        self.output_dir = output_dir
        self.output_manager = OutputManager(output_dir, self.report_name, self.retention_days)

    def validate_config(self) -> bool:
        """Validate that the configuration can drive a run.

        Checks:
            - CSV_INPUT_PATH is set and points to an existing file
            - CSV_DELIMITER is a single character
            - OUTPUT_RETENTION_DAYS is an integer
            - at least one of SAVE_HTML / SAVE_JSON is enabled

        Returns:
            True if the configuration is usable, False otherwise.
            Prints specific error messages for each problem.
        """
        errors = []
        if not self.csv_input_path:
            errors.append("CSV_INPUT_PATH is required")
        elif not Path(self.csv_input_path).is_file():
            errors.append(f"CSV_INPUT_PATH not found: {self.csv_input_path}")

        if len(self.delimiter) != 1:
            errors.append(f"CSV_DELIMITER must be a single character, got {self.delimiter!r}")

        try:
            int(self.retention_days_raw)
        except ValueError:
            errors.append(f"OUTPUT_RETENTION_DAYS must be an integer, got {self.retention_days_raw!r}")

        if not self.save_html and not self.save_json:
            errors.append("Nothing to write: enable SAVE_HTML or SAVE_JSON")

        if errors:
            print("\nConfiguration Errors:")
            for err in errors:
                print(f"  - {err}")
            return False
        return True

    def run(self) -> Dict[str, Any]:
        """Execute the full 5-step report pipeline.

        Returns:
            A dict containing:
                - started_at/completed_at: ISO timestamps
                - source: The CSV path that was read
                - success: True if all steps completed without error
                - summary: Row, group, module and fallback counts
                - html_path/json_path: Paths of written files (when enabled)
                - error: Error message (if success=False)
        """
        results = {
            "started_at": datetime.now(timezone.utc).isoformat(),
            "source": str(self.csv_input_path),
            "config": {
                "delimiter": self.delimiter,
                "save_html": self.save_html,
                "save_json": self.save_json,
            },
            "success": False,
        }

        try:
            _banner("STEP 1: LOAD TABLE")
            table = load_table(self.csv_input_path, delimiter=self.delimiter)
            print(
                f"  Loaded CSV file: {table.source} with {table.row_count} rows "
                f"and {table.column_count} columns."
            )

            # Steps 2-4 run together; the banners below report each result
            report = build_report(table)
            groups = report.groups
            modules = report.modules
            fallback = report.explanations.fallback_groups

            _banner("STEP 2: EXTRACT GROUPS")
            for group in groups:
                print(f"    {group}")
            print(f"  Total User Groups: {len(groups)}")

            _banner("STEP 3: BUILD PERMISSION MATRIX")
            explicit = sum(1 for present in report.matrix.cells.values() if present)
            print(f"  Modules: {len(modules)}")
            print(f"  Explicit settings: {explicit} of {len(report.matrix)} cells")

            _banner("STEP 4: BUILD GROUP EXPLANATIONS")
            print(f"  Groups with explicit module access: {len(groups) - len(fallback)}")
            print(f"  Groups falling back to Default: {len(fallback)}")
            if self.debug:
                for group, granted in report.explanations.items():
                    print(f"    {group}: {', '.join(granted) if granted else '(see Default)'}")

            _banner("STEP 5: SAVE OUTPUT")
            self.output_manager.create_run_dir()
            results.update(self._save_report(report))

            results["success"] = True
            results["summary"] = {
                "rows": table.row_count,
                "columns": table.column_count,
                "groups": len(groups),
                "modules": len(modules),
                "fallback_groups": len(fallback),
            }

        except Exception as e:
            results["error"] = str(e)
            print(f"\n  ERROR: {e}")
            if self.debug:
                traceback.print_exc()

        results["completed_at"] = datetime.now(timezone.utc).isoformat()

        # Run metadata sits next to the report files
        if self.output_manager.current_dir:
            results_path = self.output_manager.get_output_path(RESULTS_FILENAME)
            with open(results_path, "w") as f:
                json.dump(results, f, indent=2, default=str)
            print(f"\n  Results saved to: {results_path}")

        return results

    def _save_report(self, report: AccessReport) -> Dict[str, str]:
        paths = {}
        if self.save_html:
            html_path = write_html_report(
                report,
                self.output_manager.get_output_path(HTML_FILENAME),
                title=self.report_name.replace("_", " "),
            )
            paths["html_path"] = str(html_path)
            print(f"  Saved HTML report: {html_path}")

        if self.save_json:
            json_path = self.output_manager.get_output_path(JSON_FILENAME)
            with open(json_path, "w") as f:
                json.dump(report.to_dict(), f, indent=2)
            paths["json_path"] = str(json_path)
            print(f"  Saved JSON summary: {json_path}")

        return paths

    def print_summary(self, results: Dict):
        """Print a human-readable execution summary.

        Args:
            results: The dict returned by run().
        """
        _banner("REPORT COMPLETE")
        print(f"Status: {'SUCCESS' if results.get('success') else 'FAILED'}")
        print(f"Source: {results.get('source', 'N/A')}")

        summary = results.get("summary", {})
        if summary:
            print(f"Rows: {summary.get('rows', 0)}")
            print(f"User Groups: {summary.get('groups', 0)}")
            print(f"Modules: {summary.get('modules', 0)}")
            print(f"Groups falling back to Default: {summary.get('fallback_groups', 0)}")

        if results.get("html_path"):
            print(f"HTML report: {results['html_path']}")
        if results.get("json_path"):
            print(f"JSON summary: {results['json_path']}")
        if results.get("error"):
            print(f"Error: {results['error']}")
