"""
Output Manager — Per-run report folders and retention cleanup.

Every report run writes into its own folder under the base output directory,
named YYYYMMDD_HHMM_{report_name} (e.g., "20261019_0930_Registry_Access").

Inside each folder, the orchestrator saves:
  - access_report.html:  The rendered group / module report
  - access_summary.json: Groups, matrix and explanations as JSON
  - run_results.json:    Run metadata, counts, errors

Folders older than OUTPUT_RETENTION_DAYS are removed at the start of a run,
before the new folder is created. retention_days=0 keeps every folder.
"""

import re
import shutil
from datetime import datetime, timedelta
from pathlib import Path
from typing import List, Optional, Union

RUN_FOLDER_PATTERN = re.compile(r"^(\d{8}_\d{4})_.+$")
RUN_TIMESTAMP_FORMAT = "%Y%m%d_%H%M"


def safe_folder_label(label: str) -> str:
    """Replace anything but letters, digits, '-' and '_' with '_'."""
    return "".join(c if c.isalnum() or c in "-_" else "_" for c in label) or "report"


class OutputManager:
    """Creates the folder for the current run and prunes expired ones.

    Attributes:
        base_dir: Root output directory (default: ./output).
        report_name: Used in folder naming.
        retention_days: Delete run folders older than this many days (0 = keep forever).
        current_dir: Folder of the current run (None until created).
    """

    def __init__(self, base_dir: Union[str, Path], report_name: str, retention_days: int = 30,
                 run_time: Optional[datetime] = None):
        self.base_dir = Path(base_dir)
        self.report_name = report_name
        self.retention_days = retention_days
        self.current_dir: Optional[Path] = None
        self.run_time = run_time or datetime.now()

    def create_run_dir(self) -> Path:
        """Create (if needed) and return this run's output folder."""
        folder = f"{self.run_time.strftime(RUN_TIMESTAMP_FORMAT)}_{safe_folder_label(self.report_name)}"
        self.current_dir = self.base_dir / folder
        self.current_dir.mkdir(parents=True, exist_ok=True)
        return self.current_dir

    def cleanup_old_folders(self, debug: bool = False) -> List[str]:
        """Remove run folders whose timestamp is older than retention_days.

        Only folders matching the YYYYMMDD_HHMM_* naming are considered; other
        entries in the base directory are left alone.

        Returns:
            Names of the deleted folders.
        """
        if self.retention_days <= 0 or not self.base_dir.is_dir():
            return []

        cutoff = datetime.now() - timedelta(days=self.retention_days)
        deleted = []

        for entry in sorted(self.base_dir.iterdir()):
            match = RUN_FOLDER_PATTERN.match(entry.name)
            if not entry.is_dir() or not match:
                continue

            try:
                stamped = datetime.strptime(match.group(1), RUN_TIMESTAMP_FORMAT)
                if stamped >= cutoff:
                    continue
                shutil.rmtree(entry)
            except (ValueError, OSError) as e:
                if debug:
                    print(f"  Warning: Could not process folder {entry.name}: {e}")
                continue

            deleted.append(entry.name)
            if debug:
                print(f"  Deleted old output folder: {entry.name}")

        return deleted

    def get_output_path(self, filename: str) -> Path:
        """Path of a file inside the current run folder.

        Raises:
            RuntimeError: If create_run_dir() has not been called yet.
        """
        if self.current_dir is None:
            raise RuntimeError("Output directory not created. Call create_run_dir() first.")
        return self.current_dir / filename
