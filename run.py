#!/usr/bin/env python3
"""
Registry Access Report — Entry Point.

This is the main script that users run to turn a registry CSV export into the
group / module access report. It reads configuration from a .env file, runs
the report pipeline, and saves the HTML report and JSON summary.

The pipeline (managed by ReportOrchestrator) performs 5 steps:
  1. Load the CSV and check the required columns
  2. Extract the unique user groups ("Default" first)
  3. Build the module x group permission matrix
  4. List the explicitly granted modules per group
  5. Save the output into a timestamped folder

Usage:
    python run.py                          # Report on CSV_INPUT_PATH from .env
    python run.py --csv ./data/export.csv  # Use a specific CSV file
    python run.py --delimiter ";"          # Semicolon-separated export
    python run.py --no-json                # HTML report only
    python run.py --debug                  # Verbose output
    python run.py --version                # Show version
"""

import sys
import argparse
import logging
from pathlib import Path

from registry_access import ReportOrchestrator

# Version lives in the repo-root VERSION file (e.g., "0.1.0").
VERSION_FILE = Path(__file__).resolve().parent / "VERSION"
VERSION = VERSION_FILE.read_text().strip() if VERSION_FILE.exists() else "unknown"


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="Registry Access Report - Group and module access settings from a registry CSV"
    )
    parser.add_argument("--env", "-e", default="./.env", help="Path to .env file")
    parser.add_argument("--csv", "-c", help="Override CSV input path")
    parser.add_argument("--delimiter", "-d", help="Override CSV field delimiter")
    parser.add_argument("--output-dir", "-o", help="Override output directory")
    parser.add_argument("--no-html", action="store_true", help="Skip the HTML report")
    parser.add_argument("--no-json", action="store_true", help="Skip the JSON summary")
    parser.add_argument("--debug", action="store_true", help="Enable debug output")
    parser.add_argument("--version", "-v", action="store_true", help="Show version and exit")
    return parser


def main(argv=None):
    """Parse CLI arguments and run the report pipeline."""
    args = build_parser().parse_args(argv)

    if args.version:
        print(f"registry-access-report {VERSION}")
        sys.exit(0)

    orchestrator = ReportOrchestrator(env_file=args.env)

    # Apply CLI overrides on top of .env values
    if args.csv:
        orchestrator.csv_input_path = args.csv
    if args.delimiter:
        orchestrator.delimiter = args.delimiter
    if args.output_dir:
        orchestrator.set_output_dir(args.output_dir)
    if args.no_html:
        orchestrator.save_html = False
    if args.no_json:
        orchestrator.save_json = False
    if args.debug:
        orchestrator.debug = True

    # --debug or DEBUG=true in .env
    if orchestrator.debug:
        logging.basicConfig(
            level=logging.DEBUG,
            format='%(name)s - %(levelname)s - %(message)s'
        )

    print(f"\n{'='*60}")
    print(f"REGISTRY ACCESS REPORT v{VERSION}")
    print("="*60)
    print(f"CSV: {orchestrator.csv_input_path}")
    print(f"Output: {orchestrator.output_dir}")

    if not orchestrator.validate_config():
        sys.exit(1)

    # Cleanup old output folders based on retention policy
    if orchestrator.output_manager.retention_days > 0:
        deleted = orchestrator.output_manager.cleanup_old_folders(orchestrator.debug)
        if deleted:
            print(f"Cleaned up {len(deleted)} old output folder(s)")

    results = orchestrator.run()
    orchestrator.print_summary(results)

    if not results.get("success"):
        sys.exit(1)


if __name__ == "__main__":
    main()
