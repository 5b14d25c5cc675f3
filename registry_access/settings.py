"""
Settings — Default configuration values for the registry access report.

This module provides the DEFAULT_SETTINGS dict that the orchestrator uses as
fallback values when environment variables are not set. The actual configuration
is loaded from .env at runtime; these defaults let the report run against a CSV
in the working directory with no further setup.

Configuration precedence (highest to lowest):
  1. CLI flags (--csv, --delimiter, --output-dir, --no-html, --no-json, --debug)
  2. Environment variables (from .env file)
  3. DEFAULT_SETTINGS (this file)

Settings reference:
  CSV_INPUT_PATH          Registry export to read (default: ./data/registry.csv)
  CSV_DELIMITER           Field delimiter of the export (default: ",")
  REPORT_NAME             Label used in output folder naming
  OUTPUT_DIR              Where to write report output (default: ./output)
  OUTPUT_RETENTION_DAYS   How many days to keep old output folders (0 = keep forever)
  SAVE_HTML               Whether to write the HTML report (default: True)
  SAVE_JSON               Whether to write the JSON summary (default: True)
  DEBUG                   Verbose output and debug logging (default: False)
"""

REPORT_NAME = "Registry_Access"

# Group rows tagged with this name are listed first and are the fallback
# reference for groups without explicit module grants.
DEFAULT_GROUP = "Default"

DEFAULT_SETTINGS = {
    "CSV_INPUT_PATH": "./data/registry.csv",
    "CSV_DELIMITER": ",",
    "REPORT_NAME": REPORT_NAME,
    "OUTPUT_DIR": "./output",
    "OUTPUT_RETENTION_DAYS": 30,
    "SAVE_HTML": True,
    "SAVE_JSON": True,
    "DEBUG": False,
}
