from __future__ import annotations

import argparse
import importlib
import json
import logging
import sys
from pathlib import Path

REPO_ROOT = Path(__file__).resolve().parents[1]
if str(REPO_ROOT) not in sys.path:
    sys.path.insert(0, str(REPO_ROOT))

from config import get_settings_module

from src.attendance_import.attendance_import.common.string_utils import safe_json_object
from src.attendance_import.attendance_import.container import build_container
from src.attendance_import.attendance_import.ingest.settings import ImportSettings
from src.attendance_import.attendance_import.ingest.spreadsheet_reader import read_spreadsheet


def main() -> None:
    parser = argparse.ArgumentParser(description="Import attendance rows from a spreadsheet export.")
    parser.add_argument("path", help=".xlsx, .xls or .csv file")
    parser.add_argument("--dry-run", action="store_true", help="classify only, do not store valid records")
    args = parser.parse_args()

    logging.basicConfig(level=logging.INFO, format="%(asctime)s %(levelname)s [%(name)s] %(message)s")

    settings = importlib.import_module(get_settings_module())
    container = build_container(db_config=dict(settings.DB_CONFIG), settings=ImportSettings.from_settings(settings))
    try:
        sheet = read_spreadsheet(args.path)
        summary = container.import_service.run_import(sheet.rows)
        stored = None if args.dry_run else container.import_service.store(summary)
    finally:
        container.worker_pool.shutdown()

    report = {
        "sheet": sheet.sheet_name,
        "stats": summary.stats.to_dict(),
        "failedBatches": [f.to_dict() for f in summary.failed_batches],
        "errors": [e.to_dict() for e in summary.errors],
        "stored": stored.to_dict() if stored else None,
    }
    print(json.dumps(safe_json_object(report), indent=2, ensure_ascii=False))


if __name__ == "__main__":
    main()
