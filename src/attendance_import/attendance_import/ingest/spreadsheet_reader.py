from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import Optional, Union

import pandas as pd

from ..core.constants import ALLOWED_UPLOAD_EXTENSIONS
from ..core.exceptions import SpreadsheetReadError, ValidationError


@dataclass(frozen=True)
class SpreadsheetData:
    rows: list[dict]
    sheet_name: Optional[str]

    @property
    def record_count(self) -> int:
        return len(self.rows)


def file_extension(filename: str) -> str:
    return Path(filename).suffix.lower().lstrip(".")


def allowed_file(filename: str) -> bool:
    return file_extension(filename) in ALLOWED_UPLOAD_EXTENSIONS


def _clean(df: pd.DataFrame) -> pd.DataFrame:
    df = df.fillna("")
    df.columns = [str(c).strip() for c in df.columns]
    # Skip blank rows.
    blank = (df.astype(str).apply(lambda col: col.str.strip()) == "").all(axis=1)
    return df[~blank]


def read_spreadsheet(path: Union[str, Path], *, extension: Optional[str] = None) -> SpreadsheetData:
    """Read the first sheet of an Excel/CSV export into raw rows.

    Every cell comes back as a string; empty cells are ``""``. The header row
    supplies the field names, which the normalizer maps to canonical keys.
    """

    path = Path(path)
    ext = (extension or file_extension(path.name)).lower().lstrip(".")
    if ext not in ALLOWED_UPLOAD_EXTENSIONS:
        raise ValidationError(f"Unsupported file type: .{ext}")
    if not path.exists():
        raise SpreadsheetReadError(f"File not found: {path}")

    try:
        if ext == "csv":
            sheet_name = None
            df = pd.read_csv(path, dtype=str, keep_default_na=False, skip_blank_lines=True)
        else:
            with pd.ExcelFile(path) as workbook:
                if not workbook.sheet_names:
                    raise SpreadsheetReadError("No sheets found in Excel file")
                sheet_name = str(workbook.sheet_names[0])
                df = workbook.parse(sheet_name, dtype=str)
    except SpreadsheetReadError:
        raise
    except ImportError as exc:
        # Excel engines (openpyxl for xlsx, xlrd for xls) are imported lazily by pandas.
        raise SpreadsheetReadError(f"No reader available for .{ext} files: {exc}") from exc
    except Exception as exc:
        # Engines raise their own error types for corrupt files (e.g. xlrd.XLRDError).
        raise SpreadsheetReadError(f"Could not read spreadsheet: {exc}") from exc

    df = _clean(df)
    if df.empty:
        raise SpreadsheetReadError("No data found in spreadsheet")

    return SpreadsheetData(rows=df.to_dict(orient="records"), sheet_name=sheet_name)
