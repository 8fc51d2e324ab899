from __future__ import annotations

import logging
from datetime import datetime
from pathlib import Path

from flask import Flask, current_app, jsonify, request
from werkzeug.utils import secure_filename

from ..common.string_utils import safe_json_object
from ..core.exceptions import DomainError, ValidationError
from .spreadsheet_reader import allowed_file, file_extension, read_spreadsheet

logger = logging.getLogger(__name__)


def _save_upload(file_storage) -> Path:
    upload_folder = Path(current_app.config.get("UPLOAD_FOLDER", "uploads"))
    upload_folder.mkdir(parents=True, exist_ok=True)

    filename = secure_filename(file_storage.filename or "")
    stem, suffix = Path(filename).stem, Path(filename).suffix
    timestamp = datetime.now().strftime("%Y%m%d_%H%M%S_%f")
    path = upload_folder / f"{stem}_{timestamp}{suffix}"
    file_storage.save(path)
    return path


def _remove_upload(path: Path) -> None:
    try:
        path.unlink(missing_ok=True)
    except OSError as e:
        logger.warning("Could not delete uploaded file %s: %s", path, e)


def _rows_from_request() -> tuple[list, dict]:
    upload = request.files.get("file")
    if upload is not None and upload.filename:
        if not allowed_file(upload.filename):
            raise ValidationError("Chỉ hỗ trợ file .xlsx, .xls hoặc .csv")
        path = _save_upload(upload)
        try:
            sheet = read_spreadsheet(path, extension=file_extension(upload.filename))
        finally:
            _remove_upload(path)
        return sheet.rows, {"fileName": upload.filename, "sheetName": sheet.sheet_name}

    body = request.get_json(silent=True) or {}
    rows = body.get("rows")
    if not isinstance(rows, list):
        raise ValidationError("Request must contain a file upload or a JSON 'rows' list")
    return rows, {"fileName": None, "sheetName": None}


def register(app: Flask, container) -> None:
    @app.route("/api/imports/attendance", methods=["POST"], endpoint="import_attendance")
    def import_attendance():
        try:
            rows, source = _rows_from_request()
            store = request.args.get("store", "1") != "0"

            service = container.import_service
            summary = service.run_import(rows)
            stored = service.store(summary) if store else None
        except DomainError as e:
            logger.info("Attendance import rejected: %s", e)
            return jsonify({"success": False, "error": str(e)}), 400

        payload = summary.to_dict()
        payload["source"] = source
        payload["stored"] = stored.to_dict() if stored else None
        return jsonify(safe_json_object(payload))

    @app.route("/api/imports/workers/stats", methods=["GET"], endpoint="import_worker_stats")
    def import_worker_stats():
        return jsonify(container.worker_pool.get_stats())

    @app.route("/api/imports/workers/health", methods=["GET"], endpoint="import_worker_health")
    def import_worker_health():
        health = container.worker_pool.is_healthy()
        return jsonify(health), (200 if health["healthy"] else 503)
