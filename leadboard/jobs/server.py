"""HTTP entrypoint that serves the dashboard dataset and metrics."""

from __future__ import annotations

import logging
import os
from typing import Any, Dict, Optional

from flask import Flask, Response, jsonify, request

from leadboard.core.config import get_settings
from leadboard.core.store import DatasetStore
from leadboard.etl.csv_reader import CsvIngestError, decode_csv_bytes
from leadboard.etl.export import to_csv

# ---------- Logging ----------
logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s %(levelname)s %(name)s - %(message)s",
)
logger = logging.getLogger(__name__)

# ---------- App & store ----------
app = Flask(__name__)
_store: Optional[DatasetStore] = None

DEFAULT_PAGE_SIZE = 20


def get_store() -> DatasetStore:
    """Return the shared dataset, bootstrapping from the default data on first use."""
    global _store
    if _store is None:
        _store = DatasetStore()
        _store.load_default()
    return _store


def _filter_args() -> Dict[str, Any]:
    """Read type/min_score/q from the query string; raises ValueError on bad input."""
    min_score_raw = request.args.get("min_score", "0")
    try:
        min_score = int(min_score_raw)
    except ValueError as exc:
        raise ValueError("min_score must be an integer") from exc
    return {
        "kind": request.args.get("type", "all"),
        "min_score": min_score,
        "search": request.args.get("q", ""),
    }


def _positive_int(name: str, default: int) -> int:
    raw = request.args.get(name)
    if raw is None:
        return default
    try:
        value = int(raw)
    except ValueError as exc:
        raise ValueError(f"{name} must be an integer") from exc
    if value <= 0:
        raise ValueError(f"{name} must be positive")
    return value


# ---------- Routes ----------


@app.get("/")
def root() -> Any:
    """Simple root to avoid 404 on GET /"""
    return "ok", 200


@app.get("/healthz")
def healthcheck() -> Any:
    return jsonify({"status": "ok", "companies": len(get_store())}), 200


@app.post("/upload")
def upload_csv() -> Any:
    """
    Replace the dataset with an uploaded CSV.
    Accepts a multipart ``file`` field or a raw text/csv body.
    """
    upload = request.files.get("file")
    if upload is not None:
        if not (upload.filename or "").lower().endswith(".csv"):
            return jsonify({"error": "file must be a .csv"}), 400
        data = upload.read()
    elif request.mimetype in ("text/csv", "text/plain"):
        data = request.get_data()
    else:
        return jsonify({"error": "a CSV file is required"}), 400

    try:
        text = decode_csv_bytes(data)
    except CsvIngestError as exc:
        return jsonify({"error": str(exc)}), 400

    companies = get_store().load_text(text)
    if not companies:
        logger.warning("Upload produced no companies; dataset is now empty")
    return jsonify({"data": {"count": len(companies)}}), 200


@app.get("/companies")
def list_companies() -> Any:
    try:
        filters = _filter_args()
        page = _positive_int("page", 1)
        page_size = _positive_int("page_size", DEFAULT_PAGE_SIZE)
        companies = get_store().filter(**filters)
    except ValueError as exc:
        return jsonify({"error": str(exc)}), 400

    start = (page - 1) * page_size
    items = [company.to_dict() for company in companies[start : start + page_size]]
    return jsonify({"data": items, "total": len(companies)}), 200


@app.get("/companies/<company_id>")
def get_company(company_id: str) -> Any:
    company = get_store().get(company_id)
    if company is None:
        return jsonify({"error": "company not found"}), 404
    return jsonify({"data": company.to_dict()}), 200


@app.get("/metrics")
def get_metrics() -> Any:
    try:
        metrics = get_store().metrics(**_filter_args())
    except ValueError as exc:
        return jsonify({"error": str(exc)}), 400
    return jsonify({"data": metrics.to_dict()}), 200


@app.get("/export")
def export_csv() -> Any:
    try:
        companies = get_store().filter(**_filter_args())
    except ValueError as exc:
        return jsonify({"error": str(exc)}), 400
    if not companies:
        return jsonify({"error": "no companies to export"}), 404

    logger.info("Exporting %d companies", len(companies))
    return Response(
        to_csv(companies),
        mimetype="text/csv",
        headers={"Content-Disposition": "attachment; filename=lead_export.csv"},
    )


def main() -> None:
    port = get_settings().server_port
    logger.info("[BOOT] PORT=%s", os.getenv("PORT"))
    logger.info("[BOOT] Binding on 0.0.0.0:%d", port)
    app.run(host="0.0.0.0", port=port)


if __name__ == "__main__":
    main()
