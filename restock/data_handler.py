import json
import logging
from datetime import date
from pathlib import Path
from typing import Optional

import pandas as pd
import requests

from . import settings, utils
from .schemas import ReorderReportRow

logger = logging.getLogger(__name__)


def save_outputs(
    validated_data: list[ReorderReportRow],
    filename_base: str = settings.REPORT_FILENAME_BASE,
    today: Optional[date] = None,
) -> dict[str, Path]:
    """Saves the report to CSV and conditionally to JSON, with dated filenames."""
    settings.OUTPUT_DIR.mkdir(parents=True, exist_ok=True)
    date_suffix = utils.get_date_suffix_for_filename(today)

    csv_path = settings.OUTPUT_DIR / f"{filename_base}_{date_suffix}.csv"
    json_path = settings.OUTPUT_DIR / f"{filename_base}_{date_suffix}.json"
    saved = {}

    columns = [info.alias for info in ReorderReportRow.model_fields.values()]
    df = pd.DataFrame(
        [row.model_dump(mode="json", by_alias=True) for row in validated_data],
        columns=columns,
    )
    df.to_csv(csv_path, index=False)
    saved["csv"] = csv_path
    logger.info(f"✅ Reorder report saved to: {csv_path}")

    if settings.SAVE_JSON_OUTPUT:
        with open(json_path, "w", encoding="utf-8") as f:
            json_data = [row.model_dump(mode="json", by_alias=True) for row in validated_data]
            json.dump(json_data, f, indent=2, ensure_ascii=False)
        saved["json"] = json_path
        logger.info(f"✅ JSON output saved to: {json_path}")
    else:
        logger.info("Skipping JSON file save as per configuration.")

    return saved


def post_to_webhook(
    validated_data: list[ReorderReportRow],
    status_summary: dict[str, int],
    report_date: Optional[date] = None,
) -> bool:
    """
    Posts the report rows and the per-status summary to the webhook.
    Failures are logged, not raised; returns whether the post went through.
    """
    if not settings.WEBHOOK_URL:
        logger.warning("⚠️ WEBHOOK_URL not set. Skipping webhook post.")
        return False

    logger.info(f"🚀 Posting report and summary to webhook: {settings.WEBHOOK_URL}")

    payload = {
        "reportDate": report_date.isoformat() if report_date else None,
        "reportData": [row.model_dump(mode="json", by_alias=True) for row in validated_data],
        "statusSummary": status_summary,
    }

    try:
        response = requests.post(
            settings.WEBHOOK_URL, json=payload, timeout=settings.WEBHOOK_TIMEOUT
        )
        response.raise_for_status()
        logger.info("✅ Report and summary successfully posted to webhook.")
        return True
    except requests.exceptions.RequestException as e:
        logger.error(f"❌ Error posting to webhook: {e}")
        return False
