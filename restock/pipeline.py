import logging
from abc import ABC, abstractmethod
from datetime import date
from typing import Any, Optional
import pandas as pd

from restock import data_handler
from restock.schemas import StockStatus

logger = logging.getLogger(__name__)


class DataPipeline(ABC):
    """
    Abstract base class for report pipelines.
    Follows an Extract -> Transform -> Load (ETL) pattern.
    """

    def __init__(self, report_type: str, today: Optional[date] = None, test_mode: bool = False):
        self.report_type = report_type
        # One evaluation date for the whole run.
        self.today = today or date.today()
        self.test_mode = test_mode
        self.filename_base = f"{report_type}_report"
        # Number of reported items per stock status
        self.status_summary = {status.value: 0 for status in StockStatus}

    def run(self) -> list[Any] | None:
        """
        Orchestrates the pipeline execution. Returns the loaded rows, or None on failure.
        """
        logger.info(f"🚀 STEP: {self.report_type.upper()} REPORT ({self.today.isoformat()})")
        logger.info("-" * 30)

        # --- 1. EXTRACT ---
        raw_data = self.extract()
        if raw_data is None:
            logger.error(f"❌ Extraction failed for {self.report_type}.")
            return None
        if raw_data.empty:
            logger.warning(f"⚠️ No data extracted for {self.report_type}. Sending empty report.")
            self.load([])
            return []

        # --- 2. TRANSFORM ---
        validated_data = self.transform(raw_data)
        if validated_data is None:
            logger.error(f"❌ Transformation failed for {self.report_type}.")
            return None

        # --- 3. LOAD ---
        self.load(validated_data)

        logger.info(f"✅ {self.report_type.capitalize()} Pipeline Finished.\n")
        logger.info("=" * 60)
        return validated_data

    @abstractmethod
    def extract(self) -> pd.DataFrame | None:
        """
        Responsible for reading the source records and returning them as a raw DataFrame.
        """
        pass

    @abstractmethod
    def transform(self, df: pd.DataFrame) -> list[Any] | None:
        """
        Responsible for validation and evaluation.
        Returns a list of Pydantic models, or None if validation fails.
        Should also populate self.status_summary.
        """
        pass

    def load(self, validated_data: list[Any]):
        """
        Saves data to disk and posts to webhook.
        """
        # 1. Print Status Summary
        logger.info("\n--- Final Status Summary ---")
        for status, count in self.status_summary.items():
            logger.info(f"{status}: {count}")

        # 2. Save Outputs (CSV/JSON)
        if validated_data:
            data_handler.save_outputs(
                validated_data, self.filename_base, today=self.today
            )
        else:
            logger.warning("No data to save to disk.")

        # 3. Post to Webhook
        if not self.test_mode:
            data_handler.post_to_webhook(
                validated_data=validated_data,
                status_summary=self.status_summary,
                report_date=self.today,
            )
        else:
            logger.info("🧪 Test Mode: Skipping webhook post.")
