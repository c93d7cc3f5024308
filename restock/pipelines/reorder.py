import logging
import math
from datetime import date
from typing import Optional

import pandas as pd
from pydantic import ValidationError

from restock import messaging, settings
from restock.collection import filter_and_sort_items
from restock.pipeline import DataPipeline
from restock.schemas import CollectionResult, EvaluatedItem, ItemQuery, ReorderReportRow
from restock.store import ItemFileError, ItemStore, rows_to_items

logger = logging.getLogger(__name__)


def to_report_row(evaluated: EvaluatedItem) -> ReorderReportRow:
    item, evaluation = evaluated.item, evaluated.evaluation
    duration = evaluation.stock_duration_days
    return ReorderReportRow(
        id=item.id,
        name=item.name,
        unit=item.unit,
        current_stock=item.current_stock,
        daily_requirement=evaluation.daily_requirement,
        stock_duration_days=duration if math.isfinite(duration) else None,
        lead_time=item.lead_time,
        status=evaluation.status,
        recommendation=evaluation.recommendation,
        predicted_empty_date=evaluation.predicted_empty_date,
        whatsapp_link=messaging.build_whatsapp_link(item),
    )


class ReorderPipeline(DataPipeline):
    def __init__(
        self,
        store: Optional[ItemStore] = None,
        query: Optional[ItemQuery] = None,
        today: Optional[date] = None,
        test_mode: bool = False,
    ):
        super().__init__("reorder", today=today, test_mode=test_mode)
        self.store = store or ItemStore()
        self.query = query or ItemQuery()
        self.filename_base = settings.REPORT_FILENAME_BASE
        self.result: Optional[CollectionResult] = None

    def extract(self) -> pd.DataFrame | None:
        logger.info(f"--- Reading items from {self.store.path.name} ---")
        try:
            df = self.store.load_frame()
        except ItemFileError as e:
            logger.error(f"❌ {e}. Leaving the file untouched.")
            return None
        logger.info(f"  > Found {len(df)} items.")
        return df

    def transform(self, df: pd.DataFrame) -> list[ReorderReportRow] | None:
        try:
            logger.info("Validating items against schema...")
            items = rows_to_items(df)
            logger.info("✅ Item validation successful.")
        except ValidationError as e:
            logger.error("❌ Item validation failed!")
            logger.error(e)
            return None

        logger.info(
            f"Evaluating stock (search='{self.query.search_text}', "
            f"status={self.query.status_filter.value}, sort={self.query.sort_option.value})"
        )
        self.result = filter_and_sort_items(items, self.query, today=self.today)

        if self.result.has_no_matches:
            logger.warning("No items match the current search and status filter.")

        rows = []
        for evaluated in self.result.items:
            self.status_summary[evaluated.status.value] += 1
            rows.append(to_report_row(evaluated))
        return rows
