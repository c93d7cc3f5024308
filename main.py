import argparse
import logging
import sys
from datetime import date

from pydantic import ValidationError

from restock.forecast import build_stockout_calendar
from restock.logger import setup_logger
from restock.pipelines.reorder import ReorderPipeline
from restock.schemas import FilterStatus, ItemQuery, SortOption
from restock.store import ItemFileError, ItemStore
from restock.utils import format_date, format_date_short

logger = logging.getLogger("restock")


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Raw-material stock tracking and reorder planning.")
    subparsers = parser.add_subparsers(dest="command")

    report = subparsers.add_parser("report", help="Evaluate every item and write the reorder report.")
    report.add_argument("--search", default="", help="Case-insensitive text to match in item names.")
    report.add_argument("--status", default=FilterStatus.ALL.value, choices=[s.value for s in FilterStatus])
    report.add_argument("--sort", default=SortOption.DEFAULT.value, choices=[s.value for s in SortOption])
    report.add_argument("--today", type=date.fromisoformat, default=None, help="Evaluation date (YYYY-MM-DD).")
    report.add_argument("--test-mode", action="store_true", help="Skip the webhook post.")

    calendar = subparsers.add_parser("calendar", help="List the days items are predicted to run out.")
    calendar.add_argument("--today", type=date.fromisoformat, default=None, help="Evaluation date (YYYY-MM-DD).")

    for name, help_text in (("add", "Add a new item."), ("update", "Replace an item's fields.")):
        sub = subparsers.add_parser(name, help=help_text)
        if name == "update":
            sub.add_argument("id")
        sub.add_argument("name")
        sub.add_argument("unit")
        sub.add_argument("current_stock", type=float)
        sub.add_argument("requirement_per_recipe", type=float)
        sub.add_argument("recipes_today", type=int)
        sub.add_argument("lead_time", type=int)
        sub.add_argument("--whatsapp", dest="supplier_whatsapp", default=None)

    delete = subparsers.add_parser("delete", help="Delete an item.")
    delete.add_argument("id")
    return parser


def _item_payload(args: argparse.Namespace) -> dict:
    return {
        "name": args.name,
        "unit": args.unit,
        "current_stock": args.current_stock,
        "requirement_per_recipe": args.requirement_per_recipe,
        "recipes_today": args.recipes_today,
        "lead_time": args.lead_time,
        "supplier_whatsapp": args.supplier_whatsapp,
    }


def show_calendar(store: ItemStore, today: date | None = None) -> int:
    """Logs each predicted stock-out day with the items that run out on it."""
    today = today or date.today()
    days = build_stockout_calendar(store.get_all_items(), today)

    logger.info(f"📅 STOCK-OUT CALENDAR (from {format_date_short(today)})")
    if not days:
        logger.info("No item is predicted to run out.")
    for day in days:
        logger.info(format_date_short(day.day))
        for entry in day.items:
            logger.info(f"  [{entry.status.value:<7}] {entry.name}")
    return 0


def _dispatch(args: argparse.Namespace, store: ItemStore) -> int:
    if args.command == "calendar":
        return show_calendar(store, args.today)

    if args.command in ("add", "update"):
        try:
            if args.command == "add":
                item = store.create_item(_item_payload(args))
            else:
                item = store.update_item(args.id, _item_payload(args))
        except ValidationError as e:
            logger.error("❌ Invalid item data!")
            logger.error(e)
            return 1
        if item is None:
            logger.error(f"❌ Item {args.id} not found.")
            return 1
        logger.info(f"✅ Saved '{item.name}' with id {item.id}.")
        return 0

    if args.command == "delete":
        if not store.delete_item(args.id):
            logger.error(f"❌ Item {args.id} not found.")
            return 1
        return 0

    # Default command: report
    store.seed_if_empty()
    query = ItemQuery(
        search_text=getattr(args, "search", ""),
        status_filter=getattr(args, "status", FilterStatus.ALL),
        sort_option=getattr(args, "sort", SortOption.DEFAULT),
    )
    pipeline = ReorderPipeline(
        store=store,
        query=query,
        today=getattr(args, "today", None),
        test_mode=getattr(args, "test_mode", False),
    )
    rows = pipeline.run()
    if rows is None:
        return 1

    if pipeline.result is None or pipeline.result.is_empty:
        logger.info("The inventory is empty.")
    elif pipeline.result.has_no_matches:
        logger.info("No items match the search or status filter.")
    for row in rows:
        logger.info(
            f"[{row.status.value:<7}] {row.name}: {row.recommendation} "
            f"(runs out {format_date(row.predicted_empty_date)})"
        )
    return 0


def run_process(argv: list[str] | None = None) -> int:
    """Main entry point. Returns the process exit code."""
    args = build_parser().parse_args(argv)
    store = ItemStore()
    try:
        return _dispatch(args, store)
    except ItemFileError as e:
        logger.error(f"❌ {e}. Fix or remove the file; nothing was written.")
        return 1
    except ValidationError as e:
        logger.error("❌ Stored item data is invalid!")
        logger.error(e)
        return 1


if __name__ == "__main__":
    setup_logger("restock")
    sys.exit(run_process())
