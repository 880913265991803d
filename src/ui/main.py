import logging
import os
from pathlib import Path

import flet as ft

from src.adapters.product_source import HttpProductSource, JsonFileProductSource
from src.components.catalog_view import RecordSourcePort, run_engine
from src.rules.loader import load_rules
from src.ui.state import AppState
from src.ui.views.product_table import ProductTableView

# Logging setup
logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s"
)
logger = logging.getLogger(__name__)

# Configuration from environment (with sensible defaults for local dev)
RULES_PATH = os.environ.get("CATALOG_RULES_PATH", "rules.yaml")
SNAPSHOT_PATH = os.environ.get("CATALOG_SNAPSHOT_PATH")


def main(page: ft.Page) -> None:
    page.title = "Product Catalog"

    # 1. Load Rules
    rules_path = Path(RULES_PATH)
    if not rules_path.exists():
        error_msg = f"Error: {RULES_PATH} not found. Please create it."
        logger.error(error_msg)
        page.add(ft.Text(error_msg, color="red", size=20))
        return

    rules = load_rules(rules_path)
    logger.info("Rules loaded successfully")

    # 2. Source
    source: RecordSourcePort
    if SNAPSHOT_PATH:
        source = JsonFileProductSource(Path(SNAPSHOT_PATH))
        logger.info(f"Snapshot path: {SNAPSHOT_PATH}")
    else:
        source = HttpProductSource.from_rules(rules.source)
        logger.info(f"Source URL: {rules.source.url}")

    # 3. Engine + view
    view = ProductTableView(
        engine=run_engine(rules),
        source=source,
        app_state=AppState(),
        collection_field=rules.view.collection_field,
    )
    page.add(view)
    view.reload()

    if view.app_state.load_error:
        logger.error("Product load failed: %s", view.app_state.load_error)


if __name__ == "__main__":
    ft.app(target=main)
