import os
from functools import lru_cache
from pathlib import Path

from fastapi import Depends

from src.adapters.product_source import HttpProductSource, JsonFileProductSource
from src.components.catalog_view import RecordSourcePort
from src.rules.loader import load_rules
from src.rules.models import CatalogRules


# --- Settings ---
class Settings:
    def __init__(self) -> None:
        self.base_dir = Path(os.getcwd())
        self.rules_path = Path(
            os.environ.get("CATALOG_RULES_PATH", str(self.base_dir / "rules.yaml"))
        )
        self.source_url = os.environ.get("CATALOG_SOURCE_URL")
        snapshot = os.environ.get("CATALOG_SNAPSHOT_PATH")
        self.snapshot_path = Path(snapshot) if snapshot else None


@lru_cache
def get_settings() -> Settings:
    return Settings()


# --- Rules ---
@lru_cache
def get_rules() -> CatalogRules:
    settings = get_settings()
    rules = load_rules(settings.rules_path)
    if settings.source_url:
        source = rules.source.model_copy(update={"url": settings.source_url})
        rules = rules.model_copy(update={"source": source})
    return rules


# --- Sources ---
def get_product_source(
    settings: Settings = Depends(get_settings),
    rules: CatalogRules = Depends(get_rules),
) -> RecordSourcePort:
    if settings.snapshot_path is not None:
        return JsonFileProductSource(settings.snapshot_path)
    return HttpProductSource.from_rules(rules.source)
