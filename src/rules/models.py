from pydantic import BaseModel, ConfigDict, Field


class ProjectRules(BaseModel):
    slug: str
    rules_version: str

class ViewRules(BaseModel):
    page_size: int = Field(default=10, gt=0)
    categorical_field: str = "category"
    collection_field: str = "products"

class FormattingRules(BaseModel):
    currency_symbol: str = "$"
    rating_scale: int = Field(default=5, gt=0)
    missing_value: str = "N/A"
    out_of_stock: str = "Out of Stock"
    no_dimensions: str = "No dimensions available"
    no_meta: str = "No meta information"

class SourceRules(BaseModel):
    url: str
    limit: int = Field(default=0, ge=0) # 0 = upstream default
    timeout_seconds: float = Field(default=10.0, gt=0)

    model_config = ConfigDict(extra="forbid")

class CatalogRules(BaseModel):
    project: ProjectRules
    view: ViewRules = Field(default_factory=ViewRules)
    formatting: FormattingRules = Field(default_factory=FormattingRules)
    source: SourceRules
