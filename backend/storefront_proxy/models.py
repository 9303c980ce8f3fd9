from typing import Any, Dict, List, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator


def unwrap_connection(value: Any) -> Any:
    # Storefront connections arrive as {"nodes": [...]} or {"edges": [{"node": ...}]}.
    if isinstance(value, dict):
        if "nodes" in value:
            return [node for node in value["nodes"] or [] if node]
        if "edges" in value:
            return [edge.get("node") for edge in value["edges"] or [] if edge.get("node")]
    return value if value is not None else []


class CatalogModel(BaseModel):
    model_config = ConfigDict(populate_by_name=True)


# --- catalog shapes ---
# Parsed straight from Storefront GraphQL payloads; aliases are the upstream field names.
class Money(CatalogModel):
    amount: str
    currency_code: str = Field(alias="currencyCode")


class OptionDef(CatalogModel):
    name: str
    values: List[str] = Field(default_factory=list)  # informational only


class SelectedOption(CatalogModel):
    name: Optional[str] = None
    value: Optional[str] = None


class Variant(CatalogModel):
    id: Optional[str] = None
    title: Optional[str] = None
    available_for_sale: bool = Field(default=False, alias="availableForSale")
    selected_options: List[SelectedOption] = Field(default_factory=list, alias="selectedOptions")
    price: Optional[Money] = None

    def option_map(self) -> Dict[str, str]:
        """Option name -> value, skipping entries with a missing name or value."""
        return {
            opt.name: opt.value
            for opt in self.selected_options
            if opt.name is not None and opt.value is not None
        }


class Product(CatalogModel):
    title: Optional[str] = None
    handle: str
    options: List[OptionDef] = Field(default_factory=list)
    variants: List[Variant] = Field(default_factory=list)

    @field_validator("variants", mode="before")
    @classmethod
    def _variants_from_connection(cls, value: Any) -> Any:
        return unwrap_connection(value)

    @property
    def option_names(self) -> List[str]:
        return [opt.name for opt in self.options]


# --- API responses ---
# Serialized by alias, so clients see camelCase keys.
class ProductRef(CatalogModel):
    title: Optional[str] = None
    handle: str


class ProductSummary(CatalogModel):
    title: Optional[str] = None
    handle: str
    image: Optional[str] = None
    price_from: Optional[Money] = Field(default=None, alias="priceFrom")

    @classmethod
    def from_node(cls, node: Dict[str, Any]) -> "ProductSummary":
        image = node.get("featuredImage") or {}
        price_range = node.get("priceRange") or {}
        return cls(
            title=node.get("title"),
            handle=node["handle"],
            image=image.get("url"),
            price_from=price_range.get("minVariantPrice"),
        )


class SearchResponse(CatalogModel):
    products: List[ProductSummary] = Field(default_factory=list)


class OptionsResponse(CatalogModel):
    product: ProductRef
    has_color: bool = Field(alias="hasColor")
    has_size: bool = Field(alias="hasSize")
    color_option_name: Optional[str] = Field(default=None, alias="colorOptionName")
    size_option_name: Optional[str] = Field(default=None, alias="sizeOptionName")
    available_colors: List[str] = Field(default_factory=list, alias="availableColors")
    available_sizes: List[str] = Field(default_factory=list, alias="availableSizes")
    filtered_by_color: Optional[str] = Field(default=None, alias="filteredByColor")


class RequestedOptions(CatalogModel):
    size: str = ""
    color: str = ""


class VariantResponse(CatalogModel):
    product: ProductRef
    requested: RequestedOptions
    variant: Optional[Variant] = None


class BestSellerResponse(CatalogModel):
    product: Optional[ProductSummary] = None
