from datetime import datetime, timezone
from typing import Annotated, Any, Literal, Union
import enum

from pydantic import AfterValidator, AliasChoices, AliasGenerator, BaseModel, ConfigDict, Discriminator, Field, Tag, TypeAdapter, field_validator, model_validator
from pydantic.alias_generators import to_camel


class AuctionCategory(str, enum.Enum):
    SCRAP = "scrap"
    MACHINERY = "machinery"
    MATERIALS = "materials"
    DEMOLITION = "demolition"

class TransactionType(str, enum.Enum):
    NORMAL = "normal"
    URGENT = "urgent"

class AuctionStatus(str, enum.Enum):
    ACTIVE = "active"
    ENDING = "ending"
    ENDED = "ended"

class ApprovalStatus(str, enum.Enum):
    PENDING_APPROVAL = "pending_approval"
    APPROVED = "approved"
    HIDDEN = "hidden"
    REJECTED = "rejected"

class AuctionResultKind(str, enum.Enum):
    SUCCESSFUL = "successful"
    FAILED = "failed"
    CANCELLED = "cancelled"


def as_utc(dt: datetime | None) -> datetime | None:
    """Treat naive timestamps as UTC; convert aware ones to UTC."""
    if dt is None:
        return None
    if dt.tzinfo is None:
        return dt.replace(tzinfo=timezone.utc)
    return dt.astimezone(timezone.utc)

UtcDatetime = Annotated[datetime, AfterValidator(as_utc)]


class Record(BaseModel):
    # Nested JSON written by the mobile client is camelCase, table columns are snake_case
    model_config = ConfigDict(alias_generator=AliasGenerator(validation_alias=to_camel), populate_by_name=True,
                              coerce_numbers_to_str=True, protected_namespaces=())


class AddressInfo(Record):
    postal_code: str = ""
    address_type: str = "road"
    address: str = ""
    detail_address: str = ""
    city: str | None = None
    district: str | None = None

class QuantityInfo(Record):
    quantity: float = 0
    unit: str = "kg"

    @field_validator("quantity", mode="before")
    @classmethod
    def _missing_quantity(cls, v):
        return 0 if v is None else v

class ProductType(Record):
    id: str = ""
    name: str = ""
    category: str = ""
    description: str | None = None

class PhotoRecord(Record):
    id: str
    uri: str = Field("", validation_alias=AliasChoices("uri", "photo_url", "photoUrl"))
    is_representative: bool = False
    type: str = Field("full", validation_alias=AliasChoices("type", "photo_type", "photoType"))

class BidRecord(Record):
    id: str
    auction_id: str | None = None
    user_id: str
    user_name: str | None = None
    amount: int = 0
    price_per_unit: int | None = None
    location: str = ""
    bid_time: UtcDatetime | None = Field(None, validation_alias=AliasChoices("bid_time", "bidTime", "created_at", "createdAt"))
    is_top_bid: bool = False

    @model_validator(mode="before")
    @classmethod
    def _bid_time_from_created_at(cls, data: Any) -> Any:
        # Rows may carry bid_time: null next to a real created_at
        if not isinstance(data, dict):
            return data
        if data.get("bid_time") is None and data.get("bidTime") is None:
            created = data.get("created_at") or data.get("createdAt")
            if created is not None:
                data = {k: v for k, v in data.items() if k not in ("bid_time", "bidTime")}
                data["bid_time"] = created
        return data

    @field_validator("amount", mode="before")
    @classmethod
    def _missing_amount(cls, v):
        return 0 if v is None else v

    @field_validator("is_top_bid", mode="before")
    @classmethod
    def _missing_flag(cls, v):
        return bool(v)

class DemolitionInfo(Record):
    building_purpose: str | None = None
    demolition_method: str | None = None
    structure_type: str | None = None
    demolition_scale: str | None = None
    transaction_type: TransactionType | None = None
    waste_disposal: str | None = None
    demolition_area: float = 0
    area_unit: str = "sqm"
    floor_count: int = 0
    special_notes: str | None = None
    demolition_title: str | None = None

    @field_validator("demolition_area", "floor_count", mode="before")
    @classmethod
    def _missing_number(cls, v):
        return 0 if v is None else v

class MaterialInfo(Record):
    material_type: str = ""
    dimensions: str | None = None
    packaging: str | None = None
    condition: str | None = None


class AuctionBase(Record):
    id: str
    title: str = ""
    description: str = ""
    transaction_type: TransactionType | None = None
    product_type: ProductType = Field(default_factory=ProductType)
    quantity: QuantityInfo = Field(default_factory=QuantityInfo)
    address: AddressInfo = Field(default_factory=AddressInfo, validation_alias=AliasChoices("address", "address_info", "addressInfo"))
    photos: list[PhotoRecord] = Field(default_factory=list, validation_alias=AliasChoices("photos", "auction_photos"))
    bids: list[BidRecord] = Field(default_factory=list, validation_alias=AliasChoices("bids", "auction_bids"))
    starting_price: int = 0
    current_bid: int | None = None
    price_per_unit: int | None = None
    total_bid_amount: int | None = None
    # Snapshot from the backend; read through status.current_status instead
    status: AuctionStatus | None = None
    approval_status: ApprovalStatus | None = None
    end_time: UtcDatetime | None = None
    created_at: UtcDatetime | None = None
    updated_at: UtcDatetime | None = None
    bidders: int = Field(0, validation_alias=AliasChoices("bidders", "bidder_count", "bidderCount"))
    view_count: int = 0
    user_id: str | None = None
    user_name: str | None = None

    @model_validator(mode="before")
    @classmethod
    def _flatten_row(cls, data: Any) -> Any:
        if not isinstance(data, dict):
            return data
        data = dict(data)
        if "quantity" not in data and ("quantity_amount" in data or "quantity_unit" in data):
            data["quantity"] = {
                "quantity": data.pop("quantity_amount", None),
                "unit": data.pop("quantity_unit", None) or "kg",
            }
        for key in ("product_type", "productType", "address_info", "addressInfo", "address", "quantity"):
            if key in data and data[key] is None:
                del data[key]
        for key in ("auction_bids", "auction_photos", "bids", "photos"):
            if key in data and data[key] is None:
                data[key] = []
        return data

    @field_validator("starting_price", "view_count", "bidders", mode="before")
    @classmethod
    def _missing_counter(cls, v):
        return 0 if v is None else v


class ScrapAuction(AuctionBase):
    auction_category: Literal["scrap"]
    special_notes: str | None = None
    sales_environment: dict | None = None

class MachineryAuction(AuctionBase):
    auction_category: Literal["machinery"]
    product_name: str | None = None
    manufacturer: str | None = None
    model_name: str | None = None
    manufacturing_date: UtcDatetime | None = None
    phone_number_disclosure: bool = False
    desired_price: int | None = None
    sales_environment: dict | None = None

    @model_validator(mode="before")
    @classmethod
    def _details_from_product_type(cls, data: Any) -> Any:
        # Older rows keep machinery details inside the product_type JSON
        if not isinstance(data, dict):
            return data
        product = data.get("product_type") or data.get("productType")
        if not isinstance(product, dict):
            return data
        data = dict(data)
        for field, key in (("manufacturer", "manufacturer"), ("model_name", "modelName"),
                           ("manufacturing_date", "manufacturingDate")):
            if not data.get(field) and not data.get(to_camel(field)) and product.get(key):
                data[field] = product[key]
        return data

class MaterialsAuction(AuctionBase):
    auction_category: Literal["materials"]
    material_info: MaterialInfo = Field(default_factory=MaterialInfo)
    desired_price: int | None = None
    sales_environment: dict | None = None

class DemolitionAuction(AuctionBase):
    auction_category: Literal["demolition"]
    demolition_info: DemolitionInfo = Field(default_factory=DemolitionInfo)
    demolition_title: str | None = None
    special_notes: str | None = None

    @field_validator("demolition_info", mode="before")
    @classmethod
    def _missing_info(cls, v):
        return {} if v is None else v


def _category_tag(v: Any) -> str | None:
    if isinstance(v, dict):
        return v.get("auction_category") or v.get("auctionCategory")
    return getattr(v, "auction_category", None)

AuctionRecord = Annotated[
    Union[
        Annotated[ScrapAuction, Tag("scrap")],
        Annotated[MachineryAuction, Tag("machinery")],
        Annotated[MaterialsAuction, Tag("materials")],
        Annotated[DemolitionAuction, Tag("demolition")],
    ],
    Discriminator(_category_tag),
]

_auction_adapter = TypeAdapter(AuctionRecord)

def parse_auction(row: dict) -> AuctionRecord:
    """Build a typed record from a backend row or client-shaped dict."""
    return _auction_adapter.validate_python(row)

def parse_auctions(rows: list[dict]) -> list[AuctionRecord]:
    return [parse_auction(r) for r in rows]


class ResultMetadata(BaseModel):
    reason: str | None = None
    highest_bid: int | None = None
    starting_price: int | None = None

class AuctionResult(BaseModel):
    result: AuctionResultKind
    winning_user_id: str | None = None
    winning_amount: int | None = None
    metadata: ResultMetadata = Field(default_factory=ResultMetadata)
