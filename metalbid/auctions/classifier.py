"""Category dispatch over the four auction variants.

Every read of a variant-specific field goes through this module so that adding
a category only needs handling here.
"""

import structlog

from metalbid.auctions.formatting import UNKNOWN, format_number
from metalbid.models import (
    AuctionCategory,
    DemolitionAuction,
    MachineryAuction,
    MaterialsAuction,
    ScrapAuction,
    TransactionType,
)

logger = structlog.get_logger()

PYEONG_PER_SQM = 0.3025

MATERIAL_CONDITIONS = {
    "new": "신품",
    "like-new": "신품급",
    "used": "중고",
    "damaged": "손상",
}
BUILDING_PURPOSES = {
    "residential": "주거용 건축물",
    "commercial": "상업용 건축물",
    "industrial": "산업용 건축물",
    "public": "공공시설 철거",
}
DEMOLITION_METHODS = {
    "full": "전면 철거",
    "partial": "부분 철거",
    "interior": "내부 철거",
}
STRUCTURE_TYPES = {
    "masonry": "조적조",
    "reinforced-concrete": "철근콘크리트",
    "steel-frame": "철골조",
    "composite": "복합구조",
}
DEMOLITION_SCALES = {
    "small": "소규모",
    "medium": "중규모",
    "large": "대규모",
}
WASTE_DISPOSAL = {
    "self": "직접 처리",
    "company": "업체 처리",
}


def _unhandled(record) -> TypeError:
    return TypeError(f"Unhandled auction variant: {type(record).__name__}")

def category_of(record) -> AuctionCategory:
    if isinstance(record, ScrapAuction):
        return AuctionCategory.SCRAP
    if isinstance(record, MachineryAuction):
        return AuctionCategory.MACHINERY
    if isinstance(record, MaterialsAuction):
        return AuctionCategory.MATERIALS
    if isinstance(record, DemolitionAuction):
        return AuctionCategory.DEMOLITION
    raise _unhandled(record)

def transaction_type_of(record) -> TransactionType | None:
    """Demolition auctions keep their transaction type inside demolition_info."""
    if isinstance(record, DemolitionAuction):
        return record.demolition_info.transaction_type
    if isinstance(record, (ScrapAuction, MachineryAuction, MaterialsAuction)):
        return record.transaction_type
    raise _unhandled(record)

def display_title(record) -> str:
    if isinstance(record, DemolitionAuction):
        return record.demolition_info.demolition_title or record.demolition_title or record.title
    if isinstance(record, MachineryAuction):
        return record.product_name or record.title
    if isinstance(record, (ScrapAuction, MaterialsAuction)):
        return record.title or "고철 경매"
    raise _unhandled(record)

def metal_type(record) -> str:
    if isinstance(record, DemolitionAuction):
        return "철거"
    return record.product_type.name or "고철"

def quantity_text(record) -> str:
    """Weight, unit count or demolition area for list rows."""
    if isinstance(record, DemolitionAuction):
        info = record.demolition_info
        if info.demolition_area > 0:
            unit = "㎡" if info.area_unit == "sqm" else "평"
            return f"{format_number(info.demolition_area)} {unit}"
        return UNKNOWN
    if record.quantity.quantity:
        unit = "대" if isinstance(record, MachineryAuction) else (record.quantity.unit or "kg")
        return f"{format_number(record.quantity.quantity, grouped=False)}{unit}"
    return "1건"


def _label(table: dict[str, str], value: str | None, field: str) -> str:
    if value is None:
        return UNKNOWN
    label = table.get(value)
    if label is None:
        logger.warning("Unknown variant value", field=field, value=value)
        return UNKNOWN
    return label

# Machinery

def machinery_product_name(record: MachineryAuction) -> str:
    return record.product_name or record.title

def machinery_manufacturer(record: MachineryAuction) -> str:
    return record.manufacturer or UNKNOWN

def machinery_model_name(record: MachineryAuction) -> str:
    return record.model_name or UNKNOWN

def has_phone_number_disclosure(record: MachineryAuction) -> bool:
    return record.phone_number_disclosure

# Scrap

def scrap_special_notes(record: ScrapAuction) -> str:
    return record.special_notes or ""

# Materials

def material_type(record: MaterialsAuction) -> str:
    return record.material_info.material_type

def material_dimensions(record: MaterialsAuction) -> str:
    return record.material_info.dimensions or UNKNOWN

def material_packaging(record: MaterialsAuction) -> str:
    return record.material_info.packaging or UNKNOWN

def material_condition(record: MaterialsAuction) -> str:
    return _label(MATERIAL_CONDITIONS, record.material_info.condition, "condition")

# Demolition

def demolition_building_purpose(record: DemolitionAuction) -> str:
    return _label(BUILDING_PURPOSES, record.demolition_info.building_purpose, "building_purpose")

def demolition_method(record: DemolitionAuction) -> str:
    return _label(DEMOLITION_METHODS, record.demolition_info.demolition_method, "demolition_method")

def demolition_structure_type(record: DemolitionAuction) -> str:
    return _label(STRUCTURE_TYPES, record.demolition_info.structure_type, "structure_type")

def demolition_scale(record: DemolitionAuction) -> str:
    return _label(DEMOLITION_SCALES, record.demolition_info.demolition_scale, "demolition_scale")

def demolition_waste_disposal(record: DemolitionAuction) -> str:
    return _label(WASTE_DISPOSAL, record.demolition_info.waste_disposal, "waste_disposal")

def demolition_area(record: DemolitionAuction) -> str:
    """Area in its own unit with the conversion to the other in parentheses."""
    area = record.demolition_info.demolition_area
    if record.demolition_info.area_unit == "sqm":
        return f"{format_number(area, grouped=False)}m² ({area * PYEONG_PER_SQM:.2f}평)"
    return f"{format_number(area, grouped=False)}평 ({area / PYEONG_PER_SQM:.2f}m²)"

def demolition_special_notes(record: DemolitionAuction) -> str:
    return record.special_notes or record.demolition_info.special_notes or "없음"

def demolition_title(record: DemolitionAuction) -> str:
    return record.demolition_title or record.demolition_info.demolition_title or "철거"
