from datetime import datetime
from decimal import ROUND_HALF_UP, Decimal
from zoneinfo import ZoneInfo

from pydantic import BaseModel

from metalbid.core.config import settings
from metalbid.models import ApprovalStatus, AuctionCategory, AuctionStatus, TransactionType

UNKNOWN = "미상"
UNKNOWN_STATUS = "알 수 없음"

def format_number(value: int | float | None, grouped: bool = True) -> str:
    """Integral floats print without a decimal part."""
    value = value or 0
    if isinstance(value, float) and value.is_integer():
        value = int(value)
    return f"{value:,}" if grouped else str(value)

def _round_half_up(value: Decimal, places: int) -> Decimal:
    return value.quantize(Decimal(1).scaleb(-places), rounding=ROUND_HALF_UP)

def display_time(dt: datetime) -> datetime:
    return dt.astimezone(ZoneInfo(settings.display_timezone))

# Prices are whole currency units

def format_price(amount: int | None) -> str:
    return f"{settings.currency_symbol}{format_number(amount)}"

def format_price_per_unit(amount: int | None, unit: str = "kg") -> str:
    return f"{format_price(amount)}/{unit}"

def format_compact_price(amount: int | None) -> str:
    amount = amount or 0
    if amount >= 100_000_000:
        return f"{_round_half_up(Decimal(amount) / 100_000_000, 1)}억원"
    if amount >= 10_000:
        return f"{_round_half_up(Decimal(amount) / 10_000, 0)}만원"
    return f"{amount:,}원"

def format_view_count(count: int | None) -> str:
    count = count or 0
    if count >= 1000:
        return f"{_round_half_up(Decimal(count) / 1000, 1)}K"
    return str(count)

def format_bidders_count(count: int | None) -> str:
    return f"{count or 0}명"

def format_registration_date(dt: datetime | None) -> str:
    if dt is None:
        return f"등록 {UNKNOWN}"
    return display_time(dt).strftime("등록 %Y/%m/%d")


PROVINCES = {
    "경상남도": "경남",
    "경상북도": "경북",
    "전라남도": "전남",
    "전라북도": "전북",
    "충청남도": "충남",
    "충청북도": "충북",
    "강원도": "강원",
    "제주도": "제주",
    "제주특별자치도": "제주",
}
METROPOLITAN_CITIES = {
    "서울특별시": "서울시",
    "부산광역시": "부산시",
    "대구광역시": "대구시",
    "인천광역시": "인천시",
    "광주광역시": "광주시",
    "대전광역시": "대전시",
    "울산광역시": "울산시",
    "세종특별자치시": "세종시",
}

def format_address_for_list(address: str | None) -> str:
    """Shorten a full address down to its 시/구/군 level for list rows.

    "경상남도 창원시 의창구 ..." -> "경남 창원시 의창구",
    "서울특별시 강남구 역삼동" -> "서울시 강남구".
    """
    if not address or not isinstance(address, str):
        return ""
    parts = address.split()
    if not parts:
        return ""
    first = parts[0]
    if first in METROPOLITAN_CITIES:
        result = METROPOLITAN_CITIES[first]
        if len(parts) > 1 and parts[1].endswith("구"):
            result += f" {parts[1]}"
        return result
    result = PROVINCES.get(first, first)
    for i, part in enumerate(parts[1:], start=1):
        if part.endswith(("구", "군")):
            result += f" {part}"
            break
        if part.endswith("시"):
            result += f" {part}"
            if i + 1 < len(parts) and parts[i + 1].endswith(("구", "군")):
                result += f" {parts[i + 1]}"
            break
    return result


# Labels

STATUS_TEXT = {
    AuctionStatus.ACTIVE: "진행중",
    AuctionStatus.ENDING: "마감임박",
    AuctionStatus.ENDED: "종료됨",
}
STATUS_COLORS = {
    AuctionStatus.ACTIVE: "rgba(34, 197, 94, 0.9)",
    AuctionStatus.ENDING: "rgba(245, 158, 11, 0.9)",
    AuctionStatus.ENDED: "rgba(239, 68, 68, 0.9)",
}
TRANSACTION_TYPE_TEXT = {
    TransactionType.NORMAL: "일반 경매",
    TransactionType.URGENT: "긴급 경매",
}
CATEGORY_TEXT = {
    AuctionCategory.SCRAP: "고철 경매",
    AuctionCategory.MACHINERY: "중고 기계",
    AuctionCategory.MATERIALS: "중고 자재",
    AuctionCategory.DEMOLITION: "철거 경매",
}

def status_text(status: AuctionStatus | str | None) -> str:
    return STATUS_TEXT.get(status, UNKNOWN_STATUS)

def status_color(status: AuctionStatus | str | None) -> str:
    return STATUS_COLORS.get(status, "rgba(107, 114, 128, 0.9)")

def transaction_type_text(transaction_type: TransactionType | str | None) -> str:
    return TRANSACTION_TYPE_TEXT.get(transaction_type, UNKNOWN_STATUS)

def category_text(category: AuctionCategory | str | None) -> str:
    return CATEGORY_TEXT.get(category, UNKNOWN_STATUS)


class ApprovalStatusConfig(BaseModel):
    text: str
    color: str
    background_color: str
    icon: str

APPROVAL_STATUS_CONFIG = {
    ApprovalStatus.PENDING_APPROVAL: ApprovalStatusConfig(
        text="승인 대기", color="#F59E0B", background_color="rgba(245, 158, 11, 0.1)", icon="⏳"),
    ApprovalStatus.APPROVED: ApprovalStatusConfig(
        text="승인됨", color="#10B981", background_color="rgba(16, 185, 129, 0.1)", icon="✅"),
    ApprovalStatus.HIDDEN: ApprovalStatusConfig(
        text="히든", color="#6B7280", background_color="rgba(107, 114, 128, 0.1)", icon="🔒"),
    ApprovalStatus.REJECTED: ApprovalStatusConfig(
        text="거부됨", color="#EF4444", background_color="rgba(239, 68, 68, 0.1)", icon="❌"),
}
UNKNOWN_APPROVAL = ApprovalStatusConfig(
    text=UNKNOWN_STATUS, color="#6B7280", background_color="rgba(107, 114, 128, 0.1)", icon="❓")

def approval_status_config(status: ApprovalStatus | str | None) -> ApprovalStatusConfig:
    return APPROVAL_STATUS_CONFIG.get(status, UNKNOWN_APPROVAL)

def should_show_approval_status(status: ApprovalStatus | str | None) -> bool:
    # approved is the default state and carries no badge
    return status != ApprovalStatus.APPROVED
