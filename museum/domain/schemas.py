# museum/domain/schemas.py
from pydantic import BaseModel, Field, ConfigDict, EmailStr, field_validator
from typing import Any, Dict, List
from decimal import Decimal
from datetime import date, datetime

# kolumny email maja String(150)
EMAIL_MAX_LENGTH = 150


def _email_length(value: str) -> str:
    if len(value) > EMAIL_MAX_LENGTH:
        raise ValueError(f"The email may not be greater than {EMAIL_MAX_LENGTH} characters.")
    return value


# =====================================================
# KATALOG
# =====================================================
class ProductImageOut(BaseModel):
    id: int
    file_url: str
    alt_text: str | None = None
    is_primary: bool
    sort_order: int

    model_config = ConfigDict(from_attributes=True)


class ProductOut(BaseModel):
    """Schema dla produktu (response)."""

    id: int
    sku: str
    name: str
    slug: str
    summary: str | None = None
    description: str | None = None
    price: Decimal
    compare_at_price: Decimal | None = None
    inventory_count: int
    is_featured: bool
    status: str
    metadata: Dict[str, Any] | None = Field(default=None, validation_alias="extra_metadata")
    images: List[ProductImageOut] = []
    created_at: datetime | None = None
    updated_at: datetime | None = None

    model_config = ConfigDict(from_attributes=True)


# =====================================================
# KOSZYK
# =====================================================
class EnsureCartIn(BaseModel):
    """Schema dla utworzenia/pobrania koszyka."""

    cart_token: str | None = None


class ItemIn(BaseModel):
    """Schema dla dodawania produktu do koszyka."""

    cart_token: str | None = None
    product_id: int = Field(..., gt=0, description="ID produktu (musi byc > 0)")
    quantity: int = Field(..., ge=1, description="Ilosc produktu (co najmniej 1)")


class ItemUpdateIn(BaseModel):
    """Schema dla zmiany ilosci pozycji."""

    cart_token: str | None = None
    quantity: int = Field(..., ge=1)


class CartItemOut(BaseModel):
    id: int
    product_id: int
    product_name: str | None = None
    sku: str | None = None
    product_slug: str | None = None
    quantity: int
    unit_price: Decimal
    line_total: Decimal


class CartOut(BaseModel):
    """Schema dla koszyka (response)."""

    id: int
    token: str
    currency: str
    items_count: int
    subtotal: Decimal
    items: List[CartItemOut]


# =====================================================
# ZAMOWIENIA
# =====================================================
class CheckoutIn(BaseModel):
    """Dane klienta i adres dostawy podawane przy skladaniu zamowienia."""

    cart_token: str | None = None
    customer_name: str = Field(..., min_length=1, max_length=120)
    email: EmailStr
    phone: str | None = Field(default=None, max_length=30)
    country_code: str | None = Field(default=None, max_length=5)
    address_line1: str = Field(..., min_length=1, max_length=255)
    address_line2: str | None = Field(default=None, max_length=255)
    city: str = Field(..., min_length=1, max_length=120)
    state: str | None = Field(default=None, max_length=120)
    postal_code: str = Field(..., min_length=1, max_length=20)
    notes: List[Any] | None = None

    check_email = field_validator("email")(_email_length)


class OrderItemOut(BaseModel):
    id: int
    product_id: int | None = None
    product_name: str
    sku: str | None = None
    quantity: int
    unit_price: Decimal
    line_total: Decimal

    model_config = ConfigDict(from_attributes=True)


class OrderOut(BaseModel):
    """Schema dla zamowienia (response)."""

    id: int
    order_number: str
    status: str
    payment_status: str
    currency: str
    subtotal: Decimal
    tax_total: Decimal
    shipping_total: Decimal
    grand_total: Decimal
    customer_name: str
    email: str
    phone: str | None = None
    country_code: str | None = None
    address_line1: str
    address_line2: str | None = None
    city: str
    state: str | None = None
    postal_code: str
    notes: List[Any] | None = None
    items: List[OrderItemOut] = []
    created_at: datetime

    model_config = ConfigDict(from_attributes=True)


# =====================================================
# WYCIECZKI
# =====================================================
class TourRegistrationIn(BaseModel):
    """Zgloszenie grupy na zwiedzanie."""

    contact_name: str = Field(..., min_length=1, max_length=120)
    email: EmailStr
    phone: str | None = Field(default=None, max_length=30)
    country_code: str | None = Field(default=None, max_length=5)
    organisation: str | None = Field(default=None, max_length=150)
    group_type: str = Field(..., min_length=1, max_length=50)
    preferred_date: date
    preferred_slot: str = Field(..., min_length=1, max_length=50)
    adults_count: int = Field(default=0, ge=0)
    students_count: int = Field(default=0, ge=0)
    needs_guided_tour: bool = False
    notes: str | None = None

    check_email = field_validator("email")(_email_length)

    @field_validator("country_code")
    @classmethod
    def strip_plus(cls, value: str | None) -> str | None:
        if value:
            return value.lstrip("+")
        return value

    @property
    def attendees(self) -> int:
        return self.adults_count + self.students_count


class TourRegistrationOut(BaseModel):
    id: int
    contact_name: str
    email: str
    phone: str | None = None
    country_code: str | None = None
    organisation: str | None = None
    group_type: str
    preferred_date: date
    preferred_slot: str
    adults_count: int
    students_count: int
    needs_guided_tour: bool
    notes: str | None = None
    created_at: datetime

    model_config = ConfigDict(from_attributes=True)


class TourRegistrationCreated(BaseModel):
    message: str
    data: TourRegistrationOut


class AvailabilityOut(BaseModel):
    capacity: int | None
    booked: int
    remaining: int | None


# =====================================================
# ADMIN
# =====================================================
class AnalyticsCards(BaseModel):
    total_revenue: Decimal
    total_orders: int
    pending_orders: int
    unique_customers: int
    active_carts: int
    total_tour_registrations: int
    tours_today: int
    upcoming_tours: int


class TopProductOut(BaseModel):
    product_id: int | None
    product_name: str
    total_quantity: int
    total_sales: Decimal


class RecentOrderOut(BaseModel):
    order_number: str
    customer_name: str
    email: str
    status: str
    payment_status: str
    grand_total: Decimal
    created_at: datetime


class TourDateTotalOut(BaseModel):
    date: date
    registrations: int
    visitors: int


class AnalyticsOut(BaseModel):
    cards: AnalyticsCards
    top_products: List[TopProductOut]
    recent_orders: List[RecentOrderOut]
    upcoming_tour_dates: List[TourDateTotalOut]


class SlotRegistrationOut(BaseModel):
    id: int
    contact_name: str
    organisation: str | None = None
    email: str
    phone: str | None = None
    country_code: str | None = None
    visitors_count: int
    needs_guided_tour: bool
    notes: str | None = None
    created_at: datetime

    model_config = ConfigDict(from_attributes=True)


class SlotReportOut(BaseModel):
    slot: str
    capacity: int | None
    booked_visitors: int
    remaining_capacity: int | None
    registrations: List[SlotRegistrationOut]


class DayReportOut(BaseModel):
    date: date
    total_visitors: int
    slots: List[SlotReportOut]


class TourReportMeta(BaseModel):
    total_days: int
    total_registrations: int
    total_visitors: int


class TourReportOut(BaseModel):
    data: List[DayReportOut]
    meta: TourReportMeta


# =====================================================
# O MUZEUM
# =====================================================
class AboutOut(BaseModel):
    title: str
    paragraph_one: str | None = None
    paragraph_two: str | None = None
    paragraph_three: str | None = None
    image_url: str | None = None

    model_config = ConfigDict(from_attributes=True)


class AboutEnvelope(BaseModel):
    data: AboutOut | None
    message: str | None = None
