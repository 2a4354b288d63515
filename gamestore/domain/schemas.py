# gamestore/domain/schemas.py
import re
from datetime import datetime
from decimal import Decimal
from typing import List

from pydantic import (
    AliasChoices,
    AliasGenerator,
    BaseModel,
    ConfigDict,
    Field,
    field_validator,
    model_validator,
)
from pydantic.alias_generators import to_camel

EMAIL_PATTERN = re.compile(r"^[^\s@]+@[^\s@]+\.[^\s@]+$")


class OutModel(BaseModel):
    """Baza dla odpowiedzi: czytanie z modeli ORM, klucze JSON w camelCase."""

    model_config = ConfigDict(
        from_attributes=True,
        alias_generator=AliasGenerator(serialization_alias=to_camel),
    )


# ---------- catalog ----------

class ProductOut(OutModel):
    """Schema dla produktu (response)."""

    id: int
    title: str
    price: Decimal
    platforms: List[str] = []
    image: str | None = None
    popularity: int = 0
    subscription: bool = False


class ProductSuggestionOut(OutModel):
    """Schema dla podpowiedzi wyszukiwarki (typeahead)."""

    id: int
    title: str
    price: Decimal
    image: str | None = None


class GameDetailsOut(OutModel):
    """Szczegoly gry z zewnetrznego API metadanych."""

    id: int
    name: str | None = None
    description: str | None = None
    genres: List[str] = []
    platforms: List[str] = []
    rating: float | None = None
    image: str | None = None


class PopularGameOut(OutModel):
    id: int
    name: str | None = None
    image: str = ""
    rating: float = 0
    released: str | None = None


class ExternalGameOut(OutModel):
    id: int
    title: str | None = None
    price: Decimal
    platforms: List[str] = []
    image: str = ""
    slug: str | None = None


class ExternalSearchOut(OutModel):
    count: int = 0
    results: List[ExternalGameOut] = []


# ---------- auth / account ----------

class RegisterIn(BaseModel):
    """Schema dla rejestracji uzytkownika."""

    username: str = Field(..., min_length=1, max_length=50, description="Login (unikalny)")
    email: str = Field(..., min_length=3, max_length=255, description="Email (unikalny)")
    password: str = Field(..., min_length=6, max_length=128, description="Haslo, min. 6 znakow")
    display_name: str | None = Field(
        None,
        max_length=100,
        validation_alias=AliasChoices("displayName", "display_name"),
    )

    @field_validator("username")
    @classmethod
    def _strip_username(cls, v: str) -> str:
        v = v.strip()
        if not v:
            raise ValueError("Username must not be blank")
        return v

    @field_validator("email")
    @classmethod
    def _check_email(cls, v: str) -> str:
        v = v.strip()
        if not EMAIL_PATTERN.match(v):
            raise ValueError("Invalid email address")
        return v


class LoginIn(BaseModel):
    """Login przez username albo email."""

    identifier: str = Field(
        ...,
        min_length=1,
        validation_alias=AliasChoices("identifier", "email", "username"),
    )
    password: str = Field(..., min_length=1)

    @field_validator("identifier")
    @classmethod
    def _strip_identifier(cls, v: str) -> str:
        v = v.strip()
        if not v:
            raise ValueError("Identifier must not be blank")
        return v


class UserOut(OutModel):
    """Schema dla uzytkownika (response), bez hasla."""

    id: int
    username: str
    email: str
    display_name: str | None = None
    created_at: datetime | None = None


class UserEnvelope(OutModel):
    success: bool = True
    message: str | None = None
    user: UserOut


class LoginOut(UserEnvelope):
    token: str
    expires_at: datetime


class PurchaseOut(OutModel):
    """Pojedyncza pozycja z historii zakupow."""

    order_id: int
    product_id: int
    product: str
    image: str | None = None
    price: Decimal
    quantity: int
    created_at: datetime


class AccountOut(OutModel):
    user: UserOut
    purchases: List[PurchaseOut] = []


class PurchaseHistoryOut(OutModel):
    purchases: List[PurchaseOut] = []


# ---------- checkout ----------

class CartLineIn(BaseModel):
    """Pozycja koszyka wyslana przez klienta."""

    id: int = Field(..., gt=0, validation_alias=AliasChoices("id", "productId", "product_id"))
    quantity: int = Field(1, ge=1, validation_alias=AliasChoices("quantity", "qty"))
    price: Decimal | None = Field(None, ge=0, description="Cena z momentu dodania do koszyka")
    title: str | None = None


class CheckoutIn(BaseModel):
    """Schema dla checkoutu: koszyk albo pojedynczy produkt (legacy)."""

    cart: List[CartLineIn] | None = None
    product_id: int | None = Field(
        None,
        gt=0,
        validation_alias=AliasChoices("productId", "gameId", "product_id"),
    )
    payment_method: str = Field(
        ...,
        validation_alias=AliasChoices("paymentMethod", "payment_method"),
    )
    coupon: str | None = None

    @field_validator("payment_method")
    @classmethod
    def _check_payment(cls, v: str) -> str:
        v = v.strip()
        if not v:
            raise ValueError("Payment method is required")
        return v

    @model_validator(mode="after")
    def _cart_or_product(self):
        if not self.cart and self.product_id is None:
            raise ValueError("Either a non-empty cart or a productId is required")
        return self


class OrderItemOut(OutModel):
    product_id: int
    quantity: int
    price: Decimal


class OrderOut(OutModel):
    """Schema dla zamowienia (response)."""

    id: int
    protocol: str
    total: Decimal
    created_at: datetime
    items: List[OrderItemOut] = []


class CheckoutOut(OutModel):
    success: bool = True
    message: str
    protocol: str
    order_id: int
    total: Decimal


# ---------- support ----------

class SupportTicketIn(BaseModel):
    """Schema dla zgloszenia do supportu."""

    name: str = Field(..., min_length=1, max_length=100)
    email: str = Field(..., min_length=3, max_length=255)
    subject: str | None = Field(None, max_length=200)
    message: str = Field(..., min_length=1, max_length=5000)

    @field_validator("name", "message")
    @classmethod
    def _not_blank(cls, v: str) -> str:
        if not v.strip():
            raise ValueError("Field must not be blank")
        return v.strip()

    @field_validator("email")
    @classmethod
    def _check_email(cls, v: str) -> str:
        v = v.strip()
        if not EMAIL_PATTERN.match(v):
            raise ValueError("Invalid email address")
        return v


class SupportTicketOut(BaseModel):
    status: str = "ok"
    protocol: str
    message: str
