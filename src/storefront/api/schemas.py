"""Pydantic request/response schemas for the Storefront API.

JSON keys are camelCase on the wire; Python attributes stay snake_case.
Monetary amounts travel as two-place decimal strings.
"""

from __future__ import annotations

import json
from datetime import datetime
from decimal import Decimal

from pydantic import AliasChoices, BaseModel, ConfigDict, Field, field_validator
from pydantic.alias_generators import to_camel


class CamelModel(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


# --- Identity ---


class RegisterRequest(CamelModel):
    model_config = ConfigDict(
        json_schema_extra={
            "examples": [
                {
                    "email": "jane.doe@example.com",
                    "password": "s3cret-pass",
                    "firstName": "Jane",
                    "lastName": "Doe",
                    "address": "1 Main St",
                    "city": "Springfield",
                    "zipCode": "12345",
                }
            ]
        },
    )

    email: str = Field(..., max_length=254)
    password: str = Field(..., min_length=6, max_length=128)
    first_name: str = Field(..., min_length=1, max_length=100)
    last_name: str = Field(..., min_length=1, max_length=100)
    address: str | None = Field(None, max_length=255)
    city: str | None = Field(None, max_length=100)
    zip_code: str | None = Field(None, max_length=20)


class LoginRequest(CamelModel):
    email: str
    password: str


class UpdateProfileRequest(CamelModel):
    first_name: str | None = Field(None, max_length=100)
    last_name: str | None = Field(None, max_length=100)
    address: str | None = Field(None, max_length=255)
    city: str | None = Field(None, max_length=100)
    zip_code: str | None = Field(None, max_length=20)


class UserResponse(CamelModel):
    """A user as shown to its owner. Never carries the password hash."""

    id: int
    email: str
    first_name: str
    last_name: str
    address: str | None = None
    city: str | None = None
    zip_code: str | None = None
    created_at: datetime | None = None

    @classmethod
    def from_user(cls, user) -> UserResponse:
        return cls(
            id=user.id,
            email=user.email,
            first_name=user.first_name,
            last_name=user.last_name,
            address=user.address,
            city=user.city,
            zip_code=user.zip_code,
            created_at=user.created_at,
        )


# --- Catalogue ---


class ProductResponse(CamelModel):
    id: int
    name: str
    description: str | None = None
    price: str
    original_price: str | None = None
    image: str | None = None
    category_id: int | None = None
    stock: int
    featured: bool
    rating: str | None = None
    review_count: int
    tags: list[str] = []
    created_at: datetime | None = None

    @classmethod
    def from_product(cls, product) -> ProductResponse:
        return cls(
            id=product.id,
            name=product.name,
            description=product.description,
            price=product.price,
            original_price=product.original_price,
            image=product.image_url,
            category_id=product.category_id,
            stock=product.stock,
            featured=product.featured,
            rating=product.rating,
            review_count=product.review_count,
            tags=product.tag_names(),
            created_at=product.created_at,
        )


class CategoryResponse(CamelModel):
    id: int
    name: str
    slug: str

    @classmethod
    def from_category(cls, category) -> CategoryResponse:
        return cls(id=category.id, name=category.name, slug=category.slug)


# --- Cart ---


class AddToCartRequest(CamelModel):
    product_id: int
    quantity: int = Field(1, ge=1)


class UpdateCartItemRequest(CamelModel):
    quantity: int


class CartItemResponse(CamelModel):
    id: int
    user_id: int
    product_id: int
    quantity: int
    created_at: datetime | None = None
    product: ProductResponse | None = None

    @classmethod
    def from_item(cls, item, product=None) -> CartItemResponse:
        return cls(
            id=item.id,
            user_id=item.user_id,
            product_id=item.product_id,
            quantity=item.quantity,
            created_at=item.created_at,
            product=ProductResponse.from_product(product) if product is not None else None,
        )


class CartSummaryResponse(CamelModel):
    item_count: int
    subtotal: str
    shipping: str
    tax: str
    total: str


# --- Payments ---


class PaymentIntentRequest(CamelModel):
    amount: Decimal | None = None
    currency: str = Field("usd", min_length=3, max_length=3)


class PaymentIntentResponse(CamelModel):
    client_secret: str


# --- Orders ---


class ShippingAddressSchema(CamelModel):
    first_name: str = Field(..., min_length=1, max_length=100)
    last_name: str = Field(..., min_length=1, max_length=100)
    address: str = Field(..., min_length=1, max_length=255)
    city: str = Field(..., min_length=1, max_length=100)
    state: str | None = Field(None, max_length=100)
    zip: str = Field(
        ...,
        min_length=1,
        max_length=20,
        validation_alias=AliasChoices("zip", "zipCode", "zip_code"),
    )

    def to_json(self) -> str:
        return json.dumps(
            {
                "first_name": self.first_name,
                "last_name": self.last_name,
                "address": self.address,
                "city": self.city,
                "state": self.state,
                "zip_code": self.zip,
            }
        )

    @classmethod
    def from_value_object(cls, address) -> ShippingAddressSchema:
        return cls(
            first_name=address.first_name,
            last_name=address.last_name,
            address=address.address,
            city=address.city,
            state=address.state,
            zip=address.zip_code,
        )


class CreateOrderRequest(CamelModel):
    model_config = ConfigDict(
        json_schema_extra={
            "examples": [
                {
                    "total": "449.97",
                    "status": "completed",
                    "shippingAddress": {
                        "firstName": "Jane",
                        "lastName": "Doe",
                        "address": "1 Main St",
                        "city": "Springfield",
                        "state": "IL",
                        "zip": "12345",
                    },
                    "paymentIntentId": "pi_123",
                }
            ]
        },
    )

    total: str
    status: str = "pending"
    shipping_address: ShippingAddressSchema
    payment_intent_id: str | None = Field(
        None,
        max_length=255,
        validation_alias=AliasChoices("paymentIntentId", "stripePaymentIntentId", "payment_intent_id"),
    )

    @field_validator("total", mode="before")
    @classmethod
    def total_as_string(cls, value):
        if isinstance(value, int | float | Decimal) and not isinstance(value, bool):
            return str(value)
        return value


class OrderItemResponse(CamelModel):
    id: int
    order_id: int
    product_id: int
    quantity: int
    price: str
    product: ProductResponse

    @classmethod
    def from_line(cls, line) -> OrderItemResponse:
        return cls(
            id=line.item.id,
            order_id=line.item.order_id,
            product_id=line.item.product_id,
            quantity=line.item.quantity,
            price=line.item.price,
            product=ProductResponse.from_product(line.product),
        )


class OrderResponse(CamelModel):
    id: int
    user_id: int
    total: str
    status: str
    shipping_address: ShippingAddressSchema | None = None
    payment_intent_id: str | None = None
    created_at: datetime | None = None
    items: list[OrderItemResponse] = []

    @classmethod
    def from_details(cls, details) -> OrderResponse:
        order = details.order
        return cls(
            id=order.id,
            user_id=order.user_id,
            total=order.total,
            status=order.status,
            shipping_address=(
                ShippingAddressSchema.from_value_object(order.shipping_address) if order.shipping_address else None
            ),
            payment_intent_id=order.payment_intent_id,
            created_at=order.created_at,
            items=[OrderItemResponse.from_line(line) for line in details.lines],
        )


# --- Generic Responses ---


class MessageResponse(BaseModel):
    message: str


class HealthResponse(BaseModel):
    status: str = "ok"
    domain: str
