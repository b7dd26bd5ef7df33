"""FastAPI routes for the Storefront — auth, catalogue, cart, payments and orders."""

from fastapi import APIRouter, Depends, HTTPException, Request
from protean.exceptions import ValidationError
from protean.utils.globals import current_domain
from starlette.concurrency import run_in_threadpool

from storefront.api.auth import current_user_id, log_in, log_out
from storefront.api.schemas import (
    AddToCartRequest,
    CartItemResponse,
    CartSummaryResponse,
    CategoryResponse,
    CreateOrderRequest,
    LoginRequest,
    MessageResponse,
    OrderResponse,
    PaymentIntentRequest,
    PaymentIntentResponse,
    ProductResponse,
    RegisterRequest,
    UpdateCartItemRequest,
    UpdateProfileRequest,
    UserResponse,
)
from storefront.cart.cart_item import CartItem
from storefront.cart.items import AddToCart, ClearCart, RemoveFromCart, UpdateCartItem
from storefront.cart.lines import cart_lines
from storefront.cart.quote import quote
from storefront.catalogue.category import Category
from storefront.catalogue.product import Product
from storefront.identity.authentication import authenticate
from storefront.identity.passwords import hash_password
from storefront.identity.profile import UpdateProfile
from storefront.identity.registration import RegisterUser
from storefront.identity.user import User
from storefront.order.checkout import PlaceOrder
from storefront.order.history import order_for_user, orders_for_user
from storefront.payments.intents import confirm_payment, create_payment_intent
from storefront.shared.money import format_amount
from storefront.utils.locks import user_lock

auth_router = APIRouter(prefix="/api/auth", tags=["auth"])
catalogue_router = APIRouter(prefix="/api", tags=["catalogue"])
cart_router = APIRouter(prefix="/api/cart", tags=["cart"])
payment_router = APIRouter(prefix="/api", tags=["payments"])
order_router = APIRouter(prefix="/api/orders", tags=["orders"])


def _category_filter(category: str | None) -> int | None:
    """A category id to filter on; empty, zero or non-numeric values mean no filter."""
    try:
        category_id = int(category) if category else None
    except ValueError:
        return None
    return category_id or None


def _user_or_404(user_id: int) -> User:
    user = current_domain.repository_for(User).find(user_id)
    if user is None:
        raise HTTPException(status_code=404, detail="User not found")
    return user


# ---------------------------------------------------------------------------
# Auth
# ---------------------------------------------------------------------------
@auth_router.post("/register", response_model=UserResponse)
async def register(body: RegisterRequest, request: Request) -> UserResponse:
    command = RegisterUser(
        email=body.email,
        password_hash=hash_password(body.password),
        first_name=body.first_name,
        last_name=body.last_name,
        address=body.address,
        city=body.city,
        zip_code=body.zip_code,
    )
    user_id = current_domain.process(command, asynchronous=False)
    log_in(request, user_id)
    return UserResponse.from_user(_user_or_404(user_id))


@auth_router.post("/login", response_model=UserResponse)
async def login(body: LoginRequest, request: Request) -> UserResponse:
    user = authenticate(body.email, body.password)
    if user is None:
        raise HTTPException(status_code=401, detail="Invalid credentials")
    log_in(request, user.id)
    return UserResponse.from_user(user)


@auth_router.post("/logout", response_model=MessageResponse)
async def logout(request: Request) -> MessageResponse:
    log_out(request)
    return MessageResponse(message="Logged out successfully")


@auth_router.get("/me", response_model=UserResponse)
async def me(user_id: int = Depends(current_user_id)) -> UserResponse:
    return UserResponse.from_user(_user_or_404(user_id))


@auth_router.put("/profile", response_model=UserResponse)
async def update_profile(body: UpdateProfileRequest, user_id: int = Depends(current_user_id)) -> UserResponse:
    command = UpdateProfile(
        user_id=user_id,
        first_name=body.first_name,
        last_name=body.last_name,
        address=body.address,
        city=body.city,
        zip_code=body.zip_code,
    )
    current_domain.process(command, asynchronous=False)
    return UserResponse.from_user(_user_or_404(user_id))


# ---------------------------------------------------------------------------
# Catalogue
# ---------------------------------------------------------------------------
@catalogue_router.get("/products", response_model=list[ProductResponse])
async def list_products(category: str | None = None, search: str | None = None) -> list[ProductResponse]:
    products = current_domain.repository_for(Product).search(category_id=_category_filter(category), search=search)
    return [ProductResponse.from_product(product) for product in products]


@catalogue_router.get("/products/featured", response_model=list[ProductResponse])
async def featured_products() -> list[ProductResponse]:
    products = current_domain.repository_for(Product).featured()
    return [ProductResponse.from_product(product) for product in products]


@catalogue_router.get("/products/{product_id}", response_model=ProductResponse)
async def get_product(product_id: int) -> ProductResponse:
    product = current_domain.repository_for(Product).find(product_id)
    if product is None:
        raise HTTPException(status_code=404, detail="Product not found")
    return ProductResponse.from_product(product)


@catalogue_router.get("/categories", response_model=list[CategoryResponse])
async def list_categories() -> list[CategoryResponse]:
    categories = current_domain.repository_for(Category).all_categories()
    return [CategoryResponse.from_category(category) for category in categories]


# ---------------------------------------------------------------------------
# Cart
# ---------------------------------------------------------------------------
@cart_router.get("", response_model=list[CartItemResponse])
async def get_cart(user_id: int = Depends(current_user_id)) -> list[CartItemResponse]:
    return [CartItemResponse.from_item(line.item, line.product) for line in cart_lines(user_id)]


@cart_router.get("/summary", response_model=CartSummaryResponse)
async def get_cart_summary(user_id: int = Depends(current_user_id)) -> CartSummaryResponse:
    cart_quote = quote(cart_lines(user_id))
    return CartSummaryResponse(
        item_count=cart_quote.item_count,
        subtotal=format_amount(cart_quote.subtotal),
        shipping=format_amount(cart_quote.shipping),
        tax=format_amount(cart_quote.tax),
        total=format_amount(cart_quote.total),
    )


@cart_router.post("", response_model=CartItemResponse)
async def add_to_cart(body: AddToCartRequest, user_id: int = Depends(current_user_id)) -> CartItemResponse:
    command = AddToCart(user_id=user_id, product_id=body.product_id, quantity=body.quantity)
    async with user_lock(user_id):
        item_id = current_domain.process(command, asynchronous=False)
    return CartItemResponse.from_item(current_domain.repository_for(CartItem).get(item_id))


@cart_router.put("/{item_id}", response_model=CartItemResponse)
async def update_cart_item(
    item_id: int, body: UpdateCartItemRequest, user_id: int = Depends(current_user_id)
) -> CartItemResponse:
    if body.quantity < 1:
        raise ValidationError({"quantity": ["Invalid quantity"]})

    command = UpdateCartItem(user_id=user_id, item_id=item_id, quantity=body.quantity)
    async with user_lock(user_id):
        current_domain.process(command, asynchronous=False)
    return CartItemResponse.from_item(current_domain.repository_for(CartItem).get(item_id))


@cart_router.delete("/{item_id}", response_model=MessageResponse)
async def remove_from_cart(item_id: int, user_id: int = Depends(current_user_id)) -> MessageResponse:
    async with user_lock(user_id):
        current_domain.process(RemoveFromCart(user_id=user_id, item_id=item_id), asynchronous=False)
    return MessageResponse(message="Item removed from cart")


@cart_router.delete("", response_model=MessageResponse)
async def clear_cart(user_id: int = Depends(current_user_id)) -> MessageResponse:
    async with user_lock(user_id):
        current_domain.process(ClearCart(user_id=user_id), asynchronous=False)
    return MessageResponse(message="Cart cleared")


# ---------------------------------------------------------------------------
# Payments
# ---------------------------------------------------------------------------
@payment_router.post("/create-payment-intent", response_model=PaymentIntentResponse)
async def create_intent(body: PaymentIntentRequest, user_id: int = Depends(current_user_id)) -> PaymentIntentResponse:
    client_secret = await run_in_threadpool(create_payment_intent, user_id, body.amount, body.currency.lower())
    return PaymentIntentResponse(client_secret=client_secret)


# ---------------------------------------------------------------------------
# Orders
# ---------------------------------------------------------------------------
@order_router.post("", response_model=OrderResponse)
async def create_order(body: CreateOrderRequest, user_id: int = Depends(current_user_id)) -> OrderResponse:
    if body.payment_intent_id:
        await run_in_threadpool(confirm_payment, user_id, body.payment_intent_id, body.total)

    command = PlaceOrder(
        user_id=user_id,
        total=body.total,
        status=body.status,
        shipping_address=body.shipping_address.to_json(),
        payment_intent_id=body.payment_intent_id,
    )
    async with user_lock(user_id):
        order_id = current_domain.process(command, asynchronous=False)
    return OrderResponse.from_details(order_for_user(order_id, user_id))


@order_router.get("", response_model=list[OrderResponse])
async def list_orders(user_id: int = Depends(current_user_id)) -> list[OrderResponse]:
    return [OrderResponse.from_details(details) for details in orders_for_user(user_id)]


@order_router.get("/{order_id}", response_model=OrderResponse)
async def get_order(order_id: int, user_id: int = Depends(current_user_id)) -> OrderResponse:
    details = order_for_user(order_id, user_id)
    if details is None:
        raise HTTPException(status_code=404, detail="Order not found")
    return OrderResponse.from_details(details)
