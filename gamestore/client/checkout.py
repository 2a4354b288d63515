# gamestore/client/checkout.py
from dataclasses import dataclass
from decimal import Decimal

from gamestore.client.api_client import ClientError, StorefrontClient
from gamestore.client.session import SessionState
from gamestore.utils.logging import get_logger

logger = get_logger(__name__)


class CheckoutError(Exception):
    def __init__(self, message: str, requires_login: bool = False):
        super().__init__(message)
        self.message = message
        self.requires_login = requires_login


@dataclass
class CheckoutResult:
    protocol: str
    order_id: int | None
    total: Decimal
    message: str


class CheckoutController:
    """
    Wysyla koszyk z sesji do /checkout. Koszyk czyszczony tylko po sukcesie.
    """

    def __init__(self, state: SessionState, client: StorefrontClient, chatbot=None):
        self.state = state
        self.client = client
        self.chatbot = chatbot
        self.coupon: str | None = None

    def apply_coupon(self, code: str | None) -> str:
        code = (code or "").strip()
        if not code:
            raise CheckoutError("Enter a coupon code to apply.")
        #kupon tylko zapamietany i wyslany, serwer go nie realizuje
        self.coupon = code
        return f'Coupon "{code}" applied!'

    def build_payload(self, payment_method: str, product_id: int | None = None) -> dict:
        payload = {"paymentMethod": payment_method}
        if self.coupon:
            payload["coupon"] = self.coupon

        if not self.state.cart.is_empty():
            payload["cart"] = self.state.cart.to_payload()
        elif product_id:
            #zakup pojedynczego produktu (legacy)
            payload["productId"] = product_id
        else:
            raise CheckoutError("Your cart is empty.")
        return payload

    def confirm(
        self,
        payment_method: str | None,
        coupon: str | None = None,
        product_id: int | None = None,
    ) -> CheckoutResult:
        payment_method = (payment_method or "").strip()
        if not payment_method:
            raise CheckoutError("Select a payment method.")

        if coupon:
            self.apply_coupon(coupon)

        token = self.state.token
        if not token or not self.state.is_authenticated:
            raise CheckoutError("You must be logged in to complete the purchase.", requires_login=True)

        payload = self.build_payload(payment_method, product_id)
        logger.info(f"Submitting checkout with {len(payload.get('cart', []))} cart line(s)")

        try:
            data = self.client.checkout(payload, token)
        except ClientError as e:
            if e.status == 401:
                self.state.logout()
                raise CheckoutError("Session expired. Please log in again.", requires_login=True)
            raise CheckoutError(e.message)

        if not data or not data.get("success"):
            raise CheckoutError((data or {}).get("message") or "Could not process the purchase.")

        self.state.cart.clear()
        self.coupon = None

        result = CheckoutResult(
            protocol=data.get("protocol") or "#",
            order_id=data.get("orderId"),
            total=Decimal(str(data.get("total", "0"))),
            message=data.get("message") or "Purchase completed successfully!",
        )

        if self.chatbot is not None:
            self.chatbot.notify_purchase(result.protocol)

        return result
