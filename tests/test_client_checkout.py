from decimal import Decimal
from unittest.mock import MagicMock

import pytest

from gamestore.client.api_client import ClientError
from gamestore.client.chatbot import ChatbotEngine, ChatState
from gamestore.client.checkout import CheckoutController, CheckoutError
from gamestore.client.session import SessionState

SUCCESS = {
    "success": True,
    "message": "Purchase completed successfully!",
    "protocol": "#CHK000042",
    "orderId": 42,
    "total": "130.00",
}


@pytest.fixture
def state():
    s = SessionState()
    s.cart.add({"id": 1, "title": "The Witcher 3", "price": "50.00"})
    s.cart.add({"id": 1, "title": "The Witcher 3", "price": "50.00"})
    s.cart.add({"id": 2, "title": "Elden Ring", "price": "30.00"})
    return s


@pytest.fixture
def client():
    c = MagicMock()
    c.checkout.return_value = dict(SUCCESS)
    return c


def login(state):
    state.login({"id": 1, "username": "ana", "displayName": "Ana"}, "tok")


def test_payment_method_is_required(state, client):
    login(state)

    with pytest.raises(CheckoutError, match="payment method"):
        CheckoutController(state, client).confirm("  ")
    client.checkout.assert_not_called()


def test_login_is_required(state, client):
    with pytest.raises(CheckoutError) as exc:
        CheckoutController(state, client).confirm("pix")

    assert exc.value.requires_login
    client.checkout.assert_not_called()
    assert state.cart.count() == 3


def test_success_sends_cart_and_clears_it(state, client):
    login(state)
    chatbot = ChatbotEngine(state)
    controller = CheckoutController(state, client, chatbot=chatbot)
    controller.apply_coupon("PROMO10")

    result = controller.confirm("pix")

    payload, token = client.checkout.call_args.args
    assert token == "tok"
    assert payload["paymentMethod"] == "pix"
    assert payload["coupon"] == "PROMO10"
    assert [(line["id"], line["quantity"]) for line in payload["cart"]] == [(1, 2), (2, 1)]

    assert result.protocol == "#CHK000042"
    assert result.order_id == 42
    assert result.total == Decimal("130.00")
    assert state.cart.is_empty()
    assert controller.coupon is None

    assert chatbot.current is ChatState.MAIN_MENU
    assert "#CHK000042" in chatbot.transcript[0].text


def test_failure_keeps_cart(state, client):
    login(state)
    client.checkout.side_effect = ClientError(400, "Invalid cart")

    with pytest.raises(CheckoutError, match="Invalid cart"):
        CheckoutController(state, client).confirm("card")

    assert state.cart.count() == 3
    assert state.is_authenticated


def test_expired_session_logs_out(state, client):
    login(state)
    client.checkout.side_effect = ClientError(401, "Session expired")

    with pytest.raises(CheckoutError) as exc:
        CheckoutController(state, client).confirm("card")

    assert exc.value.requires_login
    assert not state.is_authenticated
    assert state.cart.count() == 3


def test_single_product_when_cart_is_empty(client):
    state = SessionState()
    login(state)

    CheckoutController(state, client).confirm("pix", product_id=7)

    payload, _ = client.checkout.call_args.args
    assert payload == {"paymentMethod": "pix", "productId": 7}


def test_empty_cart_without_product(client):
    state = SessionState()
    login(state)

    with pytest.raises(CheckoutError, match="cart is empty"):
        CheckoutController(state, client).confirm("pix")


def test_empty_coupon_is_rejected(state, client):
    controller = CheckoutController(state, client)

    with pytest.raises(CheckoutError):
        controller.apply_coupon("   ")
    assert controller.coupon is None


def test_coupon_and_product_passed_positionally(client):
    state = SessionState()
    login(state)

    CheckoutController(state, client).confirm("pix", "SAVE5", 7)

    payload, _ = client.checkout.call_args.args
    assert payload == {"paymentMethod": "pix", "coupon": "SAVE5", "productId": 7}
