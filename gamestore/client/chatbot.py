# gamestore/client/chatbot.py
import re
from dataclasses import dataclass
from decimal import Decimal, InvalidOperation
from typing import Callable, List, Sequence

from gamestore.client.api_client import ClientError, StorefrontClient
from gamestore.client.session import ChatFlow, ChatState, RecoveryStep, SessionState
from gamestore.domain.schemas import EMAIL_PATTERN
from gamestore.utils.logging import get_logger

logger = get_logger(__name__)

MENU_TEXT = (
    "Choose an option:\n"
    "1️⃣ Help with purchases\n"
    "2️⃣ Track a support ticket\n"
    "3️⃣ Game recommendations\n"
    "4️⃣ Talk to human support"
)

PURCHASE_HELP = '🛒 Sure! Click "Buy" on a game card to see the price and complete your purchase.'
HUMAN_SUPPORT = "Alright! I'm calling a human agent. Average response time: 2 minutes ⏳"
TICKET_PROMPT = "Please enter your ticket number."
TICKET_ACK = "Your ticket is being reviewed by the support team. You will receive updates by email."
LOGIN_REQUIRED = "🔐 Log in first to see your purchase history."


@dataclass
class BotMessage:
    text: str
    kind: str = "bot"
    image: str | None = None


Handler = Callable[["ChatbotEngine", str], List[BotMessage]]


@dataclass
class Intent:
    name: str
    patterns: Sequence[re.Pattern]
    handler: Handler

    def matches(self, text: str) -> bool:
        return any(p.search(text) for p in self.patterns)


def format_price(value) -> str:
    try:
        amount = Decimal(str(value if value is not None else 0))
    except InvalidOperation:
        amount = Decimal("0")
    return "R$ " + f"{amount:.2f}".replace(".", ",")


# ---------- handlers ----------

def _history_lines(bot: "ChatbotEngine") -> List[BotMessage]:
    token = bot.state.token
    if not token:
        return [BotMessage(LOGIN_REQUIRED)]
    if bot.client is None:
        return [BotMessage("❌ Purchase history is not available right now.", kind="error")]

    try:
        purchases = bot.client.purchase_history(token)
    except ClientError as e:
        if e.status == 401:
            return [BotMessage("❌ Session expired. Please log in again.", kind="error")]
        logger.warning(f"Purchase history request failed: {e.message}")
        return [BotMessage("❌ Could not load your purchase history. Please try again.", kind="error")]

    if not purchases:
        return [BotMessage("You haven't made any purchases yet 😢")]

    return [
        BotMessage(f"• {p.get('product') or 'Product'} - {format_price(p.get('price'))}")
        for p in purchases
    ]


def history_intent(bot: "ChatbotEngine", text: str) -> List[BotMessage]:
    if not bot.state.token:
        return [BotMessage(LOGIN_REQUIRED)]
    return [BotMessage("⏳ Fetching your purchase history...")] + _history_lines(bot)


def purchase_help_intent(bot: "ChatbotEngine", text: str) -> List[BotMessage]:
    replies = [BotMessage(PURCHASE_HELP)]
    if bot.state.token:
        replies += _history_lines(bot)
    return replies + bot.show_menu()


def ticket_intent(bot: "ChatbotEngine", text: str) -> List[BotMessage]:
    return bot.begin_ticket_tracking()


def recommendation_intent(bot: "ChatbotEngine", text: str) -> List[BotMessage]:
    replies = [BotMessage("🎲 Looking for a recommendation for you...")]
    if bot.client is None:
        return replies + [BotMessage("❌ Couldn't get a recommendation right now.", kind="error")] + bot.show_menu()

    try:
        game = bot.client.recommended()
    except ClientError as e:
        logger.warning(f"Recommendation request failed: {e.message}")
        replies.append(BotMessage("❌ Couldn't get a recommendation right now.", kind="error"))
    else:
        replies.append(
            BotMessage(
                f"Today's pick: {game.get('title')} - {format_price(game.get('price'))}",
                image=game.get("image") or None,
            )
        )
    return replies + bot.show_menu()


def human_support_intent(bot: "ChatbotEngine", text: str) -> List[BotMessage]:
    return [BotMessage(HUMAN_SUPPORT)] + bot.show_menu()


def _compile(*patterns: str) -> tuple:
    return tuple(re.compile(p, re.IGNORECASE) for p in patterns)


def default_intents() -> List[Intent]:
    #kolejnosc ma znaczenie - wygrywa pierwsze dopasowanie
    return [
        Intent(
            "HISTORY",
            _compile(r"\bmy history\b", r"\bmy purchases\b", r"\bpurchase history\b", r"\bhistory\b"),
            history_intent,
        ),
        Intent(
            "MENU_1_PURCHASE_HELP",
            _compile(r"^1\b", r"^1️⃣$", r"\bhelp with purchases\b"),
            purchase_help_intent,
        ),
        Intent(
            "MENU_2_TICKET",
            _compile(r"^2\b", r"^2️⃣$", r"\btrack (a |my )?ticket\b", r"\bsupport ticket\b"),
            ticket_intent,
        ),
        Intent(
            "MENU_3_RECOMMENDATION",
            _compile(r"^3\b", r"^3️⃣$", r"\brecommend\w*\b"),
            recommendation_intent,
        ),
        Intent(
            "MENU_4_HUMAN_SUPPORT",
            _compile(r"^4\b", r"^4️⃣$", r"\bhuman support\b", r"\btalk to (support|a human)\b"),
            human_support_intent,
        ),
    ]


def generic_reply(text: str) -> BotMessage:
    t = text.lower()
    if "price" in t or "how much" in t:
        return BotMessage('Prices vary by game. Click "Buy" on the game card you want to see its price.')
    if "gta" in t:
        return BotMessage("GTA V is sometimes on sale! Check the game card for price and platforms.")
    if "help" in t or "support" in t:
        return BotMessage("I can help with purchases, refunds and recommendations. What do you need?")
    return BotMessage(
        f'Nice! I got your message: "{text}". I\'m still learning, to buy a game use the "Buy" button on the cards.'
    )


class ChatbotEngine:
    """
    Maszyna stanow czatu: Idle -> MainMenu, z dwoma prowadzonymi flow
    (odzyskiwanie hasla, sledzenie ticketu). Tylko jeden flow aktywny naraz,
    priorytet: ticket, recovery, intenty, odpowiedz ogolna.
    Stan flow trzymany w SessionState.chat, w silniku zostaje tylko transkrypt.
    """

    def __init__(
        self,
        state: SessionState,
        client: StorefrontClient | None = None,
        intents: List[Intent] | None = None,
    ):
        self.state = state
        self.client = client
        self.intents = intents if intents is not None else default_intents()
        self.transcript: List[BotMessage] = []

    @property
    def flow(self) -> ChatFlow:
        return self.state.chat

    @flow.setter
    def flow(self, value: ChatFlow) -> None:
        self.state.chat = value

    @property
    def current(self) -> ChatState:
        return self.flow.state

    def _emit(self, replies: List[BotMessage]) -> List[BotMessage]:
        self.transcript.extend(replies)
        return replies

    def show_menu(self) -> List[BotMessage]:
        self.flow.state = ChatState.MAIN_MENU
        return [BotMessage(MENU_TEXT)]

    def greeting(self) -> BotMessage:
        name = self.state.display_name
        if name:
            return BotMessage(f"👋 Hi, {name}! How can I help?")
        return BotMessage("👋 Hi! I'm Mago, the virtual assistant. How can I help you today?")

    @staticmethod
    def page_hint(page: str | None) -> BotMessage | None:
        page = (page or "").lower()
        if "checkout" in page:
            return BotMessage("🧾 I see you're at checkout. I can help with payment methods or coupons.")
        if "login" in page:
            return BotMessage("🔐 Welcome to the login area. Need help signing in or creating your account?")
        if "account" in page:
            return BotMessage("👤 This is your account page. I can help you review your data or find recent purchases.")
        return None

    def open(self, page: str | None = None) -> List[BotMessage]:
        """Otwarcie panelu; powitanie i menu tylko za pierwszym razem."""
        if self.flow.state is not ChatState.IDLE:
            return []

        replies = [self.greeting()]
        hint = self.page_hint(page)
        if hint:
            replies.append(hint)
        return self._emit(replies + self.show_menu())

    def start_password_recovery(self) -> List[BotMessage]:
        self.flow = ChatFlow(state=ChatState.PASSWORD_RECOVERY, recovery_step=RecoveryStep.NAME)
        return self._emit([
            BotMessage("🔒 Let's recover your password. Please provide your details:"),
            BotMessage("Name:"),
        ])

    def begin_ticket_tracking(self) -> List[BotMessage]:
        self.flow = ChatFlow(state=ChatState.TICKET_TRACKING)
        return [BotMessage(TICKET_PROMPT)]

    def notify_purchase(self, protocol: str) -> List[BotMessage]:
        if self.flow.state is ChatState.IDLE:
            self.flow.state = ChatState.MAIN_MENU
        return self._emit([
            BotMessage(f"✅ Purchase completed successfully! Protocol: {protocol}.", kind="success"),
            BotMessage("Follow the instructions sent to your registered email!", kind="notice"),
        ])

    def _handle_ticket(self, value: str) -> List[BotMessage]:
        #numer ticketu nie jest sprawdzany
        return [BotMessage(TICKET_ACK)] + self.show_menu()

    def _handle_recovery(self, value: str) -> List[BotMessage]:
        if self.flow.recovery_step is RecoveryStep.NAME:
            self.flow.recovery_name = value
            self.flow.recovery_step = RecoveryStep.EMAIL
            return [BotMessage("Email:")]

        if not EMAIL_PATTERN.match(value):
            return [BotMessage("⚠️ Invalid email. Try again.\nEmail:", kind="error")]

        self.flow.recovery_email = value
        logger.info(f"Password recovery requested for {value!r}")
        return [
            BotMessage(
                "✅ Details received. Check your email and follow the instructions to recover your password.",
                kind="success",
            )
        ] + self.show_menu()

    def match_intent(self, text: str) -> Intent | None:
        t = text.strip().lower()
        return next((i for i in self.intents if i.matches(t)), None)

    def handle(self, text: str) -> List[BotMessage]:
        value = (text or "").strip()
        if not value:
            return []

        self.transcript.append(BotMessage(value, kind="user"))

        if self.flow.state is ChatState.IDLE:
            self.flow.state = ChatState.MAIN_MENU

        if self.flow.state is ChatState.TICKET_TRACKING:
            return self._emit(self._handle_ticket(value))

        if self.flow.state is ChatState.PASSWORD_RECOVERY:
            return self._emit(self._handle_recovery(value))

        intent = self.match_intent(value)
        if intent:
            logger.debug(f"Chat intent matched: {intent.name}")
            return self._emit(intent.handler(self, value))

        return self._emit([generic_reply(value)])
