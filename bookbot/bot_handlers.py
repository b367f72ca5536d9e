"""
Telegram command handlers and application wiring.
"""

import json
import logging
from dataclasses import dataclass, field

from telegram import InlineKeyboardButton, InlineKeyboardMarkup, Update
from telegram.error import TelegramError
from telegram.ext import (
    Application,
    CallbackQueryHandler,
    CommandHandler,
    ContextTypes,
    TypeHandler,
)

from config import TELEGRAM_JOIN_URL

from .admin_workflow import AdminWorkflow
from .catalog_client import GoogleBooksClient, format_book_response
from .channel_store import ChannelStore
from .errors import BotError, CatalogError, SubscriptionCheckError
from .markup import escape, escape_markdown_v2, plain_reply, send_reply
from .models import MarkupMode, Reply, Settings
from .rate_limiter import RateLimiter
from .reward_generator import generate_vpn_code
from .subscription_checker import check_subscriptions

logger = logging.getLogger(__name__)

WELCOME_MESSAGE = (
    "👋 Welcome to the Book Advice Bot!\n"
    "I can recommend books and provide VPN codes after channel subscriptions.\n\n"
    "Choose an option below:"
)
HELP_MESSAGE = (
    "📖 Book Advice Bot Commands 📖\n\n"
    "/start - Show welcome message and options\n"
    "/book <query> - Search for book recommendations (e.g., /book javascript)\n"
    "/vpn - Get a VPN code (requires channel subscriptions)\n"
    '/admin <password> <channels> - Update required channels (e.g., /admin <password> ["@channel1","@channel2"])\n'
    "/help - Show this message"
)
BOOK_PROMPT = "Enter a book query with /book <query>. Example: /book javascript"
BOOK_USAGE = "Please provide a search query. Example: /book javascript"
VPN_PROMPT = "To get a VPN code, use /vpn"
SUBSCRIPTION_ERROR = "⚠️ Error checking subscriptions. Please try again later."
GENERIC_ERROR = "⚠️ An error occurred. Please try again later."

BOOK_CALLBACK = "book"
VPN_CALLBACK = "vpn"


def command_argument(text: str | None) -> str:
    """Return everything after the command word, stripped."""
    if not text:
        return ""
    return text.partition(" ")[2].strip()


def join_link(channel: str) -> str:
    return f"{TELEGRAM_JOIN_URL}{channel[1:]}"


def vpn_code_reply(code: str, reason: str) -> Reply:
    footer = f"Use it to activate your VPN!\n(Granted due to {reason})"
    text = (
        "🌐 *VPN Code* 🌐\n\n"
        f"{escape_markdown_v2('Your code:')} `{escape_markdown_v2(code)}`\n\n"
        f"{escape_markdown_v2(footer)}"
    )
    return Reply(text=text)


def subscribe_reply(channels: list[str]) -> Reply:
    """Legacy Markdown reminder listing a join link per missing channel."""
    mode = MarkupMode.MARKDOWN
    channel_links = "\n".join(
        escape(f"{channel}: {join_link(channel)}", mode) for channel in channels
    )
    text = (
        f"{escape('Please subscribe to the following channels to get a VPN code:', mode)}"
        f"\n\n{channel_links}\n\n"
        f"{escape('After subscribing, try /vpn again.', mode)}"
    )
    return Reply(text=text, mode=mode)


@dataclass
class BotState:
    """Shared state for one running bot process."""

    store: ChannelStore
    catalog: GoogleBooksClient
    admin_workflow: AdminWorkflow
    rate_limiter: RateLimiter = field(default_factory=RateLimiter)
    admins: set[int] = field(default_factory=set)


class BotHandlers:
    """Command and callback handlers bound to a ``BotState``."""

    def __init__(self, state: BotState):
        self.state = state

    async def start(self, update: Update, context: ContextTypes.DEFAULT_TYPE):
        logger.info(f"Processing /start for user {update.effective_user.id}")
        keyboard = InlineKeyboardMarkup(
            [
                [InlineKeyboardButton("📚 Books", callback_data=BOOK_CALLBACK)],
                [InlineKeyboardButton("🌐 VPN", callback_data=VPN_CALLBACK)],
            ]
        )
        await send_reply(
            update.effective_message, plain_reply(WELCOME_MESSAGE, reply_markup=keyboard)
        )
        logger.info("Sent /start message with buttons")

    async def on_button(self, update: Update, context: ContextTypes.DEFAULT_TYPE):
        query = update.callback_query
        prompt = BOOK_PROMPT if query.data == BOOK_CALLBACK else VPN_PROMPT
        await send_reply(query.message, plain_reply(prompt))
        await query.answer()

    async def help(self, update: Update, context: ContextTypes.DEFAULT_TYPE):
        await send_reply(update.effective_message, plain_reply(HELP_MESSAGE))

    async def book(self, update: Update, context: ContextTypes.DEFAULT_TYPE):
        message = update.effective_message
        query = command_argument(message.text)
        if not query:
            await send_reply(message, plain_reply(BOOK_USAGE))
            return

        try:
            books = await self.state.catalog.search(query)
        except CatalogError as e:
            await send_reply(message, plain_reply(f"⚠️ {e}. Please try again."))
            return

        await send_reply(
            message,
            Reply(text=format_book_response(books), disable_web_page_preview=True),
        )

    async def admin(self, update: Update, context: ContextTypes.DEFAULT_TYPE):
        message = update.effective_message
        try:
            confirmation = await self.state.admin_workflow.run(
                context.bot, update.effective_user.id, command_argument(message.text)
            )
        except BotError as e:
            await send_reply(message, plain_reply(e.user_message))
            return

        await send_reply(message, plain_reply(confirmation))

    async def vpn(self, update: Update, context: ContextTypes.DEFAULT_TYPE):
        message = update.effective_message
        user_id = update.effective_user.id
        channels = self.state.store.channels
        is_admin = user_id in self.state.admins
        logger.info(
            f"Processing /vpn for user {user_id}, admin={is_admin}, "
            f"channels={json.dumps(channels)}"
        )

        if is_admin:
            await send_reply(message, vpn_code_reply(generate_vpn_code(), "admin status"))
            return

        try:
            result = await check_subscriptions(context.bot, user_id, channels)
        except (SubscriptionCheckError, TelegramError) as e:
            logger.error(f"Error checking subscriptions: {e}")
            await send_reply(message, plain_reply(SUBSCRIPTION_ERROR))
            return

        if result.subscribed:
            reply = vpn_code_reply(generate_vpn_code(), "channel subscriptions")
        else:
            reply = subscribe_reply(result.failing)
            logger.info(f"Sending /vpn subscription reminder to user {user_id}")
        await send_reply(message, reply)

    async def on_error(self, update: object, context: ContextTypes.DEFAULT_TYPE):
        update_repr = update.to_dict() if isinstance(update, Update) else str(update)
        logger.error(f"Error for update {update_repr}: {context.error}", exc_info=context.error)
        if isinstance(update, Update) and update.effective_message:
            try:
                await send_reply(update.effective_message, plain_reply(GENERIC_ERROR))
            except TelegramError as e:
                logger.error(f"Failed to send error reply: {e}")

    def register(self, application: Application):
        """Attach the middleware, handlers and error handler."""
        application.add_handler(TypeHandler(Update, self.state.rate_limiter.middleware), group=-1)
        application.add_handler(CommandHandler("start", self.start))
        application.add_handler(CommandHandler("help", self.help))
        application.add_handler(CommandHandler("book", self.book))
        application.add_handler(CommandHandler("admin", self.admin))
        application.add_handler(CommandHandler("vpn", self.vpn))
        application.add_handler(
            CallbackQueryHandler(self.on_button, pattern=f"^({BOOK_CALLBACK}|{VPN_CALLBACK})$")
        )
        application.add_error_handler(self.on_error)


def build_application(settings: Settings, store: ChannelStore) -> Application:
    """Build the Telegram application with all handlers registered."""
    catalog = GoogleBooksClient(settings.catalog_url)
    admins: set[int] = set()
    state = BotState(
        store=store,
        catalog=catalog,
        admin_workflow=AdminWorkflow(settings.admin_password, store, admins),
        admins=admins,
    )

    async def post_init(application: Application):
        await catalog.open()
        logger.info(f"🤖 Bot started as @{application.bot.username}")

    async def post_shutdown(application: Application):
        await catalog.close()
        logger.info("🛑 Bot stopped")

    application = (
        Application.builder()
        .token(settings.bot_token)
        .post_init(post_init)
        .post_shutdown(post_shutdown)
        .build()
    )
    BotHandlers(state).register(application)
    return application
