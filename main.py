#!/usr/bin/env python3
"""
Main entry point and CLI for the Book Advice & VPN Sponsor Bot.
"""

import logging
import signal
import sys

import click
from telegram import Update

from config import load_settings, resolve_channels_file
from bookbot.bot_handlers import build_application
from bookbot.channel_store import ChannelStore
from bookbot.errors import ConfigError

logger = logging.getLogger(__name__)


def setup_logging(verbose: bool):
    """Setup logging configuration."""
    level = logging.DEBUG if verbose else logging.INFO
    logging.basicConfig(
        level=level,
        format="%(asctime)s - %(levelname)s - %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
    )
    # python-telegram-bot logs every long-polling request at INFO
    logging.getLogger("httpx").setLevel(logging.WARNING)


@click.group()
@click.version_option(version="1.0.0")
@click.help_option("-h", "--help")
def cli():
    """Book Advice & VPN Sponsor Bot"""
    pass


@cli.command(name="run")
@click.option("--channels-file", "-c", default=None, help="Path to the required channels JSON file")
@click.option("--verbose", "-v", is_flag=True, help="Enable verbose logging output")
@click.help_option("-h", "--help")
def run(channels_file, verbose):
    """Start the bot and poll Telegram until SIGINT/SIGTERM."""
    setup_logging(verbose)
    try:
        settings = load_settings(channels_file)
    except ConfigError as e:
        logger.error(str(e))
        sys.exit(1)

    store = ChannelStore(settings.channels_file)
    store.load()

    logger.info("Starting bot...")
    try:
        application = build_application(settings, store)
        application.run_polling(
            allowed_updates=Update.ALL_TYPES,
            stop_signals=(signal.SIGINT, signal.SIGTERM),
        )
    except Exception as e:
        logger.error(f"Failed to start bot: {e}")
        sys.exit(1)


@cli.command(name="channels")
@click.option("--channels-file", "-c", default=None, help="Path to the required channels JSON file")
@click.help_option("-h", "--help")
def channels(channels_file):
    """Show the persisted required channels."""
    store = ChannelStore(resolve_channels_file(channels_file))
    required = store.load()
    if not required:
        click.echo("No required channels")
        return
    for channel in required:
        click.echo(channel)


if __name__ == "__main__":
    cli()
