import asyncio
import logging
import sys
from typing import Optional

import discord
from discord import app_commands
from discord.ext import commands

from .commands import handle_define, handle_thesaurus
from .config import ConfigError, DisplayConfig, Presence, Settings, setup_logging
from .dictionary_client import DictionaryClient
from .service import LookupService
from .suggestions import SpellChecker
from .yaml_config import YAMLConfig

logger = logging.getLogger(__name__)


def build_presence(presence: Presence) -> tuple[discord.Status, discord.Activity]:
    status = getattr(discord.Status, presence.status, discord.Status.online)
    activity_type = getattr(discord.ActivityType, presence.activity_type, discord.ActivityType.watching)
    return status, discord.Activity(type=activity_type, name=presence.activity_name)


async def handle_app_command_error(
    interaction: discord.Interaction,
    error: app_commands.AppCommandError,
    *,
    message: str,
) -> None:
    """Last-resort handler for anything a slash command let escape."""
    if isinstance(error, app_commands.CommandNotFound):
        logger.warning("Received unknown command %r, ignoring", error.name)
        return

    original = getattr(error, "original", error)
    logger.error(
        "App command error in /%s: %s",
        getattr(interaction.command, "name", "unknown"),
        original,
        exc_info=original,
    )
    try:
        if not interaction.response.is_done():
            await interaction.response.send_message(message, ephemeral=True)
        else:
            await interaction.followup.send(message, ephemeral=True)
    except Exception as e:  # noqa: BLE001
        logger.debug("Could not send error reply: %s", e)


class DictioBot(commands.Bot):
    def __init__(
        self,
        settings: Settings,
        config: DisplayConfig,
        client: DictionaryClient,
        service: LookupService,
    ):
        # Slash commands only; no privileged intents needed
        intents = discord.Intents.default()
        super().__init__(command_prefix=commands.when_mentioned, intents=intents)
        self.settings = settings
        self.config = config
        self.client = client
        self.service = service

    async def setup_hook(self) -> None:
        # Read the suggestion word list before the first lookup needs it
        try:
            await self.service.spell_checker.load()
        except OSError as e:
            logger.error("Failed to load suggestion word list: %s", e)

        # Sync slash commands with Discord
        try:
            synced = await self.tree.sync()
            logger.info("Synced %d slash command(s)", len(synced))
        except Exception as e:  # noqa: BLE001
            logger.error("Failed to sync commands: %s", e)

    async def close(self) -> None:
        """Close the bot and clean up resources."""
        await self.client.close()
        await super().close()

    async def on_ready(self):
        logger.info("Logged in as %s (%s)", self.user, self.user.id if self.user else "unknown")
        status, activity = build_presence(self.config.presence)
        await self.change_presence(status=status, activity=activity)


def create_bot(
    settings: Settings,
    yaml_config: Optional[YAMLConfig] = None,
    *,
    spell_checker: Optional[SpellChecker] = None,
) -> DictioBot:
    yaml_config = yaml_config or YAMLConfig()
    config = yaml_config.display_config()
    client = DictionaryClient(
        base_url=settings.dictionary_api_url,
        timeout=settings.api_timeout,
    )
    service = LookupService(
        client=client,
        spell_checker=spell_checker or SpellChecker(word_list_path=settings.wordlist_path),
        config=config,
        yaml_config=yaml_config,
    )
    bot = DictioBot(settings=settings, config=config, client=client, service=service)

    @bot.tree.command(name="define", description="Get the definition of a word")
    @app_commands.describe(word="The word to define")
    async def define_slash(interaction: discord.Interaction, word: str):
        await handle_define(interaction, word, service=service, features=config.features)

    @bot.tree.command(name="thesaurus", description="Get synonyms and antonyms for a word")
    @app_commands.describe(word="The word to look up")
    async def thesaurus_slash(interaction: discord.Interaction, word: str):
        await handle_thesaurus(interaction, word, service=service, features=config.features)

    @bot.tree.error
    async def on_app_command_error(interaction: discord.Interaction, error: app_commands.AppCommandError):
        await handle_app_command_error(
            interaction, error, message=yaml_config.get_message("command_error")
        )

    return bot


async def run_bot(settings: Optional[Settings] = None) -> int:
    """Start the bot and block until it stops. Returns the process exit code."""
    settings = settings or Settings()
    setup_logging(settings)
    try:
        settings.validate(require_discord=True)
    except RuntimeError as e:
        logger.error("%s", e)
        return 1

    try:
        bot = create_bot(settings, YAMLConfig.load(settings.config_path))
    except ConfigError as e:
        logger.error("Invalid configuration: %s", e)
        return 1

    try:
        async with bot:
            await bot.start(settings.discord_token)
    except discord.LoginFailure as e:
        logger.error("Discord login failed: %s", e)
        return 1
    return 0


def main() -> None:
    try:
        code = asyncio.run(run_bot())
    except KeyboardInterrupt:
        code = 0
    sys.exit(code)


if __name__ == "__main__":
    main()
