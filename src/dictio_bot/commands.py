import logging

import discord

from .config import Features
from .models import LookupRequest
from .service import LookupService, Reply

logger = logging.getLogger(__name__)


async def send_reply(interaction: discord.Interaction, reply: Reply, *, fallback: str) -> Reply:
    """Replace the deferred "thinking..." message with the final reply.

    If Discord rejects the embed, the same message is edited to ``fallback``
    instead, so the user still gets exactly one answer.
    """
    if reply.embed is None:
        await interaction.edit_original_response(content=reply.content)
        return reply

    try:
        await interaction.edit_original_response(embed=reply.embed)
    except discord.HTTPException as e:
        logger.error("Discord rejected reply embed (status=%s): %s", e.status, e.text)
        reply = Reply(content=fallback, status="error", error=f"embed rejected: {e.status}")
        await interaction.edit_original_response(content=reply.content)
    return reply


async def _handle(
    interaction: discord.Interaction,
    word: str,
    *,
    kind: str,
    service: LookupService,
    features: Features,
) -> Reply:
    # Discord drops interactions not acknowledged within 3 seconds
    await interaction.response.defer(ephemeral=features.ephemeral_responses, thinking=True)
    request = LookupRequest.from_input(word)

    lookup = service.define if kind == "define" else service.thesaurus
    reply = await lookup(request.word)
    reply = await send_reply(
        interaction, reply, fallback=service.yaml_config.get_message(f"{kind}_error")
    )
    logger.info(
        "Handled /%s %r from %s (status: %s%s)",
        kind,
        request.word,
        interaction.user.id,
        reply.status,
        f", error: {reply.error}" if reply.error else "",
    )
    return reply


async def handle_define(
    interaction: discord.Interaction,
    word: str,
    *,
    service: LookupService,
    features: Features,
) -> Reply:
    return await _handle(interaction, word, kind="define", service=service, features=features)


async def handle_thesaurus(
    interaction: discord.Interaction,
    word: str,
    *,
    service: LookupService,
    features: Features,
) -> Reply:
    return await _handle(interaction, word, kind="thesaurus", service=service, features=features)
