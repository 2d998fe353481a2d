"""Command line interface for fast-intercom-conversations."""

import asyncio
import json
import logging
import sys
from dataclasses import asdict

import click

from .config import Config
from .conversations import ConversationService
from .core.logging import setup_logging
from .models import Admin, PageParams, User
from .payloads import ConversationListState, ReplyType
from .repository import ConversationAPI

logger = logging.getLogger(__name__)

STATES = {
    "all": ConversationListState.SHOW_ALL,
    "open": ConversationListState.SHOW_OPEN,
    "closed": ConversationListState.SHOW_CLOSED,
    "unread": ConversationListState.SHOW_UNREAD,
}


def _echo(record):
    click.echo(json.dumps(asdict(record), indent=2, default=str))


def _run(ctx, operation):
    """Run one service call against a fresh API client and print the result."""
    config: Config = ctx.obj["config"]

    async def call():
        async with ConversationAPI(
            config.intercom_token,
            base_url=config.intercom_api_base_url,
            api_version=config.intercom_api_version,
            timeout=config.api_timeout_seconds,
        ) as api:
            return await operation(ConversationService(api))

    try:
        result = asyncio.run(call())
    except Exception as e:
        logger.debug("Command failed", exc_info=True)
        click.echo(f"❌ {e}", err=True)
        sys.exit(1)
    _echo(result)


def _user(intercom_user_id, user_id, email) -> User | None:
    if not (intercom_user_id or user_id or email):
        return None
    return User(id=intercom_user_id or "", user_id=user_id or "", email=email or "")


@click.group()
@click.option("--config", "-c", help="Configuration file path")
@click.option("--verbose", "-v", is_flag=True, help="Enable verbose logging")
@click.pass_context
def cli(ctx, config, verbose):
    """Work with Intercom conversations from the command line."""
    ctx.ensure_object(dict)

    try:
        ctx.obj["config"] = Config.load(config)
    except Exception as e:
        click.echo(f"Error loading configuration: {e}", err=True)
        sys.exit(1)

    if verbose:
        ctx.obj["config"].log_level = "DEBUG"
    setup_logging(ctx.obj["config"].log_level)


@cli.command("list")
@click.option("--admin", "admin_id", help="List conversations for this admin ID")
@click.option("--intercom-user-id", help="Intercom ID of the user")
@click.option("--user-id", help="External user ID")
@click.option("--email", help="User email")
@click.option(
    "--state", type=click.Choice(list(STATES)), default="all", show_default=True
)
@click.option("--order", default="", help="Order field (admin lists only)")
@click.option("--sort", default="", help="Sort direction (admin lists only)")
@click.option("--page", type=int, help="Page number")
@click.option("--per-page", type=int, help="Results per page")
@click.pass_context
def list_conversations(
    ctx, admin_id, intercom_user_id, user_id, email, state, order, sort, page, per_page
):
    """List conversations, optionally for one admin or user."""
    pages = PageParams(page=page, per_page=per_page)
    user = _user(intercom_user_id, user_id, email)
    if admin_id and user:
        raise click.UsageError("Use either --admin or the user options, not both")

    if admin_id:
        _run(ctx, lambda s: s.list_by_admin(admin_id, order, sort, STATES[state], pages))
    elif user:
        _run(ctx, lambda s: s.list_by_user(user, STATES[state], pages))
    else:
        _run(ctx, lambda s: s.list_all(pages))


@cli.command()
@click.argument("conversation_id")
@click.pass_context
def find(ctx, conversation_id):
    """Show a single conversation."""
    _run(ctx, lambda s: s.find(conversation_id))


@cli.command()
@click.argument("conversation_id")
@click.pass_context
def read(ctx, conversation_id):
    """Mark a conversation as read."""
    _run(ctx, lambda s: s.mark_read(conversation_id))


@cli.command()
@click.argument("conversation_id")
@click.option("--admin", "admin_id", help="Reply as this admin ID")
@click.option("--intercom-user-id", help="Reply as the user with this Intercom ID")
@click.option("--user-id", help="Reply as the user with this external ID")
@click.option("--email", help="Reply as the user with this email")
@click.option(
    "--type",
    "reply_type",
    type=click.Choice([ReplyType.COMMENT.value, ReplyType.NOTE.value]),
    default=ReplyType.COMMENT.value,
    show_default=True,
)
@click.option("--body", required=True, help="Message body")
@click.option("--attach", multiple=True, help="Attachment URL (repeatable)")
@click.pass_context
def reply(ctx, conversation_id, admin_id, intercom_user_id, user_id, email, reply_type, body, attach):
    """Reply to a conversation as an admin or a user."""
    user = _user(intercom_user_id, user_id, email)
    if bool(admin_id) == bool(user):
        raise click.UsageError("Give exactly one author: --admin or the user options")
    author = Admin(id=admin_id) if admin_id else user

    if attach:
        _run(
            ctx,
            lambda s: s.reply_with_attachment_urls(
                conversation_id, author, ReplyType(reply_type), body, list(attach)
            ),
        )
    else:
        _run(ctx, lambda s: s.reply(conversation_id, author, ReplyType(reply_type), body))


@cli.command()
@click.argument("conversation_id")
@click.argument("assigner_id")
@click.argument("assignee_id")
@click.pass_context
def assign(ctx, conversation_id, assigner_id, assignee_id):
    """Assign a conversation from one admin to another."""
    _run(
        ctx,
        lambda s: s.assign(conversation_id, Admin(id=assigner_id), Admin(id=assignee_id)),
    )


@cli.command("open")
@click.argument("conversation_id")
@click.argument("admin_id")
@click.pass_context
def open_conversation(ctx, conversation_id, admin_id):
    """Reopen a conversation."""
    _run(ctx, lambda s: s.open(conversation_id, Admin(id=admin_id)))


@cli.command("close")
@click.argument("conversation_id")
@click.argument("admin_id")
@click.pass_context
def close_conversation(ctx, conversation_id, admin_id):
    """Close a conversation."""
    _run(ctx, lambda s: s.close(conversation_id, Admin(id=admin_id)))


def main():
    cli()


if __name__ == "__main__":
    main()
