"""Uzgram CLI — drive the moderated send path from a terminal."""

from datetime import datetime, timezone

import click
from rich.console import Console
from rich.table import Table

from uzgram import __version__
from uzgram.config import Settings, load_settings

console = Console()

_LEVEL_STYLES = {
    "critical_perm": "bold red",
    "severe_24h": "red",
    "warning_12h": "yellow",
    "none": "green",
}


def _settings(ctx: click.Context) -> Settings:
    return ctx.obj["settings"]


def _service(settings: Settings):
    from uzgram.accounts.store import AccountStore
    from uzgram.messaging.service import MessageService
    from uzgram.messaging.store import ChatStore
    from uzgram.moderation.classifier import ContentClassifier
    from uzgram.security.audit_log import AuditLogger

    accounts = AccountStore(settings.accounts_dir)
    service = MessageService(
        accounts,
        ChatStore(settings.chats_dir),
        classifier=ContentClassifier(settings.wordlists()),
        audit=AuditLogger(settings.audit_dir),
    )
    return accounts, service


@click.group()
@click.version_option(version=__version__)
@click.option("--config", "-c", "config_path", default=None, type=click.Path(exists=True), help="Settings YAML file")
@click.pass_context
def main(ctx: click.Context, config_path: str | None):
    """Uzgram — message moderation for the Uzgram messenger.

    Classify text, send moderated messages and inspect or lift account blocks.
    """
    ctx.ensure_object(dict)
    ctx.obj["settings"] = load_settings(config_path)


# ── Classify ─────────────────────────────────────────────────────────


@main.command()
@click.argument("text")
@click.pass_context
def classify(ctx: click.Context, text: str):
    """Classify TEXT without touching any account."""
    from uzgram.moderation.classifier import ContentClassifier

    classifier = ContentClassifier(_settings(ctx).wordlists())
    result = classifier.classify(text)
    style = _LEVEL_STYLES[result.level.value]
    console.print(f"  level:  [{style}]{result.level.value}[/]")
    if result.reason:
        console.print(f"  reason: {result.reason}")
        category, phrase = classifier.matched_phrase(text)
        console.print(f"  match:  {category.value} / {phrase!r}")


@main.command()
@click.pass_context
def wordlists(ctx: click.Context):
    """Print the effective word lists as YAML."""
    import yaml

    data = _settings(ctx).wordlists().to_dict()
    click.echo(yaml.safe_dump(data, allow_unicode=True, sort_keys=False))


# ── Accounts and chats ───────────────────────────────────────────────


@main.command()
@click.argument("account_id")
@click.argument("name")
@click.option("--language", "-l", default="uz", type=click.Choice(["uz", "ru", "en"]))
@click.pass_context
def register(ctx: click.Context, account_id: str, name: str, language: str):
    """Create account ACCOUNT_ID."""
    from uzgram.accounts.models import Account
    from uzgram.accounts.store import AccountStore

    store = AccountStore(_settings(ctx).accounts_dir)
    try:
        store.create(Account(id=account_id, name=name, language=language))
    except ValueError as e:
        raise click.ClickException(str(e))
    console.print(f"  [green]Created[/] account {account_id}")


@main.command(name="new-chat")
@click.argument("chat_id")
@click.argument("name")
@click.option("--type", "chat_type", default="private", type=click.Choice(["private", "group", "channel"]))
@click.option("--owner", default="", help="Owner account id")
@click.pass_context
def new_chat(ctx: click.Context, chat_id: str, name: str, chat_type: str, owner: str):
    """Create chat CHAT_ID."""
    from uzgram.messaging.models import Chat
    from uzgram.messaging.store import ChatStore

    store = ChatStore(_settings(ctx).chats_dir)
    members = [owner] if owner else []
    try:
        store.create(Chat(id=chat_id, name=name, type=chat_type, owner_id=owner, members=members))
    except ValueError as e:
        raise click.ClickException(str(e))
    console.print(f"  [green]Created[/] {chat_type} chat {chat_id}")


# ── Send ─────────────────────────────────────────────────────────────


@main.command()
@click.argument("account_id")
@click.argument("chat_id")
@click.argument("text")
@click.pass_context
def send(ctx: click.Context, account_id: str, chat_id: str, text: str):
    """Send TEXT to CHAT_ID as ACCOUNT_ID through moderation."""
    from uzgram.messaging.service import SendOutcome

    _, service = _service(_settings(ctx))
    try:
        result = service.send_message(account_id, chat_id, text)
    except ValueError as e:
        raise click.ClickException(str(e))

    if result.outcome == SendOutcome.accepted:
        console.print(f"  [green]Sent[/] message {result.message.id}")
    elif result.outcome == SendOutcome.empty:
        console.print("  [dim]Nothing to send.[/]")
    else:
        console.print(f"  [red]Not sent.[/] {result.notice}")


# ── Moderation status ────────────────────────────────────────────────


@main.command()
@click.argument("account_id")
@click.pass_context
def status(ctx: click.Context, account_id: str):
    """Show the block state of ACCOUNT_ID."""
    from uzgram.messaging.service import block_notice
    from uzgram.moderation.suspension import remaining

    accounts, _ = _service(_settings(ctx))
    account = accounts.get(account_id)
    if account is None:
        raise click.ClickException(f"Account {account_id} not found")

    now = datetime.now(timezone.utc)
    record = account.suspension
    notice = block_notice(account, now)

    table = Table(title=f"Moderation status: {account_id}")
    table.add_column("Field", style="cyan")
    table.add_column("Value")
    table.add_row("blocked", "[red]yes[/]" if notice else "[green]no[/]")
    table.add_row("permanent", str(record.is_permanently_blocked))
    table.add_row("reason", record.block_reason or "-")
    table.add_row("until", record.blocked_until.isoformat() if record.blocked_until else "-")
    left = remaining(record, now)
    if left is not None:
        table.add_row("remaining", str(left).split(".")[0])
    console.print(table)
    if notice:
        console.print(f"  {notice}")


@main.command()
@click.argument("account_id")
@click.pass_context
def unblock(ctx: click.Context, account_id: str):
    """Lift any block on ACCOUNT_ID."""
    from uzgram.security.audit_log import ACCOUNT_UNBLOCKED, AuditLogger

    settings = _settings(ctx)
    accounts, _ = _service(settings)
    try:
        accounts.unblock(account_id)
    except ValueError as e:
        raise click.ClickException(str(e))
    AuditLogger(settings.audit_dir).log_event(
        actor="cli",
        action=ACCOUNT_UNBLOCKED,
        resource_type="account",
        resource_id=account_id,
    )
    console.print(f"  [green]Unblocked[/] {account_id}")


# ── Audit ────────────────────────────────────────────────────────────


@main.command()
@click.option("--actor", default=None, help="Filter by account id")
@click.option("--action", default=None, help="Filter by action, e.g. message.rejected")
@click.option("--format", "fmt", default=None, type=click.Choice(["json", "csv"]), help="Export instead of a table")
@click.option("--limit", default=50, show_default=True)
@click.pass_context
def audit(ctx: click.Context, actor: str | None, action: str | None, fmt: str | None, limit: int):
    """List recorded moderation events."""
    from uzgram.security.audit_log import AuditLogger

    logger = AuditLogger(_settings(ctx).audit_dir)
    if fmt:
        click.echo(logger.export_events(fmt, actor=actor, action=action, limit=limit))
        return

    events = logger.get_events(actor=actor, action=action, limit=limit)
    if not events:
        console.print("[yellow]No audit events.[/]")
        return

    table = Table(title=f"Audit events ({len(events)})")
    table.add_column("Time", style="dim")
    table.add_column("Actor", style="cyan")
    table.add_column("Action")
    table.add_column("Resource")
    table.add_column("Details")
    for e in events:
        details = ", ".join(f"{k}={v}" for k, v in e.details.items())
        table.add_row(e.timestamp[:19], e.actor, e.action, f"{e.resource_type}:{e.resource_id}", details[:60])
    console.print(table)


if __name__ == "__main__":
    main()
