"""Main CLI entry point for the leadradar command."""

import json
import logging
import time
import click
from rich.console import Console
from rich.table import Table
from rich.panel import Panel
from rich.progress import Progress, SpinnerColumn, TextColumn
from rich.prompt import Prompt
from typing import Optional

from .. import __version__
from ..core.config import reload_settings
from ..core.models import Platform, Priority, SignalStatus
from ..core.intelligence import SalesIntelligence
from ..storage.database import SignalDatabase
from ..scanning import ScanOrchestrator, ScanScheduler, ScanResult

console = Console()

PRIORITY_COLORS = {"highest": "red", "high": "yellow", "medium": "dim"}
TIER_COLORS = {"Hot Lead": "red", "Warm Lead": "yellow", "Qualified Prospect": "blue", "Cold Prospect": "dim"}


def get_db(db_path: Optional[str] = None) -> SignalDatabase:
    """Get database instance."""
    return SignalDatabase(db_path)


def _print_scan_result(result: ScanResult):
    source_lines = "\n".join(
        f"  {name}: {count}" + (" [red](failed)[/red]" if name in result.errors else "")
        for name, count in result.per_source_counts.items()
    )
    console.print(Panel.fit(
        f"[green]✓ Stored {result.total} signals[/green]\n\n"
        f"[bold]By Source:[/bold]\n{source_lines}\n\n"
        f"  🔥 High priority: [red]{result.high_priority_count}[/red]"
        + (f"\n  ♻️  Duplicates skipped: {result.duplicates_skipped}" if result.duplicates_skipped else ""),
        title=f"{result.mode.capitalize()} Scan Complete"
    ))
    for name, error in result.errors.items():
        console.print(f"[yellow]{name}: {error}[/yellow]")


@click.group()
@click.version_option(version=__version__, prog_name="leadradar")
@click.option("--verbose", "-v", is_flag=True, help="Enable debug logging")
def cli(verbose: bool):
    """Lead Radar - AI hardware sales signals from public discussions.

    \b
    Quick Start:
      leadradar init                       # Initialize database
      leadradar scan                       # Reddit + Hacker News
      leadradar scan --comprehensive       # All four sources
      leadradar score                      # Rank stored signals
      leadradar chat "show me hot leads"   # Ask the assistant
    """
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
    reload_settings()


# ============================================================================
# CORE COMMANDS
# ============================================================================

@cli.command()
@click.option("--db", "db_path", help="Custom database path")
def init(db_path: Optional[str]):
    """Initialize the signals database."""
    db = get_db(db_path)

    console.print(Panel.fit(
        f"[green]✓ Database initialized![/green]\n\n"
        f"Location: [cyan]{db.db_path}[/cyan]\n\n"
        f"[bold]Quick Start:[/bold]\n"
        f"1. [yellow]leadradar scan[/yellow]\n"
        f"2. [yellow]leadradar score[/yellow]\n"
        f"3. [yellow]leadradar signals --priority highest[/yellow]\n\n"
        f"[bold]Optional sources:[/bold]\n"
        f"• [yellow]LINKEDIN_ACCESS_TOKEN[/yellow]  - LinkedIn posts\n"
        f"• [yellow]TWITTER_BEARER_TOKEN[/yellow]   - Twitter/X search\n"
        f"• [yellow]OPENAI_API_KEY[/yellow]         - Generated outreach\n\n"
        f"[dim]Run 'leadradar --help' for all commands[/dim]",
        title=f"📡 Lead Radar v{__version__}"
    ))


@cli.command()
@click.option("--comprehensive", "-c", is_flag=True, help="Scan all four sources")
@click.option("--db", "db_path", help="Custom database path")
def scan(comprehensive: bool, db_path: Optional[str]):
    """Scan sources for new signals."""
    db = get_db(db_path)
    orchestrator = ScanOrchestrator(db)

    with Progress(
        SpinnerColumn(),
        TextColumn("[progress.description]{task.description}"),
        console=console
    ) as progress:
        progress.add_task(
            "Scanning all sources..." if comprehensive else "Scanning Reddit and Hacker News...",
            total=None,
        )
        result = orchestrator.comprehensive_scan() if comprehensive else orchestrator.quick_scan()

    _print_scan_result(result)


@cli.command()
@click.option("--priority", "-p", type=click.Choice([p.value for p in Priority]), help="Filter by priority")
@click.option("--platform", type=click.Choice([p.value for p in Platform]), help="Filter by platform")
@click.option("--limit", "-n", default=20, help="Number of signals to show")
@click.option("--db", "db_path", help="Custom database path")
def signals(priority: Optional[str], platform: Optional[str], limit: int, db_path: Optional[str]):
    """Display stored signals, newest first."""
    db = get_db(db_path)
    items = db.list_signals(
        limit=limit,
        priority=Priority(priority) if priority else None,
        platform=Platform(platform) if platform else None,
    )

    if not items:
        console.print("[yellow]No signals found matching criteria.[/yellow]")
        return

    table = Table(title=f"Signals ({len(items)})" + (f" - {priority}" if priority else ""))
    table.add_column("ID", justify="right", style="dim")
    table.add_column("Platform")
    table.add_column("Priority", justify="center")
    table.add_column("Title", style="cyan", max_width=45)
    table.add_column("Author", max_width=20)
    table.add_column("Eng.", justify="right")
    table.add_column("Keywords", max_width=30)

    for signal in items:
        color = PRIORITY_COLORS.get(signal.priority.value, "")
        table.add_row(
            str(signal.id),
            signal.platform.value,
            f"[{color}]{signal.priority.value}[/{color}]",
            signal.title[:45],
            signal.author[:20],
            str(signal.engagement),
            signal.keywords_text[:30],
        )

    console.print(table)


@cli.command()
@click.option("--limit", "-n", default=100, help="Number of stored signals to score")
@click.option("--show", "show_count", default=10, help="Number of leads to list")
@click.option("--db", "db_path", help="Custom database path")
def score(limit: int, show_count: int, db_path: Optional[str]):
    """Score stored signals and list the best leads."""
    db = get_db(db_path)
    intelligence = SalesIntelligence()
    scored = intelligence.score_all(db.list_signals(limit=limit))

    console.print(Panel.fit(
        f"[green]✓ Scored {scored['total']} signals[/green]\n\n"
        f"  🔥 Hot (150+):     [red]{len(scored['hot'])}[/red]\n"
        f"  🌡️  Warm (100-149): [yellow]{len(scored['warm'])}[/yellow]",
        title="Scoring Complete"
    ))

    if not scored["all"]:
        return

    table = Table(title=f"Top {min(show_count, scored['total'])} Leads")
    table.add_column("ID", justify="right", style="dim")
    table.add_column("Score", justify="right", style="bold")
    table.add_column("Tier", justify="center")
    table.add_column("Persona", max_width=22)
    table.add_column("Urgency", justify="center")
    table.add_column("Platform")
    table.add_column("Title", style="cyan", max_width=40)

    for lead in scored["all"][:show_count]:
        tier = lead.opportunity.type
        color = TIER_COLORS.get(tier, "")
        table.add_row(
            str(lead.signal.id),
            str(lead.lead_score),
            f"[{color}]{tier}[/{color}]",
            lead.persona.value,
            lead.urgency.value,
            lead.signal.platform.value,
            lead.signal.title[:40],
        )

    console.print(table)


@cli.command()
@click.argument("signal_id", type=int)
@click.option("--strategy", is_flag=True, help="Generate an outreach strategy")
@click.option("--db", "db_path", help="Custom database path")
def lead(signal_id: int, strategy: bool, db_path: Optional[str]):
    """Show the lead report for one signal."""
    db = get_db(db_path)
    signal = db.get_signal(signal_id)

    if not signal:
        console.print(f"[red]Signal #{signal_id} not found[/red]")
        return

    generator = None
    if strategy:
        from ..ai import TextGenerator
        generator = TextGenerator()

    intelligence = SalesIntelligence(generator=generator)
    report = intelligence.report(signal)
    breakdown = intelligence.engine.score_breakdown(signal)
    plan = report["strategy"]
    competitors = ", ".join(name for name, hit in report["competitor_mention_counts"].items() if hit)

    info_lines = [
        f"[bold]Platform:[/bold] {signal.platform.value}",
        f"[bold]Author:[/bold] {signal.author}",
        f"[bold]URL:[/bold] {signal.url or 'N/A'}",
        f"[bold]Priority:[/bold] {signal.priority.value}",
        f"[bold]Status:[/bold] {signal.status.value}",
        "",
        f"[bold]Lead Score:[/bold] {report['lead_score']} ({plan['type']})",
        f"[bold]Persona:[/bold] {report['persona']}",
        f"[bold]Urgency:[/bold] {report['urgency']}",
        f"[bold]Competitors:[/bold] {competitors or 'none'}",
        "",
        f"[bold]Action:[/bold] {plan['action']} - {plan['timeline']}",
        f"[bold]Approach:[/bold] {plan['approach']}",
    ]

    if breakdown["matches"]:
        info_lines.extend(["", "[bold]Matched Rules:[/bold]"])
        for m in breakdown["matches"][:10]:
            info_lines.append(f"  +{m['weight']}: \"{m['phrase']}\"")
        info_lines.append(
            f"  x{breakdown['engagement_multiplier']} engagement, "
            f"x{breakdown['platform_multiplier']} platform"
        )

    if plan.get("ai_strategy"):
        info_lines.extend(["", "[bold]Outreach Strategy:[/bold]", plan["ai_strategy"]])

    info_lines.extend(["", "[bold]Content:[/bold]", signal.content[:500]])

    console.print(Panel("\n".join(info_lines), title=f"Signal #{signal.id}: {signal.title[:60]}"))


@cli.command()
@click.argument("signal_id", type=int)
@click.option("--db", "db_path", help="Custom database path")
def respond(signal_id: int, db_path: Optional[str]):
    """Draft and store outreach text for a signal."""
    from ..ai import OutreachGenerator

    db = get_db(db_path)
    signal = db.get_signal(signal_id)

    if not signal:
        console.print(f"[red]Signal #{signal_id} not found[/red]")
        return

    with console.status("Drafting outreach..."):
        draft, response_id = OutreachGenerator().draft_and_store(signal, db)

    source = "generated" if draft.generated else "[yellow]fallback template[/yellow]"
    console.print(Panel(
        f"[bold]Analysis:[/bold]\n{draft.analysis}\n\n"
        f"[bold]Response:[/bold]\n{draft.response}\n\n"
        f"[bold]Context:[/bold]\n{draft.context}\n\n"
        f"[dim]Saved as response #{response_id} ({source}[dim])[/dim]",
        title=f"Outreach for Signal #{signal_id}"
    ))


@cli.command()
@click.option("--signal", "signal_id", type=int, help="Only responses for this signal")
@click.option("--db", "db_path", help="Custom database path")
def responses(signal_id: Optional[int], db_path: Optional[str]):
    """List stored outreach responses."""
    db = get_db(db_path)
    items = db.list_responses(signal_id=signal_id)

    if not items:
        console.print("[yellow]No responses stored yet.[/yellow]")
        return

    table = Table(title=f"Responses ({len(items)})")
    table.add_column("ID", justify="right", style="dim")
    table.add_column("Signal", justify="right")
    table.add_column("Platform")
    table.add_column("Title", style="cyan", max_width=35)
    table.add_column("Response", max_width=60)
    table.add_column("Created")

    for item in items:
        try:
            text = json.loads(item.response_text).get("response", item.response_text)
        except (ValueError, AttributeError):
            text = item.response_text
        table.add_row(
            str(item.id),
            str(item.signal_id),
            item.signal_platform or "",
            (item.signal_title or "")[:35],
            text[:60],
            item.created_at.strftime("%Y-%m-%d %H:%M"),
        )

    console.print(table)


@cli.command("status")
@click.argument("signal_id", type=int)
@click.argument("new_status", type=click.Choice([s.value for s in SignalStatus]))
@click.option("--db", "db_path", help="Custom database path")
def set_status(signal_id: int, new_status: str, db_path: Optional[str]):
    """Update a signal's outreach status."""
    db = get_db(db_path)
    signal = db.get_signal(signal_id)

    if not signal:
        console.print(f"[red]Signal #{signal_id} not found[/red]")
        return

    db.update_status(signal_id, SignalStatus(new_status))
    console.print(f"[green]✓ Signal #{signal_id}: {signal.status.value} → {new_status}[/green]")


@cli.command()
@click.option("--db", "db_path", help="Custom database path")
def analytics(db_path: Optional[str]):
    """Show database statistics and sales analytics."""
    db = get_db(db_path)
    data = db.get_stats()

    intelligence = SalesIntelligence()
    intelligence.score_all(db.list_signals())
    sales = intelligence.analytics()

    platform_lines = "\n".join(
        f"  {name}: {count}" for name, count in sorted(data["by_platform"].items(), key=lambda x: -x[1])
    )
    competitor_lines = "\n".join(f"  {name}: {count}" for name, count in sales["top_competitors"])

    console.print(Panel.fit(
        f"[bold]Total Signals:[/bold] {data['total_signals']}\n"
        f"[bold]Responses:[/bold] {data['total_responses']}\n\n"
        f"[bold]By Platform:[/bold]\n{platform_lines or '  (none)'}\n\n"
        f"[bold]By Priority:[/bold]\n"
        f"  Highest: [red]{data['by_priority'].get('highest', 0)}[/red]\n"
        f"  High:    [yellow]{data['by_priority'].get('high', 0)}[/yellow]\n"
        f"  Medium:  [dim]{data['by_priority'].get('medium', 0)}[/dim]\n\n"
        f"[bold]Sales (last {sales['total_leads']} signals):[/bold]\n"
        f"  🔥 Hot leads:  {sales['hot_leads']}\n"
        f"  🌡️  Warm leads: {sales['warm_leads']}\n"
        f"  Conversion:   {sales['conversion_rate']}%\n"
        f"  Avg score:    {sales['average_lead_score']}\n\n"
        f"[bold]Top Competitors:[/bold]\n{competitor_lines or '  (none)'}",
        title="📊 Lead Radar Analytics"
    ))


# ============================================================================
# ASSISTANT & AUTOMATION
# ============================================================================

@cli.command()
@click.argument("message", required=False)
@click.option("--db", "db_path", help="Custom database path")
def chat(message: Optional[str], db_path: Optional[str]):
    """Ask the sales assistant. Interactive when no MESSAGE is given."""
    from ..chat import IntentRouter

    router = IntentRouter(get_db(db_path))

    if message:
        reply = router.process_message(message)
        console.print(Panel(reply.text, title=f"Assistant ({reply.type})"))
        return

    console.print("[dim]Type 'exit' to quit.[/dim]")
    while True:
        text = Prompt.ask("[bold cyan]You[/bold cyan]")
        if text.strip().lower() in ("exit", "quit"):
            break
        reply = router.process_message(text)
        console.print(Panel(reply.text, title=f"Assistant ({reply.type})"))


@cli.command()
@click.option("--interval", type=int, help="Seconds between scans (default from settings)")
@click.option("--nightly-hour", type=int, help="Hour of the daily scan (default from settings)")
@click.option("--db", "db_path", help="Custom database path")
def schedule(interval: Optional[int], nightly_hour: Optional[int], db_path: Optional[str]):
    """Run comprehensive scans on a schedule until interrupted."""
    logging.getLogger("lead_radar").setLevel(logging.INFO)
    orchestrator = ScanOrchestrator(get_db(db_path))
    scheduler = ScanScheduler(orchestrator, interval_seconds=interval, nightly_hour=nightly_hour)
    scheduler.start()

    console.print(
        f"[green]Scheduler running[/green] - every {scheduler.interval}s and daily at "
        f"{scheduler.nightly_hour:02d}:00. Press Ctrl+C to stop."
    )
    try:
        while True:
            time.sleep(1)
    except KeyboardInterrupt:
        console.print("\n[yellow]Stopping scheduler...[/yellow]")
    finally:
        scheduler.stop()


if __name__ == "__main__":
    cli()
