"""HachiTrend command-line interface.

Hunt outliers and discover trends from the terminal, or run the API server.

Usage:
    hachitrend outliers -n Gaming
    hachitrend outliers -k "minecraft speedrun" -o outliers.json
    hachitrend trends -n Tech
    hachitrend serve --port 8000
"""

import argparse
import json
import logging
import sys
from typing import List, Optional

from rich.console import Console
from rich.panel import Panel
from rich.table import Table
from rich.text import Text

from hachitrend.models.niche import Niche
from hachitrend.models.outlier import OutlierSearchResult, OutlierTier
from hachitrend.models.trend import Trend
from hachitrend.services.ai_service import AIService
from hachitrend.services.outlier_finder_service import OutlierFinderService
from hachitrend.services.trend_service import TrendService
from hachitrend.services.youtube_api_service import get_youtube_api_service
from hachitrend.utils.config import load_config, setup_logging, validate_config
from hachitrend.utils.credentials import CredentialStore
from hachitrend.utils.errors import ErrorPolicy, HachiTrendError
from hachitrend.utils.formatting import format_compact_number

logger = logging.getLogger(__name__)

NICHE_CHOICES = [niche.value for niche in Niche]


def truncate_text(text: str, max_length: int) -> str:
    """Truncate text with ellipsis if needed."""
    if not text:
        return ""
    if len(text) <= max_length:
        return text
    return text[: max_length - 3] + "..."


def get_tier_style(tier: OutlierTier) -> str:
    """Get rich style for tier display."""
    styles = {
        OutlierTier.VIRAL_ANOMALY: "bold magenta",
        OutlierTier.EXPLOSIVE: "bold purple",
        OutlierTier.OUTLIER: "green",
    }
    return styles.get(tier, "white")


def display_outliers(result: OutlierSearchResult, console: Console) -> None:
    """Display outlier results in a rich table."""
    subject = result.keyword or result.niche

    if not result.outliers:
        console.print("\n[yellow]No outliers found.[/yellow]")
        console.print(
            f"Scanned {result.videos_scanned} videos from "
            f"{result.channels_analyzed} channels for '{subject}'."
        )
        return

    summary = Text()
    summary.append("Search: ", style="bold")
    summary.append(f"{subject}\n")
    summary.append("Channels analyzed: ", style="bold")
    summary.append(f"{result.channels_analyzed}\n")
    summary.append("Videos scanned: ", style="bold")
    summary.append(f"{result.videos_scanned}\n")
    summary.append("Outliers found: ", style="bold")
    summary.append(f"{len(result.outliers)}", style="green bold")

    console.print(Panel(summary, title="Outlier Hunter", border_style="red"))

    table = Table(
        show_header=True,
        header_style="bold cyan",
        border_style="red",
        row_styles=["", "dim"],
    )
    table.add_column("#", justify="right", style="dim")
    table.add_column("Title", style="white", max_width=45)
    table.add_column("Channel", style="cyan", max_width=18)
    table.add_column("Subs", justify="right")
    table.add_column("Views", justify="right", style="green")
    table.add_column("Avg", justify="right", style="yellow")
    table.add_column("Ratio", justify="right", style="bold")
    table.add_column("Tier")

    for i, outlier in enumerate(result.outliers, 1):
        table.add_row(
            str(i),
            truncate_text(outlier.title, 45),
            truncate_text(outlier.channel_name, 18),
            outlier.subscriber_label,
            format_compact_number(outlier.view_count),
            format_compact_number(outlier.channel_typical_views),
            f"{outlier.display_ratio}x",
            Text(outlier.tier.value, style=get_tier_style(outlier.tier)),
        )

    console.print(table)

    legend = Text()
    legend.append("Tiers: ")
    legend.append("Viral Anomaly", style="bold magenta")
    legend.append(" (>10x) | ")
    legend.append("Explosive", style="bold purple")
    legend.append(" (>5x) | ")
    legend.append("Outlier", style="green")
    console.print(legend)


def display_trends(trends: List[Trend], console: Console) -> None:
    """Display trends as rich panels."""
    if not trends:
        console.print("\n[yellow]No trends found.[/yellow]")
        return

    for trend in trends:
        body = Text()
        body.append(f"{trend.description}\n\n")
        body.append("Relevance: ", style="bold")
        body.append(f"{trend.relevance_score}\n")
        body.append("Search: ", style="bold")
        body.append(f"{trend.search_query}\n")
        if trend.trend_nature:
            body.append("Nature (model): ", style="bold")
            body.append(f"{trend.trend_nature}\n")
        if trend.computed_nature:
            body.append("Nature (channels): ", style="bold")
            body.append(f"{trend.computed_nature.value}\n")
        if trend.stats:
            body.append("Avg views: ", style="bold")
            body.append(f"{trend.stats.average_views or '-'}  ")
            body.append("Avg subs: ", style="bold")
            body.append(f"{trend.stats.average_subscriber_count or '-'}\n")
        for source in trend.sources[:3]:
            body.append(f"  - {source.title} ", style="dim")
            body.append(f"{source.uri}\n", style="blue")

        console.print(Panel(body, title=trend.title, border_style="cyan"))


def export_json(data: dict, output_path: str) -> None:
    """Export results to JSON file."""
    with open(output_path, "w", encoding="utf-8") as f:
        json.dump(data, f, indent=2, ensure_ascii=False)

    logger.info(f"Results exported to: {output_path}")


def resolve_api_key(args: argparse.Namespace, config: dict) -> Optional[str]:
    """YouTube key from --api-key, then the credential store, then the environment."""
    if args.api_key:
        return args.api_key.strip()
    store = CredentialStore(config["settings_file"], default_key=config.get("youtube_api_key"))
    return store.get()


def build_ai_service(config: dict) -> AIService:
    return AIService(
        api_key=config["gemini_api_key"],
        model_name=config["gemini_model"],
        script_model_name=config["gemini_script_model"],
        image_model_name=config["gemini_image_model"],
    )


def run_outliers(args: argparse.Namespace, config: dict, console: Console) -> int:
    api_key = resolve_api_key(args, config)
    if not api_key:
        console.print("[red]YouTube API key required.[/red] Use --api-key or set YOUTUBE_API_KEY.")
        return 1

    service = OutlierFinderService(
        youtube=get_youtube_api_service(api_key),
        max_results=config["outlier_max_results"],
        search_window_days=config["search_window_days"],
        min_views=config["outlier_min_views"],
        min_ratio=args.min_ratio if args.min_ratio is not None else config["outlier_min_ratio"],
    )

    console.print("\n[bold red]Outlier Hunter[/bold red]")
    console.print(f"Searching: [cyan]{args.keyword or args.niche}[/cyan]\n")

    result = service.find_outliers(args.niche, args.keyword)
    display_outliers(result, console)

    if args.output:
        export_json(result.to_dict(), args.output)
        console.print(f"\n[green]Results saved to: {args.output}[/green]")
    return 0


def run_trends(args: argparse.Namespace, config: dict, console: Console) -> int:
    errors = validate_config(config)
    if errors:
        for error in errors:
            console.print(f"[red]{error}[/red]")
        return 1

    service = TrendService(
        ai_service=build_ai_service(config),
        youtube_factory=get_youtube_api_service,
        missing_key_policy=ErrorPolicy(config["trend_missing_key_policy"]),
        region_code=config["region_code"],
        search_window_days=config["search_window_days"],
        max_results=config["trend_max_results"],
        trend_count=config["trend_count"],
    )

    console.print("\n[bold cyan]Trend Discovery[/bold cyan]")
    console.print(f"Analyzing: [cyan]{args.keyword or args.niche}[/cyan]\n")

    trends = service.fetch_trends(args.niche, resolve_api_key(args, config), args.keyword)
    display_trends(trends, console)

    if args.output:
        export_json({"trends": [t.to_dict() for t in trends]}, args.output)
        console.print(f"\n[green]Results saved to: {args.output}[/green]")
    return 0


def run_serve(args: argparse.Namespace, config: dict, console: Console) -> int:
    import uvicorn

    console.print(f"[bold]Starting HachiTrend API on http://{args.host}:{args.port}[/bold]")
    uvicorn.run(
        "hachitrend.api.server:app",
        host=args.host,
        port=args.port,
        reload=args.reload,
        log_level=config["log_level"].lower(),
    )
    return 0


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="hachitrend",
        description="YouTube trend discovery and outlier hunting",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  hachitrend outliers -n Gaming
  hachitrend outliers -k "budget travel" -o outliers.json
  hachitrend trends -n "Artificial Intelligence"
  hachitrend serve --port 8000
        """,
    )
    parser.add_argument(
        "-v", "--verbose",
        action="store_true",
        help="Enable verbose logging",
    )

    subparsers = parser.add_subparsers(dest="command", required=True)

    def add_search_arguments(sub: argparse.ArgumentParser) -> None:
        sub.add_argument(
            "-n", "--niche",
            choices=NICHE_CHOICES,
            default=Niche.GAMING.value,
            help="Niche to search (default: Gaming)",
        )
        sub.add_argument(
            "-k", "--keyword",
            default=None,
            help="Keyword to search; overrides the niche",
        )
        sub.add_argument(
            "--api-key",
            default=None,
            help="YouTube Data API key (default: stored key or YOUTUBE_API_KEY)",
        )
        sub.add_argument(
            "-o", "--output",
            type=str,
            default=None,
            help="Export results to JSON file",
        )

    outliers_parser = subparsers.add_parser("outliers", help="Find videos that outperform their channel")
    add_search_arguments(outliers_parser)
    outliers_parser.add_argument(
        "--min-ratio",
        type=float,
        default=None,
        help="Minimum views/average ratio to include (default: OUTLIER_MIN_RATIO)",
    )

    trends_parser = subparsers.add_parser("trends", help="Cluster popular videos into trends")
    add_search_arguments(trends_parser)

    serve_parser = subparsers.add_parser("serve", help="Run the HTTP API")
    serve_parser.add_argument("--host", default="127.0.0.1", help="Bind address (default: 127.0.0.1)")
    serve_parser.add_argument("--port", type=int, default=8000, help="Port (default: 8000)")
    serve_parser.add_argument("--reload", action="store_true", help="Reload on code changes")

    return parser


COMMANDS = {
    "outliers": run_outliers,
    "trends": run_trends,
    "serve": run_serve,
}


def main(argv: Optional[List[str]] = None) -> int:
    """Main entry point for the CLI."""
    args = build_parser().parse_args(argv)
    config = load_config()

    setup_logging("DEBUG" if args.verbose else config["log_level"])

    console = Console()
    try:
        return COMMANDS[args.command](args, config, console)
    except KeyboardInterrupt:
        console.print("\n[yellow]Cancelled by user.[/yellow]")
        return 1
    except HachiTrendError as e:
        console.print(f"\n[red]Error: {e}[/red]")
        if args.verbose:
            console.print_exception()
        return 1


if __name__ == "__main__":
    sys.exit(main())
