"""CLI entry point for sparse refresh."""

import asyncio
import signal
from pathlib import Path

import typer

from sparse_refresh.adapters.configuration import YamlConfigProvider
from sparse_refresh.adapters.jellyfin import JellyfinClient
from sparse_refresh.adapters.progress import ConsoleProgress
from sparse_refresh.config import DEFAULT_CONFIG_PATH, get_settings
from sparse_refresh.core import ItemKind, SparseRefreshError, TaskState
from sparse_refresh.evaluators import get_evaluator
from sparse_refresh.logging_config import configure_logging
from sparse_refresh.use_cases import RefreshService

KIND_NAMES = {
    "movie": ItemKind.MOVIE,
    "series": ItemKind.SERIES,
    "episode": ItemKind.EPISODE,
}


def main(
    kind: str = typer.Option("movie", "--kind", help="Item kind: movie, series or episode"),
    config: Path = typer.Option(DEFAULT_CONFIG_PATH, "--config", help="Path to config.yaml"),
    dry_run: bool = typer.Option(False, "--dry-run", help="Report sparse items without refreshing"),
    debug: bool = typer.Option(False, "--debug", help="Enable debug logging"),
) -> None:
    """Refresh library items with sparse metadata."""
    if kind.lower() not in KIND_NAMES:
        raise typer.BadParameter(f"unknown kind '{kind}'", param_hint="--kind")

    exit_code = asyncio.run(async_run(KIND_NAMES[kind.lower()], config, dry_run, debug))
    raise typer.Exit(code=exit_code)


def app() -> None:
    """CLI entry point."""
    typer.run(main)


async def async_run(kind: ItemKind, config_path: Path, dry_run: bool, debug: bool) -> int:
    """Async implementation of run command."""
    try:
        settings = get_settings(config_path)
    except SparseRefreshError as e:
        print(f"❌ {e}")
        return 1

    configure_logging("DEBUG" if debug else settings.log_level)
    evaluator = get_evaluator(kind)
    criteria = settings.criteria()

    # Header
    print("\n" + "=" * 70)
    print(f"🎬  {evaluator.name.upper()}")
    print("=" * 70)
    print(f"  {evaluator.description}")

    print("\n🔑 Credentials:")
    if settings.api_key:
        print("  ✓ JELLYFIN_API_KEY")
    else:
        print("  ✗ JELLYFIN_API_KEY not set (requests will be unauthenticated)")

    print("\n⚙️  Criteria:")
    print(f"  • Server: {settings.server_url}")
    print(f"  • Max days: {'unlimited' if criteria.max_days == -1 else criteria.max_days}")
    print(f"  • Refresh cooldown: {criteria.refresh_cooldown_minutes} min")
    print(f"  • Minimum provider ids: {criteria.minimum_provider_ids}")
    print(f"  • Bad names: {', '.join(criteria.bad_names) or '-'}")
    if dry_run:
        print("  • 🔍 Dry run: nothing will be refreshed")

    client = JellyfinClient(settings)
    service = RefreshService(
        evaluator=evaluator,
        library_store=client,
        refresh_executor=client,
        config_provider=YamlConfigProvider(config_path),
        dry_run=dry_run,
    )

    # Ctrl-C requests a clean stop before the next item
    cancellation = asyncio.Event()
    loop = asyncio.get_running_loop()
    try:
        loop.add_signal_handler(signal.SIGINT, cancellation.set)
    except (NotImplementedError, RuntimeError):
        pass

    print("\n" + "=" * 70)
    print(f"🔄 Processing {evaluator.item_type_name}")
    print("=" * 70)

    try:
        summary = await service.execute(cancellation, ConsoleProgress())
    except SparseRefreshError as e:
        print(f"\n❌ Failed: {e}")
        return 1
    finally:
        try:
            loop.remove_signal_handler(signal.SIGINT)
        except (NotImplementedError, RuntimeError):
            pass

    print("\n" + "=" * 70)
    if summary.state == TaskState.CANCELLED:
        print("⏹️  CANCELLED")
    else:
        print("✅ DONE")
    print("=" * 70)
    print(f"  • Sparse {evaluator.item_type_name}: {summary.total}")
    print(f"  • Processed: {summary.processed}")
    print(f"  • Refreshed: {summary.refreshed}")
    if summary.failed:
        print(f"  ⚠️  Failed: {summary.failed} ({', '.join(summary.failed_item_ids)})")
    print()
    return 0


if __name__ == "__main__":
    app()
