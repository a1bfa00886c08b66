"""
Command-line interface for the Steam store client.

Runs a single store query and prints the result as JSON.
"""

import asyncio
import json
import sys
from collections.abc import Awaitable, Callable, Coroutine
from datetime import datetime, timezone
from typing import Any

from pydantic import BaseModel, Field

from steam_storefront.client import ReviewsFilter, Steam, SteamBuilder, SteamError
from steam_storefront.config import get_settings
from steam_storefront.logger import get_logger, setup_logging

# Initialize logging
setup_logging()
logger = get_logger(__name__, component="cli")


class CLIOutput(BaseModel):
    """Structured output for CLI commands."""

    success: bool
    command: str
    timestamp: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))
    data: dict[str, Any] | list[Any] | None = None
    error: str | None = None


def print_json(output: CLIOutput) -> None:
    """Print output as formatted JSON."""
    print(json.dumps(output.model_dump(mode="json"), indent=2, default=str))


def _dump(value: Any) -> Any:
    if isinstance(value, BaseModel):
        return value.model_dump(mode="json")
    if isinstance(value, list):
        return [_dump(v) for v in value]
    if isinstance(value, dict):
        return {k: _dump(v) for k, v in value.items()}
    return value


def build_client() -> Steam:
    """Build a client from the environment settings."""
    return SteamBuilder.from_settings(get_settings()).build()


async def run_query(command: str, query: Callable[[Steam], Awaitable[Any]]) -> CLIOutput:
    """
    Run one store query and wrap its outcome.

    Store errors become an unsuccessful output rather than a traceback.
    """
    async with build_client() as steam:
        try:
            result = await query(steam)
        except SteamError as e:
            logger.error("Query failed", command=command, error=str(e), endpoint=e.endpoint)
            return CLIOutput(success=False, command=command, error=f"{type(e).__name__}: {e}")

    data = _dump(result)
    if not isinstance(data, dict | list):
        data = {"value": data}
    return CLIOutput(success=True, command=command, data=data)


async def cmd_reviews(app_id: int, pages: int = 1) -> CLIOutput:
    """Fetch up to ``pages`` pages of reviews."""

    async def query(steam: Steam) -> list[Any]:
        collected: list[Any] = []
        review_filter = ReviewsFilter()
        async for page in steam.review_pages(app_id, review_filter):
            collected.append(page)
            logger.info(
                "Fetched review page",
                app_id=app_id,
                page=len(collected),
                num_reviews=page.query_summary.num_reviews,
            )
            if len(collected) >= pages:
                break
        return collected

    return await run_query("reviews", query)


async def cmd_test_config() -> CLIOutput:
    """Test configuration loading."""
    settings = get_settings()
    return CLIOutput(
        success=True,
        command="test-config",
        data={
            "store_url": settings.steam.store_url,
            "timeout_seconds": settings.steam.timeout_seconds,
            "country_code": settings.steam.country_code,
            "language": settings.steam.language,
            "retry_max_attempts": settings.retry.max_attempts,
            "log_level": settings.logging.level,
        },
    )


def print_usage() -> None:
    """Print CLI usage information."""
    usage = """
Steam Storefront CLI
====================

Usage: steam-storefront <command> [arguments]

Commands:
  test-config                   Test configuration loading
  app <app_id>                  Application details
  package <pkg_id>              Package details
  dlc <app_id>                  DLC of an application
  price <app_ids>               Prices for comma-separated app IDs
  featured                      Featured items
  featured-categories           Featured categories (specials, top sellers, ...)
  genres                        Genre list
  apps-in-genre <genre>         Apps of a genre
  apps-in-category <category>   Apps of a category
  reviews <app_id>              Reviews of an application

Options:
  --pages <n>                   Number of review pages to fetch (default 1)

Environment:
  STEAM_COUNTRY_CODE, STEAM_LANGUAGE, STEAM_STORE_URL, RETRY_MAX_ATTEMPTS, LOG_LEVEL

Examples:
  STEAM_COUNTRY_CODE=US steam-storefront price 483840,565610
"""
    print(usage)


def _require_arg(position: int, name: str) -> str:
    if len(sys.argv) <= position:
        print(f"Error: {name} required")
        sys.exit(1)
    return sys.argv[position]


def _option(name: str, default: str) -> str:
    if name in sys.argv:
        idx = sys.argv.index(name)
        if idx + 1 < len(sys.argv):
            return sys.argv[idx + 1]
    return default


def dispatch(command: str) -> Coroutine[Any, Any, CLIOutput] | None:
    """Map a command name to the coroutine that runs it."""
    if command == "test-config":
        return cmd_test_config()
    if command == "featured":
        return run_query(command, lambda s: s.featured())
    if command == "featured-categories":
        return run_query(command, lambda s: s.featured_categories())
    if command == "genres":
        return run_query(command, lambda s: s.genres())
    if command == "apps-in-genre":
        genre = _require_arg(2, "genre")
        return run_query(command, lambda s: s.apps_in_genre(genre))
    if command == "apps-in-category":
        category = _require_arg(2, "category")
        return run_query(command, lambda s: s.apps_in_category(category))
    if command == "app":
        app_id = int(_require_arg(2, "app_id"))
        return run_query(command, lambda s: s.app(app_id))
    if command == "package":
        pkg_id = int(_require_arg(2, "pkg_id"))
        return run_query(command, lambda s: s.package(pkg_id))
    if command == "dlc":
        app_id = int(_require_arg(2, "app_id"))
        return run_query(command, lambda s: s.dlc(app_id))
    if command == "price":
        app_ids = [int(x.strip()) for x in _require_arg(2, "app_ids").split(",")]
        return run_query(command, lambda s: s.price(app_ids))
    if command == "reviews":
        app_id = int(_require_arg(2, "app_id"))
        return cmd_reviews(app_id, pages=int(_option("--pages", "1")))
    return None


def main() -> None:
    """Main CLI entry point."""
    if len(sys.argv) < 2:
        print_usage()
        sys.exit(1)

    command = sys.argv[1]

    if command in ("help", "--help", "-h"):
        print_usage()
        return

    try:
        job = dispatch(command)
        if job is None:
            print(f"Unknown command: {command}")
            print_usage()
            sys.exit(1)

        output = asyncio.run(job)
        print_json(output)
        if not output.success:
            sys.exit(1)

    except KeyboardInterrupt:
        print("\nInterrupted by user")
        sys.exit(130)
    except Exception as e:
        logger.exception("CLI error", error=str(e))
        print_json(CLIOutput(success=False, command=command, error=str(e)))
        sys.exit(1)


if __name__ == "__main__":
    main()
