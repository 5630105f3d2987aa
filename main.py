#!/usr/bin/env python
"""CLI for the launchfeed query service and scroll client."""

import argparse
import asyncio
import json
import logging
import sys
from pathlib import Path
from typing import Literal

import uvicorn
from pydantic import BaseModel, Field, field_validator

from launchfeed.config import (
    LaunchFeedConfig,
    create_app_from_config,
    create_engine,
    create_run_logger,
    create_session,
    get_default_config_path,
    load_config,
)
from launchfeed.data import FilterSet, QueryParameters
from launchfeed.errors import LaunchFeedError

logger = logging.getLogger(__name__)


class CLIArgs(BaseModel):
    """Validated CLI arguments."""

    command: Literal["serve", "query", "browse"]
    config: Path
    search: str = ""
    year: str = ""
    status: str = ""
    offset: int = Field(default=0, ge=0)
    limit: int = Field(default=10, ge=1)
    pages: int = Field(default=3, ge=1)
    log: bool = False
    log_dir: str | None = None

    @field_validator("config")
    @classmethod
    def config_must_exist(cls, v: Path) -> Path:
        if not v.exists():
            raise ValueError(f"Config file not found: {v}")
        return v


def serve(args: CLIArgs, config: LaunchFeedConfig) -> None:
    """Run the HTTP API."""
    app = create_app_from_config(
        config,
        log_override=args.log if args.log else None,
        log_dir_override=args.log_dir,
    )
    logger.info(f"Serving on http://{config.server.host}:{config.server.port}")
    uvicorn.run(
        app,
        host=config.server.host,
        port=config.server.port,
        log_level=config.logging.level.lower(),
    )


async def query(args: CLIArgs, config: LaunchFeedConfig) -> None:
    """Run one engine query against the configured source and print the page."""
    run_logger = create_run_logger(
        config,
        log_override=args.log if args.log else None,
        log_dir_override=args.log_dir,
    )
    engine = create_engine(config, run_logger=run_logger)
    params = QueryParameters.parse(
        search=args.search,
        year=args.year,
        status=args.status,
        offset=args.offset,
        limit=args.limit,
    )
    page = await engine.query(params)
    print(json.dumps(page.to_dict(), indent=2))

    if run_logger and run_logger.last_log_path:
        logger.info(f"Run log written to: {run_logger.last_log_path}")


async def browse(args: CLIArgs, config: LaunchFeedConfig) -> None:
    """Scroll through a running server and print launches grouped by year."""
    session = create_session(config.client)
    await session.apply_filters(
        FilterSet.parse(search=args.search, year=args.year, status=args.status)
    )
    for _ in range(args.pages - 1):
        if not await session.load_more():
            break

    for group in session.groups:
        print(f"\n{group.year}")
        for launch in group.launches:
            outcome = {True: "success", False: "failed", None: "unknown"}[launch.launch_success]
            if launch.upcoming:
                outcome = "upcoming"
            print(f"  #{launch.flight_number:<4} {launch.mission_name} ({outcome})")

    state = "end of list" if not session.has_more else "more available"
    print(f"\n{len(session.launches)} launches loaded, {state} [{session.status.value}]")


def main() -> None:
    """Entry point for the CLI."""
    parser = argparse.ArgumentParser(description="Query and browse launch records.")
    parser.add_argument(
        "command",
        choices=["serve", "query", "browse"],
        help="serve: run the HTTP API; query: one engine query; browse: scroll a running server",
    )
    parser.add_argument(
        "--config",
        "-c",
        type=Path,
        default=None,
        help="Path to YAML config file (default: configs/default.yaml)",
    )
    parser.add_argument("--search", default="", help="Mission name substring")
    parser.add_argument("--year", default="", help="Exact launch year")
    parser.add_argument("--status", default="", help="success, failed or upcoming")
    parser.add_argument("--offset", type=int, default=0, help="Page offset (query only)")
    parser.add_argument("--limit", type=int, default=10, help="Page size (query only)")
    parser.add_argument("--pages", type=int, default=3, help="Pages to load (browse only)")
    parser.add_argument(
        "--log",
        action="store_true",
        default=False,
        help="Write a JSON stage trace per engine query",
    )
    parser.add_argument("--log-dir", type=str, default=None, help="Directory for trace files")

    ns = parser.parse_args()
    config_path: Path = ns.config if ns.config else get_default_config_path()

    try:
        args = CLIArgs(
            command=ns.command,
            config=config_path,
            search=ns.search,
            year=ns.year,
            status=ns.status,
            offset=ns.offset,
            limit=ns.limit,
            pages=ns.pages,
            log=ns.log,
            log_dir=ns.log_dir,
        )
        config = load_config(args.config)
    except Exception as e:
        logging.basicConfig(level=logging.INFO, format="%(message)s")
        logger.error(str(e))
        sys.exit(1)

    logging.basicConfig(level=config.logging.level, format="%(asctime)s %(levelname)s %(name)s: %(message)s")

    try:
        if args.command == "serve":
            serve(args, config)
        elif args.command == "query":
            asyncio.run(query(args, config))
        else:
            asyncio.run(browse(args, config))
    except LaunchFeedError as e:
        logger.error(str(e))
        sys.exit(1)
    except KeyboardInterrupt:
        sys.exit(130)


if __name__ == "__main__":
    main()
