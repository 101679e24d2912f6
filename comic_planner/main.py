"""
Comic Planner - Main Entry Point
Generates one plan from a prompt and prints it as JSON.
"""

import argparse
import asyncio
import json
import logging
import sys
from typing import List, Optional

from dotenv import load_dotenv
from pydantic import ValidationError

from comic_planner.config import create_default_config_from_env, create_settings_from_env
from comic_planner.core.exceptions import ConfigurationError, PipelineStageError
from comic_planner.core.pipeline import ComicPlanner
from comic_planner.models import ComicStyle, PlanRequest
from comic_planner.services import create_tier_clients


# Load environment variables
load_dotenv()


def configure_logging(level: int = logging.INFO) -> None:
    """Attach one stream handler to the comic_planner logger hierarchy."""
    logger = logging.getLogger("comic_planner")
    logger.setLevel(level)
    if not logger.handlers:
        handler = logging.StreamHandler()
        handler.setFormatter(logging.Formatter(
            '%(asctime)s - %(name)s - %(levelname)s - %(message)s'
        ))
        logger.addHandler(handler)


def parse_args(argv: Optional[List[str]] = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Generate a comic plan from a story prompt.")
    parser.add_argument("prompt", help="Free-text story idea")
    parser.add_argument("--max-pages", type=int, default=None, help="Page budget (1-20, default 5)")
    parser.add_argument("--language", default=None, help="Content language: uk or en")
    parser.add_argument("--style", default="american-classic", help="Visual style key")
    parser.add_argument("--setting", default=None, help="World setting key")
    parser.add_argument("--debug", action="store_true", help="Verbose logging")
    return parser.parse_args(argv)


async def main(argv: Optional[List[str]] = None) -> int:
    """Main entry point."""
    args = parse_args(argv)
    configure_logging(logging.DEBUG if args.debug else logging.INFO)

    config = create_default_config_from_env()
    try:
        settings = create_settings_from_env()
    except ValidationError as e:
        print(f"Invalid pipeline settings: {e}", file=sys.stderr)
        return 2

    try:
        clients = create_tier_clients(config)
    except ConfigurationError as e:
        print("Configuration errors:", file=sys.stderr)
        for error in e.details.get("errors", [e.message]):
            print(f"  - {error}", file=sys.stderr)
        return 2

    planner = ComicPlanner(clients, settings)
    request = PlanRequest(
        prompt=args.prompt,
        max_pages=args.max_pages,
        language=args.language,
        style=ComicStyle(visual=args.style, setting=args.setting),
    )

    try:
        plan = await planner.create_plan(request)
    except PipelineStageError as e:
        print(f"Planning failed: {e}", file=sys.stderr)
        return 1

    print(json.dumps(plan.model_dump(mode="json", by_alias=True), indent=2, ensure_ascii=False))
    return 0


def run() -> None:
    sys.exit(asyncio.run(main()))


if __name__ == "__main__":
    run()
