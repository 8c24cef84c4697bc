"""
Command line entry point

Runs one review for the event described by GITHUB_EVENT_PATH and maps
the outcome to a process exit status.
"""

import argparse
import logging
import sys
from typing import List, Optional

from .config import AppConfig, setup_logging
from .github.client import GitHubClient
from .github.event import load_event
from .github.parser import DiffFilter
from .llm.client import GenerationConfig, ReviewClient
from .orchestrator import ReviewOrchestrator


logger = logging.getLogger(__name__)


def build_orchestrator(config: AppConfig) -> ReviewOrchestrator:
    """Wire clients and pipeline stages from configuration."""
    github_client = GitHubClient(
        config.github.token,
        base_url=config.github.api_base_url,
        timeout=config.github.timeout_seconds,
    )
    review_client = ReviewClient(
        api_url=config.inference.api_url,
        api_key=config.inference.api_key,
        generation_config=GenerationConfig(
            model=config.inference.model,
            temperature=config.inference.temperature,
            max_tokens=config.inference.max_tokens,
        ),
        timeout=config.inference.timeout_seconds,
    )
    return ReviewOrchestrator(
        github_client=github_client,
        review_client=review_client,
        diff_filter=DiffFilter.from_string(config.review.exclude),
        max_workers=config.review.max_workers,
    )


def parse_args(argv: Optional[List[str]] = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        prog="ai-review-action",
        description="Review a pull request diff with an LLM and post inline comments",
    )
    parser.add_argument("--config", help="YAML configuration file")
    parser.add_argument("--event-path", help="Webhook event payload (overrides GITHUB_EVENT_PATH)")
    return parser.parse_args(argv)


def main(argv: Optional[List[str]] = None) -> int:
    args = parse_args(argv)

    try:
        config = AppConfig.from_yaml(args.config) if args.config else AppConfig.from_env()
        if args.event_path:
            config.event_path = args.event_path
        config.validate()
        setup_logging(config.logging)
        logger.info(f"Configuration: {config.to_dict()}")

        event = load_event(config.event_path, event_name=config.event_name)
        result = build_orchestrator(config).run(event)
    except Exception as e:
        logging.basicConfig(level=logging.INFO)  # no-op once setup_logging ran
        logger.exception(f"Fatal Error: {e}")
        return 1

    logger.info(f"Review run finished: {result.status.value} ({result.processing_time:.2f}s)")
    return 0


if __name__ == "__main__":
    sys.exit(main())
