#!/usr/bin/env python3
"""Command-line entry point for the documentation assistant server."""

import argparse
import logging
import sys

import uvicorn

from clients.generation_client import GenerationClient
from config import AssistantConfig
from observability.logging import setup_logging
from server.rag_api import create_app

logger = logging.getLogger(__name__)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Serve the documentation chat assistant")
    parser.add_argument("--host", help="Listen address (env HOST)")
    parser.add_argument("--port", type=int, help="Listen port (env PORT)")
    parser.add_argument("--llama-url", "--model", dest="generation_url",
                        help="Base URL of the completion service (env LLAMA_URL)")
    parser.add_argument("--threads", type=int, dest="server_threads",
                        help="Worker threads servicing requests; 1 handles requests one at a time")
    parser.add_argument("--algolia-app-id", dest="search_app_id", help="Search application ID")
    parser.add_argument("--algolia-api-key", dest="search_api_key", help="Search API key")
    parser.add_argument("--algolia-index", dest="search_index_name", help="Search index name")
    parser.add_argument("--log-level", help="Log level (DEBUG, INFO, WARNING, ERROR)")
    parser.add_argument("--json-logs", action="store_const", const=True, dest="log_json",
                        help="Emit JSON log lines")
    return parser


def resolve_config(argv=None) -> AssistantConfig:
    """Environment first, then any flags given on the command line."""
    args = build_parser().parse_args(argv)
    return AssistantConfig.from_env(**vars(args))


def log_startup(config: AssistantConfig) -> None:
    logger.info("Documentation assistant configuration:")
    for key, value in config.describe().items():
        logger.info(f"  {key}: {value}")


def probe_generation_service(config: AssistantConfig) -> bool:
    """Check the completion service once; an outage only degrades chat."""
    client = GenerationClient(config.generation_url, config.model_name, config.request_timeout)
    if client.is_available():
        logger.info(f"Generation service reachable at {config.generation_url}")
        return True
    logger.warning(
        f"Generation service not reachable at {config.generation_url}; "
        "chat requests will report failures until it comes up"
    )
    return False


def main(argv=None) -> int:
    config = resolve_config(argv)
    setup_logging(level=config.log_level, use_json=config.log_json)

    log_startup(config)
    probe_generation_service(config)

    uvicorn.run(create_app(config), host=config.host, port=config.port, log_level=config.log_level.lower())
    return 0


if __name__ == "__main__":
    sys.exit(main())
