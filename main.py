import sys
import asyncio
from typing import Optional

from loguru import logger
from rich import print
from rich.panel import Panel

from teams_graph.config.settings import AppSettings, load_settings
from teams_graph.logging.setup import setup_logging
from teams_graph.fetching.fetcher import GitHubFetcher
from teams_graph.fetching.team_loader import LoadError, TeamLoader
from teams_graph.graph.builder import build_graph
from teams_graph.graph.classifier import UnknownPrefixError
from teams_graph.models.graph import Graph
from teams_graph.storage.graph_writer import GraphWriteError, write_graph


async def generate_graph(
    settings: AppSettings, fetcher: Optional[GitHubFetcher] = None
) -> Graph:
    """Loads the relevant teams of the configured org and derives their graph."""
    owns_fetcher = fetcher is None
    fetcher = fetcher or GitHubFetcher(
        token=settings.github_token, timeout=settings.request_timeout
    )
    try:
        loader = TeamLoader(
            fetcher,
            org=settings.github_org,
            api_url=settings.github_api_url,
            page_size=settings.page_size,
            follow_pagination=settings.follow_pagination,
            max_concurrency=settings.max_concurrency,
        )
        teams = await loader.load_relevant_teams()
    finally:
        if owns_fetcher:
            await fetcher.close()

    return build_graph(teams, namespace=settings.graph_namespace)


async def run(settings: AppSettings, fetcher: Optional[GitHubFetcher] = None) -> int:
    """Runs the whole pipeline and returns the process exit code."""
    logger.info(f"Generating team graph for organization '{settings.github_org}'")

    try:
        graph = await generate_graph(settings, fetcher)
    except LoadError as e:
        logger.error(f"Error loading teams: {e}")
        return 1
    except UnknownPrefixError as e:
        logger.error(f"Error generating graph: {e}")
        return 1

    try:
        output = write_graph(graph, settings.output_path)
    except GraphWriteError as e:
        logger.error(f"Error writing graph: {e}")
        return 1

    edges = sum(len(node.memberships) for node in graph)
    print(
        Panel(
            f"Nodes: {len(graph)}\nMembership edges: {edges}\nOutput: {output}",
            title=f"Team graph for {settings.github_org}",
        )
    )
    return 0


def main() -> int:
    """Main entry point for the application."""
    settings = load_settings()
    setup_logging(settings)
    try:
        return asyncio.run(run(settings))
    except KeyboardInterrupt:
        logger.info("Execution interrupted by user (KeyboardInterrupt).")
        return 130
    except Exception as e:
        logger.exception(f"Unhandled exception in main execution: {e}")
        return 1


if __name__ == "__main__":
    sys.exit(main())
