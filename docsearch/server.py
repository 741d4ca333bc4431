"""MCP Server exposing documentation search as a tool."""

import argparse
import asyncio
import logging
import sys
from pathlib import Path
from typing import Any, Dict

from dotenv import load_dotenv
from mcp.server import Server
from mcp.server.stdio import stdio_server
from mcp import types

from .aggregator import SearchOutcome
from .config import load_config
from .embedder import Embedder
from .vector_store import VectorStore
from .searcher import Searcher

# Load environment variables from .env file
load_dotenv()


logger = logging.getLogger(__name__)


def setup_logging(verbose: bool = False):
    """
    Setup logging configuration.

    stdout carries the MCP protocol, so logs go to stderr and a file.

    Args:
        verbose: Enable DEBUG level logging
    """
    level = logging.DEBUG if verbose else logging.INFO

    handlers = [
        logging.StreamHandler(sys.stderr),
        logging.FileHandler('docsearch_server.log', encoding='utf-8')
    ]

    logging.basicConfig(
        level=level,
        format='%(asctime)s - %(name)s - %(levelname)s - %(message)s',
        handlers=handlers
    )

    logger.info(f"Logging initialized (verbose={verbose})")


def format_search_text(query: str, outcome: SearchOutcome) -> str:
    """Render a search outcome as plain text for an MCP client."""
    header = outcome.answer or "No results"
    text_parts = [f"{header} for query: '{query}'\n\n"]

    for i, r in enumerate(outcome.results, 1):
        text_parts.append(f"--- Result {i} (score: {r.score:.3f}) ---\n")
        text_parts.append(f"Title: {r.title}\n")
        text_parts.append(f"Link: {r.href}\n")
        if r.category:
            text_parts.append(f"Category: {r.category}\n")
        text_parts.append(f"\n{r.description}\n\n")

    return "".join(text_parts)


async def handle_search(searcher: Searcher, arguments: Dict[str, Any]) -> str:
    """
    Handle a search tool call.

    Args:
        searcher: Searcher instance
        arguments: Tool arguments (query, optional top_k)

    Returns:
        Formatted result text
    """
    query = arguments.get("query")
    if not query:
        raise ValueError("query parameter is required")

    outcome = await searcher.search(query, arguments.get("top_k"))
    return format_search_text(query, outcome)


def create_server(searcher: Searcher, default_top_k: int = 5) -> Server:
    """
    Create MCP server instance.

    Args:
        searcher: Searcher backing the search tool
        default_top_k: top_k advertised in the tool schema

    Returns:
        MCP Server instance
    """
    server = Server("docsearch")

    @server.list_tools()
    async def list_tools() -> list[types.Tool]:
        """List available tools."""
        return [
            types.Tool(
                name="search",
                description="Semantic search over the documentation site",
                inputSchema={
                    "type": "object",
                    "properties": {
                        "query": {
                            "type": "string",
                            "description": "Search query"
                        },
                        "top_k": {
                            "type": "integer",
                            "description": f"Number of pages to return (default: {default_top_k})",
                            "default": default_top_k
                        }
                    },
                    "required": ["query"]
                }
            )
        ]

    @server.call_tool()
    async def call_tool(name: str, arguments: dict) -> list[types.TextContent]:
        """Handle tool calls."""
        try:
            if name != "search":
                raise ValueError(f"Unknown tool: {name}")

            text = await handle_search(searcher, arguments)
            return [types.TextContent(type="text", text=text)]

        except Exception as e:
            logger.error(f"Tool call failed: {e}", exc_info=True)
            return [types.TextContent(
                type="text",
                text=f"Error: {str(e)}"
            )]

    return server


async def main_async(args):
    """Async main function."""
    setup_logging(args.verbose)

    config_path = Path(args.config).resolve() if args.config else None
    if config_path and not config_path.exists():
        logger.error(f"Config file does not exist: {config_path}")
        sys.exit(1)

    app_config = load_config(config_path)
    logger.info(
        f"Searching collection '{app_config.vector_index.collection_name}' "
        f"at {app_config.vector_index.base_url}"
    )

    searcher = Searcher(
        Embedder(app_config.embedding),
        VectorStore(app_config.vector_index),
        app_config.search
    )
    server = create_server(searcher, app_config.search.default_top_k)

    logger.info("Starting MCP server...")

    async with stdio_server() as (read_stream, write_stream):
        await server.run(read_stream, write_stream, server.create_initialization_options())


def main():
    """Main entry point."""
    parser = argparse.ArgumentParser(
        description="Documentation search MCP Server"
    )
    parser.add_argument(
        "--config",
        help="Path to config.yaml (default: $DOCSEARCH_CONFIG or ./config.yaml)"
    )
    parser.add_argument(
        "--verbose",
        action="store_true",
        help="Enable verbose (DEBUG) logging"
    )

    args = parser.parse_args()
    asyncio.run(main_async(args))


if __name__ == "__main__":
    main()
