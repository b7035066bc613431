"""Library Ledger MCP Server

Binds the ledger's operations to the Model Context Protocol:

- Tools (writes): add_book, update_book_copies, add_member, borrow_book,
  return_book
- Resources (reads): book and member lookups, a member's loans, overdue
  loans, library statistics

The server owns exactly one ``Library``. When ``snapshot_path`` is
configured the library is restored from the snapshot at startup and saved
back at shutdown; otherwise it starts empty and lives in memory only.
"""

import logging
import signal
import sys
from typing import Any

from fastmcp import FastMCP

from library_ledger.config import LedgerConfig, get_config
from library_ledger.ledger import Library
from library_ledger.persistence import SnapshotManager, load_snapshot, save_snapshot
from library_ledger.resources import build_all_resources
from library_ledger.tools import build_all_tools

logger = logging.getLogger(__name__)


def configure_logging(config: LedgerConfig) -> None:
    """Send logs to stderr; stdout carries the stdio transport."""
    logging.basicConfig(
        level=logging.DEBUG if config.debug else getattr(logging, config.log_level),
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        handlers=[logging.StreamHandler(sys.stderr)],
    )
    if not config.debug:
        logging.getLogger("fastmcp").setLevel(logging.WARNING)


def create_server(library: Library, config: LedgerConfig | None = None) -> FastMCP:
    """Build a FastMCP server whose tools and resources act on ``library``."""
    config = config or get_config()

    mcp = FastMCP(
        name=config.server_name,
        version=config.server_version,
        instructions=(
            "Library Ledger - tracks a library's catalog, members and loans. "
            "Use tools to register books and members, change copy counts, and "
            "borrow or return books. Use resources to look up books and members, "
            "list a member's loans, list overdue loans, and read circulation totals."
        ),
    )

    resources = build_all_resources(library)
    for resource in resources:
        uri = resource.get("uri_template", resource.get("uri"))
        logger.debug("Registering resource: %s with URI: %s", resource["name"], uri)
        mcp.resource(
            uri,
            name=resource["name"],
            description=resource["description"],
            mime_type=resource["mime_type"],
        )(resource["handler"])
    logger.info("Registered %d resources", len(resources))

    tools = build_all_tools(library)
    for tool in tools:
        logger.debug("Registering tool: %s", tool["name"])
        mcp.tool(
            name=tool["name"],
            description=tool["description"],
        )(tool["handler"])
    logger.info("Registered %d tools", len(tools))

    return mcp


def open_library(config: LedgerConfig) -> tuple[Library, SnapshotManager | None]:
    """Create the server's library, restoring the snapshot when persistence is on."""
    if not config.persistence_enabled:
        logger.info("Snapshot persistence disabled; starting with an empty ledger")
        return Library(loan_period=config.loan_period), None

    manager = SnapshotManager(config.get_database_url())
    state = load_snapshot(manager, loan_period=config.loan_period)
    return Library(state=state), manager


def close_library(library: Library, manager: SnapshotManager) -> None:
    """Save the final snapshot and release the database, even if saving fails."""
    try:
        save_snapshot(library.state, manager)
    except Exception:
        logger.exception("Failed to save the ledger snapshot")
    finally:
        manager.close()


def run_stdio_server(mcp: FastMCP, config: LedgerConfig) -> None:
    """Run the server on the stdio transport until stdin closes or a signal arrives."""
    logger.info("Starting %s v%s on stdio transport", config.server_name, config.server_version)

    def signal_handler(signum: int, _frame: Any) -> None:
        logger.info("Received signal %s, initiating shutdown...", signum)
        sys.exit(0)

    signal.signal(signal.SIGINT, signal_handler)
    signal.signal(signal.SIGTERM, signal_handler)

    mcp.run(transport="stdio")


def main() -> None:
    """Entry point for ``library-ledger`` and ``python -m library_ledger.server``."""
    config = get_config()
    configure_logging(config)

    logger.info("=" * 60)
    logger.info("Library Ledger MCP Server")
    logger.info("Version: %s", config.server_version)
    logger.info("Loan period: %d days", config.loan_period_days)
    logger.info("Snapshot: %s", config.snapshot_path or "disabled")
    logger.info("=" * 60)

    try:
        library, manager = open_library(config)
    except Exception:
        logger.exception("Failed to open the ledger")
        sys.exit(1)

    try:
        run_stdio_server(create_server(library, config), config)
    except KeyboardInterrupt:
        logger.info("Server stopped by user")
    except Exception:
        logger.exception("Fatal error in MCP server")
        sys.exit(1)
    finally:
        if manager is not None:
            close_library(library, manager)
        logger.info("Shutdown complete")


if __name__ == "__main__":
    main()
