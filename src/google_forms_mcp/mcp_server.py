"""MCP server exposing the Google Forms tools.

Usage:
    google-forms-mcp                              # stdio transport (default)
    google-forms-mcp --transport streamable-http   # HTTP transport on port 8080
    google-forms-mcp --transport streamable-http --port 9000

Requires GOOGLE_CLIENT_ID, GOOGLE_CLIENT_SECRET and GOOGLE_REFRESH_TOKEN in
the environment or in ``.env``.
"""

import argparse
import asyncio
import logging
from contextlib import asynccontextmanager

from mcp import types
from mcp.server.lowlevel import Server

from google_forms_mcp.config import get_settings
from google_forms_mcp.logging_config import configure_logging
from google_forms_mcp.tools.definitions import TOOLS
from google_forms_mcp.tools.dispatch import OperationResult, create_services, execute_tool

logger = logging.getLogger(__name__)

SERVER_NAME = "google-forms-mcp"


def _build_tools() -> list[types.Tool]:
    """Convert definitions.py TOOLS to MCP Tool objects."""
    return [
        types.Tool(
            name=tool_def["name"],
            description=tool_def["description"],
            inputSchema=dict(tool_def["input_schema"]),
        )
        for tool_def in TOOLS
    ]


def _to_call_tool_result(result: OperationResult) -> types.CallToolResult:
    return types.CallToolResult(
        content=[types.TextContent(type="text", text=text) for text in result.content],
        isError=result.is_error,
    )


def _create_server(services: dict[str, object]) -> Server:
    """Create and configure the MCP server with tool handlers."""
    server = Server(SERVER_NAME)
    tools = _build_tools()

    @server.list_tools()
    async def handle_list_tools() -> list[types.Tool]:
        return tools

    # Arguments are validated by the dispatcher against the per-tool models.
    @server.call_tool(validate_input=False)
    async def handle_call_tool(name: str, arguments: dict | None) -> types.CallToolResult:
        loop = asyncio.get_running_loop()
        result = await loop.run_in_executor(None, execute_tool, services, name, arguments or {})
        return _to_call_tool_result(result)

    return server


def main():
    """Entry point for google-forms-mcp CLI."""
    parser = argparse.ArgumentParser(description="Google Forms MCP server")
    parser.add_argument(
        "--transport",
        choices=["stdio", "streamable-http"],
        default="stdio",
        help="Transport type (default: stdio)",
    )
    parser.add_argument(
        "--host",
        default="127.0.0.1",
        help="Host for HTTP transport (default: 127.0.0.1)",
    )
    parser.add_argument(
        "--port",
        type=int,
        default=8080,
        help="Port for HTTP transport (default: 8080)",
    )
    args = parser.parse_args()

    settings = get_settings()
    configure_logging(settings.log_level, settings.log_json, settings.log_file)

    missing = settings.missing_credentials()
    if missing:
        raise SystemExit(f"{', '.join(missing)} must be set (environment or .env)")

    services = create_services(settings)
    server = _create_server(services)

    if args.transport == "stdio":
        from mcp.server.stdio import stdio_server

        async def _run_stdio():
            async with stdio_server() as (read_stream, write_stream):
                logger.info("Google Forms MCP server running on stdio")
                await server.run(
                    read_stream,
                    write_stream,
                    server.create_initialization_options(),
                )

        try:
            asyncio.run(_run_stdio())
        except KeyboardInterrupt:
            logger.info("Interrupted, stdio transport closed")
    else:
        try:
            import uvicorn
        except ImportError as e:
            raise SystemExit(
                "uvicorn is required for the streamable-http transport: pip install uvicorn"
            ) from e
        from mcp.server.streamable_http_manager import StreamableHTTPSessionManager
        from starlette.applications import Starlette
        from starlette.routing import Mount

        if args.host != "127.0.0.1":
            logger.warning(
                "MCP HTTP server bound to %s: no authentication is enforced. "
                "Any client that can reach this port can edit the configured account's forms.",
                args.host,
            )

        session_manager = StreamableHTTPSessionManager(app=server, stateless=True)

        @asynccontextmanager
        async def lifespan(app):
            async with session_manager.run():
                yield

        app = Starlette(routes=[Mount("/", app=session_manager.handle_request)], lifespan=lifespan)
        uvicorn.run(app, host=args.host, port=args.port)


if __name__ == "__main__":
    main()
