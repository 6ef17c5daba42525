#!/usr/bin/env python3
"""
Chat Relay Server

This module provides the entry points for the Chat Relay: the HTTP server
and the MCP server. Both load the service account key at startup and exit
immediately if it is missing or malformed.
"""

import sys
import traceback
from typing import Any, Dict

import uvicorn
from dotenv import load_dotenv
from mcp.server.fastmcp import FastMCP

from chat_relay.api import create_app
from chat_relay.auth.credentials import CredentialProvider
from chat_relay.chat.gateway import ChatGateway
from chat_relay.exceptions import ConfigError
from chat_relay.mcp.tools import setup_tools
from chat_relay.utils.config import get_config
from chat_relay.utils.logger import get_logger, setup_logger

logger = get_logger("chat_relay")


def build_gateway(config: Dict[str, Any]) -> ChatGateway:
    """
    Load credentials and build the gateway.

    Exits the process if the service account key cannot be loaded.

    Args:
        config: The application configuration.

    Returns:
        ChatGateway: The gateway.
    """
    try:
        provider = CredentialProvider.from_config(config)
    except ConfigError as e:
        logger.error(f"Error loading service account: {e}")
        sys.exit(1)

    logger.info(f"Loaded service account {provider.service_account_email}")
    return ChatGateway(provider, page_size=config["spaces_page_size"])


def _bootstrap() -> Dict[str, Any]:
    load_dotenv()
    setup_logger("chat_relay")
    return get_config()


def main() -> None:
    """
    Main entry point for the HTTP server.
    """
    config = _bootstrap()
    gateway = build_gateway(config)
    app = create_app(gateway, config)

    port = config["port"]
    logger.info(f"Bot running at port {port}")
    logger.info("Endpoints:")
    logger.info("   GET  /chat/spaces        -> List spaces")
    logger.info("   POST /chat/send          -> Send to a space")
    logger.info("   POST /chat/send-to-user  -> Send to a user (requires DM exists)")

    try:
        uvicorn.run(app, host=config["host"], port=port, log_level=str(config["log_level"]).lower())
    except Exception as e:
        logger.error(f"Error running HTTP server: {e}")
        logger.error(traceback.format_exc())
        sys.exit(1)


def mcp_main() -> None:
    """
    Main entry point for the MCP server.
    """
    config = _bootstrap()
    gateway = build_gateway(config)

    mcp = FastMCP(name=config["mcp_server_name"])
    setup_tools(mcp, gateway)

    try:
        logger.info("Starting Chat Relay MCP server")
        mcp.run()
    except Exception as e:
        logger.error(f"Error running MCP server: {e}")
        logger.error(traceback.format_exc())
        sys.exit(1)


if __name__ == "__main__":
    main()
