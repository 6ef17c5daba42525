"""
MCP Tools for the Chat Relay.

This module exposes the relay operations as MCP tools so that MCP clients
can post to Google Chat as the bot. Tools never raise; failures come back
as `{"success": False, "error": ...}`.
"""

from typing import Any, Dict

from mcp.server.fastmcp import FastMCP

from chat_relay.chat.gateway import ChatGateway
from chat_relay.exceptions import ChatRelayError
from chat_relay.utils.logger import get_logger

logger = get_logger("chat_relay.mcp.tools")


def _error(tool: str, e: ChatRelayError) -> Dict[str, Any]:
    if e.status_code >= 500:
        logger.error(f"{tool} failed: {e}")
    else:
        # Client error messages may contain the recipient address
        logger.warning(f"{tool} rejected: {type(e).__name__}")
        logger.debug(f"{tool} rejection detail: {e}")
    return {"success": False, "error": e.message}


def setup_tools(mcp: FastMCP, gateway: ChatGateway) -> None:
    """
    Set up all Chat Relay tools.

    Args:
        mcp: The FastMCP application instance.
        gateway: The gateway the tools delegate to.
    """

    @mcp.tool()
    def list_chat_spaces() -> Dict[str, Any]:
        """
        List the Google Chat spaces the bot is a member of.

        Only the first page (up to 100 spaces) is returned.

        Returns:
            Dict containing:
                - success: True on success
                - spaces: List of space objects (name, spaceType, singleUserBotDm, ...)
        """
        try:
            return {"success": True, "spaces": gateway.list_spaces()}
        except ChatRelayError as e:
            return _error("list_chat_spaces", e)

    @mcp.tool()
    def send_chat_message(space_name: str, message: str) -> Dict[str, Any]:
        """
        Send a text message to a Google Chat space the bot is in.

        Args:
            space_name: The resource name of the space (e.g., "spaces/AAAAA").
            message: The message text.

        Returns:
            Dict containing the created message under "result".
        """
        try:
            return {"success": True, "result": gateway.send_to_space(space_name, message)}
        except ChatRelayError as e:
            return _error("send_chat_message", e)

    @mcp.tool()
    def send_chat_message_to_user(user_email: str, message: str) -> Dict[str, Any]:
        """
        Send a text message to a user through their direct message with the bot.

        The user must have messaged the bot at least once, otherwise no DM
        space exists and an error is returned.

        Args:
            user_email: Email address of the user.
            message: The message text.

        Returns:
            Dict containing:
                - result: The created message
                - space: The resource name of the DM space used
        """
        try:
            sent = gateway.send_to_user(user_email, message)
        except ChatRelayError as e:
            return _error("send_chat_message_to_user", e)
        return {"success": True, "result": sent["result"], "space": sent["space"]}
