"""
Chat Relay - HTTP relay for Google Chat.

This package sends Google Chat messages as a bot authenticated with a service
account. It exposes three operations over HTTP (and as MCP tools):

- List the spaces the bot is in
- Send a message to a space
- Send a message to a user through their existing DM with the bot

Example:
    from chat_relay.auth.credentials import CredentialProvider
    from chat_relay.chat.gateway import ChatGateway
    from chat_relay.utils.config import get_config

    gateway = ChatGateway(CredentialProvider.from_config(get_config()))
    gateway.send_to_user("someone@example.com", "Hello!")
"""

__version__ = "1.0.0"
__author__ = "Chat Relay Contributors"
