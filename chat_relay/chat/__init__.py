"""
Chat module for talking to the Google Chat API as a bot.
"""

from chat_relay.chat.gateway import ChatGateway, find_direct_message_space

__all__ = ["ChatGateway", "find_direct_message_space"]
