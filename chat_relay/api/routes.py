"""
Routes Module

This module defines the relay's HTTP endpoints. Handlers are plain `def`
functions because the Google API client is blocking; FastAPI runs them in
its threadpool.

Responses are returned as plain dicts so that Chat API resources pass
through verbatim instead of being filtered by a response model.
"""

from typing import Any, Dict, Optional

from fastapi import APIRouter, Depends, Request

from chat_relay.api.schemas import SendMessageRequest, SendToUserRequest
from chat_relay.chat.gateway import ChatGateway

router = APIRouter()


def get_gateway(request: Request) -> ChatGateway:
    """Return the gateway attached to the application at startup."""
    return request.app.state.gateway


@router.get("/")
def health() -> Dict[str, Any]:
    return {"success": True, "message": "Bot is running"}


@router.get("/chat/spaces")
def list_spaces(gateway: ChatGateway = Depends(get_gateway)) -> Dict[str, Any]:
    """List the spaces the bot is in (first page only)."""
    return {"success": True, "spaces": gateway.list_spaces()}


@router.post("/chat/send")
def send_message(
    body: Optional[SendMessageRequest] = None,
    gateway: ChatGateway = Depends(get_gateway),
) -> Dict[str, Any]:
    """Send a message to an existing space (DM or room)."""
    body = body or SendMessageRequest()
    result = gateway.send_to_space(body.spaceName, body.message)
    return {"success": True, "result": result}


@router.post("/chat/send-to-user")
def send_to_user(
    body: Optional[SendToUserRequest] = None,
    gateway: ChatGateway = Depends(get_gateway),
) -> Dict[str, Any]:
    """Send a message to a user. Only works if the user already has a DM with the bot."""
    body = body or SendToUserRequest()
    sent = gateway.send_to_user(body.userEmail, body.message)
    return {"success": True, "result": sent["result"], "space": sent["space"]}
