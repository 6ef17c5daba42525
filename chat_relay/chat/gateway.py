"""
Chat Gateway Module

This module translates relay operations into Google Chat API calls: listing
the bot's spaces, posting a message to a space, and posting to a user by
first resolving the bot's direct message space with them.
"""

from typing import Any, Callable, List, Optional

from google.auth.exceptions import GoogleAuthError
from googleapiclient.errors import HttpError

from chat_relay.auth.credentials import CredentialProvider
from chat_relay.exceptions import RemoteError, ResolutionError, ValidationError
from chat_relay.types import ChatMessage, ChatSpace, SendToUserResult
from chat_relay.utils.logger import get_logger
from chat_relay.utils.services import get_chat_service

logger = get_logger("chat_relay.gateway")

DIRECT_MESSAGE = "DIRECT_MESSAGE"
DEFAULT_PAGE_SIZE = 100

# Failures surfaced to the caller as RemoteError
REMOTE_ERRORS = (HttpError, GoogleAuthError, OSError)


def _describe(error: Exception) -> str:
    if isinstance(error, HttpError) and error.reason:
        return str(error.reason)
    return str(error) or error.__class__.__name__


def find_direct_message_space(spaces: List[ChatSpace], user_email: str) -> Optional[ChatSpace]:
    """
    Find the bot's direct message space with a user.

    Args:
        spaces: Spaces as returned by spaces.list.
        user_email: Email to match exactly (case-sensitive).

    Returns:
        The first matching space, or None.
    """
    for space in spaces:
        if space.get("spaceType") != DIRECT_MESSAGE:
            continue
        user = (space.get("singleUserBotDm") or {}).get("user") or {}
        if user.get("email") == user_email:
            return space
    return None


class ChatGateway:
    """
    Gateway for the bot's Google Chat operations.
    """

    def __init__(
        self,
        credential_provider: CredentialProvider,
        page_size: int = DEFAULT_PAGE_SIZE,
        service_factory: Callable[[Any], Any] = get_chat_service,
    ) -> None:
        """
        Initialize the gateway.

        Args:
            credential_provider: Source of authorized credentials.
            page_size: Number of spaces fetched by list_spaces. Only one page is read.
            service_factory: Builds a Chat API service from credentials.
        """
        self._credential_provider = credential_provider
        self._page_size = page_size
        self._service_factory = service_factory

    @property
    def page_size(self) -> int:
        return self._page_size

    def _get_service(self) -> Any:
        credentials = self._credential_provider.get_authorized_client()
        return self._service_factory(credentials)

    def _list_spaces(self, service: Any) -> List[ChatSpace]:
        try:
            result = service.spaces().list(pageSize=self._page_size).execute()
        except REMOTE_ERRORS as e:
            logger.error(f"Failed to list spaces: {e}")
            raise RemoteError(_describe(e)) from e

        spaces = result.get("spaces", []) if result else []
        logger.debug(f"Listed {len(spaces)} spaces")
        return spaces

    def _create_message(self, service: Any, parent: str, text: str) -> ChatMessage:
        try:
            result = service.spaces().messages().create(
                parent=parent,
                body={"text": text},
            ).execute()
        except REMOTE_ERRORS as e:
            logger.error(f"Failed to send message to {parent}: {e}")
            raise RemoteError(_describe(e)) from e

        logger.info(f"Sent message to {parent}: {result.get('name', '')}")
        return result

    # =========================================================================
    # Operations
    # =========================================================================

    def list_spaces(self) -> List[ChatSpace]:
        """
        List the spaces the bot is a member of.

        Only the first page is fetched.

        Returns:
            List of space resources, possibly empty.

        Raises:
            RemoteError: If the Chat API call fails.
        """
        try:
            service = self._get_service()
        except REMOTE_ERRORS as e:
            raise RemoteError(_describe(e)) from e
        return self._list_spaces(service)

    def send_to_space(self, space_name: Optional[str], text: Optional[str]) -> ChatMessage:
        """
        Send a text message to a space.

        Args:
            space_name: The resource name of the space (e.g., "spaces/AAAAA").
            text: The message text.

        Returns:
            The created message.

        Raises:
            ValidationError: If either argument is missing. No remote call is made.
            RemoteError: If the Chat API call fails.
        """
        if not space_name or not text:
            raise ValidationError("spaceName and message are required")

        try:
            service = self._get_service()
        except REMOTE_ERRORS as e:
            raise RemoteError(_describe(e)) from e
        return self._create_message(service, space_name, text)

    def send_to_user(self, user_email: Optional[str], text: Optional[str]) -> SendToUserResult:
        """
        Send a text message to a user through their existing DM with the bot.

        The bot cannot open a DM on its own, so the user must have messaged
        it first. Only the first page of spaces is searched.

        Args:
            user_email: Email of the user.
            text: The message text.

        Returns:
            Dict with the created message under "result" and the DM space name under "space".

        Raises:
            ValidationError: If either argument is missing. No remote call is made.
            ResolutionError: If no DM space with the user is found.
            RemoteError: If a Chat API call fails.
        """
        if not user_email or not text:
            raise ValidationError("userEmail and message are required")

        try:
            service = self._get_service()
        except REMOTE_ERRORS as e:
            raise RemoteError(_describe(e)) from e

        spaces = self._list_spaces(service)
        dm_space = find_direct_message_space(spaces, user_email)
        if dm_space is None:
            logger.info(f"No DM space found among {len(spaces)} spaces")
            logger.debug(f"Unresolved DM recipient: {user_email}")
            raise ResolutionError(
                f"No DM space found with {user_email}. Ask them to message the bot first."
            )

        space_name = dm_space["name"]
        result = self._create_message(service, space_name, text)
        return {"result": result, "space": space_name}
