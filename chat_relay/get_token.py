#!/usr/bin/env python3
"""
Print a bearer token for the configured service account.

Handy for calling the Chat API by hand, e.g.:

    curl -H "Authorization: Bearer $(chat-relay-token)" \
        https://chat.googleapis.com/v1/spaces
"""

import sys

from dotenv import load_dotenv

from chat_relay.auth.credentials import CredentialProvider
from chat_relay.exceptions import ChatRelayError
from chat_relay.utils.config import get_config
from chat_relay.utils.logger import get_logger, setup_logger

logger = get_logger("chat_relay.get_token")


def main() -> None:
    load_dotenv()
    setup_logger("chat_relay")

    try:
        provider = CredentialProvider.from_config(get_config())
        token = provider.get_access_token()
    except ChatRelayError as e:
        logger.error(f"Could not obtain access token: {e}")
        sys.exit(1)

    print(token)


if __name__ == "__main__":
    main()
