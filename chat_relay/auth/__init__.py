"""
Auth module for loading the service account key and minting bearer tokens.
"""

from chat_relay.auth.credentials import (
    CredentialProvider,
    ServiceAccountKey,
    load_service_account_key,
)

__all__ = ["CredentialProvider", "ServiceAccountKey", "load_service_account_key"]
