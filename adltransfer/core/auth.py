"""Authentication module for AdlTransfer (adltransfer)."""

import enum
import logging
import os
import time

import msal
import requests

from adltransfer.core.config import (
    APP_DIR_NAME,
    APP_SCOPES,
    AUTHORITY_HOST,
    DEFAULT_TOKEN_LIFETIME,
    PUBLIC_CLIENT_ID,
    TOKEN_CACHE_FILE,
    TOKEN_REFRESH_MARGIN,
    USER_SCOPES,
)
from adltransfer.exceptions import AuthenticationError

logger = logging.getLogger(__name__)


class PromptMode(enum.Enum):
    """When the Azure Active Directory sign-in prompt may be shown."""

    NEVER = "never"
    ALWAYS = "always"
    AUTO = "auto"


def select_prompt_mode(credentials):
    """Pick the prompt mode for the given credentials.

    Service principals never see a prompt. A user name without a password
    always gets one, with the user name as a login hint. Anything else reuses
    a cached session when possible.
    """
    if credentials.is_service_principal:
        return PromptMode.NEVER
    if credentials.user_name and credentials.secret is None:
        return PromptMode.ALWAYS
    return PromptMode.AUTO


def token_cache_path(metadata_path):
    return os.path.join(metadata_path, APP_DIR_NAME, TOKEN_CACHE_FILE)


class DataLakeAuth:
    """Acquires Azure Data Lake Store access tokens using MSAL."""

    def __init__(self, credentials, cache_path=None):
        """Initialize authentication with credentials."""
        self.credentials = credentials
        self.cache_path = cache_path
        self.authority = f"{AUTHORITY_HOST}/{credentials.tenant}"
        self.prompt_mode = select_prompt_mode(credentials)
        self.access_token = None
        self.expires_on = 0
        self._app = None
        self._cache = msal.SerializableTokenCache()
        self._load_cache()

    def get_access_token(self):
        """Return a bearer token, signing in on first use.

        Once signed in, tokens close to expiry are renewed silently through the
        MSAL application without prompting again.

        Raises AuthenticationError with the identity provider's message when
        no token can be acquired. Nothing is retried here.
        """
        if self.access_token and time.time() < self.expires_on - TOKEN_REFRESH_MARGIN:
            return self.access_token

        logger.debug(
            "Authenticating against %s (prompt mode: %s)",
            self.authority,
            self.prompt_mode.value,
        )
        try:
            if self._app is not None:
                result = self._acquire_refresh()
            elif self.prompt_mode is PromptMode.NEVER:
                result = self._acquire_for_service_principal()
            elif self.prompt_mode is PromptMode.ALWAYS:
                result = self._acquire_interactive()
            else:
                result = self._acquire_automatic()
        except (requests.exceptions.RequestException, ValueError) as e:
            raise AuthenticationError(str(e)) from e

        if not result or "access_token" not in result:
            result = result or {}
            raise AuthenticationError(
                result.get("error_description")
                or result.get("error")
                or "Failed to acquire access token.",
                error_code=result.get("error"),
            )

        self._save_cache()
        self.access_token = result["access_token"]
        self.expires_on = int(time.time()) + int(
            result.get("expires_in", DEFAULT_TOKEN_LIFETIME)
        )
        return self.access_token

    def _disclose_secret(self):
        return self.credentials.secret.disclose()

    def _public_app(self):
        self._app = msal.PublicClientApplication(
            client_id=PUBLIC_CLIENT_ID,
            authority=self.authority,
            token_cache=self._cache,
        )
        return self._app

    def _acquire_for_service_principal(self):
        self._app = msal.ConfidentialClientApplication(
            client_id=self.credentials.user_name,
            authority=self.authority,
            client_credential=self._disclose_secret(),
            token_cache=self._cache,
        )
        return self._app.acquire_token_for_client(scopes=APP_SCOPES)

    def _acquire_interactive(self, app=None):
        app = app or self._public_app()
        # The stored user name is only a hint; the user may pick another account.
        return app.acquire_token_interactive(
            scopes=USER_SCOPES,
            login_hint=self.credentials.user_name,
            prompt="select_account",
        )

    def _acquire_automatic(self):
        app = self._public_app()

        accounts = app.get_accounts(username=self.credentials.user_name)
        if accounts:
            result = app.acquire_token_silent(USER_SCOPES, account=accounts[0])
            if result and "access_token" in result:
                logger.debug("Reusing cached session for %s", accounts[0].get("username"))
                return result

        if self.credentials.user_name and self.credentials.has_secret:
            return app.acquire_token_by_username_password(
                self.credentials.user_name,
                self._disclose_secret(),
                scopes=USER_SCOPES,
            )

        return self._acquire_interactive(app)

    def _acquire_refresh(self):
        logger.debug("Renewing access token")
        if self.prompt_mode is PromptMode.NEVER:
            return self._app.acquire_token_for_client(scopes=APP_SCOPES)

        accounts = self._app.get_accounts()
        if not accounts:
            return None
        return self._app.acquire_token_silent(USER_SCOPES, account=accounts[0])

    def _load_cache(self):
        if self.cache_path and os.path.exists(self.cache_path):
            with open(self.cache_path, "r", encoding="utf-8") as f:
                self._cache.deserialize(f.read())

    def _save_cache(self):
        if not self.cache_path or not self._cache.has_state_changed:
            return
        os.makedirs(os.path.dirname(self.cache_path), exist_ok=True)
        with open(self.cache_path, "w", encoding="utf-8") as f:
            f.write(self._cache.serialize())
