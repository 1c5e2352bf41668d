"""Core Azure Data Lake Store client for AdlTransfer (adltransfer)."""

import logging

from azure.core.credentials import AccessToken
from azure.datalake.store import core

logger = logging.getLogger(__name__)


class TokenCredentials:
    """Token credential handed to the Data Lake Store file system.

    Implements the azure-core ``get_token`` protocol on top of DataLakeAuth,
    so the REST layer can ask for a fresh token whenever the current one is
    about to expire. The requested scopes are ignored: DataLakeAuth always
    asks for the Data Lake Store resource that suits its sign-in mode.
    """

    def __init__(self, auth):
        self.auth = auth

    def get_token(self, *scopes, **kwargs):
        token = self.auth.get_access_token()
        return AccessToken(token, self.auth.expires_on)


def create_filesystem(auth, account_name):
    """Open the Data Lake Store file system of ``account_name``.

    Signs in before the file system is created, so authentication errors
    surface before any transfer starts.
    """
    auth.get_access_token()
    logger.debug("Connecting to Data Lake Store account %s", account_name)
    return core.AzureDLFileSystem(
        token_credential=TokenCredentials(auth), store_name=account_name
    )
