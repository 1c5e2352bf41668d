"""Configuration constants for AdlTransfer (adltransfer)."""

import os
import sys

# Azure Active Directory constants
AUTHORITY_HOST = "https://login.microsoftonline.com"
COMMON_TENANT = "common"

# Well-known public client id used for interactive and username/password sign-in
PUBLIC_CLIENT_ID = "1950a258-227b-4e31-a9cf-717495945fc2"

# Azure Data Lake Store resource scopes
USER_SCOPES = ["https://datalake.azure.net//user_impersonation"]
APP_SCOPES = ["https://datalake.azure.net//.default"]  # Scope for confidential client flow

# Token lifetime assumed when the identity provider omits expires_in, and how
# long before expiry a token is renewed
DEFAULT_TOKEN_LIFETIME = 3600
TOKEN_REFRESH_MARGIN = 300

# Transfer defaults
DEFAULT_PER_FILE_THREADS = 10
DEFAULT_CONCURRENT_FILES = 5
DEFAULT_SEGMENT_LENGTH = 268435456  # 256 MiB

# Environment variable names
ENV_USER = "ADLTRANSFER_USER"
ENV_PASSWORD = "ADLTRANSFER_PASSWORD"
ENV_TENANT_ID = "ADLTRANSFER_TENANT_ID"

# Files kept below the metadata directory
APP_DIR_NAME = "adltransfer"
TOKEN_CACHE_FILE = "msal_token_cache.json"
LEDGER_DIR_NAME = "transfers"

EXIT_SUCCESS = 0
EXIT_FAILURE = 1


def default_metadata_path():
    """Return the platform's local application-data directory."""
    if sys.platform == "win32":
        local_app_data = os.getenv("LOCALAPPDATA")
        if local_app_data:
            return local_app_data
        return os.path.join(os.path.expanduser("~"), "AppData", "Local")

    return os.getenv("XDG_DATA_HOME") or os.path.join(
        os.path.expanduser("~"), ".local", "share"
    )
