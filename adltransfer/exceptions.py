"""Exception hierarchy for AdlTransfer.

Every error the command line reports inherits from AdlTransferError, so the
top-level handler in ``adltransfer.cli.main`` can print it and set the exit
code without a stack trace:

- ParseError: malformed command line (unknown flag, wrong value type)
- ImmutableViolation: mutation of a sealed ProtectedSecret
- SecretDisclosedError: a ProtectedSecret was disclosed more than once
- AuthenticationError: the identity provider refused or could not issue a token
- TransferError: the transfer engine reported an unsuccessful transfer
"""

__all__ = [
    "AdlTransferError",
    "ParseError",
    "ImmutableViolation",
    "SecretDisclosedError",
    "AuthenticationError",
    "TransferError",
]


class AdlTransferError(Exception):
    """Base exception for all AdlTransfer errors."""


class ParseError(AdlTransferError):
    """Raised when the command line cannot be parsed."""


class ImmutableViolation(AdlTransferError):
    """Raised when a sealed secret is modified."""


class SecretDisclosedError(AdlTransferError):
    """Raised when a secret that was already handed out is disclosed again."""


class AuthenticationError(AdlTransferError):
    """Raised when Azure Active Directory does not return an access token.

    The message is the identity provider's own error description.
    """

    def __init__(self, message, error_code=None):
        super().__init__(message)
        self.error_code = error_code


class TransferError(AdlTransferError):
    """Raised when the transfer engine finishes a file unsuccessfully."""
