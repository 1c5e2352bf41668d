"""
Tests for adltransfer.core.secret.
"""

from __future__ import annotations

import pytest

from adltransfer.core.secret import ProtectedSecret, wrap
from adltransfer.exceptions import ImmutableViolation, SecretDisclosedError


def test_wrap_seals_secret() -> None:
    """Test that wrapped secrets are sealed and keep their length."""
    secret = wrap("p@ss")

    assert secret.is_sealed
    assert len(secret) == 4


def test_wrap_none_yields_empty_secret() -> None:
    """Test that a missing password becomes an empty sealed secret."""
    secret = wrap(None)

    assert secret.is_sealed
    assert len(secret) == 0


def test_sealed_secret_rejects_append() -> None:
    """Test that appending to a sealed secret fails."""
    secret = wrap("abc")

    with pytest.raises(ImmutableViolation):
        secret.append("d")
    assert len(secret) == 3


def test_append_before_seal() -> None:
    """Test building a secret character by character."""
    secret = ProtectedSecret()
    for char in "kéy":
        secret.append(char)

    assert len(secret) == 3
    assert not secret.is_sealed
    secret.seal()
    assert secret.disclose() == "kéy"


def test_append_rejects_multiple_characters() -> None:
    secret = ProtectedSecret()
    with pytest.raises(ValueError):
        secret.append("ab")


def test_disclose_only_once() -> None:
    """Test that the plaintext is handed out a single time."""
    secret = wrap("hunter2")

    assert secret.disclose() == "hunter2"
    with pytest.raises(SecretDisclosedError):
        secret.disclose()


def test_repr_hides_plaintext() -> None:
    secret = wrap("hunter2")

    assert "hunter2" not in repr(secret)
    assert "hunter2" not in str(secret)


def test_clear_zeroes_buffer() -> None:
    """Test that clear overwrites the stored bytes."""
    secret = wrap("hunter2")
    buffer = secret._buffer

    secret.clear()

    assert all(byte == 0 for byte in buffer)


def test_clear_resets_length() -> None:
    """Test that a cleared secret reports no characters."""
    secret = wrap("hunter2")

    secret.clear()

    assert len(secret) == 0
    assert not secret.disclose()
