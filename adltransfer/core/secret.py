"""In-memory protection for passwords and service principal keys."""

from adltransfer.exceptions import ImmutableViolation, SecretDisclosedError


class ProtectedSecret:
    """A byte buffer that is sealed after it is written and zeroed when dropped.

    Characters are appended one at a time. Once ``seal()`` has been called any
    further mutation raises ``ImmutableViolation``. The plaintext can be read
    back exactly once through ``disclose()``, which is reserved for the token
    exchange with Azure Active Directory.
    """

    def __init__(self):
        self._buffer = bytearray()
        self._length = 0
        self._sealed = False
        self._disclosed = False

    def append(self, char: str):
        """Append a single character to the secret."""
        if self._sealed:
            raise ImmutableViolation("The secret is read-only and cannot be modified.")
        if len(char) != 1:
            raise ValueError("Only one character can be appended at a time.")
        self._buffer.extend(char.encode("utf-8"))
        self._length += 1

    def seal(self):
        """Make the secret read-only."""
        self._sealed = True

    @property
    def is_sealed(self) -> bool:
        return self._sealed

    def disclose(self) -> str:
        """Return the plaintext. Only one disclosure is allowed."""
        if self._disclosed:
            raise SecretDisclosedError("The secret has already been disclosed.")
        self._disclosed = True
        return self._buffer.decode("utf-8")

    def clear(self):
        """Overwrite the buffer with zeros."""
        for index in range(len(self._buffer)):
            self._buffer[index] = 0
        self._buffer = bytearray()
        self._length = 0

    def __len__(self):
        return self._length

    def __repr__(self):
        return f"<ProtectedSecret length={self._length} sealed={self._sealed}>"

    __str__ = __repr__

    def __del__(self):
        self.clear()


def wrap(plaintext):
    """Copy ``plaintext`` into a sealed ProtectedSecret.

    ``None`` yields an empty secret.
    """
    secret = ProtectedSecret()
    if plaintext is not None:
        for char in plaintext:
            secret.append(char)
    secret.seal()
    return secret
