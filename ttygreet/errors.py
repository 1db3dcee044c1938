from __future__ import annotations


class TtygreetError(Exception):
    """Base class for errors raised by ttygreet."""


class ConfigError(TtygreetError):
    pass


class TerminalError(TtygreetError):
    """The controlling terminal is unusable (not a tty, size or state unavailable)."""


class TerminalClosed(TerminalError):
    """End of input on the terminal."""


class AuthenticationError(TtygreetError):
    """Raised by an authenticator when the credentials are rejected.

    The message is shown to the user as-is.
    """
