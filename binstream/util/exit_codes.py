"""Documented exit codes for the binstream command line.

Exit codes follow UNIX conventions:
- 0: Success
- 1: The channel failed during a one-shot terminal session
- 2: Invalid command-line arguments or usage
- 3: The static content server could not start

Usage:
    from binstream.util.exit_codes import ExitCode
    sys.exit(ExitCode.CHANNEL_ERROR)
"""

from __future__ import annotations


class ExitCode:
    """Exit code constants for binstream processes.

    Attributes:
        SUCCESS: Normal termination (the producer closed the channel cleanly).
        CHANNEL_ERROR: The message channel reported an error.
        INVALID_ARGS: Command-line argument validation failed.
        SERVER_ERROR: The static content server failed to bind or start.
    """

    SUCCESS: int = 0
    CHANNEL_ERROR: int = 1
    INVALID_ARGS: int = 2
    SERVER_ERROR: int = 3

    @classmethod
    def message(cls, code: int) -> str:
        """Return a human-readable message for an exit code."""
        messages = {
            cls.SUCCESS: "Success",
            cls.CHANNEL_ERROR: "Channel error",
            cls.INVALID_ARGS: "Invalid arguments",
            cls.SERVER_ERROR: "Server error",
        }
        return messages.get(code, f"Unknown exit code {code}")
