"""Exit codes used by CLI error paths.

Every deployment failure exits with :attr:`ExitCode.GENERAL_ERROR` so
scripts wrapping ``hola-deploy deploy`` only need to test for non-zero.
The remaining codes belong to the configuration commands.

Contents:
    * :class:`ExitCode` - IntEnum of all exit codes used by this application.
"""

from __future__ import annotations

from enum import IntEnum


class ExitCode(IntEnum):
    """POSIX-conventional exit codes.

    * 0-1: success / any deployment or generic failure
    * 2: click usage error
    * 13: EACCES while installing configuration files
    * 22: EINVAL for unknown configuration sections
    * 78: EX_CONFIG (sysexits.h) for invalid settings
    * 130: interrupted by SIGINT (informational only)

    Example:
        >>> int(ExitCode.GENERAL_ERROR)
        1
    """

    SUCCESS = 0
    GENERAL_ERROR = 1
    USAGE_ERROR = 2
    PERMISSION_DENIED = 13
    INVALID_ARGUMENT = 22
    CONFIG_ERROR = 78
    SIGNAL_INT = 130


__all__ = ["ExitCode"]
