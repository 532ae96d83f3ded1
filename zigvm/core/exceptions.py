"""
Centralized exception hierarchy for zigvm.

This module defines all custom exceptions used across the codebase
so callers can tell routine user errors apart from broken preconditions.
"""


# ============================================================================
# Base Exceptions
# ============================================================================


class ZigVMError(Exception):
    """Base exception for all zigvm errors."""

    pass


class UserError(ZigVMError):
    """
    Base exception for errors caused by user input.

    These are reported with a clean message; no state has been mutated
    when one of them is raised.
    """

    pass


# ============================================================================
# Platform & Configuration Exceptions
# ============================================================================


class UnsupportedPlatformError(ZigVMError):
    """Raised when the host OS or CPU architecture has no Zig builds."""

    def __init__(self, system: str, machine: str):
        self.system = system
        self.machine = machine
        super().__init__(f"Unsupported platform/architecture: {system}/{machine}")


class ConfigError(ZigVMError):
    """Raised when the configuration file cannot be parsed or is invalid."""

    pass


# ============================================================================
# Version & Alias Exceptions
# ============================================================================


class InvalidVersionError(UserError):
    """Version string does not contain a MAJOR.MINOR.PATCH version."""

    def __init__(self, version: str):
        self.version = version
        super().__init__(f'Invalid version "{version}": expected MAJOR.MINOR.PATCH')


class VersionNotFoundError(UserError):
    """Raised when a version or alias does not match any installed version."""

    def __init__(self, token: str):
        self.token = token
        super().__init__(f'Version "{token}" is not installed.')


class NoVersionSpecifiedError(UserError):
    """Raised when no version was given and no project marker file was found."""

    pass


class AliasInUseError(UserError):
    """Raised when installing with an alias that is already assigned."""

    def __init__(self, alias: str, target: str):
        self.alias = alias
        self.target = target
        super().__init__(
            f'Alias "{alias}" is already in use for {target}. '
            "Please choose another name or unset it first."
        )


class AliasNotFoundError(UserError):
    """Raised when unsetting an alias that does not exist."""

    def __init__(self, alias: str):
        self.alias = alias
        super().__init__(f'Alias "{alias}" not found.')


class AliasStoreError(ZigVMError):
    """Raised when the alias file cannot be read or written."""

    pass


# ============================================================================
# Acquisition Exceptions
# ============================================================================


class DownloadError(ZigVMError):
    """Raised when a remote resource cannot be retrieved."""

    pass


class MirrorsExhaustedError(DownloadError):
    """Raised when no mirror and not the canonical source had the archive."""

    def __init__(self, attempted: int):
        self.attempted = attempted
        super().__init__(
            "Failed to download Zig from all available mirrors and the "
            f"canonical source ({attempted} candidate URLs tried)."
        )


class ArchiveError(ZigVMError):
    """Raised when an archive cannot be inspected or extracted."""

    pass


class ArchiveToolError(ArchiveError):
    """Raised when the external archive utility exits with a non-zero status."""

    def __init__(self, command: list, returncode: int, stderr: str = ""):
        self.command = command
        self.returncode = returncode
        self.stderr = stderr
        msg = f"Command failed with code {returncode}: {' '.join(command)}"
        if stderr:
            msg += f"\n{stderr.strip()}"
        super().__init__(msg)


# ============================================================================
# Activation Exceptions
# ============================================================================


class ActivationError(ZigVMError):
    """Raised when the active link cannot be created or removed."""

    pass
