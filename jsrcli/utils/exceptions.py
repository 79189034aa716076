"""
Exception hierarchy for jsr-cli.

Only two error kinds get special treatment at the top level:

- ``PackageNameError``: printed as a user-facing message, exit code 1
- ``ExecError``: the child process exit code is propagated verbatim

Everything else is fatal and surfaces with a full traceback.
"""

from typing import Optional


class JsrCliError(Exception):
    """Base class for all jsr-cli errors."""


class PackageNameError(JsrCliError):
    """Raised when a package identifier cannot be parsed."""


class JsrPackageNameError(PackageNameError):
    """Raised when a string is not a valid ``@scope/name`` JSR package."""


class NpmPackageNameError(PackageNameError):
    """Raised when a string is not a valid npm package specifier."""


class ExecError(JsrCliError):
    """
    Raised when a child process exits with a non-zero code.

    Args:
        code: Exit code reported by the child process
        command: Executable that was run
    """

    def __init__(self, code: int, command: Optional[str] = None):
        self.code = code
        self.command = command
        super().__init__(f"Child process exited with: {code}")


class MissingMetadataError(JsrCliError):
    """
    Raised when a registry response lacks a field we rely on.

    Args:
        message: Human-readable error message
        package: Package identity the metadata was requested for
    """

    def __init__(self, message: str, package: Optional[str] = None):
        self.message = message
        self.package = package
        super().__init__(message)


class RegistryNetworkError(JsrCliError):
    """
    Raised when a registry request returns a non-2xx status.

    Args:
        status_code: HTTP status code of the response
        url: URL that was requested
    """

    def __init__(self, status_code: int, url: str):
        self.status_code = status_code
        self.url = url
        super().__init__(f"Received {status_code} from {url}")


class UnsupportedPlatformError(JsrCliError):
    """Raised when no publishing binary exists for the current platform."""


__all__ = [
    "JsrCliError",
    "PackageNameError",
    "JsrPackageNameError",
    "NpmPackageNameError",
    "ExecError",
    "MissingMetadataError",
    "RegistryNetworkError",
    "UnsupportedPlatformError",
]
