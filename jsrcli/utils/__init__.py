"""
Utility modules for jsr-cli.

Shared exception types, child process helpers and time formatting.
"""

from jsrcli.utils.exceptions import (
    ExecError,
    JsrCliError,
    JsrPackageNameError,
    MissingMetadataError,
    NpmPackageNameError,
    PackageNameError,
    RegistryNetworkError,
    UnsupportedPlatformError,
)
from jsrcli.utils.process import exec_command
from jsrcli.utils.timefmt import pretty_time, time_ago

__all__ = [
    "exec_command",
    "pretty_time",
    "time_ago",
    "JsrCliError",
    "PackageNameError",
    "JsrPackageNameError",
    "NpmPackageNameError",
    "ExecError",
    "MissingMetadataError",
    "RegistryNetworkError",
    "UnsupportedPlatformError",
]
