"""Package identifiers for JSR packages and plain npm packages."""

import re
from typing import Optional, Union

from jsrcli.utils.exceptions import (
    JsrPackageNameError,
    NpmPackageNameError,
    PackageNameError,
)

# Scope used by the npm compatibility registry for mirrored JSR packages
JSR_NPM_SCOPE = "jsr"

EXTRACT_REG_NPM = re.compile(r"^(@([a-z][a-z0-9-]+)/)?([a-z0-9-]+)(@(.+))?$")
EXTRACT_REG = re.compile(r"^@([a-z][a-z0-9-]+)/([a-z0-9-]+)(@(.+))?$")
EXTRACT_REG_PROXY = re.compile(
    rf"^@{JSR_NPM_SCOPE}/([a-z][a-z0-9-]+)__([a-z0-9-]+)(@(.+))?$"
)


def _version_suffix(version: Optional[str]) -> str:
    return f"@{version}" if version is not None else ""


class JsrPackage:
    """A JSR package reference.

    Instances are parsed from either the canonical ``@scope/name[@version]``
    form or the npm mirror form ``@jsr/scope__name[@version]``. Both forms
    produce the same reference. Only ``version`` may change after
    construction, when it gets resolved from the registry.
    """

    __slots__ = ("_scope", "_name", "version")

    def __init__(self, scope: str, name: str, version: Optional[str] = None):
        self._scope = scope
        self._name = name
        self.version = version

    @classmethod
    def from_string(cls, value: str) -> "JsrPackage":
        """Parse a JSR package identifier.

        Args:
            value: ``@scope/name[@version]`` or ``@jsr/scope__name[@version]``

        Returns:
            Parsed package reference

        Raises:
            JsrPackageNameError: If neither form matches
        """
        match = EXTRACT_REG.match(value) or EXTRACT_REG_PROXY.match(value)
        if match is None:
            raise JsrPackageNameError(
                "Invalid jsr package name: A jsr package name must have the "
                f'format @<scope>/<name>, but got "{value}"'
            )
        return cls(match.group(1), match.group(2), match.group(4))

    @property
    def scope(self) -> str:
        return self._scope

    @property
    def name(self) -> str:
        return self._name

    @property
    def canonical_name(self) -> str:
        """``@scope/name`` without a version."""
        return f"@{self._scope}/{self._name}"

    def to_npm_package(self) -> str:
        """Return the npm mirror identifier, ``@jsr/scope__name[@version]``."""
        return f"@{JSR_NPM_SCOPE}/{self._scope}__{self._name}{_version_suffix(self.version)}"

    def to_alias_arg(self) -> str:
        """Return the install argument that aliases the mirror under the JSR name."""
        return f"{self.canonical_name}@npm:{self.to_npm_package()}"

    def __str__(self) -> str:
        return f"{self.canonical_name}{_version_suffix(self.version)}"

    def __repr__(self) -> str:
        return f"JsrPackage({str(self)!r})"

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, JsrPackage):
            return NotImplemented
        return (self._scope, self._name, self.version) == (
            other._scope,
            other._name,
            other.version,
        )

    __hash__ = None


class NpmPackage:
    """A plain npm package specifier, optionally scoped and versioned."""

    __slots__ = ("scope", "name", "version")

    def __init__(self, scope: Optional[str], name: str, version: Optional[str] = None):
        self.scope = scope
        self.name = name
        self.version = version

    @classmethod
    def from_string(cls, value: str) -> "NpmPackage":
        match = EXTRACT_REG_NPM.match(value)
        if match is None:
            raise NpmPackageNameError(f"Invalid npm package name: {value}")
        return cls(match.group(2), match.group(3), match.group(5))

    @property
    def canonical_name(self) -> str:
        prefix = f"@{self.scope}/" if self.scope is not None else ""
        return f"{prefix}{self.name}"

    def __str__(self) -> str:
        return f"{self.canonical_name}{_version_suffix(self.version)}"

    def __repr__(self) -> str:
        return f"NpmPackage({str(self)!r})"

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, NpmPackage):
            return NotImplemented
        return (self.scope, self.name, self.version) == (
            other.scope,
            other.name,
            other.version,
        )

    __hash__ = None


Package = Union[JsrPackage, NpmPackage]


def parse_package(value: str) -> Package:
    """Parse a command line package argument.

    JSR identifiers take precedence; anything else must at least be a valid
    npm specifier.

    Raises:
        PackageNameError: If the value is neither a JSR nor an npm package
    """
    try:
        return JsrPackage.from_string(value)
    except JsrPackageNameError:
        pass
    try:
        return NpmPackage.from_string(value)
    except NpmPackageNameError:
        raise PackageNameError(f"Invalid jsr or npm package name: {value}") from None
