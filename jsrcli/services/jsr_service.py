"""JSR registry metadata service."""

import logging
from typing import Any, Dict, Optional

import requests
import semantic_version

from jsrcli import __version__
from jsrcli.config_manager import Settings
from jsrcli.packages import JsrPackage
from jsrcli.utils.exceptions import MissingMetadataError, RegistryNetworkError

logger = logging.getLogger(__name__)

_MISSING = object()


def _semver_key(version: str) -> semantic_version.Version:
    return semantic_version.Version(version)


def select_version(pkg: JsrPackage, meta: Dict[str, Any]) -> str:
    """Pick the version to show for ``pkg``.

    An explicit version on ``pkg`` wins. Otherwise the registry's ``latest``
    is used. A ``latest`` of ``None`` means the package has no stable
    release; in that case the smallest pre-release by semver precedence is
    chosen.

    Raises:
        MissingMetadataError: If ``latest`` is absent from the metadata, or
            no versions are published at all
    """
    if pkg.version is not None:
        return pkg.version

    latest = meta.get("latest", _MISSING)
    if latest is _MISSING:
        raise MissingMetadataError(f"Missing latest version for {pkg}", package=str(pkg))
    if latest is not None:
        return latest

    versions = sorted((meta.get("versions") or {}).keys(), key=_semver_key)
    prereleases = [v for v in versions if _semver_key(v).prerelease]
    candidates = prereleases or versions
    if not candidates:
        raise MissingMetadataError(f"No published versions found for {pkg}", package=str(pkg))
    return candidates[0]


class JsrMetadataService:
    """Fetches package metadata from JSR and its npm compatibility registry.

    Failed requests are not retried; a non-2xx response closes the streamed
    body and raises ``RegistryNetworkError``.
    """

    def __init__(self, settings: Settings, session: Optional[requests.Session] = None, timeout: int = 30):
        self.settings = settings
        self.timeout = timeout
        self.session = session or requests.Session()
        self.session.headers.update({
            'User-Agent': f'jsr-cli/{__version__}'
        })

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        self.session.close()

    def _get_json(self, url: str) -> Dict[str, Any]:
        logger.debug(f"GET {url}")
        response = self.session.get(url, stream=True, timeout=self.timeout)
        if not response.ok:
            # release the unconsumed body before bailing out
            response.close()
            raise RegistryNetworkError(response.status_code, url)
        try:
            return response.json()
        finally:
            response.close()

    def get_package_meta(self, pkg: JsrPackage) -> Dict[str, Any]:
        """GET ``<jsr_url>/@scope/name/meta.json``."""
        url = f"{self.settings.jsr_url}/@{pkg.scope}/{pkg.name}/meta.json"
        return self._get_json(url)

    def get_latest_package_version(self, pkg: JsrPackage) -> str:
        """Return the ``latest`` version reported by the registry."""
        meta = self.get_package_meta(pkg)
        latest = meta.get("latest")
        if latest is None:
            raise MissingMetadataError(f"Unable to find latest version of {pkg}", package=str(pkg))
        return latest

    def get_npm_package_info(self, pkg: JsrPackage) -> Dict[str, Any]:
        """GET the npm packument of the mirrored package, ``npm.<host>/@jsr/scope__name``."""
        mirror = JsrPackage(pkg.scope, pkg.name)
        url = f"{self.settings.npm_compat_url}/{mirror.to_npm_package()}"
        return self._get_json(url)
