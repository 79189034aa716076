"""
Registry mapping files.

Makes sure the package manager knows that the ``@jsr`` scope lives on the
JSR npm registry. All writers are idempotent and never drop or reorder
existing content.
"""

import logging
import re
from pathlib import Path
from typing import Union

from jsrcli.config_manager import JSR_NPM_REGISTRY_URL
from jsrcli.packages import JSR_NPM_SCOPE

logger = logging.getLogger(__name__)

NPMRC_FILE = ".npmrc"
BUNFIG_FILE = "bunfig.toml"

NPMRC_MARKER = f"@{JSR_NPM_SCOPE}:registry="
BUNFIG_MARKER = f'"@{JSR_NPM_SCOPE}"'
BUNFIG_SCOPES_HEADER = re.compile(r"^\[install\.scopes\][ \t]*(\r?\n|$)", re.MULTILINE)

# yarn berry keeps this in .yarnrc.yml, set through `yarn config set`
YARN_BERRY_CONFIG_KEY = f"npmScopes.{JSR_NPM_SCOPE}.npmRegistryServer"


def get_newline_chars(source: str) -> str:
    """Return the line ending used by ``source``, ``\\n`` when unknown."""
    index = source.find("\n")
    if index > 0 and source[index - 1] == "\r":
        return "\r\n"
    return "\n"


def _read_text(path: Path) -> str:
    with open(path, "r", encoding="utf-8", newline="") as f:
        return f.read()


def _write_text(path: Path, content: str) -> None:
    path.parent.mkdir(parents=True, exist_ok=True)
    with open(path, "w", encoding="utf-8", newline="") as f:
        f.write(content)


def ensure_registry_mapping(path: Union[str, Path], marker: str, entry: str) -> bool:
    """Append ``entry`` to the file at ``path`` unless ``marker`` is already in it.

    Args:
        path: Config file to update or create
        marker: Substring whose presence means the mapping already exists
        entry: Text to add, written with ``\\n`` line endings

    Returns:
        True if the file was written, False if it was left untouched
    """
    path = Path(path)
    if not path.exists():
        _write_text(path, entry)
        logger.debug(f"Created {path} with {JSR_NPM_SCOPE} registry mapping")
        return True

    content = _read_text(path)
    if marker in content:
        logger.debug(f"@{JSR_NPM_SCOPE} registry already mapped in {path}, skipping")
        return False

    nl = get_newline_chars(content)
    separator = nl if content and not content.endswith(nl) else ""
    _write_text(path, content + separator + entry.replace("\n", nl))
    logger.debug(f"Added @{JSR_NPM_SCOPE} registry to {path}")
    return True


def setup_npmrc(directory: Union[str, Path], registry_url: str = JSR_NPM_REGISTRY_URL) -> bool:
    """Map the ``@jsr`` scope in ``<directory>/.npmrc`` (npm, pnpm, yarn classic)."""
    entry = f"{NPMRC_MARKER}{registry_url}\n"
    return ensure_registry_mapping(Path(directory) / NPMRC_FILE, NPMRC_MARKER, entry)


def setup_bunfig_toml(directory: Union[str, Path], registry_url: str = JSR_NPM_REGISTRY_URL) -> bool:
    """Map the ``@jsr`` scope in ``<directory>/bunfig.toml``.

    When an ``[install.scopes]`` table already exists the key is added right
    below its header; otherwise the whole table is appended.
    """
    path = Path(directory) / BUNFIG_FILE
    key_line = f'{BUNFIG_MARKER} = "{registry_url}"\n'
    entry = f"[install.scopes]\n{key_line}"

    if path.exists():
        content = _read_text(path)
        header = BUNFIG_SCOPES_HEADER.search(content)
        if BUNFIG_MARKER not in content and header is not None:
            nl = get_newline_chars(content)
            head = content[:header.end()]
            if not header.group(1):
                head += nl
            _write_text(path, head + key_line.replace("\n", nl) + content[header.end():])
            logger.debug(f"Added @{JSR_NPM_SCOPE} scope to existing [install.scopes] in {path}")
            return True

    return ensure_registry_mapping(path, BUNFIG_MARKER, entry)
