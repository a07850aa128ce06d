"""
os-release Parser — Distribution Identity Resolver.

Reads the standard OS descriptor (``/etc/os-release``, falling back to
``/usr/lib/os-release``) and normalizes it into a DistroInfo. Resolution
never invents a default identity: a missing file or a missing ``ID`` is an
error the caller has to surface.
"""

import logging
import re
from pathlib import Path

from linux_distro_agent.core.exceptions import DistroNotFoundError, MalformedDescriptorError
from linux_distro_agent.models.distro import DistroInfo

logger = logging.getLogger(__name__)

OS_RELEASE_PATHS = (Path("/etc/os-release"), Path("/usr/lib/os-release"))

# os-release key -> DistroInfo field, for the plain string fields
_STRING_FIELDS = {
    "NAME": "name",
    "PRETTY_NAME": "pretty_name",
    "VERSION": "version",
    "VERSION_ID": "version_id",
    "HOME_URL": "home_url",
    "SUPPORT_URL": "support_url",
    "BUG_REPORT_URL": "bug_report_url",
}

_LINE_RE = re.compile(r"^([A-Za-z_][A-Za-z0-9_]*)=(.*)$")
_ESCAPE_RE = re.compile(r'\\([\\"$`])')


def _unquote(value: str) -> str:
    """
    Strip shell-style quoting from an os-release value.

    Double-quoted values may contain the escapes \\" \\\\ \\$ and \\`.
    Single-quoted values are taken literally.
    """
    value = value.strip()
    if len(value) >= 2 and value[0] == value[-1] and value[0] in "\"'":
        inner = value[1:-1]
        if value[0] == '"':
            inner = _ESCAPE_RE.sub(r"\1", inner)
        return inner
    return value


def _read_fields(content: str) -> dict[str, str]:
    """Collect KEY=VALUE pairs, skipping comments, blanks and junk lines."""
    fields: dict[str, str] = {}
    for line in content.splitlines():
        line = line.strip()
        if not line or line.startswith("#"):
            continue
        match = _LINE_RE.match(line)
        if not match:
            continue
        fields[match.group(1)] = _unquote(match.group(2))
    return fields


def parse_os_release(content: str, source: Path | str = "<string>") -> DistroInfo:
    """
    Parse os-release content into a DistroInfo.

    Args:
        content: Raw descriptor text.
        source: Where the content came from, for error messages.

    Returns:
        DistroInfo with a lowercase, non-empty id.

    Raises:
        MalformedDescriptorError: The ``ID`` key is missing or empty.
    """
    fields = _read_fields(content)

    distro_id = fields.get("ID", "").strip().lower()
    if not distro_id:
        raise MalformedDescriptorError(source, "missing mandatory ID field")

    id_like = tuple(item.lower() for item in fields.get("ID_LIKE", "").split())

    values = {attr: fields[key] for key, attr in _STRING_FIELDS.items() if fields.get(key)}
    return DistroInfo(id=distro_id, id_like=id_like, **values)


def resolve(path: Path | str | None = None) -> DistroInfo:
    """
    Detect the distribution from the os-release descriptor.

    Args:
        path: Explicit descriptor path. When omitted, the standard locations
            are tried in order.

    Returns:
        The parsed DistroInfo.

    Raises:
        DistroNotFoundError: No candidate file exists or could be read.
        MalformedDescriptorError: The file is not UTF-8 text or lacks ``ID``.
    """
    candidates = (Path(path),) if path is not None else OS_RELEASE_PATHS

    last_error: str | None = None
    for candidate in candidates:
        try:
            raw = candidate.read_bytes()
        except OSError as e:
            logger.debug(f"Cannot read {candidate}: {e}")
            last_error = e.strerror or str(e)
            continue

        try:
            content = raw.decode("utf-8")
        except UnicodeDecodeError as e:
            raise MalformedDescriptorError(candidate, f"not valid UTF-8 ({e.reason})") from e

        distro = parse_os_release(content, source=candidate)
        logger.debug(f"Read {candidate}: id={distro.id} id_like={list(distro.id_like)}")
        return distro

    raise DistroNotFoundError(candidates, last_error)
