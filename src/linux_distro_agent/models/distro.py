"""
Distro Model — Identity of the running (or targeted) Linux distribution.

Built from the os-release descriptor by ``core.os_release`` and passed by
reference to every downstream lookup.
"""

from dataclasses import asdict, dataclass, field


@dataclass(frozen=True)
class DistroInfo:
    """
    One detected operating system instance.

    ``id`` and every entry of ``id_like`` are lowercase. ``id_like`` keeps the
    declared order: the first ancestor is tried first during fallback.
    """

    id: str
    id_like: tuple[str, ...] = field(default_factory=tuple)
    name: str = "Linux"
    pretty_name: str | None = None
    version: str | None = None
    version_id: str | None = None
    home_url: str | None = None
    support_url: str | None = None
    bug_report_url: str | None = None

    def __post_init__(self):
        if not self.id or self.id != self.id.strip().lower():
            raise ValueError(f"Distribution id must be non-empty and lowercase, got {self.id!r}")
        if any(not item or item != item.strip().lower() for item in self.id_like):
            raise ValueError(f"id_like entries must be non-empty and lowercase, got {self.id_like!r}")

    @classmethod
    def from_id(cls, distro_id: str, id_like: tuple[str, ...] | list[str] = ()) -> "DistroInfo":
        """Build a record for a manually supplied distribution id."""
        normalized = distro_id.strip().lower()
        if not normalized:
            raise ValueError("Distribution id must not be empty")
        return cls(id=normalized, id_like=tuple(item.strip().lower() for item in id_like if item.strip()))

    @property
    def display_name(self) -> str:
        return self.pretty_name or self.name

    def to_dict(self) -> dict:
        """Serialize to JSON-compatible dictionary."""
        data = asdict(self)
        data["id_like"] = list(self.id_like)
        return data
