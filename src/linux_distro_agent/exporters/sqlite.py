"""
SQLite Exporter — Exports the compatibility database to SQLite.

Packages go in one table and their per-family overrides in another, so
"what is X called on Y" is a single join.
"""

import logging
import sqlite3
from pathlib import Path

from linux_distro_agent.models.package import CanonicalPackage

logger = logging.getLogger(__name__)


CREATE_TABLES_SQL = """
CREATE TABLE IF NOT EXISTS packages (
    canonical_name TEXT PRIMARY KEY,
    category TEXT NOT NULL,
    description TEXT NOT NULL
);
CREATE TABLE IF NOT EXISTS overrides (
    canonical_name TEXT NOT NULL REFERENCES packages(canonical_name),
    family TEXT NOT NULL,
    package_name TEXT NOT NULL,
    PRIMARY KEY (canonical_name, family)
);
"""

INSERT_PACKAGE_SQL = """
INSERT OR REPLACE INTO packages (canonical_name, category, description)
VALUES (?, ?, ?)
"""

DELETE_OVERRIDES_SQL = "DELETE FROM overrides WHERE canonical_name = ?"

INSERT_OVERRIDE_SQL = """
INSERT OR REPLACE INTO overrides (canonical_name, family, package_name)
VALUES (?, ?, ?)
"""


class SQLiteExporter:
    """
    Exports CanonicalPackage entries to a SQLite database.

    Creates 'packages' and 'overrides' tables; families are stored by their
    string value (e.g. "gentoo", "debian-based").
    """

    def __init__(self, db_path: Path):
        self.db_path = db_path
        self.db_path.parent.mkdir(parents=True, exist_ok=True)
        self.conn = sqlite3.connect(str(db_path))
        self.conn.executescript(CREATE_TABLES_SQL)
        self.conn.commit()
        self.count = 0

    async def export(self, package: CanonicalPackage) -> None:
        """Export a single package and its overrides."""
        self.conn.execute(
            INSERT_PACKAGE_SQL,
            (package.canonical_name, package.category.value, package.description),
        )
        # Overrides removed since a previous export must not linger
        self.conn.execute(DELETE_OVERRIDES_SQL, (package.canonical_name,))
        self.conn.executemany(
            INSERT_OVERRIDE_SQL,
            [
                (package.canonical_name, family.value, name)
                for family, name in package.overrides.items()
            ],
        )
        self.count += 1

    async def finalize(self) -> None:
        """Commit and close the connection."""
        self.conn.commit()
        self.conn.close()
        logger.info(f"[SQLite] Export complete: {self.count} packages exported to {self.db_path}")
