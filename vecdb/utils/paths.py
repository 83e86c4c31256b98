"""Database path resolution and artifact layout."""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path

DEFAULT_DB_NAME = "vecdb.db"
RECORDS_SUFFIX = ".records"
INDEX_SUFFIX = ".index"


def resolve_db_path(
    path: str | Path | None,
    *,
    cwd: Path | None = None,
    default_name: str = DEFAULT_DB_NAME,
) -> Path:
    """Resolve a user-supplied database location to a concrete base path.

    - ``None`` resolves to ``<cwd>/<default_name>``.
    - An existing directory resolves to ``<dir>/<default_name>``.
    - An existing file or an absolute path is used as given.
    - A relative path is placed under ``cwd``, gaining a ``.db`` suffix when
      it has none.
    """
    base_dir = Path.cwd() if cwd is None else Path(cwd)
    if path is None:
        return base_dir / default_name

    requested = Path(path).expanduser()
    located = requested if requested.is_absolute() else base_dir / requested

    if located.exists():
        if located.is_dir():
            return located / default_name
        return located

    if requested.is_absolute() or requested.suffix == ".db":
        return located
    return located.with_name(located.name + ".db")


@dataclass(frozen=True, slots=True)
class StoreLayout:
    """The two artifacts derived from a store's base path."""

    base_path: Path

    @property
    def records_path(self) -> Path:
        return self.base_path.with_suffix(RECORDS_SUFFIX)

    @property
    def index_path(self) -> Path:
        return self.base_path.with_suffix(INDEX_SUFFIX)

    def ensure_parent(self) -> None:
        self.base_path.parent.mkdir(parents=True, exist_ok=True)
