"""
Store path service.

Store paths have the form `<store_dir>/<hash>-<name>`. The printer only needs
to turn a path into its canonical string; parsing is used when coercing a
`drvPath` attribute.
"""

import re
from dataclasses import dataclass
from pathlib import PurePosixPath

DEFAULT_STORE_DIR = "/nix/store"

HASH_LENGTH = 32

# Base-32 alphabet used in store hashes (no e, o, u, t).
_HASH_CHARS = "0123456789abcdfghijklmnpqrsvwxyz"
_NAME_RE = re.compile(r"^[A-Za-z0-9+\-._?=]+$")


@dataclass(frozen=True)
class StorePath:
    """The base name of a store path, `<hash>-<name>`."""
    hash_part: str
    name: str

    def __str__(self) -> str:
        return f"{self.hash_part}-{self.name}"

    @property
    def is_derivation(self) -> bool:
        return self.name.endswith(".drv")


class Store:
    """Resolves and prints store paths for one store directory."""

    def __init__(self, store_dir: str = DEFAULT_STORE_DIR):
        self.store_dir = str(PurePosixPath(store_dir))

    def is_in_store(self, path: str) -> bool:
        """True if `path` lies strictly inside the store directory."""
        return path.startswith(self.store_dir + "/") and len(path) > len(self.store_dir) + 1

    def parse_store_path(self, path: str) -> StorePath:
        """
        Parse an absolute path into a StorePath.

        Anything below the top-level store entry is dropped, so
        `/nix/store/<hash>-foo/bin/foo` yields `<hash>-foo`.

        Raises:
            ValueError: if the path is not a valid store path
        """
        if not self.is_in_store(path):
            raise ValueError(f"path '{path}' is not in the store")
        base = path[len(self.store_dir) + 1:].split("/", 1)[0]
        hash_part, sep, name = base.partition("-")
        if (not sep or len(hash_part) != HASH_LENGTH
                or any(c not in _HASH_CHARS for c in hash_part)):
            raise ValueError(f"path '{path}' is not a valid store path")
        if not name or not _NAME_RE.match(name):
            raise ValueError(f"store path '{path}' has an invalid name")
        return StorePath(hash_part, name)

    def print_store_path(self, store_path: StorePath) -> str:
        """The canonical absolute string for a store path."""
        return f"{self.store_dir}/{store_path}"
