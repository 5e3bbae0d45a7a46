# topmark:header:start
#
#   project      : ShellExec
#   file         : sessions.py
#   file_relpath : src/shellexec/engine/sessions.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Session store: session names bound to persistent scratch directories.

Every tagged example block names a session. The first block that references a
name allocates a fresh temporary directory (the name is used as a readable prefix);
every later block with the same name runs in that same directory, so it observes
the files earlier blocks left behind. Directories are never evicted while the store
is open and are all removed by [`SessionStore.close`][shellexec.engine.sessions.SessionStore.close].

`tempfile.TemporaryDirectory` registers a finalizer, so directories are also
removed at interpreter exit if a store is never closed explicitly.
"""

from __future__ import annotations

import re
import tempfile
from pathlib import Path
from typing import TYPE_CHECKING

from shellexec.config.logging import get_logger
from shellexec.core.errors import SessionError

if TYPE_CHECKING:
    from types import TracebackType

    from shellexec.config.logging import ShellExecLogger

logger: ShellExecLogger = get_logger(__name__)

# Characters allowed verbatim in a directory prefix; everything else becomes '_'.
_UNSAFE_PREFIX_CHARS = re.compile(r"[^A-Za-z0-9._-]")


def directory_prefix(name: str) -> str:
    """Return a filesystem-safe directory prefix for a session name."""
    return f"{_UNSAFE_PREFIX_CHARS.sub('_', name)}-"


class SessionStore:
    """Mapping from session name to an auto-cleaned working directory.

    The store is the sole owner of its directories. It is used single-threaded
    by one rewrite pass, so no locking is needed.

    Args:
        base_dir (Path | None): Parent directory for session directories. Defaults
            to the platform temporary directory.
    """

    def __init__(self, base_dir: Path | None = None) -> None:
        self._base_dir = base_dir
        self._dirs: dict[str, tempfile.TemporaryDirectory[str]] = {}
        self._closed = False

    def get_or_create(self, name: str) -> Path:
        """Return the working directory for ``name``, allocating it on first use.

        Args:
            name (str): Session name.

        Returns:
            Path: The session's working directory.

        Raises:
            SessionError: If the store is closed or the directory cannot be created.
        """
        if self._closed:
            raise SessionError(f"session store is closed (requested session '{name}')")

        existing = self._dirs.get(name)
        if existing is not None:
            return Path(existing.name)

        try:
            tmp = tempfile.TemporaryDirectory(prefix=directory_prefix(name), dir=self._base_dir)
        except OSError as exc:
            raise SessionError(
                f"cannot create working directory for session '{name}': {exc.strerror or exc}"
            ) from exc

        self._dirs[name] = tmp
        logger.debug("Session '%s' bound to %s", name, tmp.name)
        return Path(tmp.name)

    def __contains__(self, name: object) -> bool:
        return name in self._dirs

    def __len__(self) -> int:
        return len(self._dirs)

    @property
    def names(self) -> tuple[str, ...]:
        """Session names in allocation order."""
        return tuple(self._dirs)

    def close(self) -> None:
        """Remove every session directory. Further lookups raise `SessionError`."""
        for name, tmp in self._dirs.items():
            logger.trace("Removing working directory of session '%s'", name)
            tmp.cleanup()
        self._dirs.clear()
        self._closed = True

    def __enter__(self) -> SessionStore:
        return self

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc: BaseException | None,
        tb: TracebackType | None,
    ) -> None:
        self.close()
