"""Per-file state shared by the rewriting steps."""

import logging
import os
import posixpath

from globals_transform.errors import MissingFileIdentityError
from globals_transform.module_path import strip_extensions, to_posix
from globals_transform.transform_options import TransformOptions

logger = logging.getLogger(__name__)

UNKNOWN_FILENAMES = frozenset({"", "unknown"})


class TransformContext:
    """Holds the options plus the state scoped to one file transform.

    ``created_globals`` and the stripped filename cache belong to a single
    file; ``reset`` clears them and is called whenever a new file starts.
    """

    def __init__(
        self,
        options: TransformOptions,
        filename: str | None = None,
        root: str | None = None,
    ) -> None:
        """Initialize the context for ``filename`` below ``root``."""
        self.options = options
        self.filename = filename
        self.root = root if root is not None else os.getcwd()
        self.created_globals: set[tuple[str, ...]] = set()
        self._filename_no_ext: str | None = None

    def reset(self, filename: str | None = None, root: str | None = None) -> None:
        """Forget per-file state, optionally switching to another file."""
        if filename is not None:
            self.filename = filename
        if root is not None:
            self.root = root
        self.created_globals = set()
        self._filename_no_ext = None

    @property
    def has_filename(self) -> bool:
        return self.filename is not None and self.filename not in UNKNOWN_FILENAMES

    def require_filename(self, construct: str | None = None) -> str:
        """Return the current filename or fail when it is unknown."""
        if not self.has_filename:
            raise MissingFileIdentityError(construct)
        return self.filename  # type: ignore[return-value]

    def filename_no_ext(self) -> str:
        """Return the current filename with every extension stripped (cached)."""
        if self._filename_no_ext is None:
            filename = to_posix(self.require_filename())
            head, tail = posixpath.split(filename)
            self._filename_no_ext = posixpath.join(head, strip_extensions(tail))
            logger.debug("Module path base for %s: %s", filename, self._filename_no_ext)
        return self._filename_no_ext
