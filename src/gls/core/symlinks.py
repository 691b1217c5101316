"""Symbolic link inspection."""

from __future__ import annotations

from pathlib import Path

from gls.core.data.filesystem.scanner import LocalFilesystem
from gls.core.errors import FileAccessError, LinkReadError, LinkResolveError, LinkStatError
from gls.types.models import LinkResolution
from gls.types.protocols import FilesystemProbe


class SymlinkResolver:
    """Reads a link's stored target and its canonical absolute resolution.

    Both are reported because the stored text may be relative while the
    absolute path tells the operator what the link actually reaches.
    """

    def __init__(self, probe: FilesystemProbe | None = None) -> None:
        self.probe: FilesystemProbe = probe or LocalFilesystem()

    def resolve_link(self, path: Path) -> LinkResolution:
        """Inspect a symbolic link.

        Steps run in order and the first failure wins: lstat (size probe),
        readlink, strict absolute resolution.

        Args:
            path: Path of the link itself

        Returns:
            LinkResolution with the raw target and the absolute path

        Raises:
            LinkStatError: If the link cannot be lstat'ed
            LinkReadError: If the stored target cannot be read
            LinkResolveError: If the absolute path cannot be resolved
                (dangling link, loop, permission denied)
        """
        try:
            _ = self.probe.lstat(path)
        except FileAccessError as exc:
            raise LinkStatError(path, exc.reason) from exc

        try:
            target = self.probe.read_link(path)
        except FileAccessError as exc:
            raise LinkReadError(path, exc.reason) from exc

        try:
            absolute = self.probe.resolve_absolute(path)
        except FileAccessError as exc:
            raise LinkResolveError(path, exc.reason) from exc

        return LinkResolution(target=target, absolute=absolute)
