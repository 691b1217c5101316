"""Streaming content digests for regular files."""

from __future__ import annotations

import hashlib
import logging
from pathlib import Path
from typing import Final

from gls.core.errors import DigestError, FileAccessError, describe_os_error

logger = logging.getLogger(__name__)

DEFAULT_ALGORITHM: Final[str] = "md5"

# Used when the filesystem does not report a preferred block size
DEFAULT_BLOCK_SIZE: Final[int] = 4096

_HEX_DIGITS: Final[str] = "0123456789abcdef"


def render_hex(digest: bytes, max_digits: int | None = None) -> str:
    """Render a binary digest as lowercase hex, most-significant nibble first.

    Truncation rule: the result is exactly the first
    min(max_digits, 2 * len(digest)) hex digits. An odd max_digits ends in
    the high nibble of the next byte. max_digits <= 0 gives "".

    Args:
        digest: Raw digest bytes
        max_digits: Maximum number of hex digits to emit, None for all

    Returns:
        Lowercase hex string

    Examples:
        >>> render_hex(bytes([0x9A, 0x1F]))
        '9a1f'
        >>> render_hex(bytes([0x9A, 0x1F]), max_digits=3)
        '9a1'
        >>> render_hex(bytes([0x9A, 0x1F]), max_digits=0)
        ''
    """
    limit = 2 * len(digest) if max_digits is None else max(0, min(max_digits, 2 * len(digest)))

    digits: list[str] = []
    for byte in digest:
        if len(digits) >= limit:
            break
        digits.append(_HEX_DIGITS[(byte >> 4) & 0xF])
        if len(digits) >= limit:
            break
        digits.append(_HEX_DIGITS[byte & 0xF])
    return "".join(digits)


class ChecksumComputer:
    """Computes file digests by streaming content through hashlib.

    Memory use is bounded by one block regardless of file size.
    """

    def __init__(
        self,
        algorithm: str = DEFAULT_ALGORITHM,
        default_block_size: int = DEFAULT_BLOCK_SIZE,
    ) -> None:
        """Initialize the checksum computer.

        Args:
            algorithm: Any hashlib algorithm name
            default_block_size: Chunk size used when no block size hint is given
        """
        self.algorithm: str = algorithm
        self.default_block_size: int = default_block_size

    def digest_file(self, path: Path, block_size_hint: int | None = None) -> str:
        """Compute the hex digest of a file's content.

        Args:
            path: File to hash
            block_size_hint: Preferred I/O block size (st_blksize)

        Returns:
            Lowercase hex digest

        Raises:
            FileAccessError: If the file cannot be opened or a read fails
            DigestError: If the hash cannot be created or finalised
        """
        block_size = block_size_hint if block_size_hint and block_size_hint > 0 else self.default_block_size
        hasher = self._new_hasher()

        try:
            with path.open("rb") as f:
                for chunk in iter(lambda: f.read(block_size), b""):
                    hasher.update(chunk)
        except OSError as exc:
            raise FileAccessError(path, describe_os_error(exc), operation="read") from exc

        try:
            digest = hasher.digest()
        except (TypeError, ValueError) as exc:
            # Variable-length digests (shake_*) need an explicit length
            raise DigestError(self.algorithm, str(exc)) from exc

        return render_hex(digest)

    def _new_hasher(self) -> hashlib._Hash:  # pyright: ignore[reportPrivateUsage]
        try:
            return hashlib.new(self.algorithm)
        except (ValueError, TypeError) as exc:
            logger.debug(
                "Unsupported digest algorithm",
                extra={"algorithm": self.algorithm, "reason": str(exc)},
            )
            raise DigestError(self.algorithm, "unsupported algorithm") from exc
