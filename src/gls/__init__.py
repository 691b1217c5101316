"""gls - graphical ls.

This package recursively enumerates a directory tree and reports every
entry's name, type, size and content fingerprint: a checksum for regular
files and the resolved target for symbolic links.
"""

from gls.__main__ import main

__all__ = ["main"]
