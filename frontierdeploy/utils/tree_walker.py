"""
Recursive enumeration of an asset directory.
"""
import os
from typing import Iterator, Set, Tuple

from ..exceptions import TreeWalkError
from ..models.asset_file import AssetFile


def walk_tree(root: str) -> Iterator[AssetFile]:
    """Yield every regular file below *root* as an :class:`AssetFile`.

    Entries are visited in sorted order so repeated runs see the same
    sequence. Symlinked directories are followed; re-entering a directory
    that is already on the current descent path raises instead of looping.

    Args:
        root: Asset root directory

    Raises:
        TreeWalkError: On a symlink cycle or an unreadable directory
    """
    root = os.path.abspath(root)
    if not os.path.isdir(root):
        raise TreeWalkError(f"Not a directory: {root}")
    yield from _walk(root, root, set())


def _walk(base: str, directory: str, ancestors: Set[Tuple[int, int]]) -> Iterator[AssetFile]:
    try:
        st = os.stat(directory)
    except OSError as e:
        raise TreeWalkError(f"Cannot stat {directory}: {e}") from e

    ident = (st.st_dev, st.st_ino)
    if ident in ancestors:
        raise TreeWalkError(f"Symlink cycle detected at {directory}")

    try:
        with os.scandir(directory) as it:
            entries = sorted(it, key=lambda e: e.name)
    except OSError as e:
        raise TreeWalkError(f"Cannot list {directory}: {e}") from e

    ancestors = ancestors | {ident}
    for entry in entries:
        if entry.is_dir(follow_symlinks=True):
            yield from _walk(base, entry.path, ancestors)
        elif entry.is_file(follow_symlinks=True):
            # Relative paths become object keys, so always use '/'
            rel_path = os.path.relpath(entry.path, base).replace(os.sep, '/')
            yield AssetFile(local_path=entry.path, relative_path=rel_path)
