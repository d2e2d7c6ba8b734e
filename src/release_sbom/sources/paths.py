"""Path normalization shared by all source adapters.

Every source reports its files in one canonical path space, the one used by
the git checkout: forward slashes, relative, prefixed with "./". Release
archives nest their content one directory deeper than a checkout
("owner-repo-sha/a.txt"), so archive adapters strip leading components
before normalizing.
"""

from typing import Optional

PATH_PREFIX = "./"


def sanitize_parts(name: str) -> list[str]:
    """Split an archive member name into safe path components.

    Backslashes are treated as separators; empty, "." and ".." components
    and Windows drive prefixes are dropped, so the result can never point
    outside the archive root.

    Args:
        name: Member name as stored in the archive.

    Returns:
        List of path components.
    """
    parts = []
    for part in name.replace("\\", "/").split("/"):
        if part in ("", ".", ".."):
            continue
        if not parts and len(part) == 2 and part[1] == ":":
            continue
        parts.append(part)
    return parts


def normalize_path(name: str, strip_components: int = 0) -> Optional[str]:
    """Convert a native path into the canonical "./a/b.txt" form.

    Args:
        name: Native path (e.g. "a.txt", "./a.txt", "repo-v1/a.txt").
        strip_components: Number of leading directories to remove.

    Returns:
        The normalized path, or None if nothing remains after stripping
        (e.g. the archive's top-level directory itself).
    """
    parts = sanitize_parts(name)[strip_components:]
    if not parts:
        return None
    return PATH_PREFIX + "/".join(parts)
