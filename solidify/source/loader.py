"""Source discovery: which files a scan visits, and in what order."""

from pathlib import Path
from typing import Iterable, Union


def discover_sources(
    target: Union[str, Path],
    pattern: str = "*.cs",
    exclude_dirs: Iterable[str] = ("bin", "obj"),
) -> list[Path]:
    """Return the files to scan under ``target``.

    A file target is returned as-is regardless of its suffix. A directory is
    walked recursively; files inside any excluded directory name are dropped.
    The result is sorted by POSIX path so runs are reproducible.

    Raises:
        FileNotFoundError: if ``target`` does not exist.
    """
    root = Path(target)
    if not root.exists():
        raise FileNotFoundError(f"No such file or directory: {root}")
    if root.is_file():
        return [root]

    excluded = set(exclude_dirs)
    files = [
        path for path in root.rglob(pattern)
        if path.is_file() and not excluded.intersection(path.relative_to(root).parts[:-1])
    ]
    return sorted(files, key=lambda p: p.as_posix())
