# valid_path.py
from __future__ import annotations

from os import fspath
from pathlib import Path
from typing import Callable, Optional, Union
from urllib.parse import unquote, urlparse

PathLike = Union[str, Path]

IMAGE_EXTS = (".png", ".jpg", ".jpeg", ".gif", ".bmp", ".webp", ".svg")


class ValidPath:
    """Path checks for the CLI (documents, PDF targets) and the painter (images)."""

    @staticmethod
    def _to_path(pathlike: PathLike) -> Optional[Path]:
        try:
            return pathlike if isinstance(pathlike, Path) else Path(fspath(pathlike))
        except TypeError:
            return None

    @staticmethod
    def _ext_ok(p: Path, has_ext: Union[str, tuple, list]) -> bool:
        wanted = (has_ext,) if isinstance(has_ext, str) else tuple(has_ext)
        wanted = {(e if e.startswith(".") else "." + e).lower() for e in wanted}
        return p.suffix.lower() in wanted

    @classmethod
    def check(
        cls,
        pathlike: PathLike,
        *,
        must_exist: bool = False,
        require_file: bool = False,
        has_ext: Optional[Union[str, tuple, list]] = None,
        normalize: bool = False,
        transform: Callable[[Path], Path] = lambda p: p,
    ) -> Optional[Path]:
        """
        Return ``transform(path)`` when every requested check passes, else None.

        - must_exist / require_file: the path exists / is a regular file
        - has_ext: one extension ('pdf' or '.pdf') or a list of them
        - normalize: expand ~ and resolve (non-strict) before checking
        """
        p = cls._to_path(pathlike)
        if p is None or not str(p).strip():
            return None
        if normalize:
            p = p.expanduser().resolve()
        if must_exist and not p.exists():
            return None
        if require_file and not p.is_file():
            return None
        if has_ext is not None and not cls._ext_ok(p, has_ext):
            return None
        return transform(p)

    @classmethod
    def local_image(cls, source: Optional[str]) -> Optional[Path]:
        """
        Resolve an image reference (plain path or file:// URL) to an existing
        local file. Remote URLs are not fetched and resolve to None.
        """
        if not source:
            return None
        parsed = urlparse(source)
        if parsed.scheme == "file":
            source = unquote(parsed.path)
        elif parsed.scheme and len(parsed.scheme) > 1:
            # http(s), data:, ... (single-letter schemes are Windows drives)
            return None
        return cls.check(source, must_exist=True, require_file=True, has_ext=IMAGE_EXTS, normalize=True)
