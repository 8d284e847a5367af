"""Workspace file probes.

Framework detection only asks one question of the workspace: does any file
match this glob? Probes answer it without reading file contents and stop at
the first hit.

Glob syntax (relative to the workspace root, ``/`` separated):
- ``*`` matches within a single path segment
- ``?`` matches one character within a segment
- ``**/`` matches zero or more leading directories
- ``**`` matches anything, including separators
- ``[...]`` character classes, ``[!...]`` negated
"""

from __future__ import annotations

import asyncio
import os
import re
from collections.abc import Iterable
from functools import lru_cache
from pathlib import Path, PurePosixPath, PureWindowsPath
from typing import Protocol, runtime_checkable

from debugplane.config.models import DEFAULT_EXCLUDED_DIRS, ProbeConfig
from debugplane.core.errors import ProbeError
from debugplane.core.logging import get_logger

log = get_logger(__name__)

_GLOB_CHARS = frozenset("*?[")


@runtime_checkable
class WorkspaceProbe(Protocol):
    """Existence oracle over the workspace file set."""

    async def exists(self, pattern: str) -> bool:
        """Return True if at least one workspace file matches ``pattern``.

        Raises:
            ProbeError: If the pattern is malformed or the search fails.
        """
        ...


def validate_pattern(pattern: str) -> None:
    """Reject patterns no workspace-relative search can answer."""
    if not pattern or not pattern.strip():
        raise ProbeError.invalid_pattern(pattern, "empty pattern")
    if pattern.startswith("/") or PureWindowsPath(pattern).drive:
        raise ProbeError.invalid_pattern(pattern, "pattern must be workspace-relative")
    if ".." in pattern.replace("\\", "/").split("/"):
        raise ProbeError.invalid_pattern(pattern, "pattern must not leave the workspace")


@lru_cache(maxsize=256)
def compile_glob(pattern: str) -> re.Pattern[str]:
    """Translate a workspace glob into an anchored regex."""
    validate_pattern(pattern)
    pattern = pattern.replace("\\", "/")
    parts: list[str] = []
    i, n = 0, len(pattern)
    while i < n:
        if pattern.startswith("**/", i):
            parts.append("(?:.*/)?")
            i += 3
        elif pattern.startswith("**", i):
            parts.append(".*")
            i += 2
        elif pattern[i] == "*":
            parts.append("[^/]*")
            i += 1
        elif pattern[i] == "?":
            parts.append("[^/]")
            i += 1
        elif pattern[i] == "[":
            j = i + 1
            if j < n and pattern[j] in "!^":
                j += 1
            if j < n and pattern[j] == "]":
                j += 1
            j = pattern.find("]", j)
            if j == -1:
                parts.append(re.escape("["))
                i += 1
                continue
            body = pattern[i + 1 : j].replace("\\", "\\\\")
            if body.startswith("!"):
                body = "^" + body[1:]
            parts.append(f"[{body}]")
            i = j + 1
        else:
            parts.append(re.escape(pattern[i]))
            i += 1
    try:
        return re.compile("".join(parts) + r"\Z", re.DOTALL)
    except re.error as e:
        raise ProbeError.invalid_pattern(pattern, str(e)) from e


def matches_glob(rel_path: str, pattern: str) -> bool:
    """Check if a workspace-relative path matches a glob pattern."""
    return compile_glob(pattern).match(rel_path.replace("\\", "/")) is not None


class FilesystemProbe:
    """Probe backed by a directory walk under the workspace root.

    Excluded directories are pruned from the walk. The walk runs in the
    default executor so concurrent detections interleave on the event loop.
    """

    def __init__(
        self,
        root: Path,
        *,
        excluded_dirs: Iterable[str] = DEFAULT_EXCLUDED_DIRS,
        follow_symlinks: bool = False,
    ) -> None:
        self._root = root
        self._excluded_dirs = frozenset(excluded_dirs)
        self._follow_symlinks = follow_symlinks

    @classmethod
    def from_config(cls, root: Path, config: ProbeConfig) -> FilesystemProbe:
        return cls(
            root,
            excluded_dirs=config.excluded_dirs,
            follow_symlinks=config.follow_symlinks,
        )

    @property
    def root(self) -> Path:
        return self._root

    async def exists(self, pattern: str) -> bool:
        regex = compile_glob(pattern)
        loop = asyncio.get_running_loop()
        try:
            return await loop.run_in_executor(None, self._find_first, pattern, regex)
        except OSError as e:
            raise ProbeError.failed(pattern, str(e)) from e

    def _find_first(self, pattern: str, regex: re.Pattern[str]) -> bool:
        # Literal patterns need no walk
        if not _GLOB_CHARS.intersection(pattern):
            rel = PurePosixPath(pattern.replace("\\", "/"))
            if any(part in self._excluded_dirs for part in rel.parts[:-1]):
                return False
            return (self._root / rel).is_file()

        for dirpath, dirnames, filenames in os.walk(self._root, followlinks=self._follow_symlinks):
            # Prune in place so os.walk never descends into excluded trees
            dirnames[:] = [d for d in dirnames if d not in self._excluded_dirs]
            rel_dir = Path(dirpath).relative_to(self._root).as_posix()
            prefix = "" if rel_dir == "." else f"{rel_dir}/"
            for filename in filenames:
                if regex.match(prefix + filename):
                    log.debug("probe_hit", pattern=pattern, path=prefix + filename)
                    return True
        return False


class StaticProbe:
    """Probe over a fixed, in-memory list of workspace-relative files.

    Useful when the host already holds the workspace file list, and for
    deterministic detection in tests.
    """

    def __init__(self, files: Iterable[str] = ()) -> None:
        self._files = tuple(f.replace("\\", "/").lstrip("/") for f in files)

    @property
    def files(self) -> tuple[str, ...]:
        return self._files

    async def exists(self, pattern: str) -> bool:
        regex = compile_glob(pattern)
        return any(regex.match(f) for f in self._files)
