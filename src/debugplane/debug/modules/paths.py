"""Workspace path templating shared by the language modules.

Generated configurations never embed the absolute workspace root: paths under
it are rendered with the ``${workspaceFolder}`` token so the configuration
survives a project move. Paths outside the workspace stay absolute.

Both ``/`` and ``\\`` are accepted as separators; rendered relative segments
always use ``/``.
"""

from __future__ import annotations

WORKSPACE_FOLDER = "${workspaceFolder}"
CURRENT_FILE = "${file}"


def _normalize(path: str) -> str:
    return path.replace("\\", "/")


def file_name(file_path: str) -> str:
    """Last path segment, whichever separator the path uses."""
    return _normalize(file_path).rsplit("/", 1)[-1]


def workspace_relative(file_path: str, workspace_root: str) -> str | None:
    """Root-relative ``/``-separated path, or None when outside the workspace."""
    if not workspace_root:
        return None
    path = _normalize(file_path)
    root = _normalize(workspace_root).rstrip("/")
    if path == root:
        return ""
    if path.startswith(root + "/"):
        return path[len(root) + 1 :]
    return None


def in_workspace(relative_path: str) -> str:
    """Render a root-relative path with the workspace token."""
    return f"{WORKSPACE_FOLDER}/{relative_path}" if relative_path else WORKSPACE_FOLDER


def templated_file(file_path: str, workspace_root: str) -> str:
    """Workspace-templated file path, absolute when outside the workspace."""
    relative = workspace_relative(file_path, workspace_root)
    return file_path if relative is None else in_workspace(relative)


def relative_or_absolute(file_path: str, workspace_root: str) -> str:
    """Root-relative path for runner arguments, absolute when outside the workspace."""
    relative = workspace_relative(file_path, workspace_root)
    return file_path if relative is None else relative


def file_directory(file_path: str, workspace_root: str) -> str:
    """Directory containing ``file_path``, templated against the workspace.

    A bare filename (no separator) resolves to the workspace root token.
    """
    normalized = _normalize(file_path)
    cut = normalized.rfind("/")
    if cut == -1:
        return WORKSPACE_FOLDER

    relative = workspace_relative(file_path, workspace_root)
    if relative is not None:
        rel_cut = relative.rfind("/")
        return in_workspace(relative[:rel_cut] if rel_cut != -1 else "")

    # Outside the workspace (other drive, sibling tree): keep the raw directory
    return file_path[:cut] or "/"
