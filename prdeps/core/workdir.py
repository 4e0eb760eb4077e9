"""默认根路径推导

未指定导入路径时，根据当前工作目录相对源码根目录的位置推导一个根。
"""

from __future__ import annotations

import os

from prdeps.core.exceptions import UsageError


def get_subpath(src_root: str, wd: str) -> str:
    """返回 wd 相对 src_root 的路径；wd 不是 src_root 的严格子目录时抛出 UsageError

    示例:
        >>> get_subpath("/src", "/src/pkg")
        'pkg'
    """
    if not wd:
        raise UsageError("working directory is not in the source root")
    if not src_root:
        raise UsageError("no source root configured")

    relpath = os.path.relpath(wd, src_root)
    if not relpath or relpath.startswith("."):
        raise UsageError(f"working directory {wd} is not in the source root {src_root}")
    return relpath.replace(os.sep, "/")


def default_root(src_root: str = "") -> str:
    """由当前工作目录推导默认根路径

    src_root 为空时取 PYTHONPATH 的第一项。
    """
    if not src_root:
        src_root = os.environ.get("PYTHONPATH", "").split(os.pathsep)[0]
    try:
        wd = os.getcwd()
    except OSError as e:
        raise UsageError(f"cannot determine working directory: {e}") from e
    return get_subpath(src_root, wd)
