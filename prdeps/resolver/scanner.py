"""导入语句提取

用 ast 解析源文件（不执行），收集其中出现的所有导入目标:
  - import a.b           -> a.b
  - from a import x      -> a
  - from . import x      -> pkg.x（x 是磁盘上的兄弟模块/子包时），否则 pkg
  - from ..b import x    -> 相对当前包解析后的 b
"""

from __future__ import annotations

import ast
from pathlib import Path


def is_test_file(path: str | Path) -> bool:
    name = Path(path).name
    return (
        name == "conftest.py"
        or name.startswith("test_")
        or name.endswith("_test.py")
    )


def resolve_relative(package: str, level: int) -> str:
    """按相对导入层级计算基准包名，越过顶层包时抛出 ImportError"""
    parts = package.split(".") if package else []
    if level - 1 >= len(parts):
        raise ImportError(
            f"attempted relative import beyond top-level package (package={package!r}, level={level})"
        )
    return ".".join(parts[: len(parts) - (level - 1)])


def _has_submodule(directory: Path, name: str) -> bool:
    return (directory / f"{name}.py").is_file() or (directory / name / "__init__.py").is_file()


def _from_targets(node: ast.ImportFrom, package: str, pkg_dir: Path) -> list[str]:
    if node.level == 0:
        return [node.module] if node.module else []

    base = resolve_relative(package, node.level)
    base_dir = pkg_dir
    for _ in range(node.level - 1):
        base_dir = base_dir.parent
    if node.module:
        base = f"{base}.{node.module}"
        base_dir = base_dir.joinpath(*node.module.split("."))

    targets = [
        f"{base}.{alias.name}"
        for alias in node.names
        if alias.name != "*" and _has_submodule(base_dir, alias.name)
    ]
    if len(targets) < len(node.names):
        targets.append(base)
    return targets


def scan_file(path: Path, package: str) -> list[str]:
    """返回单个源文件中的导入目标（未排序，可能重复）

    参数:
        path: 源文件路径
        package: 相对导入的基准包名（模块所在的包）

    异常:
        SyntaxError / ValueError: 源文件无法解析
        ImportError: 相对导入越过顶层包
    """
    tree = ast.parse(path.read_bytes(), filename=str(path))
    found: list[str] = []
    for node in ast.walk(tree):
        if isinstance(node, ast.Import):
            found.extend(alias.name for alias in node.names)
        elif isinstance(node, ast.ImportFrom):
            found.extend(_from_targets(node, package, path.parent))
    return found
