"""源码解析器

将导入路径解析为 ResolvedPackage:
  1. 规范化名称（pkg/sub -> pkg.sub，去掉末尾的 .__init__）
  2. 在搜索路径上定位模块（finder）
  3. 扫描源文件收集三类导入（scanner）

分类规则（包目录）:
  - imports:       目录下非测试 .py 文件的导入
  - test_imports:  目录下测试文件（test_*.py / *_test.py / conftest.py）的导入
  - xtest_imports: tests/ 子目录下 .py 文件的导入（可包含包自身）
单个模块文件只有 imports。
"""

from __future__ import annotations

import importlib
import logging
import sys
from collections.abc import Iterable
from importlib.machinery import ModuleSpec
from pathlib import Path

from prdeps.core.exceptions import ResolutionError
from prdeps.core.models import ResolvedPackage
from prdeps.resolver.finder import find_spec, is_stdlib_module
from prdeps.resolver.scanner import is_test_file, scan_file

logger = logging.getLogger(__name__)

XTEST_DIR = "tests"


def normalize(import_path: str) -> str:
    """pkg/sub/ -> pkg.sub，pkg.__init__ -> pkg"""
    name = import_path.strip().strip("/").replace("/", ".")
    if name.endswith(".__init__"):
        name = name[: -len(".__init__")]
    return name


def _unique(names: Iterable[str], exclude: str = "") -> tuple[str, ...]:
    return tuple(dict.fromkeys(n for n in names if n != exclude))


class SourceResolver:
    """Python 源码解析器 - 只读文件系统，不导入被解析的模块

    参数:
        search_paths: 优先于 sys.path 搜索的目录
        scan_stdlib: 为 False 时标准库模块不扫描源码，导入集合为空
    """

    def __init__(
        self,
        search_paths: list[str] | None = None,
        *,
        scan_stdlib: bool = True,
    ) -> None:
        self.search_path = [str(Path(p)) for p in search_paths or []] + list(sys.path)
        self.scan_stdlib = scan_stdlib
        importlib.invalidate_caches()

    def resolve(self, import_path: str) -> ResolvedPackage:
        name = normalize(import_path)
        try:
            spec = find_spec(name, self.search_path)
        except ModuleNotFoundError as e:
            raise ResolutionError(import_path, e) from e

        canonical = spec.name
        is_stdlib = is_stdlib_module(canonical, spec)
        if is_stdlib and not self.scan_stdlib:
            return ResolvedPackage(
                import_path=canonical, is_stdlib=True,
                origin=spec.origin or "", kind=self._kind(spec),
            )

        try:
            return self._scan(canonical, spec, is_stdlib)
        except (ImportError, OSError, SyntaxError, ValueError) as e:
            raise ResolutionError(import_path, e) from e

    @staticmethod
    def _kind(spec: ModuleSpec) -> str:
        origin = spec.origin or ""
        if origin in ("built-in", "frozen"):
            return "builtin"
        if spec.submodule_search_locations is not None:
            return "namespace" if spec.origin is None else "package"
        if origin.endswith(".py"):
            return "module"
        return "extension"

    def _scan(self, name: str, spec: ModuleSpec, is_stdlib: bool) -> ResolvedPackage:
        kind = self._kind(spec)
        origin = spec.origin or ""

        if kind == "module":
            package = name.rpartition(".")[0]
            found = scan_file(Path(origin), package)
            return ResolvedPackage(
                import_path=name, is_stdlib=is_stdlib,
                imports=_unique(found, name), origin=origin, kind=kind,
            )

        if kind in ("package", "namespace"):
            dirs = [Path(d) for d in spec.submodule_search_locations or []]
            imports: list[str] = []
            test_imports: list[str] = []
            xtest_imports: list[str] = []
            for d in dirs:
                for f in sorted(d.glob("*.py")):
                    target = test_imports if is_test_file(f) else imports
                    target.extend(scan_file(f, name))
                xtest_dir = d / XTEST_DIR
                if xtest_dir.is_dir():
                    for f in sorted(xtest_dir.glob("*.py")):
                        xtest_imports.extend(scan_file(f, f"{name}.{XTEST_DIR}"))
            logger.debug(
                "扫描 %s: %d 个目录, imports=%d test=%d xtest=%d",
                name, len(dirs), len(imports), len(test_imports), len(xtest_imports),
            )
            return ResolvedPackage(
                import_path=name,
                is_stdlib=is_stdlib,
                imports=_unique(imports, name),
                test_imports=_unique(test_imports, name),
                xtest_imports=_unique(xtest_imports),
                origin=origin or (str(dirs[0]) if dirs else ""),
                kind=kind,
            )

        return ResolvedPackage(import_path=name, is_stdlib=is_stdlib, origin=origin, kind=kind)
