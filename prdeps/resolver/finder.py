"""模块定位器

逐段在搜索路径上查找模块规格（ModuleSpec），只读文件系统，
不导入也不执行任何被查找的代码。
"""

from __future__ import annotations

import logging
import sys
from importlib.machinery import BuiltinImporter, FrozenImporter, ModuleSpec, PathFinder

logger = logging.getLogger(__name__)


def find_spec(name: str, search_path: list[str]) -> ModuleSpec:
    """定位模块，返回其 ModuleSpec。

    父段是普通模块（非包）时，子段无法通过文件系统定位（如 os.path），
    此时返回父模块的规格，规范名称随之改为父模块名。

    异常:
        ModuleNotFoundError: 任一段无法定位
    """
    if name in sys.builtin_module_names:
        return ModuleSpec(name, BuiltinImporter, origin="built-in")

    if not name:
        raise ModuleNotFoundError("empty import path", name=name)

    parts = name.split(".")
    path = search_path
    for i in range(len(parts)):
        qualname = ".".join(parts[: i + 1])
        found = PathFinder.find_spec(qualname, path)
        if found is None and i == 0:
            found = FrozenImporter.find_spec(qualname)
        if found is None:
            raise ModuleNotFoundError(f"No module named {qualname!r}", name=qualname)
        if i == len(parts) - 1:
            return found
        if found.submodule_search_locations is None:
            logger.debug("%s 不是包，%s 归并到 %s", qualname, name, qualname)
            return found
        path = list(found.submodule_search_locations)
    raise ModuleNotFoundError(f"No module named {name!r}", name=name)


def is_stdlib_module(name: str, spec: ModuleSpec | None = None) -> bool:
    """判断模块是否属于标准库（内置、冻结或顶层名称在 sys.stdlib_module_names 中）"""
    if spec is not None and spec.origin in ("built-in", "frozen"):
        return True
    top = name.split(".", 1)[0]
    return top in sys.stdlib_module_names or top in sys.builtin_module_names
