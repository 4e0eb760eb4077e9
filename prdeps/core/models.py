"""核心数据模型

数据类:
- ResolvedPackage: 已解析的包元信息（不可变）
- TraversalOptions: 一次遍历的策略选项
"""

from __future__ import annotations

from dataclasses import dataclass

# 合成的伪模块，不可解析，遍历时无条件跳过
PSEUDO_MODULES = frozenset({"__future__", "__main__"})

# 每层缩进单位
INDENT_UNIT = "  "


@dataclass(frozen=True)
class ResolvedPackage:
    """单个模块/包的解析结果

    import_path 为解析器返回的规范名称，可能与请求时使用的名称不同。
    """

    import_path: str
    is_stdlib: bool = False
    imports: tuple[str, ...] = ()
    test_imports: tuple[str, ...] = ()
    xtest_imports: tuple[str, ...] = ()
    origin: str = ""
    kind: str = "module"  # "module", "package", "namespace", "builtin", "extension"


@dataclass
class TraversalOptions:
    """遍历策略

    max_depth 为 None 表示不限深度；深度 D 允许渲染 0..D 层。
    """

    include_stdlib: bool = False
    test_imports: bool = False
    xtest_imports: bool = False
    max_depth: int | None = None

    def deps_for(self, pkg: ResolvedPackage, depth: int) -> tuple[str, ...]:
        """选择要递归的依赖集合，测试导入模式只作用于根节点"""
        if depth == 0 and self.test_imports:
            return pkg.test_imports
        if depth == 0 and self.xtest_imports:
            return pkg.xtest_imports
        return pkg.imports
