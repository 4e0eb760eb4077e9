"""Python 模块解析器

拆分说明:
- finder.py: 在搜索路径上定位模块（不执行任何导入）
- scanner.py: 基于 ast 提取源文件中的导入语句
- source.py: SourceResolver，将导入路径解析为 ResolvedPackage
"""

from prdeps.resolver.finder import find_spec, is_stdlib_module
from prdeps.resolver.scanner import is_test_file, scan_file
from prdeps.resolver.source import SourceResolver, normalize

__all__ = [
    "SourceResolver",
    "find_spec",
    "is_stdlib_module",
    "is_test_file",
    "normalize",
    "scan_file",
]
