"""依赖图遍历引擎

深度优先、先序遍历：节点先完整渲染，再按字典序依次访问子节点
（每个子节点连同其整棵子树访问完毕后才轮到下一个兄弟）。

两个缓存由 PrintSession 持有，同一会话内的多个根共享，会话之间互不影响:
  - PackageCache: 导入路径 -> ResolvedPackage
  - RenderCache:  (depth, import_path) -> 已渲染文本

用法:
    session = PrintSession(SourceResolver(), TemplateRenderer(), options)
    session.run(["requests", "click"])
"""

from __future__ import annotations

import logging
import sys
from typing import TextIO

from prdeps.core.exceptions import CycleError
from prdeps.core.models import PSEUDO_MODULES, ResolvedPackage, TraversalOptions
from prdeps.core.pkg_cache import PackageCache
from prdeps.core.protocols import PackageResolver, Renderer
from prdeps.core.render import RenderCache, build_context

logger = logging.getLogger(__name__)


class PrintSession:
    """单次调用的遍历会话"""

    def __init__(
        self,
        resolver: PackageResolver,
        renderer: Renderer,
        options: TraversalOptions | None = None,
        out: TextIO | None = None,
    ) -> None:
        self.packages = PackageCache(resolver)
        self.rendered = RenderCache()
        self.renderer = renderer
        self.options = options or TraversalOptions()
        self._out = out

    @property
    def out(self) -> TextIO:
        # 延迟取 sys.stdout，便于测试时被替换
        return self._out if self._out is not None else sys.stdout

    def run(self, roots: list[str]) -> None:
        """依次遍历每个根；任一解析失败立即中止，剩余的根不再处理

        不限深度时导入环会无限展开，递归超限转为 CycleError。
        """
        for root in roots:
            logger.info("开始遍历: %s", root, extra={"import_path": root})
            try:
                self.visit(root, 0)
            except RecursionError as e:
                raise CycleError(root) from e

    def visit(self, import_path: str, depth: int = 0) -> None:
        if import_path in PSEUDO_MODULES:
            return

        pkg = self.packages.resolve(import_path)
        if pkg.is_stdlib and not self.options.include_stdlib:
            return

        self.render(pkg, depth)

        deps = sorted(self.options.deps_for(pkg, depth))

        depth += 1
        max_depth = self.options.max_depth
        if max_depth is not None and depth > max_depth:
            return
        for dep in deps:
            self.visit(dep, depth)

    def render(self, pkg: ResolvedPackage, depth: int) -> None:
        """输出单个节点；同一 (depth, import_path) 只渲染一次，之后原样回放"""
        text = self.rendered.get(depth, pkg.import_path)
        if text is None:
            text = self.renderer.render(build_context(pkg, depth))
            self.rendered.put(depth, pkg.import_path, text)
        self.out.write(text)
