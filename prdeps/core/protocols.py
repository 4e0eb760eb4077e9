"""领域协议定义

集中定义遍历引擎与外部协作者之间的接口契约（Protocol），
遍历引擎只依赖抽象，不依赖具体解析器或渲染器实现。
"""

from __future__ import annotations

from typing import Any, Protocol

from prdeps.core.models import ResolvedPackage


class PackageResolver(Protocol):
    """包元信息解析器协议

    将导入路径映射为 ResolvedPackage，无法定位时抛出 ResolutionError。
    """

    def resolve(self, import_path: str) -> ResolvedPackage:
        ...


class Renderer(Protocol):
    """节点渲染器协议：给定单个节点的上下文，产出一段文本"""

    def render(self, context: dict[str, Any]) -> str:
        ...
