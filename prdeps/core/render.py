"""节点渲染

- TemplateRenderer: 基于 str.format 字段语法的模板渲染器
- RenderCache: 按 (depth, import_path) 缓存已渲染文本，重复出现时原样回放
"""

from __future__ import annotations

import logging
import string
from dataclasses import asdict
from typing import Any

from prdeps.core.exceptions import TemplateError
from prdeps.core.models import INDENT_UNIT, ResolvedPackage

logger = logging.getLogger(__name__)

DEFAULT_TEMPLATE = "{indent}{import_path}:"

# 模板中可引用的字段
TEMPLATE_FIELDS = frozenset({
    "indent",
    "depth",
    "import_path",
    "is_stdlib",
    "imports",
    "test_imports",
    "xtest_imports",
    "origin",
    "kind",
})


# 构造时试渲染用的样例节点
_SAMPLE = ResolvedPackage(
    import_path="pkg",
    imports=("dep",),
    origin="pkg/__init__.py",
    kind="package",
)


def indent(depth: int) -> str:
    return INDENT_UNIT * depth


def build_context(pkg: ResolvedPackage, depth: int) -> dict[str, Any]:
    """构建单个节点的渲染上下文，列表字段以空格拼接"""
    ctx: dict[str, Any] = asdict(pkg)
    for key in ("imports", "test_imports", "xtest_imports"):
        ctx[key] = " ".join(ctx[key])
    ctx["indent"] = indent(depth)
    ctx["depth"] = depth
    return ctx


class TemplateRenderer:
    """str.format 模板渲染器

    构造时校验模板：语法错误、位置参数或未知字段均抛出 TemplateError。
    之后用一个样例节点试渲染一次，属性访问、下标或格式说明不合法的
    模板（如 "{indent.x}"、"{imports:d}"）也在构造时被拒绝。
    模板末尾没有换行时自动补一个。
    """

    def __init__(self, template: str = DEFAULT_TEMPLATE) -> None:
        if not template.endswith("\n"):
            template += "\n"
        self._validate(template)
        self.template = template
        self._format(build_context(_SAMPLE, 1))

    @staticmethod
    def _validate(template: str) -> None:
        try:
            parsed = list(string.Formatter().parse(template))
        except ValueError as e:
            raise TemplateError(f"invalid output template {template!r}: {e}") from e

        for _, field_name, spec, _ in parsed:
            if field_name is None:
                continue
            # "imports.x" / "origin[0]" 只在这里校验首段，其余由试渲染覆盖
            root = field_name.split(".", 1)[0].split("[", 1)[0]
            if not root or root.isdigit():
                raise TemplateError(
                    f"positional fields are not supported in output template: {template!r}"
                )
            if root not in TEMPLATE_FIELDS:
                raise TemplateError(
                    f"unknown field {root!r} in output template. "
                    f"available: {sorted(TEMPLATE_FIELDS)}"
                )
            if spec and "{" in spec:
                TemplateRenderer._validate(spec)

    def render(self, context: dict[str, Any]) -> str:
        return self._format(context)

    def _format(self, context: dict[str, Any]) -> str:
        try:
            return self.template.format_map(context)
        except (AttributeError, IndexError, KeyError, TypeError, ValueError) as e:
            raise TemplateError(f"failed to render output template: {e}") from e


class RenderCache:
    """已渲染文本缓存，键为 (depth, import_path)"""

    def __init__(self) -> None:
        self._entries: dict[tuple[int, str], str] = {}

    def __len__(self) -> int:
        return len(self._entries)

    def get(self, depth: int, import_path: str) -> str | None:
        return self._entries.get((depth, import_path))

    def put(self, depth: int, import_path: str, text: str) -> None:
        self._entries[(depth, import_path)] = text
