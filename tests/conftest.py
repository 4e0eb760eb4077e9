"""共享 fixture: 内存中的假解析器与计数渲染器"""

from __future__ import annotations

from typing import Any

import pytest

from prdeps.core.exceptions import ResolutionError
from prdeps.core.models import ResolvedPackage
from prdeps.core.render import TemplateRenderer


class FakeResolver:
    """按字典解析，记录每次调用；aliases 把别名重定向到规范名称"""

    def __init__(
        self,
        packages: dict[str, ResolvedPackage],
        aliases: dict[str, str] | None = None,
    ) -> None:
        self.packages = packages
        self.aliases = aliases or {}
        self.calls: list[str] = []

    def resolve(self, import_path: str) -> ResolvedPackage:
        self.calls.append(import_path)
        name = self.aliases.get(import_path, import_path)
        if name not in self.packages:
            raise ResolutionError(import_path, "no such package")
        return self.packages[name]


class CountingRenderer(TemplateRenderer):
    def __init__(self, template: str = "{indent}{import_path}:") -> None:
        super().__init__(template)
        self.calls: list[tuple[int, str]] = []

    def render(self, context: dict[str, Any]) -> str:
        self.calls.append((context["depth"], context["import_path"]))
        return super().render(context)


def pkg(name: str, *imports: str, **kwargs: Any) -> ResolvedPackage:
    return ResolvedPackage(import_path=name, imports=tuple(imports), **kwargs)


@pytest.fixture()
def renderer() -> CountingRenderer:
    return CountingRenderer()


@pytest.fixture()
def make_pkg() -> Any:
    return pkg


@pytest.fixture()
def make_resolver() -> Any:
    return FakeResolver
