"""已解析包缓存

按规范名称缓存解析结果。别名（非规范名称）请求仍会调用解析器，
只有请求名称恰好等于已缓存的规范名称时才命中。
"""

from __future__ import annotations

import logging

from prdeps.core.exceptions import ResolutionError
from prdeps.core.models import ResolvedPackage
from prdeps.core.protocols import PackageResolver

logger = logging.getLogger(__name__)


class PackageCache:
    """解析结果缓存 - 同一规范名称只解析一次"""

    def __init__(self, resolver: PackageResolver) -> None:
        self.resolver = resolver
        self._packages: dict[str, ResolvedPackage] = {}

    def __contains__(self, import_path: object) -> bool:
        return import_path in self._packages

    def __len__(self) -> int:
        return len(self._packages)

    def resolve(self, import_path: str) -> ResolvedPackage:
        """返回缓存结果，未命中时调用解析器并按规范名称入缓存。

        解析失败抛出 ResolutionError，不重试。
        """
        pkg = self._packages.get(import_path)
        if pkg is not None:
            return pkg

        try:
            pkg = self.resolver.resolve(import_path)
        except ResolutionError:
            raise
        except (ImportError, OSError, SyntaxError, ValueError) as e:
            raise ResolutionError(import_path, e) from e

        logger.debug(
            "已解析: %s -> %s", import_path, pkg.import_path,
            extra={"import_path": pkg.import_path},
        )
        self._packages[pkg.import_path] = pkg
        return pkg
