"""集中配置管理

提供统一的配置入口，支持从 YAML 文件加载 + 命令行覆盖。
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field

import yaml

from prdeps.core.exceptions import ConfigError
from prdeps.core.models import TraversalOptions
from prdeps.core.render import DEFAULT_TEMPLATE
from prdeps.utils.yaml_io import load_yaml

logger = logging.getLogger(__name__)

DEFAULT_CONFIG_FILE = "prdeps.yml"


@dataclass
class Config:
    """prdeps 全局配置"""

    # 遍历
    include_stdlib: bool = False
    test_imports: bool = False
    xtest_imports: bool = False
    max_depth: int | None = None

    # 输出
    template: str = DEFAULT_TEMPLATE

    # 模块查找
    src_root: str = ""
    search_paths: list[str] = field(default_factory=list)

    # 自定义扩展 (放不到字段里的配置项)
    extra: dict = field(default_factory=dict)

    def __post_init__(self) -> None:
        self.validate()

    def validate(self) -> None:
        """校验字段类型，无效时抛出 ConfigError"""
        for name in ("include_stdlib", "test_imports", "xtest_imports"):
            if not isinstance(getattr(self, name), bool):
                raise ConfigError(f"{name} 必须是布尔值: {getattr(self, name)!r}")
        if self.max_depth is not None:
            if isinstance(self.max_depth, bool) or not isinstance(self.max_depth, int):
                raise ConfigError(f"max_depth 必须是整数: {self.max_depth!r}")
            if self.max_depth < 0:
                raise ConfigError(f"max_depth 不能为负数: {self.max_depth}")
        if not isinstance(self.template, str):
            raise ConfigError(f"template 必须是字符串: {self.template!r}")
        if not isinstance(self.src_root, str):
            raise ConfigError(f"src_root 必须是字符串: {self.src_root!r}")
        if not isinstance(self.search_paths, list) or not all(
            isinstance(p, str) for p in self.search_paths
        ):
            raise ConfigError(f"search_paths 必须是字符串列表: {self.search_paths!r}")

    @classmethod
    def from_file(cls, path: str = DEFAULT_CONFIG_FILE) -> Config:
        """从 YAML 文件加载配置，不存在则返回默认"""
        try:
            data = load_yaml(path)
        except (OSError, ValueError, yaml.YAMLError) as e:
            raise ConfigError(f"配置文件无效: {path}: {e}") from e
        if not data:
            return cls()
        known = {f.name for f in cls.__dataclass_fields__.values()} - {"extra"}
        matched = {k: v for k, v in data.items() if k in known}
        extra = {k: v for k, v in data.items() if k not in known}
        cfg = cls(**matched)
        cfg.extra = extra
        if extra:
            logger.warning("忽略未知配置项: %s", sorted(map(str, extra)))
        return cfg

    def traversal_options(self) -> TraversalOptions:
        return TraversalOptions(
            include_stdlib=self.include_stdlib,
            test_imports=self.test_imports,
            xtest_imports=self.xtest_imports,
            max_depth=self.max_depth,
        )

