"""prdeps 命令行接口

用法:
    prdeps requests              # 打印 requests 的导入依赖图
    prdeps -d 1 -s json          # 包含标准库，只展开一层
    prdeps -f '{indent}{import_path} ({kind})' mypkg
    prdeps                       # 由当前目录相对 --src-root 推导根
"""

from __future__ import annotations

import dataclasses
import logging
import os

import click
from click.core import ParameterSource

from prdeps import __version__
from prdeps.core.config import DEFAULT_CONFIG_FILE, Config
from prdeps.core.exceptions import ConfigError, PrdepsError, UsageError
from prdeps.core.render import TemplateRenderer
from prdeps.core.traversal import PrintSession
from prdeps.core.workdir import default_root
from prdeps.resolver import SourceResolver
from prdeps.utils.logger import setup_logging

logger = logging.getLogger(__name__)

# 命令行参数名 -> Config 字段
_FLAG_FIELDS = {
    "include_stdlib": "include_stdlib",
    "test": "test_imports",
    "xtest": "xtest_imports",
}


def _load_config(
    ctx: click.Context, config: str, depth: int | None, fmt: str | None,
    src_root: str | None, paths: tuple[str, ...],
) -> Config:
    """加载配置文件并应用命令行覆盖（只覆盖显式给出的参数）"""
    cfg = Config.from_file(config)
    overrides: dict = {}
    for param, field_name in _FLAG_FIELDS.items():
        if ctx.get_parameter_source(param) is not ParameterSource.DEFAULT:
            overrides[field_name] = ctx.params[param]
    if depth is not None:
        overrides["max_depth"] = depth
    if fmt is not None:
        overrides["template"] = fmt
    if src_root is not None:
        overrides["src_root"] = src_root
    if paths:
        overrides["search_paths"] = [*paths, *cfg.search_paths]
    return dataclasses.replace(cfg, **overrides)


@click.command(context_settings={"help_option_names": ["-h", "--help"]})
@click.version_option(version=__version__)
@click.argument("import_paths", nargs=-1)
@click.option("-s", "--stdlib", "include_stdlib", is_flag=True, help="包含标准库模块")
@click.option("-t", "--test", is_flag=True, help="根节点展开测试导入")
@click.option("-T", "--xtest", is_flag=True, help="根节点展开外部测试导入（tests/ 目录）")
@click.option("-d", "--depth", type=click.IntRange(min=0), default=None, help="最大递归深度（默认不限）")
@click.option("-f", "--format", "fmt", default=None, help="输出模板，如 '{indent}{import_path}:'")
@click.option("-c", "--config", default=DEFAULT_CONFIG_FILE, show_default=True, help="配置文件路径")
@click.option("--src-root", default=None, help="源码根目录（推导默认根，并优先搜索）")
@click.option("-P", "--path", "paths", multiple=True, help="额外的模块搜索目录（可多次指定）")
@click.pass_context
def main(
    ctx: click.Context, import_paths: tuple[str, ...], include_stdlib: bool,
    test: bool, xtest: bool, depth: int | None, fmt: str | None, config: str,
    src_root: str | None, paths: tuple[str, ...],
) -> None:
    """打印 IMPORT_PATH 的传递导入依赖图"""
    setup_logging(
        level=os.getenv("PRDEPS_LOG_LEVEL", "WARNING"),
        json_output=os.getenv("PRDEPS_LOG_JSON", "") == "1",
    )

    try:
        cfg = _load_config(ctx, config, depth, fmt, src_root, paths)
        renderer = TemplateRenderer(cfg.template)
        roots = list(import_paths) or [default_root(cfg.src_root)]
    except (ConfigError, UsageError) as e:
        raise click.UsageError(str(e), ctx=ctx) from e

    search_paths = ([cfg.src_root] if cfg.src_root else []) + cfg.search_paths
    resolver = SourceResolver(search_paths, scan_stdlib=cfg.include_stdlib)
    session = PrintSession(resolver, renderer, cfg.traversal_options())
    try:
        session.run(roots)
    except PrdepsError as e:
        logger.debug(
            "遍历中止: %s", e.code, exc_info=True,
            extra={"import_path": getattr(e, "import_path", "")},
        )
        raise click.ClickException(str(e)) from e
