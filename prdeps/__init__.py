"""prdeps - 打印 Python 模块的传递导入依赖图"""

__version__ = "0.1.0"
