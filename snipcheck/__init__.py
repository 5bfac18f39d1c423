"""
SnipCheck - Fenced code snippet validator for Markdown guides
文档代码片段校验工具

License: MIT
"""

__version__ = "0.1.0"
__license__ = "MIT"

from snipcheck.core import SnipCheck
from snipcheck.config import Config
from snipcheck.exceptions import MalformedDocumentError, SnipCheckError

__all__ = ["SnipCheck", "Config", "MalformedDocumentError", "SnipCheckError"]
