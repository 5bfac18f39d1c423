"""
Core SnipCheck class - Main entry point for the system
串联提取、分类、校验、汇总四个阶段
"""

import asyncio
from pathlib import Path
from typing import Dict, Iterable, List, Optional, Tuple

from snipcheck.classifier import classify
from snipcheck.config import Config, ToolchainSpec, config as default_config
from snipcheck.document.extractor import load_document
from snipcheck.document.schema import CodeBlock, Document
from snipcheck.report.summary import Summary, report
from snipcheck.utils.logger import get_logger
from snipcheck.verifier.toolchain import ToolchainRegistry
from snipcheck.verifier.types import Checker
from snipcheck.verifier.verifier import Verifier

logger = get_logger(__name__)


class SnipCheck:
    """
    SnipCheck主类 - 代码片段校验核心接口

    Example:
        >>> checker = SnipCheck()
        >>> summary = checker.check_file("GUIDE.md")
        >>> summary.exit_code
        0
    """

    def __init__(
        self,
        config: Optional[Config] = None,
        checker: Optional[Checker] = None,
        toolchain_overrides: Optional[Iterable[Tuple[str, ToolchainSpec]]] = None,
    ):
        """
        Initialize SnipCheck

        Args:
            config: Configuration (defaults to the module-level config)
            checker: Checker capability replacing the subprocess checker
            toolchain_overrides: (tag, spec) pairs applied on top of config.toolchains
        """
        self.config = config or default_config
        self.registry = ToolchainRegistry(self.config.toolchains).merged(toolchain_overrides or [])
        self.verifier = Verifier(
            workers=self.config.verifier.workers,
            timeout=self.config.verifier.timeout,
            checker=checker,
        )

        logger.debug(
            f"SnipCheck initialized (workers={self.verifier.workers}, "
            f"timeout={self.verifier.timeout}, toolchains={self.registry.tags()})"
        )

    def load(self, text: str, source: str = "<string>") -> Document:
        """
        Segment document text

        Raises:
            MalformedDocumentError: unterminated fence
        """
        return load_document(text, source)

    def list_blocks(self, text: str, source: str = "<string>") -> List[CodeBlock]:
        """Extracted blocks without verifying them"""
        return self.load(text, source).blocks

    async def check_async(self, text: str, source: str = "<string>") -> Summary:
        """
        异步校验文档中的所有代码片段

        Args:
            text: 文档原文
            source: 文档来源（用于日志）

        Returns:
            校验汇总

        Raises:
            MalformedDocumentError: 文档存在未闭合的围栏，不进行校验
        """
        document = self.load(text, source)
        groups: Dict[str, List[CodeBlock]] = classify(document.blocks)

        logger.info(
            f"Checking {len(document.blocks)} code blocks from {source} "
            f"({', '.join(f'{tag}={len(blocks)}' for tag, blocks in groups.items()) or 'none'})"
        )

        results = await self.verifier.verify_groups_async(groups, self.registry)
        summary = report(results)

        if summary.failed:
            logger.warning(f"{summary.failed} of {summary.total} code blocks failed in {source}")
        else:
            logger.success(f"All verifiable code blocks passed in {source}")

        return summary

    def check(self, text: str, source: str = "<string>") -> Summary:
        """校验文档（同步版本）"""
        return asyncio.run(self.check_async(text, source))

    def check_file(self, path: str) -> Summary:
        """Read a UTF-8 document from disk and check it"""
        text = Path(path).read_text(encoding="utf-8")
        return self.check(text, source=str(path))
