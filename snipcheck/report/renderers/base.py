#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
Base Renderer

渲染器基类
"""

from abc import ABC, abstractmethod
from pathlib import Path
from typing import Union
from loguru import logger

from ..summary import Summary


class BaseRenderer(ABC):
    """Renders a Summary in one output format"""

    format_name: str = ""

    @abstractmethod
    def render(self, summary: Summary) -> str:
        """
        渲染汇总结果

        Args:
            summary: 校验汇总

        Returns:
            渲染后的内容，以换行结尾
        """

    def render_to_file(self, summary: Summary, output_path: Union[str, Path]) -> Path:
        """
        Write the rendered summary to a file

        Line endings are always "\\n", so a JSON Lines file holds exactly one
        record per line on every platform. Missing parent directories are
        created.

        Returns:
            输出文件路径
        """
        output_file = Path(output_path)
        output_file.parent.mkdir(parents=True, exist_ok=True)

        with open(output_file, "w", encoding="utf-8", newline="\n") as f:
            f.write(self.render(summary))

        logger.debug(f"Wrote {self.format_name} summary of {summary.total} blocks to {output_file}")
        return output_file
