#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
Summary Renderers

将校验汇总渲染为不同格式（text, JSON Lines, JSON）
"""

from .base import BaseRenderer
from .text_renderer import TextRenderer
from .json_renderer import JsonLinesRenderer, JsonRenderer

RENDERERS = {
    renderer.format_name: renderer
    for renderer in (TextRenderer, JsonLinesRenderer, JsonRenderer)
}


def get_renderer(format: str) -> BaseRenderer:
    """Renderer instance for an output format"""
    try:
        return RENDERERS[format.lower()]()
    except KeyError:
        raise ValueError(f"Unsupported output format: {format}. Valid formats: {list(RENDERERS)}") from None


__all__ = [
    'BaseRenderer',
    'TextRenderer',
    'JsonLinesRenderer',
    'JsonRenderer',
    'RENDERERS',
    'get_renderer',
]
