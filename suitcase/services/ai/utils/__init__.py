"""
AI 服务工具集

提供容错解析、兜底处理、HTML 清洗等通用工具。
"""

from .partial_parser import (
    strip_code_fence,
    extract_first_json_span,
    extract_fields_from_dict,
)

from .fallback import (
    ai_fallback,
    silent_fallback,
)

from .html_sanitizer import sanitize_chapter_html

__all__ = [
    # partial_parser
    'strip_code_fence',
    'extract_first_json_span',
    'extract_fields_from_dict',
    # fallback
    'ai_fallback',
    'silent_fallback',
    # html_sanitizer
    'sanitize_chapter_html',
]
