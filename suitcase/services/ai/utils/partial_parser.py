"""
容错解析工具 - 用于从模型的松散输出中提取 JSON

Models frequently wrap JSON in markdown fences or surround it with prose.
These helpers recover the JSON value without ever guessing at content.
"""
import json
import re
from typing import Any, Dict, List


# A single fenced block, optional language tag: ```json ... ``` or ``` ... ```
_FENCE_RE = re.compile(r"```[ \t]*[\w+-]*[ \t]*\r?\n?(.*?)```", re.DOTALL)
_JSON_OPENER_RE = re.compile(r"[\[{]")
_decoder = json.JSONDecoder()


def strip_code_fence(text: str) -> str:
    """
    去掉一层 markdown 代码块

    Args:
        text: Raw model text

    Returns:
        The fenced body if a fence is present, otherwise the stripped text

    Example:
        >>> strip_code_fence('```json\\n[1, 2]\\n```')
        '[1, 2]'
        >>> strip_code_fence('plain')
        'plain'
    """
    match = _FENCE_RE.search(text)
    if match:
        return match.group(1).strip()
    return text.strip()


def extract_first_json_span(text: str) -> Any:
    """
    提取文本中第一个完整的 {...} 或 [...] 片段

    Scans each opening bracket in order and decodes the first one that forms
    a complete JSON value. Brackets inside JSON strings are handled by the
    decoder itself.

    Args:
        text: Text that may contain JSON surrounded by prose

    Returns:
        The decoded JSON value

    Raises:
        ValueError: If no balanced JSON object or array is found

    Example:
        >>> extract_first_json_span('Sure! [{"title": "A"}] Enjoy.')
        [{'title': 'A'}]
    """
    for match in _JSON_OPENER_RE.finditer(text):
        try:
            value, _ = _decoder.raw_decode(text, match.start())
            return value
        except json.JSONDecodeError:
            continue
    raise ValueError("no balanced JSON object or array found")


def extract_fields_from_dict(
    data: Dict[str, Any],
    field_mappings: Dict[str, List[str]]
) -> Dict[str, Any]:
    """
    从字典中提取指定字段（支持别名映射）

    Args:
        data: 原始字典
        field_mappings: {'目标字段': ['源字段1', '源字段2', ...]}

    Returns:
        提取后的字典

    Example:
        >>> data = {'title': 'Dune', 'publishedYear': '1965', 'extra': 'ignore'}
        >>> mappings = {'title': ['title'], 'published_year': ['published_year', 'publishedYear']}
        >>> extract_fields_from_dict(data, mappings)
        {'title': 'Dune', 'published_year': '1965'}
    """
    result = {}
    for target_field, source_fields in field_mappings.items():
        for source_field in source_fields:
            # 仅当字段存在且值不为 None 时才使用（空字符串是有效值）
            if source_field in data and data[source_field] is not None:
                result[target_field] = data[source_field]
                break
    return result


__all__ = [
    "strip_code_fence",
    "extract_first_json_span",
    "extract_fields_from_dict",
]
