"""
容错解析工具单元测试

测试 strip_code_fence, extract_first_json_span, extract_fields_from_dict 函数。
"""
import pytest

from suitcase.services.ai.utils.partial_parser import (
    extract_fields_from_dict,
    extract_first_json_span,
    strip_code_fence,
)


class TestStripCodeFence:
    """测试 strip_code_fence 函数"""

    def test_fence_with_language_tag(self):
        """Given: ```json 代码块 When: 去壳 Then: 返回内部内容"""
        assert strip_code_fence('```json\n[{"title": "A"}]\n```') == '[{"title": "A"}]'

    def test_fence_without_language_tag(self):
        """Given: 无语言标记的代码块 When: 去壳 Then: 返回内部内容"""
        assert strip_code_fence('```\n{"a": 1}\n```') == '{"a": 1}'

    def test_fence_surrounded_by_prose(self):
        """Given: 前后有说明文字 When: 去壳 Then: 只返回代码块内容"""
        text = 'Here you go:\n```html\n<p>Hi</p>\n```\nEnjoy!'
        assert strip_code_fence(text) == "<p>Hi</p>"

    def test_no_fence_returns_stripped_text(self):
        """Given: 无代码块 When: 去壳 Then: 原文去除首尾空白"""
        assert strip_code_fence("  plain text \n") == "plain text"


class TestExtractFirstJsonSpan:
    """测试 extract_first_json_span 函数"""

    def test_array_inside_prose(self):
        """Given: 文字包裹的数组 When: 提取 Then: 返回解析后的数组"""
        assert extract_first_json_span('Sure! [{"title": "A"}] Enjoy.') == [{"title": "A"}]

    def test_object_inside_prose(self):
        """Given: 文字包裹的对象 When: 提取 Then: 返回解析后的对象"""
        assert extract_first_json_span('Result: {"reply": "hi"} done') == {"reply": "hi"}

    def test_brackets_inside_strings_are_respected(self):
        """Given: 字符串内含括号 When: 提取 Then: 不被截断"""
        text = 'x {"text": "a ] tricky } value"} y'
        assert extract_first_json_span(text) == {"text": "a ] tricky } value"}

    def test_skips_unbalanced_opener(self):
        """Given: 先出现无效括号 When: 提取 Then: 跳过并返回后面的有效片段"""
        assert extract_first_json_span('[see note] then {"a": 1}') == {"a": 1}

    def test_no_json_raises_value_error(self):
        """Given: 无 JSON When: 提取 Then: 抛出 ValueError"""
        with pytest.raises(ValueError):
            extract_first_json_span("not json at all")


class TestExtractFieldsFromDict:
    """测试 extract_fields_from_dict 函数"""

    def test_direct_mapping(self):
        """Given: 字段名直接匹配 When: 提取 Then: 返回对应字段"""
        data = {"title": "Dune", "author": "Frank Herbert"}
        mappings = {"title": ["title"], "author": ["author"]}

        assert extract_fields_from_dict(data, mappings) == {"title": "Dune", "author": "Frank Herbert"}

    def test_alias_mapping(self):
        """Given: 字段使用别名 When: 提取 Then: 通过别名找到字段"""
        data = {"publishedYear": "1965", "coverColor": "#fff"}
        mappings = {
            "published_year": ["published_year", "publishedYear"],
            "cover_color": ["cover_color", "coverColor"],
        }

        assert extract_fields_from_dict(data, mappings) == {
            "published_year": "1965",
            "cover_color": "#fff",
        }

    def test_first_alias_wins(self):
        """Given: 多个别名同时存在 When: 提取 Then: 使用第一个"""
        data = {"published_year": "1965", "year": "2000"}
        mappings = {"published_year": ["published_year", "year"]}

        assert extract_fields_from_dict(data, mappings)["published_year"] == "1965"

    def test_none_values_are_skipped(self):
        """Given: 字段值为 None When: 提取 Then: 跳过该字段"""
        data = {"isbn": None, "isbn13": "9780441013593"}
        mappings = {"isbn": ["isbn", "isbn13"]}

        assert extract_fields_from_dict(data, mappings) == {"isbn": "9780441013593"}

    def test_empty_string_is_kept(self):
        """Given: 空字符串 When: 提取 Then: 视为有效值"""
        assert extract_fields_from_dict({"description": ""}, {"description": ["description"]}) == {
            "description": ""
        }
