"""
兜底装饰器单元测试

测试 ai_fallback 的失败链顺序与 silent_fallback 的静默返回。
"""
import asyncio
from unittest.mock import AsyncMock

import pytest

from suitcase.services.ai.errors import ConfigurationError, TransportError
from suitcase.services.ai.utils.fallback import ai_fallback, silent_fallback


class Owner:
    """装饰器宿主：记录每一步的调用"""

    def __init__(self, live, secondary=None, timeout=None):
        self.live = live
        self.secondary = secondary or AsyncMock(return_value="secondary")
        self.static = AsyncMock(return_value="static")
        self.timeout = timeout

    @ai_fallback(
        fallback_func=lambda self, *a, **kw: self.static(*a, **kw),
        secondary_func=lambda self, *a, **kw: self.secondary(*a, **kw),
    )
    async def with_secondary(self, value):
        return await self.live(value)

    @ai_fallback(fallback_func=lambda self, *a, **kw: self.static(*a, **kw))
    async def without_secondary(self, value):
        return await self.live(value)


class TestAiFallback:
    """测试 ai_fallback 装饰器"""

    @pytest.mark.asyncio
    async def test_live_success_skips_fallback(self):
        """Given: 在线调用成功 When: 调用 Then: 返回在线结果，不触发兜底"""
        owner = Owner(AsyncMock(return_value="live"))

        assert await owner.without_secondary("x") == "live"
        owner.static.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_live_failure_goes_to_static(self):
        """Given: 在线调用失败 When: 调用 Then: 返回静态兜底结果"""
        owner = Owner(AsyncMock(side_effect=TransportError("down")))

        assert await owner.without_secondary("x") == "static"
        owner.static.assert_awaited_once_with("x")

    @pytest.mark.asyncio
    async def test_secondary_runs_before_static(self):
        """Given: 在线失败且有二次尝试 When: 调用 Then: 返回二次尝试结果"""
        owner = Owner(AsyncMock(side_effect=ValueError("bad json")))

        assert await owner.with_secondary("x") == "secondary"
        owner.secondary.assert_awaited_once_with("x")
        owner.static.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_each_step_runs_at_most_once(self):
        """Given: 在线与二次尝试都失败 When: 调用 Then: 每步只执行一次，最终静态兜底"""
        live = AsyncMock(side_effect=TransportError("down"))
        secondary = AsyncMock(side_effect=TransportError("still down"))
        owner = Owner(live, secondary=secondary)

        assert await owner.with_secondary("x") == "static"
        assert live.await_count == 1
        assert secondary.await_count == 1
        assert owner.static.await_count == 1

    @pytest.mark.asyncio
    async def test_configuration_error_skips_secondary(self):
        """Given: 未配置凭证 When: 调用 Then: 直接静态兜底，不做二次尝试"""
        owner = Owner(AsyncMock(side_effect=ConfigurationError("no key")))

        assert await owner.with_secondary("x") == "static"
        owner.secondary.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_timeout_is_treated_as_failure(self):
        """Given: 在线调用超时 When: 调用 Then: 走兜底链"""
        async def slow(value):
            await asyncio.sleep(5)
            return "too late"

        owner = Owner(slow, timeout=0.01)

        assert await owner.without_secondary("x") == "static"

    @pytest.mark.asyncio
    async def test_zero_timeout_still_bounds_live_call(self):
        """Given: timeout=0 When: 在线调用需要等待 Then: 视为超时，不会无限等待"""
        async def slow(value):
            await asyncio.sleep(5)
            return "too late"

        owner = Owner(slow, timeout=0)

        assert await asyncio.wait_for(owner.without_secondary("x"), 1) == "static"

    @pytest.mark.asyncio
    async def test_static_owner_skips_live_steps(self):
        """Given: 宿主绑定静态提供商 When: 调用 Then: 只执行一次静态兜底"""
        live = AsyncMock(return_value="live")
        secondary = AsyncMock(return_value="secondary")
        owner = Owner(live, secondary=secondary)
        owner.is_live = lambda: False

        assert await owner.with_secondary("x") == "static"
        live.assert_not_awaited()
        secondary.assert_not_awaited()
        owner.static.assert_awaited_once_with("x")

    def test_preserves_function_name(self):
        assert Owner.with_secondary.__name__ == "with_secondary"


class TestSilentFallback:
    """测试 silent_fallback 装饰器"""

    @pytest.mark.asyncio
    async def test_success_returns_result(self):
        @silent_fallback(return_value="default")
        async def ok():
            return "value"

        assert await ok() == "value"

    @pytest.mark.asyncio
    async def test_failure_returns_default_value(self):
        """Given: 函数抛异常 When: 调用 Then: 静默返回默认值"""
        @silent_fallback(return_value="default")
        async def boom():
            raise RuntimeError("boom")

        assert await boom() == "default"

    @pytest.mark.asyncio
    async def test_return_func_receives_call_arguments(self):
        """Given: 提供 return_func When: 失败 Then: 用调用参数生成默认值"""
        @silent_fallback(return_func=lambda title, chapter=1: f"{title}:{chapter}")
        async def boom(title, chapter=1):
            raise RuntimeError("boom")

        assert await boom("Dune", chapter=3) == "Dune:3"
