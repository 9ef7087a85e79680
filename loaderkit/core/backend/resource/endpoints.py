# -*- coding: utf-8 -*-
"""
异步API端点适配器
把协程函数包装成 endpoint(*params, on_success, on_error) 形式的回调式端点
"""

import asyncio
import logging
import uuid
from collections.abc import Mapping
from typing import Any, Awaitable, Callable, Dict, Optional

from loaderkit.core.backend.config import CoreConfig, get_core_config

logger = logging.getLogger(__name__)


class AsyncEndpoint:
    """
    异步端点

    每次调用在当前事件循环上创建一个任务并立即返回新的请求ID，
    任务完成后通过回调通知结果。没有真正的取消：过期结果由请求ID过滤
    """

    def __init__(self, fetch: Callable[..., Awaitable[Any]],
                 name: Optional[str] = None,
                 config: Optional[CoreConfig] = None,
                 loop: Optional[asyncio.AbstractEventLoop] = None):
        """
        Args:
            fetch: 协程函数，接收params并返回响应数据
            name: 端点名称（日志用）
            config: 核心配置
            loop: 事件循环，默认使用当前运行中的循环
        """
        self.fetch = fetch
        self.name = name or getattr(fetch, '__name__', 'endpoint')
        self.config = config or get_core_config()
        self._loop = loop
        self.tasks: Dict[str, asyncio.Task] = {}

    def __call__(self, *args) -> str:
        if len(args) < 2:
            raise TypeError(f"端点 {self.name} 需要 on_success 和 on_error 两个回调")
        *params, on_success, on_error = args

        request_id = uuid.uuid4().hex
        loop = self._loop or asyncio.get_running_loop()
        task = loop.create_task(self.fetch(*params))
        self.tasks[request_id] = task
        task.add_done_callback(
            lambda done: self._complete(request_id, done, on_success, on_error)
        )
        logger.debug(f"异步请求已调度: {self.name}, 请求ID: {request_id}")
        return request_id

    def _complete(self, request_id: str, task: asyncio.Task,
                  on_success: Callable[..., Any], on_error: Callable[..., Any]) -> None:
        self.tasks.pop(request_id, None)
        if task.cancelled():
            logger.debug(f"异步请求已取消: {self.name}, 请求ID: {request_id}")
            return

        error = task.exception()
        if error is not None:
            logger.warning(f"异步请求失败: {self.name}, 请求ID: {request_id}, 错误: {error}")
            on_error(error)
            return

        on_success(self._tag(task.result(), request_id))

    def _tag(self, result: Any, request_id: str) -> Any:
        """为映射类型的响应添加请求ID标记"""
        if isinstance(result, Mapping):
            payload = dict(result)
            payload[self.config.payload.request_id_key] = request_id
            return payload
        return result

    @property
    def pending(self) -> int:
        return len(self.tasks)


__all__ = [
    'AsyncEndpoint'
]
