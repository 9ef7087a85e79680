# -*- coding: utf-8 -*-
"""
请求协调器
根据资源描述发起请求，包装回调以完成状态切换、过期响应过滤和状态合并
"""

import logging
from collections.abc import Mapping
from functools import partial
from typing import Any, Callable, Dict, Iterable, List, Optional

from loaderkit.core.backend.config import CoreConfig, get_core_config
from loaderkit.core.backend.resource.descriptor import ResourceDescriptor
from loaderkit.core.backend.resource.host import ResourceHost
from loaderkit.core.backend.resource.loading_state import LoadingStateTracker, LoadingStatus

logger = logging.getLogger(__name__)


class RequestTicket:
    """一次请求发起的凭证，重置或重新发起后失效"""

    __slots__ = ('role', 'request_id', 'recorded')

    def __init__(self, role: str):
        self.role = role
        self.request_id = None
        self.recorded = False

    def __repr__(self) -> str:
        return f"RequestTicket(role={self.role!r}, request_id={self.request_id!r})"


class RequestIdTable:
    """
    请求ID表：角色 -> 最近一次发起的请求

    只有携带最新请求ID（或标记为缓存）的响应才会被接受
    """

    def __init__(self):
        self._tickets: Dict[str, RequestTicket] = {}

    def issue(self, role: str) -> RequestTicket:
        ticket = RequestTicket(role)
        self._tickets[role] = ticket
        return ticket

    def record(self, ticket: RequestTicket, request_id: Any) -> None:
        ticket.request_id = request_id
        ticket.recorded = True

    def is_current(self, ticket: RequestTicket) -> bool:
        return self._tickets.get(ticket.role) is ticket

    def get(self, role: str, default: Any = None) -> Any:
        ticket = self._tickets.get(role)
        return default if ticket is None else ticket.request_id

    def accepts(self, role: str, request_id: Any, cached: bool = False,
                strict: bool = True) -> bool:
        """
        判断携带request_id的响应是否应被接受

        Args:
            role: 资源角色
            request_id: 响应携带的请求ID
            cached: 响应是否来自缓存（缓存响应跳过检查）
            strict: 角色不在表中时是否拒绝（自动发起的请求为True）
        """
        if not request_id or cached:
            return True
        ticket = self._tickets.get(role)
        if ticket is None:
            return not strict
        # 同步回调发生在endpoint返回之前
        if not ticket.recorded:
            return True
        # endpoint未返回请求ID，不做跟踪
        if not ticket.request_id:
            return True
        return ticket.request_id == request_id

    def clear(self) -> None:
        self._tickets.clear()

    def __contains__(self, role: str) -> bool:
        return role in self._tickets

    def __len__(self) -> int:
        return len(self._tickets)


class RequestCoordinator:
    """
    请求协调器

    每轮加载遍历资源描述，跳过已发起或已有结果的资源，
    对其余资源执行前置检查后发起请求
    """

    def __init__(self, host: ResourceHost,
                 tracker: Optional[LoadingStateTracker] = None,
                 request_ids: Optional[RequestIdTable] = None,
                 config: Optional[CoreConfig] = None,
                 is_live: Optional[Callable[[], bool]] = None):
        self.config = config or get_core_config()
        self.host = host
        self.tracker = tracker if tracker is not None else LoadingStateTracker(self.config.default_role)
        self.request_ids = request_ids if request_ids is not None else RequestIdTable()
        self._is_live = is_live or host.is_mounted

    def _role(self, role: Optional[str]) -> str:
        return self.config.default_role if role is None else role

    # === 加载轮次 ===

    def run_pass(self, descriptors: Iterable[ResourceDescriptor],
                 props: Optional[Dict[str, Any]] = None) -> List[str]:
        """
        执行一轮加载

        Args:
            descriptors: 资源描述列表
            props: 宿主当前输入属性，传给before守卫

        Returns:
            List[str]: 本轮发起请求的角色
        """
        if not self._is_live():
            return []

        dispatched = []
        for descriptor in descriptors or []:
            role = descriptor.name
            if self.tracker.is_resolved(role):
                continue
            if descriptor.before is not None and not descriptor.before(props, descriptor):
                logger.debug(f"资源 {role} 前置条件未满足，推迟到下一轮")
                continue
            self._dispatch(descriptor)
            dispatched.append(role)
        return dispatched

    def _dispatch(self, descriptor: ResourceDescriptor) -> None:
        role = descriptor.name
        ticket = self.request_ids.issue(role)

        on_success = self.on_loading_success(partial(self._apply_success, descriptor), role, ticket)
        on_error = self.on_loading_error(descriptor.error, role, descriptor.critical, ticket)
        params = list(descriptor.params) + [on_success, on_error]

        status = LoadingStatus.IN_PROGRESS if descriptor.blocking else LoadingStatus.IN_PROGRESS_NON_BLOCKING
        self.tracker.transition(role, status)

        try:
            request_id = descriptor.endpoint(*params)
        except Exception as e:
            logger.error(f"发起资源请求失败: {role}, 错误: {e}")
            self.request_ids.record(ticket, None)
            on_error(e)
            return

        self.request_ids.record(ticket, request_id)
        logger.debug(f"已发起资源请求: {role}, 请求ID: {request_id!r}")

    # === 回调包装 ===

    def on_loading_success(self, handler: Optional[Callable[..., Any]] = None,
                           role: Optional[str] = None,
                           ticket: Optional[RequestTicket] = None) -> Callable[..., Any]:
        """包装成功回调：存活检查、过期响应过滤、状态切换"""
        role = self._role(role)
        markers = self.config.payload

        def callback(*args):
            if not self._is_live():
                return None
            if args:
                payload = args[0]
                request_id = _read_marker(payload, markers.request_id_key)
                cached = bool(_read_marker(payload, markers.cached_key))
                if not self.request_ids.accepts(role, request_id, cached, strict=ticket is not None):
                    # 不切换为succeeded：新请求仍在进行中，切换会提前解除阻塞
                    logger.warning(f"丢弃过期响应: {role}, 响应请求ID: {request_id!r}, "
                                   f"当前请求ID: {self.request_ids.get(role)!r}")
                    return None
            self.tracker.transition(role, LoadingStatus.SUCCEEDED)
            if handler is not None:
                return handler(*args)
            return None

        return callback

    def on_loading_error(self, handler: Optional[Callable[..., Any]] = None,
                         role: Optional[str] = None,
                         critical: bool = True,
                         ticket: Optional[RequestTicket] = None) -> Callable[..., Any]:
        """包装失败回调：存活检查、失败分类，无自定义处理时请求重新渲染"""
        role = self._role(role)

        def callback(*args):
            if not self._is_live():
                return None
            if ticket is not None and not self.request_ids.is_current(ticket):
                logger.warning(f"丢弃已失效请求的失败回调: {role}")
                return None
            status = LoadingStatus.FAILED if critical else LoadingStatus.FAILED_NON_CRITICAL
            self.tracker.transition(role, status)
            self.tracker.record_failure(role, args[0] if args else None)
            if critical:
                logger.error(f"资源加载失败: {role}")
            else:
                logger.warning(f"非关键资源加载失败: {role}")
            if handler is not None:
                return handler(*args)
            self.host.request_render()
            return None

        return callback

    # 手动编排时使用的别名
    wrap_success = on_loading_success
    wrap_error = on_loading_error

    def _apply_success(self, descriptor: ResourceDescriptor, *args) -> None:
        payload = args[0] if args else None
        if descriptor.success is not None:
            descriptor.success(*args)
            if not descriptor.has_mapping:
                return

        update = {
            target: self._extract(payload, source)
            for target, source in descriptor.effective_mapping().items()
        }
        if update:
            self.host.merge_state(update)

    def _extract(self, payload: Any, source: str) -> Any:
        if source == self.config.mapping_wildcard:
            if isinstance(payload, Mapping):
                markers = self.config.payload.marker_keys()
                return {k: v for k, v in payload.items() if k not in markers}
            return payload
        if isinstance(payload, Mapping):
            return payload.get(source)
        return getattr(payload, source, None)

    # === 手动状态切换 ===

    def begin(self, role: Optional[str] = None, blocking: bool = True) -> None:
        """标记手动发起的请求进行中"""
        if not self._is_live():
            return
        status = LoadingStatus.IN_PROGRESS if blocking else LoadingStatus.IN_PROGRESS_NON_BLOCKING
        self.tracker.transition(self._role(role), status)

    def loading_succeeded(self, role: Optional[str] = None) -> None:
        if not self._is_live():
            return
        self.tracker.transition(self._role(role), LoadingStatus.SUCCEEDED)
        self.host.request_render()

    def loading_failed(self, role: Optional[str] = None, error_data: Any = None,
                       critical: bool = True) -> None:
        self.on_loading_error(None, role, critical)(error_data)


def _read_marker(payload: Any, key: str) -> Any:
    if isinstance(payload, Mapping):
        return payload.get(key)
    return getattr(payload, key, None)


__all__ = [
    'RequestTicket',
    'RequestIdTable',
    'RequestCoordinator'
]
