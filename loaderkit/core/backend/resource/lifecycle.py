# -*- coding: utf-8 -*-
"""
加载生命周期驱动器
按宿主组件的生命周期事件（挂载、输入变化、更新后、卸载）调度加载流程
"""

import logging
from enum import Enum
from typing import Any, Dict, List, Optional

from loaderkit.core.backend.config import CoreConfig, get_core_config
from loaderkit.core.backend.resource.host import ResourceHost
from loaderkit.core.backend.resource.loading_state import LoadingStateTracker
from loaderkit.core.backend.resource.request_coordinator import RequestCoordinator, RequestIdTable
from loaderkit.core.backend.resource.snapshot import take_snapshot, snapshots_equal

logger = logging.getLogger(__name__)


class LifecyclePhase(Enum):
    """组件加载阶段"""
    UNINITIALIZED = "uninitialized"
    LOADING = "loading"
    READY = "ready"
    ERROR = "error"
    UNMOUNTED = "unmounted"


class LifecycleDriver:
    """
    加载生命周期驱动器

    - mount: 重置状态并执行首轮加载
    - receive_props: data/params结构不变时忽略，否则重置并重新加载
    - did_update: 再执行一轮加载，阻塞状态翻转时强制重新渲染一次
    - unmount: 之后所有回调都不再修改状态
    """

    def __init__(self, host: ResourceHost, config: Optional[CoreConfig] = None):
        self.config = config or get_core_config()
        self.host = host
        self.tracker = LoadingStateTracker(self.config.default_role)
        self.request_ids = RequestIdTable()
        self.coordinator = RequestCoordinator(
            host,
            tracker=self.tracker,
            request_ids=self.request_ids,
            config=self.config,
            is_live=self.is_live
        )
        self.props: Dict[str, Any] = {}
        self._snapshot: Optional[Dict[str, Any]] = None
        self._mounted = False
        self._unmounted = False
        # 挂载前视为加载中，首次检查时无阻塞资源即翻转
        self._loading_in_progress = True

    def attach(self, host: ResourceHost) -> None:
        """重新绑定宿主（Streamlit每次脚本运行都会重建组件实例）"""
        self.host = host
        self.coordinator.host = host

    def is_live(self) -> bool:
        return self._mounted and not self._unmounted and self.host.is_mounted()

    @property
    def mounted(self) -> bool:
        return self._mounted

    @property
    def loading_in_progress(self) -> bool:
        return self._loading_in_progress

    @property
    def phase(self) -> LifecyclePhase:
        if self._unmounted:
            return LifecyclePhase.UNMOUNTED
        if not self._mounted:
            return LifecyclePhase.UNINITIALIZED
        if self.tracker.has_any_critical_failure():
            return LifecyclePhase.ERROR
        if self.tracker.has_any_blocking_in_progress():
            return LifecyclePhase.LOADING
        return LifecyclePhase.READY

    # === 生命周期事件 ===

    def mount(self, props: Optional[Dict[str, Any]] = None) -> List[str]:
        """
        挂载组件并执行首轮加载

        Returns:
            List[str]: 首轮发起请求的角色

        Raises:
            RuntimeError: 组件已卸载
        """
        if self._unmounted:
            raise RuntimeError("组件已卸载，不能再次挂载")
        self._mounted = True
        return self._load(props, reason="挂载")

    def receive_props(self, props: Optional[Dict[str, Any]]) -> bool:
        """
        处理新的输入属性

        Returns:
            bool: 是否触发了重新加载
        """
        if not self.is_live():
            return False

        if snapshots_equal(self._snapshot, take_snapshot(props)):
            self.props = dict(props or {})
            return False

        self._load(props, reason="输入变化")
        return True

    def did_update(self) -> bool:
        """
        渲染后的检查

        Returns:
            bool: 是否因阻塞状态翻转而请求了重新渲染
        """
        if not self.is_live():
            return False

        previous = self._loading_in_progress
        self.run_pass()
        self._loading_in_progress = self.tracker.has_any_blocking_in_progress()

        if previous != self._loading_in_progress:
            logger.debug(f"阻塞状态翻转: {previous} -> {self._loading_in_progress}，请求重新渲染")
            self.host.request_render()
            return True
        return False

    def unmount(self) -> None:
        if self._unmounted:
            return
        self._unmounted = True
        self._mounted = False
        logger.debug(f"组件已卸载，未完成的请求将被忽略: {self.pending_roles()}")

    # === 内部方法 ===

    def run_pass(self) -> List[str]:
        descriptors = self.host.resources(self.props, self.host.get_host_state())
        return self.coordinator.run_pass(descriptors, self.props)

    def pending_roles(self) -> List[str]:
        """仍处于进行中的角色"""
        groups = self.tracker.snapshot()
        return sorted(groups['in_progress'] | groups['in_progress_non_blocking'])

    def _load(self, props: Optional[Dict[str, Any]], reason: str) -> List[str]:
        self.props = dict(props or {})
        self._snapshot = take_snapshot(self.props)
        self.tracker.reset()
        self.request_ids.clear()
        logger.info(f"重新加载资源（{reason}）")

        dispatched = self.run_pass()
        self.host.on_load_resources(self.props)
        return dispatched


__all__ = [
    'LifecyclePhase',
    'LifecycleDriver'
]
