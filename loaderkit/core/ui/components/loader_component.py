# -*- coding: utf-8 -*-
"""
带资源加载的UI组件
把加载生命周期绑定到Streamlit脚本运行：加载器保存在session_state中，
每次运行依次执行 挂载/输入检查 -> 渲染闸门 -> 更新后检查
"""

import streamlit as st
from typing import Any, Callable, Dict, List, Optional

from loaderkit.core.backend.config import CoreConfig, get_core_config
from loaderkit.core.backend.resource.host import ResourceHost
from loaderkit.core.backend.resource.lifecycle import LifecycleDriver
from loaderkit.core.backend.resource.loading_state import LoadingStateTracker
from loaderkit.core.ui.components.base import UIComponent
from loaderkit.core.ui.components.render_gate import RenderGate
from loaderkit.core.ui.utils.state_helpers import (
    StateNamespace,
    get_state,
    set_state,
    has_state,
    delete_state
)


class LoaderComponent(UIComponent, ResourceHost):
    """
    带资源加载的UI组件基类

    子类需要实现:
        resources(props, state): 返回资源描述列表
        render_content(st_obj, **props): 所有阻塞资源加载完成后渲染真实内容

    可选覆盖:
        on_load_resources / get_loading_message / get_error_message / silent_loading

    使用方式:
        component = RepositoryComponent()
        component.render(st, data={'repo': 'gitboard'}, params={'page': 1})
    """

    def __init__(self, component_name: str = None, config: Optional[CoreConfig] = None):
        super().__init__(component_name)
        self.config = config or get_core_config()
        # 渲染过程中的重新渲染请求延后到本次渲染结束再执行
        self._deferring_rerun = False
        self._rerun_pending = False

    # === 加载器 ===

    @property
    def driver(self) -> Optional[LifecycleDriver]:
        return get_state(StateNamespace.LOADER, self.component_id)

    @property
    def tracker(self) -> Optional[LoadingStateTracker]:
        driver = self.driver
        return driver.tracker if driver is not None else None

    @property
    def gate(self) -> RenderGate:
        return RenderGate(self, self._ensure_driver().tracker, self.config)

    def _ensure_driver(self) -> LifecycleDriver:
        driver = self.driver
        if driver is None:
            driver = LifecycleDriver(self, self.config)
            set_state(StateNamespace.LOADER, self.component_id, driver)
            self.logger.debug(f"创建加载器: {self.component_id}")
        else:
            driver.attach(self)
        return driver

    # === 宿主契约 ===

    def get_host_state(self) -> Dict[str, Any]:
        return self.get_all_states()

    def merge_state(self, update: Dict[str, Any]) -> None:
        """合并状态后请求重新渲染，使新数据可见"""
        for key, value in update.items():
            self.set_state(key, value)
        self.request_render()

    def is_mounted(self) -> bool:
        return has_state(StateNamespace.LOADER, self.component_id)

    def request_render(self) -> None:
        """请求重新渲染，配置允许时调用 st.rerun()"""
        key = self._render_requests_key
        set_state(StateNamespace.LOADER, key, get_state(StateNamespace.LOADER, key, 0) + 1)
        if not self.config.render.rerun_on_render_request:
            return
        if self._deferring_rerun:
            self._rerun_pending = True
            return
        st.rerun()

    @property
    def render_requests(self) -> int:
        return get_state(StateNamespace.LOADER, self._render_requests_key, 0)

    @property
    def _render_requests_key(self) -> str:
        return f"{self.component_id}.render_requests"

    # === 渲染 ===

    def render(self, st_obj, **props) -> Any:
        """
        渲染组件

        Args:
            st_obj: Streamlit对象
            **props: 组件输入属性，其中data/params的结构变化会触发重新加载

        Returns:
            真实内容渲染函数的返回值，显示占位时为None
        """
        driver = self._ensure_driver()
        self._deferring_rerun = True
        self._rerun_pending = False
        try:
            if not driver.mounted:
                driver.mount(props)
            else:
                driver.receive_props(props)

            result = None
            try:
                result = self.gate.render(st_obj, **props)
            except Exception as e:
                self.handle_error(st_obj, e, context="渲染内容",
                                  show_details=self.config.render.show_error_details)

            driver.did_update()
        finally:
            self._deferring_rerun = False

        if self._rerun_pending:
            self._rerun_pending = False
            self.logger.debug(f"渲染结束，执行延后的重新渲染: {self.component_id}")
            st.rerun()
        return result

    def get_state_keys(self) -> List[str]:
        return sorted(self.get_all_states())

    # === 手动编排（在 on_load_resources 中使用） ===

    def on_loading_success(self, handler: Callable[..., Any] = None, role: str = None) -> Callable[..., Any]:
        return self._ensure_driver().coordinator.wrap_success(handler, role)

    def on_loading_error(self, handler: Callable[..., Any] = None, role: str = None,
                         critical: bool = True) -> Callable[..., Any]:
        return self._ensure_driver().coordinator.wrap_error(handler, role, critical)

    def loading_started(self, role: str = None, blocking: bool = True) -> None:
        self._ensure_driver().coordinator.begin(role, blocking)

    def loading_succeeded(self, role: str = None) -> None:
        self._ensure_driver().coordinator.loading_succeeded(role)

    def loading_failed(self, role: str = None, error_data: Any = None, critical: bool = True) -> None:
        self._ensure_driver().coordinator.loading_failed(role, error_data, critical)

    # === 清理 ===

    def cleanup(self):
        """卸载组件：之后到达的回调不会再修改状态"""
        driver = self.driver
        if driver is not None:
            driver.unmount()
        delete_state(StateNamespace.LOADER, self.component_id)
        delete_state(StateNamespace.LOADER, self._render_requests_key)
        super().cleanup()


__all__ = [
    'LoaderComponent'
]
