# -*- coding: utf-8 -*-
"""
UI组件基类
提供所有UI组件的基础接口和命名空间状态管理
"""

import streamlit as st
from typing import List, Dict, Any
from abc import ABC, abstractmethod
import logging

from loaderkit.core.ui.utils.error_handler import get_ui_error_handler
from loaderkit.core.ui.utils.state_helpers import (
    StateNamespace,
    get_state,
    set_state,
    delete_state,
    clear_state_by_prefix
)

logger = logging.getLogger(__name__)


class UIComponent(ABC):
    """
    UI组件基类 - 使用命名空间管理状态

    组件状态保存在 st.session_state 的 "ui.<component_id>.<key>" 下
    """

    def __init__(self, component_name: str = None):
        """初始化UI组件"""
        self.component_name = component_name or self.__class__.__name__
        self.logger = logging.getLogger(f"UI.{self.component_name}")
        self.component_id = self._generate_component_id()

    def _generate_component_id(self) -> str:
        """生成组件ID - 移除Component后缀，转换为小写"""
        name = self.component_name
        if name.endswith('Component'):
            name = name[:-9]
        return name.lower()

    @property
    def _namespace(self) -> str:
        return f"{StateNamespace.UI}.{self.component_id}"

    # === 状态管理方法 ===

    def get_state(self, key: str, default=None):
        """获取组件状态"""
        return get_state(self._namespace, key, default)

    def set_state(self, key: str, value) -> bool:
        """设置组件状态"""
        ok = set_state(self._namespace, key, value)
        if ok:
            self.logger.debug(f"状态设置成功: {key}")
        return ok

    def get_all_states(self) -> Dict[str, Any]:
        """获取组件的所有状态"""
        prefix = f"{self._namespace}."
        return {
            key[len(prefix):]: value
            for key, value in st.session_state.items()
            if str(key).startswith(prefix)
        }

    def clear_state(self, key: str = None) -> bool:
        """清理组件状态，key为None时清理全部"""
        if key:
            return delete_state(self._namespace, key)
        return clear_state_by_prefix(f"{self._namespace}.")

    # === 渲染方法 ===

    @abstractmethod
    def render(self, st_obj, **kwargs) -> None:
        """
        渲染组件 - 子类必须实现

        Args:
            st_obj: Streamlit对象
            **kwargs: 组件输入属性
        """
        pass

    @abstractmethod
    def get_state_keys(self) -> List[str]:
        """
        获取组件相关的状态键 - 子类必须实现

        Returns:
            List[str]: 状态键列表
        """
        pass

    # === 错误处理方法 ===

    def handle_error(self, st_obj, error: Exception, context: str = "", **kwargs):
        """
        统一错误处理 - 使用标准化的UI错误处理器

        Args:
            st_obj: Streamlit对象
            error: 异常对象
            context: 错误上下文
            **kwargs: 额外参数
        """
        result = get_ui_error_handler().handle_ui_error(
            error=error,
            component_id=self.component_id,
            context=context,
            st_obj=st_obj,
            **kwargs
        )

        if result.get('success'):
            self.set_state('last_error', result['error_info'])
            self.set_state('error_count', self.get_state('error_count', 0) + 1)

        return result

    # === 清理方法 ===

    def cleanup(self):
        """组件清理 - 在组件销毁时调用，清理相关状态"""
        self.clear_state()
        self.logger.debug(f"组件清理完成: {self.component_id}")


__all__ = [
    'UIComponent'
]
