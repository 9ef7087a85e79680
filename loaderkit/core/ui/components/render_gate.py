# -*- coding: utf-8 -*-
"""
渲染闸门
根据加载状态在 加载中占位 / 错误占位 / 真实内容 之间选择
"""

import logging
from collections.abc import Mapping
from enum import Enum
from typing import Any, Optional

from loaderkit.core.backend.config import CoreConfig, get_core_config
from loaderkit.core.backend.resource.host import ResourceHost
from loaderkit.core.backend.resource.loading_state import LoadingStateTracker
from loaderkit.core.ui.utils.error_handler import get_user_friendly_message

logger = logging.getLogger(__name__)


class GateDecision(Enum):
    """渲染决策"""
    LOADING = "loading"
    ERROR = "error"
    SILENT = "silent"
    CONTENT = "content"


class RenderGate:
    """
    渲染闸门

    | 阻塞中 | 关键失败 | 输出 |
    | 是     | 否       | 加载中占位（静默模式下为空） |
    | 任意   | 是       | 错误占位 |
    | 否     | 否       | 真实内容 |
    """

    def __init__(self, host: ResourceHost, tracker: LoadingStateTracker,
                 config: Optional[CoreConfig] = None):
        self.host = host
        self.tracker = tracker
        self.config = config or get_core_config()

    def is_blocking(self) -> bool:
        return self.tracker.has_any_blocking_in_progress()

    def has_critical_failure(self) -> bool:
        return self.tracker.has_any_critical_failure()

    def decide(self) -> GateDecision:
        if self.has_critical_failure():
            return GateDecision.ERROR
        if self.is_blocking():
            return GateDecision.SILENT if self.host.silent_loading else GateDecision.LOADING
        return GateDecision.CONTENT

    def render(self, st_obj, **props) -> Any:
        """
        渲染当前应显示的内容

        Args:
            st_obj: Streamlit对象
            **props: 宿主输入属性，透传给真实内容渲染函数

        Returns:
            真实内容渲染函数的返回值，显示占位时为None
        """
        decision = self.decide()
        logger.debug(f"渲染决策: {decision.value}")
        if decision is GateDecision.CONTENT:
            return self.host.render_content(st_obj, **props)

        if decision is GateDecision.ERROR:
            self.show_error_message(st_obj)
        elif decision is GateDecision.LOADING:
            self.show_loading_message(st_obj)
        else:
            st_obj.empty()
        return None

    # === 占位视图 ===

    def show_loading_message(self, st_obj) -> None:
        texts = self.config.placeholders
        st_obj.markdown(f"### {texts.loading_title}")

        message = self.host.get_loading_message()
        if message is None:
            message = texts.loading_message
        if message:
            st_obj.caption(message)

    def show_error_message(self, st_obj) -> None:
        texts = self.config.placeholders
        error_data = self.tracker.last_failure
        st_obj.markdown(f"### {texts.error_title}")

        message = self.host.get_error_message(error_data)
        if message is None:
            message = self.describe_failure(error_data)
        st_obj.error(message)

    def describe_failure(self, error_data: Any) -> str:
        """将失败数据转换为展示给用户的文案"""
        if isinstance(error_data, BaseException):
            return get_user_friendly_message(type(error_data).__name__, str(error_data))
        if isinstance(error_data, str) and error_data:
            return error_data
        if isinstance(error_data, Mapping) and error_data.get('message'):
            return str(error_data['message'])
        return self.config.placeholders.error_message


__all__ = [
    'GateDecision',
    'RenderGate'
]
