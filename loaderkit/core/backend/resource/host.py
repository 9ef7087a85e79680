# -*- coding: utf-8 -*-
"""
资源宿主接口
组件需要实现的最小契约，加载器通过它读写组件状态
"""

from abc import ABC, abstractmethod
from typing import Any, Dict, List, Optional

from loaderkit.core.backend.resource.descriptor import ResourceDescriptor


class ResourceHost(ABC):
    """
    资源宿主基类

    必须实现: resources / get_host_state / merge_state / is_mounted /
    request_render / render_content
    可选覆盖: on_load_resources / get_loading_message / get_error_message / silent_loading
    """

    # 为True时加载中不显示占位内容（错误视图不受影响）
    silent_loading: bool = False

    @abstractmethod
    def resources(self, props: Dict[str, Any], state: Dict[str, Any]) -> List[ResourceDescriptor]:
        """根据输入属性和当前状态返回资源描述列表"""
        pass

    @abstractmethod
    def get_host_state(self) -> Dict[str, Any]:
        pass

    @abstractmethod
    def merge_state(self, update: Dict[str, Any]) -> None:
        """将一批字段合并到宿主状态"""
        pass

    @abstractmethod
    def is_mounted(self) -> bool:
        pass

    @abstractmethod
    def request_render(self) -> None:
        pass

    @abstractmethod
    def render_content(self, st_obj, **props) -> Any:
        """渲染真实内容"""
        pass

    # === 可选钩子 ===

    def on_load_resources(self, props: Dict[str, Any]) -> None:
        """手动加载资源的入口，在挂载和输入变化时调用"""
        return None

    def get_loading_message(self) -> Optional[str]:
        return None

    def get_error_message(self, error_data: Any) -> Optional[str]:
        return None


__all__ = [
    'ResourceHost'
]
