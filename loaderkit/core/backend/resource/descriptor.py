# -*- coding: utf-8 -*-
"""
资源描述
声明组件需要加载的单个远程资源
"""

from dataclasses import dataclass, field
from typing import Any, Callable, Dict, List, Optional


@dataclass
class ResourceDescriptor:
    """
    单个可加载资源的描述

    Attributes:
        name: 资源角色名，同一轮加载内唯一
        endpoint: 发起请求的API函数，调用方式为 endpoint(*params, on_success, on_error)，
                  返回请求ID（或假值表示不跟踪请求ID）
        params: 传给endpoint的参数，位于两个回调之前
        mapping: 状态字段名 -> 响应字段名；值为"*"时整个响应写入该状态字段。
                 为None时默认为 {name: name}
        success: 自定义成功处理函数
        error: 自定义失败处理函数
        blocking: 加载完成前是否阻塞组件渲染
        critical: 加载失败时是否显示错误视图
        before: 发起请求前调用的守卫函数 before(props, descriptor)，返回False时本轮跳过
    """
    name: str
    endpoint: Callable[..., Any]
    params: List[Any] = field(default_factory=list)
    mapping: Optional[Dict[str, str]] = None
    success: Optional[Callable[..., Any]] = None
    error: Optional[Callable[..., Any]] = None
    blocking: bool = True
    critical: bool = True
    before: Optional[Callable[[Dict[str, Any], 'ResourceDescriptor'], bool]] = None

    def __post_init__(self):
        if not isinstance(self.name, str) or not self.name:
            raise ValueError(f"资源名称必须是非空字符串: {self.name!r}")
        if not callable(self.endpoint):
            raise TypeError(f"资源 {self.name} 的endpoint不可调用")
        self.params = list(self.params or [])

    def effective_mapping(self) -> Dict[str, str]:
        """获取实际使用的映射（未声明时为 {name: name}）"""
        if self.mapping is not None:
            return dict(self.mapping)
        return {self.name: self.name}

    @property
    def has_mapping(self) -> bool:
        return self.mapping is not None


__all__ = [
    'ResourceDescriptor'
]
