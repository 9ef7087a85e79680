# -*- coding: utf-8 -*-
"""
核心配置管理器
提供资源加载器的统一配置访问接口，消除硬编码配置
"""

from dataclasses import dataclass


# ==================== 配置数据类 ====================

@dataclass
class PayloadMarkersConfig:
    """响应数据中的标记字段配置"""
    request_id_key: str = "__request_id__"
    cached_key: str = "__cached__"

    def marker_keys(self) -> tuple:
        return (self.request_id_key, self.cached_key)


@dataclass
class ResourceDefaultsConfig:
    """资源描述默认值配置"""
    default_role: str = "default"
    mapping_wildcard: str = "*"


@dataclass
class PlaceholderConfig:
    """占位视图文案配置"""
    loading_title: str = "正在加载数据..."
    loading_message: str = ""
    error_title: str = "加载数据时发生错误..."
    error_message: str = "资源加载失败，请稍后刷新页面重试"


@dataclass
class RenderConfig:
    """渲染行为配置"""
    # 请求重新渲染时是否调用 st.rerun()
    rerun_on_render_request: bool = True
    # 内容渲染异常时是否展示详细错误信息
    show_error_details: bool = False


# ==================== 配置管理器 ====================

class CoreConfig:
    """
    核心配置管理器

    统一管理资源加载器的所有配置
    """

    def __init__(self,
                 payload: PayloadMarkersConfig = None,
                 defaults: ResourceDefaultsConfig = None,
                 placeholders: PlaceholderConfig = None,
                 render: RenderConfig = None):
        self.payload = payload or PayloadMarkersConfig()
        self.defaults = defaults or ResourceDefaultsConfig()
        self.placeholders = placeholders or PlaceholderConfig()
        self.render = render or RenderConfig()

    @property
    def default_role(self) -> str:
        return self.defaults.default_role

    @property
    def mapping_wildcard(self) -> str:
        return self.defaults.mapping_wildcard


# ==================== 全局配置实例 ====================

import streamlit as st


@st.cache_resource
def get_core_config() -> CoreConfig:
    """
    获取核心配置实例（单例模式）

    Returns:
        CoreConfig: 核心配置实例
    """
    return CoreConfig()
