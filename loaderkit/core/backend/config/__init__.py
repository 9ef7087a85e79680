# -*- coding: utf-8 -*-
"""
配置管理模块
"""

from loaderkit.core.backend.config.core_config import (
    CoreConfig,
    get_core_config,
    PayloadMarkersConfig,
    ResourceDefaultsConfig,
    PlaceholderConfig,
    RenderConfig
)

__all__ = [
    'CoreConfig',
    'get_core_config',
    'PayloadMarkersConfig',
    'ResourceDefaultsConfig',
    'PlaceholderConfig',
    'RenderConfig'
]
