# -*- coding: utf-8 -*-
"""
Core基础框架模块
提供资源加载编排和UI框架，遵循垂直切分架构

架构说明：
- backend/: 后端基础服务（配置、资源加载状态机）
- ui/: 前端UI框架（组件基类、渲染闸门、工具）
"""

# ========== 后端服务导出 ==========

# 配置管理
from loaderkit.core.backend.config import (
    CoreConfig,
    get_core_config
)

# 资源加载
from loaderkit.core.backend.resource import (
    ResourceDescriptor,
    ResourceHost,
    LoadingStatus,
    LoadingStateTracker,
    RequestIdTable,
    RequestCoordinator,
    LifecyclePhase,
    LifecycleDriver,
    AsyncEndpoint
)

# ========== UI框架导出 ==========

from loaderkit.core.ui.components.base import UIComponent
from loaderkit.core.ui.components.render_gate import GateDecision, RenderGate
from loaderkit.core.ui.components.loader_component import LoaderComponent
from loaderkit.core.ui.utils.state_helpers import get_state, set_state

from loaderkit import __version__

__all__ = [
    # ===== Backend Services =====
    'CoreConfig',
    'get_core_config',

    # Resource Loading
    'ResourceDescriptor',
    'ResourceHost',
    'LoadingStatus',
    'LoadingStateTracker',
    'RequestIdTable',
    'RequestCoordinator',
    'LifecyclePhase',
    'LifecycleDriver',
    'AsyncEndpoint',

    # ===== UI Framework =====
    'UIComponent',
    'GateDecision',
    'RenderGate',
    'LoaderComponent',
    'get_state',
    'set_state'
]
