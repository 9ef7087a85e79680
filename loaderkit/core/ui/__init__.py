# -*- coding: utf-8 -*-
"""
UI框架：组件基类、渲染闸门、状态与错误处理工具
"""

from loaderkit.core.ui.components import (
    UIComponent,
    GateDecision,
    RenderGate,
    LoaderComponent
)

__all__ = [
    'UIComponent',
    'GateDecision',
    'RenderGate',
    'LoaderComponent',
]
