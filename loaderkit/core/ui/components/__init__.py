# -*- coding: utf-8 -*-
"""
UI基础组件模块
"""

from loaderkit.core.ui.components.base import UIComponent
from loaderkit.core.ui.components.render_gate import GateDecision, RenderGate
from loaderkit.core.ui.components.loader_component import LoaderComponent

__all__ = [
    'UIComponent',
    'GateDecision',
    'RenderGate',
    'LoaderComponent',
]
