# -*- coding: utf-8 -*-
"""
loaderkit - Streamlit组件资源加载编排
"""

__version__ = "1.0.0"
