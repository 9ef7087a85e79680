# -*- coding: utf-8 -*-
"""
状态管理辅助函数模块
提供命名空间常量和基本辅助函数，直接使用st.session_state
"""

import streamlit as st
from typing import Any
import logging

logger = logging.getLogger(__name__)


# === 命名空间定义 ===

class StateNamespace:
    """状态管理命名空间常量"""
    UI = "ui"
    LOADER = "loader"


# === 基础状态管理接口 ===

def get_state(namespace: str, key: str, default: Any = None) -> Any:
    """统一状态获取接口"""
    full_key = f"{namespace}.{key}"
    return st.session_state.get(full_key, default)


def set_state(namespace: str, key: str, value: Any) -> bool:
    """统一状态设置接口"""
    try:
        full_key = f"{namespace}.{key}"
        st.session_state[full_key] = value
        return True
    except Exception as e:
        logger.error(f"设置状态失败: {e}")
        return False


def has_state(namespace: str, key: str) -> bool:
    return f"{namespace}.{key}" in st.session_state


def delete_state(namespace: str, key: str) -> bool:
    """删除单个状态键"""
    full_key = f"{namespace}.{key}"
    if full_key in st.session_state:
        del st.session_state[full_key]
        return True
    return False


def clear_state_by_prefix(prefix: str) -> bool:
    """根据前缀清理状态"""
    try:
        keys_to_delete = [k for k in st.session_state.keys() if str(k).startswith(prefix)]
        for k in keys_to_delete:
            del st.session_state[k]
        logger.info(f"清理状态: 删除了{len(keys_to_delete)}个键（前缀: {prefix}）")
        return True
    except Exception as e:
        logger.error(f"清理状态失败: {e}")
        return False


# === 导出的公共接口 ===

__all__ = [
    'StateNamespace',
    'get_state',
    'set_state',
    'has_state',
    'delete_state',
    'clear_state_by_prefix',
]
