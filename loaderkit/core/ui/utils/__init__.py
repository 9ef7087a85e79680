# -*- coding: utf-8 -*-
"""
UI工具模块
"""

from loaderkit.core.ui.utils.state_helpers import (
    StateNamespace,
    get_state,
    set_state,
    has_state,
    delete_state,
    clear_state_by_prefix
)
from loaderkit.core.ui.utils.error_handler import (
    get_user_friendly_message,
    handle_error,
    UIErrorHandler,
    get_ui_error_handler
)

__all__ = [
    'StateNamespace',
    'get_state',
    'set_state',
    'has_state',
    'delete_state',
    'clear_state_by_prefix',
    'get_user_friendly_message',
    'handle_error',
    'UIErrorHandler',
    'get_ui_error_handler'
]
