# -*- coding: utf-8 -*-
"""
UI错误处理器
提供错误显示、友好提示和日志记录功能
"""

import logging
import traceback
from datetime import datetime

logger = logging.getLogger(__name__)


# 常见错误类型的友好消息
FRIENDLY_MESSAGES = {
    'ConnectionError': '网络连接错误，请检查网络连接',
    'ConnectionRefusedError': '服务器拒绝连接，请稍后重试',
    'TimeoutError': '请求超时，请稍后重试',
    'PermissionError': '权限不足，无法访问该资源',
    'FileNotFoundError': '资源不存在',
    'ValueError': '数据格式错误，请检查返回数据',
    'TypeError': '数据类型错误，请检查返回数据的类型',
    'KeyError': '缺少必要的数据字段',
    'MemoryError': '内存不足，请处理较小的数据集',
}


def get_user_friendly_message(error_type: str, error_message: str) -> str:
    """
    获取用户友好的错误消息

    Args:
        error_type: 错误类型
        error_message: 原始错误消息

    Returns:
        用户友好的错误消息
    """
    message = FRIENDLY_MESSAGES.get(error_type, '操作失败')

    # 如果原始消息较短且有意义，添加到友好消息后面
    if error_message and len(error_message) < 100:
        message += f": {error_message}"

    return message


def handle_error(error: Exception, st_obj, context: str = "",
                 component_id: str = "", show_details: bool = False) -> None:
    """
    处理UI错误

    Args:
        error: 异常对象
        st_obj: Streamlit对象
        context: 错误上下文
        component_id: 组件ID
        show_details: 是否显示详细错误信息
    """
    error_type = type(error).__name__
    error_message = str(error)

    log_msg = "UI错误"
    if component_id:
        log_msg += f" [组件:{component_id}]"
    if context:
        log_msg += f" [上下文:{context}]"
    log_msg += f" - {error_type}: {error_message}"
    logger.error(log_msg)

    st_obj.error(get_user_friendly_message(error_type, error_message))

    if show_details:
        with st_obj.expander("详细错误信息"):
            st_obj.text(f"错误类型: {error_type}")
            st_obj.text(f"错误消息: {error_message}")
            if component_id:
                st_obj.text(f"组件ID: {component_id}")
            if context:
                st_obj.text(f"上下文: {context}")
            st_obj.text(f"时间: {datetime.now().isoformat()}")
            st_obj.code(
                ''.join(traceback.format_exception(type(error), error, error.__traceback__)),
                language="python"
            )


class UIErrorHandler:
    """UI错误处理器类"""

    def handle_ui_error(self, error: Exception, component_id: str = "",
                        context: str = "", st_obj=None, **kwargs) -> dict:
        """
        处理UI错误并返回结果字典

        Args:
            error: 异常对象
            component_id: 组件ID
            context: 错误上下文
            st_obj: Streamlit对象
            **kwargs: 其他参数（show_details）

        Returns:
            包含success和error_info的字典
        """
        error_info = {
            'type': type(error).__name__,
            'message': str(error),
            'component_id': component_id,
            'context': context,
            'timestamp': datetime.now().isoformat()
        }

        if st_obj is not None:
            handle_error(
                error=error,
                st_obj=st_obj,
                context=context,
                component_id=component_id,
                show_details=kwargs.get('show_details', False)
            )

        return {
            'success': True,
            'error_info': error_info
        }


# 全局错误处理器实例
_error_handler = None


def get_ui_error_handler() -> UIErrorHandler:
    """
    获取UI错误处理器单例

    Returns:
        UIErrorHandler实例
    """
    global _error_handler
    if _error_handler is None:
        _error_handler = UIErrorHandler()
    return _error_handler


__all__ = [
    'FRIENDLY_MESSAGES',
    'get_user_friendly_message',
    'handle_error',
    'UIErrorHandler',
    'get_ui_error_handler'
]
