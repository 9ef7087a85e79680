# -*- coding: utf-8 -*-
"""
加载状态跟踪器
记录每个资源角色当前所处的加载状态
"""

import logging
from enum import Enum
from typing import Any, Dict, Optional, Set, Union

logger = logging.getLogger(__name__)

DEFAULT_ROLE = "default"


class LoadingStatus(Enum):
    """资源角色的加载状态，每个角色同一时刻只处于一个状态"""
    IDLE = "idle"
    IN_PROGRESS = "in_progress"
    IN_PROGRESS_NON_BLOCKING = "in_progress_non_blocking"
    FAILED = "failed"
    FAILED_NON_CRITICAL = "failed_non_critical"
    SUCCEEDED = "succeeded"


class LoadingStateTracker:
    """
    加载状态跟踪器

    使用 角色 -> 状态 的字典存储，未出现的角色视为IDLE，
    因此一个角色不可能同时处于两个状态
    """

    def __init__(self, default_role: str = DEFAULT_ROLE):
        self.default_role = default_role
        self._statuses: Dict[str, LoadingStatus] = {}
        self._failures: Dict[str, Any] = {}

    def _role(self, role: Optional[str]) -> str:
        return self.default_role if role is None else role

    def reset(self) -> None:
        """清空所有角色的状态"""
        if self._statuses:
            logger.debug(f"重置加载状态，清除{len(self._statuses)}个角色")
        self._statuses.clear()
        self._failures.clear()

    def transition(self, role: Optional[str], status: Union[LoadingStatus, str]) -> None:
        """
        将角色切换到指定状态

        Args:
            role: 资源角色，None表示默认角色
            status: 目标状态（枚举或其字符串值）

        Raises:
            ValueError: 未知的状态值
        """
        role = self._role(role)
        status = LoadingStatus(status)

        if status is LoadingStatus.IDLE:
            self._statuses.pop(role, None)
        else:
            self._statuses[role] = status

        if status not in (LoadingStatus.FAILED, LoadingStatus.FAILED_NON_CRITICAL):
            self._failures.pop(role, None)

        logger.debug(f"加载状态变更: {role} -> {status.value}")

    def record_failure(self, role: Optional[str], payload: Any) -> None:
        """记录角色的失败数据"""
        role = self._role(role)
        # 重新插入以保持记录顺序
        self._failures.pop(role, None)
        self._failures[role] = payload

    def failure_payload(self, role: Optional[str] = None) -> Any:
        return self._failures.get(self._role(role))

    @property
    def last_failure(self) -> Any:
        """最近一次记录的关键失败数据，没有关键失败时为None"""
        for role in reversed(list(self._failures)):
            if self._statuses.get(role) is LoadingStatus.FAILED:
                return self._failures[role]
        return None

    # === 查询方法 ===

    def status_of(self, role: Optional[str]) -> LoadingStatus:
        return self._statuses.get(self._role(role), LoadingStatus.IDLE)

    def roles_in(self, status: Union[LoadingStatus, str]) -> Set[str]:
        """获取处于指定状态的所有角色"""
        status = LoadingStatus(status)
        return {role for role, current in self._statuses.items() if current is status}

    def has_any_blocking_in_progress(self) -> bool:
        return any(s is LoadingStatus.IN_PROGRESS for s in self._statuses.values())

    def has_any_critical_failure(self) -> bool:
        return any(s is LoadingStatus.FAILED for s in self._statuses.values())

    def is_resolved(self, role: Optional[str]) -> bool:
        """角色是否已在本轮发起请求或已有结果"""
        return self.status_of(role) is not LoadingStatus.IDLE

    def snapshot(self) -> Dict[str, Set[str]]:
        """
        按状态分组导出角色

        Returns:
            dict: 状态值 -> 角色集合（不含IDLE）
        """
        groups = {status.value: set() for status in LoadingStatus if status is not LoadingStatus.IDLE}
        for role, status in self._statuses.items():
            groups[status.value].add(role)
        return groups

    def __len__(self) -> int:
        return len(self._statuses)

    def __repr__(self) -> str:
        return f"LoadingStateTracker({self._statuses!r})"


__all__ = [
    'DEFAULT_ROLE',
    'LoadingStatus',
    'LoadingStateTracker'
]
