# -*- coding: utf-8 -*-
"""
资源加载模块
"""

from loaderkit.core.backend.resource.descriptor import ResourceDescriptor
from loaderkit.core.backend.resource.host import ResourceHost
from loaderkit.core.backend.resource.loading_state import (
    DEFAULT_ROLE,
    LoadingStatus,
    LoadingStateTracker
)
from loaderkit.core.backend.resource.request_coordinator import (
    RequestTicket,
    RequestIdTable,
    RequestCoordinator
)
from loaderkit.core.backend.resource.lifecycle import LifecyclePhase, LifecycleDriver
from loaderkit.core.backend.resource.endpoints import AsyncEndpoint
from loaderkit.core.backend.resource.snapshot import take_snapshot, structurally_equal

__all__ = [
    'ResourceDescriptor',
    'ResourceHost',
    'DEFAULT_ROLE',
    'LoadingStatus',
    'LoadingStateTracker',
    'RequestTicket',
    'RequestIdTable',
    'RequestCoordinator',
    'LifecyclePhase',
    'LifecycleDriver',
    'AsyncEndpoint',
    'take_snapshot',
    'structurally_equal'
]
