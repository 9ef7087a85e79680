# -*- coding: utf-8 -*-
"""
测试公共夹具

- FakeHost: 实现资源宿主契约的内存宿主
- RecordingEndpoint: 记录调用并由测试手动触发回调的端点
"""

from typing import Any, Dict, List, NamedTuple, Optional
from unittest.mock import MagicMock

import pytest

from loaderkit.core.backend.config import CoreConfig, RenderConfig
from loaderkit.core.backend.resource.host import ResourceHost


class EndpointCall(NamedTuple):
    params: List[Any]
    on_success: Any
    on_error: Any
    request_id: Any


class RecordingEndpoint:
    """记录每次调用，由测试决定何时完成"""

    def __init__(self, name: str = "endpoint", track_ids: bool = True):
        self.name = name
        self.track_ids = track_ids
        self.calls: List[EndpointCall] = []

    def __call__(self, *args):
        *params, on_success, on_error = args
        request_id = f"{self.name}-{len(self.calls) + 1}" if self.track_ids else None
        self.calls.append(EndpointCall(list(params), on_success, on_error, request_id))
        return request_id

    @property
    def call_count(self) -> int:
        return len(self.calls)

    def succeed(self, payload: Optional[Dict[str, Any]] = None, index: int = -1, **markers):
        """以该次调用的请求ID完成请求"""
        call = self.calls[index]
        payload = dict(payload or {})
        if call.request_id is not None:
            payload.setdefault('__request_id__', call.request_id)
        payload.update(markers)
        return call.on_success(payload)

    def fail(self, error: Any = None, index: int = -1):
        return self.calls[index].on_error(error)


class FakeHost(ResourceHost):
    """内存宿主"""

    def __init__(self, descriptors=None):
        self.descriptors = list(descriptors or [])
        self.state: Dict[str, Any] = {}
        self.merges: List[Dict[str, Any]] = []
        self.mounted = True
        self.render_requests = 0
        self.loaded_props: List[Dict[str, Any]] = []
        self.loading_message = None
        self.error_message_provider = None
        self.content_calls: List[Dict[str, Any]] = []

    def resources(self, props, state):
        return list(self.descriptors)

    def get_host_state(self):
        return dict(self.state)

    def merge_state(self, update):
        self.merges.append(dict(update))
        self.state.update(update)

    def is_mounted(self):
        return self.mounted

    def request_render(self):
        self.render_requests += 1

    def render_content(self, st_obj, **props):
        self.content_calls.append(props)
        st_obj.write("content")
        return "content"

    def on_load_resources(self, props):
        self.loaded_props.append(props)

    def get_loading_message(self):
        return self.loading_message

    def get_error_message(self, error_data):
        if self.error_message_provider is None:
            return None
        return self.error_message_provider(error_data)


@pytest.fixture
def config():
    """不触发 st.rerun 的配置"""
    return CoreConfig(render=RenderConfig(rerun_on_render_request=False))


@pytest.fixture
def host():
    return FakeHost()


@pytest.fixture
def endpoint():
    return RecordingEndpoint("r")


@pytest.fixture
def st_obj():
    """模拟Streamlit对象"""
    return MagicMock()


@pytest.fixture
def make_endpoint():
    return RecordingEndpoint


@pytest.fixture
def make_host():
    return FakeHost
