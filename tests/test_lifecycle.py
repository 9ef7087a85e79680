# -*- coding: utf-8 -*-
"""
LifecycleDriver单元测试

测试:
1. 挂载与输入变化时的重置
2. 重复输入被忽略
3. 更新后检查与阻塞翻转
4. 重叠加载时的过期响应丢弃
5. 卸载后的存活检查
"""

import pytest

from loaderkit.core.backend.resource.descriptor import ResourceDescriptor
from loaderkit.core.backend.resource.lifecycle import LifecycleDriver, LifecyclePhase
from loaderkit.core.backend.resource.loading_state import LoadingStatus
from loaderkit.core.ui.components.render_gate import GateDecision, RenderGate


@pytest.fixture
def driver(host, config):
    return LifecycleDriver(host, config)


class TestMount:
    """挂载测试"""

    def test_phase_before_mount(self, driver):
        assert driver.phase is LifecyclePhase.UNINITIALIZED
        assert not driver.is_live()

    def test_mount_dispatches_and_calls_manual_hook(self, driver, host, endpoint):
        """测试挂载时执行首轮加载并调用手动加载钩子"""
        host.descriptors = [ResourceDescriptor(name="repo", endpoint=endpoint)]

        dispatched = driver.mount({"data": {"repo": "gitboard"}})

        assert dispatched == ["repo"]
        assert host.loaded_props == [{"data": {"repo": "gitboard"}}]
        assert driver.phase is LifecyclePhase.LOADING

    def test_coordinator_shares_driver_tracker(self, driver, host, endpoint):
        """测试协调器与驱动器使用同一个状态跟踪器（空跟踪器也不能被替换）"""
        assert len(driver.tracker) == 0
        assert driver.coordinator.tracker is driver.tracker

        host.descriptors = [ResourceDescriptor(name="repo", endpoint=endpoint)]
        driver.mount({})
        assert driver.tracker.status_of("repo") is LoadingStatus.IN_PROGRESS

    def test_mount_after_unmount_raises(self, driver):
        driver.mount({})
        driver.unmount()
        with pytest.raises(RuntimeError):
            driver.mount({})


class TestReceiveProps:
    """输入变化测试"""

    def test_identical_inputs_are_ignored(self, driver, host, endpoint):
        """测试结构相同的输入不触发重置"""
        host.descriptors = [ResourceDescriptor(name="repo", endpoint=endpoint)]
        driver.mount({"data": {"repo": "gitboard"}, "params": [1]})
        endpoint.succeed({"repo": 1})

        reloaded = driver.receive_props({"data": {"repo": "gitboard"}, "params": [1], "title": "x"})

        assert reloaded is False
        assert endpoint.call_count == 1
        assert driver.tracker.status_of("repo") is LoadingStatus.SUCCEEDED
        assert driver.props["title"] == "x"

    def test_changed_inputs_reset_and_reload(self, driver, host, endpoint):
        host.descriptors = [ResourceDescriptor(name="repo", endpoint=endpoint)]
        driver.mount({"data": {"repo": "gitboard"}})
        endpoint.succeed({"repo": 1})

        reloaded = driver.receive_props({"data": {"repo": "other"}})

        assert reloaded is True
        assert endpoint.call_count == 2
        assert driver.tracker.status_of("repo") is LoadingStatus.IN_PROGRESS
        assert len(host.loaded_props) == 2

    def test_in_place_mutation_is_detected(self, driver, host, endpoint):
        """测试对同一对象的原地修改也能被识别"""
        host.descriptors = [ResourceDescriptor(name="repo", endpoint=endpoint)]
        data = {"repo": "gitboard"}
        driver.mount({"data": data})

        data["repo"] = "other"
        assert driver.receive_props({"data": data}) is True

    def test_nan_inputs_are_not_a_change(self, driver, host, endpoint):
        """测试每次运行新建的NaN值不会触发重新加载"""
        host.descriptors = [ResourceDescriptor(name="repo", endpoint=endpoint)]
        driver.mount({"data": {"ratio": float("nan")}})

        assert driver.receive_props({"data": {"ratio": float("nan")}}) is False
        assert endpoint.call_count == 1


class TestReloadRace:
    """重叠加载测试"""

    def test_late_response_from_previous_pass_is_discarded(self, driver, host, endpoint):
        """测试输入变化后，旧请求的迟到响应被丢弃，新请求的响应正常应用"""
        host.descriptors = [ResourceDescriptor(name="R1", endpoint=endpoint)]
        driver.mount({"data": 1})
        first_id = driver.request_ids.get("R1")

        driver.receive_props({"data": 2})
        second_id = driver.request_ids.get("R1")
        assert first_id != second_id
        assert driver.tracker.status_of("R1") is LoadingStatus.IN_PROGRESS

        endpoint.succeed({"R1": "stale"}, index=0)
        assert host.merges == []
        assert driver.tracker.status_of("R1") is LoadingStatus.IN_PROGRESS

        endpoint.succeed({"R1": "fresh"}, index=1)
        assert host.state == {"R1": "fresh"}
        assert driver.tracker.status_of("R1") is LoadingStatus.SUCCEEDED


class TestDidUpdate:
    """更新后检查测试"""

    def test_flip_forces_exactly_one_render(self, driver, host, endpoint):
        """测试阻塞状态翻转时只强制渲染一次"""
        host.descriptors = [ResourceDescriptor(name="repo", endpoint=endpoint, success=lambda data: None)]
        driver.mount({})

        assert driver.did_update() is False
        assert driver.did_update() is False

        endpoint.succeed({})
        assert driver.did_update() is True
        assert driver.did_update() is False
        assert host.render_requests == 1
        assert driver.phase is LifecyclePhase.READY

    def test_no_resources_flips_on_first_update(self, driver, host):
        driver.mount({})
        assert driver.did_update() is True
        assert driver.phase is LifecyclePhase.READY

    def test_update_picks_up_guarded_resource(self, driver, host, endpoint, make_endpoint):
        """测试更新后重新评估before守卫"""
        details = make_endpoint("details")
        host.descriptors = [
            ResourceDescriptor(name="repo", endpoint=endpoint),
            ResourceDescriptor(name="details", endpoint=details,
                               before=lambda props, d: "repo" in host.state),
        ]
        driver.mount({})
        assert details.call_count == 0

        endpoint.succeed({"repo": {"id": 1}})
        driver.did_update()

        assert details.call_count == 1
        assert driver.tracker.status_of("details") is LoadingStatus.IN_PROGRESS

    def test_update_picks_up_new_descriptors(self, driver, host, endpoint, make_endpoint):
        driver.mount({})
        extra = make_endpoint("extra")
        host.descriptors = [ResourceDescriptor(name="extra", endpoint=extra)]

        driver.did_update()

        assert extra.call_count == 1


class TestEndToEnd:
    """端到端场景"""

    def test_blocking_success_and_non_critical_failure_shows_content(self, driver, host, make_endpoint, config):
        """测试R1成功、R2非关键失败时显示内容"""
        r1, r2 = make_endpoint("r1"), make_endpoint("r2")
        host.descriptors = [
            ResourceDescriptor(name="R1", endpoint=r1),
            ResourceDescriptor(name="R2", endpoint=r2, blocking=False, critical=False),
        ]
        gate = RenderGate(host, driver.tracker, config)

        driver.mount({})
        assert gate.decide() is GateDecision.LOADING

        r1.succeed({"R1": "ok"})
        r2.fail("unavailable")
        driver.did_update()

        assert gate.decide() is GateDecision.CONTENT
        assert driver.phase is LifecyclePhase.READY

    def test_single_critical_failure_shows_error(self, driver, host, endpoint, config):
        """测试唯一的关键资源失败时显示错误视图，且失败数据被保存"""
        host.descriptors = [ResourceDescriptor(name="R1", endpoint=endpoint)]
        gate = RenderGate(host, driver.tracker, config)
        driver.mount({})

        error = {"status": 500, "message": "server error"}
        endpoint.fail(error)

        assert gate.decide() is GateDecision.ERROR
        assert driver.tracker.last_failure == error
        assert driver.phase is LifecyclePhase.ERROR

    def test_non_blocking_resources_never_show_loading(self, driver, host, make_endpoint, config):
        """测试全部为非阻塞资源时不显示加载中"""
        endpoints = [make_endpoint(f"e{i}") for i in range(3)]
        host.descriptors = [
            ResourceDescriptor(name=f"R{i}", endpoint=e, blocking=False)
            for i, e in enumerate(endpoints)
        ]
        gate = RenderGate(host, driver.tracker, config)

        driver.mount({})
        assert gate.decide() is GateDecision.CONTENT

        endpoints[0].succeed({})
        driver.did_update()
        assert gate.decide() is GateDecision.CONTENT


class TestUnmount:
    """卸载测试"""

    def test_callbacks_after_unmount_do_nothing(self, driver, host, endpoint):
        host.descriptors = [ResourceDescriptor(name="repo", endpoint=endpoint)]
        driver.mount({})
        driver.unmount()

        endpoint.succeed({"repo": 1})
        endpoint.fail("boom")

        assert host.merges == []
        assert host.render_requests == 0
        assert driver.phase is LifecyclePhase.UNMOUNTED
        assert driver.receive_props({"data": 2}) is False
        assert driver.did_update() is False
