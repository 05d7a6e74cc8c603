"""Tests for the AddTwoInts client node logic (ROS 2 required)."""

from types import SimpleNamespace
from unittest.mock import MagicMock

import pytest

pytest.importorskip("rclpy")
pytest.importorskip("example_interfaces")

from minimal_client import client as client_mod  # noqa: E402
from minimal_client.client import MinimalClient  # noqa: E402


def _fake_node(**overrides) -> SimpleNamespace:
    logger = MagicMock()
    node = SimpleNamespace(
        cli=MagicMock(),
        a=41,
        b=1,
        wait_interval_sec=1.0,
        wait_timeout_sec=0.0,
        service_name="add_two_ints",
        get_logger=lambda: logger,
    )
    node.logger = logger
    for key, value in overrides.items():
        setattr(node, key, value)
    return node


def _future(done: bool = True, result=None, exception=None) -> MagicMock:
    future = MagicMock()
    future.done.return_value = done
    future.result.return_value = result
    future.exception.return_value = exception
    return future


def test_send_request_success(monkeypatch: pytest.MonkeyPatch) -> None:
    node = _fake_node()
    node.cli.call_async.return_value = _future(result=SimpleNamespace(sum=42))
    spin = MagicMock()
    monkeypatch.setattr(client_mod.rclpy, "spin_until_future_complete", spin)

    assert MinimalClient.send_request(node) == 42
    req = node.cli.call_async.call_args[0][0]
    assert (req.a, req.b) == (41, 1)
    spin.assert_called_once()
    node.logger.info.assert_called_with("result of 41 + 1 = 42")
    node.cli.remove_pending_request.assert_not_called()


@pytest.mark.parametrize(
    "future",
    [
        _future(done=False),
        _future(exception=RuntimeError("boom")),
        _future(result=None),
    ],
)
def test_send_request_failure(monkeypatch: pytest.MonkeyPatch, future: MagicMock) -> None:
    node = _fake_node()
    node.cli.call_async.return_value = future
    monkeypatch.setattr(client_mod.rclpy, "spin_until_future_complete", MagicMock())

    assert MinimalClient.send_request(node) is None
    node.cli.remove_pending_request.assert_called_once_with(future)
    assert "service call failed" in node.logger.error.call_args[0][0]


def test_wait_for_service_polls_until_ready(monkeypatch: pytest.MonkeyPatch) -> None:
    node = _fake_node()
    node.cli.wait_for_service.side_effect = [False, False, True]
    monkeypatch.setattr(client_mod.rclpy, "ok", lambda: True)

    assert MinimalClient.wait_for_service(node) is True
    assert node.cli.wait_for_service.call_count == 3
    node.cli.wait_for_service.assert_called_with(timeout_sec=1.0)
    assert node.logger.info.call_count == 2


def test_wait_for_service_interrupted(monkeypatch: pytest.MonkeyPatch) -> None:
    node = _fake_node()
    node.cli.wait_for_service.return_value = False
    monkeypatch.setattr(client_mod.rclpy, "ok", lambda: False)

    assert MinimalClient.wait_for_service(node) is False
    node.logger.error.assert_called_once_with(
        "client interrupted while waiting for service to appear."
    )


def test_wait_for_service_timeout(monkeypatch: pytest.MonkeyPatch) -> None:
    node = _fake_node(wait_interval_sec=0.0, wait_timeout_sec=5.0)
    node.cli.wait_for_service.return_value = False
    monkeypatch.setattr(client_mod.rclpy, "ok", lambda: True)
    clock = iter([100.0, 101.0, 106.0])
    monkeypatch.setattr(client_mod.time, "monotonic", lambda: next(clock))

    assert MinimalClient.wait_for_service(node) is False
    assert node.cli.wait_for_service.call_count == 2


@pytest.mark.parametrize(
    "ready, result, expected",
    [(False, None, 1), (True, None, 1), (True, 42, 0)],
)
def test_main_exit_status(monkeypatch: pytest.MonkeyPatch, ready, result, expected) -> None:
    node = MagicMock()
    node.wait_for_service.return_value = ready
    node.send_request.return_value = result
    monkeypatch.setattr(client_mod.rclpy, "init", MagicMock())
    shutdown = MagicMock()
    monkeypatch.setattr(client_mod.rclpy, "try_shutdown", shutdown)
    monkeypatch.setattr(client_mod, "MinimalClient", lambda: node)

    assert client_mod.main() == expected
    node.destroy_node.assert_called_once()
    shutdown.assert_called_once()


def test_main_setup_failure(monkeypatch: pytest.MonkeyPatch) -> None:
    def _broken():
        raise ValueError("invalid service name")

    monkeypatch.setattr(client_mod.rclpy, "init", MagicMock())
    shutdown = MagicMock()
    monkeypatch.setattr(client_mod.rclpy, "try_shutdown", shutdown)
    monkeypatch.setattr(client_mod, "MinimalClient", _broken)

    assert client_mod.main() == 1
    shutdown.assert_called_once()
