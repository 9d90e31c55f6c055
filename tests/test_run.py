import socket
import threading
import time
from unittest.mock import MagicMock, patch

import pytest

from clock_server.core.config import get_settings
from clock_server import run

RUNNING_MESSAGE = "Clock server running on port %s"
FAILED_MESSAGE = "Failed to start clock server host=%s port=%s err=%s"


@pytest.fixture(autouse=True)
def _reset_settings(monkeypatch, tmp_path):
    monkeypatch.chdir(tmp_path)
    # setenv first so monkeypatch restores PORT after run.main writes it
    monkeypatch.setenv("PORT", "")
    monkeypatch.delenv("PORT")
    get_settings.cache_clear()
    yield
    get_settings.cache_clear()


@pytest.fixture()
def held_port():
    """A port on 127.0.0.1 already taken by a listening socket."""
    holder = socket.socket(socket.AF_INET, socket.SOCK_STREAM)
    holder.bind(("127.0.0.1", 0))
    holder.listen(1)
    yield holder.getsockname()[1]
    holder.close()


def _messages(mock_log: MagicMock) -> list[str]:
    return [call.args[0] for call in mock_log.call_args_list]


def test_builds_server_with_default_port() -> None:
    with patch("clock_server.run.build_server") as build_server:
        run.main([])

    build_server.assert_called_once_with("0.0.0.0", 3000)
    build_server.return_value.run.assert_called_once()


def test_port_flag_overrides_settings() -> None:
    with patch("clock_server.run.build_server") as build_server:
        run.main(["--port", "4000", "--host", "127.0.0.1"])

    build_server.assert_called_once_with("127.0.0.1", 4000)
    assert get_settings().PORT == 4000


def test_port_env_var_is_used(monkeypatch) -> None:
    monkeypatch.setenv("PORT", "5050")

    with patch("clock_server.run.build_server") as build_server:
        run.main([])

    build_server.assert_called_once_with("0.0.0.0", 5050)


def test_build_server_targets_the_app() -> None:
    server = run.build_server("127.0.0.1", 4321)

    assert isinstance(server, run.ClockServer)
    assert server.config.app == "clock_server.main:app"
    assert server.config.host == "127.0.0.1"
    assert server.config.port == 4321


def test_port_in_use_exits_1_without_running_message(held_port) -> None:
    with patch.object(run.LOG, "info") as log_info, patch.object(run.LOG, "error") as log_error:
        with pytest.raises(SystemExit) as excinfo:
            run.main(["--host", "127.0.0.1", "--port", str(held_port)])

    assert excinfo.value.code == 1
    assert RUNNING_MESSAGE not in _messages(log_info)
    assert _messages(log_error) == [FAILED_MESSAGE]
    assert log_error.call_args.args[1:3] == ("127.0.0.1", held_port)


def test_non_zero_uvicorn_exit_maps_to_1() -> None:
    with patch("clock_server.run.build_server") as build_server:
        build_server.return_value.run.side_effect = SystemExit(3)
        with pytest.raises(SystemExit) as excinfo:
            run.main([])

    assert excinfo.value.code == 1


def test_server_that_never_started_exits_1() -> None:
    with patch("clock_server.run.build_server") as build_server:
        build_server.return_value.started = False
        with pytest.raises(SystemExit) as excinfo:
            run.main([])

    assert excinfo.value.code == 1


def test_out_of_range_port_exits_1() -> None:
    with patch("clock_server.run.build_server") as build_server:
        with pytest.raises(SystemExit) as excinfo:
            run.main(["--port", "70000"])

    assert excinfo.value.code == 1
    build_server.assert_not_called()


def test_running_message_reports_bound_port() -> None:
    # port 0 lets the OS pick, so the logged port must come from the socket
    server = run.build_server("127.0.0.1", 0)

    with patch.object(run.LOG, "info") as log_info:
        thread = threading.Thread(target=server.run, daemon=True)
        thread.start()
        deadline = time.monotonic() + 10
        while not server.started and time.monotonic() < deadline:
            time.sleep(0.05)
        server.should_exit = True
        thread.join(timeout=10)

    assert server.started
    running = [call for call in log_info.call_args_list if call.args[0] == RUNNING_MESSAGE]
    assert len(running) == 1
    assert running[0].args[1] > 0
