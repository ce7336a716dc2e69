from __future__ import annotations

import signal
import textwrap
from pathlib import Path

import pytest

import suitekit
from suitekit.cli.main import _interrupt_requests_abort
from suitekit.core.abort import AbortSignal
from suitekit.registry import registry


@pytest.fixture
def plugin_dir(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> Path:
    (tmp_path / "sample_plugin.py").write_text(
        textwrap.dedent(
            """
            from suitekit import registry

            LOADS = []


            def _ping():
                pass


            def register():
                LOADS.append(1)
                registry.register("plugins", "ping", _ping)
            """
        ),
        encoding="utf-8",
    )
    (tmp_path / "hookless_plugin.py").write_text("IMPORTED = True\n", encoding="utf-8")
    monkeypatch.syspath_prepend(str(tmp_path))
    monkeypatch.setattr(suitekit, "_BOOTSTRAPPED", False)
    return tmp_path


def test_bootstrap_loads_plugins_once(plugin_dir: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("SUITEKIT_PLUGINS", " sample_plugin , ,hookless_plugin,")

    suitekit.bootstrap()
    suitekit.bootstrap()

    import hookless_plugin
    import sample_plugin

    assert sample_plugin.LOADS == [1]
    assert hookless_plugin.IMPORTED
    assert registry.get("plugins").case_names() == ("ping",)


def test_bootstrap_without_plugins_is_a_no_op(plugin_dir: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.delenv("SUITEKIT_PLUGINS", raising=False)
    suitekit.bootstrap()
    assert len(registry) == 0
    assert suitekit._BOOTSTRAPPED


def test_unknown_plugin_module_raises(plugin_dir: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("SUITEKIT_PLUGINS", "no_such_suitekit_plugin")
    with pytest.raises(ModuleNotFoundError):
        suitekit.bootstrap()
    assert not suitekit._BOOTSTRAPPED


def test_first_interrupt_requests_abort_and_second_is_fatal() -> None:
    abort = AbortSignal()
    original = signal.getsignal(signal.SIGINT)

    with _interrupt_requests_abort(abort):
        handler = signal.getsignal(signal.SIGINT)
        assert handler is not original
        handler(signal.SIGINT, None)
        assert abort.reason == "interrupted"
        with pytest.raises(KeyboardInterrupt):
            handler(signal.SIGINT, None)

    assert signal.getsignal(signal.SIGINT) is original
