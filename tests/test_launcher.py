import psutil
import pytest

from launchpad import launcher
from launchpad.models import CatalogEntry


class _FakeProc:
    def __init__(self, pid, name, error=None):
        self.pid = pid
        self.info = {"name": name}
        self.error = error
        self.terminated = False

    def terminate(self):
        if self.error:
            raise self.error
        self.terminated = True


def test_launch_app_spawns_from_exe_folder(tmp_path, monkeypatch) -> None:
    exe = tmp_path / "tool" / "tool.exe"
    exe.parent.mkdir()
    exe.write_bytes(b"MZ")
    calls = []
    monkeypatch.setattr(launcher.subprocess, "Popen", lambda args, **kw: calls.append((args, kw)))

    launcher.launch_app(CatalogEntry(id="x", name="Tool", path=str(exe)))
    args, kwargs = calls[0]
    assert args == [str(exe)]
    assert kwargs["cwd"] == str(exe.parent)


def test_launch_app_rejects_missing_executable(tmp_path, monkeypatch) -> None:
    monkeypatch.setattr(launcher.subprocess, "Popen", lambda *a, **kw: pytest.fail("should not spawn"))
    with pytest.raises(RuntimeError):
        launcher.launch_app(CatalogEntry(id="x", name="Ghost", path=str(tmp_path / "ghost.exe")))
    with pytest.raises(RuntimeError):
        launcher.launch_app(CatalogEntry(id="y", name="Nothing"))


def test_stop_app_terminates_matching_processes(monkeypatch) -> None:
    procs = [
        _FakeProc(1, "Foo.exe"),
        _FakeProc(2, "bar.exe"),
        _FakeProc(3, "foo.exe"),
        _FakeProc(4, "foo.exe", error=psutil.AccessDenied(4)),
    ]
    monkeypatch.setattr(launcher.psutil, "process_iter", lambda attrs=None: iter(procs))

    stopped = launcher.stop_app(CatalogEntry(id="x", name="Foo", path="C:\\Foo\\foo.exe"))
    assert stopped == 2
    assert [p.pid for p in procs if p.terminated] == [1, 3]


def test_stop_app_without_path_raises() -> None:
    with pytest.raises(RuntimeError):
        launcher.stop_app(CatalogEntry(id="x", name="Nothing"))


def test_is_app_running_uses_census(monkeypatch) -> None:
    monkeypatch.setattr(launcher, "census", lambda: {"foo.exe"})
    assert launcher.is_app_running("C:\\Foo\\FOO.exe") is True
    assert launcher.is_app_running("C:\\Bar\\bar.exe") is False
    assert launcher.is_app_running("") is False
