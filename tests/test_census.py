import psutil

from launchpad import census as census_module
from launchpad.census import census


class _FakeProc:
    def __init__(self, name):
        self.info = {"name": name}


def test_census_lowercases_and_deduplicates(monkeypatch) -> None:
    procs = [_FakeProc("Foo.EXE"), _FakeProc("foo.exe"), _FakeProc(None), _FakeProc("bar.exe")]
    monkeypatch.setattr(census_module.psutil, "process_iter", lambda attrs=None: iter(procs))
    assert census() == {"foo.exe", "bar.exe"}


def test_census_failure_yields_empty_set(monkeypatch) -> None:
    def boom(attrs=None):
        raise psutil.AccessDenied()

    monkeypatch.setattr(census_module.psutil, "process_iter", boom)
    assert census() == set()
