from launchpad.models import CatalogEntry, PortableRecord, SourceKind, derive_app_id
from launchpad.paths import exe_basename, is_executable_path, looks_executable


def test_derive_app_id_is_stable_base64_alphanumerics() -> None:
    assert derive_app_id("Foo") == "Rm9v"
    # "QmFyIFRvb2w=" with the padding stripped
    assert derive_app_id("Bar Tool") == "QmFyIFRvb2w"
    assert derive_app_id("Foo") == derive_app_id("Foo")
    assert derive_app_id("Foo") != derive_app_id("foo")


def test_derive_app_id_handles_non_ascii_names() -> None:
    app_id = derive_app_id("微信")
    assert app_id
    assert app_id.isalnum()


def test_portable_record_from_dict_accepts_camel_case() -> None:
    record = PortableRecord.from_dict(
        {"id": "portable_1", "name": " Tool ", "path": "E:\\tool.exe", "installLocation": "E:\\"}
    )
    assert record.name == "Tool"
    assert record.install_location == "E:\\"
    assert record.publisher == ""


def test_portable_record_projections() -> None:
    record = PortableRecord(id="portable_7", name="Tool", path="E:\\tool.exe", publisher="Me")
    candidate = record.to_candidate()
    assert candidate.source_kind is SourceKind.MANUAL
    assert candidate.display_name == "Tool"
    entry = record.to_entry()
    assert entry.id == "portable_7"
    assert entry.is_portable is True
    assert entry.is_running is False


def test_catalog_entry_to_dict_and_validity(tmp_path) -> None:
    exe = tmp_path / "app.exe"
    exe.write_bytes(b"MZ")
    entry = CatalogEntry(id="x", name="App", path=str(exe))
    assert entry.has_valid_path
    assert entry.to_dict()["path"] == str(exe)
    assert set(entry.to_dict()) == {
        "id", "name", "path", "publisher", "install_location", "is_portable", "is_running",
    }
    assert not CatalogEntry(id="y", name="Nothing").has_valid_path


def test_path_helpers(tmp_path) -> None:
    exe = tmp_path / "Tool.EXE"
    exe.write_bytes(b"MZ")
    folder = tmp_path / "folder.exe"
    folder.mkdir()

    assert looks_executable("C:\\x\\tool.exe")
    assert not looks_executable("C:\\x\\tool.ico")
    assert not looks_executable("")
    assert is_executable_path(str(exe))
    assert not is_executable_path(str(folder))
    assert not is_executable_path(str(tmp_path / "missing.exe"))
    assert not is_executable_path(str(tmp_path))

    assert exe_basename("C:\\Program Files\\Foo\\FOO.exe") == "foo.exe"
    assert exe_basename("/opt/foo/foo.exe") == "foo.exe"
    assert exe_basename("") == ""
