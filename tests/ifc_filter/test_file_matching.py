from pathlib import Path
from pytest import fixture
from ifc_filter.file_matching import hash_contents, hash_existing, match_pattern_in_dir


@fixture
def fixture_path(request):
    this_file = Path(request.module.__file__)
    return Path(this_file.parent, 'fixture_files')


def test_match_ifc_files(fixture_path):
    matched_files = match_pattern_in_dir(fixture_path.as_posix(), "*.ifc")
    assert [path.name for path in matched_files] == [
        "wall_and_door.ifc",
        "wall_and_door_filtered_expected.ifc",
        "wall_and_door_info_expected.ifc",
    ]


def test_match_nonexistent_files(fixture_path):
    assert not match_pattern_in_dir(fixture_path.as_posix(), "*.nonexistent")


def test_ignore_directories(tmp_path):
    Path(tmp_path, "dir.yaml").mkdir()
    Path(tmp_path, "dir.yaml", "nested.yaml").write_text("a: 1\n")
    Path(tmp_path, "top.yaml").write_text("b: 2\n")
    matched_files = match_pattern_in_dir(tmp_path, "**/*.yaml")
    assert [path.relative_to(tmp_path).as_posix() for path in matched_files] == ["dir.yaml/nested.yaml", "top.yaml"]


def test_hash_contents(tmp_path):
    empty_file = Path(tmp_path, "empty.ifc")
    empty_file.write_bytes(b"")
    assert hash_contents(empty_file) == "sha256:e3b0c44298fc1c149afbf4c8996fb92427ae41e4649b934ca495991b7852b855"


def test_hash_existing(tmp_path):
    present_file = Path(tmp_path, "present.ifc")
    present_file.write_bytes(b"")
    Path(tmp_path, "a_dir.ifc").mkdir()
    paths = [present_file.as_posix(), Path(tmp_path, "missing.ifc").as_posix(), Path(tmp_path, "a_dir.ifc").as_posix()]
    assert hash_existing(paths) == {
        present_file.as_posix(): "sha256:e3b0c44298fc1c149afbf4c8996fb92427ae41e4649b934ca495991b7852b855"
    }
