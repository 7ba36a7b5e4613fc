"""Tests for the local filesystem adapter and project paths."""

from galscript.catalog.assets import AssetType
from galscript.common.filesystem import FileSystem, LocalFileSystem, ProjectPaths


class TestLocalFileSystem:
    def test_satisfies_protocol(self):
        assert isinstance(LocalFileSystem(), FileSystem)

    def test_unreadable_file_reads_empty(self, tmp_path):
        assert LocalFileSystem().read_text(tmp_path / "missing.txt") == ""

    def test_invalid_encoding_reads_empty(self, tmp_path):
        path = tmp_path / "binary.txt"
        path.write_bytes(b"\xff\xfe\xfa")
        assert LocalFileSystem().read_text(path) == ""

    def test_list_dir(self, tmp_path):
        (tmp_path / "b.txt").write_text("")
        (tmp_path / "a").mkdir()

        entries = LocalFileSystem().list_dir(tmp_path)

        assert [(e.name, e.is_dir) for e in entries] == [("a", True), ("b.txt", False)]
        assert LocalFileSystem().list_dir(tmp_path / "nothing") == []

    def test_walk_files_filters_suffix(self, tmp_path):
        (tmp_path / "x" / "y").mkdir(parents=True)
        (tmp_path / "x" / "y" / "deep.TXT").write_text("")
        (tmp_path / "top.txt").write_text("")
        (tmp_path / "skip.md").write_text("")

        files = LocalFileSystem().walk_files(tmp_path, ".txt")

        assert [p.relative_to(tmp_path).as_posix() for p in files] == [
            "top.txt",
            "x/y/deep.TXT",
        ]

    def test_walk_missing_root(self, tmp_path):
        assert LocalFileSystem().walk_files(tmp_path / "none", ".txt") == []

    def test_write_and_make_dirs(self, tmp_path):
        fs = LocalFileSystem()
        target = tmp_path / "a" / "b"
        fs.make_dirs(target)
        fs.make_dirs(target)
        fs.write_text(target / "c.txt", "hello")

        assert fs.is_file(target / "c.txt")
        assert fs.exists(target)
        assert not fs.is_file(target)
        assert fs.read_text(target / "c.txt") == "hello"


class TestProjectPaths:
    def test_folders(self, tmp_path):
        paths = ProjectPaths(tmp_path)
        assert paths.scene_root == tmp_path / "scene"
        assert paths.asset_dir(AssetType.BGM) == tmp_path / "bgm"

    def test_asset_type_for_path(self, tmp_path):
        paths = ProjectPaths(tmp_path)
        assert paths.asset_type_for_path(tmp_path / "figure" / "a.png") is AssetType.FIGURE
        assert paths.asset_type_for_path(tmp_path / "scene" / "x" / "y.txt") is AssetType.SCENE
        assert paths.asset_type_for_path(tmp_path / "other" / "a.png") is None
        assert paths.asset_type_for_path(tmp_path) is None
        assert paths.asset_type_for_path(tmp_path.parent / "elsewhere") is None

    def test_is_scene_file(self, tmp_path):
        paths = ProjectPaths(tmp_path)
        assert paths.is_scene_file(tmp_path / "scene" / "chapter1" / "a.txt")
        assert not paths.is_scene_file(tmp_path / "scene" / "notes.md")
        assert not paths.is_scene_file(tmp_path / "background" / "a.txt")
