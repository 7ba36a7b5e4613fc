"""Tests for the project-wide variable index."""

import asyncio
import threading

import pytest

from galscript.common.events import EventBus, VariableIndexUpdated
from galscript.common.filesystem import LocalFileSystem, ProjectPaths
from galscript.index.models import UsageKind
from galscript.index.variable_index import VariableIndex


def write(path, content):
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(content, encoding="utf-8")
    return path


@pytest.fixture
def scene_root(tmp_path):
    root = tmp_path / "game" / "scene"
    root.mkdir(parents=True)
    return root


@pytest.fixture
def events():
    return EventBus()


@pytest.fixture
def index(tmp_path, events):
    return VariableIndex(ProjectPaths(tmp_path / "game"), events=events)


class TestScanText:
    def test_definitions_and_usages(self, index):
        index.scan_text(
            "setVar:score=bonus+1;\njumpLabel:win -when=score>5 and visited;", "a.txt"
        )

        score = index.get_variable("score")
        assert score is not None
        assert [(d.value, d.line_number) for d in score.definitions] == [("bonus+1", 0)]
        assert [(u.kind, u.line_number) for u in score.usages] == [
            (UsageKind.WRITE, 0),
            (UsageKind.READ, 1),
        ]
        assert score.usages[1].context == "jumpLabel:win -when=score>5 and visited;"

        bonus = index.get_variable("bonus")
        assert bonus is not None
        assert not bonus.definitions
        assert [u.kind for u in bonus.usages] == [UsageKind.READ]

    def test_is_variable_defined(self, index):
        index.scan_text("setVar:a=1;\nend -when=b;", "a.txt")
        assert index.is_variable_defined("a")
        assert not index.is_variable_defined("b")
        assert not index.is_variable_defined("missing")

    def test_undefined_variables_sorted(self, index):
        index.scan_text("end -when=zeta or alpha;\nsetVar:mid=1;\nend -when=mid;", "a.txt")
        assert index.get_undefined_variables() == ["alpha", "zeta"]

    def test_keywords_and_numbers_not_indexed(self, index):
        index.scan_text("end -when=true and 3 > 2;", "a.txt")
        assert len(index) == 0

    def test_float_spellings_are_variables(self, index):
        index.scan_text("end -when=nan or inf or infinity or Infinity;", "a.txt")
        assert index.get_undefined_variables() == ["inf", "infinity", "nan"]

    def test_rescan_replaces_file_contributions(self, index):
        index.scan_text("setVar:a=1;", "a.txt")
        index.scan_text("setVar:a=2;", "b.txt")
        index.scan_text("setVar:a=3;", "a.txt")

        record = index.get_variable("a")
        assert sorted((d.file_path, d.value) for d in record.definitions) == [
            ("a.txt", "3"),
            ("b.txt", "2"),
        ]

    def test_repeated_rescans_do_not_accumulate(self, index):
        for _ in range(5):
            index.scan_text("setVar:a=1;\nend -when=a;", "a.txt")
        record = index.get_variable("a")
        assert len(record.definitions) == 1
        assert len(record.usages) == 2

    def test_rescan_drops_variables_no_longer_present(self, index):
        index.scan_text("setVar:old=1;", "a.txt")
        index.scan_text("setVar:new=1;", "a.txt")
        assert "old" not in index
        assert "new" in index

    def test_find_variable_locations(self, index):
        index.scan_text("setVar:a=1;\nend -when=a;", "a.txt")
        locations = index.find_variable_locations("a")
        assert [(l.line_number, l.kind) for l in locations] == [
            (0, "definition"),
            (0, "write"),
            (1, "read"),
        ]
        without = index.find_variable_locations("a", include_definitions=False)
        assert [l.kind for l in without] == ["write", "read"]
        assert index.find_variable_locations("nope") == []

    def test_snapshot_is_read_only(self, index):
        index.scan_text("setVar:a=1;", "a.txt")
        snapshot = index.get_all_variables()
        with pytest.raises(TypeError):
            snapshot["b"] = None  # type: ignore[index]

    def test_old_snapshot_is_not_mutated(self, index):
        index.scan_text("setVar:a=1;", "a.txt")
        before = index.get_all_variables()
        index.scan_text("setVar:a=2;", "a.txt")
        assert before["a"].definitions[0].value == "1"
        assert index.get_variable("a").definitions[0].value == "2"


class TestScanAll:
    @pytest.mark.asyncio
    async def test_full_scan_indexes_nested_files(self, index, scene_root):
        write(scene_root / "start.txt", "setVar:a=1;")
        write(scene_root / "chapter1" / "act1" / "b.txt", "end -when=a and b;")
        write(scene_root / "notes.md", "setVar:ignored=1;")

        assert await index.scan_all()

        assert index.is_variable_defined("a")
        assert index.get_undefined_variables() == ["b"]
        assert "ignored" not in index
        assert len(index.indexed_files) == 2

    @pytest.mark.asyncio
    async def test_full_scan_reflects_deletions(self, index, scene_root):
        first = write(scene_root / "a.txt", "setVar:a=1;")
        write(scene_root / "b.txt", "setVar:b=1;")
        await index.scan_all()
        first.unlink()

        await index.scan_all()

        assert "a" not in index
        assert "b" in index

    @pytest.mark.asyncio
    async def test_full_scan_is_idempotent(self, index, scene_root):
        write(scene_root / "a.txt", "setVar:a=1;\nend -when=a and c;")
        write(scene_root / "sub" / "b.txt", "setVar:c=a;")

        await index.scan_all()
        first = dict(index.get_all_variables())
        await index.scan_all()

        assert dict(index.get_all_variables()) == first

    @pytest.mark.asyncio
    async def test_missing_scene_root_gives_empty_index(self, tmp_path):
        index = VariableIndex(ProjectPaths(tmp_path / "nowhere"))
        assert await index.scan_all()
        assert len(index) == 0

    @pytest.mark.asyncio
    async def test_superseded_scan_is_discarded(self, index, scene_root):
        write(scene_root / "a.txt", "setVar:a=1;")
        results = await asyncio.gather(index.scan_all(), index.scan_all())
        assert results == [False, True]
        assert "a" in index

    @pytest.mark.asyncio
    async def test_publishes_update_events(self, index, scene_root, events):
        received = []
        events.subscribe(VariableIndexUpdated, received.append)
        write(scene_root / "a.txt", "setVar:a=1;")

        await index.scan_all()
        await index.scan_file(scene_root / "a.txt")

        assert [(e.full_scan, e.variable_count) for e in received] == [
            (True, 1),
            (False, 1),
        ]
        assert received[1].file_path == str(scene_root / "a.txt")


class TestScanFile:
    @pytest.mark.asyncio
    async def test_scan_file_replaces_previous_entries(self, index, scene_root):
        path = write(scene_root / "a.txt", "setVar:a=1;")
        await index.scan_all()

        path.write_text("setVar:a=2;\nsetVar:b=3;", encoding="utf-8")
        await index.scan_file(path)

        assert [d.value for d in index.get_variable("a").definitions] == ["2"]
        assert index.is_variable_defined("b")

    @pytest.mark.asyncio
    async def test_missing_file_is_not_indexed(self, index, scene_root):
        missing = scene_root / "missing.txt"
        await index.scan_file(missing)

        assert len(index) == 0
        assert str(missing) not in index.indexed_files

    @pytest.mark.asyncio
    async def test_deleted_file_is_dropped_on_rescan(self, index, scene_root):
        path = write(scene_root / "a.txt", "setVar:a=1;")
        await index.scan_all()
        path.unlink()

        await index.scan_file(path)

        assert "a" not in index
        assert index.indexed_files == frozenset()

    @pytest.mark.asyncio
    async def test_remove_file(self, index, scene_root):
        a = write(scene_root / "a.txt", "setVar:a=1;\nend -when=shared;")
        write(scene_root / "b.txt", "end -when=shared;")
        await index.scan_all()

        await index.remove_file(a)

        assert "a" not in index
        assert len(index.get_variable("shared").usages) == 1
        assert str(a) not in index.indexed_files

    @pytest.mark.asyncio
    async def test_uses_injected_filesystem(self, tmp_path):
        class MemoryFileSystem(LocalFileSystem):
            def is_file(self, path):
                return True

            def read_text(self, path):
                return "setVar:memory=1;"

        index = VariableIndex(ProjectPaths(tmp_path), filesystem=MemoryFileSystem())
        await index.scan_file(tmp_path / "scene" / "x.txt")
        assert index.is_variable_defined("memory")


class GatedFileSystem(LocalFileSystem):
    """Holds the first read open until the test releases it."""

    def __init__(self):
        super().__init__()
        self.reading = threading.Event()
        self.release = threading.Event()
        self._gated = True

    def read_text(self, path):
        text = super().read_text(path)
        if self._gated:
            self._gated = False
            self.reading.set()
            self.release.wait(5)
        return text


class TestUpdatesDuringFullScan:
    @pytest.fixture
    def filesystem(self):
        return GatedFileSystem()

    @pytest.fixture
    def gated_index(self, tmp_path, filesystem):
        return VariableIndex(ProjectPaths(tmp_path / "game"), filesystem=filesystem)

    async def start_full_scan(self, index, filesystem):
        task = asyncio.create_task(index.scan_all())
        assert await asyncio.to_thread(filesystem.reading.wait, 5)
        return task

    @pytest.mark.asyncio
    async def test_file_rescan_survives_full_scan(
        self, gated_index, filesystem, scene_root
    ):
        path = write(scene_root / "a.txt", "setVar:old=1;")
        task = await self.start_full_scan(gated_index, filesystem)

        path.write_text("setVar:new=1;", encoding="utf-8")
        await gated_index.scan_file(path)
        filesystem.release.set()

        assert await task
        assert gated_index.is_variable_defined("new")
        assert "old" not in gated_index
        assert gated_index.indexed_files == frozenset({str(path)})

    @pytest.mark.asyncio
    async def test_removal_survives_full_scan(
        self, gated_index, filesystem, scene_root
    ):
        path = write(scene_root / "a.txt", "setVar:old=1;")
        task = await self.start_full_scan(gated_index, filesystem)

        path.unlink()
        await gated_index.remove_file(path)
        filesystem.release.set()

        assert await task
        assert len(gated_index) == 0
        assert gated_index.indexed_files == frozenset()

    @pytest.mark.asyncio
    async def test_text_update_survives_full_scan(
        self, gated_index, filesystem, scene_root
    ):
        path = write(scene_root / "a.txt", "setVar:old=1;")
        task = await self.start_full_scan(gated_index, filesystem)

        gated_index.scan_text("setVar:unsaved=1;", path)
        filesystem.release.set()

        assert await task
        assert gated_index.is_variable_defined("unsaved")
        assert "old" not in gated_index

    @pytest.mark.asyncio
    async def test_later_full_scan_starts_clean(
        self, gated_index, filesystem, scene_root
    ):
        path = write(scene_root / "a.txt", "setVar:old=1;")
        task = await self.start_full_scan(gated_index, filesystem)
        gated_index.scan_text("setVar:unsaved=1;", path)
        filesystem.release.set()
        await task

        await gated_index.scan_all()

        assert gated_index.is_variable_defined("old")
        assert "unsaved" not in gated_index


class TestFailingSubscriber:
    @pytest.mark.asyncio
    async def test_failing_subscriber_does_not_break_updates(
        self, index, scene_root, events
    ):
        def explode(event):
            raise RuntimeError("subscriber failed")

        events.subscribe(VariableIndexUpdated, explode)
        write(scene_root / "a.txt", "setVar:a=1;")

        assert await index.scan_all()
        index.scan_text("setVar:b=1;", "b.txt")

        assert index.is_variable_defined("a")
        assert index.is_variable_defined("b")
