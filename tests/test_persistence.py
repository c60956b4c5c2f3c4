"""
Tests for output channels — in-memory and on-disk registration of modules.
"""

from pathlib import Path

from componentgen.core.models.template import GeneratedSource
from componentgen.core.persistence.output import DirectoryOutput, MemoryOutput, atomic_write_text


def _source(name: str = "widget_getters.py", content: str = "x = 1\n", origin: str | None = None):
    return GeneratedSource(name=name, content=content, container="game.Widget", origin=origin)


class TestMemoryOutput:
    def test_same_name_replaces(self):
        output = MemoryOutput()
        output.add_source(_source(content="a\n"))
        output.add_source(_source(content="b\n"))
        assert output.names() == ["widget_getters.py"]
        assert output.text("widget_getters.py") == "b\n"


class TestAtomicWrite:
    def test_creates_directories(self, tmp_path: Path):
        path = tmp_path / "deep" / "nested" / "out.py"
        atomic_write_text(path, "x = 1\n")
        assert path.read_text() == "x = 1\n"

    def test_no_temp_files_left(self, tmp_path: Path):
        atomic_write_text(tmp_path / "out.py", "x = 1\n")
        assert list(tmp_path.glob(".componentgen_*.tmp")) == []


class TestDirectoryOutput:
    def test_writes_next_to_origin(self, tmp_path: Path):
        origin = tmp_path / "game" / "widgets.py"
        output = DirectoryOutput()
        output.add_source(_source(origin=str(origin)))
        target = tmp_path / "game" / "widget_getters.py"
        assert target.read_text() == "x = 1\n"
        assert output.written == [target]

    def test_output_dir_wins(self, tmp_path: Path):
        output = DirectoryOutput(output_dir=tmp_path / "gen")
        output.add_source(_source(origin=str(tmp_path / "game" / "widgets.py")))
        assert (tmp_path / "gen" / "widget_getters.py").is_file()

    def test_fallback_dir(self, tmp_path: Path):
        output = DirectoryOutput(fallback_dir=tmp_path)
        output.add_source(_source())
        assert (tmp_path / "widget_getters.py").is_file()

    def test_unchanged_not_rewritten(self, tmp_path: Path):
        target = tmp_path / "widget_getters.py"
        target.write_text("x = 1\n")
        mtime = target.stat().st_mtime_ns

        output = DirectoryOutput(output_dir=tmp_path)
        output.add_source(_source())

        assert output.unchanged == [target]
        assert output.written == []
        assert target.stat().st_mtime_ns == mtime

    def test_dry_run(self, tmp_path: Path):
        output = DirectoryOutput(output_dir=tmp_path, dry_run=True)
        output.add_source(_source())
        assert output.pending == [tmp_path / "widget_getters.py"]
        assert not (tmp_path / "widget_getters.py").exists()

    def test_to_dict(self, tmp_path: Path):
        output = DirectoryOutput(output_dir=tmp_path)
        output.add_source(_source())
        data = output.to_dict()
        assert data["written"] == [str(tmp_path / "widget_getters.py")]
        assert data["unchanged"] == []
        assert data["pending"] == []
        assert data["removed"] == []
        assert data["obsolete"] == []


class TestPrune:
    def test_removes_unregistered(self, tmp_path: Path):
        stale = tmp_path / "old_getters.py"
        stale.write_text("# old\n")
        output = DirectoryOutput(output_dir=tmp_path)
        output.add_source(_source())

        output.prune([tmp_path / "widget_getters.py", stale])

        assert not stale.exists()
        assert (tmp_path / "widget_getters.py").is_file()
        assert output.removed == [stale]

    def test_unchanged_file_is_registered(self, tmp_path: Path):
        target = tmp_path / "widget_getters.py"
        target.write_text("x = 1\n")
        output = DirectoryOutput(output_dir=tmp_path)
        output.add_source(_source())

        output.prune([target])

        assert target.is_file()
        assert output.removed == []

    def test_dry_run_only_reports(self, tmp_path: Path):
        stale = tmp_path / "old_getters.py"
        stale.write_text("# old\n")
        output = DirectoryOutput(output_dir=tmp_path, dry_run=True)

        output.prune([stale, stale])

        assert stale.is_file()
        assert output.obsolete == [stale]
        assert output.to_dict()["obsolete"] == [str(stale)]

    def test_already_gone(self, tmp_path: Path):
        output = DirectoryOutput(output_dir=tmp_path)
        output.prune([tmp_path / "gone_getters.py"])
        assert output.removed == []
