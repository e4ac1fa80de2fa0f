"""End-to-end tests for the copy stage."""

from pathlib import Path
from unittest.mock import MagicMock, patch

import pytest

from routecopy import (
    ContentKind,
    CopyFailed,
    CopyStage,
    DirectoryCreateFailed,
    FileObject,
    InvalidConfiguration,
    NoDestinationMatch,
    StreamingUnsupported,
    copy_stage,
)


def _make_file(base: Path, relative: str, content: bytes = b"hi") -> FileObject:
    path = base / relative
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_bytes(content)
    return FileObject(path=str(path), base_path=str(base))


@pytest.fixture
def project(tmp_path):
    base = tmp_path / "project"
    base.mkdir()
    return base


class TestFixedDestination:
    def test_copies_under_destination(self, tmp_path, project):
        out = tmp_path / "out"
        file = _make_file(project, "src/a.txt")

        forwarded = copy_stage(str(out)).process(file)

        assert (out / "src" / "a.txt").read_bytes() == b"hi"
        assert forwarded is file
        assert Path(file.path) == out / "src" / "a.txt"

    def test_relative_destination_resolves_against_cwd(self, tmp_path, project, monkeypatch):
        monkeypatch.chdir(tmp_path)
        file = _make_file(project, "src/a.txt")

        CopyStage("out").process(file)

        assert (tmp_path / "out" / "src" / "a.txt").read_bytes() == b"hi"
        assert file.path == "out/src/a.txt"

    def test_source_is_left_in_place(self, tmp_path, project):
        file = _make_file(project, "a.txt")
        CopyStage(str(tmp_path / "out")).process(file)
        assert (project / "a.txt").read_bytes() == b"hi"

    def test_overwrites_existing_output(self, tmp_path, project):
        out = tmp_path / "out"
        (out / "src").mkdir(parents=True)
        (out / "src" / "a.txt").write_text("stale")

        CopyStage(str(out)).process(_make_file(project, "src/a.txt"))

        assert (out / "src" / "a.txt").read_bytes() == b"hi"


class TestPrefixStripping:
    def test_strips_leading_segment(self, tmp_path, project):
        out = tmp_path / "out"
        file = _make_file(project, "src/a.txt")

        CopyStage(str(out), {"prefix": 1}).process(file)

        assert (out / "a.txt").read_bytes() == b"hi"
        assert not (out / "src").exists()

    def test_routing_uses_unstripped_path(self, tmp_path, project):
        routed = tmp_path / "routed"
        other = tmp_path / "other"
        stage = CopyStage({"src/**": str(routed), "**": str(other)}, {"prefix": 1})

        file = _make_file(project, "src/lib/a.js")
        stage.process(file)

        assert (routed / "lib" / "a.js").exists()
        assert not other.exists()

    def test_over_stripping_fails_on_destination_root(self, tmp_path, project):
        out = tmp_path / "out"
        file = _make_file(project, "src/a.txt")

        outcome = CopyStage(str(out), {"prefix": 5}).transform(file)

        assert isinstance(outcome.error, CopyFailed)
        assert out.is_dir()
        assert file.path == str(project / "src" / "a.txt")


class TestRoutedDestination:
    def test_routes_by_first_matching_pattern(self, tmp_path, project, monkeypatch):
        monkeypatch.chdir(tmp_path)
        stage = CopyStage({"*.js": "js-out", "*.css": "css-out"})

        js = stage.process(_make_file(project, "app.js"))
        css = stage.process(_make_file(project, "app.css"))

        assert js.path == "js-out/app.js"
        assert css.path == "css-out/app.css"
        assert (tmp_path / "js-out" / "app.js").read_bytes() == b"hi"

    def test_unmatched_file_fails_without_side_effects(self, tmp_path, project, monkeypatch):
        monkeypatch.chdir(tmp_path)
        stage = CopyStage({"*.js": "js-out", "*.css": "css-out"})
        file = _make_file(project, "app.png")

        with patch("routecopy.stage.pipeline.ensure_directory") as ensure, \
             patch("routecopy.stage.pipeline.copy_file") as copy:
            outcome = stage.transform(file)

        assert isinstance(outcome.error, NoDestinationMatch)
        assert outcome.error.path == "app.png"
        ensure.assert_not_called()
        copy.assert_not_called()
        assert not (tmp_path / "js-out").exists()
        assert file.path == str(project / "app.png")

    def test_custom_matcher(self, tmp_path, project):
        out = tmp_path / "anything"
        stage = CopyStage({"ignored": str(out)}, matcher=lambda path, pattern: True)

        stage.process(_make_file(project, "x/y.bin"))

        assert (out / "x" / "y.bin").exists()


class TestClassification:
    def test_stream_content_is_rejected(self, tmp_path, project):
        out = tmp_path / "out"
        file = FileObject(path=str(project / "a.txt"), base_path=str(project), kind=ContentKind.STREAM)

        with pytest.raises(StreamingUnsupported):
            CopyStage(str(out)).process(file)

        assert not out.exists()

    def test_empty_object_passes_through(self, tmp_path, project):
        out = tmp_path / "out"
        file = FileObject(path=str(project / "dir"), base_path=str(project), kind=ContentKind.EMPTY)

        outcome = CopyStage(str(out)).transform(file)

        assert outcome.ok
        assert outcome.copied is False
        assert outcome.new_path == file.path
        assert file.path == str(project / "dir")
        assert not out.exists()


class TestFailures:
    def test_directory_failure(self, tmp_path, project):
        blocker = tmp_path / "out"
        blocker.write_text("a file, not a directory")

        outcome = CopyStage(str(blocker)).transform(_make_file(project, "src/a.txt"))

        assert isinstance(outcome.error, DirectoryCreateFailed)

    def test_destination_equal_to_base_does_not_destroy_source(self, tmp_path, project):
        file = _make_file(project, "a.txt", b"keep me")

        outcome = CopyStage(str(project)).transform(file)

        assert isinstance(outcome.error, CopyFailed)
        assert (project / "a.txt").read_bytes() == b"keep me"
        assert file.path == str(project / "a.txt")

    def test_copy_failure_keeps_original_path(self, tmp_path, project):
        file = FileObject(path=str(project / "gone.txt"), base_path=str(project))

        outcome = CopyStage(str(tmp_path / "out")).transform(file)

        assert isinstance(outcome.error, CopyFailed)
        assert file.path == str(project / "gone.txt")

    def test_invalid_configuration_raised_at_construction(self):
        with pytest.raises(InvalidConfiguration):
            CopyStage(None)
        with pytest.raises(InvalidConfiguration):
            CopyStage("out", "not-options")


class TestStatusCallback:
    def test_reports_copy_lifecycle(self, tmp_path, project):
        status_cb = MagicMock()
        stage = CopyStage(str(tmp_path / "out"), status_callback=status_cb)

        stage.process(_make_file(project, "a.txt"))

        statuses = [call.args[0] for call in status_cb.call_args_list]
        assert statuses == ["copying", "complete"]

    def test_reports_errors(self, tmp_path, project):
        status_cb = MagicMock()
        stage = CopyStage({"*.js": str(tmp_path / "js")}, status_callback=status_cb)

        stage.transform(_make_file(project, "a.txt"))

        status_cb.assert_called_once()
        assert status_cb.call_args[0][0] == "error"
        assert "No destination found" in status_cb.call_args[0][1]


class TestRun:
    def test_forwards_in_order(self, tmp_path, project):
        out = tmp_path / "out"
        files = [_make_file(project, name, name.encode()) for name in ["b.txt", "a.txt", "c/d.txt"]]

        forwarded = list(CopyStage(str(out)).run(files))

        assert [Path(f.path).relative_to(out).as_posix() for f in forwarded] == ["b.txt", "a.txt", "c/d.txt"]
        assert (out / "c" / "d.txt").read_bytes() == b"c/d.txt"

    def test_stops_at_first_failure(self, tmp_path, project):
        out = tmp_path / "js"
        pulled = []

        def source():
            for name in ["a.js", "b.png", "c.js"]:
                pulled.append(name)
                yield _make_file(project, name)

        stage = CopyStage({"*.js": str(out)})
        forwarded = []
        with pytest.raises(NoDestinationMatch):
            for file in stage.run(source()):
                forwarded.append(file)

        assert len(forwarded) == 1
        assert pulled == ["a.js", "b.png"]
        assert not (out / "c.js").exists()

    def test_pulls_lazily(self, tmp_path, project):
        pulled = []

        def source():
            for name in ["a.txt", "b.txt"]:
                pulled.append(name)
                yield _make_file(project, name)

        run = CopyStage(str(tmp_path / "out")).run(source())
        assert pulled == []
        next(run)
        assert pulled == ["a.txt"]
