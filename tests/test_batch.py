"""
Tests for run_batch: resolution, batch indices, handle release.
"""

from pathlib import Path

import pytest

from core.batch import SourceEntry, resolve_sources, run_batch
from core.errors import ResolutionError
from core.models_fs import ErrorKind, Operation, Outcome, ProcessingOptions
from core.sources import PathResolver, ResolvedSource, reference_name
from core.steps import FindReplace, Prefix, SequentialNumbering, steps_from_json


class RecordingResolver:
    """Resolves names inside a folder; some are stale, some fail"""

    def __init__(self, folder, stale=(), broken=(), revoked=(), denied=(), interrupt=()):
        self.folder = Path(folder)
        self.stale = set(stale)
        self.broken = set(broken)
        self.revoked = set(revoked)
        self.denied = set(denied)
        self.interrupt = set(interrupt)
        self.released = []

    def resolve(self, reference):
        if reference in self.denied:
            raise PermissionError(13, "Operation not permitted", reference)
        if reference in self.interrupt:
            raise KeyboardInterrupt
        if reference in self.broken:
            raise ResolutionError("bookmark data is corrupt", reference=reference)
        if reference in self.revoked:
            raise ResolutionError("access revoked", stale=True, reference=reference)
        return ResolvedSource(
            path=self.folder / reference,
            is_stale=reference in self.stale,
            on_release=lambda: self.released.append(reference),
        )


def test_example_batch(make_file, src_dir, dest_dir):
    source = make_file("photo.txt", "img", src_dir)
    make_file("file.txt", "taken", dest_dir)

    result = run_batch([SourceEntry(source)], [FindReplace(find="photo", replace="file")], dest_dir)

    assert result.outcome is Outcome.ALL_SUCCESS
    assert (dest_dir / "file_1.txt").read_text() == "img"
    assert (dest_dir / "file.txt").read_text() == "taken"


def test_plain_paths_are_accepted(make_file, src_dir, dest_dir):
    sources = [make_file("a.txt", folder=src_dir), str(make_file("b.txt", folder=src_dir))]

    result = run_batch(sources, [Prefix("x_")], dest_dir, operation=Operation.MOVE)

    assert result.success_count == 2
    assert sorted(p.name for p in dest_dir.iterdir()) == ["x_a.txt", "x_b.txt"]
    assert list(src_dir.iterdir()) == []


def test_index_is_kept_for_failed_resolution(make_file, src_dir, dest_dir):
    for name in ("a.txt", "c.txt"):
        make_file(name, folder=src_dir)
    resolver = RecordingResolver(src_dir, broken={"b.txt"})
    entries = [SourceEntry(name, file_id=name) for name in ("a.txt", "b.txt", "c.txt")]

    result = run_batch(entries, [SequentialNumbering(start=1, min_digits=1)], dest_dir, resolver=resolver)

    assert result.success_count == 2
    assert sorted(p.name for p in dest_dir.iterdir()) == ["1a.txt", "3c.txt"]
    assert len(result.errors) == 1
    assert result.errors[0].kind is ErrorKind.RESOLUTION_FAILED
    assert result.errors[0].file_name == "b.txt"
    assert result.errors[0].file_id == "b.txt"
    assert "bookmark data is corrupt" in result.errors[0].message


def test_stale_sources_are_reported_and_released(make_file, src_dir, dest_dir):
    for name in ("a.txt", "b.txt"):
        make_file(name, folder=src_dir)
    resolver = RecordingResolver(src_dir, stale={"b.txt"}, revoked={"c.txt"})
    entries = [SourceEntry(name, file_id=name) for name in ("a.txt", "b.txt", "c.txt")]

    result = run_batch(entries, [], dest_dir, resolver=resolver)

    assert result.success_count == 1
    assert [e.kind for e in result.errors] == [ErrorKind.STALE_RESOLUTION] * 2
    assert result.stale_file_ids == ["b.txt", "c.txt"]
    assert result.first_stale_file_id == "b.txt"
    assert sorted(resolver.released) == ["a.txt", "b.txt"]
    assert not (dest_dir / "b.txt").exists()


def test_resolver_os_error_is_a_per_file_error(make_file, src_dir, dest_dir):
    make_file("a.txt", folder=src_dir)
    resolver = RecordingResolver(src_dir, denied={"bad.txt"})

    result = run_batch(
        [SourceEntry("a.txt"), SourceEntry("bad.txt", file_id="bad")], [], dest_dir, resolver=resolver
    )

    assert result.success_count == 1
    assert result.total_count == 2
    assert result.errors[0].kind is ErrorKind.RESOLUTION_FAILED
    assert result.errors[0].file_id == "bad"
    assert "Operation not permitted" in result.errors[0].message
    assert resolver.released == ["a.txt"]


def test_handles_released_when_resolution_is_interrupted(make_file, src_dir, dest_dir):
    make_file("a.txt", folder=src_dir)
    resolver = RecordingResolver(src_dir, interrupt={"stop.txt"})

    with pytest.raises(KeyboardInterrupt):
        run_batch(["a.txt", "stop.txt"], [], dest_dir, resolver=resolver)
    assert resolver.released == ["a.txt"]
    assert list(dest_dir.iterdir()) == []


def test_unusable_computed_names_do_not_abort_batch(make_file, src_dir, dest_dir):
    sources = [make_file(n, folder=src_dir) for n in ("a.txt", "b.txt")]
    steps = steps_from_json('[{"id": "p", "type": {"kind": "prefix", "value": "\\u0000"}}]')

    result = run_batch(sources, steps, dest_dir)

    assert result.total_count == 2
    assert result.outcome is Outcome.ALL_FAILED
    assert all(e.kind is ErrorKind.FILE_SYSTEM_ERROR for e in result.errors)
    assert sorted(p.name for p in src_dir.iterdir()) == ["a.txt", "b.txt"]
    assert list(dest_dir.iterdir()) == []


def test_handles_released_when_processing_raises(make_file, src_dir, dest_dir, monkeypatch):
    make_file("a.txt", folder=src_dir)
    resolver = RecordingResolver(src_dir)

    def explode(*args, **kwargs):
        raise RuntimeError("unexpected")

    monkeypatch.setattr("core.batch.FileProcessingService.process", explode)

    with pytest.raises(RuntimeError):
        run_batch(["a.txt"], [], dest_dir, resolver=resolver)
    assert resolver.released == ["a.txt"]


def test_processing_errors_come_before_resolution_errors(src_dir, dest_dir):
    resolver = RecordingResolver(src_dir, broken={"first.txt"})

    result = run_batch(["first.txt", "missing.txt"], [], dest_dir, resolver=resolver)

    assert [e.kind for e in result.errors] == [ErrorKind.FILE_SYSTEM_ERROR, ErrorKind.RESOLUTION_FAILED]
    assert result.outcome is Outcome.ALL_FAILED


def test_missing_destination_skips_resolution(src_dir, tmp_path):
    resolver = RecordingResolver(src_dir, broken={"a.txt"})

    result = run_batch(["a.txt", "b.txt"], [], tmp_path / "gone", resolver=resolver)

    assert result.error_count == 1
    assert result.errors[0].kind is ErrorKind.PERMISSION_DENIED
    assert result.errors[0].file_name == "destination folder"
    assert resolver.released == []


def test_path_resolver_rejects_missing_and_directories(src_dir):
    resolver = PathResolver()
    with pytest.raises(ResolutionError) as excinfo:
        resolver.resolve(src_dir / "nope.txt")
    assert not excinfo.value.stale
    with pytest.raises(ResolutionError):
        resolver.resolve(src_dir)


def test_resolved_source_release_is_idempotent(tmp_path):
    calls = []
    with ResolvedSource(tmp_path, on_release=lambda: calls.append(1)) as handle:
        handle.release()
    assert calls == [1]


def test_resolve_sources_uses_display_name(make_file, src_dir):
    make_file("stored.bin", folder=src_dir)
    resolver = RecordingResolver(src_dir)

    items, handles, errors = resolve_sources(
        [SourceEntry("stored.bin", file_name="Holiday.JPG")], [Prefix("x ")], resolver
    )

    assert errors == []
    assert items[0].destination_name == "x Holiday.JPG"
    assert items[0].label == "Holiday.JPG"
    assert len(handles) == 1


def test_reference_name():
    assert reference_name("/a/b/c.txt") == "c.txt"
    assert reference_name(Path("d.txt")) == "d.txt"
    assert reference_name(42) == "42"


def test_options_are_passed_through(make_file, src_dir, dest_dir, tmp_path):
    make_file("a.txt", folder=src_dir)
    options = ProcessingOptions(log_dir=tmp_path / "logs", operation=Operation.MOVE)

    result = run_batch([src_dir / "a.txt"], [], dest_dir, options=options)

    assert result.success_count == 1
    assert not (src_dir / "a.txt").exists()
    assert len(list((tmp_path / "logs").iterdir())) == 1
