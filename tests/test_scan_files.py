import os

from core.models_fs import FileItem, SortKey
from core.scan_files import collect_files, sort_files


def test_collect_folder_children(make_file, src_dir):
    make_file("b.txt", folder=src_dir)
    make_file("a.txt", folder=src_dir)
    make_file(".hidden", folder=src_dir)
    make_file(".DS_Store", folder=src_dir)
    (src_dir / "nested").mkdir()
    make_file("deep.txt", folder=src_dir / "nested")

    names = [f.name for f in collect_files([src_dir])]

    assert names == ["a.txt", "b.txt"]


def test_collect_include_hidden(make_file, src_dir):
    make_file(".hidden", folder=src_dir)
    make_file(".DS_Store", folder=src_dir)

    names = [f.name for f in collect_files([src_dir], include_hidden=True)]

    assert names == [".hidden"]


def test_collect_drops_duplicates(make_file, src_dir):
    path = make_file("a.txt", folder=src_dir)

    files = collect_files([path, src_dir, src_dir / ".." / src_dir.name / "a.txt"])

    assert len(files) == 1
    assert files[0].path == path


def test_collect_keeps_missing_files(src_dir):
    files = collect_files([src_dir / "gone.txt"])

    assert files == [FileItem(path=src_dir / "gone.txt", name="gone.txt", size=0, mtime=0.0)]


def test_sort_by_name_case_insensitive():
    files = [FileItem(f"/x/{n}", n, 0, 0.0) for n in ("b.txt", "A.txt", "c.txt")]
    assert [f.name for f in sort_files(files)] == ["A.txt", "b.txt", "c.txt"]
    assert [f.name for f in sort_files(files, reverse=True)] == ["c.txt", "b.txt", "A.txt"]


def test_sort_by_size_and_mtime():
    files = [
        FileItem("/x/a", "a", size=30, mtime=1.0),
        FileItem("/x/b", "b", size=10, mtime=3.0),
        FileItem("/x/c", "c", size=20, mtime=2.0),
    ]
    assert [f.name for f in sort_files(files, SortKey.SIZE)] == ["b", "c", "a"]
    assert [f.name for f in sort_files(files, SortKey.MTIME)] == ["a", "c", "b"]


def test_file_item_from_path(make_file, src_dir):
    path = make_file("a.txt", "12345", src_dir)
    os.utime(path, (1000, 2000))

    item = FileItem.from_path(path)

    assert item.size == 5
    assert item.mtime == 2000
