import os

import pytest

from iresizer.core import (
    FilesystemFailureError,
    InvalidInputPathError,
    Percentage,
    is_supported,
    list_images,
    plan_directory,
    plan_jobs,
)
from conftest import make_image


def test_is_supported_ignores_case():
    assert is_supported("x.JPG")
    assert is_supported("dir/x.Jpeg")
    assert is_supported("x.bmp")
    assert not is_supported("x.gif")
    assert not is_supported("png")


def test_non_recursive_only_top_level_images(image_tree, tmp_path):
    out = str(tmp_path / "out")
    pairs = plan_directory(str(image_tree), out, recursive=False)
    assert set(pairs) == {(str(image_tree / "a.jpg"), os.path.join(out, "a.jpg"))}
    assert not os.path.exists(os.path.join(out, "sub"))


def test_recursive_mirrors_tree_and_creates_subdirs(image_tree, tmp_path):
    out = str(tmp_path / "out")
    pairs = plan_directory(str(image_tree), out, recursive=True)
    assert set(pairs) == {
        (str(image_tree / "a.jpg"), os.path.join(out, "a.jpg")),
        (str(image_tree / "sub" / "b.png"), os.path.join(out, "sub", "b.png")),
    }
    assert os.path.isdir(os.path.join(out, "sub"))


def test_planning_does_not_write_images(image_tree, tmp_path):
    out = tmp_path / "out"
    plan_directory(str(image_tree), str(out), recursive=True)
    assert [p for p in out.rglob("*") if p.is_file()] == []


def test_directories_with_image_names_are_skipped(tmp_path):
    root = tmp_path / "in"
    (root / "folder.png").mkdir(parents=True)
    make_image(str(root / "UPPER.PNG"))
    assert list_images(str(root)) == [str(root / "UPPER.PNG")]
    assert list_images(str(root), recursive=True) == [str(root / "UPPER.PNG")]


def test_recursive_finds_deep_files(tmp_path):
    root = tmp_path / "in"
    make_image(str(root / "a" / "b" / "c" / "deep.bmp"))
    assert list_images(str(root), recursive=True) == [str(root / "a" / "b" / "c" / "deep.bmp")]


def test_missing_input_is_rejected_without_writes(tmp_path):
    out = tmp_path / "out"
    with pytest.raises(InvalidInputPathError):
        plan_jobs(str(tmp_path / "missing"), str(out), Percentage(50))
    assert not out.exists()


def test_single_file_is_one_job(tmp_path):
    src = make_image(str(tmp_path / "a.png"))
    dst = str(tmp_path / "nested" / "a_small.png")
    jobs = plan_jobs(src, dst, Percentage(50))
    assert len(jobs) == 1
    job = jobs[0]
    assert (job.src_path, job.dst_path, job.index, job.total) == (src, dst, 1, 1)
    assert os.path.isdir(os.path.dirname(dst))


def test_directory_jobs_are_numbered_and_share_size(image_tree, tmp_path):
    size = Percentage(50)
    out = tmp_path / "out"
    jobs = plan_jobs(str(image_tree), str(out), size, recursive=True)
    assert [j.index for j in jobs] == [1, 2]
    assert {j.total for j in jobs} == {2}
    assert all(j.size is size for j in jobs)
    assert out.is_dir()


def test_empty_directory_creates_output(tmp_path):
    (tmp_path / "in").mkdir()
    out = tmp_path / "deep" / "out"
    assert plan_jobs(str(tmp_path / "in"), str(out), Percentage(50)) == []
    assert out.is_dir()


def test_output_path_that_is_a_file(image_tree, tmp_path):
    out = tmp_path / "out"
    out.write_text("in the way")
    with pytest.raises(FilesystemFailureError):
        plan_jobs(str(image_tree), str(out), Percentage(50))


def test_blocked_mirrored_subdirectory(image_tree, tmp_path):
    out = tmp_path / "out"
    out.mkdir()
    (out / "sub").write_text("in the way")
    with pytest.raises(FilesystemFailureError):
        plan_jobs(str(image_tree), str(out), Percentage(50), recursive=True)
    assert not (out / "a.jpg").exists()


@pytest.mark.skipif(not hasattr(os, "geteuid") or os.geteuid() == 0,
                    reason="permission bits are not enforced for root")
@pytest.mark.parametrize("recursive", [False, True])
def test_unreadable_input_directory(tmp_path, recursive):
    root = tmp_path / "in"
    make_image(str(root / "a.png"))
    root.chmod(0)
    try:
        with pytest.raises(FilesystemFailureError):
            list_images(str(root), recursive=recursive)
    finally:
        root.chmod(0o755)
