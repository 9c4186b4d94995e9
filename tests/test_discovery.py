from nested_mdlint.filters import discover_markdown_files, PathspecFilter


def touch(path, text="# x\n"):
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(text, encoding="utf-8")


def names(root, files):
    return [str(f.relative_to(root.resolve())).replace("\\", "/") for f in files]


def test_discovers_markdown_sorted_and_skips_node_modules(tmp_path):
    touch(tmp_path / "b.md")
    touch(tmp_path / "a.md")
    touch(tmp_path / "docs" / "guide.md")
    touch(tmp_path / "docs" / "notes.txt")
    touch(tmp_path / "node_modules" / "pkg" / "README.md")
    touch(tmp_path / "pkg" / "node_modules" / "dep" / "README.md")

    files = discover_markdown_files(tmp_path)
    assert names(tmp_path, files) == ["a.md", "b.md", "docs/guide.md"]


def test_root_gitignore_is_respected(tmp_path):
    touch(tmp_path / ".gitignore", "generated/\n")
    touch(tmp_path / "generated" / "out.md")
    touch(tmp_path / "node_modules" / "x.md")
    touch(tmp_path / "keep.md")

    assert names(tmp_path, discover_markdown_files(tmp_path)) == ["keep.md"]


def test_nested_gitignore_applies_below_its_directory(tmp_path):
    touch(tmp_path / "docs" / ".gitignore", "draft.md\n")
    touch(tmp_path / "docs" / "draft.md")
    touch(tmp_path / "docs" / "final.md")
    touch(tmp_path / "draft.md")

    assert names(tmp_path, discover_markdown_files(tmp_path)) == ["docs/final.md", "draft.md"]


def test_custom_patterns(tmp_path):
    touch(tmp_path / "a.md")
    touch(tmp_path / "docs" / "b.md")
    touch(tmp_path / "docs" / "c.markdown")

    files = discover_markdown_files(tmp_path, ["docs/**/*.md", "*.markdown"])
    assert names(tmp_path, files) == ["docs/b.md", "docs/c.markdown"]


def test_filter_paths(tmp_path):
    root = tmp_path.resolve()
    path_filter = PathspecFilter(root)
    kept = path_filter.filter_paths([root / "a.md", root / "node_modules" / "b.md"])
    assert kept == [root / "a.md"]


def test_hidden_directories_are_skipped(tmp_path):
    touch(tmp_path / ".github" / "PULL_REQUEST_TEMPLATE.md")
    touch(tmp_path / ".hidden.md")
    touch(tmp_path / "docs" / ".drafts" / "x.md")
    touch(tmp_path / "README.md")

    assert names(tmp_path, discover_markdown_files(tmp_path)) == ["README.md"]


def test_build_output_directories_are_linted_without_gitignore(tmp_path):
    for directory in ("build", "dist", "vendor"):
        touch(tmp_path / directory / "notes.md")

    assert names(tmp_path, discover_markdown_files(tmp_path)) == [
        "build/notes.md",
        "dist/notes.md",
        "vendor/notes.md",
    ]


def test_nested_gitignores_can_be_skipped(tmp_path):
    touch(tmp_path / "docs" / ".gitignore", "draft.md\n")
    touch(tmp_path / "docs" / "draft.md")
    root = tmp_path.resolve()

    assert PathspecFilter(root).should_ignore(root / "docs" / "draft.md")
    assert not PathspecFilter(root, include_nested=False).should_ignore(root / "docs" / "draft.md")
