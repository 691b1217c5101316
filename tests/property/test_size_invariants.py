"""Property-based tests for traversal invariants using Hypothesis.

These tests generate random directory layouts on disk and check properties
that must hold for every tree:
    - The root total counts every regular file, hidden or not
    - Slots exist exactly for the directories the print pass visits
    - Every visited entry gets one row, and empty directories one marker
"""

from __future__ import annotations

import tempfile
from pathlib import Path

from hypothesis import given, settings
from hypothesis import strategies as st

from gls.core.data.filesystem.size_calculator import DirectorySizeComputer
from gls.core.walker import TreeWalker
from gls.types.models import TraversalFilter
from tests.fixtures.filesystem_fakes import TreeLayout, build_tree

# Lowercase only so layouts are valid on case-insensitive filesystems
names = st.text(alphabet="abc._", min_size=1, max_size=5).filter(lambda n: n not in (".", ".."))

tree_layouts = st.dictionaries(
    names,
    st.recursive(
        st.binary(max_size=64),
        lambda children: st.dictionaries(names, children, max_size=4),
        max_leaves=12,
    ),
    max_size=5,
)


def total_bytes(layout: TreeLayout) -> int:
    return sum(len(v) if isinstance(v, bytes) else total_bytes(v) for v in layout.values())  # pyright: ignore[reportArgumentType]


def visible(layout: TreeLayout, traversal_filter: TraversalFilter) -> dict[str, object]:
    if traversal_filter == TraversalFilter.SHOW_ALL:
        return dict(layout)
    return {k: v for k, v in layout.items() if not k.startswith(".")}


def visited_directories(layout: TreeLayout, traversal_filter: TraversalFilter) -> int:
    return 1 + sum(
        visited_directories(v, traversal_filter)  # pyright: ignore[reportArgumentType]
        for v in visible(layout, traversal_filter).values()
        if isinstance(v, dict)
    )


def expected_rows(layout: TreeLayout, traversal_filter: TraversalFilter) -> int:
    children = visible(layout, traversal_filter)
    if not children:
        return 1
    return sum(
        1 + (expected_rows(v, traversal_filter) if isinstance(v, dict) else 0)  # pyright: ignore[reportArgumentType]
        for v in children.values()
    )


class TestSizePassInvariants:
    """Property-based tests for the size pre-pass."""

    @settings(deadline=None, max_examples=50)
    @given(tree_layouts, st.sampled_from(list(TraversalFilter)))
    def test_root_total_counts_everything(self, layout: TreeLayout, traversal_filter: TraversalFilter) -> None:
        """Property: the root total is every byte below the root."""
        with tempfile.TemporaryDirectory() as temp_dir:
            root = Path(temp_dir)
            build_tree(root, layout)

            sizes = DirectorySizeComputer(traversal_filter=traversal_filter).compute_sizes(root)

            assert sizes[0] == total_bytes(layout)

    @settings(deadline=None, max_examples=50)
    @given(tree_layouts, st.sampled_from(list(TraversalFilter)))
    def test_one_slot_per_visited_directory(self, layout: TreeLayout, traversal_filter: TraversalFilter) -> None:
        """Property: slots exist only for directories the print pass enters."""
        with tempfile.TemporaryDirectory() as temp_dir:
            root = Path(temp_dir)
            build_tree(root, layout)

            sizes = DirectorySizeComputer(traversal_filter=traversal_filter).compute_sizes(root)

            assert len(sizes) == visited_directories(layout, traversal_filter)
            assert sizes.paths[0] == root


class TestPrintPassInvariants:
    """Property-based tests for the print pass."""

    @settings(deadline=None, max_examples=50)
    @given(tree_layouts, st.sampled_from(list(TraversalFilter)))
    def test_row_count(self, layout: TreeLayout, traversal_filter: TraversalFilter) -> None:
        """Property: one row per visible entry plus one marker per empty directory."""
        with tempfile.TemporaryDirectory() as temp_dir:
            root = Path(temp_dir)
            build_tree(root, layout)
            lines: list[str] = []

            sizes = DirectorySizeComputer(traversal_filter=traversal_filter).compute_sizes(root)
            _ = TreeWalker(lines.append, traversal_filter=traversal_filter).print_tree(root, sizes)

            assert len(lines) == expected_rows(layout, traversal_filter)

    @settings(deadline=None, max_examples=50)
    @given(tree_layouts)
    def test_directory_rows_use_precomputed_sizes(self, layout: TreeLayout) -> None:
        """Property: every directory row shows the size recorded for its path."""
        with tempfile.TemporaryDirectory() as temp_dir:
            root = Path(temp_dir)
            build_tree(root, layout)
            lines: list[str] = []

            sizes = DirectorySizeComputer(traversal_filter=TraversalFilter.SHOW_ALL).compute_sizes(root)
            _ = TreeWalker(lines.append, traversal_filter=TraversalFilter.SHOW_ALL).print_tree(root, sizes)

            directory_rows = [line for line in lines if "(directory - " in line]
            reported = [int(line.rsplit(" - ", 1)[1].rstrip(")")) for line in directory_rows]
            assert reported == list(sizes)[1:]
