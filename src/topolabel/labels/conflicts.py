"""Conflict graph between candidate labels."""

from __future__ import annotations

__all__ = ["ConflictGraph"]

import itertools
from collections.abc import Iterable, Iterator

import networkx as nx

from topolabel.labels.label import Label


class ConflictGraph:
    """Undirected graph whose edges join labels that cannot both be drawn.

    The selection of a conflict-free subset is left to the caller; this
    only records and answers which candidates exclude which.
    """

    def __init__(self, labels: Iterable[Label] = ()) -> None:
        self.graph = nx.Graph()
        self.graph.add_nodes_from(labels)

    def __len__(self) -> int:
        return self.graph.number_of_nodes()

    def __contains__(self, label: Label) -> bool:
        return label in self.graph

    def add_pairs(self, pairs: Iterable[tuple[Label, Label]]) -> None:
        """Record overlapping pairs, e.g. from Label.overlaps."""
        for label, other in pairs:
            if label is other:
                continue
            if label.coexists_with(other) or other.coexists_with(label):
                continue
            self.graph.add_edge(label, other)

    def add_exclusive(self, labels: Iterable[Label]) -> None:
        """Make every label in the group conflict with every other."""
        labels = list(labels)
        self.graph.add_nodes_from(labels)
        self.graph.add_edges_from(itertools.combinations(labels, 2))

    def conflicts_of(self, label: Label) -> set[Label]:
        if label not in self.graph:
            return set()
        return set(self.graph.neighbors(label))

    def components(self) -> Iterator[set[Label]]:
        """Yield groups of labels with no conflicts between groups."""
        yield from nx.connected_components(self.graph)

    def ranked(self) -> list[Label]:
        """Labels by ordinal, then by number of conflicts."""
        return sorted(
            self.graph.nodes,
            key=lambda label: (label.ordinal, self.graph.degree(label)),
        )
