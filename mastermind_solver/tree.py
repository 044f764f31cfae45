"""Offline construction of a guess decision tree.

Nodes are stored in an arena (a plain list) and point at their children by
arena index, so the tree never holds references to itself.
"""

import logging
from dataclasses import dataclass, field
from typing import Iterator, Optional, Sequence

from .feedback import Feedback, all_exact, evaluate
from .selector import DIRECT_GUESS_LIMIT, find_discriminating_guesses

logger = logging.getLogger(__name__)

Code = tuple


def response_classes_total(code_length: int) -> int:
    """Number of distinct replies that do not end the game."""
    return (code_length + 1) * (code_length + 2) // 2 - 1


@dataclass
class DecisionTreeNode:
    """One decision point: the guess to play and where each reply leads."""
    guess: Optional[Code]
    candidates: tuple
    children: dict = field(default_factory=dict)  # label -> arena index

    @property
    def is_leaf(self) -> bool:
        return not self.children

    def to_dict(self) -> dict:
        return {
            "guess": list(self.guess) if self.guess is not None else None,
            "candidates": [list(code) for code in self.candidates],
            "children": dict(self.children),
        }


class DecisionTree:
    """Arena of decision tree nodes; index 0 is the root."""

    def __init__(self):
        self.nodes: list[DecisionTreeNode] = []

    def add(self, node: DecisionTreeNode) -> int:
        self.nodes.append(node)
        return len(self.nodes) - 1

    def __len__(self) -> int:
        return len(self.nodes)

    def __getitem__(self, index: int) -> DecisionTreeNode:
        return self.nodes[index]

    def __iter__(self) -> Iterator[DecisionTreeNode]:
        return iter(self.nodes)

    @property
    def root(self) -> DecisionTreeNode:
        return self.nodes[0]

    def leaves(self) -> list[DecisionTreeNode]:
        return [node for node in self.nodes if node.is_leaf]

    def unresolved(self) -> list[DecisionTreeNode]:
        """Nodes left without a guess while more than one candidate remains."""
        return [node for node in self.nodes if node.guess is None and len(node.candidates) > 1]

    def path(self, labels: Sequence[str]) -> DecisionTreeNode:
        """Follow a history of reply labels from the root; KeyError if it leaves the tree."""
        node = self.root
        for label in labels:
            node = self.nodes[node.children[label]]
        return node

    def to_dict(self) -> dict:
        return {"nodes": [node.to_dict() for node in self.nodes]}


def build_tree(universe: Sequence[Code], code_length: int,
               opening_guess: Optional[Code] = None) -> DecisionTree:
    """
    Build the decision tree over a universe.

    Args:
        universe: All valid codes; also the pool of allowed guesses
        code_length: Number of symbols per code
        opening_guess: Guess for the root; None applies the same rule as any other node

    Returns:
        The populated arena
    """
    tree = DecisionTree()
    candidates = tuple(universe)
    guess = opening_guess
    if guess is None:
        guess = _choose_guess(candidates, universe, code_length)
    _build_node(tree, candidates, tuple(guess) if guess is not None else None,
                universe, code_length)
    logger.info("Decision tree built: %d nodes, %d leaves, %d unresolved",
                len(tree), len(tree.leaves()), len(tree.unresolved()))
    return tree


def _choose_guess(candidates: tuple, universe: Sequence[Code], code_length: int) -> Optional[Code]:
    """First discriminating guess, tried only while every candidate can get its own reply."""
    if len(candidates) <= DIRECT_GUESS_LIMIT:
        return candidates[0] if candidates else None
    if len(candidates) > response_classes_total(code_length):
        return None
    found = find_discriminating_guesses(candidates, universe)
    return found[0] if found else None


def _build_node(tree: DecisionTree, candidates: tuple, guess: Optional[Code],
                universe: Sequence[Code], code_length: int) -> int:
    if len(candidates) <= DIRECT_GUESS_LIMIT:
        guess = candidates[0] if candidates else None

    node = DecisionTreeNode(guess=guess, candidates=candidates)
    index = tree.add(node)

    if guess is None or len(candidates) <= 1:
        return index

    partitions: dict[Feedback, list] = {}
    for code in candidates:
        reply = evaluate(code, guess)
        if reply == all_exact(code_length):
            continue
        partitions.setdefault(reply, []).append(code)

    for reply in sorted(partitions, key=lambda r: r.label):
        subset = tuple(partitions[reply])
        child_guess = _choose_guess(subset, universe, code_length)
        node.children[reply.label] = _build_node(tree, subset, child_guess, universe, code_length)

    return index
