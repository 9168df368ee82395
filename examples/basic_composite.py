#!/usr/bin/env python3
"""
Basic composite tree usage.

This example demonstrates:
- Building a tree bottom-up and from slash-separated paths
- Computing metrics with different aggregators
- Searching with predicates and formatting the resulting paths
"""

import sys
from pathlib import Path

# Add parent directory to path for development
sys.path.insert(0, str(Path(__file__).parent.parent))

from compositree import (
    Composite,
    Leaf,
    add_leaf_at,
    format_path,
    get_tree_stats,
    predicates,
)


def build_computer() -> Composite:
    """A computer is priced like any of its parts."""
    computer = Composite("computer")
    for name, price in [("keyboard", 2), ("body", 70), ("monitor", 30)]:
        computer.attach(Leaf(name, price))
    computer.attach(Composite("peripherals", [Leaf("speaker", 5), Leaf("mouse", 2)]))
    return computer


def build_documents() -> Composite:
    root = Composite("root")
    add_leaf_at(root, "root/docs/document1.txt", len(b"Hello, World!"))
    add_leaf_at(root, "root/docs/document2.txt", len(b"Composite Pattern"))
    add_leaf_at(root, "root/images/photo.jpg", 1024)
    add_leaf_at(root, "root/src/main.kt", len(b"fun main() {}"))
    return root


def main():
    computer = build_computer()
    print(f"Computer price: {computer.metric()}")
    print(f"Most expensive part: {computer.metric('max')}")

    peripherals = computer.child("peripherals")
    computer.detach(peripherals)
    print(f"Without peripherals: {computer.metric()}")

    documents = build_documents()
    print("\nMatches for 'doc':")
    for path in documents.find(predicates.name_contains("doc")):
        print(f"  {format_path(path)}")

    print("\nStatistics:")
    for key, value in get_tree_stats(documents).items():
        print(f"  {key}: {value}")


if __name__ == "__main__":
    main()
