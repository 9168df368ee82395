#!/usr/bin/env python3
"""
Run the bundled examples to ensure they keep working.
"""

import sys
from pathlib import Path

# Add examples directory to path
sys.path.insert(0, str(Path(__file__).parent.parent / "examples"))

import basic_composite


def test_computer_example():
    computer = basic_composite.build_computer()
    assert computer.metric() == 109
    assert computer.metric("max") == 70


def test_documents_example():
    documents = basic_composite.build_documents()
    assert documents.metric() == 1067


def test_main_output(capsys):
    basic_composite.main()
    output = capsys.readouterr().out
    assert "Computer price: 109" in output
    assert "Without peripherals: 102" in output
    assert "root/docs/document1.txt" in output
    assert "total_metric: 1067" in output
