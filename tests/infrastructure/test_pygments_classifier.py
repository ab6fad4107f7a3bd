"""Tests for the pygments filename classifier."""

from __future__ import annotations

import pytest

from lang_getter.infrastructure.pygments_classifier import PygmentsClassifier


@pytest.mark.parametrize(
    ("filename", "language"),
    [
        ("src/app.py", "Python"),
        ("lib/tasks/deploy.rb", "Ruby"),
        ("web/index.js", "JavaScript"),
        ("cmd/main.go", "Go"),
    ],
)
def test_classifies_by_filename(filename: str, language: str) -> None:
    assert PygmentsClassifier().classify(filename) == language


@pytest.mark.parametrize("filename", ["assets/logo.png", ""])
def test_unknown_files_have_no_language(filename: str) -> None:
    assert PygmentsClassifier().classify(filename) is None


def test_classification_is_stable() -> None:
    classifier = PygmentsClassifier()
    names = ["a/b/c.py", "logo.png", "Makefile", "x.rs"]

    first = [classifier.classify(n) for n in names]
    second = [PygmentsClassifier().classify(n) for n in names]

    assert first == second
