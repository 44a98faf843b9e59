"""
Pytest Configuration and Fixtures.

This file configures pytest and provides shared fixtures for all tests.
"""
import pytest
import sys
from pathlib import Path

# Add project root to path
PROJECT_ROOT = Path(__file__).parent.parent
sys.path.insert(0, str(PROJECT_ROOT))


def pytest_configure(config):
    """Configure pytest markers."""
    config.addinivalue_line("markers", "unit: Unit tests")
    config.addinivalue_line("markers", "integration: Integration tests (library flows against real files)")
    config.addinivalue_line("markers", "smoke: Smoke tests for CLI commands")


def pytest_collection_modifyitems(config, items):
    """Automatically mark tests based on their location."""
    for item in items:
        # Mark based on test file location
        if "unit" in str(item.fspath):
            item.add_marker(pytest.mark.unit)
        elif "integration" in str(item.fspath):
            item.add_marker(pytest.mark.integration)
        elif "smoke" in str(item.fspath):
            item.add_marker(pytest.mark.smoke)


@pytest.fixture(scope="session")
def project_root():
    """Return the project root directory."""
    return PROJECT_ROOT


@pytest.fixture
def true_false_question():
    from src.questions import build_question

    return build_question("true_false", "The sky is blue.")


@pytest.fixture
def multiple_choice_question():
    from src.questions import build_question

    return build_question(
        "multiple_choice",
        "Which layer handles routing?",
        choices=["Physical", "Data Link", "Network", "Transport"],
    )


@pytest.fixture
def matching_question():
    from src.questions import build_question

    return build_question(
        "matching",
        "Match each country with its capital.",
        left_items=["France", "Japan", "Peru"],
        right_items=["Paris", "Tokyo", "Lima"],
    )


@pytest.fixture
def sample_test():
    """
    Four questions, one of them an essay.

    Correct answers: True, B, 1999-12-31.
    """
    from src.questions import build_question
    from src.surveys import Test

    test = Test(name="Midterm")
    test.add_question(build_question("true_false", "Water boils at 100C at sea level."), ["T"])
    test.add_question(
        build_question("multiple_choice", "Pick the prime.", choices=["4", "7", "9"]),
        ["B"],
    )
    test.add_question(build_question("essay", "Explain recursion."))
    test.add_question(build_question("date", "Last day of 1999?"), ["1999-12-31"])
    return test


@pytest.fixture
def memory_workspace():
    """Workspace backed entirely by in-memory stores."""
    from src.storage import EntityStore, MemoryBlobStore, Workspace

    return Workspace(
        surveys=EntityStore(MemoryBlobStore()),
        survey_responses=EntityStore(MemoryBlobStore()),
        tests=EntityStore(MemoryBlobStore()),
        test_responses=EntityStore(MemoryBlobStore()),
    )
