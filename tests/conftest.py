import pytest


@pytest.fixture(autouse=True)
def _wide_terminal(monkeypatch):
    # argparse wraps help text to $COLUMNS; pin it so help-text assertions
    # don't depend on the width of the terminal running the suite.
    monkeypatch.setenv("COLUMNS", "200")
