import logging

import pytest


@pytest.fixture(autouse=True)
def reset_root_logger():
    """Drop handlers installed by GitPRLogging.setup() so they do not outlive a test's captured streams."""
    yield
    root = logging.getLogger()
    for handler in list(root.handlers):
        if not type(handler).__module__.startswith("_pytest"):
            root.removeHandler(handler)
