from __future__ import annotations

# Ensure `import escpos_encoder` resolves when the package is not installed.
# Adds the project root directory to sys.path.
import sys
from pathlib import Path

import pytest

PROJECT_DIR = Path(__file__).resolve().parents[1]
if str(PROJECT_DIR) not in sys.path:
    sys.path.insert(0, str(PROJECT_DIR))

from escpos_encoder.config import default_config  # noqa: E402
from escpos_encoder.session import PrinterSession  # noqa: E402


@pytest.fixture
def app_config():
    return default_config()


@pytest.fixture
def session() -> PrinterSession:
    return PrinterSession(strict=True)


@pytest.fixture
def lenient_session() -> PrinterSession:
    return PrinterSession(strict=False)
