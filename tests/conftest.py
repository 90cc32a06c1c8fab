"""
Pytest configuration and fixtures for Candlescan tests.
"""

import os
import tempfile
from datetime import date, timedelta
from decimal import Decimal
from pathlib import Path
from typing import Generator, List

import pytest
from unittest.mock import patch

from candlescan.models import DayRecord
from candlescan.patterns.classifier import reset_classifier
from candlescan.patterns.pattern_config import reset_pattern_config


@pytest.fixture(autouse=True)
def reset_global_pattern_config() -> Generator[None, None, None]:
    """Keep tests independent of each other's pattern configuration."""
    reset_pattern_config()
    reset_classifier()
    yield
    reset_pattern_config()
    reset_classifier()


@pytest.fixture
def temp_dir() -> Generator[Path, None, None]:
    """Create a temporary directory for testing."""
    with tempfile.TemporaryDirectory() as tmp_dir:
        yield Path(tmp_dir)


@pytest.fixture
def mock_env_vars(temp_dir: Path) -> Generator[dict, None, None]:
    """Mock environment variables for testing."""
    test_env = {
        "CANDLESCAN_DATE_FORMAT": "%Y-%m-%d",
        "CANDLESCAN_DELIMITER": ";",
        "CANDLESCAN_HAS_HEADER": "false",
        "CANDLESCAN_SKIP_INVALID_ROWS": "false",
        "CANDLESCAN_REPORT_DATE_FORMAT": "%d.%m.%Y",
        "LOG_LEVEL": "DEBUG",
        "LOG_FILE_PATH": str(temp_dir / "logs" / "test.log"),
        "LOG_BACKUP_COUNT": "2",
    }

    with patch.dict(os.environ, test_env, clear=False):
        yield test_env


@pytest.fixture
def quiet_env(temp_dir: Path) -> Generator[dict, None, None]:
    """Environment for CLI runs: no log file, no console logging."""
    test_env = {
        "LOG_FILE_PATH": "",
        "LOG_CONSOLE_OUTPUT": "false",
    }

    with patch.dict(os.environ, test_env, clear=False):
        yield test_env


@pytest.fixture
def five_days_one_hammer() -> List[DayRecord]:
    """Five consecutive days where only the third (index 2) is a hammer."""
    start = date(2016, 10, 24)
    prices = [
        ('58.25', '58.65', '58.20', '58.35'),
        ('58.35', '58.90', '58.10', '58.80'),
        ('10.00', '10.00', '2.00', '10.00'),
        ('58.80', '59.40', '58.70', '59.00'),
        ('59.00', '59.10', '57.90', '58.10'),
    ]
    return [
        DayRecord(
            date=start + timedelta(days=i),
            open=Decimal(open_price),
            high=Decimal(high),
            low=Decimal(low),
            close=Decimal(close)
        )
        for i, (open_price, high, low, close) in enumerate(prices)
    ]


@pytest.fixture
def sample_csv_lines() -> List[str]:
    """CSV text in the DD/MM/YYYY layout with a header row."""
    return [
        "Date,Open,High,Low,Close\n",
        "31/10/2016,58.25,58.65,58.2,58.35\n",
        "01/11/2016,10.00,10.00,2.00,10.00\n",
        "02/11/2016,58.35,58.90,58.10,58.80\n",
    ]
