# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""Pytest configuration and shared fixtures.

This module provides fixtures used across all test types:
- Unit tests
- Integration tests (FastAPI app with overridden dependencies)
"""

from datetime import datetime, timezone
from unittest.mock import AsyncMock, MagicMock

import pytest

from schooladmin.core.config import clear_settings_cache
from schooladmin.models.people import (
    ParentCreateRequest,
    StudentCreateRequest,
    TeacherCreateRequest,
)

BIRTHDAY = datetime(1990, 5, 17, tzinfo=timezone.utc)


# =============================================================================
# Settings
# =============================================================================


@pytest.fixture(autouse=True)
def _fresh_settings():
    """Drop cached settings so env patches in a test take effect."""
    clear_settings_cache()
    yield
    clear_settings_cache()


# =============================================================================
# Database Fixtures
# =============================================================================


@pytest.fixture
def mock_db():
    """Create mock database session."""
    db = AsyncMock()
    db.add = MagicMock()
    db.delete = AsyncMock()
    db.flush = AsyncMock()
    db.commit = AsyncMock()
    db.rollback = AsyncMock()
    db.execute = AsyncMock()
    return db


# =============================================================================
# Form Fixtures
# =============================================================================


@pytest.fixture
def teacher_form() -> TeacherCreateRequest:
    return TeacherCreateRequest(
        username="jdoe",
        password="s3cretpass",
        name="Jane",
        surname="Doe",
        email="jane@school.org",
        phone="555-0101",
        address="1 Main St",
        blood_type="A+",
        sex="FEMALE",
        birthday=BIRTHDAY,
        subjects=[1, 2],
    )


@pytest.fixture
def student_form() -> StudentCreateRequest:
    return StudentCreateRequest(
        username="kid01",
        password="s3cretpass",
        name="Sam",
        surname="Doe",
        address="1 Main St",
        blood_type="0+",
        sex="MALE",
        birthday=BIRTHDAY,
        grade_id=3,
        class_id=7,
        parent_id="acc_parent",
    )


@pytest.fixture
def parent_form() -> ParentCreateRequest:
    return ParentCreateRequest(
        username="pdoe",
        password="s3cretpass",
        name="Pat",
        surname="Doe",
        phone="555-0199",
        address="1 Main St",
    )


# =============================================================================
# Marker Configuration
# =============================================================================


def pytest_configure(config: pytest.Config) -> None:
    """Configure custom pytest markers."""
    config.addinivalue_line(
        "markers", "unit: mark test as a unit test"
    )
    config.addinivalue_line(
        "markers", "integration: mark test as an integration test (in-process app)"
    )
