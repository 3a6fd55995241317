"""Shared test configuration and fixtures."""

import pytest

from models.schemas.preferences import UserPreferences

SAMPLE_RESUME = """
Jane Smith
jane.smith@email.com

Summary
Sr SWE moving into machine learning.

Skills
Python, SQL, PyTorch, Docker, AWS, ML pipelines, communication

Experience
Senior Software Engineer, Harbor Payments, 2019 - Present
Built backend services in Python and Go. Led migration to Kubernetes.
Built ML feature pipelines for fraud detection.

Projects
Recommendation engine prototype using PyTorch and collaborative filtering.

Education
B.S. Computer Science, State University

References available upon request
Page 1 of 1
"""


@pytest.fixture
def sample_resume() -> str:
    return SAMPLE_RESUME


@pytest.fixture
def swe_to_mle() -> UserPreferences:
    return UserPreferences.build(current_role="Sr SWE", desired_role="MLE")


@pytest.fixture
def same_domain() -> UserPreferences:
    return UserPreferences.build(
        current_role="Software Engineer",
        desired_role="Senior Software Engineer",
        remote=True,
    )


@pytest.fixture(autouse=True)
def _reset_rate_limits():
    from api.router import limiter

    limiter.reset()
    yield
