"""Shared pytest fixtures."""

from __future__ import annotations

from pathlib import Path

import pytest

FIXTURES_DIR = Path(__file__).parent / "fixtures"



def _read_fixture(name: str) -> str:
    return (FIXTURES_DIR / name).read_text(encoding="utf-8")


@pytest.fixture
def product_html() -> str:
    return _read_fixture("product.html")


@pytest.fixture
def article_html() -> str:
    return _read_fixture("article.html")


@pytest.fixture
def readable_html() -> str:
    return _read_fixture("readable.html")


@pytest.fixture
def recipe_html() -> str:
    return _read_fixture("recipe.html")


@pytest.fixture
def forum_html() -> str:
    return _read_fixture("forum.html")


@pytest.fixture
def metadata_html() -> str:
    return _read_fixture("metadata.html")


@pytest.fixture
def job_html() -> str:
    return _read_fixture("job.html")


@pytest.fixture
def event_html() -> str:
    return _read_fixture("event.html")


@pytest.fixture
def listing_html() -> str:
    return _read_fixture("listing.html")


@pytest.fixture
def profile_html() -> str:
    return _read_fixture("profile.html")


@pytest.fixture
def video_html() -> str:
    return _read_fixture("video.html")


@pytest.fixture
def docs_html() -> str:
    return _read_fixture("docs.html")
