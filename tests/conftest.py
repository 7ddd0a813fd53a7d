from __future__ import annotations

import os

import pytest

# The application module builds an app at import time and refuses to start
# without a signing key.
os.environ.setdefault("TRYON_JWT_SIGNING_KEY", "test-signing-key")


@pytest.fixture
def provider_keys(monkeypatch):
    monkeypatch.setenv("FASHN_API_KEY", "fashn-key")
    monkeypatch.setenv("KIE_API_KEY", "kie-key")


@pytest.fixture
def no_provider_keys(monkeypatch):
    monkeypatch.delenv("FASHN_API_KEY", raising=False)
    monkeypatch.delenv("KIE_API_KEY", raising=False)
