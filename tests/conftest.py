# tests/conftest.py
"""Shared fixtures."""

import pytest

from mediyap.core.decoder import MedicalDecoder
from mediyap.core.dictionary import MedicalDictionary


ENV_VARS = ("MEDIYAP_MATCH_ORDER", "MEDIYAP_DICTIONARY", "MEDIYAP_LOG_LEVEL", "MEDIYAP_DEBUG")


@pytest.fixture(autouse=True)
def clean_env(monkeypatch):
    # keep the developer's shell settings out of the tests
    for name in ENV_VARS:
        monkeypatch.delenv(name, raising=False)


@pytest.fixture(scope="session")
def dictionary():
    return MedicalDictionary()


@pytest.fixture(scope="session")
def decoder(dictionary):
    return MedicalDecoder(dictionary)
