# tests/conftest.py
import importlib

import pytest

from speech_assessment import config
from speech_assessment.config import AssessmentSettings
from speech_assessment.services.alignment_service import WordAligner
from speech_assessment.services.assessment_service import AssessmentService

# Spelled out so a local .env cannot shift expected numbers
DEFAULTS = dict(
    correct_threshold=0.7,
    partial_threshold=0.5,
    exact_threshold=0.95,
    window_radius=3,
    position_bonus=0.05,
    length_bonus=0.1,
    length_bonus_min_len=5,
    phonetic_similarity=0.9,
    accuracy_weight=0.6,
    completeness_weight=0.4,
    extra_word_ratio=0.2,
    strategy="greedy",
    locale="en",
    expand_contractions=False,
)


@pytest.fixture()
def make_settings():
    def _make(**overrides):
        return AssessmentSettings(**{**DEFAULTS, **overrides})
    return _make


@pytest.fixture()
def settings():
    return AssessmentSettings(**DEFAULTS)


@pytest.fixture()
def global_settings():
    return AssessmentSettings(**{**DEFAULTS, "strategy": "global"})


@pytest.fixture()
def aligner(settings):
    return WordAligner(settings)


@pytest.fixture()
def global_aligner(global_settings):
    return WordAligner(global_settings)


@pytest.fixture()
def service(settings):
    return AssessmentService(settings)


@pytest.fixture()
def global_service(global_settings):
    return AssessmentService(global_settings)


@pytest.fixture()
def reload_config(monkeypatch):
    """Reload the config module after setting env vars; restores it on teardown."""
    def _reload(**env):
        for key, value in env.items():
            monkeypatch.setenv(key, value)
        return importlib.reload(config)

    yield _reload

    monkeypatch.undo()
    importlib.reload(config)
