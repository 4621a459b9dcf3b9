"""Tests for word-list configuration and settings."""

import os
import tempfile
from pathlib import Path

import pytest
import yaml

from uzgram.config import load_settings
from uzgram.moderation.classifier import ContentClassifier
from uzgram.moderation.models import OffenseLevel
from uzgram.moderation.wordlists import (
    DEFAULT_WORDLISTS,
    Category,
    build_wordlists,
    dump_wordlists,
    load_wordlists,
)


def test_default_lists_cover_every_category():
    for category in Category:
        assert DEFAULT_WORDLISTS.phrases(category)
    assert DEFAULT_WORDLISTS.locales(Category.PROFANITY) == ["uz", "ru", "en"]


def test_phrases_are_lowercased_and_blank_dropped():
    lists = build_wordlists({"scam": {"en": ["FREE Money", ""]}})
    assert lists.phrases(Category.SCAM) == ("free money",)
    assert lists.phrases(Category.THREAT) == ()


def test_unknown_category_rejected():
    with pytest.raises(ValueError):
        build_wordlists({"spam": {"en": ["buy now"]}})


def test_load_wordlists_from_yaml():
    data = {
        "threat": {"kk": ["өлтіремін"]},
        "profanity": {"en": ["Nincompoop"]},
    }
    with tempfile.TemporaryDirectory() as tmpdir:
        path = Path(tmpdir) / "lists.yaml"
        with open(path, "w", encoding="utf-8") as f:
            yaml.safe_dump(data, f, allow_unicode=True)
        lists = load_wordlists(path)

    clf = ContentClassifier(lists)
    assert clf.classify("Men seni ӨЛТІРЕМІН").level == OffenseLevel.critical_perm
    assert clf.classify("you nincompoop").level == OffenseLevel.warning_12h
    assert clf.classify("winner").level == OffenseLevel.none


def test_dump_then_load_preserves_order():
    with tempfile.TemporaryDirectory() as tmpdir:
        path = Path(tmpdir) / "defaults.yaml"
        dump_wordlists(DEFAULT_WORDLISTS, path)
        loaded = load_wordlists(path)
    for category in Category:
        assert loaded.phrases(category) == DEFAULT_WORDLISTS.phrases(category)


def test_merged_with_extends_without_duplicates():
    extra = build_wordlists({"scam": {"uz": ["bepul pul", "karta raqami"]}})
    merged = DEFAULT_WORDLISTS.merged_with(extra)
    uz = merged.lists[Category.SCAM]["uz"]
    assert uz == ("karta raqami", "pul yutdingiz", "bepul pul")
    # Original lists untouched.
    assert "bepul pul" not in DEFAULT_WORDLISTS.phrases(Category.SCAM)


def test_settings_from_file_and_env(monkeypatch):
    with tempfile.TemporaryDirectory() as tmpdir:
        lists_path = Path(tmpdir) / "extra.yaml"
        with open(lists_path, "w", encoding="utf-8") as f:
            yaml.safe_dump({"profanity": {"en": ["dolt"]}}, f)
        cfg_path = Path(tmpdir) / "uzgram.yaml"
        with open(cfg_path, "w", encoding="utf-8") as f:
            yaml.safe_dump({"home": str(Path(tmpdir) / "data"), "wordlists": str(lists_path)}, f)

        monkeypatch.delenv("UZGRAM_HOME", raising=False)
        monkeypatch.delenv("UZGRAM_WORDLISTS", raising=False)
        settings = load_settings(cfg_path)
        assert settings.home == Path(tmpdir) / "data"
        assert settings.audit_dir == Path(tmpdir) / "data" / "audit_logs"

        lists = settings.wordlists()
        assert "dolt" in lists.phrases(Category.PROFANITY)
        assert "yomon" in lists.phrases(Category.PROFANITY)

        monkeypatch.setenv("UZGRAM_HOME", os.path.join(tmpdir, "other"))
        assert load_settings(cfg_path).home == Path(tmpdir) / "other"


def test_settings_replace_defaults(monkeypatch):
    with tempfile.TemporaryDirectory() as tmpdir:
        lists_path = Path(tmpdir) / "only.yaml"
        with open(lists_path, "w", encoding="utf-8") as f:
            yaml.safe_dump({"profanity": {"en": ["dolt"]}}, f)
        cfg_path = Path(tmpdir) / "uzgram.yaml"
        with open(cfg_path, "w", encoding="utf-8") as f:
            yaml.safe_dump({"wordlists": str(lists_path), "extend_default_wordlists": False}, f)

        monkeypatch.delenv("UZGRAM_WORDLISTS", raising=False)
        lists = load_settings(cfg_path).wordlists()
        assert lists.phrases(Category.PROFANITY) == ("dolt",)
        assert lists.phrases(Category.THREAT) == ()


# --- Malformed files ---


def _load_yaml_text(text: str):
    with tempfile.TemporaryDirectory() as tmpdir:
        path = Path(tmpdir) / "lists.yaml"
        path.write_text(text, encoding="utf-8")
        return load_wordlists(path)


def test_scalar_locale_value_is_one_phrase():
    lists = _load_yaml_text("scam:\n  en: crypto\n")
    assert lists.phrases(Category.SCAM) == ("crypto",)

    clf = ContentClassifier(lists)
    assert clf.classify("hello").level == OffenseLevel.none
    assert clf.classify("free crypto").level == OffenseLevel.severe_24h


def test_flat_category_list_rejected():
    with pytest.raises(ValueError):
        _load_yaml_text("scam: [crypto]\n")


def test_non_string_phrases_rejected():
    with pytest.raises(ValueError):
        _load_yaml_text("profanity:\n  en: [idiot, ~]\n")
    with pytest.raises(ValueError):
        _load_yaml_text("profanity:\n  en: [idiot, yes]\n")
    with pytest.raises(ValueError):
        _load_yaml_text("profanity:\n  en: [idiot, 42]\n")


def test_quoted_yaml_keywords_are_phrases():
    lists = _load_yaml_text("profanity:\n  en: [idiot, 'yes']\n")
    assert lists.phrases(Category.PROFANITY) == ("idiot", "yes")


def test_top_level_must_be_mapping():
    with pytest.raises(ValueError):
        _load_yaml_text("- crypto\n- scam\n")


def test_empty_file_and_empty_locales():
    assert _load_yaml_text("").phrases(Category.SCAM) == ()
    lists = _load_yaml_text("scam:\nthreat:\n  en:\nprofanity:\n  en: ['  ', dolt]\n")
    assert lists.phrases(Category.SCAM) == ()
    assert lists.phrases(Category.THREAT) == ()
    assert lists.phrases(Category.PROFANITY) == ("dolt",)
