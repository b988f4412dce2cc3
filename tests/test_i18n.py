from __future__ import annotations

from identityprism.i18n import _STRINGS, t


def test_korean_and_english_labels() -> None:
    assert t("label_score", "en") == _STRINGS["label_score"]["en"]
    assert t("label_score", "ko") == _STRINGS["label_score"]["ko"]
    assert t("label_score", "ko") != t("label_score", "en")


def test_unknown_language_reads_english() -> None:
    assert t("label_tier", "fr") == _STRINGS["label_tier"]["en"]


def test_unknown_key_comes_back_unchanged() -> None:
    assert t("no_such_label", "ko") == "no_such_label"


def test_every_label_has_both_languages() -> None:
    for key, labels in _STRINGS.items():
        assert labels.get("ko"), key
        assert labels.get("en"), key
