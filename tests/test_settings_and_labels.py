import json
from pathlib import Path

from invoice_generator.core.models.labels import DEFAULT_LABELS, LabelSet
from invoice_generator.core.services.history import load_history
from invoice_generator.core.services.settings import (
    DEFAULT_SETTINGS,
    labels_from_settings,
    load_settings,
    output_dir_from_settings,
    save_settings,
)


def test_label_set_defaults():
    labels = LabelSet()
    assert len(labels) == len(DEFAULT_LABELS) == 20
    assert labels["invoice_title"] == "INVOICE"
    assert labels["balance_due_label"] == "Balance Due:"
    assert dict(labels) == DEFAULT_LABELS


def test_label_overrides_and_reset():
    labels = LabelSet({"invoice_title": "FACTURE", "unknown_key": "x"})
    assert labels["invoice_title"] == "FACTURE"
    assert "unknown_key" not in labels
    assert labels.overrides() == {"invoice_title": "FACTURE"}

    labels.set("invoice_title", "INVOICE")
    assert labels.overrides() == {}

    labels.set("notes_label", "Remarks")
    copy = labels.copy()
    labels.reset()
    assert labels["notes_label"] == "Notes"
    assert copy["notes_label"] == "Remarks"


def test_missing_settings_file_gives_defaults(tmp_path):
    assert load_settings(tmp_path / "nope.json") == DEFAULT_SETTINGS


def test_broken_settings_file_gives_defaults(tmp_path):
    path = tmp_path / "settings.json"
    path.write_text("{not json", encoding="utf-8")
    assert load_settings(path) == DEFAULT_SETTINGS
    path.write_text("[1, 2]", encoding="utf-8")
    assert load_settings(path) == DEFAULT_SETTINGS


def test_settings_round_trip_and_currency_normalised(tmp_path):
    path = tmp_path / "settings.json"
    save_settings({"currency": "xyz", "output_dir": "~/invoices", "labels": {"total_label": "Sum:"}}, path)
    settings = load_settings(path)
    assert settings["currency"] == "HKD"
    assert settings["theme"] == "light"
    assert labels_from_settings(settings)["total_label"] == "Sum:"
    assert output_dir_from_settings(settings) == Path("~/invoices").expanduser()


def test_output_dir_falls_back_to_home():
    assert output_dir_from_settings({"output_dir": ""}) == Path.home()


def test_history_ignores_unreadable_file(tmp_path):
    path = tmp_path / "invoices.json"
    assert load_history(path) == []
    path.write_text(json.dumps({"not": "a list"}), encoding="utf-8")
    assert load_history(path) == []
    path.write_text(json.dumps([{"id": "a"}, 3]), encoding="utf-8")
    assert load_history(path) == [{"id": "a"}]
