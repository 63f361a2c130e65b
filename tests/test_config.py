import pytest
import yaml

from finance_dashboard.config import DEFAULT_CONFIG, load_config, save_config


def test_missing_file_yields_defaults(tmp_path):
    config = load_config(tmp_path / "missing.yaml")
    assert config == DEFAULT_CONFIG
    config["labels"]["income"] = "changed"
    assert DEFAULT_CONFIG["labels"]["income"] != "changed"


def test_partial_file_is_merged_with_defaults(tmp_path):
    path = tmp_path / "cashboard.yaml"
    path.write_text(
        yaml.safe_dump({"currency": {"symbol": "$"}, "period_label": "Q1"})
    )

    config = load_config(path)

    assert config["currency"]["symbol"] == "$"
    assert config["currency"]["thousands_sep"] == "."
    assert config["period_label"] == "Q1"
    assert config["palette"] == DEFAULT_CONFIG["palette"]


def test_empty_file_yields_defaults(tmp_path):
    path = tmp_path / "cashboard.yaml"
    path.write_text("")
    assert load_config(path) == DEFAULT_CONFIG


def test_non_mapping_file_is_rejected(tmp_path):
    path = tmp_path / "cashboard.yaml"
    path.write_text("- just\n- a list\n")
    with pytest.raises(ValueError):
        load_config(path)


def test_save_then_load(tmp_path):
    path = tmp_path / "nested" / "cashboard.yaml"
    save_config({"web": {"port": 9000}}, path)
    config = load_config(path)
    assert config["web"] == {"host": "127.0.0.1", "port": 9000}


def test_null_sections_fall_back_to_defaults(tmp_path):
    path = tmp_path / "cashboard.yaml"
    path.write_text("labels: null\ncurrency: null\nperiod_label: Q2\n")

    config = load_config(path)

    assert config["labels"] == DEFAULT_CONFIG["labels"]
    assert config["currency"] == DEFAULT_CONFIG["currency"]
    assert config["period_label"] == "Q2"
