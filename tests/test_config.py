"""Test the view configuration."""

from pathlib import Path

import pytest

from fibreview.config import VIEW_CONFIG, ViewConfig, load_view_config


def test_view_config_defaults():
    config = ViewConfig()

    assert config.url_param == "from_device"
    assert config.olt_enc_type == "5"
    assert config.focus_scale == 0.15
    assert config.feeder_color == "#7F8C8D"
    assert config.fibre_color == "#3498DB"
    assert config.fibre_dashes is True
    assert set(config.groups) == {"OLT", "SP", "OT", "FibreEnd"}


def test_global_config_is_default():
    assert VIEW_CONFIG == ViewConfig()


def test_defaults_are_not_shared_between_instances():
    a = ViewConfig()
    b = ViewConfig()
    a.groups["OLT"]["shape"] = "star"
    assert b.groups["OLT"]["shape"] == "box"


def test_network_options_shape():
    options = ViewConfig().network_options()

    assert set(options) == {"groups", "edges", "layout", "physics", "interaction"}
    assert options["edges"]["arrows"] == "to"
    assert options["layout"]["hierarchical"]["direction"] == "LR"
    assert options["physics"]["solver"] == "barnesHut"


def test_from_dict_rejects_unknown_keys():
    with pytest.raises(ValueError, match="Unrecognized view config key"):
        ViewConfig.from_dict({"url_param": "device", "colour": "red"})


def test_load_view_config(tmp_path: Path):
    path = tmp_path / "view.yaml"
    path.write_text("url_param: device\nfocus_scale: 0.5\n", encoding="utf-8")

    config = load_view_config(path)

    assert config.url_param == "device"
    assert config.focus_scale == 0.5
    assert config.fibre_color == "#3498DB"


def test_load_empty_view_config(tmp_path: Path):
    path = tmp_path / "view.yaml"
    path.write_text("", encoding="utf-8")
    assert load_view_config(path) == ViewConfig()


@pytest.mark.parametrize("text", ["- url_param\n", "url_param: [unclosed\n"])
def test_load_view_config_rejects_bad_yaml(tmp_path: Path, text):
    path = tmp_path / "view.yaml"
    path.write_text(text, encoding="utf-8")
    with pytest.raises(ValueError):
        load_view_config(path)
