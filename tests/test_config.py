import json

import pytest

from chat2pdf import config as config_module
from chat2pdf.models import LayoutConfig


def write_config(path, data):
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(json.dumps(data) if not isinstance(data, str) else data, encoding="utf-8")


def test_defaults_without_file(isolated_config):
    data = config_module.load_config()
    assert data["_no_file"] is True
    assert (data["output_dir"], data["filter"], data["surface"], data["layout"]) == ("exports", "both", "pymupdf", {})
    assert config_module.get_config_path() == isolated_config.resolve()


def test_values_from_file(isolated_config):
    write_config(isolated_config, {"output_dir": "pdfs", "filter": "assistant", "surface": "pymupdf"})
    data = config_module.load_config()
    assert data["_no_file"] is False
    assert data["filter"] == "assistant"
    assert config_module.get_output_dir() == (isolated_config.parent / "pdfs").resolve()


def test_invalid_values_fall_back(isolated_config):
    write_config(isolated_config, {"output_dir": "", "filter": "everyone", "surface": "gdi", "layout": []})
    data = config_module.load_config()
    assert (data["output_dir"], data["filter"], data["surface"], data["layout"]) == ("exports", "both", "pymupdf", {})


def test_broken_file_uses_defaults(isolated_config):
    write_config(isolated_config, "{not json")
    data = config_module.load_config()
    assert data["_load_error"] is True
    assert data["filter"] == "both"


def test_set_filter_persists(isolated_config):
    result = config_module.set_filter("user")
    assert result["ok"]
    assert json.loads(isolated_config.read_text(encoding="utf-8"))["filter"] == "user"
    assert config_module.load_config()["filter"] == "user"


def test_setters_reject_bad_values(isolated_config):
    assert not config_module.set_filter("everyone")["ok"]
    assert not config_module.set_surface("gdi")["ok"]
    assert not config_module.set_output_dir("  ")["ok"]
    assert not isolated_config.exists()


def test_set_output_dir(isolated_config):
    result = config_module.set_output_dir("out/pdf")
    assert result["ok"]
    assert result["config"]["_resolved_output_dir"] == str((isolated_config.parent / "out" / "pdf").resolve())


def test_saving_over_broken_file(isolated_config):
    write_config(isolated_config, "{not json")
    assert config_module.set_surface("pymupdf")["ok"]
    assert json.loads(isolated_config.read_text(encoding="utf-8")) == {
        "output_dir": "exports",
        "filter": "both",
        "surface": "pymupdf",
        "layout": {},
    }


def test_layout_overrides(isolated_config):
    write_config(isolated_config, {"layout": {"page_height": 100, "assistant_label": "Bot"}})
    layout = config_module.get_layout_config()
    assert layout.page_height == 100
    assert layout.assistant_label == "Bot"
    assert layout.margin == LayoutConfig().margin


def test_invalid_layout_override(isolated_config):
    write_config(isolated_config, {"layout": {"margin": "wide"}})
    with pytest.raises(ValueError, match="Invalid layout settings"):
        config_module.get_layout_config()
