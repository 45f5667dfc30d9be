"""
Config: defaults for the CLI (output_dir, filter, surface) and layout overrides,
stored in .chat2pdf.json. Relative output_dir is resolved from the config file directory.
"""

import json
import os
from pathlib import Path
from typing import Any, Dict

from pydantic import ValidationError

from chat2pdf.backends import REGISTRY
from chat2pdf.models import LayoutConfig
from chat2pdf.nodes import RoleFilter

CONFIG_FILENAME = ".chat2pdf.json"
CONFIG_ENV_VAR = "CHAT2PDF_CONFIG"
DEFAULT_OUTPUT_DIR = "exports"
DEFAULT_FILTER = RoleFilter.BOTH.value
DEFAULT_SURFACE = "pymupdf"


def _find_repo_root() -> Path | None:
    """Walk up from package dir to find a directory containing pyproject.toml or .chat2pdf.json."""
    try:
        start = Path(__file__).resolve().parent
    except NameError:
        return None
    for parent in [start, *start.parents]:
        if (parent / "pyproject.toml").exists() or (parent / CONFIG_FILENAME).exists():
            return parent
    return None


def get_config_path() -> Path:
    """Path to the config file. Env CHAT2PDF_CONFIG wins; else cwd; else repo root; else cwd for create."""
    env_path = os.environ.get(CONFIG_ENV_VAR)
    if env_path:
        return Path(env_path).resolve()
    cwd_file = (Path.cwd() / CONFIG_FILENAME).resolve()
    if cwd_file.exists():
        return cwd_file
    repo = _find_repo_root()
    if repo is not None:
        return repo / CONFIG_FILENAME
    return cwd_file


def _default_config() -> Dict[str, Any]:
    return {
        "output_dir": DEFAULT_OUTPUT_DIR,
        "filter": DEFAULT_FILTER,
        "surface": DEFAULT_SURFACE,
        "layout": {},
    }


def _find_config_file() -> Path | None:
    """Return path to existing .chat2pdf.json, or None."""
    env_path = os.environ.get(CONFIG_ENV_VAR)
    if env_path:
        p = Path(env_path).resolve()
        return p if p.exists() else None
    for d in [Path.cwd(), *Path.cwd().parents]:
        cf = (d / CONFIG_FILENAME).resolve()
        if cf.exists():
            return cf
    repo = _find_repo_root()
    if repo is not None:
        rp = (repo / CONFIG_FILENAME).resolve()
        if rp.exists():
            return rp
    return None


def load_config() -> Dict[str, Any]:
    """Load config from file or return defaults. Unknown or invalid values fall back to defaults."""
    path = _find_config_file()
    out = _default_config()
    if path is None:
        out["_config_file"] = str(get_config_path())
        out["_no_file"] = True
        return out
    try:
        with open(path, "r", encoding="utf-8") as f:
            data = json.load(f)
    except (json.JSONDecodeError, OSError):
        out["_config_file"] = str(path)
        out["_load_error"] = True
        return out
    if not isinstance(data, dict):
        data = {}
    if isinstance(data.get("output_dir"), str) and data["output_dir"]:
        out["output_dir"] = data["output_dir"]
    if data.get("filter") in {f.value for f in RoleFilter}:
        out["filter"] = data["filter"]
    if data.get("surface") in REGISTRY:
        out["surface"] = data["surface"]
    if isinstance(data.get("layout"), dict):
        out["layout"] = data["layout"]
    out["_config_file"] = str(path)
    out["_no_file"] = False
    return out


def save_config(data: Dict[str, Any]) -> None:
    """Save config. Only writes output_dir, filter, surface and layout."""
    path = data.get("_config_file")
    path = Path(path) if path else get_config_path()
    defaults = _default_config()
    to_save = {key: data.get(key, default) for key, default in defaults.items()}
    path.parent.mkdir(parents=True, exist_ok=True)
    with open(path, "w", encoding="utf-8") as f:
        json.dump(to_save, f, indent=2)


def _config_base_path() -> Path:
    """Directory to resolve relative paths from (config file dir or cwd)."""
    path = _find_config_file()
    return path.parent if path is not None else Path.cwd()


def get_output_dir() -> Path:
    """Configured output directory, resolved against the config file directory."""
    return (_config_base_path() / load_config()["output_dir"]).resolve()


def get_layout_config() -> LayoutConfig:
    """LayoutConfig with the file's layout overrides applied. Raises ValueError on invalid overrides."""
    overrides = load_config().get("layout") or {}
    try:
        return LayoutConfig(**overrides)
    except ValidationError as e:
        raise ValueError(f"Invalid layout settings in {CONFIG_FILENAME}: {e}") from e


def _set(key: str, value: Any) -> Dict[str, Any]:
    data = load_config()
    if data.get("_load_error"):
        data = {**_default_config(), "_config_file": data["_config_file"]}
    data[key] = value
    save_config(data)
    return {"ok": True, "config": get_config()}


def set_filter(value: str) -> Dict[str, Any]:
    """Set the default role filter (user, assistant, both)."""
    allowed = [f.value for f in RoleFilter]
    if value not in allowed:
        return {"ok": False, "error": f"Unknown filter '{value}'. Choose: {', '.join(allowed)}", "config": get_config()}
    return _set("filter", value)


def set_output_dir(value: str) -> Dict[str, Any]:
    """Set the default output directory (relative to the config file directory)."""
    value = (value or "").strip()
    if not value:
        return {"ok": False, "error": "Output directory cannot be empty.", "config": get_config()}
    return _set("output_dir", value)


def set_surface(value: str) -> Dict[str, Any]:
    """Set the default drawing surface."""
    if value not in REGISTRY:
        return {"ok": False, "error": f"Unknown surface '{value}'. Choose: {', '.join(REGISTRY)}", "config": get_config()}
    return _set("surface", value)


def get_config() -> Dict[str, Any]:
    """Full config with the resolved output directory."""
    data = load_config()
    data["_resolved_output_dir"] = str(get_output_dir())
    return data
