import copy
import logging
import tomllib
from importlib import import_module
from pathlib import Path
from typing import Any, Dict, List, Optional

from core.types import HealthModule

logger = logging.getLogger(__name__)

CONFIG_PATH = Path(__file__).resolve().parent.parent / "config.toml"

DEFAULTS: Dict[str, Any] = {
    "app": {
        "title": "Health Risk Assessment",
        "disclaimer": "Screening & education only. Not medical advice.",
    },
    "auth": {
        "password": "#*LonGenix42",
        "countries": ["US", "Australia", "Philippines"],
        "api_base": "",
    },
    "logging": {"level": "INFO"},
    "modules": {
        "body": {"enabled": True, "order": 1},
        "cardio": {"enabled": True, "order": 2},
        "bioage": {"enabled": True, "order": 3},
        "diabetes": {"enabled": True, "order": 4, "sex_specific_waist": False},
    },
}


def _merge(base: Dict[str, Any], over: Dict[str, Any]) -> Dict[str, Any]:
    out = copy.deepcopy(base)
    for k, v in over.items():
        if isinstance(v, dict) and isinstance(out.get(k), dict):
            out[k] = _merge(out[k], v)
        else:
            out[k] = v
    return out


def load_config(path: Optional[Path] = None) -> Dict[str, Any]:
    path = Path(path) if path is not None else CONFIG_PATH
    try:
        with open(path, "rb") as f:
            cfg = tomllib.load(f)
    except FileNotFoundError:
        logger.warning("config file %s not found, using defaults", path)
        return copy.deepcopy(DEFAULTS)
    return _merge(DEFAULTS, cfg)


def configure_logging(cfg: Dict[str, Any]) -> None:
    level = str(cfg.get("logging", {}).get("level", "INFO")).upper()
    logging.basicConfig(
        level=getattr(logging, level, logging.INFO),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )


def module_options(cfg: Dict[str, Any], module_id: str) -> Dict[str, Any]:
    opts = dict(cfg.get("modules", {}).get(module_id, {}))
    opts.pop("enabled", None)
    opts.pop("order", None)
    return opts


def load_enabled_modules(cfg: Optional[Dict[str, Any]] = None) -> List[HealthModule]:
    cfg = cfg if cfg is not None else load_config()
    mod_cfg = cfg.get("modules", {})
    ordered = sorted(((m, v.get("order", 999)) for m, v in mod_cfg.items() if v.get("enabled", True)), key=lambda x: x[1])
    mods = []
    for name, _ in ordered:
        mod = import_module(f"modules.{name}.{name}")
        logger.debug("loaded module %s", name)
        mods.append(mod)
    return mods
