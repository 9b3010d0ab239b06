from __future__ import annotations

from dataclasses import dataclass
import os
from pathlib import Path
from typing import Any

import yaml
from dotenv import load_dotenv

DEFAULT_LLM_BASE_URL = "https://generativelanguage.googleapis.com/v1beta/openai"
DEFAULT_LLM_MODEL = "gemini-2.5-flash"


@dataclass
class Settings:
    # llm (classifier backend)
    llm_base_url: str
    llm_model: str
    llm_api_key: str | None  # runtime only, never written to config.yaml
    llm_timeout_sec: float
    retry_max: int
    llm_temperature: float
    llm_max_tokens: int

    # router
    general_answers_enabled: bool

    # paths
    log_path: str
    config_path: str


def _get_int(name: str, default: int) -> int:
    raw = os.getenv(name)
    if raw is None:
        return default
    try:
        return int(raw)
    except ValueError:
        return default


def _get_float(name: str, default: float) -> float:
    raw = os.getenv(name)
    if raw is None:
        return default
    try:
        return float(raw)
    except ValueError:
        return default


def _get_bool(name: str, default: bool) -> bool:
    raw = os.getenv(name)
    if raw is None:
        return default
    return parse_bool(raw)


def parse_bool(raw: str) -> bool:
    return raw.strip().lower() in ("1","true","yes","y","on")


def _load_yaml(path: str) -> dict[str, Any]:
    p = Path(path)
    if not p.exists():
        return {}
    try:
        data = yaml.safe_load(p.read_text(encoding="utf-8"))
        return data if isinstance(data, dict) else {}
    except (OSError, yaml.YAMLError):
        return {}


def load_settings() -> Settings:
    load_dotenv()

    config_path = os.getenv("CONFIG_PATH", "config.yaml")
    cfg = _load_yaml(config_path)

    llm_cfg = cfg.get("llm") if isinstance(cfg.get("llm"), dict) else {}
    router_cfg = cfg.get("router") if isinstance(cfg.get("router"), dict) else {}
    paths_cfg = cfg.get("paths") if isinstance(cfg.get("paths"), dict) else {}

    return Settings(
        llm_base_url=os.getenv("LLM_BASE_URL", str(llm_cfg.get("base_url", DEFAULT_LLM_BASE_URL))).rstrip("/"),
        llm_model=os.getenv("LLM_MODEL", str(llm_cfg.get("model", DEFAULT_LLM_MODEL))),
        llm_api_key=os.getenv("GEMINI_API_KEY") or os.getenv("LLM_API_KEY") or None,
        llm_timeout_sec=_get_float("LLM_TIMEOUT_SEC", float(llm_cfg.get("timeout_sec", 15.0))),
        retry_max=_get_int("RETRY_MAX", int(llm_cfg.get("retry_max", 2))),
        llm_temperature=_get_float("LLM_TEMPERATURE", float(llm_cfg.get("temperature", 0.2))),
        llm_max_tokens=_get_int("LLM_MAX_TOKENS", int(llm_cfg.get("max_tokens", 512))),

        general_answers_enabled=_get_bool(
            "GENERAL_ANSWERS_ENABLED",
            bool(router_cfg.get("general_answers_enabled", True)),
        ),

        log_path=os.getenv("LOG_PATH", str(paths_cfg.get("log_path", os.path.join("logs", "tenxer.log")))),
        config_path=config_path,
    )


def save_settings_to_yaml(settings: Settings) -> None:
    # non-secret keys only
    cfg = {
        "llm": {
            "base_url": settings.llm_base_url,
            "model": settings.llm_model,
            "timeout_sec": settings.llm_timeout_sec,
            "retry_max": settings.retry_max,
            "temperature": settings.llm_temperature,
            "max_tokens": settings.llm_max_tokens,
        },
        "router": {
            "general_answers_enabled": settings.general_answers_enabled,
        },
        "paths": {
            "log_path": settings.log_path,
        },
    }
    Path(settings.config_path).write_text(yaml.safe_dump(cfg, allow_unicode=True, sort_keys=False), encoding="utf-8")
