from __future__ import annotations
from dataclasses import dataclass
import requests

@dataclass(frozen=True)
class HealthStatus:
    ok: bool
    detail: str

def health_check(base_url: str, api_key: str | None, timeout_s: float = 2.5) -> HealthStatus:
    if not api_key:
        return HealthStatus(False, "no API key")
    url = base_url.rstrip("/") + "/models"
    try:
        r = requests.get(url, headers={"Authorization": f"Bearer {api_key}"}, timeout=timeout_s)
        return HealthStatus(r.status_code == 200, f"HTTP {r.status_code}")
    except requests.RequestException as e:
        return HealthStatus(False, f"{type(e).__name__}: {e}")

def guidance_message(base_url: str, status: HealthStatus) -> str:
    return (
        "Cannot reach the language model endpoint; using local commands only.\n"
        f"- URL: {base_url}\n"
        f"- status: {status.detail}\n"
        "- Set GEMINI_API_KEY (or /key <KEY>) and check llm.base_url in config.yaml"
    )
