from __future__ import annotations

import asyncio
import logging
import argparse
from pathlib import Path

from tenxer.config.settings import Settings, load_settings, parse_bool, save_settings_to_yaml
from tenxer.domain.prompt_builder import HELP_TEXT
from tenxer.infra.intent_classifier import LlmIntentClassifier
from tenxer.infra.llm_client import LlmClient, LlmClientConfig
from tenxer.infra.llm_health import guidance_message, health_check
from tenxer.ui.command_router import help_lines, usage
from tenxer.ui.cui_controller import CUIController
from tenxer.usecases.navigation_service import NavigationService
from tenxer.usecases.prompt_router import PromptRouter


def _setup_logging(log_path: str) -> None:
    Path(log_path).parent.mkdir(parents=True, exist_ok=True)
    logging.basicConfig(
        filename=log_path,
        level=logging.INFO,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )


def build_classifier(st: Settings) -> LlmIntentClassifier | None:
    if not st.llm_api_key:
        return None
    llm = LlmClient(
        LlmClientConfig(
            base_url=st.llm_base_url,
            model=st.llm_model,
            api_key=st.llm_api_key,
            timeout_sec=st.llm_timeout_sec,
            retry_max=st.retry_max,
            temperature=st.llm_temperature,
            max_tokens=st.llm_max_tokens,
        )
    )
    return LlmIntentClassifier(client=llm, timeout_sec=st.llm_timeout_sec)


def main() -> None:
    parser = argparse.ArgumentParser(description="TenXer robotic hand navigation shell")
    parser.add_argument("--no-ai", action="store_true", help="local commands only, never call the model")
    args = parser.parse_args()

    st = load_settings()
    _setup_logging(st.log_path)
    log = logging.getLogger("tenxer")

    if args.no_ai:
        st.llm_api_key = None

    # endpoint health check (non-fatal)
    if st.llm_api_key:
        hs = health_check(st.llm_base_url, st.llm_api_key)
        if not hs.ok:
            print("[INFO] " + guidance_message(st.llm_base_url, hs))

    router = PromptRouter(
        classifier=build_classifier(st),
        general_answers_enabled=st.general_answers_enabled,
    )
    navigation = NavigationService(router=router)
    controller = CUIController(navigation)
    if not navigation.classifier_configured:
        controller.info("AI navigation disabled (no API key). /key <KEY> to enable it.")
    controller.info("type a request, or /help for the slash commands")

    def on_command(cmd: str, args: list[str]) -> None:
        if cmd == "help":
            controller.info(HELP_TEXT)
            for ln in help_lines():
                controller.info(ln)
            return

        if cmd == "key":
            st.llm_api_key = args[0] if args else None
            navigation.set_classifier(build_classifier(st))
            if navigation.classifier_configured:
                controller.info("AI navigation is now active.")
            else:
                controller.info("API key cleared; local commands only.")
            return

        if cmd == "config":
            sub = args[0] if args else ""
            if sub == "show" or sub == "":
                controller.info(f"llm_base_url={st.llm_base_url}")
                controller.info(f"llm_model={st.llm_model}")
                controller.info(f"llm_api_key={'(set)' if st.llm_api_key else '(none)'}")
                controller.info(f"llm_timeout_sec={st.llm_timeout_sec}")
                controller.info(f"retry_max={st.retry_max}")
                controller.info(f"llm_temperature={st.llm_temperature}")
                controller.info(f"llm_max_tokens={st.llm_max_tokens}")
                controller.info(f"general_answers_enabled={st.general_answers_enabled}")
                controller.info(f"log_path={st.log_path}")
            elif sub == "set" and len(args) >= 3:
                key = args[1]
                val = " ".join(args[2:])
                if key in ("llm_base_url", "llm_model", "log_path"):
                    setattr(st, key, val.rstrip("/") if key == "llm_base_url" else val)
                elif key in ("retry_max", "llm_max_tokens"):
                    try:
                        setattr(st, key, int(val))
                    except ValueError:
                        controller.error("value must be int")
                        return
                elif key in ("llm_timeout_sec", "llm_temperature"):
                    try:
                        setattr(st, key, float(val))
                    except ValueError:
                        controller.error("value must be float")
                        return
                elif key == "general_answers_enabled":
                    st.general_answers_enabled = parse_bool(val)
                    router.general_answers_enabled = st.general_answers_enabled
                else:
                    controller.error("unknown key")
                    return

                save_settings_to_yaml(st)
                if key.startswith("llm_") or key == "retry_max":
                    navigation.set_classifier(build_classifier(st))
                controller.info("config saved")
            else:
                controller.error(usage("config"))
            return

    try:
        asyncio.run(controller.run(on_command))
    except Exception as e:
        log.exception("fatal: %s", e)
        print(f"[ERROR] fatal: {type(e).__name__}: {e}")


if __name__ == "__main__":
    main()
