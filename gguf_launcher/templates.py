"""
Prompt template registry.

Each supported template has one canonical lowercase-hyphenated id, which is
also the enum value. The enum is declared in menu order, so the id, the
display string and the presentation order come from the same table.
"""

import argparse
from enum import Enum
from typing import Dict, Tuple

from .errors import UnknownTemplate


class PromptTemplateType(Enum):
    """Prompt formats understood by the inference backend."""

    LLAMA_2_CHAT = "llama-2-chat"
    MISTRAL_INSTRUCT = "mistral-instruct"
    MISTRAL_LITE = "mistrallite"
    OPENCHAT = "openchat"
    CODELLAMA = "codellama-instruct"
    HUMAN_ASSISTANT = "human-assistant"
    VICUNA_CHAT = "vicuna-1.0-chat"
    VICUNA_11_CHAT = "vicuna-1.1-chat"
    VICUNA_LLAVA = "vicuna-llava"
    CHATML = "chatml"
    BAICHUAN_2 = "baichuan-2"
    WIZARD_CODER = "wizard-coder"
    ZEPHYR = "zephyr"
    STABLELM_ZEPHYR = "stablelm-zephyr"
    INTEL_NEURAL = "intel-neural"
    DEEPSEEK_CHAT = "deepseek-chat"
    DEEPSEEK_CODER = "deepseek-coder"
    SOLAR_INSTRUCT = "solar-instruct"
    PHI_2_CHAT = "phi-2-chat"
    PHI_2_INSTRUCT = "phi-2-instruct"
    CODELLAMA_SUPER = "codellama-super-instruct"
    GEMMA_INSTRUCT = "gemma-instruct"

    def __str__(self) -> str:
        return self.value


# Deprecated spellings still accepted by parse()
TEMPLATE_ALIASES: Dict[str, PromptTemplateType] = {
    "belle-llama-2-chat": PromptTemplateType.HUMAN_ASSISTANT,
    "human-asistant": PromptTemplateType.HUMAN_ASSISTANT,
}

# Canonical ids in menu order
TEMPLATE_IDS: Tuple[str, ...] = tuple(t.value for t in PromptTemplateType)


def parse(template_id: str) -> PromptTemplateType:
    """
    Resolve a template id or alias to its variant.

    Args:
        template_id: Canonical id (e.g. "chatml") or a deprecated alias

    Returns:
        The matching PromptTemplateType

    Raises:
        UnknownTemplate: If the id matches nothing in the registry
    """
    try:
        return PromptTemplateType(template_id)
    except ValueError:
        pass

    try:
        return TEMPLATE_ALIASES[template_id]
    except KeyError:
        raise UnknownTemplate(template_id) from None


def display(template: PromptTemplateType) -> str:
    """Canonical id of a template, never an alias."""
    return template.value


def parse_cli(value: str) -> PromptTemplateType:
    """argparse ``type=`` hook: case-insensitive match on canonical ids only."""
    try:
        return PromptTemplateType(value.strip().lower())
    except ValueError:
        raise argparse.ArgumentTypeError(
            f"invalid prompt template {value!r} (choose from: {', '.join(TEMPLATE_IDS)})"
        )
