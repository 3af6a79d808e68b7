import logging
import re
from abc import ABC, abstractmethod
from dataclasses import dataclass
from functools import lru_cache
from pathlib import Path
from typing import Dict, List, Sequence

import yaml

from quizboard.configs import settings
from quizboard.tips.llm_provider import LLMProvider

logger = logging.getLogger(__name__)

PROMPTS_PATH = Path(__file__).parent / "tips_prompt.yaml"
MAX_TIPS = 3
TIP_SPLIT = re.compile(r"\n|\d+\.|-\s")


@lru_cache(maxsize=1)
def load_prompts() -> Dict:
    """Load prompts from YAML file."""
    with open(PROMPTS_PATH, "r", encoding="utf-8") as f:
        return yaml.safe_load(f)


@dataclass
class TipsResult:
    tips: List[str]
    model: str


class TipsProvider(ABC):
    """Produces short study tips for a student's weak subjects and topics."""

    @abstractmethod
    def get_tips(self, weak_subjects: Sequence[str], weakest_topics: Sequence[str]) -> TipsResult:
        ...


class HeuristicTipsProvider(TipsProvider):
    """Fixed, always-available tips. Used on its own or as the fallback for remote providers."""

    def get_tips(self, weak_subjects: Sequence[str], weakest_topics: Sequence[str]) -> TipsResult:
        return TipsResult(tips=list(load_prompts()["heuristic_tips"]), model="heuristic")


def parse_tips(text: str, limit: int = MAX_TIPS) -> List[str]:
    """Split an LLM answer on newlines, "1." numbering and "- " bullets."""
    parts = (part.strip() for part in TIP_SPLIT.split(text or ""))
    return [part for part in parts if part][:limit]


class LLMTipsProvider(TipsProvider):
    """Asks a language model for tips, falling back to the heuristic on any failure."""

    def __init__(self, llm: LLMProvider, fallback: TipsProvider = None):
        self.llm = llm
        self.fallback = fallback or HeuristicTipsProvider()

    def get_tips(self, weak_subjects: Sequence[str], weakest_topics: Sequence[str]) -> TipsResult:
        prompts = load_prompts()
        user_prompt = prompts["user_prompt_template"].format(
            weak_subjects=", ".join(weak_subjects) or "none",
            weakest_topics=", ".join(weakest_topics) or "none",
        )
        response = self.llm.generate(prompts["system_prompt"], user_prompt)
        if not response.success:
            logger.warning(f"LLM tips failed ({response.error}), using heuristic tips")
            return self.fallback.get_tips(weak_subjects, weakest_topics)

        tips = parse_tips(response.content)
        if not tips:
            logger.warning("LLM returned no usable tips, using heuristic tips")
            return self.fallback.get_tips(weak_subjects, weakest_topics)
        return TipsResult(tips=tips, model=self.llm.backend)


def build_tips_provider() -> TipsProvider:
    """Pick the tips provider from settings. Any setup error leaves the heuristic in place."""
    if settings.TIPS_PROVIDER.lower() != "llm":
        return HeuristicTipsProvider()
    try:
        llm = LLMProvider(
            model_name=settings.TIPS_MODEL,
            temperature=settings.TIPS_TEMPERATURE,
            max_tokens=settings.TIPS_MAX_TOKENS,
            timeout=settings.LLM_TIMEOUT_SECONDS,
            api_key=settings.OPENAI_API_KEY,
        )
    except Exception as e:
        logger.warning(f"Could not set up LLM tips provider ({e}), using heuristic tips")
        return HeuristicTipsProvider()
    return LLMTipsProvider(llm)


@lru_cache(maxsize=1)
def get_tips_provider() -> TipsProvider:
    return build_tips_provider()
