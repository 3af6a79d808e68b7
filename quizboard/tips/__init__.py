from .providers import (
    TipsProvider, TipsResult, HeuristicTipsProvider, LLMTipsProvider,
    build_tips_provider, get_tips_provider, parse_tips,
)
