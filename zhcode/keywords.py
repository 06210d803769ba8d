"""
ZhCode keywords - Chinese keyword spellings, their token kinds and JS text
Uses the shared language definition from data/zh.json
"""

from types import MappingProxyType
from typing import Dict, Optional, Tuple

from .config import ZH
from .errors import ConfigError
from .tokens import TokenType


def _build_tables(entries: dict) -> Tuple[Dict[str, TokenType], Dict[str, str]]:
    kinds: Dict[str, TokenType] = {}
    js: Dict[str, str] = {}
    for word, entry in entries.items():
        kind_name = entry.get('kind')
        if kind_name not in TokenType.__members__:
            raise ConfigError(f"Keyword '{word}' has unknown kind '{kind_name}'")
        if 'js' not in entry:
            raise ConfigError(f"Keyword '{word}' has no JavaScript equivalent")
        kinds[word] = TokenType[kind_name]
        js[word] = entry['js']
    return kinds, js


_kinds, _js = _build_tables(ZH['keywords'])

CHINESE_KEYWORDS = MappingProxyType(_kinds)
KEYWORD_TO_JS = MappingProxyType(_js)


def is_keyword(word: str) -> bool:
    return word in CHINESE_KEYWORDS


def keyword_kind(word: str) -> Optional[TokenType]:
    return CHINESE_KEYWORDS.get(word)


def js_equivalent(word: str) -> Optional[str]:
    """JavaScript spelling for a keyword, e.g. '组件' -> 'function'."""
    return KEYWORD_TO_JS.get(word)
