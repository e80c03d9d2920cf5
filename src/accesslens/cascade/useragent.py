"""Built-in user-agent defaults, applied at the lowest cascade origin."""

from __future__ import annotations

from functools import lru_cache

from accesslens.stylesheet.model import StyleRule
from accesslens.stylesheet.parser import parse_stylesheet

USER_AGENT_CSS = """
head, script, style, title, meta, link, base, template, noscript, [hidden] {
    display: none;
}
h1 { font-size: 2em; font-weight: bold; }
h2 { font-size: 1.5em; font-weight: bold; }
h3 { font-size: 1.17em; font-weight: bold; }
h4 { font-size: 1em; font-weight: bold; }
h5 { font-size: 0.83em; font-weight: bold; }
h6 { font-size: 0.67em; font-weight: bold; }
b, strong, th { font-weight: bold; }
small { font-size: smaller; }
"""


@lru_cache(maxsize=1)
def user_agent_rules() -> tuple[StyleRule, ...]:
    return parse_stylesheet(USER_AGENT_CSS).rules
