"""
Emoji → ASCII tokens. The Base-14 PDF fonts have no emoji glyphs and draw only
Latin-1, so every text run goes through normalize_emoji() before it is drawn.
"""

import re
from types import MappingProxyType

# Known emoji and their short tokens. Read-only; keys are matched longest first.
EMOJI_MAP = MappingProxyType({
    "\U0001F389": "[*]",         # party popper
    "\u2728": "[+]",             # sparkles
    "\U0001F4A1": "[!]",         # light bulb
    "\U0001F680": "[>>]",        # rocket
    "\u2764\uFE0F": "<3",        # red heart
    "\U0001F44D": "[+1]",        # thumbs up
    "\U0001F525": "[~]",         # fire
    "\u26A1": "[!]",             # high voltage
    "\U0001F4DD": "[doc]",       # memo
    "\U0001F4AC": "[msg]",       # speech balloon
    "\U0001F916": "[AI]",        # robot
    "\U0001F464": "[user]",      # bust in silhouette
    "\u2705": "[v]",             # check mark button
    "\u274C": "[x]",             # cross mark
    "\u26A0\uFE0F": "[!]",       # warning
    "\U0001F4CA": "[chart]",     # bar chart
    "\U0001F3AF": "[o]",         # direct hit
    "\U0001F527": "[tool]",      # wrench
    "\U0001F4E6": "[box]",       # package
    "\U0001F31F": "[*]",         # glowing star
})

EMOJI_PLACEHOLDER = "[emoji]"
# What str.encode("latin-1", "replace") leaves for characters outside Latin-1
UNPRINTABLE_PLACEHOLDER = "?"

_KNOWN_RE = re.compile(
    "|".join(re.escape(k) for k in sorted(EMOJI_MAP, key=len, reverse=True))
)
# Pictographs, dingbats, misc symbols/technical, arrows-and-stars block
_PICTOGRAPH_RE = re.compile(
    "[\U0001F000-\U0001FAFF\u2300-\u23FF\u2600-\u27BF\u2B00-\u2BFF]"
)
# Leftovers of multi-codepoint emoji: variation selectors and zero-width joiner
_JOINER_RE = re.compile("[\uFE0E\uFE0F\u200D]")

# Typographic characters outside Latin-1, the only range the Base-14 fonts draw
TYPOGRAPHY_MAP = MappingProxyType({
    "\u2010": "-",
    "\u2011": "-",
    "\u2012": "-",
    "\u2013": "-",
    "\u2014": "--",
    "\u2015": "--",
    "\u2212": "-",
    "\u2026": "...",
    "\u2018": "'",
    "\u2019": "'",
    "\u201a": "'",
    "\u201c": "\"",
    "\u201d": "\"",
    "\u201e": "\"",
    "\u2022": "-",
    "\u2007": " ",
    "\u2009": " ",
    "\u200b": "",
    "\u2190": "<-",
    "\u2192": "->",
    "\u2194": "<->",
    "\u21d0": "<=",
    "\u21d2": "=>",
    "\u21d4": "<=>",
})
_TYPOGRAPHY_RE = re.compile("[" + "".join(TYPOGRAPHY_MAP) + "]")


def normalize_emoji(text: str) -> str:
    """
    Replace known emoji with their tokens and any other pictograph with EMOJI_PLACEHOLDER,
    then fold what is left into Latin-1: typographic punctuation becomes ASCII and any
    other character the Base-14 fonts cannot draw becomes UNPRINTABLE_PLACEHOLDER.
    """
    if not text:
        return ""
    text = _KNOWN_RE.sub(lambda m: EMOJI_MAP[m.group(0)], text)
    text = _PICTOGRAPH_RE.sub(EMOJI_PLACEHOLDER, text)
    text = _JOINER_RE.sub("", text)
    text = _TYPOGRAPHY_RE.sub(lambda m: TYPOGRAPHY_MAP[m.group(0)], text)
    return text.encode("latin-1", "replace").decode("latin-1")
