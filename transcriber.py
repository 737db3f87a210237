"""
Slang transcriber for the Street scripting language

Rewrites the alternate spellings of keywords and operators into the
canonical vocabulary before lexing. Pure text substitution: whole words
only, never inside a "..." string literal.
"""

import re

# Applied in order; later entries see the output of earlier ones
REPLACEMENTS = [
    ("oppositiate", "!"),
    ("fr", ";"),
    ("equivalate to", "="),
    ("permit", "let"),
    ("no_change", "const"),
    ("spitbars", "print"),
    ("si", "if"),
    ("nothin", "null"),
    ("si_no", "else"),
    ("dont_fw", "!="),
    ("fw", "=="),
    ("moreover", "&&"),
    ("carenot", "|"),
    ("street", "fn"),
    ("einstein", "math"),
    ("foh", "for"),
    ("diesto", "<"),
    ("kills", ">"),
    ("yuh", "true"),
    ("nuh", "false"),
    ("frick_around", "try"),
    ("find_out", "catch"),
    ("talk", "input"),
    ("minus", "-"),
    ("plus", "+"),
    ("minusminus", "--"),
    ("plusplus", "++"),
    ("times", "*"),
    ("divided by", "/"),
]

TYPE_ANNOTATIONS = re.compile(r": (?:number|string|object|boolean)")

# An even number of quotes between the match and the end of the text means
# the match is not inside a string literal
_OUTSIDE_STRING = r'(?=(?:(?:[^"]*"){2})*[^"]*\Z)'

_PATTERNS = [
    (re.compile(r"\b" + re.escape(target) + r"\b" + _OUTSIDE_STRING), replacement)
    for target, replacement in REPLACEMENTS
]

def transcribe(code: str) -> str:
    for pattern, replacement in _PATTERNS:
        code = pattern.sub(lambda _, text=replacement: text, code)
    return TYPE_ANNOTATIONS.sub("", code)
