"""Text transforms applied to serialized snapshots.

These operate on the HTML string returned by SingleFile, after the live page
is gone. They are deliberately regex based: correctness only depends on the
two transforms below, not on general CSS parsing.
"""

import re

# Values may nest references (``var(--a, var(--b))``), so only the name
# directly after ``var(`` is captured.
VARIABLE_REFERENCE_RE = re.compile(r"var\s*\(\s*(?P<name>--[\w-]+)")

FONT_FACE_RE = re.compile(r"@font-face\s*{[^}]*}")
FONT_FAMILY_RE = re.compile(r"font-family\s*:\s*(?P<quote>['\"]?)(?P<family>[^'\";}]+)(?P=quote)")

# ``--a: 0px; } .class { ...``: the closing brace of the block may directly
# follow a declaration without a semicolon and must survive pruning.
VARIABLE_DECLARATION_RE = re.compile(
    r"(?P<name>--[\w-]+)\s*:\s*(?P<value>[^;\n}]+)\s*[;\n]?(?P<brace>})?",
    re.MULTILINE,
)

DEFAULT_MATH_FONT_PREFIX = "KaTeX"


def collect_used_variables(content: str) -> set[str]:
    """Return the custom property names referenced through ``var()``."""
    return {match.group("name") for match in VARIABLE_REFERENCE_RE.finditer(content)}


def font_family_of(font_face_rule: str) -> str:
    """Return the font family declared by an ``@font-face`` block, or ''."""
    match = FONT_FAMILY_RE.search(font_face_rule)
    if match is None:
        return ""
    return match.group("family").strip()


def remove_fonts(
    content: str,
    keep_math_fonts: bool,
    math_font_prefix: str = DEFAULT_MATH_FONT_PREFIX,
) -> str:
    """Drop embedded ``@font-face`` blocks.

    Everything except math typesetting fonts is served by system fonts well
    enough. Math fonts are kept only for documents that contain math.
    """

    def _replace(match: re.Match) -> str:
        rule = match.group(0)
        if keep_math_fonts and font_family_of(rule).startswith(math_font_prefix):
            return rule
        return ""

    return FONT_FACE_RE.sub(_replace, content)


def remove_unused_variables(content: str, used: set[str] | None = None) -> str:
    """Drop custom property declarations that are never referenced.

    Args:
        content: Serialized document
        used: Live variable names. Collected from content when omitted.

    Returns:
        Content where every retained declaration reads ``--name:value;``
        and every pruned one is gone, with block-closing braces preserved.
    """
    if used is None:
        used = collect_used_variables(content)

    def _replace(match: re.Match) -> str:
        brace = match.group("brace") or ""
        name = match.group("name")
        if name in used:
            return f"{name}:{match.group('value')};{brace}"
        return brace

    return VARIABLE_DECLARATION_RE.sub(_replace, content)


def postprocess_snapshot(
    content: str,
    includes_math: bool,
    math_font_prefix: str = DEFAULT_MATH_FONT_PREFIX,
) -> str:
    """Apply every snapshot text transform in order."""
    used = collect_used_variables(content)
    content = remove_fonts(content, keep_math_fonts=includes_math, math_font_prefix=math_font_prefix)
    return remove_unused_variables(content, used)
