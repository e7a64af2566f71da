# FILE: aibuilder/services/code_cleanup.py
#
# Turn raw model output into a component the preview sandbox can run.
# clean_code(clean_code(x)) == clean_code(x).

import re

# opening fence with optional language tag, at the start of a line
FENCE_OPEN_RE = re.compile(r"^[ \t]*```[\w+.-]*[ \t]*\n?", re.M)
# closing fence, at the end of a line
FENCE_CLOSE_RE = re.compile(r"```[ \t]*$", re.M)

CODE_START_PREFIXES = (
    "import ",
    "export ",
    "function ",
    "const ",
    "//",
    "interface ",
    "type ",
)

# declarations count only at the start of a line, never inside prose
FUNCTION_NAME_RE = re.compile(r"^\s*(?:export\s+)?function\s+(\w+)", re.M)
CONST_NAME_RE = re.compile(r"^\s*(?:export\s+)?const\s+(\w+)\s*=", re.M)

# the sandbox provides React itself
REACT_DEFAULT_IMPORT_RE = re.compile(r"import\s+React\b[^\n]*?from\s+['\"]react['\"];?\n?")
REACT_NAMED_IMPORT_RE = re.compile(r"import\s*\{[^}]*\}\s*from\s+['\"]react['\"];?\n?")


def strip_code_fences(text: str) -> str:
    text = FENCE_OPEN_RE.sub("", text)
    return FENCE_CLOSE_RE.sub("", text)


def strip_react_imports(code: str) -> str:
    code = REACT_DEFAULT_IMPORT_RE.sub("", code)
    return REACT_NAMED_IMPORT_RE.sub("", code)


def trim_preamble(text: str) -> str:
    """Drop chatter before the first line that looks like code."""
    lines = text.split("\n")
    for i, line in enumerate(lines):
        if line.strip().startswith(CODE_START_PREFIXES):
            return "\n".join(lines[i:])
    return text


def ensure_default_export(code: str) -> str:
    if "export default" in code:
        return code
    match = FUNCTION_NAME_RE.search(code) or CONST_NAME_RE.search(code)
    if not match:
        return code
    return f"{code}\n\nexport default {match.group(1)};"


def clean_code(text: str) -> str:
    if not text:
        return ""
    code = strip_code_fences(text)
    code = strip_react_imports(code)
    code = trim_preamble(code).strip()
    code = ensure_default_export(code)
    return code.strip()
