"""Placeholder escaping for template tags and pre-rendered code blocks.

Before a post body is handed to a content renderer (markdown-it), every region
the renderer could mangle is swapped for an opaque HTML comment placeholder:

  * code blocks already rendered to HTML, wrapped in CODE_BLOCK_OPEN/CLOSE
  * template variables ``{{ ... }}`` and block tags ``{% ... %}``

Template comments ``{# ... #}`` are dropped outright. The captured text lives in
an EscapeTable owned by one render call; restoring a placeholder takes its slot
exactly once.
"""

import logging
import re
from enum import Enum, auto

from mdpost.errors import ConsistencyError


logger = logging.getLogger(__name__)

CODE_BLOCK_OPEN = "<postRenderCodeBlock>"
CODE_BLOCK_CLOSE = "</postRenderCodeBlock>"

# U+FFFC object replacement character; does not occur in authored post text.
PLACEHOLDER_MARK = "\ufffc"

CODE_BLOCK_RE = re.compile(re.escape(CODE_BLOCK_OPEN) + r"([\s\S]+?)" + re.escape(CODE_BLOCK_CLOSE))
TAG_PRECHECK_RE = re.compile(r"\{\{[\s\S]*?\}\}|\{#[\s\S]*?#\}|\{%[\s\S]*?%\}")


def _placeholder_re(flag: str) -> re.Pattern:
    """Match ``<!--{flag}{mark}{N}-->``, including the entity-escaped form a renderer may emit."""
    return re.compile(rf"(?:<|&lt;)!--{flag}{PLACEHOLDER_MARK}(\d+)--(?:>|&gt;)")


TAG_PLACEHOLDER_RE = _placeholder_re("swig")
CODE_PLACEHOLDER_RE = _placeholder_re("code")


class EscapeTable:
    """Append-only slots of escaped text; each slot can be taken once."""

    def __init__(self) -> None:
        self._slots: list[str | None] = []

    def __len__(self) -> int:
        return len(self._slots)

    def push(self, text: str) -> int:
        self._slots.append(text)
        return len(self._slots) - 1

    def take(self, index: int) -> str:
        """Return the text at index and empty the slot; fail if out of range or already taken."""
        if not 0 <= index < len(self._slots):
            raise ConsistencyError(index, f"is out of range (table holds {len(self._slots)})")
        value = self._slots[index]
        if value is None:
            raise ConsistencyError(index, "was already restored")
        self._slots[index] = None
        return value

    def pending(self) -> int:
        """Number of slots not yet restored."""
        return sum(1 for s in self._slots if s is not None)


class ScanState(Enum):
    PLAINTEXT = auto()
    VARIABLE_TAG = auto()
    COMMENT_TAG = auto()
    BLOCK_TAG = auto()


OPENERS = {"{": ScanState.VARIABLE_TAG, "#": ScanState.COMMENT_TAG, "%": ScanState.BLOCK_TAG}
CLOSERS = {ScanState.VARIABLE_TAG: "}", ScanState.COMMENT_TAG: "#", ScanState.BLOCK_TAG: "%"}


class _TagScan:
    """Working state of one escape_all_tags call."""

    def __init__(self, text: str, table: EscapeTable) -> None:
        self.text = text
        self.table = table
        self.output: list[str] = []
        self.buffer: list[str] = []

    def char_at(self, i: int) -> str:
        return self.text[i] if i < len(self.text) else ""

    def take_buffer(self) -> str:
        content = "".join(self.buffer)
        self.buffer = []
        return content

    def emit_placeholder(self, source: str) -> None:
        self.output.append(escape_content(self.table, "swig", source))


def escape_content(table: EscapeTable, flag: str, text: str) -> str:
    """Store text in the table and return its placeholder."""
    return f"<!--{flag}{PLACEHOLDER_MARK}{table.push(text)}-->"


def _tag_name(buffer: str) -> str:
    parts = buffer.split()
    return parts[0] if parts else ""


def _is_paired(name: str, text: str) -> bool:
    """True when the document also contains the matching ``end<name>`` tag."""
    return bool(name) and f"end{name}" in text


def _plaintext(scan: _TagScan, i: int) -> tuple[ScanState, int]:
    char, nxt = scan.char_at(i), scan.char_at(i + 1)
    if char == "{" and nxt in OPENERS:
        return OPENERS[nxt], i + 2
    scan.output.append(char)
    return ScanState.PLAINTEXT, i + 1


def _in_tag(scan: _TagScan, state: ScanState, i: int) -> tuple[ScanState, int]:
    char, nxt = scan.char_at(i), scan.char_at(i + 1)
    if not (char == CLOSERS[state] and nxt == "}"):
        scan.buffer.append(char)
        return state, i + 1

    content = scan.take_buffer()
    match state:
        case ScanState.VARIABLE_TAG:
            scan.emit_placeholder(f"{{{{{content}}}}}")
        case ScanState.COMMENT_TAG:
            pass
        case ScanState.BLOCK_TAG:
            # Paired and standalone block tags escape identically.
            if logger.isEnabledFor(logging.DEBUG):
                name = _tag_name(content)
                logger.debug("Escaping block tag %r (paired=%s)", name, _is_paired(name, scan.text))
            scan.emit_placeholder(f"{{%{content}%}}")
    return ScanState.PLAINTEXT, i + 2


def _step(scan: _TagScan, state: ScanState, i: int) -> tuple[ScanState, int]:
    match state:
        case ScanState.PLAINTEXT:
            return _plaintext(scan, i)
        case ScanState.VARIABLE_TAG | ScanState.COMMENT_TAG | ScanState.BLOCK_TAG:
            return _in_tag(scan, state, i)
    raise RuntimeError(f"Unexpected scan state: {state}")


class PostRenderEscape:
    """Escape/restore pair for one render call; owns its EscapeTable."""

    def __init__(self) -> None:
        self.table = EscapeTable()

    def _restore(self, match: re.Match) -> str:
        return self.table.take(int(match.group(1)))

    def escape_code_blocks(self, text: str) -> str:
        return CODE_BLOCK_RE.sub(lambda m: escape_content(self.table, "code", m.group(1)), text)

    def restore_code_blocks(self, text: str) -> str:
        return CODE_PLACEHOLDER_RE.sub(self._restore, text)

    def restore_all_tags(self, text: str) -> str:
        return TAG_PLACEHOLDER_RE.sub(self._restore, text)

    def escape_all_tags(self, text: str) -> str:
        """Replace ``{{ }}`` and ``{% %}`` with placeholders and drop ``{# #}`` comments.

        An unterminated tag at end of input is emitted unchanged.
        """
        if not TAG_PRECHECK_RE.search(text):
            return text

        scan = _TagScan(text, self.table)
        state, i = ScanState.PLAINTEXT, 0
        while i < len(text):
            state, i = _step(scan, state, i)

        if state is not ScanState.PLAINTEXT:
            opener = next(k for k, v in OPENERS.items() if v is state)
            scan.output.append("{" + opener + scan.take_buffer())
        return "".join(scan.output)
