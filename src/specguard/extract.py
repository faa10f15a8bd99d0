"""Step marker extraction from implementation files.

Two independent modes:

- `extract_flat`: every marker line in file order. This is what verification uses.
- `extract_by_block`: markers grouped by the nearest preceding named block opener
  (e.g. `describe('Login', ...)`). Diagnostic only; nested blocks are not
  distinguished from their parent and a repeated block name overwrites the
  earlier entry.
"""

from __future__ import annotations

import re
from pathlib import Path

from .errors import SpecGuardIOError

# `# step("...")` or `// step("...")`, anything after the closing paren is ignored.
STEP_RE = re.compile(r'^\s*(?:#|//)\s*step\("((?:[^"\\]|\\.)+)"\)')
_ESCAPE_RE = re.compile(r"\\(.)")

DEFAULT_BLOCK_KEYWORDS: tuple[str, ...] = ("describe",)


def _unescape(raw: str) -> str:
    return _ESCAPE_RE.sub(r"\1", raw)


def match_step(line: str) -> str | None:
    m = STEP_RE.match(line)
    if m is None:
        return None
    return _unescape(m.group(1))


def extract_flat(text: str) -> list[str]:
    steps: list[str] = []
    for line in text.splitlines():
        step = match_step(line)
        if step is not None:
            steps.append(step)
    return steps


def _block_opener_re(keywords: tuple[str, ...]) -> re.Pattern[str]:
    names = "|".join(re.escape(k) for k in keywords)
    return re.compile(rf"\b(?:{names})\(\s*(['\"])(.*?)\1\s*,")


def extract_by_block(
    text: str, *, keywords: tuple[str, ...] = DEFAULT_BLOCK_KEYWORDS
) -> dict[str, list[str]]:
    """Group step markers by named block.

    A block body is the text from its opener up to the next opener (at any
    nesting depth) or the end of input. Blocks without markers are omitted.
    """
    openers = list(_block_opener_re(keywords).finditer(text))
    out: dict[str, list[str]] = {}
    for i, m in enumerate(openers):
        end = openers[i + 1].start() if i + 1 < len(openers) else len(text)
        steps = extract_flat(text[m.end() : end])
        if steps:
            out[m.group(2)] = steps
    return out


def _read_text(path: Path) -> str | None:
    if not path.is_file():
        return None
    try:
        # Implementation files may carry stray non-UTF-8 bytes; markers are ASCII-led.
        return path.read_text(encoding="utf-8", errors="replace")
    except OSError as e:
        raise SpecGuardIOError(f"failed to read {path}: {e}") from e


def read_steps(path: Path) -> list[str]:
    text = _read_text(Path(path))
    if text is None:
        return []
    return extract_flat(text)


def read_steps_by_block(
    path: Path, *, keywords: tuple[str, ...] = DEFAULT_BLOCK_KEYWORDS
) -> dict[str, list[str]]:
    text = _read_text(Path(path))
    if text is None:
        return {}
    return extract_by_block(text, keywords=keywords)
