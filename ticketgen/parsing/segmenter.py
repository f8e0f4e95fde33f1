import re
from typing import List

# "1. ...", "12) ..."
NUMBERING_PATTERN = re.compile(r'^\s*\d+[.)]\s+')
WHITESPACE_PATTERN = re.compile(r'\s+')


def is_numbering_marker(line: str) -> bool:
    return bool(NUMBERING_PATTERN.match(line))


def _join_group(lines: List[str]) -> str:
    return WHITESPACE_PATTERN.sub(' ', ' '.join(lines)).strip()


def split_numbered_questions(text: str) -> List[str]:
    """Split a block of text into individual questions.

    Numbered lines ("1.", "2)") mark the start of a question; any following
    unnumbered lines belong to the same question. If the text carries no
    numbering at all, every non-blank line is a question of its own.

    Args:
        text: Raw multi-line text

    Returns:
        List of question strings, whitespace-normalized
    """
    lines = text.replace('\r\n', '\n').replace('\r', '\n').split('\n')

    questions = []
    current = []
    has_numbering = False

    for raw_line in lines:
        line = raw_line.strip()
        if not line:
            # Keep paragraph breaks inside an open question
            if current:
                current.append('')
            continue

        if is_numbering_marker(line):
            has_numbering = True
            if current:
                questions.append(_join_group(current))
                current = []
        current.append(line)

    if current:
        questions.append(_join_group(current))

    if not has_numbering:
        return [line.strip() for line in lines if line.strip()]

    return [q for q in questions if q]
