"""
Transcript parser.

Turns a play-script style chatlog into an ordered list of blocks::

    A: Here's a series of messages as sent by A
    A: Hello!
    B: Other people can also speak!
    @ Today at 4:20 PM
    B: Timestamps go on their own line, starting with "@"
    and lines without a speaker continue the previous message.

Each line is classified as blank, timestamp, speaker or continuation. The
parser never fails: anything it can't place is folded into the open post or
dropped.
"""

import unicodedata
from typing import List, Optional

from cohoard.config import Config
from cohoard.logger import get_default_logger
from cohoard.models import ChatlogBlock, Post, Timestamp, User


logger = get_default_logger()


TIMESTAMP_PREFIX = "@"
SPEAKER_SEPARATOR = ": "


def _is_name_char(ch: str) -> bool:
    # Letters and numbers, plus combining marks (vowel signs in Devanagari names)
    return ch.isalnum() or unicodedata.category(ch) in ("Mn", "Mc")


def split_lines(text: str) -> List[str]:
    """
    Split text on ``\\n`` only, dropping one ``\\r`` before each newline.

    Form feeds, lone carriage returns and Unicode line separators stay part
    of the line they appear in. A final newline doesn't produce an extra
    empty line.

    Example:
        >>> split_lines("a\\r\\nb\\x0cc\\n")
        ['a', 'b\\x0cc']
    """
    if not text:
        return []
    pieces = text.split("\n")
    terminated = pieces[:-1]
    lines = [piece[:-1] if piece.endswith("\r") else piece for piece in terminated]
    if pieces[-1]:
        lines.append(pieces[-1])
    return lines


def split_speaker_line(line: str) -> Optional[tuple[str, str]]:
    """
    Split a ``NAME: message`` line.

    The name must be entirely alphanumeric, which keeps prose that happens to
    contain a colon from being read as a new speaker.

    Returns:
        ``(name, message)`` or None if the line isn't a speaker line

    Example:
        >>> split_speaker_line("AARON: bee removal")
        ('AARON', 'bee removal')
        >>> split_speaker_line("a note, really: prose") is None
        True
    """
    name, sep, message = line.partition(SPEAKER_SEPARATOR)
    if not sep or not name or not all(_is_name_char(ch) for ch in name):
        return None
    return name, message


class _OpenPost:
    """Post under construction; closed into an immutable ``Post``."""

    def __init__(self, user: User, first_line: str):
        self.user = user
        self.lines = [first_line]

    def append(self, line: str) -> None:
        self.lines.append(line)

    def close(self) -> Post:
        # Every line keeps its newline, including the last one
        return Post(user=self.user, message="".join(f"{line}\n" for line in self.lines))


def parse_posts(config: Config, text: str) -> List[ChatlogBlock]:
    """
    Parse a chatlog into a list of ``Timestamp`` and ``Post`` blocks.

    Args:
        config: People table used to resolve speaker names
        text: Raw chatlog text

    Returns:
        Blocks in source order (empty for blank input)

    Example:
        >>> blocks = parse_posts(Config.empty(), "A: Hello\\nworld\\n@ Later\\n")
        >>> [type(b).__name__ for b in blocks]
        ['Post', 'Timestamp']
        >>> blocks[0].message
        'Hello\\nworld\\n'
    """
    blocks: List[ChatlogBlock] = []
    current: Optional[_OpenPost] = None

    for line in split_lines(text):
        if not line.strip():
            continue

        if line.startswith(TIMESTAMP_PREFIX):
            if current is not None:
                blocks.append(current.close())
                current = None

            # Freeform text, may be empty
            message = line[len(TIMESTAMP_PREFIX):].strip()
            blocks.append(Timestamp(message=message))
            continue

        speaker = split_speaker_line(line)
        if speaker is not None:
            name, message = speaker
            if current is not None:
                blocks.append(current.close())
            current = _OpenPost(config.get_user(name), message)
        elif current is not None:
            current.append(line)
        else:
            logger.debug(f"Dropping line outside of any post: {line!r}")

    if current is not None:
        blocks.append(current.close())

    logger.debug(f"Parsed {len(blocks)} blocks from {len(text)} characters")
    return blocks
