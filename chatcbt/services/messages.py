"""Journal document <-> chat message conversion.

A document is plain text where turns are separated by a run of three or more
hyphens (a markdown horizontal rule). Assistant turns are recognised only by
the header ``**<assistant name>:**`` that :func:`build_assistant_reply`
writes, so the two must stay in sync.

Nothing in this module raises: odd input degrades to user turns.
"""

from __future__ import annotations

import re

from chatcbt.models.chat import ChatMessage

TURN_DELIMITER = re.compile(r"-{3,}")
_TRAILING_DELIMITER = re.compile(r"-{3,}\s*\Z")

MSG_PADDING = "\n\n"
TURN_SEPARATOR = "---"


def assistant_header(assistant_name: str) -> str:
    return f"**{assistant_name}:**"


def parse_document_into_turns(text: str) -> list[str]:
    """Split ``text`` on turn delimiters and strip each fragment.

    ``n`` delimiters always give ``n + 1`` turns, in document order. Empty
    fragments are kept so turn indexes line up with the document.
    """
    return [fragment.strip() for fragment in TURN_DELIMITER.split(text)]


def turn_to_message(raw_turn: str, assistant_name: str) -> ChatMessage:
    text = raw_turn.strip()
    if assistant_name:
        header = assistant_header(assistant_name)
        if text.startswith(header):
            return ChatMessage(role="assistant", content=text[len(header):].strip())
    return ChatMessage(role="user", content=text)


def parse_document(text: str, assistant_name: str) -> list[ChatMessage]:
    return [turn_to_message(turn, assistant_name) for turn in parse_document_into_turns(text)]


def build_assistant_reply(response_text: str, assistant_name: str) -> str:
    """Render a reply so that it re-parses as a single assistant turn."""
    return f"{MSG_PADDING}{assistant_header(assistant_name)} {response_text}"


def open_next_turn() -> str:
    """Delimiter written after a reply so the next entry starts its own turn."""
    return f"{MSG_PADDING}{TURN_SEPARATOR}{MSG_PADDING}"


def drop_open_turn(messages: list[ChatMessage]) -> list[ChatMessage]:
    """Drop a trailing empty user turn left by :func:`open_next_turn`.

    Empty turns elsewhere in the document are kept.
    """
    if len(messages) > 1 and messages[-1].role == "user" and not messages[-1].content:
        return messages[:-1]
    return messages


def build_summary_append(response_text: str) -> str:
    return MSG_PADDING + response_text


def ends_with_delimiter(document: str) -> bool:
    return _TRAILING_DELIMITER.search(document) is not None


def append_to_document(document: str, addition: str, *, separate: bool = True) -> str:
    """Append ``addition`` to ``document``.

    With ``separate`` the addition is placed in its own turn: a delimiter is
    written first unless the document already ends with one (or is blank).
    """
    if separate and document.strip() and not ends_with_delimiter(document):
        document = document + MSG_PADDING + TURN_SEPARATOR
    return document + addition
