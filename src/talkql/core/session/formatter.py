"""Turns a query service reply into an assistant transcript entry."""

import re

from talkql.configs.system import SessionConfig

from .models import ROLE_ASSISTANT, TranscriptEntry, TurnResponse

# Table names arrive wrapped in **...**; the transcript renders them as __...__.
_BOLD_ASTERISKS = re.compile(r"\*\*(.*?)\*\*")


def format_table_names(text: str) -> str:
    """Rewrite ``**name**`` emphasis to ``__name__``."""
    return _BOLD_ASTERISKS.sub(r"__\1__", text)


def format_response(
    response: TurnResponse,
    visualization_enabled: bool,
    tabular_mode_enabled: bool,
    config: SessionConfig | None = None,
) -> TranscriptEntry:
    """Build the assistant entry for a successful turn.

    The toggle flags are recorded on the entry because the user may flip
    them before the next turn, and each entry must keep rendering the way
    it was requested.
    """
    if config is None:
        config = SessionConfig()

    query_used = response.query_used or config.query_placeholder
    content = (
        f"{config.query_label}\n```sql\n{query_used}\n```\n\n"
        f"{config.result_label}\n{format_table_names(response.query_result)}"
    )
    return TranscriptEntry(
        role=ROLE_ASSISTANT,
        content=content,
        visualization_payload=response.viz_result,
        visualization_was_enabled=visualization_enabled,
        tabular_mode_was_enabled=tabular_mode_enabled,
    )
