"""Interactive terminal host for a TalkQL session."""
