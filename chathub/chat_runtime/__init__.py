"""Chat runtime: remote state, sessions, realtime data and message history."""
