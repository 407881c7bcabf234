"""Chathub - shared chat state and message history runtime."""
