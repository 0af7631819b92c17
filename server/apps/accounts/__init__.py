"""Accounts app: credential store and session tokens."""
