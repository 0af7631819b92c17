"""Business logic for accounts.

- Registration and password verification (``credentials``)
- Stateless signed session tokens (``session_tokens``)
"""
