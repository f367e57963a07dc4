"""
User directory.

Responsibilities:
- Resolve an email address to a stable user identity.
- Create the user record the first time an email is seen.
"""
