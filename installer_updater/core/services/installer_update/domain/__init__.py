"""
L1 Domain — pure decision and argument-building functions.

No subprocess calls, no filesystem access, no network calls.
"""
