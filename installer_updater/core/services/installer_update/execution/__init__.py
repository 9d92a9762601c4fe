"""
L4 Execution — download, run, rename: everything with side effects.
"""
