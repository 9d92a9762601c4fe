"""
L5 Orchestration — decision, install and repair loop.
"""
