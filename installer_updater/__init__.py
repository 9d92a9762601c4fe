"""
Installer Updater — keeps a bootstrapper-managed installer component current.
"""

__version__ = "0.1.0"
