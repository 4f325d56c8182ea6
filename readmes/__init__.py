"""
readmes - Per-package README regeneration for multi-package workspaces.

Walks the immediate subdirectories of a workspace that carry a package
manifest and regenerates each README.md from an external documentation tool.
"""

__version__ = "0.1.0"
