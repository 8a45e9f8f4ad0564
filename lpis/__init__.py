"""
lpis — Linux post-install checklist.

Pick Flatpaks to install and run script bundles from a single YAML file,
skipped on later runs until that file changes.
"""

__version__ = "0.1.0"
