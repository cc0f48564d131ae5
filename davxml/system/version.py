"""
davxml Version Information
Single source of truth for the package version
"""

# Package Version - Update this single location for all version references
__version__ = "1.2.0"

# Version components for programmatic access
VERSION_MAJOR = 1
VERSION_MINOR = 2
VERSION_PATCH = 0
