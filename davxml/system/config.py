"""
Runtime configuration for davxml.

Settings live in a single module-level DAVXMLConfig instance. Callers read it
with get_config() and change it with configure(); nothing is read from the
environment.
"""

from dataclasses import dataclass, replace


@dataclass(frozen=True)
class DAVXMLConfig:
    """Loader settings shared by every call in the process."""

    # Emit per-document debug logging through the davxml.loader logger
    debug_mode: bool = False
    # Keep whitespace-only text nodes between elements
    preserve_whitespace: bool = False


_config = DAVXMLConfig()


def get_config() -> DAVXMLConfig:
    return _config


def configure(**overrides) -> DAVXMLConfig:
    """
    Replace selected settings and return the new configuration.

    Unknown setting names raise TypeError.
    """
    global _config
    _config = replace(_config, **overrides)
    return _config


def reset_config() -> DAVXMLConfig:
    global _config
    _config = DAVXMLConfig()
    return _config
