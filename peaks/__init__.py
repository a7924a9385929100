"""peaks: live bandwidth history drawn as braille in the terminal.

Each traffic source is a BaseSampler subclass that lives in its own module.
Import a sampler module to register it in REGISTRY.
"""

from peaks.sampler import BaseSampler

__version__ = "0.4.0"

REGISTRY: dict[str, type[BaseSampler]] = {}

# Alternate --sampler spellings, mapped to registered names
ALIASES: dict[str, str] = {
    "net": "proc",
    "ps": "psutil",
    "fake": "mock",
    "demo": "mock",
}


def register(cls: type[BaseSampler]) -> type[BaseSampler]:
    """Class decorator: make a sampler selectable by its `name`."""
    REGISTRY[cls.name] = cls
    return cls


def resolve(name: str) -> str:
    """Canonical sampler name for a --sampler value."""
    return ALIASES.get(name, name)
