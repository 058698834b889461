"""pokedex: a validated Pokemon catalog behind swappable storage backends."""

__version__ = "0.1.0"
