"""chainwarz - wallet session core for the ChainWarZ strike game."""

__version__ = "0.1.0"
