"""Connect Four strategy arena: bitboard positions, alpha-beta search, pluggable strategies."""

__version__ = "0.1"
