"""
FairPlay - Provably-fair outcome engine for Dice, Limbo, Baccarat and Minesweeper.
"""

__version__ = "0.1.0"
