"""Recipe Utils - Parsing and matching of free-text recipe ingredients and steps."""

__version__ = "0.1.0"

from . import ingredients, instructions, matching, recipes, units
from .tokenizer import Token, tokenize

__all__ = ["ingredients", "instructions", "matching", "recipes", "units", "Token", "tokenize"]
