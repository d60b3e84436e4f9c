"""Instruction step parsing."""

from .models import InstructionParseResult, InstructionTime
from .parsing import parse_instruction

__all__ = ["parse_instruction", "InstructionParseResult", "InstructionTime"]
