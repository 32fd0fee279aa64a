"""
Short code generation strategies.
Uses Strategy Pattern so the service does not care how codes are produced.
"""

import string
from abc import ABC, abstractmethod

from nanoid import generate

ALPHABET = string.ascii_uppercase + string.ascii_lowercase + string.digits
MIN_CODE_LENGTH = 6
MAX_CODE_LENGTH = 8


class ShortCodeStrategy(ABC):
    """Abstract base class for short code generation strategies"""

    @abstractmethod
    def generate(self) -> str:
        """
        Generate a candidate short code.

        Collision handling is the caller's responsibility: the returned code
        is not checked against the store.
        """
        pass


class RandomShortCodeStrategy(ShortCodeStrategy):
    """
    Random fixed-length codes over the 62 character alphanumeric alphabet.

    nanoid draws from the OS CSPRNG and maps bytes onto the alphabet
    without modulo bias, so every character is equally likely.
    """

    def __init__(self, length: int = MIN_CODE_LENGTH):
        if not MIN_CODE_LENGTH <= length <= MAX_CODE_LENGTH:
            raise ValueError(
                f"Code length must be between {MIN_CODE_LENGTH} and {MAX_CODE_LENGTH}, got {length}"
            )
        self.length = length
        self.characters = ALPHABET

    def generate(self) -> str:
        return generate(self.characters, self.length)
