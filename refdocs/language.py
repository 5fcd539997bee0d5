"""The two rendering views a reference pass can produce."""

from enum import Enum


class Language(Enum):
    """Target language of a rendering pass."""

    JAVA = "java"
    KOTLIN = "kotlin"
