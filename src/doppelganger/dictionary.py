"""
Substitution dictionary for candidate generation.

Maps each character of a domain label to an ordered tuple of look-alike
replacement characters. The mapping is built once at startup and never
mutated afterwards.
"""

import json
from collections.abc import Mapping
from pathlib import Path
from types import MappingProxyType
from typing import Union

from .exceptions import ConfigurationError


Dictionary = Mapping[str, tuple[str, ...]]


# Order matters: generation walks substitutes left to right, so the most
# convincing look-alikes (Cyrillic and Greek confusables) come first,
# followed by Latin letters with diacritics and plain ASCII typos.
_DEFAULT_SUBSTITUTES: dict[str, tuple[str, ...]] = {
    "a": ("а", "ɑ", "à", "á", "â", "ã", "ä", "å", "ą"),
    "b": ("ь", "ḃ", "ḅ", "ƅ", "d"),
    "c": ("с", "ç", "ć", "ċ", "č", "e"),
    "d": ("ԁ", "ď", "ḍ", "ḋ", "đ", "b"),
    "e": ("е", "è", "é", "ê", "ë", "ē", "ė", "ę", "c"),
    "f": ("ḟ", "ƒ"),
    "g": ("ԍ", "ġ", "ğ", "ǵ", "ɡ", "q"),
    "h": ("һ", "ĥ", "ḣ", "ḥ", "ħ"),
    "i": ("і", "ı", "í", "ì", "î", "ï", "1", "l"),
    "j": ("ј", "ĵ", "ǰ"),
    "k": ("к", "ķ", "ḳ", "ǩ"),
    "l": ("ӏ", "ĺ", "ļ", "ľ", "ł", "1", "i"),
    "m": ("м", "ṁ", "ḿ", "ṃ", "n"),
    "n": ("ń", "ñ", "ņ", "ň", "ṅ", "m", "r"),
    "o": ("о", "ο", "ö", "ó", "ò", "ô", "õ", "ø", "0"),
    "p": ("р", "ρ", "ṗ", "ṕ"),
    "q": ("ԛ", "g"),
    "r": ("ŕ", "ř", "ŗ", "ṙ"),
    "s": ("ѕ", "ś", "š", "ş", "ṡ"),
    "t": ("т", "ţ", "ť", "ṫ", "ṭ"),
    "u": ("υ", "ú", "ù", "û", "ü", "ū", "ů", "v"),
    "v": ("ѵ", "ν", "ṽ", "u"),
    "w": ("ԝ", "ŵ", "ẁ", "ẃ", "ẅ"),
    "x": ("х", "ẋ", "ẍ"),
    "y": ("у", "ý", "ÿ", "ŷ", "ẏ"),
    "z": ("ź", "ż", "ž", "ẓ"),
    "0": ("o",),
    "1": ("l", "i"),
    "3": ("8",),
    "6": ("9",),
    "8": ("3",),
    "9": ("6",),
}


def build_dictionary(mapping: Mapping[str, Union[list[str], tuple[str, ...]]]) -> Dictionary:
    """
    Build an immutable substitution dictionary.

    Args:
        mapping: Character to substitutes mapping; substitute order is kept

    Returns:
        Read-only mapping of character to tuple of substitutes

    Raises:
        ConfigurationError: If a key or substitute is not a single character,
            or a substitute equals its key
    """
    built: dict[str, tuple[str, ...]] = {}
    for char, substitutes in mapping.items():
        if not isinstance(char, str) or len(char) != 1:
            raise ConfigurationError(
                code="invalid_dictionary",
                message=f"Dictionary keys must be single characters, got {char!r}",
                details={"key": char},
            )
        if isinstance(substitutes, str) or not isinstance(substitutes, (list, tuple)):
            raise ConfigurationError(
                code="invalid_dictionary",
                message=f"Substitutes for {char!r} must be a list of characters",
                details={"key": char, "substitutes": substitutes},
            )
        for sub in substitutes:
            if not isinstance(sub, str) or len(sub) != 1 or sub == char:
                raise ConfigurationError(
                    code="invalid_dictionary",
                    message=f"Invalid substitute {sub!r} for {char!r}",
                    details={"key": char, "substitute": sub},
                )
        built[char] = tuple(substitutes)
    return MappingProxyType(built)


def load_dictionary(path: Path) -> Dictionary:
    """
    Load a substitution dictionary from a JSON file.

    The file holds an object mapping characters to lists of substitutes,
    e.g. ``{"e": ["3"], "o": ["0"]}``.

    Raises:
        ConfigurationError: If the file cannot be read or is malformed
    """
    try:
        with open(path, "r", encoding="utf-8") as f:
            data = json.load(f)
    except OSError as e:
        raise ConfigurationError(
            code="dictionary_unreadable",
            message=f"Could not read dictionary {path}: {e}",
            details={"path": str(path)},
        )
    except json.JSONDecodeError as e:
        raise ConfigurationError(
            code="invalid_dictionary",
            message=f"Dictionary {path} is not valid JSON: {e}",
            details={"path": str(path)},
        )

    if not isinstance(data, dict):
        raise ConfigurationError(
            code="invalid_dictionary",
            message=f"Dictionary {path} must contain a JSON object",
            details={"path": str(path)},
        )
    return build_dictionary(data)


DEFAULT_DICTIONARY: Dictionary = build_dictionary(_DEFAULT_SUBSTITUTES)
