"""String helpers for splitting delimited lines and converting offsets."""

__all__ = [
    "TAB",
    "COMMA",
    "QUOTATION_MARK",
    "split_with_field_enclosure",
    "delimit_and_trim",
    "starts_with_regex",
    "n_digits_pattern",
    "utf16_length",
    "code_point_to_char_offset",
    "char_to_code_point_offset",
]

import re

TAB = r"\t"
COMMA = ","
QUOTATION_MARK = '"'

# Enclosed fields are masked with this character before splitting so the
# delimiter pattern must not be able to match it.
_PLACEHOLDER = "0"


def split_with_field_enclosure(
    text: str,
    delimiter_regex: str,
    enclosure_regex: str | None = None,
    strip_enclosures: bool = False,
) -> list[str]:
    """Split `text` on a delimiter, ignoring delimiters inside enclosed fields.

    Every span matching `enclosure ... enclosure` is replaced with a run of
    placeholder characters of the same length, split points are then located
    in the masked copy and the tokens are cut from the original text. Empty
    trailing fields are kept.

    Parameters
    ----------
    text : str
        The line to split.
    delimiter_regex : str
        Regular expression matching the column delimiter.
    enclosure_regex : str, optional
        Regular expression matching the field enclosure, e.g. '"'. If None, or
        if the enclosure does not occur in `text`, this is a plain regex split.
    strip_enclosures : bool, default False
        Remove a leading and trailing enclosure from tokens that have both.

    Returns
    -------
    tokens : list[str]

    Examples
    --------
    >>> split_with_field_enclosure('a,"b,c",d', ",", '"')
    ['a', '"b,c"', 'd']

    """
    if enclosure_regex is None or re.search(enclosure_regex, text) is None:
        return re.split(delimiter_regex, text)

    masked = _mask_enclosed_fields(text, delimiter_regex, enclosure_regex)
    tokens = []
    previous_end = 0
    for match in re.finditer(delimiter_regex, masked):
        tokens.append(text[previous_end : match.start()])
        previous_end = match.end()
    tokens.append(text[previous_end:])

    if strip_enclosures:
        enclosed = re.compile(f"^{enclosure_regex}(.*){enclosure_regex}$", re.S)
        tokens = [
            m.group(1) if (m := enclosed.match(token)) else token
            for token in tokens
        ]

    return tokens


def _mask_enclosed_fields(
    text: str, delimiter_regex: str, enclosure_regex: str
) -> str:
    if _PLACEHOLDER in delimiter_regex:
        raise ValueError(
            f'The delimiter "{delimiter_regex}" contains the character'
            f' "{_PLACEHOLDER}" which is used to mask enclosed fields while'
            " splitting. Use a different delimiter."
        )

    field = re.compile(f"{enclosure_regex}.*?{enclosure_regex}")
    return field.sub(lambda m: _PLACEHOLDER * len(m.group()), text)


def delimit_and_trim(
    text: str,
    delimiter_regex: str,
    enclosure_regex: str | None = None,
    strip_enclosures: bool = False,
) -> list[str]:
    """Split like `split_with_field_enclosure` keeping only non-blank tokens.

    Tokens are stripped of surrounding whitespace.
    """
    tokens = split_with_field_enclosure(
        text, delimiter_regex, enclosure_regex, strip_enclosures
    )
    return [token.strip() for token in tokens if token.strip()]


def starts_with_regex(text: str, regex: str) -> bool:
    return re.match(regex, text) is not None


def n_digits_pattern(n: int) -> str:
    """Pattern matching exactly `n` digits."""
    return rf"\d{{{n}}}"


def utf16_length(text: str) -> int:
    """Number of UTF-16 code units needed to represent `text`.

    Characters outside the basic multilingual plane take two code units
    (a surrogate pair), everything else takes one.
    """
    return len(text) + sum(1 for char in text if ord(char) > 0xFFFF)


def code_point_to_char_offset(text: str, code_point_offset: int) -> int:
    """Convert an offset counted in code points to UTF-16 code units."""
    return utf16_length(text[:code_point_offset])


def char_to_code_point_offset(text: str, char_offset: int) -> int:
    """Convert an offset counted in UTF-16 code units to code points.

    Raises `ValueError` if the offset falls between the two halves of a
    surrogate pair.
    """
    units = 0
    for code_points, char in enumerate(text):
        if units == char_offset:
            return code_points
        if units > char_offset:
            break
        units += 2 if ord(char) > 0xFFFF else 1

    if units == char_offset:
        return len(text)

    raise ValueError(
        f"Character offset {char_offset} does not fall on a code point"
        " boundary."
    )
