"""ISBN-10 / ISBN-13 checksum validation

Pure functions, no I/O. Hyphens and spaces are ignored, so every
representation of the same ISBN validates identically.
"""


def normalize_isbn(raw: str) -> str:
    """Strip hyphens and spaces and uppercase the result.

    Example:
        >>> normalize_isbn("0-306-40615-2")
        '0306406152'
        >>> normalize_isbn("0 8044 2957 x")
        '080442957X'
    """
    return raw.replace("-", "").replace(" ", "").upper()


def isbn10_check_char(first_nine: str) -> str:
    """Compute the ISBN-10 check character for nine leading digits.

    Weighted sum (i + 1) * digit[i] mod 11; a checksum of 10 is written 'X'.
    """
    total = sum((i + 1) * int(ch) for i, ch in enumerate(first_nine))
    checksum = total % 11
    return "X" if checksum == 10 else str(checksum)


def isbn13_check_digit(first_twelve: str) -> str:
    """Compute the ISBN-13 check digit for twelve leading digits.

    Digits are weighted 1, 3, 1, 3, ... and the check digit brings the
    total to a multiple of 10.
    """
    total = sum(int(ch) * (1 if i % 2 == 0 else 3) for i, ch in enumerate(first_twelve))
    return str((10 - total % 10) % 10)


def _is_ascii_digits(value: str) -> bool:
    # str.isdigit() also accepts superscripts and other unicode digits
    return value.isascii() and value.isdigit()


def is_valid_isbn10(clean: str) -> bool:
    """Validate an already normalised ISBN-10"""
    if len(clean) != 10 or not _is_ascii_digits(clean[:9]):
        return False
    return clean[9] == isbn10_check_char(clean[:9])


def is_valid_isbn13(clean: str) -> bool:
    """Validate an already normalised ISBN-13"""
    if len(clean) != 13 or not _is_ascii_digits(clean):
        return False
    return clean[12] == isbn13_check_digit(clean[:12])


def is_valid_isbn(raw: str) -> bool:
    """Validate an ISBN-10 or ISBN-13 in any hyphen/space representation.

    Example:
        >>> is_valid_isbn("0-306-40615-2")
        True
        >>> is_valid_isbn("9780306406158")
        False
    """
    clean = normalize_isbn(raw)
    if len(clean) == 10:
        return is_valid_isbn10(clean)
    if len(clean) == 13:
        return is_valid_isbn13(clean)
    return False
