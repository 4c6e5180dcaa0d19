from typing import NamedTuple

MAX_UINT32 = 2**32 - 1


class UIntResult(NamedTuple):
    value: int
    defaulted: bool


class SizeResult(NamedTuple):
    value: tuple[int, int]
    defaulted: bool


class CropResult(NamedTuple):
    value: tuple[int, int, int, int]
    defaulted: bool


def parse_uint(token: str) -> UIntResult:
    """
    Parse an unsigned 32-bit integer.
    Only ASCII digits with an optional leading '+' are accepted; anything
    else, including surrounding whitespace, falls back to 0.
    """
    digits = token[1:] if token.startswith("+") else token
    if not digits or not (digits.isascii() and digits.isdigit()):
        return UIntResult(0, True)
    value = int(digits)
    if value > MAX_UINT32:
        return UIntResult(0, True)
    return UIntResult(value, False)


def parse_size_result(s: str) -> SizeResult:
    """
    Parse a size like ``800x600`` into ``(width, height)``.
    Missing or unparsable parts become 0 and mark the result as defaulted.
    """
    tokens = s.strip().lower().split("x")
    width = parse_uint(tokens[0])
    height = parse_uint(tokens[1]) if len(tokens) > 1 else UIntResult(0, True)
    return SizeResult(
        (width.value, height.value), width.defaulted or height.defaulted
    )


def parse_crop_result(s: str) -> CropResult:
    """
    Parse a crop like ``10p20p800x600`` into ``(x, y, width, height)``.
    """
    tokens = s.strip().split("p")
    x = parse_uint(tokens[0])
    y = parse_uint(tokens[1]) if len(tokens) > 1 else UIntResult(0, True)
    size = parse_size_result(tokens[2]) if len(tokens) > 2 else SizeResult((0, 0), True)
    width, height = size.value
    return CropResult(
        (x.value, y.value, width, height),
        x.defaulted or y.defaulted or size.defaulted,
    )


def parse_size(s: str) -> tuple[int, int]:
    return parse_size_result(s).value


def parse_crop(s: str) -> tuple[int, int, int, int]:
    return parse_crop_result(s).value
