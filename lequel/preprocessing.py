"""
Line preprocessing: carriage-return stripping and Unicode decoding.
"""
from typing import Iterable, List, Union

from .errors import DecodeError

Line = Union[str, bytes, bytearray]


class LinePreprocessor:
    """Turns raw lines (str or UTF-8 bytes) into clean Unicode strings."""

    def __init__(self, encoding: str = 'utf-8'):
        self.encoding = encoding

    @staticmethod
    def strip_carriage_return(line: Line) -> Line:
        """Drop exactly one trailing carriage return, leaving other whitespace alone."""
        if isinstance(line, (bytes, bytearray)):
            return line[:-1] if line.endswith(b'\r') else line
        return line[:-1] if line.endswith('\r') else line

    def decode_line(self, line: Line, line_number: int = 0) -> str:
        """Decode a line into code points, raising DecodeError on invalid input."""
        if isinstance(line, (bytes, bytearray)):
            try:
                return bytes(line).decode(self.encoding)
            except UnicodeDecodeError as e:
                raise DecodeError(
                    f"Line {line_number}: invalid {self.encoding} byte sequence at offset {e.start}",
                    line_number=line_number,
                    position=e.start,
                ) from e

        if not isinstance(line, str):
            raise DecodeError(
                f"Line {line_number}: expected str or bytes, got {type(line).__name__}",
                line_number=line_number,
            )

        # Lone surrogates can live in a str but are not valid Unicode text
        try:
            line.encode(self.encoding)
        except UnicodeEncodeError as e:
            raise DecodeError(
                f"Line {line_number}: invalid code point at index {e.start}",
                line_number=line_number,
                position=e.start,
            ) from e

        return line

    def preprocess(self, text: Iterable[Line]) -> List[str]:
        """Main preprocessing pipeline, keeping document order."""
        if isinstance(text, (str, bytes, bytearray)):
            raise TypeError("Text must be a sequence of lines, not a single str or bytes")

        lines = []
        for line_number, line in enumerate(text):
            line = self.strip_carriage_return(line)
            lines.append(self.decode_line(line, line_number))

        return lines
