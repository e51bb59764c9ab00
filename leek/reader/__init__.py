from leek.reader.parser import Parser, parse
from leek.reader.scanner import Scanner, KEYWORDS

__all__ = ["Parser", "parse", "Scanner", "KEYWORDS"]
