from instabase.parsers.base import SchemaParser
from instabase.parsers.d2 import D2Parser, parse_d2

__all__ = ["SchemaParser", "D2Parser", "parse_d2"]
