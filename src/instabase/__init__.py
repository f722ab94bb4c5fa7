"""D2 schema → SQLite DDL."""
from instabase.model import Column, Table
from instabase.parsers.d2 import parse_d2
from instabase.sql_writer import generate_sql

__all__ = ["Column", "Table", "parse_d2", "generate_sql"]
