"""Ingestion adapter: YAML game sheets to game records."""

from .yaml_codec import decode_game, dump, encode_game, parse, parse_file

__all__ = ["decode_game", "dump", "encode_game", "parse", "parse_file"]
