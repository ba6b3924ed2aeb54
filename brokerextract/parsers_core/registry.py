import logging
from typing import Dict, List, Optional, Sequence, Type

from .base import BaseParser

logger = logging.getLogger(__name__)


class ParserRegistry:
    _parsers: Dict[str, Type[BaseParser]] = {}

    @classmethod
    def register_parser(cls, name: str, parser_cls: Type[BaseParser]):
        logger.debug(f"Registering parser: {name} -> {parser_cls}")
        cls._parsers[name] = parser_cls

    @classmethod
    def get_parser(cls, name: str) -> Optional[Type[BaseParser]]:
        return cls._parsers.get(name)

    @classmethod
    def list_parsers(cls) -> List[str]:
        return list(cls._parsers.keys())

    @classmethod
    def get_all_parsers(cls) -> Dict[str, Type[BaseParser]]:
        return dict(cls._parsers)

    @classmethod
    def detect_parser_for_lines(cls, lines: Sequence[str]) -> Optional[str]:
        """
        Returns the name of the first parser whose can_parse returns True for the page text.
        Returns None if no parser matches.
        """
        for parser_name, parser_cls in cls._parsers.items():
            if parser_cls().can_parse(lines):
                return parser_name
        return None
