from typing import Union
from app.fetch.utils import resolve_location
from app.parsers.base import BaseParser
from app.parsers.fb38 import FB38Parser
from app.parsers.n58 import N58Parser
from app.schemas import Location

_PARSERS = {
    Location.FB38: FB38Parser(),
    Location.N58: N58Parser(),
}

def get_parser(location: Union[str, Location]) -> BaseParser:
    """Parser for a location key; raises ConfigurationError for unknown keys"""
    return _PARSERS[resolve_location(location)]
