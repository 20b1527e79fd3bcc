"""
Bencode decoding into typed value trees.
"""
import logging

from .config import DEFAULT_CONFIG, DecodeEvent, DecoderConfig
from .decoder import BencodeDecoder, decode, decode_one
from .errors import (
    BencodeDecodeError,
    ExpectedStringKey,
    MalformedInteger,
    MalformedString,
    NestingTooDeep,
    OutOfBounds,
    TrailingData,
    UnexpectedToken,
    UnterminatedAggregate,
)
from .structure import BencodeDict, BencodeInt, BencodeList, BencodeString, BencodeType

logging.getLogger(__name__).addHandler(logging.NullHandler())

__all__ = [
    'decode', 'decode_one', 'BencodeDecoder',
    'DecoderConfig', 'DecodeEvent', 'DEFAULT_CONFIG',
    'BencodeType', 'BencodeInt', 'BencodeString', 'BencodeList', 'BencodeDict',
    'BencodeDecodeError', 'UnexpectedToken', 'ExpectedStringKey', 'MalformedInteger',
    'MalformedString', 'UnterminatedAggregate', 'OutOfBounds', 'NestingTooDeep',
    'TrailingData',
]
