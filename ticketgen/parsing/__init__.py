from .converter import (
    ParsedDocument,
    convert_docx_to_html,
    detect_structure_warnings,
    load_document_tree,
    parse_document
)
from .segmenter import split_numbered_questions
from .structure_parser import StructureParser, parse_blocks

__all__ = [
    'ParsedDocument',
    'convert_docx_to_html',
    'detect_structure_warnings',
    'load_document_tree',
    'parse_document',
    'split_numbered_questions',
    'StructureParser',
    'parse_blocks'
]
