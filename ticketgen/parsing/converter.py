import logging
from dataclasses import dataclass, field
from io import BytesIO
from pathlib import Path
from typing import List, Union

import mammoth
from bs4 import BeautifulSoup

from ticketgen.exceptions import DocumentConversionError
from ticketgen.models import Block
from ticketgen.parsing.structure_parser import StructureParser

logger = logging.getLogger(__name__)

TABLE_WARNING = (
    "The document contains tables. Paste them into Word as images so they "
    "can be placed on tickets."
)
MATH_WARNING = (
    "The document contains equations. Paste them into Word as images so they "
    "can be placed on tickets."
)


@dataclass
class ParsedDocument:
    html: str
    blocks: List[Block] = field(default_factory=list)
    warnings: List[str] = field(default_factory=list)


def convert_docx_to_html(source: Union[str, Path, bytes]) -> str:
    """Convert a .docx document to HTML with mammoth.

    Images are embedded in the output as base64 data URIs.

    Args:
        source: Path to the document or its raw bytes

    Returns:
        HTML markup produced by the converter
    """
    try:
        if isinstance(source, (bytes, bytearray)):
            result = mammoth.convert_to_html(BytesIO(source))
        else:
            path = Path(source)
            if not path.exists():
                raise FileNotFoundError(f"Document not found: {path}")
            with open(path, 'rb') as f:
                result = mammoth.convert_to_html(f)
    except FileNotFoundError:
        raise
    except Exception as e:
        logger.error(f"Error converting document: {e}")
        raise DocumentConversionError(f"Could not read document: {e}") from e

    for message in result.messages:
        logger.warning(f"Converter {message.type}: {message.message}")

    return result.value


def load_document_tree(html: str) -> BeautifulSoup:
    return BeautifulSoup(html, 'html.parser')


def detect_structure_warnings(tree: BeautifulSoup) -> List[str]:
    """Report content that cannot be carried over to tickets as text.

    Tables and equations lose their layout when flattened to question text.
    """
    warnings = []
    if tree.find('table') is not None:
        warnings.append(TABLE_WARNING)
    if tree.find(['math', 'm:omath']) is not None:
        warnings.append(MATH_WARNING)
    return warnings


def parse_document(source: Union[str, Path, bytes]) -> ParsedDocument:
    """Convert a .docx document and split it into blocks of questions."""
    html = convert_docx_to_html(source)
    tree = load_document_tree(html)

    warnings = detect_structure_warnings(tree)
    for warning in warnings:
        logger.warning(warning)

    blocks = StructureParser().parse(tree)
    logger.info(f"Parsed {len(blocks)} blocks with "
                f"{sum(len(b.questions) for b in blocks)} questions")

    return ParsedDocument(html=html, blocks=blocks, warnings=warnings)
