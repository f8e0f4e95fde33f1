import dataclasses
import logging
import re
from typing import Iterator, List, Optional, Tuple, Union

from bs4 import BeautifulSoup, Comment, NavigableString, Tag

from ticketgen.images.payload import decode_image
from ticketgen.models import Block, Question, QuestionImage
from ticketgen.parsing.segmenter import split_numbered_questions

logger = logging.getLogger(__name__)


class StructureParser:
    """Split a converted document tree into blocks of questions.

    The parser walks the direct children of the document body. A child whose
    text starts with a Roman numeral I-V followed by "BLOK" opens a new block;
    everything after it, up to the next such header, contributes questions to
    that block. Content before the first header is ignored.
    """

    # Fixed header format: "I BLOK", "IIBLOK", "iv blok ..." etc.
    BLOCK_HEADER_PATTERN = re.compile(r'^(I|II|III|IV|V)\s*BLOK', re.IGNORECASE)
    LIST_TAGS = ('ol', 'ul')
    LIST_ITEM_TAG = 'li'

    # Inline size hints, e.g. style="width: 120px; height: 40px"
    STYLE_WIDTH_PATTERN = re.compile(r'(?<![-\w])width\s*:\s*(\d+)\s*px', re.IGNORECASE)
    STYLE_HEIGHT_PATTERN = re.compile(r'(?<![-\w])height\s*:\s*(\d+)\s*px', re.IGNORECASE)

    def is_block_header(self, text: str) -> bool:
        return bool(text) and bool(self.BLOCK_HEADER_PATTERN.match(text))

    def parse(self, tree: Union[BeautifulSoup, Tag]) -> List[Block]:
        """Parse a document tree into blocks.

        Args:
            tree: Parsed HTML document or fragment

        Returns:
            Blocks in order of appearance, each with at least one question
        """
        blocks: List[Block] = []
        current_block: Optional[Block] = None

        for element in self._body_elements(tree):
            text = self.element_text(element).strip()

            if self.is_block_header(text):
                current_block = Block(name=text)
                blocks.append(current_block)
                logger.debug(f"Found block header: {text}")
                continue

            if current_block is None:
                continue

            if element.name in self.LIST_TAGS:
                for item in element.find_all(self.LIST_ITEM_TAG, recursive=False):
                    self._add_list_item(current_block, item)
                continue

            self._add_element(current_block, element, text)

        non_empty = [block for block in blocks if block.questions]
        dropped = len(blocks) - len(non_empty)
        if dropped:
            logger.debug(f"Dropped {dropped} blocks without questions")

        return non_empty

    def _add_list_item(self, block: Block, item: Tag) -> None:
        text = self.element_text(item).strip()
        images = self.extract_images(item)

        if not text and not images:
            return

        if images:
            block.questions.append(Question(text=text, images=images))
        else:
            block.questions.extend(Question(text=part) for part in split_numbered_questions(text))

    def _add_element(self, block: Block, element: Tag, text: str) -> None:
        images = self.extract_images(element)

        if not text and not images:
            return

        if not text:
            # An image on its own paragraph belongs to the question above it
            if block.questions:
                block.questions[-1].images.extend(images)
            else:
                block.questions.append(Question(text="", images=images))
        elif images:
            block.questions.append(Question(text=text, images=images))
        else:
            block.questions.extend(Question(text=part) for part in split_numbered_questions(text))

    def extract_images(self, element: Tag) -> List[QuestionImage]:
        """Decode all embedded images in an element's subtree.

        Images whose ``src`` is not an embedded payload are skipped.
        """
        images = []
        candidates = [element] if element.name == 'img' else []
        candidates.extend(element.find_all('img'))

        for img in candidates:
            image = decode_image(img.get('src'))
            if image is None:
                logger.debug("Skipping image without embedded payload")
                continue

            if not image.has_dimensions:
                width, height = self.read_size_hint(img)
                if width and height:
                    image = dataclasses.replace(image, width=width, height=height)

            images.append(image)

        return images

    def read_size_hint(self, img: Tag) -> Tuple[Optional[int], Optional[int]]:
        """Read a display size from an img tag's width/height attributes or style."""
        style = img.get('style') or ''
        width = self._positive_int(img.get('width'))
        height = self._positive_int(img.get('height'))

        if width is None:
            match = self.STYLE_WIDTH_PATTERN.search(style)
            width = self._positive_int(match.group(1)) if match else None
        if height is None:
            match = self.STYLE_HEIGHT_PATTERN.search(style)
            height = self._positive_int(match.group(1)) if match else None

        return width, height

    @staticmethod
    def _positive_int(value) -> Optional[int]:
        try:
            number = int(float(value))
        except (TypeError, ValueError):
            return None
        return number if number > 0 else None

    @staticmethod
    def element_text(element: Tag) -> str:
        """Flattened text content of an element: its text nodes, concatenated."""
        return ''.join(
            str(node) for node in element.descendants
            if isinstance(node, NavigableString) and not isinstance(node, Comment)
        )

    @staticmethod
    def _body_elements(tree: Union[BeautifulSoup, Tag]) -> Iterator[Tag]:
        root = tree.body if tree.body is not None else tree
        for child in root.children:
            if isinstance(child, Tag):
                yield child


def parse_blocks(document: Union[str, BeautifulSoup, Tag]) -> List[Block]:
    """Parse HTML markup or an already parsed tree into blocks."""
    if isinstance(document, str):
        document = BeautifulSoup(document, 'html.parser')
    return StructureParser().parse(document)
