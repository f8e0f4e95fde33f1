from docx import Document
from docx.enum.style import WD_STYLE_TYPE
from docx.enum.table import WD_TABLE_ALIGNMENT
from docx.enum.text import WD_ALIGN_PARAGRAPH
from docx.image.image import Image
from docx.oxml import OxmlElement
from docx.oxml.ns import qn
from docx.shared import Emu, Pt
from io import BytesIO
from pathlib import Path
from typing import List, Dict, Optional, Any, Sequence, Tuple
import logging

from ticketgen.images.scaling import fit_image_size
from ticketgen.models import QuestionImage, Ticket

logger = logging.getLogger(__name__)

# 96 dpi
EMU_PER_PIXEL = 9525

BLANK_SHORT = "____________"
BLANK_LONG = "________________"

class WordGenerator:
    """Generates a Word document with one page per exam ticket."""

    def __init__(self,
                template_path: Optional[Path] = None,
                output_dir: Path = Path("output")):
        """Initialize Word document generator.

        Args:
            template_path: Path to Word document template
            output_dir: Directory for output files
        """
        self.template_path = template_path
        self.output_dir = Path(output_dir)
        self.doc_config = {}

        # Create output directory if it doesn't exist
        if not self.output_dir.exists():
            self.output_dir.mkdir(parents=True)
            logger.info(f"Created output directory: {self.output_dir}")

    def _create_document(self) -> Document:
        """Create a new Word document from template or blank.

        Returns:
            Document object
        """
        if self.template_path and Path(self.template_path).exists():
            try:
                doc = Document(self.template_path)
                logger.info(f"Created document from template: {self.template_path}")
                return doc
            except Exception as e:
                logger.error(f"Error loading template: {e}")
                logger.info("Falling back to blank document")

        return Document()

    def _apply_document_styles(self, doc: Document, format_config: Dict[str, Any]) -> None:
        """Set the base font and the styles used on tickets.

        Args:
            doc: Document object
            format_config: Formatting options (font, font_size)
        """
        font_name = format_config.get("font", "Times New Roman")
        font_size = format_config.get("font_size", 12)

        styles = doc.styles

        style_normal = styles['Normal']
        style_normal.font.name = font_name
        style_normal.font.size = Pt(font_size)

        if 'TicketTitle' not in styles:
            title_style = styles.add_style('TicketTitle', WD_STYLE_TYPE.PARAGRAPH)
            title_style.base_style = styles['Normal']
            title_style.font.bold = True
            title_style.font.size = Pt(font_size + 2)
            title_style.paragraph_format.alignment = WD_ALIGN_PARAGRAPH.CENTER

        if 'TicketQuestion' not in styles:
            question_style = styles.add_style('TicketQuestion', WD_STYLE_TYPE.PARAGRAPH)
            question_style.base_style = styles['Normal']
            question_style.paragraph_format.space_after = Pt(6)

    def _remove_table_borders(self, table) -> None:
        """Hide all borders of a table.

        Args:
            table: python-docx Table
        """
        tbl_pr = table._tbl.tblPr
        borders = OxmlElement('w:tblBorders')
        for edge in ('top', 'left', 'bottom', 'right', 'insideH', 'insideV'):
            element = OxmlElement(f'w:{edge}')
            element.set(qn('w:val'), 'nil')
            borders.append(element)

        # tblBorders must precede these elements in tblPr
        for successor in ('w:shd', 'w:tblLayout', 'w:tblCellMar', 'w:tblLook'):
            existing = tbl_pr.find(qn(successor))
            if existing is not None:
                existing.addprevious(borders)
                return
        tbl_pr.append(borders)

    def _add_label_line(self, paragraph, label: str, value: Optional[str], blank: str = BLANK_SHORT) -> None:
        """Write "label: value" with the value in bold, or a blank line if empty."""
        paragraph.add_run(f"{label}: ")
        value = (value or "").strip()
        paragraph.add_run(value if value else blank).bold = True

    def _add_two_column_table(self, doc: Document, rows: Sequence[Tuple[Tuple[str, str], Tuple[str, str]]],
                              blank: str = BLANK_SHORT) -> None:
        """Add a borderless table of label/value pairs, two per row."""
        table = doc.add_table(rows=len(rows), cols=2)
        table.alignment = WD_TABLE_ALIGNMENT.CENTER
        self._remove_table_borders(table)

        for row, pairs in zip(table.rows, rows):
            for cell, (label, value) in zip(row.cells, pairs):
                self._add_label_line(cell.paragraphs[0], label, value, blank)

    def _add_ticket_header(self, doc: Document, ticket: Ticket, header: Dict[str, Any]) -> None:
        """Add university name, course details and ticket number.

        Args:
            doc: Document object
            ticket: Ticket being written
            header: Header fields from configuration
        """
        university = (header.get("university") or "").strip() or "Universitet"
        doc.add_paragraph(university, style='TicketTitle')
        doc.add_paragraph()

        self._add_two_column_table(doc, [
            (("Fənin adı", header.get("subject")), ("Fakültə", header.get("faculty"))),
            (("Fənn Müəllimi", header.get("teacher")), ("Qrup", header.get("group"))),
        ])
        doc.add_paragraph()

        number_para = doc.add_paragraph(style='TicketTitle')
        number_para.add_run(f"BİLET № {ticket.number}")
        doc.add_paragraph()

    def _add_image(self, doc: Document, image: QuestionImage) -> None:
        """Add an image in its own paragraph, scaled to fit the page.

        Args:
            doc: Document object
            image: Image to place
        """
        width, height = fit_image_size(
            image.width,
            image.height,
            max_width=self.doc_config.get("max_image_width", 520),
            max_height=self.doc_config.get("max_image_height"),
            default_size=(
                self.doc_config.get("fallback_image_width", 420),
                self.doc_config.get("fallback_image_height", 260),
            ),
        )

        try:
            Image.from_blob(image.data)
        except Exception as e:
            logger.warning(f"Skipping {image.content_type} image that Word cannot embed: {e}")
            return

        run = doc.add_paragraph().add_run()
        run.add_picture(BytesIO(image.data),
                        width=Emu(width * EMU_PER_PIXEL),
                        height=Emu(height * EMU_PER_PIXEL))

    def _add_questions(self, doc: Document, ticket: Ticket) -> None:
        for index, ticket_question in enumerate(ticket.questions, 1):
            question = ticket_question.question

            question_para = doc.add_paragraph(style='TicketQuestion')
            question_para.add_run(f"{index}. ").bold = True
            question_para.add_run(question.text or "")

            for image in question.images:
                self._add_image(doc, image)

            doc.add_paragraph()

    def _add_ticket_footer(self, doc: Document, header: Dict[str, Any]) -> None:
        """Add the approval statement and signature lines."""
        exam_date = (header.get("exam_date") or "").strip()
        department = (header.get("department") or "").strip()

        doc.add_paragraph()
        statement = doc.add_paragraph()
        statement.add_run("İmtahan bileti ")
        statement.add_run(exam_date or BLANK_SHORT).bold = True
        statement.add_run(" tarixində ")
        statement.add_run(department or BLANK_SHORT).bold = True
        statement.add_run(
            " kafedrası tərəfindən təqdim edilən müvafiq fənn üzrə imtahan "
            "sualları bloku əsasında hazırlanmışdır"
        )
        doc.add_paragraph()

        self._add_two_column_table(doc, [
            (("Kafedra müdiri", header.get("head_of_department")), ("Tərtib etdi", header.get("author"))),
        ], blank=BLANK_LONG)

    def build_document(self, tickets: List[Ticket], config: Dict[str, Any]) -> Document:
        """Render tickets into a Word document without saving it.

        Args:
            tickets: Generated tickets
            config: Configuration dictionary

        Returns:
            Document object
        """
        if not tickets:
            raise ValueError("No tickets to write")

        self.doc_config = config.get("document", {})
        header = config.get("header", {})

        doc = self._create_document()
        self._apply_document_styles(doc, self.doc_config.get("format", {}))

        for position, ticket in enumerate(tickets):
            if position > 0:
                doc.add_page_break()
            self._add_ticket_header(doc, ticket, header)
            self._add_questions(doc, ticket)
            self._add_ticket_footer(doc, header)

        return doc

    def generate_tickets(self, tickets: List[Ticket], config: Dict[str, Any]) -> Path:
        """Write all tickets to a single Word document.

        Args:
            tickets: Generated tickets
            config: Configuration dictionary

        Returns:
            Path to the generated document
        """
        doc = self.build_document(tickets, config)

        filename = self.doc_config.get("filename", "biletler.docx")
        output_path = self.output_dir / filename
        doc.save(output_path)
        logger.info(f"Generated ticket document with {len(tickets)} tickets: {output_path}")

        return output_path
