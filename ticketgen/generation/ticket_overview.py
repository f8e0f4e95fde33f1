import pandas as pd
import logging
from openpyxl import load_workbook
from openpyxl.styles import Font, Alignment, PatternFill
from pathlib import Path
from typing import List, Dict, Any

from ticketgen.models import Block, Ticket

logger = logging.getLogger(__name__)

MAX_QUESTION_LENGTH = 80

class TicketOverviewGenerator:
    """Generates an Excel overview of which question went on which ticket."""

    def __init__(self, output_dir: Path = Path("output")):
        """Initialize overview generator.

        Args:
            output_dir: Directory to save the overview workbook
        """
        self.output_dir = Path(output_dir)

        # Create output directory if it doesn't exist
        if not self.output_dir.exists():
            self.output_dir.mkdir(parents=True)
            logger.info(f"Created output directory: {self.output_dir}")

    @staticmethod
    def _short_text(text: str) -> str:
        if len(text) > MAX_QUESTION_LENGTH:
            return text[:MAX_QUESTION_LENGTH] + "..."
        return text

    def build_frames(self, blocks: List[Block], tickets: List[Ticket]):
        """Build the ticket and block summary tables.

        Args:
            blocks: Parsed blocks
            tickets: Generated tickets

        Returns:
            Tuple of (tickets DataFrame, blocks DataFrame)
        """
        ticket_rows = []
        for ticket in tickets:
            for position, ticket_question in enumerate(ticket.questions, 1):
                question = ticket_question.question
                ticket_rows.append({
                    'Ticket #': ticket.number,
                    'Question #': position,
                    'Block': ticket_question.block_name,
                    'Question Text': self._short_text(question.text),
                    'Images': len(question.images)
                })

        tickets_df = pd.DataFrame(
            ticket_rows,
            columns=['Ticket #', 'Question #', 'Block', 'Question Text', 'Images']
        )

        # Blocks may share a name, so usage is counted by position on the ticket
        block_rows = []
        for position, block in enumerate(blocks):
            used = [ticket.questions[position].question for ticket in tickets
                    if position < len(ticket.questions)]
            block_rows.append({
                'Block': block.name,
                'Questions': len(block.questions),
                'Times Used': len(used),
                'Distinct Used': len({id(question) for question in used})
            })

        blocks_df = pd.DataFrame(
            block_rows,
            columns=['Block', 'Questions', 'Times Used', 'Distinct Used']
        )

        return tickets_df, blocks_df

    def generate_overview(self,
                          blocks: List[Block],
                          tickets: List[Ticket],
                          config: Dict[str, Any]) -> Path:
        """Write the overview workbook.

        Args:
            blocks: Parsed blocks
            tickets: Generated tickets
            config: Configuration dictionary

        Returns:
            Path to the generated workbook
        """
        tickets_df, blocks_df = self.build_frames(blocks, tickets)

        filename = config.get("overview", {}).get("filename", "ticket_overview.xlsx")
        output_path = self.output_dir / filename

        with pd.ExcelWriter(output_path, engine='openpyxl') as writer:
            tickets_df.to_excel(writer, sheet_name='Tickets', index=False)
            blocks_df.to_excel(writer, sheet_name='Blocks', index=False)

        # Format the workbook with openpyxl directly
        wb = load_workbook(output_path)

        header_font = Font(bold=True)
        header_fill = PatternFill(start_color="D9D9D9", end_color="D9D9D9", fill_type="solid")

        column_widths = {
            'Tickets': {'A': 10, 'B': 12, 'C': 20, 'D': 60, 'E': 10},
            'Blocks': {'A': 30, 'B': 12, 'C': 12, 'D': 14}
        }

        for sheet_name, widths in column_widths.items():
            ws = wb[sheet_name]
            for cell in ws[1]:
                cell.font = header_font
                cell.fill = header_fill
                cell.alignment = Alignment(horizontal='center')
            for column, width in widths.items():
                ws.column_dimensions[column].width = width

        wb.save(output_path)

        logger.info(f"Generated ticket overview: {output_path}")

        return output_path
