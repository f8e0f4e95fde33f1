import argparse
import logging
import sys
import datetime
from pathlib import Path
from typing import Dict, Any, List, Optional

from ticketgen.config import ConfigLoader
from ticketgen.exceptions import TicketGenError
from ticketgen.generation import TicketOverviewGenerator, WordGenerator
from ticketgen.models import Block, Ticket
from ticketgen.parsing import parse_document
from ticketgen.selection import TicketSampler

def setup_logging(config: Dict[str, Any], output_dir: Path = None) -> None:
    """Set up logging based on configuration.

    Args:
        config: Configuration dictionary with logging settings
        output_dir: Optional output directory for log file
    """
    log_config = config.get('logging', {})
    log_level = log_config.get('level', 'INFO')
    log_file = log_config.get('file')

    numeric_level = getattr(logging, log_level.upper(), None)
    if not isinstance(numeric_level, int):
        raise ValueError(f'Invalid log level: {log_level}')

    log_format = '%(asctime)s - %(name)s - %(levelname)s - %(message)s'

    if log_file:
        # If output_dir is provided, redirect log file there
        if output_dir:
            log_file_path = output_dir / Path(log_file).name
        else:
            log_file_path = log_file

        logging.basicConfig(
            level=numeric_level,
            format=log_format,
            filename=log_file_path,
            filemode='a',
            encoding='utf-8'
        )
        # Also log to console
        console = logging.StreamHandler()
        console.setLevel(numeric_level)
        console.setFormatter(logging.Formatter(log_format))
        logging.getLogger('').addHandler(console)
    else:
        logging.basicConfig(
            level=numeric_level,
            format=log_format
        )

def apply_overrides(config: Dict[str, Any], args: argparse.Namespace) -> Dict[str, Any]:
    """Apply command line overrides to the loaded configuration.

    Args:
        config: Configuration dictionary (modified in place)
        args: Parsed command line arguments

    Returns:
        The updated configuration
    """
    if args.input is not None:
        config['io']['input_path'] = str(args.input)
    if args.output_dir is not None:
        config['io']['output_dir'] = str(args.output_dir)
    if args.count is not None:
        config['tickets']['count'] = args.count
    if args.strict:
        config['tickets']['strict_no_repeat'] = True
    if args.seed is not None:
        config['selection']['seed'] = args.seed
    return config

def log_blocks(blocks: List[Block]) -> None:
    for block in blocks:
        logging.info(f"Block '{block.name}': {len(block.questions)} questions")

def generate_tickets(config: Dict[str, Any], blocks: List[Block]) -> List[Ticket]:
    """Generate tickets based on configuration settings.

    Args:
        config: Configuration dictionary
        blocks: Parsed blocks

    Returns:
        List of generated tickets
    """
    ticket_config = config.get('tickets', {})
    count = ticket_config.get('count', 20)
    strict_no_repeat = ticket_config.get('strict_no_repeat', False)
    seed = config.get('selection', {}).get('seed')

    logging.info(f"Generating {count} tickets (strict no-repeat: {strict_no_repeat})")

    sampler = TicketSampler(seed=seed)
    return sampler.generate(blocks, count, strict_no_repeat=strict_no_repeat)

def main(config_path: Path, args: Optional[argparse.Namespace] = None) -> int:
    """Main function to generate exam tickets based on configuration.

    Args:
        config_path: Path to configuration file
        args: Optional command line overrides

    Returns:
        Process exit code
    """
    # Load configuration
    config_loader = ConfigLoader()
    config = config_loader.load_config(config_path)
    if args is not None:
        config = apply_overrides(config, args)
        config_loader.validate_config(config)

    # Create output directory, timestamped unless disabled
    timestamp = datetime.datetime.now().strftime("%Y%m%d_%H%M%S")
    output_dir = Path(config['io'].get('output_dir', 'output'))
    if config['io'].get('timestamp_output', True):
        output_dir = output_dir / f"tickets_{timestamp}"
    output_dir.mkdir(parents=True, exist_ok=True)

    config['io']['output_dir'] = str(output_dir)

    # Set up logging to write to the new output directory
    setup_logging(config, output_dir)

    logging.info(f"Starting ticket generation with config: {config_path}")
    logging.info(f"Created output directory: {output_dir}")

    try:
        input_path = Path(config['io']['input_path'])
        document = parse_document(input_path)

        for warning in document.warnings:
            print(f"Warning: {warning}", file=sys.stderr)

        if not document.blocks:
            logging.error(f"No blocks found in {input_path}. Block headers must look like 'I BLOK', 'II BLOK', ...")
            return 1

        log_blocks(document.blocks)

        tickets = generate_tickets(config, document.blocks)

        template_path = config['document'].get('template_path')
        generator = WordGenerator(
            template_path=Path(template_path) if template_path else None,
            output_dir=output_dir
        )
        document_path = generator.generate_tickets(tickets, config)

        overview_path = None
        if config.get('overview', {}).get('enabled', True):
            overview_generator = TicketOverviewGenerator(output_dir=output_dir)
            overview_path = overview_generator.generate_overview(document.blocks, tickets, config)

        # Save a copy of the config used
        config_output_path = output_dir / f"config_{timestamp}.yaml"
        config_loader.save_config(config, config_output_path)

        logging.info("Ticket generation completed successfully")
        logging.info(f"All outputs saved to: {output_dir}")
        logging.info(f"Tickets: {document_path}")
        if overview_path:
            logging.info(f"Overview: {overview_path}")
        logging.info(f"Configuration: {config_output_path}")

    except TicketGenError as e:
        logging.error(f"Error generating tickets: {e}")
        return 1
    except Exception as e:
        logging.error(f"Error generating tickets: {e}", exc_info=True)
        return 1

    return 0

def build_arg_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Generate exam tickets from a .docx question bank")
    parser.add_argument('config', type=Path, help="Path to configuration file (YAML or JSON)")
    parser.add_argument('--input', type=Path, help="Path to the .docx question bank")
    parser.add_argument('--count', type=int, help="Number of tickets to generate")
    parser.add_argument('--strict', action='store_true', help="Do not repeat questions across tickets")
    parser.add_argument('--output-dir', type=Path, help="Base output directory")
    parser.add_argument('--seed', type=int, help="Random seed for reproducible tickets")
    return parser

def cli() -> None:
    args = build_arg_parser().parse_args()
    sys.exit(main(args.config, args))

if __name__ == "__main__":
    cli()
