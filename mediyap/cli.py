#!/usr/bin/env python3
"""
MediYap CLI Interface
Decode medical terms from the command line or interactively
"""

import sys
import argparse
import logging
from typing import List, Optional, TextIO
from rich.console import Console
from rich.markup import escape
from rich.panel import Panel
from rich.table import Table

from .core.config import DecoderConfig, MediYapConfig, MATCH_ORDERS
from .core.decoder import DecodedTerm, MedicalDecoder
from .core.dictionary import MedicalDictionary, SECTION_NAMES

# Decoded result lines bypass rendering and are written to console.file as-is
console = Console(highlight=False, emoji=False, soft_wrap=True)
error_console = Console(stderr=True, highlight=False, emoji=False, soft_wrap=True)


class MediYapCLI:
    """Command-line interface for the MediYap decoder"""

    def __init__(self, config: Optional[MediYapConfig] = None):
        self.config = config or MediYapConfig()

        if self.config.dictionary_path:
            self.dictionary = MedicalDictionary.from_yaml_file(self.config.dictionary_path)
        else:
            self.dictionary = MedicalDictionary()

        self.decoder = MedicalDecoder(self.dictionary, self.config.decoder)

    def decode_terms(self, terms: List[str], explain: bool = False):
        """Decode each term and print "<term>: <decoded>" in argument order"""
        for term in terms:
            decoded = self.decoder.analyze(term)
            console.file.write(f"{term}: {decoded.to_text()}\n")
            if explain:
                self.show_breakdown(decoded)

    def show_breakdown(self, decoded: DecodedTerm):
        """Show the matched components of a term as a table"""
        if not decoded.recognized:
            return

        table = Table(title=f"🔬 {escape(decoded.term)}")
        table.add_column("Part", style="cyan")
        table.add_column("Text", style="green")
        table.add_column("Meaning", style="yellow")

        for component in decoded.components:
            table.add_row(
                component.kind,
                escape(component.text),
                escape(component.meaning) if component.recognized else "[dim](unknown)[/dim]"
            )

        console.print(table)

    def interactive_mode(self, stream: Optional[TextIO] = None, explain: bool = False):
        """Run interactive decode mode until end of input"""
        stream = stream or sys.stdin

        console.print(Panel(
            "[bold cyan]MediYap - Interactive Mode[/bold cyan]\n"
            "Enter medical terms to decode (Ctrl+D or Ctrl+C to exit):",
            title="🩺 Welcome to MediYap",
            border_style="cyan"
        ))
        console.print()

        while True:
            try:
                line = stream.readline()
            except KeyboardInterrupt:
                console.print("\n👋 Goodbye!", style="yellow")
                break
            except (OSError, UnicodeDecodeError) as e:
                error_console.print(f"Error reading input: {e}", markup=False)
                break

            if not line:
                break

            term = line.strip()
            if not term:
                continue

            decoded = self.decoder.analyze(term)
            console.file.write(f"→ {decoded.to_text()}\n")
            if explain:
                self.show_breakdown(decoded)
            console.print()
            console.print("> ", end="", markup=False)
            console.file.flush()

    def list_entries(self, section: str):
        """Print one dictionary section as a table"""
        kind = {name: kind for kind, name in SECTION_NAMES.items()}[section]

        table = Table(title=f"📖 {section.capitalize()}")
        table.add_column("Key", style="cyan")
        table.add_column("Meaning", style="green")

        for entry in self.dictionary.entries(kind):
            table.add_row(escape(entry.key), escape(entry.meaning))

        console.print(table)

    def search(self, query: str):
        """Print dictionary entries matching a query"""
        results = self.dictionary.search(query)
        if not results:
            console.print(f"No entries match '{escape(query)}'", style="yellow")
            return

        table = Table(title=f"🔎 Entries matching '{escape(query)}'")
        table.add_column("Kind", style="cyan")
        table.add_column("Key", style="green")
        table.add_column("Meaning", style="yellow")

        for entry in results:
            table.add_row(entry.kind, escape(entry.key), escape(entry.meaning))

        console.print(table)

    def show_stats(self):
        """Print dictionary statistics"""
        stats_table = Table(title="📊 Dictionary Statistics")
        stats_table.add_column("Metric", style="cyan")
        stats_table.add_column("Value", style="green")

        for metric, value in self.dictionary.get_stats().items():
            stats_table.add_row(metric.replace("_", " ").title(), str(value))

        stats_table.add_row("Match Order", self.config.decoder.match_order)
        console.print(stats_table)


def main(argv: Optional[List[str]] = None) -> int:
    parser = argparse.ArgumentParser(
        prog="mediyap",
        description="MediYap - Decode medical terminology into plain English",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  # Interactive mode
  mediyap

  # Decode terms
  mediyap hypoglycemia tachycardia nephritis

  # Show how a term was split
  mediyap --explain thrombocytopenia

  # Browse the dictionaries
  mediyap --list roots
  mediyap --search heart
  mediyap --export yaml > dictionary.yaml
        """
    )

    parser.add_argument(
        "terms",
        nargs="*",
        help="Medical terms to decode (interactive mode when omitted)"
    )

    parser.add_argument(
        "--explain", "-x",
        action="store_true",
        help="Show the matched prefix, root and suffix of each term"
    )

    # Dictionary browsing options replace term decoding
    browse = parser.add_mutually_exclusive_group()

    browse.add_argument(
        "--list", "-l",
        choices=sorted(SECTION_NAMES.values()),
        help="List one dictionary section"
    )

    browse.add_argument(
        "--search", "-s",
        help="Search dictionary spellings and meanings"
    )

    browse.add_argument(
        "--export", "-e",
        choices=["json", "yaml", "csv"],
        help="Print the whole dictionary in the given format"
    )

    browse.add_argument(
        "--stats",
        action="store_true",
        help="Show dictionary statistics"
    )

    parser.add_argument(
        "--dictionary", "-d",
        help="YAML file with extra prefixes/suffixes/roots entries"
    )

    parser.add_argument(
        "--match-order",
        choices=MATCH_ORDERS,
        help="Tie-break when several entries match (default: longest)"
    )

    parser.add_argument(
        "--config", "-c",
        help="Path to a YAML configuration file"
    )

    parser.add_argument(
        "--log-level",
        help="Logging level (default: WARNING)"
    )

    args = parser.parse_args(argv)

    browsing = args.list or args.search is not None or args.export or args.stats
    if browsing and args.terms:
        parser.error("terms cannot be combined with --list, --search, --export or --stats")

    try:
        config = MediYapConfig.load_from_file(args.config) if args.config else MediYapConfig()

        # Command-line flags win over file and environment settings
        if args.match_order:
            config.decoder = DecoderConfig(match_order=args.match_order)
        if args.dictionary:
            config.dictionary_path = args.dictionary
        if args.log_level:
            config.log_level = args.log_level.upper()
            config.validate()

        logging.basicConfig(
            level=getattr(logging, config.log_level),
            format="%(asctime)s %(levelname)s %(name)s: %(message)s",
            stream=sys.stderr,
        )

        cli = MediYapCLI(config)
    except ValueError as e:
        error_console.print(f"❌ {escape(str(e))}", style="red")
        return 1

    if args.list:
        cli.list_entries(args.list)
    elif args.search is not None:
        cli.search(args.search)
    elif args.export:
        console.print(cli.dictionary.export(args.export).rstrip("\n"), markup=False)
    elif args.stats:
        cli.show_stats()
    elif args.terms:
        cli.decode_terms(args.terms, explain=args.explain)
    else:
        cli.interactive_mode(explain=args.explain)

    return 0


if __name__ == "__main__":
    sys.exit(main())
