"""
Command-Line Interface for datesynth

Provides commands for:
- generate: Generate a temporal dataset from a configuration
- sample: Print values from a single generator method
- config: Manage configurations
- locales: List available locales
"""

import argparse
import sys
import logging
from contextlib import nullcontext
from typing import Dict, List, Optional

import pandas as pd
from rich.console import Console
from rich.table import Table
from rich.progress import Progress, SpinnerColumn, TextColumn
from rich.panel import Panel

from datesynth.clock import frozen_clock
from datesynth.config import ConfigLoader, ConfigValidator, get_default_config
from datesynth.generators import DateGenerator, TemporalGenerator, ColumnSpec, COLUMN_METHODS
from datesynth.locales import available_locales
from datesynth.utils import setup_logging, write_data

# Setup console
console = Console()


def parse_params(pairs: Optional[List[str]]) -> Dict[str, str]:
    """Parse KEY=VALUE pairs from the command line"""
    params = {}
    for pair in pairs or []:
        key, sep, value = pair.partition('=')
        if not sep or not key:
            raise ValueError(f"Expected KEY=VALUE, got '{pair}'")
        params[key.strip()] = value.strip()
    return params


class CLI:
    """Main CLI class"""

    def __init__(self):
        self.parser = self._create_parser()
        self.config_loader = ConfigLoader()

    def _create_parser(self) -> argparse.ArgumentParser:
        """Create argument parser"""
        parser = argparse.ArgumentParser(
            prog="datesynth",
            description="Random date and time generator for synthetic test data",
            formatter_class=argparse.RawDescriptionHelpFormatter,
            epilog="""
Examples:
  # Generate a dataset from a preset
  datesynth generate events.csv --preset event_log

  # Reproducible values relative to a pinned clock
  datesynth sample past --param years=2 --now 2020-01-01T00:00:00 --seed 42

  # Russian month names in their in-sentence form
  datesynth sample month --param use_context=true --locale ru
            """
        )

        parser.add_argument(
            '--verbose', '-v',
            action='store_true',
            help='Enable verbose output'
        )

        subparsers = parser.add_subparsers(dest='command', help='Available commands')

        # Generate command
        generate_parser = subparsers.add_parser('generate', help='Generate a temporal dataset')
        generate_parser.add_argument('output', help='Output data file (.csv, .json, .parquet, .xlsx, .pkl)')
        generate_parser.add_argument('--rows', '-n', type=int, help='Number of rows to generate')
        generate_parser.add_argument('--seed', '-s', type=int, help='Random seed for reproducibility')
        generate_parser.add_argument('--preset', '-p', help='Configuration preset')
        generate_parser.add_argument('--config', '-c', help='Custom configuration file')
        generate_parser.add_argument('--locale', '-l', help='Locale for names')
        generate_parser.add_argument('--now', help='Pin the clock to this ISO datetime')

        # Sample command
        sample_parser = subparsers.add_parser('sample', help='Print values from one generator method')
        sample_parser.add_argument('method', choices=sorted(COLUMN_METHODS), help='Generator method')
        sample_parser.add_argument('--param', '-P', action='append', metavar='KEY=VALUE', help='Method parameter')
        sample_parser.add_argument('--count', '-n', type=int, default=5, help='Number of values')
        sample_parser.add_argument('--seed', '-s', type=int, help='Random seed for reproducibility')
        sample_parser.add_argument('--locale', '-l', default='en', help='Locale for names')
        sample_parser.add_argument('--now', help='Pin the clock to this ISO datetime')

        # Config command
        config_parser = subparsers.add_parser('config', help='Manage configurations')
        config_subparsers = config_parser.add_subparsers(dest='config_command')

        config_subparsers.add_parser('list', help='List available presets')

        show_parser = config_subparsers.add_parser('show', help='Show preset configuration')
        show_parser.add_argument('preset', help='Preset name')

        create_parser = config_subparsers.add_parser('create', help='Create custom configuration')
        create_parser.add_argument('output', help='Output configuration file')

        # Locales command
        subparsers.add_parser('locales', help='List available locales')

        return parser

    def run(self, args=None):
        """Run CLI"""
        args = self.parser.parse_args(args)

        log_level = logging.DEBUG if args.verbose else logging.WARNING
        setup_logging(level=log_level)

        if args.command == 'generate':
            self.cmd_generate(args)
        elif args.command == 'sample':
            self.cmd_sample(args)
        elif args.command == 'config':
            self.cmd_config(args)
        elif args.command == 'locales':
            self.cmd_locales(args)
        else:
            self.parser.print_help()

    @staticmethod
    def _clock_context(now: Optional[str]):
        if not now:
            return nullcontext()
        return frozen_clock(pd.Timestamp(now).to_pydatetime())

    def _fail(self, args, error: Exception):
        console.print(f"[bold red]✗ Error:[/bold red] {error}")
        if args.verbose:
            console.print_exception()
        sys.exit(1)

    def cmd_generate(self, args):
        """Generate a temporal dataset"""
        console.print(Panel.fit(
            "📅 [bold]Temporal Data Generation[/bold]",
            border_style="blue"
        ))

        try:
            if args.config:
                config = self.config_loader.load_from_file(args.config)
                console.print(f"✓ Loaded custom configuration: {args.config}")
            elif args.preset:
                config = self.config_loader.load_preset(args.preset)
                console.print(f"✓ Loaded preset: {args.preset}")
            else:
                config = get_default_config()
                config.columns = self.config_loader.load_preset('default').columns
                console.print("✓ Using default configuration")

            # Override with command-line arguments
            if args.rows is not None:
                config.generation.num_rows = args.rows
            if args.seed is not None:
                config.generation.seed = args.seed
            if args.locale:
                config.generation.locale = args.locale

            is_valid, errors = ConfigValidator.validate(config)
            if not is_valid:
                raise ValueError("Invalid configuration: " + "; ".join(errors))

            with self._clock_context(args.now), Progress(
                SpinnerColumn(),
                TextColumn("[progress.description]{task.description}"),
                console=console
            ) as progress:
                task = progress.add_task("Generating temporal data...", total=None)
                generator = TemporalGenerator(config)
                columns = [ColumnSpec.from_dict(c) for c in config.columns]
                data = generator.generate(columns)
                validation = generator.validate(data, columns)
                progress.update(task, completed=True)

            write_data(data, args.output)
            console.print(f"✓ Saved data to: {args.output}")

            table = Table(title="Generation Summary", show_header=True)
            table.add_column("Metric", style="cyan")
            table.add_column("Value", style="green")

            table.add_row("Rows Generated", f"{len(data):,}")
            table.add_row("Columns", str(len(data.columns)))
            table.add_row("Seed", str(config.generation.seed if config.generation.seed is not None else "Random"))
            table.add_row("Locale", config.generation.locale)
            table.add_row("Valid", "✓" if validation["valid"] else "✗")
            table.add_row("Output File", args.output)

            console.print(table)

            for message in validation["errors"]:
                console.print(f"[red]✗ {message}[/red]")
            for message in validation["warnings"]:
                console.print(f"[yellow]! {message}[/yellow]")

            console.print("\n[bold green]✓ Generation complete![/bold green]")

        except Exception as e:
            self._fail(args, e)

    def cmd_sample(self, args):
        """Print values from one generator method"""
        try:
            config = get_default_config()
            config.generation.seed = args.seed
            config.generation.locale = args.locale

            spec = ColumnSpec(name=args.method, method=args.method, params=parse_params(args.param))
            kwargs = spec.parsed_params()

            with self._clock_context(args.now):
                dates = DateGenerator(config)
                method = getattr(dates, args.method)
                values = [method(**kwargs) for _ in range(args.count)]

            table = Table(title=f"{args.method}", show_header=True)
            table.add_column("#", style="cyan", justify="right")
            table.add_column("Value", style="green")

            for i, value in enumerate(values, 1):
                table.add_row(str(i), value.isoformat() if hasattr(value, 'isoformat') else str(value))

            console.print(table)

        except Exception as e:
            self._fail(args, e)

    def cmd_config(self, args):
        """Manage configurations"""
        console.print(Panel.fit(
            "⚙️ [bold]Configuration Management[/bold]",
            border_style="magenta"
        ))

        try:
            if args.config_command == 'list':
                table = Table(title="Available Presets", show_header=True)
                table.add_column("Preset", style="cyan")
                table.add_column("Locale", style="white")
                table.add_column("Columns", style="white")

                for name in self.config_loader.list_presets():
                    preset = self.config_loader.load_preset(name)
                    table.add_row(
                        name,
                        preset.generation.locale,
                        ", ".join(c.get('name', '?') for c in preset.columns)
                    )

                console.print(table)

            elif args.config_command == 'show':
                config = self.config_loader.load_preset(args.preset)

                console.print(f"\n[bold]Preset: {args.preset}[/bold]\n")
                console.print_json(data=config.to_dict(), default=str)

            elif args.config_command == 'create':
                config = self.config_loader.load_preset('default')
                self.config_loader.save_config(config, args.output)

                console.print(f"✓ Created configuration file: {args.output}")
                console.print("  Edit this file to customize settings")

            else:
                console.print("Use 'config list', 'config show <preset>', or 'config create <file>'")

        except Exception as e:
            self._fail(args, e)

    def cmd_locales(self, args):
        """List available locales"""
        table = Table(title="Available Locales", show_header=True)
        table.add_column("Locale", style="cyan")
        for locale in available_locales():
            table.add_row(locale)
        console.print(table)


def main():
    """CLI entry point"""
    cli = CLI()
    cli.run()


if __name__ == "__main__":
    main()
