#!/usr/bin/env python3
"""Sleeping Pill - Main CLI Entry Point"""

import sys
import argparse

from rich.console import Console

from sleeping_pill.config import config, is_valid_screen_saver
from sleeping_pill.counter import sleep_counter
from sleeping_pill.log import setup_logging
from sleeping_pill.monitor import SleepMonitor
from sleeping_pill.powercfg import PowerCfgClient
from sleeping_pill.power import preflight
from sleeping_pill.reconciler import RequestEvaluator
from sleeping_pill.reporter import reporter
from sleeping_pill.screensaver import ScreenSaverDetector
from sleeping_pill.trigger import SleepTrigger
from sleeping_pill import ui


console = Console()


def screen_saver_name(value: str) -> str:
    """argparse type for the screen saver process name"""
    value = value.strip().strip('"')
    if not is_valid_screen_saver(value):
        raise argparse.ArgumentTypeError(f"'{value}' is not a screen saver (expected e.g. Mystify.scr)")
    return value


class SleepingPillCLI:
    """Main CLI application"""

    def run(self, args):
        """Main entry point"""
        parser = self.create_parser()
        parsed_args = parser.parse_args(args)
        parsed_args.func(parsed_args)

    def add_monitor_options(self, parser, keep_earlier=False):
        """
        Add the options shared by the top level and the run/check commands

        On a subcommand the options default to SUPPRESS, so a value given
        before the command name is not replaced by the subcommand's default.
        """
        unset = argparse.SUPPRESS if keep_earlier else None
        parser.add_argument(
            '--process', type=screen_saver_name, metavar='NAME.scr', default=unset,
            help='Screen saver process to watch (default: any .scr process)')
        parser.add_argument(
            '--time', type=int, metavar='SECONDS', default=unset,
            help=f'Screen saver run time before sleeping (default {config.screen_time}, 30-1800)')
        parser.add_argument(
            '--idle', type=int, metavar='SECONDS', default=unset,
            help=f'Time without SYSTEM requests before sleeping (default {config.idle_time}, 30-1800)')
        parser.add_argument(
            '--sample', type=int, metavar='SECONDS', default=unset,
            help=f'Sample period (default {config.sample_period}, 1-60)')
        parser.add_argument(
            '--powercfg-timeout', type=int, metavar='SECONDS', default=unset,
            help=f'Time to wait for powercfg (default {config.powercfg_timeout}, 1-300)')
        parser.add_argument(
            '--verbose', action='store_true', default=unset,
            help='Show the status of every sample')
        parser.add_argument(
            '--log-file', metavar='PATH', default=unset,
            help='Also write the log to this file')
        parser.add_argument(
            '--skip-preflight', action='store_true',
            default=argparse.SUPPRESS if keep_earlier else False,
            help='Start even if powercfg looks unusable')

    def create_parser(self):
        """Create argument parser"""
        parser = argparse.ArgumentParser(
            description='Sleeping Pill - put the computer to sleep once the screen saver '
                        'has run long enough and no SYSTEM power request is active',
            prog='sleeping-pill'
        )
        self.add_monitor_options(parser)
        parser.set_defaults(func=self.cmd_run)

        subparsers = parser.add_subparsers(title='commands', dest='command')

        run_parser = subparsers.add_parser('run', help='Monitor the screen saver (default)')
        self.add_monitor_options(run_parser, keep_earlier=True)
        run_parser.set_defaults(func=self.cmd_run)

        check_parser = subparsers.add_parser('check', help='Check that powercfg can be used and exit')
        self.add_monitor_options(check_parser, keep_earlier=True)
        check_parser.set_defaults(func=self.cmd_check)

        stats_parser = subparsers.add_parser('stats', help='Show how often the computer was put to sleep')
        stats_parser.add_argument('--days', type=int, default=7, help='Days to show (default 7)')
        stats_parser.set_defaults(func=self.cmd_stats)

        config_parser = subparsers.add_parser('config', help='Show configuration')
        config_parser.set_defaults(func=self.cmd_config)

        return parser

    def build_settings(self, args):
        """Settings from the command line over the configured defaults"""
        return config.build_settings(
            screen_saver=args.process,
            screen_time=args.time,
            idle_time=args.idle,
            sample_period=args.sample,
            verbose=args.verbose,
            powercfg_timeout=args.powercfg_timeout
        )

    # Command implementations

    def cmd_run(self, args):
        """Monitor the screen saver until interrupted"""
        settings = self.build_settings(args)
        setup_logging(settings.verbose, args.log_file or config.log_file)

        # Always report settings even if not verbose
        ui.display_settings(settings)

        problems = preflight()
        if problems:
            ui.display_preflight(problems)
            if not args.skip_preflight:
                sys.exit(1)

        monitor = SleepMonitor(
            settings,
            detector=ScreenSaverDetector(settings.screen_saver),
            evaluator=RequestEvaluator(PowerCfgClient(settings.powercfg_timeout), settings.verbose),
            trigger=SleepTrigger(sleep_counter, verbose=settings.verbose)
        )

        ui.print_info("Running... press Ctrl+C to stop")
        monitor.run()

    def cmd_check(self, args):
        """Check the environment and exit"""
        settings = self.build_settings(args)
        setup_logging(settings.verbose, args.log_file or config.log_file)

        ui.display_settings(settings)
        problems = preflight()
        ui.display_preflight(problems)

        if problems:
            sys.exit(1)

    def cmd_stats(self, args):
        """Show the sleep statistics"""
        report = reporter.generate_stats_report(days=max(1, args.days))
        ui.display_report(report)

    def cmd_config(self, args):
        """Show configuration"""
        console.print("[bold]Configuration:[/bold]")
        console.print(f"Process: {config.screen_saver or 'Any screen saver'}")
        console.print(f"Time: {config.screen_time} seconds")
        console.print(f"Idle: {config.idle_time} seconds")
        console.print(f"Sample: {config.sample_period} seconds")
        console.print(f"powercfg timeout: {config.powercfg_timeout} seconds")
        console.print(f"Verbose: {config.verbose}")
        console.print(f"Database: {config.db_path}")
        console.print(f"Log file: {config.log_file or '-'}")


def main():
    """Main entry point"""
    try:
        cli = SleepingPillCLI()
        cli.run(sys.argv[1:])
    except KeyboardInterrupt:
        console.print("\n[dim]Interrupted[/dim]")
        sys.exit(0)
    except Exception as e:
        ui.print_error(f"Fatal error: {e}")
        sys.exit(1)


if __name__ == '__main__':
    main()
