from unittest.mock import Mock, patch

import pytest

import sleepingpill
from sleepingpill import SleepingPillCLI
from setup_scheduler import build_schtasks_args, build_task_command


@pytest.fixture
def cli():
    return SleepingPillCLI()


class TestParser:
    """Command line parsing"""

    def test_no_command_runs_monitor(self, cli):
        args = cli.create_parser().parse_args([])

        assert args.func == cli.cmd_run
        assert args.time is None

    def test_options_without_command(self, cli):
        args = cli.create_parser().parse_args(['--time', '300', '--idle', '60', '--verbose'])

        assert args.func == cli.cmd_run
        assert (args.time, args.idle, args.verbose) == (300, 60, True)

    def test_run_command_options(self, cli):
        args = cli.create_parser().parse_args(['run', '--process', 'Mystify.scr', '--sample', '10'])

        assert args.process == "Mystify.scr"
        assert args.sample == 10

    def test_options_before_command_are_kept(self, cli):
        args = cli.create_parser().parse_args(['--time', '300', '--verbose', '--skip-preflight', 'run'])

        assert (args.time, args.verbose, args.skip_preflight) == (300, True, True)
        assert args.func == cli.cmd_run

    def test_options_after_command_win(self, cli):
        args = cli.create_parser().parse_args(['--time', '300', 'check', '--time', '600', '--idle', '90'])

        assert (args.time, args.idle) == (600, 90)
        assert args.func == cli.cmd_check

    def test_command_without_options_uses_defaults(self, cli):
        args = cli.create_parser().parse_args(['run'])

        assert (args.time, args.verbose, args.skip_preflight) == (None, None, False)

    def test_invalid_process_is_usage_error(self, cli):
        with pytest.raises(SystemExit):
            cli.create_parser().parse_args(['run', '--process', 'notepad.exe'])

    def test_stats_command(self, cli):
        args = cli.create_parser().parse_args(['stats', '--days', '14'])

        assert args.func == cli.cmd_stats
        assert args.days == 14


class TestCommands:
    """Command implementations"""

    def test_run_aborts_when_preflight_fails(self, cli):
        with patch.object(sleepingpill, 'preflight', return_value=["Run as administrator"]), \
             patch.object(sleepingpill, 'setup_logging'), \
             patch.object(sleepingpill, 'SleepMonitor') as mock_monitor:
            with pytest.raises(SystemExit) as exc:
                cli.run(['run'])

        assert exc.value.code == 1
        mock_monitor.assert_not_called()

    def test_run_starts_monitor_with_settings(self, cli):
        with patch.object(sleepingpill, 'preflight', return_value=[]), \
             patch.object(sleepingpill, 'setup_logging'), \
             patch.object(sleepingpill, 'SleepMonitor') as mock_monitor:
            cli.run(['run', '--time', '60', '--idle', '600', '--sample', '2'])

        settings = mock_monitor.call_args.args[0]
        assert settings.screen_time_ms == 60000
        assert settings.idle_time_ms == 60000
        assert settings.sample_period_ms == 2000
        mock_monitor.return_value.run.assert_called_once()

    def test_run_uses_options_given_before_command(self, cli):
        with patch.object(sleepingpill, 'preflight', return_value=["Not Windows"]), \
             patch.object(sleepingpill, 'setup_logging'), \
             patch.object(sleepingpill, 'SleepMonitor') as mock_monitor:
            cli.run(['--time', '120', '--skip-preflight', 'run'])

        settings = mock_monitor.call_args.args[0]
        assert settings.screen_time_ms == 120000
        mock_monitor.return_value.run.assert_called_once()

    def test_skip_preflight(self, cli):
        with patch.object(sleepingpill, 'preflight', return_value=["Not Windows"]), \
             patch.object(sleepingpill, 'setup_logging'), \
             patch.object(sleepingpill, 'SleepMonitor') as mock_monitor:
            cli.run(['run', '--skip-preflight'])

        mock_monitor.return_value.run.assert_called_once()

    def test_check_exit_code(self, cli):
        with patch.object(sleepingpill, 'preflight', return_value=[]), \
             patch.object(sleepingpill, 'setup_logging'):
            cli.run(['check'])

        with patch.object(sleepingpill, 'preflight', return_value=["Not Windows"]), \
             patch.object(sleepingpill, 'setup_logging'):
            with pytest.raises(SystemExit) as exc:
                cli.run(['check'])

        assert exc.value.code == 1

    def test_stats_displays_report(self, cli):
        with patch.object(sleepingpill, 'reporter') as mock_reporter, \
             patch.object(sleepingpill.ui, 'display_report') as mock_display:
            mock_reporter.generate_stats_report.return_value = "report"

            cli.run(['stats', '--days', '3'])

        mock_reporter.generate_stats_report.assert_called_once_with(days=3)
        mock_display.assert_called_once_with("report")

    def test_main_handles_interrupt(self):
        with patch.object(sleepingpill.SleepingPillCLI, 'run', side_effect=KeyboardInterrupt), \
             patch.object(sleepingpill.sys, 'argv', ['sleeping-pill']):
            with pytest.raises(SystemExit) as exc:
                sleepingpill.main()

        assert exc.value.code == 0


class TestSchedulerSetup:
    """Task Scheduler registration"""

    def test_task_command(self):
        command = build_task_command(
            "C:\\Python\\pythonw.exe", "C:\\Tools\\SleepingPill\\sleepingpill.py", ['--time', '300']
        )

        assert command == '"C:\\Python\\pythonw.exe" "C:\\Tools\\SleepingPill\\sleepingpill.py" run --time 300'

    def test_schtasks_runs_elevated_at_logon(self):
        args = build_schtasks_args("cmd")

        assert args[:4] == ['schtasks', '/create', '/tn', 'SleepingPill']
        assert ['/sc', 'onlogon'] == args[6:8]
        assert ['/rl', 'highest'] == args[8:10]
