#!/usr/bin/env python3
"""Setup Task Scheduler to start Sleeping Pill at logon on Windows

Any arguments are passed on to the monitor, e.g.

    python setup_scheduler.py --time 300 --idle 60
"""

import sys
import subprocess
from pathlib import Path


TASK_NAME = "SleepingPill"


def build_task_command(python_exe: str, script: Path, monitor_args) -> str:
    """Command line run by the scheduled task"""
    parts = [f'"{python_exe}"', f'"{script}"', 'run']
    parts.extend(f'"{arg}"' if ' ' in arg else arg for arg in monitor_args)
    return " ".join(parts)


def build_schtasks_args(task_command: str):
    """schtasks arguments: start at logon, with highest privileges so powercfg works"""
    return [
        'schtasks', '/create',
        '/tn', TASK_NAME,
        '/tr', task_command,
        '/sc', 'onlogon',
        '/rl', 'highest',
        '/f'
    ]


def setup_task_scheduler(monitor_args=None):
    """Setup Windows Task Scheduler to auto-start Sleeping Pill"""

    # Get paths
    script_dir = Path(__file__).parent.absolute()
    monitor_script = script_dir / "sleepingpill.py"

    # pythonw keeps the task from opening a console window
    python_exe = Path(sys.executable)
    pythonw = python_exe.with_name("pythonw.exe")
    if pythonw.exists():
        python_exe = pythonw

    task_command = build_task_command(str(python_exe), monitor_script, monitor_args or [])
    schtasks_args = build_schtasks_args(task_command)

    print("Sleeping Pill - Task Scheduler Setup")
    print("=" * 60)
    print(f"Python: {python_exe}")
    print(f"Script: {monitor_script}")
    print(f"Command: {task_command}")
    print()
    print("To install the scheduled task, run this command in an elevated PowerShell or CMD:")
    print()
    print("  " + subprocess.list2cmdline(schtasks_args))
    print()
    print("To uninstall later:")
    print()
    print(f'  schtasks /delete /tn "{TASK_NAME}" /f')
    print()
    print("Note: The task runs with highest privileges so powercfg can report requests.")
    print("=" * 60)

    # Try to install automatically
    try:
        result = subprocess.run(
            schtasks_args,
            capture_output=True,
            text=True
        )

        if result.returncode == 0:
            print()
            print("✓ Task successfully installed!")
            print("  Sleeping Pill will now start automatically when you log in.")
        else:
            print()
            print("Note: Automatic installation failed. Please run the command above manually.")
            if result.stderr:
                print(f"Error: {result.stderr}")
    except OSError as e:
        print()
        print("Note: Automatic installation not available. Please run the command above manually.")
        print(f"Details: {e}")


if __name__ == '__main__':
    setup_task_scheduler(sys.argv[1:])
