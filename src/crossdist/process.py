"""
External Tool Execution

This module runs the external tools of a release run (cargo, strip, zip,
tar) one at a time. Output is streamed straight to the terminal and the call
blocks until the tool exits; there is no timeout.

If the run is interrupted while a tool is running, the tool's whole process
tree is terminated before the interrupt propagates, so no orphaned rustc or
linker processes keep writing into the target directory.
"""

import logging
import shlex
import subprocess
from pathlib import Path
from typing import List, Mapping, Optional

import psutil

from .interrupt_utils import handle_keyboard_interrupt_properly

# Exit statuses reported when the tool cannot be started (shell convention)
EXIT_TOOL_NOT_EXECUTABLE = 126
EXIT_TOOL_NOT_FOUND = 127


def format_command(cmd: List[str]) -> str:
    return " ".join(shlex.quote(str(arg)) for arg in cmd)


def run_tool(
    cmd: List[str],
    cwd: Optional[Path] = None,
    env: Optional[Mapping[str, str]] = None,
) -> int:
    """Run an external tool and wait for it to exit.

    Args:
        cmd: Command and arguments
        cwd: Working directory (default: current directory)
        env: Complete environment for the child (default: inherit)

    Returns:
        The tool's exit status, EXIT_TOOL_NOT_FOUND if the executable does
        not exist, or EXIT_TOOL_NOT_EXECUTABLE if it could not be started
    """
    logging.debug(f"Running: {format_command(cmd)} (cwd={cwd or Path.cwd()})")

    try:
        proc = subprocess.Popen(
            [str(arg) for arg in cmd],
            cwd=str(cwd) if cwd is not None else None,
            env=dict(env) if env is not None else None,
        )
    except FileNotFoundError:
        logging.debug(f"Executable not found: {cmd[0]}")
        return EXIT_TOOL_NOT_FOUND
    except OSError as e:
        logging.debug(f"Cannot execute {cmd[0]}: {e}")
        return EXIT_TOOL_NOT_EXECUTABLE

    try:
        return proc.wait()
    except KeyboardInterrupt as ke:
        kill_process_tree(proc.pid)
        handle_keyboard_interrupt_properly(ke)
        raise  # Never reached, but satisfies type checker


def kill_process_tree(root_pid: int) -> int:
    """Terminate a process and all of its children.

    Args:
        root_pid: PID of the root process

    Returns:
        Number of processes terminated
    """
    try:
        root_proc = psutil.Process(root_pid)
        processes = root_proc.children(recursive=True)
    except psutil.NoSuchProcess:
        return 0

    # Children first, root last
    processes = list(reversed(processes)) + [root_proc]

    killed_count = 0
    for proc in processes:
        try:
            proc.terminate()
            killed_count += 1
            logging.debug(f"Terminated process {proc.pid}")
        except psutil.NoSuchProcess:
            pass  # Already dead

    # Wait for graceful termination, then force kill any stragglers
    _gone, alive = psutil.wait_procs(processes, timeout=3)
    for proc in alive:
        try:
            proc.kill()
            logging.warning(f"Force killed stubborn process {proc.pid}")
        except psutil.NoSuchProcess:
            pass

    return killed_count
