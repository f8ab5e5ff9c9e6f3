"""Utilities for handling KeyboardInterrupt in try-except blocks.

Interrupts caught while waiting on an external tool must still reach the
main thread once the tool has been cleaned up.
"""

import _thread
import threading


def handle_keyboard_interrupt_properly(ke: KeyboardInterrupt) -> None:
    """Propagate a KeyboardInterrupt to the main thread and re-raise it.

    Usage:
        try:
            proc.wait()
        except KeyboardInterrupt as ke:
            kill_process_tree(proc.pid)
            handle_keyboard_interrupt_properly(ke)

    Args:
        ke: The KeyboardInterrupt exception to handle

    Raises:
        KeyboardInterrupt: Always re-raises the exception after handling
    """
    # The main thread already has the exception; only workers must forward it
    if threading.current_thread() is not threading.main_thread():
        _thread.interrupt_main()
    raise ke
