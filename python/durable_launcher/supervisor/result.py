"""Recording of the script's exit status."""

import logging

# Written when the script never produced an exit code of its own. Real exit
# codes are unsigned bytes, so this can never be mistaken for one.
LAUNCH_FAILED = -2


def exit_code_from_returncode(returncode: int) -> int:
    """Map a ``Popen.returncode`` onto the 0-255 exit status range.

    A negative return code means the process was killed by that signal; it is
    reported the way a POSIX shell reports it, as ``128 + signal``.
    """
    if returncode < 0:
        return 128 - returncode
    return returncode


def write_result(result_path: str, exit_code: int, logger: logging.Logger) -> bool:
    """Write ``exit_code`` as decimal text to ``result_path``.

    Failures are logged and swallowed: there is no other channel left to
    report them on.

    Returns:
        True if the result file was written completely
    """
    try:
        with open(result_path, "w", encoding="utf-8") as f:
            f.write(str(exit_code))
    except OSError as e:
        logger.error(f"Failed to write result file '{result_path}': {e}")
        return False
    return True
