"""Hands a note over to the user's external editor."""

import logging
import os
import os.path
import shlex
import subprocess

logger = logging.getLogger(__name__)


def edit(path: str, editor: str) -> bool:
    """Opens the file at path in the editor, creating its parent folders first.

    The editor command may contain arguments; the path is appended as the last one.
    Returns True only if the editor ran and exited with status zero. The file's contents are not checked afterward.
    """
    os.makedirs(os.path.dirname(path), exist_ok=True)
    cmd = shlex.split(editor) + [path]
    logger.debug('Executing: %s', cmd)
    try:
        result = subprocess.run(cmd)
    except OSError as e:
        logger.error('Could not launch editor [%s]: %s', editor, e)
        return False
    if result.returncode:
        logger.warning('Editor [%s] exited with status %s', editor, result.returncode)
        return False
    return True
