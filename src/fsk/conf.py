from __future__ import annotations
from dataclasses import dataclass, replace
import os
import os.path
from typing import Mapping


DEFAULT_EDITOR = 'nano'


def default_base_dir(environ: Mapping[str, str]) -> str:
    """Returns ``$HOME/.fsk/db``, or ``./db`` relative to the working directory if ``HOME`` is not set.

    An empty ``HOME`` still counts as set, giving ``.fsk/db``.
    """
    home = environ.get('HOME')
    if home is not None:
        return os.path.join(home, '.fsk', 'db')
    return os.path.join('.', 'db')


@dataclass
class FskConf:
    base_dir: str
    """The folder holding all notes. Each note is a ``.md`` file somewhere beneath it.

    Nothing else is stored here: there is no index or metadata file, and folders exist only as a side effect of
    notes being nested in them.
    """

    editor: str = DEFAULT_EDITOR
    """Command used to create or edit notes. The note's path is appended as the last argument.

    May include arguments, for example ``code --wait``.
    """

    preview_mode: bool = False
    """If True, commands that would change notes should instead just print a list of changes to the console.

    You can pass a ``--preview`` command-line argument to relevant commands to enable this.
    """

    verbose: bool = False
    """If True, the command-line tool logs at debug level."""

    @classmethod
    def for_user(cls, environ: Mapping[str, str] = None) -> FskConf:
        """Builds the configuration from the environment.

        ``HOME`` determines the base directory and ``EDITOR`` the editor command. The environment is only consulted
        here; everything else receives the resulting instance.
        """
        if environ is None:
            environ = os.environ
        return cls(base_dir=default_base_dir(environ),
                   editor=environ.get('EDITOR') or DEFAULT_EDITOR)

    def standardize(self):
        return replace(
            self,
            base_dir=os.path.abspath(self.base_dir)
        )

    def instantiate(self):
        from fsk.store import Store
        return Store(self.standardize())
