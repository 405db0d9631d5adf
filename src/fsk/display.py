"""Terminal coloring for the command-line output."""

import os
import sys

from colorama import Fore, Style, just_fix_windows_console

just_fix_windows_console()


def color_enabled() -> bool:
    """Colors are only used when writing to a terminal, and never when ``NO_COLOR`` is set."""
    if os.environ.get('NO_COLOR'):
        return False
    isatty = getattr(sys.stdout, 'isatty', None)
    return bool(isatty and isatty())


def colorize(text, color: str) -> str:
    if not color_enabled():
        return str(text)
    if color == 'red':
        return f'{Fore.RED}{text}{Fore.RESET}'
    if color == 'green':
        return f'{Fore.GREEN}{text}{Fore.RESET}'
    if color == 'blue':
        return f'{Fore.BLUE}{text}{Fore.RESET}'
    if color == 'cyan':
        return f'{Fore.CYAN}{text}{Fore.RESET}'
    if color == 'yellow':
        return f'{Fore.YELLOW}{text}{Fore.RESET}'
    if color == 'gray':
        return f'{Fore.LIGHTBLACK_EX}{text}{Fore.RESET}'
    if color == 'white':
        return f'{Fore.LIGHTWHITE_EX}{text}{Fore.RESET}'
    if color == 'bold':
        return f'{Style.BRIGHT}{text}{Style.NORMAL}'
    return str(text)


def rule(width=40) -> str:
    return colorize('-' * width, 'gray')
