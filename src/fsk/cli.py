"""Command-line interface for fsk."""


import argparse
import json
import logging
import sys
from terminaltables import AsciiTable
from fsk import editor
from fsk.conf import FskConf
from fsk.display import colorize, rule
from fsk.models import Error, TitleError
from fsk.store import Store

logger = logging.getLogger(__name__)


def _fail(message: str, error: BaseException) -> int:
    print(f'{colorize("x", "red")} {message}: {colorize(error, "gray")}', file=sys.stderr)
    return 1


def _write(args, store: Store) -> int:
    title = args.title[0]
    path = store.path(title)
    if path == store.base:
        raise TitleError(title, 'a note needs a title')
    if store.conf.preview_mode:
        print(f'Would edit {path} with {store.conf.editor}')
        return 0
    if editor.edit(path, store.conf.editor):
        logger.info('Note [%s] saved', title)
        return 0
    print(f'{colorize("x", "red")} Failed to run editor {colorize(store.conf.editor, "yellow")}. '
          'Check your $EDITOR environment variable.', file=sys.stderr)
    return 1


def _get(args, store: Store) -> int:
    title = args.title[0]
    try:
        content = store.read(title)
    except OSError as e:
        return _fail(f'Failed to read {colorize(title, "yellow")}', e)
    if content.strip():
        print(content)
    else:
        print(colorize('Note is empty.', 'gray'))
    return 0


def _list(args, store: Store) -> int:
    titles = store.list(args.folder or '')
    if args.json:
        print(json.dumps(titles))
        return 0
    if not titles:
        print(colorize('No notes found.', 'gray'))
        return 0
    print(f'{colorize("Your notes", "bold")}:')
    print(rule())
    for title in titles:
        print(f'  {colorize("*", "blue")} {colorize(title, "white")}')
    print(rule())
    print(f'{len(titles)} total notes')
    return 0


def _search(args, store: Store) -> int:
    keyword = args.keyword[0]
    results = list(store.search(keyword))
    if args.json:
        print(json.dumps([r.as_json() for r in results]))
        return 0
    if not results:
        print(f'No results found for {colorize(keyword, "yellow")}')
        return 0
    if args.table:
        data = [('Title', 'Match')]
        data.extend((r.title, '(title)' if r.title_match else r.preview) for r in results)
        print(AsciiTable(data).table)
        return 0
    print(f'{colorize("Found matches for", "cyan")} {colorize(keyword, "yellow")}:')
    print(rule())
    for result in results:
        if result.title_match:
            print(colorize(result.title, 'bold'))
        else:
            print(colorize(result.title, 'green'))
            print(f'   {colorize("->", "gray")} {colorize(result.preview, "gray")}')
    print(rule())
    print(f'{len(results)} result(s) found')
    return 0


def _rm(args, store: Store) -> int:
    path = store.remove(args.title[0])
    if not args.preview:
        print(f'Removed {path}')
    return 0


def _mv(args, store: Store) -> int:
    dest = store.move(args.src[0], args.dest[0])
    if not args.preview:
        print(f'Moved {args.src[0]} to {dest}')
    return 0


def _export(args, store: Store) -> int:
    dest = store.export(args.folder or '', args.dest[0])
    if not args.preview:
        print(f'Exported to {dest}')
    return 0


def _import(args, store: Store) -> int:
    dest = store.import_(args.src[0], args.folder or '')
    if not args.preview:
        print(f'Imported into {dest}')
    return 0


def argparser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog='fsk',
        description='Manage your markdown notes with speed and simplicity. '
                    'Notes live in $HOME/.fsk/db, one .md file per note; titles like "linux/kernel" nest notes '
                    'in folders.')
    parser.set_defaults(func=None, preview=False)
    parser.add_argument('-v', '--verbose', action='store_true', help='Enable debug logging.')

    subs = parser.add_subparsers(title='Commands')

    p_write = subs.add_parser('write', aliases=['new', 'edit'],
                              help='Create or edit a note with the editor from $EDITOR (default: nano).')
    p_write.add_argument('title', nargs=1, help='Title of the note, without .md. May contain slashes.')
    p_write.add_argument('-p', '--preview', action='store_true', help='Print the file to edit but do not edit it')
    p_write.set_defaults(func=_write)

    p_get = subs.add_parser('get', aliases=['cat'], help='Print the content of a note.')
    p_get.add_argument('title', nargs=1)
    p_get.set_defaults(func=_get)

    p_list = subs.add_parser('list', aliases=['ls'], help='List all notes, sorted by title.')
    p_list.add_argument('folder', nargs='?', help='Only list notes within this folder.')
    p_list.add_argument('-j', '--json', action='store_true', help='Output as a JSON array of titles.')
    p_list.set_defaults(func=_list)

    p_search = subs.add_parser(
        'search', aliases=['find'],
        help='Search note titles and contents for a keyword, ignoring case. For notes whose title does not match, '
             'the first matching line of content is shown.')
    p_search.add_argument('keyword', nargs=1)
    p_search_formats = p_search.add_mutually_exclusive_group()
    p_search_formats.add_argument('-j', '--json', action='store_true', help='Output as JSON.')
    p_search_formats.add_argument('-t', '--table', action='store_true', help='Format output as a table.')
    p_search.set_defaults(func=_search)

    p_rm = subs.add_parser(
        'rm', aliases=['remove', 'delete'],
        help='Delete a note. Folders left empty are deleted too. If there is no note with the given title but '
             'there is a folder, the entire folder is deleted.')
    p_rm.add_argument('title', nargs=1)
    p_rm.add_argument('-p', '--preview', action='store_true', help='Print changes to be made but do not delete')
    p_rm.set_defaults(func=_rm)

    p_mv = subs.add_parser('mv', aliases=['rename', 'move'],
                           help='Rename a note. Destination folders are created as needed.')
    p_mv.add_argument('src', nargs=1, help='Title of the note to move.')
    p_mv.add_argument('dest', nargs=1, help='New title.')
    p_mv.add_argument('-p', '--preview', action='store_true', help='Print changes to be made but do not move')
    p_mv.set_defaults(func=_mv)

    p_export = subs.add_parser(
        'export',
        help='Copy notes to another directory. Everything in the folder is copied and existing files at the '
             'destination are overwritten.')
    p_export.add_argument('dest', nargs=1, help='Directory to copy into.')
    p_export.add_argument('folder', nargs='?', help='Folder to export. If omitted, all notes are exported.')
    p_export.add_argument('-p', '--preview', action='store_true', help='Print changes to be made but do not copy')
    p_export.set_defaults(func=_export)

    p_import = subs.add_parser(
        'import',
        help='Copy a directory into your notes. Existing notes with the same names are overwritten.')
    p_import.add_argument('src', nargs=1, help='Directory to copy from.')
    p_import.add_argument('folder', nargs='?', help='Folder to import into. If omitted, imports into the top level.')
    p_import.add_argument('-p', '--preview', action='store_true', help='Print changes to be made but do not copy')
    p_import.set_defaults(func=_import)

    return parser


def main(args=None) -> int:
    """Runs the tool and returns its exit code.

    args may be an array of string command-line arguments; if absent,
    the process's arguments are used.
    """
    parser = argparser()
    args = parser.parse_args(args)
    if not args.func:
        parser.print_help()
        return 1
    conf = FskConf.for_user()
    conf.verbose = args.verbose
    conf.preview_mode = args.preview
    logging.basicConfig(level=logging.DEBUG if conf.verbose else logging.WARNING,
                        format='%(levelname)s %(name)s: %(message)s')
    store = conf.instantiate()
    try:
        return args.func(args, store)
    except Error as e:
        return _fail('Error', e)
    except OSError as e:
        return _fail(f'Failed to {args.func.__name__[1:]}', e)
