import json
from pathlib import Path
import subprocess

from colorama import Fore

from fsk import cli
from fsk.models import DeleteCmd


BASE = '/home/me/.fsk/db'
RULE = '-' * 40


def fsk_setup(fs, monkeypatch, editor='vim'):
    monkeypatch.setenv('HOME', '/home/me')
    monkeypatch.setenv('EDITOR', editor)
    monkeypatch.delenv('NO_COLOR', raising=False)
    fs.create_dir(BASE)


def test_no_command(fs, capsys):
    assert cli.main([]) == 1
    out, err = capsys.readouterr()
    assert 'usage: fsk' in out


def test_write(fs, capsys, monkeypatch, mocker):
    fsk_setup(fs, monkeypatch, editor='code --wait')

    def run(cmd):
        Path(cmd[-1]).write_text('# Kernel')
        return subprocess.CompletedProcess(cmd, 0)
    mock = mocker.patch('subprocess.run', side_effect=run)
    assert cli.main(['new', 'linux/kernel']) == 0
    mock.assert_called_once_with(['code', '--wait', f'{BASE}/linux/kernel.md'])
    assert Path(f'{BASE}/linux/kernel.md').read_text() == '# Kernel'


def test_write_editor_fails(fs, capsys, monkeypatch, mocker):
    fsk_setup(fs, monkeypatch)
    mocker.patch('subprocess.run', return_value=subprocess.CompletedProcess([], 2))
    assert cli.main(['edit', 'todo']) == 1
    out, err = capsys.readouterr()
    assert 'Failed to run editor vim' in err


def test_write_preview(fs, capsys, monkeypatch, mocker):
    fsk_setup(fs, monkeypatch)
    mock = mocker.patch('subprocess.run')
    assert cli.main(['write', '-p', 'todo']) == 0
    assert not mock.called
    out, err = capsys.readouterr()
    assert out == f'Would edit {BASE}/todo.md with vim\n'


def test_get(fs, capsys, monkeypatch):
    fsk_setup(fs, monkeypatch)
    fs.create_file(f'{BASE}/linux/kernel.md', contents='# Kernel\nmodules')
    fs.create_file(f'{BASE}/blank.md', contents='  \n')
    assert cli.main(['get', 'linux/kernel']) == 0
    out, err = capsys.readouterr()
    assert out == '# Kernel\nmodules\n'
    assert cli.main(['cat', 'blank']) == 0
    out, err = capsys.readouterr()
    assert out == 'Note is empty.\n'


def test_get_missing(fs, capsys, monkeypatch):
    fsk_setup(fs, monkeypatch)
    assert cli.main(['get', 'nope']) == 1
    out, err = capsys.readouterr()
    assert not out
    assert err.startswith('x Failed to read nope: ')


def test_list(fs, capsys, monkeypatch):
    fsk_setup(fs, monkeypatch)
    assert cli.main(['list']) == 0
    out, err = capsys.readouterr()
    assert out == 'No notes found.\n'

    fs.create_file(f'{BASE}/b/d.md')
    fs.create_file(f'{BASE}/a.md')
    fs.create_file(f'{BASE}/b/c.md')
    assert cli.main(['ls']) == 0
    out, err = capsys.readouterr()
    assert out == f"""Your notes:
{RULE}
  * a
  * b/c
  * b/d
{RULE}
3 total notes
"""
    assert cli.main(['ls', '-j', 'b']) == 0
    out, err = capsys.readouterr()
    assert json.loads(out) == ['b/c', 'b/d']


def test_search(fs, capsys, monkeypatch):
    fsk_setup(fs, monkeypatch)
    fs.create_file(f'{BASE}/linux/kernel.md', contents='modules')
    assert cli.main(['search', 'zzz']) == 0
    out, err = capsys.readouterr()
    assert out == 'No results found for zzz\n'

    assert cli.main(['find', 'KERN']) == 0
    out, err = capsys.readouterr()
    assert out == f"""Found matches for KERN:
{RULE}
linux/kernel
{RULE}
1 result(s) found
"""
    assert cli.main(['search', 'modules']) == 0
    out, err = capsys.readouterr()
    assert out == f"""Found matches for modules:
{RULE}
linux/kernel
   -> modules
{RULE}
1 result(s) found
"""


def test_search_json_and_table(fs, capsys, monkeypatch):
    fsk_setup(fs, monkeypatch)
    fs.create_file(f'{BASE}/kernel.md', contents='x')
    fs.create_file(f'{BASE}/notes.md', contents='line\n  see kernel docs\n')
    assert cli.main(['search', '-j', 'kernel']) == 0
    out, err = capsys.readouterr()
    assert sorted(json.loads(out), key=lambda r: r['title']) == [
        {'title': 'kernel', 'title_match': True, 'preview': None},
        {'title': 'notes', 'title_match': False, 'preview': 'see kernel docs'},
    ]
    assert cli.main(['search', '-t', 'kernel']) == 0
    out, err = capsys.readouterr()
    assert '| Title  | Match           |' in out
    assert '| kernel | (title)         |' in out
    assert '| notes  | see kernel docs |' in out


def test_rm(fs, capsys, monkeypatch):
    fsk_setup(fs, monkeypatch)
    fs.create_file(f'{BASE}/a/b.md')
    assert cli.main(['rm', '-p', 'a/b']) == 0
    out, err = capsys.readouterr()
    assert out == str(DeleteCmd(f'{BASE}/a/b.md')) + '\n'
    assert Path(f'{BASE}/a/b.md').exists()

    assert cli.main(['delete', 'a/b']) == 0
    out, err = capsys.readouterr()
    assert out == f'Removed {BASE}/a/b.md\n'
    assert not Path(f'{BASE}/a').exists()
    assert Path(BASE).exists()


def test_rm_missing(fs, capsys, monkeypatch):
    fsk_setup(fs, monkeypatch)
    assert cli.main(['rm', 'ghost']) == 1
    out, err = capsys.readouterr()
    assert err == 'x Error: Not found: ghost\n'


def test_rm_escape(fs, capsys, monkeypatch):
    fsk_setup(fs, monkeypatch)
    fs.create_file('/home/me/.fsk/secret.md')
    assert cli.main(['rm', '../secret']) == 1
    out, err = capsys.readouterr()
    assert 'Invalid title [../secret]' in err
    assert Path('/home/me/.fsk/secret.md').exists()


def test_mv(fs, capsys, monkeypatch):
    fsk_setup(fs, monkeypatch)
    fs.create_file(f'{BASE}/x.md', contents='x')
    assert cli.main(['mv', 'x', 'y/x']) == 0
    out, err = capsys.readouterr()
    assert out == f'Moved x to {BASE}/y/x.md\n'
    assert Path(f'{BASE}/y/x.md').read_text() == 'x'
    assert not Path(f'{BASE}/x.md').exists()


def test_mv_missing(fs, capsys, monkeypatch):
    fsk_setup(fs, monkeypatch)
    assert cli.main(['rename', 'nope', 'other']) == 1
    out, err = capsys.readouterr()
    assert err == 'x Error: Not found: nope\n'


def test_export_import(fs, capsys, monkeypatch):
    fsk_setup(fs, monkeypatch)
    fs.create_file(f'{BASE}/work/a.md', contents='a')
    fs.create_file(f'{BASE}/home/b.md', contents='b')
    assert cli.main(['export', '/backup']) == 0
    out, err = capsys.readouterr()
    assert out == 'Exported to /backup\n'
    assert Path('/backup/work/a.md').read_text() == 'a'
    assert Path('/backup/home/b.md').read_text() == 'b'

    assert cli.main(['export', '/work-only', 'work']) == 0
    capsys.readouterr()
    assert Path('/work-only/a.md').exists()
    assert not Path('/work-only/b.md').exists()

    assert cli.main(['import', '/work-only', 'copy']) == 0
    out, err = capsys.readouterr()
    assert out == f'Imported into {BASE}/copy\n'
    assert Path(f'{BASE}/copy/a.md').read_text() == 'a'


def test_export_missing(fs, capsys, monkeypatch):
    fsk_setup(fs, monkeypatch)
    assert cli.main(['export', '/backup', 'nope']) == 1
    out, err = capsys.readouterr()
    assert err == 'x Error: Not found: nope\n'
    assert cli.main(['import', '/nowhere']) == 1
    out, err = capsys.readouterr()
    assert err == 'x Error: Not found: /nowhere\n'


def test_write_without_title(fs, capsys, monkeypatch, mocker):
    fsk_setup(fs, monkeypatch)
    mock = mocker.patch('subprocess.run')
    assert cli.main(['write', '']) == 1
    assert not mock.called
    out, err = capsys.readouterr()
    assert err == 'x Error: Invalid title []: a note needs a title\n'


def test_search_colors(fs, capsys, monkeypatch, mocker):
    fsk_setup(fs, monkeypatch)
    fs.create_file(f'{BASE}/kernel.md')
    fake_sys = mocker.patch('fsk.display.sys')
    fake_sys.stdout.isatty.return_value = True
    assert cli.main(['search', 'kernel']) == 0
    out, err = capsys.readouterr()
    assert out.startswith(f'{Fore.CYAN}Found matches for{Fore.RESET} {Fore.YELLOW}kernel{Fore.RESET}:\n')
