from pathlib import Path
import subprocess

from fsk.editor import edit


def test_edit(fs, mocker):
    def run(cmd):
        Path(cmd[-1]).write_text('written by editor')
        return subprocess.CompletedProcess(cmd, 0)
    mock = mocker.patch('subprocess.run', side_effect=run)
    assert edit('/notes/linux/kernel.md', 'code --wait')
    mock.assert_called_once_with(['code', '--wait', '/notes/linux/kernel.md'])
    assert Path('/notes/linux/kernel.md').read_text() == 'written by editor'


def test_edit_nonzero_exit(fs, mocker):
    mocker.patch('subprocess.run', return_value=subprocess.CompletedProcess([], 1))
    assert not edit('/notes/a.md', 'vim')
    assert Path('/notes').is_dir()


def test_edit_missing_editor(fs, mocker):
    mocker.patch('subprocess.run', side_effect=FileNotFoundError(2, 'No such file or directory', 'nope'))
    assert not edit('/notes/a.md', 'nope')
