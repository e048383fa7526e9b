import os
import sys
import pytest

# Add repository_after to path
REPO_AFTER = os.path.abspath(os.path.join(os.path.dirname(__file__), '..', 'repository_after'))
if REPO_AFTER not in sys.path:
	sys.path.insert(0, REPO_AFTER)

import huffman_cli as cli


def test_inspect_prints_stats(tmp_path, capsys):
	path = tmp_path / "sample.txt"
	path.write_bytes(b"aaaaaaaabbbc")
	assert cli.main([str(path)]) == 0
	out = capsys.readouterr().out
	assert "Original size:   12 bytes" in out
	assert "Distinct:        3 symbols" in out


def test_inspect_show_codes_and_verify(tmp_path, capsys):
	path = tmp_path / "sample.bin"
	path.write_bytes(b"hello\nworld\n")
	assert cli.main([str(path), "--show-codes", "--verify"]) == 0
	out = capsys.readouterr().out
	assert "Round-trip verified" in out
	assert "0x0a" in out
	assert "'l'" in out


def test_inspect_empty_file(tmp_path, capsys):
	path = tmp_path / "empty"
	path.write_bytes(b"")
	assert cli.main([str(path)]) == 1
	assert "ERROR" in capsys.readouterr().err


def test_inspect_missing_file(tmp_path, capsys):
	assert cli.main([str(tmp_path / "nope")]) == 1
	assert "ERROR" in capsys.readouterr().err


def test_usage_error():
	with pytest.raises(SystemExit) as exc:
		cli.main([])
	assert exc.value.code == 2
