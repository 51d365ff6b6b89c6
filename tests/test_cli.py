import io
import json

from stackcfg.__main__ import main


def write(tmp_path, lines, name="prog.txt"):
    path = tmp_path / name
    path.write_text("\n".join(lines) + "\n")
    return str(path)


class TestCLI:

    def test_dot_from_file(self, tmp_path, capsys):
        path = write(tmp_path, ["b l0", "l0:", "return"])
        assert main([path]) == 0
        out = capsys.readouterr().out
        assert out.startswith("digraph program {")
        assert "b0 -> l0" in out

    def test_stdin(self, monkeypatch, capsys):
        monkeypatch.setattr("sys.stdin", io.StringIO("int 1\r\nreturn\r\n"))
        assert main([]) == 0
        assert 'b0 [shape=box label="<b0>\\nint 1\\nreturn"]' in capsys.readouterr().out

    def test_json_format(self, tmp_path, capsys):
        path = write(tmp_path, ["bnz l1", "int 1", "l1:", "err"])
        assert main([path, "--format", "json"]) == 0
        data = json.loads(capsys.readouterr().out)
        assert data["cfg"]["entry"] == "b0"
        assert data["cfg"]["edges"]["b0"] == ["b1", "l1"]

    def test_unresolved_target(self, tmp_path, capsys):
        path = write(tmp_path, ["b missing", "return"])
        assert main([path]) == 1
        captured = capsys.readouterr()
        assert captured.out == ""
        assert "error: branch target not found: 'missing'" in captured.err

    def test_missing_file(self, tmp_path, capsys):
        assert main([str(tmp_path / "nope.txt")]) == 1
        assert capsys.readouterr().err.startswith("error:")

    def test_undecodable_file(self, tmp_path, capsys):
        path = tmp_path / "bad.txt"
        path.write_bytes(b"int \xff\nreturn\n")
        assert main([str(path)]) == 1
        captured = capsys.readouterr()
        assert captured.out == ""
        assert captured.err.startswith("error:")

    def test_extra_terminator(self, tmp_path, capsys):
        path = write(tmp_path, ["int 1", "halt", "int 2"])
        assert main([path, "--terminator", "halt", "--format", "json"]) == 0
        data = json.loads(capsys.readouterr().out)
        assert [b["dead"] for b in data["blocks"]] == [False, True]
