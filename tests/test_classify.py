import pytest

from stackcfg.classify import BranchKind, get_branch, get_label, is_terminator


class TestGetLabel:

    @pytest.mark.parametrize("line, label", [
        ("l0:", "l0"),
        ("loop: int 1", "loop"),
        ("a:b", "a"),
        ("end:\tcomment", "end"),
    ])
    def test_label(self, line, label):
        assert get_label(line) == label

    @pytest.mark.parametrize("line", [
        "int 1",
        "b l0",
        "push a:b",
        ":nameless",
        "",
        " l0:",
    ])
    def test_not_label(self, line):
        assert get_label(line) is None


class TestGetBranch:

    def test_unconditional(self):
        br = get_branch("b l0")
        assert br.op == "b"
        assert br.kind is BranchKind.UNCONDITIONAL
        assert br.target == "l0"
        assert not br.conditional

    @pytest.mark.parametrize("op", ["bnz", "bz"])
    def test_conditional(self, op):
        br = get_branch(f"{op} loop")
        assert br.op == op
        assert br.conditional
        assert br.target == "loop"

    def test_target_is_stripped(self):
        assert get_branch("bz  done ").target == "done"

    @pytest.mark.parametrize("line", [
        "b",
        "b ",
        "bnzl0",
        "btoi",
        "bury l0",
        "int 1",
        "return",
    ])
    def test_not_branch(self, line):
        assert get_branch(line) is None


class TestIsTerminator:

    @pytest.mark.parametrize("line", ["return", "err", "return 1", "err overflow"])
    def test_terminator(self, line):
        assert is_terminator(line)

    @pytest.mark.parametrize("line", ["b l0", "int 1", "l0:", " return"])
    def test_not_terminator(self, line):
        assert not is_terminator(line)

    def test_extra_terminators(self):
        assert not is_terminator("halt")
        assert is_terminator("halt", ("err", "return", "halt"))
