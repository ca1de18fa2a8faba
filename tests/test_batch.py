"""
Tests for batch runs and the answer format.
"""

import shutil
from pathlib import Path

import pytest

from bnelim import QueryResult, format_answer, run_batch
from bnelim.errors import MalformedQueryError, UnknownMethodSelectorError

EXAMPLES = Path(__file__).resolve().parent.parent / "examples"


class TestFormatAnswer:
    def test_five_decimals(self):
        assert format_answer(QueryResult(0.2841718, 7, 16)) == "0.28417,7,16"

    def test_nan(self):
        assert format_answer(QueryResult(float("nan"), 1, 2)) == "nan,1,2"


class TestRunBatch:
    def test_example_input(self):
        lines = (EXAMPLES / "input.txt").read_text(encoding="utf-8").splitlines()
        out = run_batch(lines, base_dir=EXAMPLES)

        assert out == [
            "0.00059,0,4",
            "0.28417,7,32",
            "0.28417,7,16",
            "0.28417,7,16",
            "0.84902,15,64",
            "0.84902,7,12",
            "0.84902,5,8",
            "0.95000,0,0",
        ]

    def test_relative_to_base_dir(self, tmp_path):
        shutil.copy(EXAMPLES / "alarm_net.xml", tmp_path / "net.xml")
        out = run_batch(["net.xml", "", "P(B=T|J=T,M=T),2", "   "], base_dir=tmp_path)
        assert out == ["0.28417,7,16"]

    def test_absolute_path(self):
        out = run_batch([str(EXAMPLES / "alarm_net.xml"), "P(B=T|J=T,M=T),3"])
        assert out == ["0.28417,7,16"]

    def test_empty_input(self):
        with pytest.raises(MalformedQueryError):
            run_batch(["", "  "])

    def test_errors_propagate(self):
        with pytest.raises(UnknownMethodSelectorError):
            run_batch([str(EXAMPLES / "alarm_net.xml"), "P(B=T|J=T),7"])
