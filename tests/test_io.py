"""
Tests for network file loading.
"""

import json
from pathlib import Path

import pytest

from bnelim import load_json, load_network, load_xmlbif
from bnelim.errors import (
    MalformedCPTError,
    MalformedNetworkFileError,
    UninitializedVariableError,
    UnknownVariableError,
)

ALARM_XML = Path(__file__).resolve().parent.parent / "examples" / "alarm_net.xml"

ALARM_JSON = {
    "variables": {name: ["T", "F"] for name in ("E", "B", "A", "J", "M")},
    "definitions": [
        {"for": "E", "table": [0.002, 0.998]},
        {"for": "B", "given": [], "table": [0.001, 0.999]},
        {"for": "A", "given": ["E", "B"], "table": [0.95, 0.05, 0.29, 0.71, 0.94, 0.06, 0.001, 0.999]},
        {"for": "J", "given": ["A"], "table": [0.9, 0.1, 0.05, 0.95]},
        {"for": "M", "given": ["A"], "table": [0.7, 0.3, 0.01, 0.99]},
    ],
}

SMALL_XML = """<?xml version="1.0"?>
<NETWORK>
<VARIABLE><NAME>A</NAME><OUTCOME>T</OUTCOME><OUTCOME>F</OUTCOME></VARIABLE>
<VARIABLE><NAME>B</NAME><OUTCOME>T</OUTCOME><OUTCOME>F</OUTCOME></VARIABLE>
<DEFINITION><FOR>A</FOR><TABLE>0.3 0.7</TABLE></DEFINITION>
{b_definition}
</NETWORK>
"""


def write_xml(tmp_path, b_definition):
    path = tmp_path / "net.xml"
    path.write_text(SMALL_XML.format(b_definition=b_definition), encoding="utf-8")
    return path


@pytest.fixture
def alarm_json(tmp_path):
    path = tmp_path / "alarm.json"
    path.write_text(json.dumps(ALARM_JSON), encoding="utf-8")
    return path


class TestXmlbif:
    def test_alarm(self):
        net = load_xmlbif(ALARM_XML)

        assert [v.name for v in net.variables] == ["E", "B", "A", "J", "M"]
        assert [p.name for p in net.variable("A").parents] == ["E", "B"]
        assert net.answer_query("P(B=T|J=T,M=T),2") == pytest.approx(0.28417, abs=1e-5)

    def test_heuristic_passed_through(self):
        assert load_xmlbif(ALARM_XML, heuristic="min_degree").heuristic == "min_degree"

    def test_small(self, tmp_path):
        path = write_xml(tmp_path, "<DEFINITION><FOR>B</FOR><GIVEN>A</GIVEN><TABLE>0.9 0.1 0.2 0.8</TABLE></DEFINITION>")
        net = load_xmlbif(path)
        assert net.answer_query("P(A=T,B=F)") == pytest.approx(0.03)

    def test_bad_number(self, tmp_path):
        path = write_xml(tmp_path, "<DEFINITION><FOR>B</FOR><GIVEN>A</GIVEN><TABLE>0.9 x 0.2 0.8</TABLE></DEFINITION>")
        with pytest.raises(MalformedNetworkFileError):
            load_xmlbif(path)

    def test_missing_table(self, tmp_path):
        path = write_xml(tmp_path, "<DEFINITION><FOR>B</FOR><GIVEN>A</GIVEN></DEFINITION>")
        with pytest.raises(MalformedNetworkFileError):
            load_xmlbif(path)

    def test_missing_definition(self, tmp_path):
        path = write_xml(tmp_path, "")
        with pytest.raises(UninitializedVariableError, match="B"):
            load_xmlbif(path)

    def test_wrong_table_length(self, tmp_path):
        path = write_xml(tmp_path, "<DEFINITION><FOR>B</FOR><GIVEN>A</GIVEN><TABLE>0.9 0.1</TABLE></DEFINITION>")
        with pytest.raises(MalformedCPTError):
            load_xmlbif(path)

    def test_unknown_parent(self, tmp_path):
        path = write_xml(tmp_path, "<DEFINITION><FOR>B</FOR><GIVEN>Z</GIVEN><TABLE>0.9 0.1 0.2 0.8</TABLE></DEFINITION>")
        with pytest.raises(UnknownVariableError):
            load_xmlbif(path)

    def test_not_xml(self, tmp_path):
        path = tmp_path / "net.xml"
        path.write_text("<NETWORK><VARIABLE>", encoding="utf-8")
        with pytest.raises(MalformedNetworkFileError):
            load_xmlbif(path)


class TestJson:
    def test_same_network_as_xml(self, alarm_json):
        from_json = load_json(alarm_json)
        from_xml = load_xmlbif(ALARM_XML)

        assert [v.name for v in from_json.variables] == [v.name for v in from_xml.variables]
        for v in from_xml.variables:
            assert from_json.variable(v.name).factor.values() == v.factor.values()
        for text in ("P(B=T|J=T,M=T),1", "P(E=T|A=T),3", "P(B=T,E=F,A=T,J=T,M=T)"):
            assert from_json.evaluate(text) == from_xml.evaluate(text)

    def test_missing_section(self, tmp_path):
        path = tmp_path / "net.json"
        path.write_text(json.dumps({"variables": {}}), encoding="utf-8")
        with pytest.raises(MalformedNetworkFileError):
            load_json(path)

    def test_bad_definition(self, tmp_path):
        data = {"variables": {"A": ["T", "F"]}, "definitions": [{"for": "A", "table": ["x", "y"]}]}
        path = tmp_path / "net.json"
        path.write_text(json.dumps(data), encoding="utf-8")
        with pytest.raises(MalformedNetworkFileError):
            load_json(path)

    @pytest.mark.parametrize("data", [
        {"variables": [["A", ["T", "F"]]], "definitions": []},
        {"variables": "A", "definitions": []},
        {"variables": 3, "definitions": []},
        {"variables": {"A": ["T", "F"]}, "definitions": {"for": "A", "table": [0.5, 0.5]}},
        {"variables": {"A": "TF"}, "definitions": [{"for": "A", "table": [0.5, 0.5]}]},
        {"variables": {"A": ["T", "F"]}, "definitions": [{"for": ["A"], "table": [0.5, 0.5]}]},
        {"variables": {"A": ["T", "F"]}, "definitions": [{"for": "A", "given": 7, "table": [0.5, 0.5]}]},
        {"variables": {"A": ["T", "F"]}, "definitions": ["A"]},
    ])
    def test_wrong_section_types(self, tmp_path, data):
        path = tmp_path / "net.json"
        path.write_text(json.dumps(data), encoding="utf-8")
        with pytest.raises(MalformedNetworkFileError):
            load_json(path)

    def test_not_json(self, tmp_path):
        path = tmp_path / "net.json"
        path.write_text("{variables", encoding="utf-8")
        with pytest.raises(MalformedNetworkFileError):
            load_json(path)


class TestLoadNetwork:
    def test_by_suffix(self, alarm_json):
        assert len(load_network(alarm_json)) == 5
        assert len(load_network(ALARM_XML)) == 5
