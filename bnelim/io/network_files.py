"""
bnelim/io/network_files.py

Network loading from XMLBIF and JSON files.

XMLBIF layout:
    <VARIABLE><NAME>A</NAME><OUTCOME>T</OUTCOME><OUTCOME>F</OUTCOME></VARIABLE>
    <DEFINITION><FOR>A</FOR><GIVEN>B</GIVEN><TABLE>0.9 0.1 0.2 0.8</TABLE></DEFINITION>

JSON layout:
    {
        "variables": {"A": ["T", "F"], "B": ["T", "F"]},
        "definitions": [
            {"for": "B", "given": [], "table": [0.3, 0.7]},
            {"for": "A", "given": ["B"], "table": [0.9, 0.1, 0.2, 0.8]}
        ]
    }

All variables are declared before any definition is attached.
"""

from __future__ import annotations

import json
import logging
import xml.etree.ElementTree as ET
from pathlib import Path
from typing import List, Union

from bnelim.errors import MalformedNetworkFileError
from bnelim.network import BayesNet

logger = logging.getLogger(__name__)

PathLike = Union[str, Path]


def parse_probabilities(text: str) -> List[float]:
    """Parse a whitespace separated list of numbers."""
    try:
        return [float(tok) for tok in text.split()]
    except ValueError as e:
        raise MalformedNetworkFileError(f"bad probability table {text!r}: {e}") from e


def _child_text(elem: ET.Element, tag: str) -> str:
    child = elem.find(tag)
    if child is None or child.text is None:
        raise MalformedNetworkFileError(f"<{elem.tag}> is missing <{tag}>")
    return child.text.strip()


def load_xmlbif(path: PathLike, **kwargs) -> BayesNet:
    """
    Load a network from an XMLBIF file.

    Args:
        path: XML file
        **kwargs: Passed to BayesNet

    Returns:
        BayesNet with all CPTs attached
    """
    try:
        root = ET.parse(path).getroot()
    except ET.ParseError as e:
        raise MalformedNetworkFileError(f"{path}: {e}") from e

    net = BayesNet(**kwargs)
    for var_elem in root.iter("VARIABLE"):
        name = _child_text(var_elem, "NAME")
        outcomes = [(o.text or "").strip() for o in var_elem.findall("OUTCOME")]
        net.add_variable(name, outcomes)

    for def_elem in root.iter("DEFINITION"):
        name = _child_text(def_elem, "FOR")
        parents = [(g.text or "").strip() for g in def_elem.findall("GIVEN")]
        table = parse_probabilities(_child_text(def_elem, "TABLE"))
        net.add_dependency(name, parents, table)

    net.validate()
    logger.info("loaded %d variables from %s", len(net), path)
    return net


def load_json(path: PathLike, **kwargs) -> BayesNet:
    """
    Load a network from a JSON file (see module docstring for the layout).
    """
    with open(path, "r", encoding="utf-8") as f:
        try:
            data = json.load(f)
        except json.JSONDecodeError as e:
            raise MalformedNetworkFileError(f"{path}: {e}") from e

    try:
        variables = data["variables"]
        definitions = data["definitions"]
    except (KeyError, TypeError) as e:
        raise MalformedNetworkFileError(f"{path}: missing {e}") from e
    if not isinstance(variables, dict):
        raise MalformedNetworkFileError(f"{path}: \"variables\" must be an object of name -> outcomes")
    if not isinstance(definitions, list):
        raise MalformedNetworkFileError(f"{path}: \"definitions\" must be a list")

    net = BayesNet(**kwargs)
    for name, outcomes in variables.items():
        if not isinstance(outcomes, list):
            raise MalformedNetworkFileError(f"{path}: outcomes of {name} must be a list, got {outcomes!r}")
        net.add_variable(name, outcomes)
    for d in definitions:
        try:
            name, parents = d["for"], d.get("given", [])
            table = [float(p) for p in d["table"]]
        except (KeyError, TypeError, ValueError, AttributeError) as e:
            raise MalformedNetworkFileError(f"{path}: bad definition {d!r}: {e}") from e
        if not isinstance(name, str) or not isinstance(parents, list):
            raise MalformedNetworkFileError(f"{path}: bad definition {d!r}: \"given\" must list parent names")
        net.add_dependency(name, parents, table)

    net.validate()
    logger.info("loaded %d variables from %s", len(net), path)
    return net


def load_network(path: PathLike, **kwargs) -> BayesNet:
    """Load a network, choosing the format by file suffix."""
    if Path(path).suffix.lower() == ".json":
        return load_json(path, **kwargs)
    return load_xmlbif(path, **kwargs)
