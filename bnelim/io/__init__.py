"""
IO module: Network file loaders.
"""

from bnelim.io.network_files import load_json, load_network, load_xmlbif

__all__ = [
    "load_json",
    "load_network",
    "load_xmlbif",
]
