"""
Shared fixtures: minimal in-memory archives.

The real archive engine is outside this project. These stand-ins follow
the collaborator contract generated code relies on:
    - calling the archive with any number of named values (including none)
    - ``load(*keys)`` returning stored values in key order
"""

from dataclasses import dataclass

import pytest

from fieldlist.backends.python_generator import generate_record
from fieldlist.runtime import make_nvp


class RecordingArchive:
    """Output archive that records every named value in call order."""

    def __init__(self):
        self.entries = []
        self.calls = 0

    def __call__(self, *nvps):
        self.calls += 1
        for nvp in nvps:
            self.entries.append((nvp.name, nvp.value))

    def keys(self):
        return [name for name, _ in self.entries]


class DictInputArchive:
    """Input archive backed by (key, value) pairs."""

    def __init__(self, entries):
        self.data = dict(entries)
        self.requested = []

    def load(self, *keys):
        self.requested.extend(keys)
        return tuple(self.data[key] for key in keys)


@pytest.fixture
def output_archive():
    return RecordingArchive()


@pytest.fixture
def input_archive_factory():
    return DictInputArchive


@pytest.fixture
def build_record():
    """
    Execute a generated record in a private namespace and return the class.

    The record text is run without the module's ``from __future__`` import
    so dataclasses sees real annotation types. Nothing is added to
    ``sys.modules``.
    """
    def build(compiled, record_name):
        namespace = {
            "__name__": f"generated_{record_name.lower()}",
            "dataclass": dataclass,
            "make_nvp": make_nvp,
        }
        source = generate_record(compiled, record_name)
        exec(compile(source, f"<{record_name}>", "exec"), namespace)
        return namespace[record_name]
    return build
