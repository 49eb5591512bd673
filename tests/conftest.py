"""pytest configuration and shared fixtures."""

import pytest

from j_array import Schema, SchemaArray


@pytest.fixture
def comment_schema():
    """Sub-document schema used for arrays of embedded comments."""
    return Schema({"body": str, "votes": int})


@pytest.fixture
def post_schema(comment_schema):
    """Schema with one field of every array flavour."""
    return Schema({
        "title": str,
        "n": int,
        "tags": [str],
        "scores": {"type": [int], "default": [0]},
        "grid": [[int]],
        "comments": [comment_schema],
        "anything": [],
        "meta": {"views": int},
    })


@pytest.fixture
def numbers():
    """Array of numbers at path ``nums``."""
    return SchemaArray("nums", "Number")


@pytest.fixture
def strings():
    """Array of strings at path ``tags``."""
    return SchemaArray("tags", "String")


@pytest.fixture
def comments(comment_schema):
    """Array of embedded comments at path ``comments``."""
    return SchemaArray("comments", comment_schema)


class RecordingOwner:
    """Stand-in owner document that records change notifications."""

    def __init__(self):
        self.marked = []

    def mark_modified(self, path):
        self.marked.append(path)


@pytest.fixture
def owner():
    return RecordingOwner()
