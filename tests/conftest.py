"""Shared fixtures for the mockdom test suite."""

import pytest

from mockdom import Element, create_document


@pytest.fixture
def document():
    """A fresh document with the default html/head/body skeleton."""
    return create_document()


@pytest.fixture
def body(document):
    return document.body


@pytest.fixture
def detached_div():
    """A div that belongs to no document."""
    return Element("div")


class LifecycleRecorder(Element):
    """Custom element that records every lifecycle callback it receives."""

    observed_attributes = ["label", "data-state"]

    def __init__(self, *args, **kwargs):
        super().__init__(*args, **kwargs)
        self.calls = []

    def connected_callback(self):
        self.calls.append(("connected",))

    def disconnected_callback(self):
        self.calls.append(("disconnected",))

    def attribute_changed_callback(self, name, old_value, new_value):
        self.calls.append(("attribute_changed", name, old_value, new_value))


@pytest.fixture
def recorder_document(document):
    """A document with ``x-recorder`` defined as a LifecycleRecorder."""
    document.custom_elements.define("x-recorder", LifecycleRecorder)
    return document


@pytest.fixture
def recorder_class():
    return LifecycleRecorder
