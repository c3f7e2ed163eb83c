"""Tests for ValueStringifier."""

from __future__ import annotations

import logging

from heapwalk.core.render import NULL_CHARS_MARKER, ValueStringifier
from heapwalk.core.types.config import ClassNamesConfig
from heapwalk.model import ClassObject, ObjectInstance, PrimitiveArrayInstance


def _stringifier(heap):
    return ValueStringifier(heap, ClassNamesConfig())


class TestValueStringifier:
    def test_none(self, sample):
        assert _stringifier(sample.heap).render(None) is None

    def test_string(self, sample):
        assert _stringifier(sample.heap).render(sample.greeting) == "hi"

    def test_char_array(self, sample):
        assert _stringifier(sample.heap).render(sample.chars) == "hi"

    def test_other_instance(self, sample):
        assert _stringifier(sample.heap).render(sample.e1) == "com.example.Entry@0x101"

    def test_char_array_without_data(self, mock_heap):
        cls = ClassObject(id=1, name="char[]")
        arr = PrimitiveArrayInstance(id=2, java_class=cls, length=3)
        mock_heap.decode_char_array.return_value = None
        assert _stringifier(mock_heap).render(arr) == NULL_CHARS_MARKER
        mock_heap.decode_char_array.assert_called_once_with(arr, 0, 3)

    def test_decoder_failure_falls_back(self, sample, caplog):
        broken = sample.heap.add_instance(0x999, sample.string_cls)
        with caplog.at_level(logging.WARNING, logger="heapwalk.core.render"):
            result = _stringifier(sample.heap).render(broken)
        assert result == "java.lang.String@0x999"
        assert "Error getting display value" in caplog.text

    def test_char_array_class_on_plain_instance_falls_back(self, mock_heap):
        cls = ClassObject(id=1, name="char[]")
        odd = ObjectInstance(id=2, java_class=cls)
        assert _stringifier(mock_heap).render(odd) == "char[]@0x2"
        mock_heap.decode_char_array.assert_not_called()

    def test_mock_string_decoder(self, mock_heap):
        cls = ClassObject(id=1, name="java.lang.String")
        s = ObjectInstance(id=2, java_class=cls)
        mock_heap.decode_string_value.return_value = "decoded"
        assert _stringifier(mock_heap).render(s) == "decoded"
