"""Tests for the save-file encoder and parser.

Validates:
  - The three-resistor circuit encodes to the expected document
  - Only resistors carry a "value" field
  - Encoding is repeatable and does not touch the circuit
  - Document -> JSON -> document round-trips every field
  - Malformed documents and broken state raise typed errors
  - Files are written once, fully formed, as pretty-printed UTF-8
"""

from __future__ import annotations

import json
import tempfile
import unittest
from pathlib import Path

from spintronics.circuit import Circuit, ChainLevel, Component, Rotation
from spintronics.savefile import (
    ChainRecord, Connection, PartRecord, SaveFile,
    SaveEncodingError, SaveFormatError,
    circuit_to_save, dumps_save, parse_save, read_save, save_to_dict, write_save,
)
from tests.circuit_fixtures import make_three_resistor_circuit


class TestEncoding(unittest.TestCase):

    @classmethod
    def setUpClass(cls):
        cls.circuit = make_three_resistor_circuit()
        cls.doc = cls.circuit.to_dict()

    def test_envelope(self):
        self.assertEqual(self.doc["version"], 1)
        self.assertEqual(self.doc["zoom"], 1.0)
        self.assertEqual(self.doc["viewDimensions"], {"width": 2000.0, "height": 2000.0})

    def test_parts(self):
        self.assertEqual(self.doc["parts"], [
            {"type": "motor", "x": 0, "y": 0},
            {"type": "resistor", "x": 300, "y": 0, "value": 1000},
            {"type": "resistor", "x": 0, "y": -300, "value": 500},
            {"type": "resistor", "x": 300, "y": -300, "value": 200},
        ])

    def test_value_only_on_resistors(self):
        circuit = Circuit()
        circuit.motor()
        circuit.junction()
        circuit.resistor(0)
        parts = circuit.to_dict()["parts"]
        self.assertNotIn("value", parts[0])
        self.assertNotIn("value", parts[1])
        self.assertEqual(parts[2]["value"], 0)

    def test_chains(self):
        self.assertEqual(self.doc["chains"], [
            {"connections": [
                {"partIndex": 0, "level": 0, "cw": True},
                {"partIndex": 1, "level": 0, "cw": True},
            ]},
            {"connections": [
                {"partIndex": 0, "level": 1, "cw": True},
                {"partIndex": 2, "level": 1, "cw": True},
                {"partIndex": 3, "level": 1, "cw": True},
            ]},
        ])

    def test_counter_clockwise_is_false(self):
        save = SaveFile(
            parts=[PartRecord(Component.MOTOR, 0, 0)],
            chains=[ChainRecord.from_members([0], ChainLevel.TOP, Rotation.COUNTER_CLOCKWISE)],
        )
        conn = save_to_dict(save)["chains"][0]["connections"][0]
        self.assertEqual(conn, {"partIndex": 0, "level": 2, "cw": False})

    def test_encoding_is_repeatable(self):
        before = (self.circuit.parts, self.circuit.chains)
        first = self.circuit.to_dict()
        second = self.circuit.to_dict()
        self.assertEqual(first, second)
        self.assertEqual((self.circuit.parts, self.circuit.chains), before)

    def test_empty_circuit(self):
        doc = Circuit().to_dict()
        self.assertEqual(doc["parts"], [])
        self.assertEqual(doc["chains"], [])

    def test_pretty_printed(self):
        text = dumps_save(circuit_to_save(self.circuit))
        self.assertTrue(text.startswith('{\n  "version": 1,\n  "zoom": 1.0,'))
        self.assertEqual(json.loads(text), self.doc)

    def test_bad_level_is_encoding_error(self):
        save = SaveFile(
            parts=[PartRecord(Component.MOTOR, 0, 0)],
            chains=[ChainRecord([Connection(0, 5, Rotation.CLOCKWISE)])],
        )
        with self.assertRaises(SaveEncodingError):
            save_to_dict(save)

    def test_bad_part_type_is_encoding_error(self):
        save = SaveFile(parts=[PartRecord("capacitor", 0, 0)])
        with self.assertRaises(SaveEncodingError):
            dumps_save(save)


class TestRoundTrip(unittest.TestCase):

    def test_round_trip(self):
        """circuit_to_save -> JSON -> parse_save preserves every field."""
        original = circuit_to_save(make_three_resistor_circuit())
        restored = parse_save(json.loads(dumps_save(original)))
        self.assertEqual(restored, original)

    def test_round_trip_keeps_member_order(self):
        circuit = Circuit()
        for v in (1, 2, 3, 4, 5):
            circuit.resistor(v)
        circuit.connect([4, 0, 3, 1])
        restored = parse_save(circuit.to_dict())
        members = [c.part_index for c in restored.chains[0].connections]
        self.assertEqual(members, [4, 0, 3, 1])

    def test_round_trip_counter_clockwise(self):
        original = SaveFile(
            parts=[PartRecord(Component.JUNCTION, 0, 0), PartRecord(Component.MOTOR, 300, 0)],
            chains=[ChainRecord.from_members([1, 0], ChainLevel.MIDDLE, Rotation.COUNTER_CLOCKWISE)],
        )
        self.assertEqual(parse_save(save_to_dict(original)), original)


class TestParseErrors(unittest.TestCase):

    def setUp(self):
        self.doc = make_three_resistor_circuit().to_dict()

    def test_missing_field(self):
        del self.doc["parts"]
        with self.assertRaises(SaveFormatError):
            parse_save(self.doc)

    def test_unknown_part_type(self):
        self.doc["parts"][0]["type"] = "capacitor"
        with self.assertRaises(SaveFormatError):
            parse_save(self.doc)

    def test_level_out_of_range(self):
        self.doc["chains"][0]["connections"][0]["level"] = 3
        with self.assertRaises(SaveFormatError):
            parse_save(self.doc)

    def test_cw_must_be_boolean(self):
        self.doc["chains"][0]["connections"][0]["cw"] = 1
        with self.assertRaises(SaveFormatError):
            parse_save(self.doc)

    def test_part_entry_not_an_object(self):
        for bad in ([1], ["motor"], [None]):
            self.doc["parts"] = bad
            with self.assertRaises(SaveFormatError):
                parse_save(self.doc)

    def test_connection_entry_not_an_object(self):
        self.doc["chains"][0]["connections"][0] = "cw"
        with self.assertRaises(SaveFormatError):
            parse_save(self.doc)

    def test_chain_entry_not_an_object(self):
        self.doc["chains"] = [["connections"]]
        with self.assertRaises(SaveFormatError):
            parse_save(self.doc)

    def test_view_dimensions_not_an_object(self):
        self.doc["viewDimensions"] = [2000, 2000]
        with self.assertRaises(SaveFormatError):
            parse_save(self.doc)

    def test_part_index_out_of_range(self):
        self.doc["chains"][1]["connections"][2]["partIndex"] = 4
        with self.assertRaises(SaveFormatError) as ctx:
            parse_save(self.doc)
        self.assertIn("part 4", str(ctx.exception))


class TestFiles(unittest.TestCase):

    def setUp(self):
        self._tmp = tempfile.TemporaryDirectory()
        self.tmp = Path(self._tmp.name)

    def tearDown(self):
        self._tmp.cleanup()

    def test_save_and_read(self):
        circuit = make_three_resistor_circuit()
        path = circuit.save(self.tmp / "test.spin")
        self.assertEqual(path, self.tmp / "test.spin")
        self.assertEqual(json.loads(path.read_text(encoding="utf-8")), circuit.to_dict())
        self.assertEqual(read_save(path), circuit_to_save(circuit))

    def test_save_twice_to_different_files(self):
        circuit = make_three_resistor_circuit()
        a = circuit.save(self.tmp / "a.spin")
        b = circuit.save(self.tmp / "b.spin")
        self.assertEqual(a.read_text(encoding="utf-8"), b.read_text(encoding="utf-8"))

    def test_unwritable_destination(self):
        save = circuit_to_save(make_three_resistor_circuit())
        with self.assertRaises(OSError):
            write_save(save, self.tmp / "missing" / "dir" / "test.spin")

    def test_read_invalid_json(self):
        bad = self.tmp / "bad.spin"
        bad.write_text("{not json", encoding="utf-8")
        with self.assertRaises(SaveFormatError):
            read_save(bad)

    def test_read_not_utf8(self):
        bad = self.tmp / "latin1.spin"
        bad.write_bytes(b'{"version": "\xff"}')
        with self.assertRaises(SaveFormatError):
            read_save(bad)

    def test_read_non_object(self):
        bad = self.tmp / "list.spin"
        bad.write_text("[]", encoding="utf-8")
        with self.assertRaises(SaveFormatError):
            read_save(bad)


if __name__ == "__main__":
    unittest.main()
