"""
Tests for stepping, the encode pipeline and the operator session.
"""
import sys
import os
import unittest

sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from keyboard_and_plugboard import Plugboard
from machine import Enigma, encode, make_plugboard, reset_offsets, step
from rotor_and_reflector import ALPHABET, make_rotor_stack

NOTCH_I = ALPHABET.index("q")
NOTCH_II = ALPHABET.index("e")


def offsets(rotors):
    return [r.offset for r in rotors]


class TestStep(unittest.TestCase):

    def setUp(self):
        self.rotors = make_rotor_stack()

    def test_fast_rotor_always_advances(self):
        step(self.rotors)
        self.assertEqual(offsets(self.rotors), [1, 0, 0])

    def test_odometer_full_cycle(self):
        history = []
        for _ in range(26):
            history.append(offsets(self.rotors))
            step(self.rotors)
        self.assertEqual(offsets(self.rotors), [0, 1, 0])
        # middle rotor moves on the call whose pre-step fast offset is the notch
        moved = [i for i in range(1, 26) if history[i][1] != history[i - 1][1]]
        self.assertEqual(moved, [NOTCH_I + 1])

    def test_carry_from_fast_notch(self):
        reset_offsets(self.rotors, [NOTCH_I, 0, 0])
        step(self.rotors)
        self.assertEqual(offsets(self.rotors), [NOTCH_I + 1, 1, 0])

    def test_double_step_anomaly(self):
        reset_offsets(self.rotors, [0, NOTCH_II, 0])
        step(self.rotors)
        self.assertEqual(offsets(self.rotors), [1, NOTCH_II + 1, 1])

    def test_double_step_sequence(self):
        reset_offsets(self.rotors, [NOTCH_I, NOTCH_II - 1, 0])
        step(self.rotors)
        self.assertEqual(offsets(self.rotors), [NOTCH_I + 1, NOTCH_II, 0])
        step(self.rotors)
        self.assertEqual(offsets(self.rotors), [NOTCH_I + 2, NOTCH_II + 1, 1])
        step(self.rotors)
        self.assertEqual(offsets(self.rotors), [NOTCH_I + 3, NOTCH_II + 1, 1])

    def test_slow_rotor_wraps(self):
        reset_offsets(self.rotors, [0, NOTCH_II, 25])
        step(self.rotors)
        self.assertEqual(self.rotors[2].offset, 0)


class TestResetOffsets(unittest.TestCase):

    def test_restores_baseline_and_leaves_plugboard(self):
        rotors = make_rotor_stack()
        pb = Plugboard(["ab"])
        for _ in range(40):
            encode(0, pb, rotors)
        reset_offsets(rotors, [3, 4, 5])
        self.assertEqual(offsets(rotors), [3, 4, 5])
        self.assertEqual(pb.pairs(), [("a", "b")])

    def test_length_mismatch(self):
        with self.assertRaises(ValueError):
            reset_offsets(make_rotor_stack(), [0, 0])


class TestEncode(unittest.TestCase):

    def test_first_letter_from_home_position(self):
        rotors = make_rotor_stack()
        out = encode(ALPHABET.index("a"), make_plugboard(), rotors)
        self.assertEqual(ALPHABET[out], "q")
        self.assertEqual(offsets(rotors), [1, 0, 0])

    def test_reciprocal_without_plugs(self):
        pb = make_plugboard()
        for start in ([0, 0, 0], [7, 3, 21], [NOTCH_I, NOTCH_II, 9]):
            for x in range(26):
                rotors = make_rotor_stack()
                reset_offsets(rotors, start)
                y = encode(x, pb, rotors)
                reset_offsets(rotors, start)
                self.assertEqual(encode(y, pb, rotors), x)

    def test_reciprocal_with_plugs(self):
        pb = Plugboard(["ab", "cz", "mq"])
        rotors = make_rotor_stack()
        for x in range(26):
            reset_offsets(rotors, [5, 6, 7])
            y = encode(x, pb, rotors)
            reset_offsets(rotors, [5, 6, 7])
            self.assertEqual(encode(y, pb, rotors), x)

    def test_no_letter_maps_to_itself(self):
        pb = Plugboard(["ab"])
        rotors = make_rotor_stack()
        for x in range(26):
            for _ in range(5):
                self.assertNotEqual(encode(x, pb, rotors), x)

    def test_plugboard_swaps_before_and_after_rotors(self):
        plugged = Plugboard(["ab"])
        bare = make_plugboard()
        a, b = ALPHABET.index("a"), ALPHABET.index("b")

        rotors = make_rotor_stack()
        via_plug = encode(a, plugged, rotors)
        reset_offsets(rotors, [0, 0, 0])
        core = encode(b, bare, rotors)
        self.assertEqual(via_plug, plugged.backward(core))

    def test_is_bijection_per_position(self):
        pb = Plugboard(["kt"])
        outputs = set()
        for x in range(26):
            rotors = make_rotor_stack()
            reset_offsets(rotors, [11, 2, 19])
            outputs.add(encode(x, pb, rotors))
        self.assertEqual(outputs, set(range(26)))

    def test_same_letter_twenty_six_times(self):
        rotors = make_rotor_stack()
        pb = make_plugboard()
        outs = [encode(0, pb, rotors) for _ in range(26)]
        self.assertEqual(outs[0], ALPHABET.index("q"))
        self.assertNotIn(0, outs)
        self.assertGreater(len(set(outs)), 1)
        self.assertEqual(offsets(rotors), [0, 1, 0])


class TestEnigmaSession(unittest.TestCase):

    def test_encipher_text_round_trip(self):
        sender = Enigma("mcq", ["ab", "xy"])
        cipher = sender.encipher_text("Attack at dawn!")
        self.assertEqual(len(cipher), 12)

        receiver = Enigma("mcq", ["ab", "xy"])
        self.assertEqual(receiver.encipher_text(cipher), "attackatdawn")

    def test_encipher_rejects_non_letter(self):
        with self.assertRaises(ValueError):
            Enigma().encipher("?")

    def test_bad_key_length(self):
        with self.assertRaises(ValueError):
            Enigma("ab")

    def test_rewind_returns_to_start(self):
        m = Enigma("xyz")
        first = m.encipher_text("hello")
        m.rewind()
        self.assertEqual(m.window(), "xyz")
        self.assertEqual(m.encipher_text("hello"), first)

    def test_turn_rotor_moves_only_that_rotor_and_sets_baseline(self):
        m = Enigma("aaa")
        m.turn_rotor(1)
        self.assertEqual(m.positions(), [0, 1, 0])
        m.encipher_text("abc")
        m.rewind()
        self.assertEqual(m.window(), "aba")

    def test_turn_rotor_at_notch_does_not_carry(self):
        m = Enigma("qea")
        m.turn_rotor(0)
        m.turn_rotor(1)
        self.assertEqual(m.window(), "rfa")

    def test_click_plug_protocol(self):
        m = Enigma()
        m.click_plug("c")
        self.assertEqual(m.selected_letter, "c")
        m.click_plug("f")
        self.assertIsNone(m.selected_letter)
        self.assertEqual(m.pb.pairs(), [("c", "f")])
        m.click_plug("f")
        self.assertEqual(m.pb.pairs(), [])

    def test_rewind_keeps_plugs(self):
        m = Enigma("aaa", ["pq"])
        m.encipher_text("abc")
        m.rewind()
        self.assertEqual(m.pb.pairs(), [("p", "q")])


if __name__ == "__main__":
    unittest.main()
